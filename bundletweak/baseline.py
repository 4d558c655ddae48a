"""Baseline Guard and the file collaborators around it.

Patches are only known to be safe against the pristine vendor bundle, so
every run starts by restoring the backup taken the first time the bundle was
seen. The live file is written once, at the end, without following hard
links and with its permission bits preserved.
"""

import json
import os
import shutil
import stat
import subprocess
import tempfile
from pathlib import Path

from .config import BACKUP_FILENAME
from .log import log
from .results import BundleReadError

PATCHED_MARKER = "/* __BUNDLETWEAK_PATCHED__ */"
PACKAGE_REL = Path("@anthropic-ai") / "claude-code"
GLOBAL_PREFIXES = ("/opt/homebrew/lib/node_modules", "/usr/local/lib/node_modules", "/usr/lib/node_modules")


def run_cmd(cmd, check=True, timeout=30):
    return subprocess.run(cmd, check=check, capture_output=True, text=True, timeout=timeout)


def read_bundle(path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BundleReadError(f"cannot read {path}: {e}") from e


def backup_path(config_dir) -> Path:
    return Path(config_dir) / BACKUP_FILENAME


def mark_patched(content):
    """Insert the patched marker after the shebang line, if any."""
    if content.startswith("#!"):
        newline = content.find("\n")
        if newline >= 0:
            return content[:newline + 1] + PATCHED_MARKER + content[newline + 1:]
    return PATCHED_MARKER + content


def replace_file_breaking_hard_links(path, content):
    """Write ``content`` to a sibling temp file and rename it over ``path``.

    Renaming gives ``path`` a fresh inode, so other hard links to the old
    file keep the old content. Permission bits are copied across.
    """
    path = Path(path)
    mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else None
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        if mode is not None:
            os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def ensure_backup(bundle_path, config_dir) -> Path:
    backup = backup_path(config_dir)
    if backup.exists():
        return backup

    content = read_bundle(bundle_path)
    if PATCHED_MARKER in content:
        raise BundleReadError(
            f"{bundle_path} is already customized and no backup exists; reinstall the vendor package"
        )
    backup.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(bundle_path, backup)
    log(f"Backup saved to {backup}", "OK")
    return backup


def restore_baseline(bundle_path, config_dir) -> str:
    """Put the pristine bundle back in place and return its text.

    A live file without the patched marker that differs from the backup is a
    new vendor release: it becomes the backup instead of being overwritten.
    """
    backup = ensure_backup(bundle_path, config_dir)
    live = read_bundle(bundle_path)
    pristine = read_bundle(backup)

    if PATCHED_MARKER not in live and live != pristine:
        shutil.copy2(bundle_path, backup)
        log(f"New vendor release ({read_bundle_version(bundle_path)}); backup refreshed", "OK")
        return live

    if PATCHED_MARKER in pristine:
        log("Warning: backup appears to already be patched", "WARN")
    if live != pristine:
        replace_file_breaking_hard_links(bundle_path, pristine)
        log(f"Restored {Path(bundle_path).name} from backup", "OK")
    return pristine


def baseline_text(bundle_path, config_dir) -> str:
    """Pristine text without touching any file (dry runs, discovery)."""
    live = read_bundle(bundle_path)
    if PATCHED_MARKER not in live:
        return live
    backup = backup_path(config_dir)
    if not backup.exists():
        raise BundleReadError(f"{bundle_path} is already customized and no backup exists")
    return read_bundle(backup)


def drop_backup(config_dir):
    backup = backup_path(config_dir)
    if backup.exists():
        backup.unlink()


# ─── Bundle discovery ──────────────────────────────────────────────────────────

def read_bundle_version(bundle_path) -> str:
    package_json = Path(bundle_path).parent / "package.json"
    if not package_json.is_file():
        return "unknown"
    try:
        doc = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return "unknown"
    version = doc.get("version") if isinstance(doc, dict) else None
    return version if isinstance(version, str) and version.strip() else "unknown"


def _npm_global_root():
    if not shutil.which("npm"):
        return None
    try:
        proc = run_cmd(["npm", "root", "-g"], check=False)
    except (OSError, subprocess.TimeoutExpired):
        return None
    root = proc.stdout.strip()
    return Path(root) if proc.returncode == 0 and root else None


def find_bundle_path(explicit="", configured=""):
    """First existing cli.js among the usual locations, or None."""
    for candidate in (explicit, configured, os.getenv("BUNDLETWEAK_BUNDLE", "")):
        if candidate and Path(candidate).expanduser().is_file():
            return Path(candidate).expanduser()

    roots = [Path(prefix) for prefix in GLOBAL_PREFIXES]
    npm_root = _npm_global_root()
    if npm_root:
        roots.insert(0, npm_root)
    for root in roots:
        candidate = root / PACKAGE_REL / "cli.js"
        if candidate.is_file():
            return candidate
    return None
