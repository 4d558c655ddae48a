"""Command line entry point.

Usage:
    bundletweak                       # Restore, patch and install
    bundletweak --dry-run             # Patch in memory, write nothing
    bundletweak --discover-only       # Only resolve landmarks
    bundletweak --restore             # Put the vendor bundle back
    bundletweak --restore --forget-backup   # ...and delete the stored backup
"""

import argparse
import asyncio
from pathlib import Path

from . import __version__
from .baseline import backup_path, baseline_text, find_bundle_path, read_bundle_version
from .config import default_config_dir, load_config, update_config_file
from .customize import apply_customization, discover_landmarks, restore_original
from .log import fatal, log, phase
from .results import BundleReadError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Customize a minified CLI bundle by re-locating its constructs on every run"
    )
    parser.add_argument("--bundle", default="", help="Path to the bundle (cli.js) to customize")
    parser.add_argument(
        "--config-dir", default=str(default_config_dir()),
        help="Directory holding config.json and the pristine backup",
    )
    parser.add_argument("--dry-run", action="store_true", help="Run every patch step without writing files")
    parser.add_argument("--discover-only", action="store_true", help="Only resolve and print landmarks")
    parser.add_argument("--restore", action="store_true", help="Restore the original bundle from backup")
    parser.add_argument(
        "--forget-backup", action="store_true",
        help="With --restore, also delete the stored backup (use after a vendor reinstall)",
    )
    parser.add_argument("--version", action="version", version=f"bundletweak {__version__}")
    return parser.parse_args(argv)


def _remember_bundle(bundle_path):
    def update(config):
        config.bundle_path = str(bundle_path)
    return update


def main(argv=None):
    args = parse_args(argv)
    config_dir = Path(args.config_dir).expanduser()

    print("=" * 60)
    print(f"  bundletweak {__version__}")
    print("=" * 60)

    try:
        config = load_config(config_dir)
    except ValueError as e:
        fatal(f"Invalid config: {e}")

    bundle_path = find_bundle_path(args.bundle, config.bundle_path)
    if bundle_path is None:
        fatal("Bundle not found. Pass --bundle or set BUNDLETWEAK_BUNDLE.")
    log(f"Bundle: {bundle_path} (version {read_bundle_version(bundle_path)})", "OK")

    try:
        if args.discover_only:
            phase("Landmark Discovery")
            content = baseline_text(bundle_path, config_dir)
            for name, result in discover_landmarks(content).items():
                if result.ok:
                    print(f"    {name} → '{result.value}'")
                else:
                    print(f"    {name} → not found ({result.reason})")
            return 0

        if args.restore:
            if not backup_path(config_dir).exists():
                fatal(f"No backup in {config_dir}; nothing to restore")
            restore_original(bundle_path, config_dir, forget_backup=args.forget_backup)
            log("Original bundle restored.", "OK")
            return 0

        run = asyncio.run(apply_customization(config, bundle_path, config_dir, dry_run=args.dry_run))
    except BundleReadError as e:
        fatal(str(e))

    if not args.dry_run and config.bundle_path != str(bundle_path):
        update_config_file(config_dir, _remember_bundle(bundle_path))

    phase("Summary")
    for item in run.items:
        log(item, "OK")
    for report in run.failures:
        reason = report.failure.describe() if report.failure else report.detail
        log(f"{report.name}: {reason}", "FAIL")
    return 0 if not run.failures else 3


if __name__ == "__main__":
    raise SystemExit(main())
