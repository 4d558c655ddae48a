"""End-to-end pipeline: baseline, patch steps, single write, applied flag."""

from pathlib import Path

from . import __version__
from .anchors import LandmarkCache
from .baseline import (
    baseline_text,
    drop_backup,
    mark_patched,
    replace_file_breaking_hard_links,
    restore_baseline,
)
from .config import update_config_file
from .log import log, phase
from .orchestrator import PatchContext, run_patches
from .patches import build_patch_list


async def customize_text(content, settings, *, render=None, steps=None):
    """Run every patch step over ``content``; nothing is written."""
    ctx = PatchContext(settings=settings, landmarks=LandmarkCache(), version=__version__, render=render)
    return await run_patches(content, build_patch_list() if steps is None else steps, ctx)


async def apply_customization(config, bundle_path, config_dir, *, dry_run=False, render=None):
    """Restore, patch and replace the bundle; returns the PatchRun."""
    bundle_path = Path(bundle_path)

    phase("Phase 1: Baseline")
    if dry_run:
        content = baseline_text(bundle_path, config_dir)
    else:
        content = restore_baseline(bundle_path, config_dir)
    log(f"Read {bundle_path.name} ({len(content)} chars)", "OK")

    phase("Phase 2: Patch Application")
    run = await customize_text(content, config.settings, render=render)
    log(f"{len(run.items)} customizations applied, {len(run.failures)} not applied", "INFO")

    if dry_run:
        log("Dry run: no files written", "SKIP")
        return run

    phase("Phase 3: Install")
    replace_file_breaking_hard_links(bundle_path, mark_patched(run.content))
    log(f"Wrote {bundle_path}", "OK")
    update_config_file(config_dir, _mark_applied)
    return run


def restore_original(bundle_path, config_dir, *, forget_backup=False):
    """Put the vendor bundle back and clear the applied flag."""
    phase("Restore")
    restore_baseline(bundle_path, config_dir)
    if forget_backup:
        drop_backup(config_dir)
    update_config_file(config_dir, _mark_restored)


def _mark_applied(config):
    config.changes_applied = True


def _mark_restored(config):
    config.changes_applied = False


def discover_landmarks(content):
    cache = LandmarkCache()
    return {name: cache.get(name, content) for name in cache.resolvers}
