"""Diagnostic stream: one printed line per event."""

import os
import sys

PREFIXES = {
    "INFO": "  ",
    "OK": "  ✓",
    "FAIL": "  ✗",
    "WARN": "  !",
    "SKIP": "  →",
    "DEBUG": "  ·",
}


def is_debug():
    return os.getenv("BUNDLETWEAK_DEBUG", "").lower() in {"1", "true", "yes"}


def log(msg, level="INFO"):
    if level == "DEBUG" and not is_debug():
        return
    print(f"{PREFIXES.get(level, '  ')} {msg}")


def phase(title):
    print(f"\n=== {title} ===")


def fatal(msg):
    print(f"\n  ✗ FATAL: {msg}", file=sys.stderr)
    sys.exit(1)
