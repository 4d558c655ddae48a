"""Helpers for emitting JavaScript source fragments."""

import json
import re

STYLE_FLAGS = ("bold", "italic", "underline", "strikethrough", "inverse", "dim")

RGB_PATTERN = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$")
HEX_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


def js_value(value):
    """Compact JSON, which is also a valid JavaScript expression."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def escape_template(text):
    """Escape text for the body of a backtick template literal."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def _color_call(color, rgb_method, hex_method):
    m = RGB_PATTERN.match(color or "")
    if m:
        return f".{rgb_method}({m.group(1)},{m.group(2)},{m.group(3)})"
    if HEX_PATTERN.match(color or ""):
        return f".{hex_method}({js_value(color)})"
    return ""


def chalk_chain(chalk_var, style):
    """``chalk.rgb(..).bgHex(..).bold`` for a TextStyle; ``chalk.reset`` if empty."""
    chain = _color_call(style.foreground_color, "rgb", "hex")
    chain += _color_call(style.background_color, "bgRgb", "bgHex")
    chain += "".join(f".{flag}" for flag in STYLE_FLAGS if flag in style.styling)
    return chalk_var + (chain or ".reset")
