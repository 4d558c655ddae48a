"""Theme table and the hardcoded fallback objects that duplicate its colors."""

import re

from ..config import RAINBOW_KEYS
from ..edits import apply_edits, replace_literals, rewrite_span
from ..locate import ID, locate, locate_span
from ..results import Found, ModificationEdit, combine
from .jsutil import js_value

THEME_SWITCH_PATTERN = re.compile(
    rf'switch\(({ID})\)\{{case"light":return {ID};(?:case"[\w-]+":return {ID};)*default:return {ID}\}}'
)
THEME_OPTIONS_PATTERN = re.compile(
    r'\[\{label:"Dark mode",value:"dark"\}(?:,\{label:"[^"]+",value:"[\w-]+"\})*\]'
)

# var a,b,c,...;var X=Y(()=>{ ... });function Z(
FALLBACK_START_PATTERN = re.compile(rf"var ((?:{ID},){{2,}}{ID});var ({ID})=({ID})\(\(\)=>\{{")
FALLBACK_END_PATTERN = re.compile(rf"\}}\);function {ID}\(")

VENDOR_RAINBOW = {
    "rainbow_red": "rgb(235,95,87)",
    "rainbow_orange": "rgb(245,139,87)",
    "rainbow_yellow": "rgb(250,195,95)",
    "rainbow_green": "rgb(145,200,130)",
    "rainbow_blue": "rgb(130,170,220)",
    "rainbow_indigo": "rgb(155,130,200)",
    "rainbow_violet": "rgb(200,130,180)",
    "rainbow_red_shimmer": "rgb(250,155,147)",
    "rainbow_orange_shimmer": "rgb(255,185,137)",
    "rainbow_yellow_shimmer": "rgb(255,225,155)",
    "rainbow_green_shimmer": "rgb(185,230,180)",
    "rainbow_blue_shimmer": "rgb(180,205,240)",
    "rainbow_indigo_shimmer": "rgb(195,180,230)",
    "rainbow_violet_shimmer": "rgb(230,180,210)",
}


def _theme_switch(var, themes):
    cases = "".join(f'case{js_value(t.id)}:return {js_value(t.colors)};' for t in themes)
    return f"switch({var}){{{cases}default:return {js_value(themes[0].colors)}}}"


def write_themes(buffer, ctx):
    """Replace the built-in theme lookup and the picker options."""
    themes = ctx.settings.themes
    if not themes:
        return Found(buffer)

    found = combine(
        locate(buffer, THEME_SWITCH_PATTERN, "theme switch"),
        locate(buffer, THEME_OPTIONS_PATTERN, "theme picker options"),
    )
    if not found.ok:
        return found
    switch, options = found.value

    picker = js_value([{"label": t.name, "value": t.id} for t in themes])
    return Found(apply_edits(buffer, [
        ModificationEdit.at(switch, _theme_switch(switch.identifiers[0], themes)),
        ModificationEdit.at(options, picker),
    ]))


def write_hardcoded_theme_objects(buffer, ctx):
    """Swap vendor rainbow colors in the fallback theme objects for monochrome.

    Only applies when a ``monochrome`` theme is configured; otherwise those
    fallbacks leak orange into the monochrome spinner.
    """
    mono = ctx.settings.theme("monochrome")
    if mono is None:
        return Found(buffer)

    span = locate_span(
        buffer, FALLBACK_START_PATTERN, FALLBACK_END_PATTERN,
        "hardcoded theme objects", require="rainbow_",
    )
    if not span.ok:
        return span

    keys = list(RAINBOW_KEYS) + [f"{k}_shimmer" for k in RAINBOW_KEYS]
    pairs = [
        (f'{key}:"{VENDOR_RAINBOW[key]}"', f'{key}:{js_value(mono.colors[key])}')
        for key in keys
        if key in mono.colors
    ]
    return Found(rewrite_span(buffer, span.value, lambda section: replace_literals(section, pairs)))
