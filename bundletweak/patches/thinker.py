"""Spinner ("thinker") verbs, message format and symbol animation."""

import re

from ..edits import apply_edit, apply_edits, rewrite_span
from ..locate import ID, locate, locate_all
from ..results import Found, ModificationEdit
from .jsutil import escape_template, js_value

VERBS_PATTERN = re.compile(r'\["Accomplishing"(?:,"[A-Z][a-z-]*")+\]')
FORMAT_PATTERN = re.compile(rf'\(({ID})\?\?({ID})\)\+"…"')
PHASES_PATTERN = re.compile(r'\["·","✢",[^\]]*\]')
SPEED_PATTERN = re.compile(rf"setInterval\(\(\)=>\{{{ID}\(\(({ID})\)=>\1\+1\)\}},(\d+)\)")
WIDTH_PATTERN = re.compile(r'flexWrap:"wrap",height:1,width:(\d+)')
MIRROR_PATTERN = re.compile(rf"\[\.\.\.({ID}),\.\.\.\[\.\.\.\1\]\.reverse\(\)\]")
# The frame interval is skipped while the spinner is paused.
NO_FREEZE_PATTERN = re.compile(rf"useEffect\(\(\)=>\{{if\({ID}\)return;let {ID}=setInterval\(")


def write_thinker_verbs(buffer, ctx):
    verbs = ctx.settings.thinking_verbs
    if verbs is None or not verbs.verbs:
        return Found(buffer)
    found = locate(buffer, VERBS_PATTERN, "thinking verbs")
    if not found.ok:
        return found
    return Found(apply_edit(buffer, ModificationEdit.at(found.value, js_value(verbs.verbs))))


def write_thinker_format(buffer, ctx):
    """``(verb??fallback)+"…"`` becomes a template literal built from the format."""
    verbs = ctx.settings.thinking_verbs
    if verbs is None:
        return Found(buffer)
    found = locate(buffer, FORMAT_PATTERN, "thinking verb format")
    if not found.ok:
        return found

    verb, fallback = found.value.identifiers
    expr = "${" + f"{verb}??{fallback}" + "}"
    literal = "`" + expr.join(escape_template(part) for part in verbs.format.split("{}")) + "`"
    return Found(apply_edit(buffer, ModificationEdit.at(found.value, literal)))


def write_thinker_symbol_chars(buffer, ctx):
    """Every platform variant of the phase array gets the configured phases."""
    found = locate_all(buffer, PHASES_PATTERN, "spinner phases")
    if not found.ok:
        return found
    phases = js_value(ctx.settings.thinking_style.phases)
    return Found(apply_edits(buffer, [ModificationEdit.at(loc, phases) for loc in found.value]))


def write_thinker_symbol_speed(buffer, ctx):
    found = locate(buffer, SPEED_PATTERN, "spinner interval")
    if not found.ok:
        return found
    interval = ctx.settings.thinking_style.update_interval
    return Found(rewrite_span(buffer, found.value, lambda s: re.sub(r"\d+\)$", f"{interval})", s)))


def write_thinker_symbol_width(buffer, ctx):
    found = locate(buffer, WIDTH_PATTERN, "spinner width")
    if not found.ok:
        return found
    width = max(len(p) for p in ctx.settings.thinking_style.phases) + 1
    return Found(rewrite_span(buffer, found.value, lambda s: re.sub(r"width:\d+$", f"width:{width}", s)))


def write_thinker_symbol_mirror(buffer, ctx):
    if ctx.settings.thinking_style.reverse_mirror:
        return Found(buffer)
    found = locate(buffer, MIRROR_PATTERN, "spinner mirror")
    if not found.ok:
        return found
    frames = found.value.identifiers[0]
    return Found(apply_edit(buffer, ModificationEdit.at(found.value, f"[...{frames}]")))


def write_spinner_no_freeze(buffer, ctx):
    """Keep the spinner animating while it is paused."""
    if not ctx.settings.misc.spinner_no_freeze:
        return Found(buffer)
    found = locate(buffer, NO_FREEZE_PATTERN, "spinner pause guard")
    if not found.ok:
        return found
    return Found(rewrite_span(buffer, found.value, lambda s: re.sub(r"if\([$\w]+\)return;", "", s, count=1)))
