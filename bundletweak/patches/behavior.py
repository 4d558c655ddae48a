"""Behavior tweaks: verbose spinner, context limit, menu length, cost and thinking display."""

import re

from ..edits import apply_edit, apply_edits, rewrite_span
from ..locate import B, ID, locate, locate_all
from ..results import Found, ModificationEdit

VERBOSE_PATTERN = re.compile(rf"progressMessage:{ID},verbose:({ID})")
CONTEXT_LIMIT_PATTERN = re.compile(
    rf'{B}function ({ID})\(({ID})\)\{{if\(\2\.includes\("\[1m\]"\)\)return 1e6;return 200000\}}'
)
VISIBLE_OPTIONS_PATTERN = re.compile(rf"visibleOptionCount:({ID})=(\d+)")
SUBSCRIPTION_GATE_PATTERN = re.compile(
    rf'if\(({ID})\(\)\)return"You are currently using your subscription'
)
COLLAPSED_THINKING_PATTERN = re.compile(
    rf'if\(!{ID}&&!{ID}\)return {ID}\.createElement\({ID},\{{dimColor:!0,italic:!0\}},"∴ Thinking…"\);'
)

CONTEXT_LIMIT_ENV = "CLAUDE_CODE_CONTEXT_LIMIT"


def write_verbose_property(buffer, ctx):
    found = locate(buffer, VERBOSE_PATTERN, "spinner verbose prop")
    if not found.ok:
        return found
    loc = found.value
    value_start = loc.end_index - len(loc.identifiers[0])
    return Found(apply_edit(buffer, ModificationEdit(value_start, loc.end_index, "!0")))


def write_context_limit(buffer, ctx):
    """Let the environment override the model context window size."""
    found = locate(buffer, CONTEXT_LIMIT_PATTERN, "context limit function")
    if not found.ok:
        return found
    body_start = found.value.start_index + found.value.text(buffer).index("{") + 1
    env = f"process.env.{CONTEXT_LIMIT_ENV}"
    return Found(apply_edit(buffer, ModificationEdit.insert(body_start, f"if({env})return Number({env});")))


def write_show_more_items(buffer, ctx):
    found = locate_all(buffer, VISIBLE_OPTIONS_PATTERN, "select menu option count")
    if not found.ok:
        return found
    count = ctx.settings.misc.visible_option_count
    return Found(apply_edits(buffer, [
        ModificationEdit.at(loc, f"visibleOptionCount:{loc.identifiers[0]}={count}")
        for loc in found.value
    ]))


def write_ignore_max_subscription(buffer, ctx):
    """Show /cost figures to subscribers too."""
    if not ctx.settings.misc.ignore_max_subscription:
        return Found(buffer)
    found = locate(buffer, SUBSCRIPTION_GATE_PATTERN, "cost subscription gate")
    if not found.ok:
        return found
    check = f"if({found.value.identifiers[0]}())"
    return Found(rewrite_span(buffer, found.value, lambda s: s.replace(check, "if(!1)", 1)))


def write_thinking_visibility(buffer, ctx):
    """Render thinking blocks in full instead of the collapsed placeholder."""
    if not ctx.settings.misc.expand_thinking:
        return Found(buffer)
    found = locate(buffer, COLLAPSED_THINKING_PATTERN, "collapsed thinking block")
    if not found.ok:
        return found
    return Found(apply_edit(buffer, ModificationEdit.at(found.value, "")))
