"""Restrict the enabled tools to the default toolset."""

import re

from ..edits import apply_edit
from ..locate import ID, locate
from ..results import Found, ModificationEdit
from .jsutil import js_value

TOOL_FILTER_PATTERN = re.compile(rf"\[(?:{ID},)*{ID}\]\.filter\(\(({ID})\)=>\1\.isEnabled\(\)\)")


def write_toolsets(buffer, ctx):
    settings = ctx.settings
    toolset = settings.toolset(settings.default_toolset)
    if toolset is None or toolset.allowed_tools == "*":
        return Found(buffer)
    found = locate(buffer, TOOL_FILTER_PATTERN, "enabled tools filter")
    if not found.ok:
        return found
    tool = found.value.identifiers[0]
    allowed = js_value(list(toolset.allowed_tools))
    return Found(apply_edit(buffer, ModificationEdit.insert(
        found.value.end_index, f".filter(({tool})=>{allowed}.includes({tool}.name))"
    )))
