"""Extra entries for the /model picker."""

import re

from ..edits import apply_edit
from ..locate import locate
from ..results import Found, ModificationEdit
from .jsutil import js_value

_OPTION = r'\{value:"[^"]*",label:"[^"]*",description:"[^"]*"\}'
MODEL_OPTIONS_PATTERN = re.compile(
    rf'\[\{{value:"default",label:"Default[^"]*",description:"[^"]*"\}}(?:,{_OPTION})*\]'
)
OPTION_VALUE_PATTERN = re.compile(r'value:"([^"]*)"')


def write_model_customizations(buffer, ctx):
    found = locate(buffer, MODEL_OPTIONS_PATTERN, "model picker options")
    if not found.ok:
        return found
    loc = found.value
    present = set(OPTION_VALUE_PATTERN.findall(loc.text(buffer)))
    extra = [
        {"value": m.value, "label": m.label, "description": m.description}
        for m in ctx.settings.models
        if m.value not in present
    ]
    if not extra:
        return Found(buffer)
    inserted = "".join("," + js_value(option) for option in extra)
    return Found(apply_edit(buffer, ModificationEdit.insert(loc.end_index - 1, inserted)))
