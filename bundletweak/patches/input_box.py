"""Border around the prompt input box."""

import re

from ..edits import rewrite_span
from ..locate import ID, locate
from ..results import Found

BORDER_PATTERN = re.compile(rf'borderColor:{ID}\(\),borderDimColor:!0,borderStyle:"round"')


def write_input_box_border(buffer, ctx):
    input_box = ctx.settings.input_box
    if input_box is None or not input_box.remove_border:
        return Found(buffer)
    found = locate(buffer, BORDER_PATTERN, "input box border")
    if not found.ok:
        return found
    return Found(rewrite_span(
        buffer, found.value, lambda s: s.replace('borderStyle:"round"', "borderStyle:undefined")
    ))
