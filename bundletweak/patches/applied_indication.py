"""Header line showing the tool version and which customizations are applied."""

import re

from ..edits import apply_edit
from ..locate import B
from ..results import Found, ModificationEdit, location_not_found
from .jsutil import js_value


def write_patches_applied_indication(buffer, ctx):
    misc = ctx.settings.misc
    show_items = misc.show_patches_applied and bool(ctx.items)
    if not misc.show_version and not show_items:
        return Found(buffer)

    needed = ["react_var", "text_component"] + (["box_component"] if show_items else [])
    landmarks = ctx.landmarks.require(needed, buffer)
    if not landmarks.ok:
        return landmarks
    react, text = landmarks.value[:2]

    title = re.compile(
        rf'{B}{re.escape(react)}\.createElement\({re.escape(text)},\{{bold:!0\}},"Claude Code"\)'
    )
    match = title.search(buffer)
    if not match:
        return location_not_found("header title", "bold \"Claude Code\" text not found")

    inserted = ""
    if misc.show_version:
        inserted += f',{react}.createElement({text},{{color:"success"}},{js_value(f" + bundletweak v{ctx.version}")})'
    if show_items:
        box = landmarks.value[2]
        rows = ",".join(
            f"{react}.createElement({text},null,{js_value('• ' + item)})" for item in ctx.items
        )
        inserted += f',{react}.createElement({box},{{flexDirection:"column"}},{rows})'
    return Found(apply_edit(buffer, ModificationEdit.insert(match.end(), inserted)))
