"""Styling of the echoed user prompt."""

import re

from ..edits import apply_edit
from ..locate import B, ID, locate
from ..results import Found, ModificationEdit
from .jsutil import chalk_chain, js_value

USER_MESSAGE_PATTERN = re.compile(
    rf'{B}({ID})\.createElement\(({ID}),\{{color:"secondaryText"\}},"> "\),'
    rf"\1\.createElement\(\2,null,({ID})\)"
)


def write_user_message_display(buffer, ctx):
    display = ctx.settings.user_message_display
    if display is None:
        return Found(buffer)

    chalk = ctx.landmarks.get("chalk_var", buffer)
    if not chalk.ok:
        return chalk
    found = locate(buffer, USER_MESSAGE_PATTERN, "user message display")
    if not found.ok:
        return found

    react, text, message = found.value.identifiers
    prefix = chalk_chain(chalk.value, display.prefix)
    body = chalk_chain(chalk.value, display.message)
    replacement = (
        f"{react}.createElement({text},null,{prefix}({js_value(display.prefix.format)})),"
        f"{react}.createElement({text},null,{body}({message}))"
    )
    return Found(apply_edit(buffer, ModificationEdit.at(found.value, replacement)))
