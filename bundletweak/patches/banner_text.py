"""Sign-in banner art."""

import re

from ..banner import render_ornamental_text, resolve_launch_text
from ..edits import apply_edit
from ..locate import locate
from ..results import Found, ModificationEdit
from .jsutil import escape_template

# A template literal made only of block and box-drawing characters.
BANNER_PATTERN = re.compile("`[ \n█▀▄▌▐░▒▓╗╔╝╚═║]{20,}`")


async def write_signin_banner_text(buffer, ctx):
    launch_text = ctx.settings.launch_text
    if launch_text is None or launch_text.method not in ("custom", "figlet"):
        return Found(buffer)

    text = await resolve_launch_text(launch_text, ctx.render or render_ornamental_text)
    banner = locate(buffer, BANNER_PATTERN, "sign-in banner")
    if not banner.ok:
        return banner
    return Found(apply_edit(buffer, ModificationEdit.at(banner.value, f"`{escape_template(text)}`")))
