"""Ornamental banner text rendered with pyfiglet."""

import asyncio

import pyfiglet

from .log import log
from .results import Found, render_failure


async def render_ornamental_text(text, font="standard"):
    """Render ``text`` off the event loop; Found(str) or a render failure."""
    try:
        rendered = await asyncio.to_thread(pyfiglet.figlet_format, text.replace("\n", " "), font=font)
    except pyfiglet.FigletError as e:
        return render_failure("figlet", f"font {font!r}: {e}")
    return Found(rendered.rstrip("\n"))


async def resolve_launch_text(launch_text, render=render_ornamental_text) -> str:
    """Banner text for the configured method; a render failure yields ''."""
    if launch_text is None:
        return ""
    if launch_text.method == "custom":
        return launch_text.custom_text
    if launch_text.method == "figlet" and launch_text.figlet_text:
        result = await render(launch_text.figlet_text, launch_text.figlet_font)
        if not result.ok:
            log(f"patch: figlet: failed to generate text, {result.reason}", "FAIL")
            return ""
        return result.value
    return ""
