import asyncio
from pathlib import Path

import pytest

from bundletweak.config import (
    InputBox,
    LaunchText,
    TextStyle,
    ThinkingVerbs,
    Toolset,
    UserMessageDisplay,
    default_config,
)
from bundletweak.customize import customize_text
from bundletweak.results import Found

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def bundle_text():
    return (FIXTURES / "cli.js").read_text(encoding="utf-8")


@pytest.fixture
def settings():
    """Every customization turned on."""
    settings = default_config().settings
    settings.launch_text = LaunchText(method="custom", custom_text="HELLO")
    settings.thinking_verbs = ThinkingVerbs(format="{}… ", verbs=["Pondering", "Musing"])
    settings.thinking_style.phases = ["+", "x", "*"]
    settings.thinking_style.update_interval = 80
    settings.thinking_style.reverse_mirror = False
    settings.user_message_display = UserMessageDisplay(
        prefix=TextStyle(format="$ ", foreground_color="rgb(1,2,3)", styling=["bold"]),
        message=TextStyle(format="", background_color="#222222"),
    )
    settings.input_box = InputBox(remove_border=True)
    settings.toolsets = [Toolset("safe", ["Read", "Grep"]), Toolset("all")]
    settings.default_toolset = "safe"
    return settings


async def fake_render(text, font="standard"):
    return Found(f"<{text}>")


def run_pipeline(content, settings, **kwargs):
    kwargs.setdefault("render", fake_render)
    return asyncio.run(customize_text(content, settings, **kwargs))


@pytest.fixture
def bundle_file(tmp_path, bundle_text):
    install = tmp_path / "node_modules" / "claude-code"
    install.mkdir(parents=True)
    path = install / "cli.js"
    path.write_text(bundle_text, encoding="utf-8")
    (install / "package.json").write_text('{"version": "1.0.88"}', encoding="utf-8")
    return path


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "config"
