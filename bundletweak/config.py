"""Customization settings persisted as JSON in the config directory."""

import datetime as dt
import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, List, Optional

CONFIG_FILENAME = "config.json"
BACKUP_FILENAME = "cli.backup.js"

RAINBOW_KEYS = (
    "rainbow_red", "rainbow_orange", "rainbow_yellow", "rainbow_green",
    "rainbow_blue", "rainbow_indigo", "rainbow_violet",
)

DARK_COLORS = {
    "claude": "rgb(215,119,87)",
    "text": "rgb(255,255,255)",
    "secondaryText": "rgb(153,153,153)",
    "success": "rgb(78,186,101)",
    "error": "rgb(255,107,128)",
    "warning": "rgb(255,193,7)",
    "permission": "rgb(177,185,249)",
    "promptBorder": "rgb(136,136,136)",
    "rainbow_red": "rgb(235,95,87)",
    "rainbow_orange": "rgb(245,139,87)",
    "rainbow_yellow": "rgb(250,195,95)",
    "rainbow_green": "rgb(145,200,130)",
    "rainbow_blue": "rgb(130,170,220)",
    "rainbow_indigo": "rgb(155,130,200)",
    "rainbow_violet": "rgb(200,130,180)",
    "rainbow_red_shimmer": "rgb(250,155,147)",
    "rainbow_orange_shimmer": "rgb(255,185,137)",
    "rainbow_yellow_shimmer": "rgb(255,225,155)",
    "rainbow_green_shimmer": "rgb(185,230,180)",
    "rainbow_blue_shimmer": "rgb(180,205,240)",
    "rainbow_indigo_shimmer": "rgb(195,180,230)",
    "rainbow_violet_shimmer": "rgb(230,180,210)",
}

MONOCHROME_COLORS = {
    "claude": "rgb(255,255,255)",
    "text": "rgb(255,255,255)",
    "secondaryText": "rgb(153,153,153)",
    "success": "rgb(200,200,200)",
    "error": "rgb(180,180,180)",
    "warning": "rgb(220,220,220)",
    "permission": "rgb(210,210,210)",
    "promptBorder": "rgb(136,136,136)",
    **{key: "rgb(160,160,160)" for key in RAINBOW_KEYS},
    **{f"{key}_shimmer": "rgb(210,210,210)" for key in RAINBOW_KEYS},
}

DEFAULT_THEMES = [
    {"id": "dark", "name": "Dark mode", "colors": DARK_COLORS},
    {"id": "monochrome", "name": "Monochrome", "colors": MONOCHROME_COLORS},
]

DEFAULT_PHASES = ["·", "✢", "✳", "✶", "✻", "✽"]

# Added to the /model picker after the vendor's own options.
DEFAULT_MODELS = [
    {"value": "claude-opus-4-1-20250805", "label": "Opus 4.1", "description": "Opus 4.1 by id"},
    {"value": "claude-sonnet-4-5-20250929", "label": "Sonnet 4.5", "description": "Sonnet 4.5 by id"},
    {"value": "claude-3-5-haiku-20241022", "label": "Haiku 3.5", "description": "Haiku 3.5 by id"},
]

DEFAULT_CONFIG = {
    "bundle_path": "",
    "changes_applied": False,
    "last_modified": "",
    "settings": {
        "themes": DEFAULT_THEMES,
        "launch_text": None,
        "thinking_verbs": None,
        "thinking_style": {
            "phases": DEFAULT_PHASES,
            "update_interval": 120,
            "reverse_mirror": True,
        },
        "user_message_display": None,
        "input_box": None,
        "models": DEFAULT_MODELS,
        "toolsets": [],
        "default_toolset": None,
        "misc": {
            "show_version": True,
            "show_patches_applied": True,
            "visible_option_count": 25,
            "spinner_no_freeze": True,
            "ignore_max_subscription": True,
            "expand_thinking": True,
        },
    },
}


@dataclass
class Theme:
    id: str
    name: str
    colors: dict = field(default_factory=dict)


@dataclass
class LaunchText:
    method: str = "none"  # "none" | "custom" | "figlet"
    custom_text: str = ""
    figlet_text: str = ""
    figlet_font: str = "standard"


@dataclass
class ThinkingVerbs:
    format: str = "{}… "
    verbs: List[str] = field(default_factory=list)


@dataclass
class ThinkingStyle:
    phases: List[str] = field(default_factory=lambda: list(DEFAULT_PHASES))
    update_interval: int = 120
    reverse_mirror: bool = True


@dataclass
class TextStyle:
    format: str = "> "
    foreground_color: str = ""
    background_color: str = ""
    styling: List[str] = field(default_factory=list)


@dataclass
class UserMessageDisplay:
    prefix: TextStyle = field(default_factory=TextStyle)
    message: TextStyle = field(default_factory=lambda: TextStyle(format=""))


@dataclass
class InputBox:
    remove_border: bool = False


@dataclass
class ModelOption:
    value: str
    label: str
    description: str = ""


@dataclass
class Toolset:
    name: str
    allowed_tools: Any = "*"  # "*" or a list of tool names


@dataclass
class Misc:
    show_version: bool = True
    show_patches_applied: bool = True
    visible_option_count: int = 25
    spinner_no_freeze: bool = True
    ignore_max_subscription: bool = True
    expand_thinking: bool = True


@dataclass
class Settings:
    themes: List[Theme] = field(default_factory=list)
    launch_text: Optional[LaunchText] = None
    thinking_verbs: Optional[ThinkingVerbs] = None
    thinking_style: ThinkingStyle = field(default_factory=ThinkingStyle)
    user_message_display: Optional[UserMessageDisplay] = None
    input_box: Optional[InputBox] = None
    models: List[ModelOption] = field(default_factory=list)
    toolsets: List[Toolset] = field(default_factory=list)
    default_toolset: Optional[str] = None
    misc: Misc = field(default_factory=Misc)

    def theme(self, theme_id):
        for theme in self.themes:
            if theme.id == theme_id:
                return theme
        return None

    def toolset(self, name):
        for toolset in self.toolsets:
            if toolset.name == name:
                return toolset
        return None


@dataclass
class Config:
    bundle_path: str = ""
    changes_applied: bool = False
    last_modified: str = ""
    settings: Settings = field(default_factory=Settings)


# ─── Dict <-> dataclass ────────────────────────────────────────────────────────

def deep_merge(base: dict, incoming: dict) -> dict:
    out = dict(base)
    for key, value in incoming.items():
        if isinstance(out.get(key), dict) and isinstance(value, dict):
            out[key] = deep_merge(out[key], value)
        else:
            out[key] = value
    return out


def _pick(cls, data):
    """Build ``cls`` from the keys of ``data`` it knows; unknown keys are dropped."""
    if not isinstance(data, dict):
        return cls()
    known = {name for name in cls.__dataclass_fields__}
    return cls(**{k: v for k, v in data.items() if k in known})


def _text_style(data, default_format):
    style = _pick(TextStyle, deep_merge({"format": default_format}, data if isinstance(data, dict) else {}))
    if not isinstance(style.format, str):
        style.format = default_format
    for name in ("foreground_color", "background_color"):
        if not isinstance(getattr(style, name), str):
            setattr(style, name, "")
    if not _is_str_list(style.styling):
        style.styling = []
    return style


def _is_str_list(value):
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _flags(obj, defaults):
    """Reset every non-bool attribute named in ``defaults`` to its default."""
    for name, default in defaults.items():
        if not isinstance(getattr(obj, name), bool):
            setattr(obj, name, default)


def _launch_text(data):
    if not isinstance(data, dict):
        return None
    launch_text = _pick(LaunchText, data)
    if launch_text.method not in ("none", "custom", "figlet"):
        launch_text.method = "none"
    for name in ("custom_text", "figlet_text"):
        if not isinstance(getattr(launch_text, name), str):
            setattr(launch_text, name, "")
    if not isinstance(launch_text.figlet_font, str) or not launch_text.figlet_font:
        launch_text.figlet_font = LaunchText.figlet_font
    return launch_text


def _thinking_verbs(data):
    if not isinstance(data, dict):
        return None
    verbs = _pick(ThinkingVerbs, data)
    if not isinstance(verbs.format, str) or "{}" not in verbs.format:
        verbs.format = ThinkingVerbs.format
    if not _is_str_list(verbs.verbs):
        verbs.verbs = []
    return verbs


def _models(data):
    models = []
    for raw in data if isinstance(data, list) else []:
        if isinstance(raw, dict) and isinstance(raw.get("value"), str) and raw["value"]:
            models.append(ModelOption(
                value=raw["value"],
                label=str(raw.get("label") or raw["value"]),
                description=str(raw.get("description") or ""),
            ))
    return models


def _toolsets(data):
    toolsets = []
    for raw in data if isinstance(data, list) else []:
        if not isinstance(raw, dict) or not isinstance(raw.get("name"), str) or not raw["name"]:
            continue
        allowed = raw.get("allowed_tools", "*")
        if allowed != "*" and not _is_str_list(allowed):
            allowed = "*"
        toolsets.append(Toolset(name=raw["name"], allowed_tools=allowed))
    return toolsets


def settings_from_dict(data: dict) -> Settings:
    themes = []
    raw_themes = data.get("themes")
    for raw in raw_themes if isinstance(raw_themes, list) else []:
        if isinstance(raw, dict) and raw.get("id"):
            colors = raw.get("colors")
            themes.append(Theme(
                id=str(raw["id"]),
                name=str(raw.get("name", raw["id"])),
                colors=dict(colors) if isinstance(colors, dict) else {},
            ))

    style = _pick(ThinkingStyle, data.get("thinking_style"))
    if not isinstance(style.phases, list) or not style.phases or not _is_str_list(style.phases):
        style.phases = DEFAULT_PHASES
    style.phases = list(style.phases)
    if not isinstance(style.update_interval, int) or style.update_interval <= 0:
        style.update_interval = 120
    _flags(style, {"reverse_mirror": True})

    umd = data.get("user_message_display")
    if isinstance(umd, dict):
        umd = UserMessageDisplay(
            prefix=_text_style(umd.get("prefix"), "> "),
            message=_text_style(umd.get("message"), ""),
        )
    else:
        umd = None

    input_box = data.get("input_box")
    input_box = _pick(InputBox, input_box) if isinstance(input_box, dict) else None
    if input_box is not None:
        _flags(input_box, {"remove_border": False})

    misc = _pick(Misc, data.get("misc"))
    if not isinstance(misc.visible_option_count, int) or misc.visible_option_count <= 0:
        misc.visible_option_count = 25
    _flags(misc, {
        "show_version": True,
        "show_patches_applied": True,
        "spinner_no_freeze": True,
        "ignore_max_subscription": True,
        "expand_thinking": True,
    })

    toolsets = _toolsets(data.get("toolsets"))
    default_toolset = data.get("default_toolset")
    if not isinstance(default_toolset, str) or default_toolset not in {t.name for t in toolsets}:
        default_toolset = None

    return Settings(
        themes=themes,
        launch_text=_launch_text(data.get("launch_text")),
        thinking_verbs=_thinking_verbs(data.get("thinking_verbs")),
        thinking_style=style,
        user_message_display=umd,
        input_box=input_box,
        models=_models(data.get("models")),
        toolsets=toolsets,
        default_toolset=default_toolset,
        misc=misc,
    )


def config_from_dict(data: dict) -> Config:
    merged = deep_merge(DEFAULT_CONFIG, data)
    settings = merged.get("settings")
    if not isinstance(settings, dict):
        settings = DEFAULT_CONFIG["settings"]
    return Config(
        bundle_path=str(merged.get("bundle_path") or ""),
        changes_applied=bool(merged.get("changes_applied")),
        last_modified=str(merged.get("last_modified") or ""),
        settings=settings_from_dict(settings),
    )


def default_config() -> Config:
    return config_from_dict({})


# ─── Files ─────────────────────────────────────────────────────────────────────

def default_config_dir() -> Path:
    return Path(os.getenv("BUNDLETWEAK_CONFIG_DIR", str(Path.home() / ".bundletweak"))).expanduser()


def load_config(config_dir: Path) -> Config:
    path = Path(config_dir) / CONFIG_FILENAME
    if not path.is_file():
        return default_config()
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"config is not an object: {path}")
    return config_from_dict(data)


def save_config(config: Config, config_dir: Path) -> Path:
    config_dir = Path(config_dir)
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / CONFIG_FILENAME
    path.write_text(json.dumps(asdict(config), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


def update_config_file(config_dir: Path, update) -> Config:
    """Load, mutate with ``update(config)``, stamp and save."""
    config = load_config(config_dir)
    update(config)
    config.last_modified = dt.datetime.now(dt.timezone.utc).isoformat()
    save_config(config, config_dir)
    return config
