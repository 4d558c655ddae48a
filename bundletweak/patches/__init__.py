"""Ordered patch steps.

Order matters: the hardcoded theme fallbacks are fixed after the theme table
is injected, and the applied-patches indication reads the labels of every
step before it, so it stays last.
"""

from ..orchestrator import PatchStep
from .applied_indication import write_patches_applied_indication
from .banner_text import write_signin_banner_text
from .behavior import (
    write_context_limit,
    write_ignore_max_subscription,
    write_show_more_items,
    write_thinking_visibility,
    write_verbose_property,
)
from .input_box import write_input_box_border
from .models import write_model_customizations
from .themes import write_hardcoded_theme_objects, write_themes
from .thinker import (
    write_spinner_no_freeze,
    write_thinker_format,
    write_thinker_symbol_chars,
    write_thinker_symbol_mirror,
    write_thinker_symbol_speed,
    write_thinker_symbol_width,
    write_thinker_verbs,
)
from .toolsets import write_toolsets
from .user_message import write_user_message_display


def _has_themes(settings):
    return bool(settings.themes)


def _has_launch_text(settings):
    return settings.launch_text is not None


def _has_verbs(settings):
    return settings.thinking_verbs is not None


def _has_user_message(settings):
    return settings.user_message_display is not None


def _has_input_box(settings):
    return settings.input_box is not None


def _has_models(settings):
    return bool(settings.models)


def _has_default_toolset(settings):
    return settings.toolset(settings.default_toolset) is not None


def build_patch_list():
    return [
        PatchStep("themes", write_themes, "Custom themes", _has_themes),
        PatchStep("hardcoded_theme_objects", write_hardcoded_theme_objects,
                  "Monochrome theme fallbacks", _has_themes),
        PatchStep("signin_banner_text", write_signin_banner_text, "Sign-in banner text", _has_launch_text),
        PatchStep("thinker_verbs", write_thinker_verbs, "Thinking verbs", _has_verbs),
        PatchStep("thinker_format", write_thinker_format, "Thinking verb format", _has_verbs),
        PatchStep("thinker_symbol_chars", write_thinker_symbol_chars, "Spinner characters"),
        PatchStep("thinker_symbol_speed", write_thinker_symbol_speed, "Spinner speed"),
        PatchStep("thinker_symbol_width", write_thinker_symbol_width, "Spinner width"),
        PatchStep("thinker_symbol_mirror", write_thinker_symbol_mirror, "Spinner mirror"),
        PatchStep("user_message_display", write_user_message_display, "User message style", _has_user_message),
        PatchStep("input_box_border", write_input_box_border, "Input box border", _has_input_box),
        PatchStep("verbose_property", write_verbose_property, "Verbose spinner"),
        PatchStep("spinner_no_freeze", write_spinner_no_freeze, "Spinner keeps moving"),
        PatchStep("context_limit", write_context_limit, "Context limit override"),
        PatchStep("model_customizations", write_model_customizations, "Extra model options", _has_models),
        PatchStep("show_more_items", write_show_more_items, "Longer select menus"),
        PatchStep("ignore_max_subscription", write_ignore_max_subscription, "Cost shown for subscribers"),
        PatchStep("thinking_visibility", write_thinking_visibility, "Thinking blocks expanded"),
        PatchStep("toolsets", write_toolsets, "Toolset restriction", _has_default_toolset),
        PatchStep("patches_applied_indication", write_patches_applied_indication),
    ]
