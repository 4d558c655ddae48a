from bundletweak.config import LaunchText, ModelOption, TextStyle, Theme, Toolset
from bundletweak.orchestrator import APPLIED, DISABLED, UNCHANGED
from bundletweak.patches import build_patch_list
from bundletweak.patches.jsutil import chalk_chain, escape_template
from bundletweak.results import FailureKind, render_failure

from .conftest import run_pipeline

STEP_NAMES = [
    "themes", "hardcoded_theme_objects", "signin_banner_text", "thinker_verbs",
    "thinker_format", "thinker_symbol_chars", "thinker_symbol_speed",
    "thinker_symbol_width", "thinker_symbol_mirror", "user_message_display",
    "input_box_border", "verbose_property", "spinner_no_freeze", "context_limit",
    "model_customizations", "show_more_items", "ignore_max_subscription",
    "thinking_visibility", "toolsets", "patches_applied_indication",
]


def test_step_order():
    assert [step.name for step in build_patch_list()] == STEP_NAMES


def test_full_pipeline_applies_every_step(bundle_text, settings):
    run = run_pipeline(bundle_text, settings)
    assert run.failures == []
    statuses = {r.name: r.status for r in run.reports}
    assert statuses["thinker_symbol_width"] == UNCHANGED
    assert all(status == APPLIED for name, status in statuses.items() if name != "thinker_symbol_width")
    assert "Spinner width" not in run.items
    assert run.items[0] == "Custom themes"


def test_pipeline_is_deterministic(bundle_text, settings):
    assert run_pipeline(bundle_text, settings).content == run_pipeline(bundle_text, settings).content


def test_themes(bundle_text, settings):
    out = run_pipeline(bundle_text, settings).content
    assert 'case"light":return qA' not in out
    assert 'case"monochrome":return {' in out
    assert '[{"label":"Dark mode","value":"dark"},{"label":"Monochrome","value":"monochrome"}]' in out


def test_hardcoded_fallbacks_rewritten_inside_section_only(bundle_text, settings):
    out = run_pipeline(bundle_text, settings).content
    assert 'Zq={rainbow_red:"rgb(160,160,160)",rainbow_orange:"rgb(160,160,160)",claude:"rgb(215,119,87)"' in out
    assert 'hX={rainbow_red_shimmer:"rgb(210,210,210)",rainbow_violet:"rgb(160,160,160)"}' in out
    assert 'jW={rainbow_red:"rgb(160,160,160)"}' in out
    assert "nested:{deep:{x:1}}" in out
    assert "Dd={a:1};Ee={b:2};Ff={c:3}" in out
    assert 'rainbow_red:"rgb(235,95,87)"' not in out


def test_hardcoded_fallbacks_untouched_without_monochrome(bundle_text, settings):
    settings.themes = [t for t in settings.themes if t.id != "monochrome"]
    run = run_pipeline(bundle_text, settings)
    assert run.status_of("hardcoded_theme_objects") == UNCHANGED
    assert 'rainbow_red:"rgb(235,95,87)"' in run.content


def test_signin_banner_custom_text(bundle_text, settings):
    out = run_pipeline(bundle_text, settings).content
    assert "var Wl=`HELLO`;" in out


def test_signin_banner_figlet(bundle_text, settings):
    settings.launch_text = LaunchText(method="figlet", figlet_text="Hi")
    assert "var Wl=`<Hi>`;" in run_pipeline(bundle_text, settings).content


def test_signin_banner_render_failure_gives_empty_banner(bundle_text, settings, capsys):
    async def broken(text, font="standard"):
        return render_failure("figlet", "no such font")

    settings.launch_text = LaunchText(method="figlet", figlet_text="Hi")
    run = run_pipeline(bundle_text, settings, render=broken)
    assert "var Wl=``;" in run.content
    assert run.failures == []
    assert "patch: figlet: failed to generate text" in capsys.readouterr().out


def test_thinker(bundle_text, settings):
    out = run_pipeline(bundle_text, settings).content
    assert 'var Tq=["Pondering","Musing"];' in out
    assert "(A??Q)+" not in out
    assert "`${A??Q}… `" in out
    assert out.count('["+","x","*"]') == 2
    assert "},80)" in out
    assert "Yd=[...Fw];" in out


def test_thinker_width_follows_widest_phase(bundle_text, settings):
    settings.thinking_style.phases = ["<*>", "*"]
    run = run_pipeline(bundle_text, settings)
    assert run.status_of("thinker_symbol_width") == APPLIED
    assert 'flexWrap:"wrap",height:1,width:4' in run.content


def test_thinker_mirror_kept_by_default(bundle_text, settings):
    settings.thinking_style.reverse_mirror = True
    out = run_pipeline(bundle_text, settings).content
    assert "[...Fw,...[...Fw].reverse()]" in out


def test_user_message_display(bundle_text, settings):
    out = run_pipeline(bundle_text, settings).content
    assert 'y$.createElement(T$,null,k1.rgb(1,2,3).bold("$ "))' in out
    assert 'y$.createElement(T$,null,k1.bgHex("#222222")(A))' in out


def test_behavior_tweaks(bundle_text, settings):
    out = run_pipeline(bundle_text, settings).content
    assert 'borderStyle:undefined' in out
    assert "progressMessage:Q,verbose:!0" in out
    assert (
        "function zk(A){if(process.env.CLAUDE_CODE_CONTEXT_LIMIT)"
        "return Number(process.env.CLAUDE_CODE_CONTEXT_LIMIT);if(" in out
    )
    assert out.count("visibleOptionCount:") == out.count("=25") == 2


def test_applied_indication(bundle_text, settings):
    run = run_pipeline(bundle_text, settings)
    out = run.content
    assert 'y$.createElement(T$,{bold:!0},"Claude Code"),y$.createElement(T$,{color:"success"}," + bundletweak v' in out
    assert 'y$.createElement(Hb,{flexDirection:"column"},y$.createElement(T$,null,"• Custom themes")' in out
    assert '"• Verbose spinner"' in out


def test_applied_indication_version_only(bundle_text, settings):
    settings.misc.show_patches_applied = False
    out = run_pipeline(bundle_text, settings).content
    assert "bundletweak v" in out
    assert "• Custom themes" not in out


def test_failure_is_contained(bundle_text, settings):
    broken = bundle_text.replace('"Accomplishing"', '"Achieving"')
    run = run_pipeline(broken, settings)
    [failure] = run.failures
    assert failure.name == "thinker_verbs"
    assert failure.failure.kind is FailureKind.LOCATION_NOT_FOUND
    assert '["Achieving","Actioning"' in run.content
    assert "Thinking verbs" not in run.items
    assert run.status_of("thinker_format") == APPLIED


def test_disabling_a_step_does_not_affect_others(bundle_text, settings):
    full = {r.name: r.status for r in run_pipeline(bundle_text, settings).reports}
    settings.thinking_verbs = None
    partial = {r.name: r.status for r in run_pipeline(bundle_text, settings).reports}
    assert partial["thinker_verbs"] == partial["thinker_format"] == DISABLED
    for name in STEP_NAMES:
        if name not in ("thinker_verbs", "thinker_format"):
            assert partial[name] == full[name]


def test_missing_landmark_fails_only_dependent_step(bundle_text, settings, capsys, monkeypatch):
    monkeypatch.delenv("BUNDLETWEAK_DEBUG", raising=False)
    broken = bundle_text.replace('Bx.displayName="Box"', "")
    run = run_pipeline(broken, settings)
    [failure] = run.failures
    assert failure.name == "patches_applied_indication"
    assert failure.failure.kind is FailureKind.ANCHOR_NOT_FOUND

    out = capsys.readouterr().out
    assert len([line for line in out.splitlines() if "not found" in line]) == 1
    assert "landmark box_component not found" in out


def test_missing_prerequisite_reported_once(bundle_text, settings, capsys, monkeypatch):
    monkeypatch.delenv("BUNDLETWEAK_DEBUG", raising=False)
    broken = bundle_text.replace('Symbol.for("react.element")', 'Symbol.for("react.node")')
    run = run_pipeline(broken, settings)
    [failure] = run.failures
    assert failure.name == "patches_applied_indication"
    assert failure.failure.what == "react_var"
    assert failure.failure.cause.what == "react_module"

    out = capsys.readouterr().out
    assert [line for line in out.splitlines() if "not found" in line] == [
        "  ✗ landmark react_module not found: react.element module not found"
    ]
    assert "react_var" not in out


def test_custom_theme_list(bundle_text, settings):
    settings.themes = [Theme(id="solar", name="Solar", colors={"claude": "#ffaa00"})]
    out = run_pipeline(bundle_text, settings).content
    assert 'switch(A){case"solar":return {"claude":"#ffaa00"};default:return {"claude":"#ffaa00"}}' in out


def test_chalk_chain():
    assert chalk_chain("k1", TextStyle()) == "k1.reset"
    style = TextStyle(foreground_color="#abc", background_color="rgb(1, 2, 3)", styling=["italic", "bold"])
    assert chalk_chain("k1", style) == 'k1.hex("#abc").bgRgb(1,2,3).bold.italic'


def test_escape_template():
    assert escape_template("a`b${c}\\") == "a\\`b\\${c}\\\\"


def test_spinner_keeps_moving_while_paused(bundle_text, settings):
    out = run_pipeline(bundle_text, settings).content
    assert "useEffect(()=>{let W=setInterval(" in out
    assert "if(V)return;" not in out

    settings.misc.spinner_no_freeze = False
    run = run_pipeline(bundle_text, settings)
    assert run.status_of("spinner_no_freeze") == UNCHANGED
    assert "useEffect(()=>{if(V)return;let W=setInterval(" in run.content


def test_model_options_appended(bundle_text, settings):
    settings.models = [
        ModelOption("opus", "Opus"),
        ModelOption("claude-sonnet-4-5-20250929", "Sonnet 4.5", "Sonnet 4.5 by id"),
    ]
    out = run_pipeline(bundle_text, settings).content
    assert (
        '{value:"opus",label:"Opus",description:"Opus for complex work"},'
        '{"value":"claude-sonnet-4-5-20250929","label":"Sonnet 4.5","description":"Sonnet 4.5 by id"}]}'
    ) in out
    assert out.count('"opus"') == 1


def test_model_options_already_present(bundle_text, settings):
    settings.models = [ModelOption("opus", "Opus")]
    assert run_pipeline(bundle_text, settings).status_of("model_customizations") == UNCHANGED

    settings.models = []
    assert run_pipeline(bundle_text, settings).status_of("model_customizations") == DISABLED


def test_cost_shown_for_subscribers(bundle_text, settings):
    out = run_pipeline(bundle_text, settings).content
    assert 'function Cx(){if(!1)return"You are currently using your subscription' in out

    settings.misc.ignore_max_subscription = False
    assert "if(Jm())return" in run_pipeline(bundle_text, settings).content


def test_thinking_blocks_expanded(bundle_text, settings):
    out = run_pipeline(bundle_text, settings).content
    assert "∴ Thinking…" not in out
    assert "function Th({thinking:A,isTranscriptMode:B,verbose:Q}){return y$.createElement(T$,{dimColor:!0},A)}" in out


def test_default_toolset_filters_tools(bundle_text, settings):
    out = run_pipeline(bundle_text, settings).content
    assert '[Ba,Rd,Ed,Wf].filter((Q)=>Q.isEnabled()).filter((Q)=>["Read","Grep"].includes(Q.name))' in out


def test_toolset_allowing_everything_leaves_tools(bundle_text, settings):
    settings.default_toolset = "all"
    run = run_pipeline(bundle_text, settings)
    assert run.status_of("toolsets") == UNCHANGED
    assert "Toolset restriction" not in run.items


def test_toolsets_need_a_default(bundle_text, settings):
    settings.default_toolset = None
    assert run_pipeline(bundle_text, settings).status_of("toolsets") == DISABLED

    settings.toolsets = [Toolset("safe", ["Read"])]
    settings.default_toolset = "missing"
    assert run_pipeline(bundle_text, settings).status_of("toolsets") == DISABLED
