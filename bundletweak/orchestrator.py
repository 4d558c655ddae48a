"""Patch Orchestrator: fold an ordered list of steps over one buffer.

Each step is ``(buffer, ctx) -> Found(new_buffer) | NotFound`` and may be a
coroutine function. A step that fails, or raises, leaves the buffer exactly
as it was before that step and the run continues with the next one.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from . import __version__
from .anchors import LandmarkCache
from .log import log
from .results import FailureKind, NotFound

APPLIED = "applied"
UNCHANGED = "unchanged"
DISABLED = "disabled"
FAILED = "failed"
ERROR = "error"


def always(settings):
    return True


@dataclass
class PatchStep:
    name: str
    run: Callable
    label: Optional[str] = None
    enabled: Callable[[Any], bool] = always


@dataclass
class PatchContext:
    settings: Any
    landmarks: LandmarkCache = field(default_factory=LandmarkCache)
    items: List[str] = field(default_factory=list)
    version: str = __version__
    render: Optional[Callable] = None


@dataclass
class StepReport:
    name: str
    status: str
    failure: Optional[NotFound] = None
    detail: str = ""


@dataclass
class PatchRun:
    content: str
    items: List[str]
    reports: List[StepReport]

    @property
    def failures(self):
        return [r for r in self.reports if r.status in (FAILED, ERROR)]

    def status_of(self, name):
        for report in self.reports:
            if report.name == name:
                return report.status
        return None


async def run_step(step, content, ctx):
    result = step.run(content, ctx)
    if inspect.isawaitable(result):
        result = await result
    return result


async def run_patches(buffer, steps, ctx: PatchContext) -> PatchRun:
    content = buffer
    reports = []

    for step in steps:
        if not step.enabled(ctx.settings):
            reports.append(StepReport(step.name, DISABLED))
            continue

        try:
            result = await run_step(step, content, ctx)
            ok = result.ok
            new_content = result.value if ok else None
        except Exception as e:
            log(f"{step.name}: {type(e).__name__}: {e}", "FAIL")
            reports.append(StepReport(step.name, ERROR, detail=str(e)))
            continue

        if not ok:
            # Landmark failures were already reported once by the cache.
            level = "DEBUG" if result.kind is FailureKind.ANCHOR_NOT_FOUND else "WARN"
            log(f"{step.name}: not applied, {result.describe()}", level)
            reports.append(StepReport(step.name, FAILED, failure=result))
            continue

        if new_content == content:
            reports.append(StepReport(step.name, UNCHANGED))
            continue

        content = new_content
        if step.label:
            ctx.items.append(step.label)
        log(f"{step.name}: applied", "OK")
        reports.append(StepReport(step.name, APPLIED))

    return PatchRun(content=content, items=list(ctx.items), reports=reports)
