"""Result values threaded through landmark resolution, location and patching."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional


class FailureKind(Enum):
    ANCHOR_NOT_FOUND = "anchor_not_found"
    LOCATION_NOT_FOUND = "location_not_found"
    RENDER_FAILURE = "render_failure"


class BundleReadError(Exception):
    """The bundle (or its pristine backup) could not be read at all."""


class ApplyFailure(ValueError):
    """An edit was malformed for the buffer it was applied to."""


@dataclass(frozen=True)
class Found:
    value: Any

    ok = True

    def then(self, fn: Callable[[Any], "Result"]) -> "Result":
        return fn(self.value)

    def map(self, fn: Callable[[Any], Any]) -> "Result":
        return Found(fn(self.value))


@dataclass(frozen=True)
class NotFound:
    kind: FailureKind
    what: str
    reason: str = ""
    # Set when this failure only follows from an earlier, already reported one.
    cause: Optional["NotFound"] = None

    ok = False

    def then(self, fn):
        return self

    def map(self, fn):
        return self

    def describe(self):
        text = f"{self.kind.value}: {self.what}"
        if self.reason:
            text += f" ({self.reason})"
        return text


Result = Any  # Found | NotFound


def combine(*results):
    """Found(tuple of values) if every result is Found, else the first NotFound."""
    values = []
    for result in results:
        if not result.ok:
            return result
        values.append(result.value)
    return Found(tuple(values))


@dataclass(frozen=True)
class LocationResult:
    """Half-open span [start_index, end_index) in one specific buffer."""
    start_index: int
    end_index: int
    identifiers: List[str] = field(default_factory=list)

    def text(self, buffer):
        return buffer[self.start_index:self.end_index]


@dataclass(frozen=True)
class ModificationEdit:
    start_index: int
    end_index: int
    new_content: str

    @classmethod
    def at(cls, location: LocationResult, new_content: str) -> "ModificationEdit":
        return cls(location.start_index, location.end_index, new_content)

    @classmethod
    def insert(cls, index: int, new_content: str) -> "ModificationEdit":
        return cls(index, index, new_content)


def anchor_not_found(what, reason="", cause=None):
    return NotFound(FailureKind.ANCHOR_NOT_FOUND, what, reason, cause)


def location_not_found(what, reason=""):
    return NotFound(FailureKind.LOCATION_NOT_FOUND, what, reason)


def render_failure(what, reason=""):
    return NotFound(FailureKind.RENDER_FAILURE, what, reason)
