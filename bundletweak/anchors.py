"""Anchor Resolver: stable landmarks derived from minified code shape.

Identifier names change on every vendor release, so each landmark is found
by structure instead: call frequency, a bootstrap signature near the top of
the file, a chain of earlier landmarks, or a distinguishing static property.
"""

import re
from collections import Counter

from .locate import B, ID
from .log import log
from .results import Found, anchor_not_found

# Bootstrap helpers are emitted before any module body.
LOADER_WINDOW = 1000

STYLE_METHODS = (
    "cyan", "gray", "green", "red", "yellow", "ansi256", "bgAnsi256", "bgHex",
    "bgRgb", "hex", "rgb", "bold", "dim", "inverse", "italic", "strikethrough",
    "underline",
)

CHALK_PATTERN = re.compile(
    rf"{B}({ID})(?:\.(?:{'|'.join(STYLE_METHODS)})(?![$\w]))+\("
)
MODULE_LOADER_PATTERN = re.compile(rf"var ({ID})=\({ID},{ID},{ID}\)=>\{{")
REACT_MODULE_PATTERN = re.compile(
    rf'var ({ID})={ID}\(\({ID}\)=>\{{var {ID}=Symbol\.for\("react\.element"\)'
)
TEXT_COMPONENT_PATTERN = re.compile(
    rf"{B}function ({ID})\(\{{color:{ID},backgroundColor:{ID},dimColor:{ID}=![01],bold:{ID}=![01]"
)
BOX_DISPLAY_NAME_PATTERN = re.compile(rf'{B}({ID})\.displayName="Box"')


# ─── Resolvers ─────────────────────────────────────────────────────────────────
#
# Each resolver takes (buffer, cache) and returns Found(str) or NotFound.
# Chained resolvers ask the cache for their prerequisites so they fail closed.

def find_chalk_var(buffer, cache=None):
    """Receiver of the most styling-method chains; ties go to the first seen."""
    counts = Counter(m.group(1) for m in CHALK_PATTERN.finditer(buffer))
    if not counts:
        return anchor_not_found("chalk_var", "no styling call chains")
    return Found(counts.most_common(1)[0][0])


def find_module_loader(buffer, cache=None):
    match = MODULE_LOADER_PATTERN.search(buffer[:LOADER_WINDOW])
    if not match:
        return anchor_not_found("module_loader", f"not in first {LOADER_WINDOW} chars")
    return Found(match.group(1))


def find_react_module(buffer, cache=None):
    match = REACT_MODULE_PATTERN.search(buffer)
    if not match:
        return anchor_not_found("react_module", "react.element module not found")
    return Found(match.group(1))


def find_react_var(buffer, cache):
    """X in ``X=<loader>(<react module>(),1)``."""
    prerequisites = cache.get("module_loader", buffer).then(
        lambda loader: cache.get("react_module", buffer).map(lambda module: (loader, module))
    )
    if not prerequisites.ok:
        return anchor_not_found(
            "react_var", f"prerequisite {prerequisites.what} missing", cause=prerequisites
        )

    loader, module = prerequisites.value
    pattern = re.compile(rf"{B}({ID})={re.escape(loader)}\({re.escape(module)}\(\),1\)")
    match = pattern.search(buffer)
    if not match:
        return anchor_not_found("react_var", f"no {loader}({module}(),1) binding")
    return Found(match.group(1))


def find_text_component(buffer, cache=None):
    match = TEXT_COMPONENT_PATTERN.search(buffer)
    if not match:
        return anchor_not_found("text_component", "prop signature not found")
    return Found(match.group(1))


def find_box_component(buffer, cache=None):
    """Variable aliased to the component tagged ``displayName="Box"``."""
    tagged = BOX_DISPLAY_NAME_PATTERN.search(buffer)
    if not tagged:
        return anchor_not_found("box_component", "Box displayName not found")

    original = tagged.group(1)
    alias = re.search(rf"{B}({ID})={re.escape(original)}(?![$\w])", buffer)
    if not alias:
        return anchor_not_found("box_component", f"no alias of {original}")
    return Found(alias.group(1))


RESOLVERS = {
    "chalk_var": find_chalk_var,
    "module_loader": find_module_loader,
    "react_module": find_react_module,
    "react_var": find_react_var,
    "text_component": find_text_component,
    "box_component": find_box_component,
}


# ─── Cache ─────────────────────────────────────────────────────────────────────

class LandmarkCache:
    """Memoized landmarks for one pipeline run.

    Create one per run (or ``clear()`` it); never share it between buffers of
    different bundles. Failures are cached as well so a missing landmark is
    reported once per run.
    """

    def __init__(self, resolvers=None):
        self.resolvers = dict(RESOLVERS if resolvers is None else resolvers)
        self._resolved = {}

    def get(self, name, buffer):
        if name in self._resolved:
            return self._resolved[name]

        resolver = self.resolvers.get(name)
        if resolver is None:
            raise KeyError(f"unknown landmark: {name}")

        result = resolver(buffer, self)
        if result.ok:
            log(f"landmark {name} → '{result.value}'", "DEBUG")
        elif result.cause is not None:
            log(f"landmark {name} skipped: {result.reason}", "DEBUG")
        else:
            log(f"landmark {name} not found: {result.reason}", "FAIL")
        self._resolved[name] = result
        return result

    def require(self, names, buffer):
        """Found(tuple) of every landmark in order, or the first failure.

        Stops at the first failure, so later landmarks are never resolved.
        """
        values = []
        for name in names:
            result = self.get(name, buffer)
            if not result.ok:
                return result
            values.append(result.value)
        return Found(tuple(values))

    def invalidate(self, name=None):
        if name is None:
            self._resolved.clear()
        else:
            self._resolved.pop(name, None)

    def clear(self):
        self._resolved.clear()

    def __contains__(self, name):
        return name in self._resolved
