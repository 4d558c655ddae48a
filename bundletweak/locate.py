"""Location Finder: structural patterns to spans of a buffer.

Patterns are written against minified JavaScript, so identifier captures use
``ID`` (which admits ``$``) and start with the ``B`` lookbehind. A plain
``\\b`` is not a boundary in front of ``$`` and ``\\w`` alone misses
identifiers such as ``A$`` that the minifier emits all the time.
"""

import re
from collections import Counter

from .results import Found, LocationResult, location_not_found

ID = r"[$\w]+"
B = r"(?<![$\w])"


def compile_pattern(pattern):
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def _location(match, offset=0):
    return LocationResult(
        start_index=match.start() + offset,
        end_index=match.end() + offset,
        identifiers=[g for g in match.groups() if g is not None],
    )


def locate(buffer, pattern, what, *, pick="first", start=0, end=None):
    """Find one construct.

    ``pick="first"`` takes the first match. ``pick="most_common"`` takes the
    first occurrence of the matched text that appears most often, for
    constructs that are duplicated by the minifier with look-alikes around.
    When ``start``/``end`` are given only that window is searched, but the
    returned offsets are still relative to the whole buffer.
    """
    regex = compile_pattern(pattern)
    end = len(buffer) if end is None else end

    if pick == "first":
        match = regex.search(buffer, start, end)
        if not match:
            return location_not_found(what, f"no match for /{regex.pattern[:60]}/")
        return Found(_location(match))

    if pick == "most_common":
        matches = list(regex.finditer(buffer, start, end))
        if not matches:
            return location_not_found(what, f"no match for /{regex.pattern[:60]}/")
        counts = Counter(m.group(0) for m in matches)
        winner = counts.most_common(1)[0][0]
        return Found(_location(next(m for m in matches if m.group(0) == winner)))

    raise ValueError(f"unknown pick strategy: {pick}")


def locate_all(buffer, pattern, what, *, start=0, end=None):
    """Every non-overlapping match, in buffer order."""
    regex = compile_pattern(pattern)
    end = len(buffer) if end is None else end
    locations = [_location(m) for m in regex.finditer(buffer, start, end)]
    if not locations:
        return location_not_found(what, f"no match for /{regex.pattern[:60]}/")
    return Found(locations)


def locate_span(buffer, start_pattern, end_pattern, what, *, require=None):
    """Span between a start construct and the next recognizable unrelated construct.

    The end pattern is searched only after the start match, and the span is
    ``[start_match.end(), end_match.start())``. Identifiers come from the start
    match. Start candidates whose span lacks ``require`` are skipped.
    """
    start_regex = compile_pattern(start_pattern)
    end_regex = compile_pattern(end_pattern)

    saw_start = False
    for start_match in start_regex.finditer(buffer):
        saw_start = True
        end_match = end_regex.search(buffer, start_match.end())
        if not end_match:
            return location_not_found(what, "end of section not found")
        if require is not None and require not in buffer[start_match.end():end_match.start()]:
            continue
        return Found(LocationResult(
            start_index=start_match.end(),
            end_index=end_match.start(),
            identifiers=[g for g in start_match.groups() if g is not None],
        ))

    if saw_start:
        return location_not_found(what, f"no candidate section contains {require!r}")
    return location_not_found(what, "start of section not found")
