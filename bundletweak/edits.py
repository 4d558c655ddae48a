"""Edit Applier: located spans plus replacement text to a new buffer.

Buffers are plain ``str`` values, so no edit can mutate the text another
step is holding. All offsets an edit carries must come from the buffer it is
applied to.
"""

from .log import is_debug
from .results import ApplyFailure, ModificationEdit


def show_diff(old, new, injected, start_index, end_index):
    """Print old/new context around one edit (debug only)."""
    if not is_debug():
        return
    context_start = max(0, start_index - 20)
    old_changed = old[start_index:end_index]
    new_changed = new[start_index:start_index + len(injected)]
    if old_changed == new_changed:
        return

    old_line = (
        old[context_start:start_index]
        + f"\x1b[31m{old_changed}\x1b[0m"
        + old[end_index:min(len(old), end_index + 20)]
    )
    new_line = (
        new[context_start:start_index]
        + f"\x1b[32m{new_changed}\x1b[0m"
        + new[start_index + len(injected):min(len(new), start_index + len(injected) + 20)]
    )
    print("\n--- Diff ---")
    print("OLD:", old_line)
    print("NEW:", new_line)
    print("--- End Diff ---\n")


def _check_range(buffer, edit):
    if not 0 <= edit.start_index <= edit.end_index <= len(buffer):
        raise ApplyFailure(
            f"edit [{edit.start_index}, {edit.end_index}) outside buffer of length {len(buffer)}"
        )


def apply_edit(buffer, edit: ModificationEdit) -> str:
    _check_range(buffer, edit)
    result = buffer[:edit.start_index] + edit.new_content + buffer[edit.end_index:]
    show_diff(buffer, result, edit.new_content, edit.start_index, edit.end_index)
    return result


def apply_edits(buffer, edits) -> str:
    """Apply several edits located against the same buffer in one pass.

    Edits are applied from the highest offset down so no replacement shifts
    the offsets of one still pending. Overlapping edits are rejected.
    """
    ordered = sorted(edits, key=lambda e: (e.start_index, e.end_index))
    for edit in ordered:
        _check_range(buffer, edit)
    for earlier, later in zip(ordered, ordered[1:]):
        if later.start_index < earlier.end_index:
            raise ApplyFailure(
                f"overlapping edits [{earlier.start_index}, {earlier.end_index}) "
                f"and [{later.start_index}, {later.end_index})"
            )

    result = buffer
    for edit in reversed(ordered):
        result = apply_edit(result, edit)
    return result


def replace_literals(text, pairs):
    """Replace each (old, new) literal everywhere in ``text``, in order."""
    for old, new in pairs:
        text = text.replace(old, new)
    return text


def rewrite_span(buffer, location, rewrite) -> str:
    """Run ``rewrite`` on the located substring and reinsert it as one edit.

    Nested replacements inside a span happen on the extracted text, so they
    never see look-alikes elsewhere in the buffer and never use stale
    whole-buffer offsets.
    """
    section = location.text(buffer)
    return apply_edit(buffer, ModificationEdit.at(location, rewrite(section)))
