import pytest

from bundletweak.edits import apply_edit, apply_edits, replace_literals, rewrite_span
from bundletweak.locate import locate
from bundletweak.results import ApplyFailure, ModificationEdit


def test_length_changes_by_replacement_delta():
    buf = "function f(){return 1}"
    edit = ModificationEdit(20, 21, "42")
    out = apply_edit(buf, edit)
    assert out == "function f(){return 42}"
    assert len(out) == len(buf) - (edit.end_index - edit.start_index) + len(edit.new_content)


def test_insert():
    assert apply_edit("ab", ModificationEdit.insert(1, "-")) == "a-b"


def test_edits_applied_regardless_of_given_order():
    edits = [ModificationEdit(6, 11, "there"), ModificationEdit(0, 5, "goodbye")]
    assert apply_edits("hello world", edits) == "goodbye there"


def test_adjacent_insert_and_replace():
    edits = [ModificationEdit.insert(5, ","), ModificationEdit(0, 5, "HELLO")]
    assert apply_edits("hello world", edits) == "HELLO, world"


def test_overlapping_edits_rejected():
    with pytest.raises(ApplyFailure):
        apply_edits("hello world", [ModificationEdit(0, 5, "x"), ModificationEdit(3, 8, "y")])


@pytest.mark.parametrize("edit", [
    ModificationEdit(0, 20, "x"),
    ModificationEdit(-1, 2, "x"),
    ModificationEdit(4, 2, "x"),
])
def test_out_of_range(edit):
    with pytest.raises(ApplyFailure):
        apply_edit("hello", edit)
    with pytest.raises(ValueError):
        apply_edits("hello", [edit])


def test_rewrite_span_only_touches_the_span():
    buf = 'x="a";{x="a"};x="a"'
    loc = locate(buf, r"\{[^}]*\}", "block").value
    out = rewrite_span(buf, loc, lambda s: s.replace('"a"', '"b"'))
    assert out == 'x="a";{x="b"};x="a"'


def test_replace_literals_in_order():
    assert replace_literals("aab", [("a", "b"), ("bb", "c")]) == "cb"
