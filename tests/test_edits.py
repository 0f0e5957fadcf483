from __future__ import annotations

import pytest

from wc_engine.cache import TextEdit, apply_edits, edit_between, normalize_edits
from wc_engine.errors import EditValidationError, RangeValidationError


def test_text_edit_helpers() -> None:
    assert TextEdit.insert(3, "x") == TextEdit(3, 0, "x")
    assert TextEdit.delete(2, 5) == TextEdit(2, 3, "")
    assert TextEdit(4, 2, "y").end_offset == 6


def test_normalize_keeps_given_order_for_separate_edits() -> None:
    edits = [TextEdit(6, 1, "X"), TextEdit(0, 1, "Y")]

    assert normalize_edits("abcdefgh", edits) == edits


def test_normalize_merges_touching_edits() -> None:
    edits = [TextEdit(3, 2, "B"), TextEdit(1, 2, "A"), TextEdit(7, 0, "C")]

    merged = normalize_edits("0123456789", edits)

    assert merged == [TextEdit(1, 4, "AB"), TextEdit(7, 0, "C")]


def test_normalize_merges_insertions_at_same_offset_in_given_order() -> None:
    merged = normalize_edits("abc", [TextEdit.insert(1, "x"), TextEdit.insert(1, "y")])

    assert merged == [TextEdit(1, 0, "xy")]


def test_normalize_rejects_insertion_inside_replaced_span() -> None:
    with pytest.raises(EditValidationError):
        normalize_edits("abcdef", [TextEdit(1, 4, ""), TextEdit.insert(3, "x")])


def test_normalize_rejects_offsets_past_end() -> None:
    with pytest.raises(RangeValidationError):
        normalize_edits("abc", [TextEdit.insert(4, "x")])


def test_apply_edits_uses_pre_edit_offsets() -> None:
    text = "hello brave new world"
    edits = [TextEdit(0, 5, "goodbye"), TextEdit(12, 3, "old")]

    assert apply_edits(text, edits) == "goodbye brave old world"


@pytest.mark.parametrize(
    ("previous", "current"),
    [
        ("foo bar", "foobar"),
        ("foobar", "foo bar"),
        ("", "fresh"),
        ("gone", ""),
        ("aaaa", "aaa"),
        ("abcabc", "abXabc"),
    ],
)
def test_edit_between_reproduces_current(previous: str, current: str) -> None:
    edit = edit_between(previous, current)

    assert edit is not None
    assert apply_edits(previous, [edit]) == current


def test_edit_between_is_minimal() -> None:
    assert edit_between("foo bar", "foobar") == TextEdit(3, 1, "")
    assert edit_between("foobar", "foo bar") == TextEdit(3, 0, " ")
    assert edit_between("same", "same") is None
