"""Edit hints reported by hosts and the checks applied before using them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from wc_engine.errors import EditValidationError
from wc_engine.stats import ensure_span


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace ``removed_length`` characters at ``start_offset`` with ``inserted_text``.

    Offsets always refer to the text as it was before the batch.
    """

    start_offset: int
    removed_length: int
    inserted_text: str = ""

    @property
    def end_offset(self) -> int:
        return self.start_offset + self.removed_length

    @classmethod
    def insert(cls, offset: int, text: str) -> "TextEdit":
        return cls(offset, 0, text)

    @classmethod
    def delete(cls, start: int, end: int) -> "TextEdit":
        return cls(start, end - start, "")


def normalize_edits(previous_text: str, edits: Iterable[TextEdit]) -> List[TextEdit]:
    """Validate a batch and merge edits whose spans touch.

    Two edits touch when one ends exactly where the other starts; each would
    read its boundary character from text the other replaces, so they are
    applied as one. Untouched edits keep the order the host gave them.
    """

    batch = list(edits)
    for edit in batch:
        if edit.removed_length < 0:
            raise EditValidationError(
                f"Negative removed length {edit.removed_length} at {edit.start_offset}"
            )
        ensure_span(previous_text, edit.start_offset, edit.end_offset)

    order = sorted(
        range(len(batch)),
        key=lambda i: (batch[i].start_offset, batch[i].end_offset),
    )
    groups: List[List[int]] = []
    for index in order:
        edit = batch[index]
        if groups:
            last = batch[groups[-1][-1]]
            if edit.start_offset < last.end_offset:
                raise EditValidationError(
                    f"Edit at {edit.start_offset} overlaps edit ending at {last.end_offset}"
                )
            if edit.start_offset == last.end_offset:
                groups[-1].append(index)
                continue
        groups.append([index])

    groups.sort(key=min)
    return [_merge([batch[i] for i in group]) for group in groups]


def _merge(run: Sequence[TextEdit]) -> TextEdit:
    if len(run) == 1:
        return run[0]
    start = run[0].start_offset
    return TextEdit(
        start_offset=start,
        removed_length=run[-1].end_offset - start,
        inserted_text="".join(edit.inserted_text for edit in run),
    )


def apply_edits(previous_text: str, edits: Iterable[TextEdit]) -> str:
    """Return the text produced by applying a validated batch."""

    result = previous_text
    for edit in sorted(
        normalize_edits(previous_text, edits),
        key=lambda e: e.start_offset,
        reverse=True,
    ):
        result = result[: edit.start_offset] + edit.inserted_text + result[edit.end_offset :]
    return result


def edit_between(previous: str, current: str) -> Optional[TextEdit]:
    """Smallest single edit turning ``previous`` into ``current``."""

    if previous == current:
        return None
    limit = min(len(previous), len(current))
    prefix = 0
    while prefix < limit and previous[prefix] == current[prefix]:
        prefix += 1
    suffix = 0
    while (
        suffix < limit - prefix
        and previous[len(previous) - 1 - suffix] == current[len(current) - 1 - suffix]
    ):
        suffix += 1
    return TextEdit(
        start_offset=prefix,
        removed_length=len(previous) - prefix - suffix,
        inserted_text=current[prefix : len(current) - suffix],
    )


__all__ = ["TextEdit", "normalize_edits", "apply_edits", "edit_between"]
