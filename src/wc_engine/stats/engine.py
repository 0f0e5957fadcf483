"""Stateless word/line/character/byte counting."""

from __future__ import annotations

from typing import Iterable, Optional

from .rules import ByteEncoder, ClassificationRules
from .statistic import Statistic
from .validation import ensure_span


def compute_statistic(
    text: str,
    rules: ClassificationRules,
    encoder: Optional[ByteEncoder] = None,
) -> Statistic:
    """Count ``text`` from scratch.

    Words are maximal runs of characters that ``rules.is_whitespace``
    rejects; lines are the characters ``rules.is_newline`` accepts.
    """

    if not text:
        return Statistic.zero()

    is_whitespace = rules.is_whitespace
    is_newline = rules.is_newline
    words = 0
    lines = 0
    in_word = False
    for ch in text:
        if is_whitespace(ch):
            if in_word:
                words += 1
                in_word = False
        else:
            in_word = True
        if is_newline(ch):
            lines += 1
    if in_word:
        words += 1

    return Statistic(
        characters=len(text),
        bytes=len(encoder(text)) if encoder is not None else 0,
        words=words,
        lines=lines,
    )


def text_range_statistic(
    text: str,
    start: int,
    end: int,
    rules: ClassificationRules,
    encoder: Optional[ByteEncoder] = None,
) -> Statistic:
    start, end = ensure_span(text, start, end)
    return compute_statistic(text[start:end], rules, encoder)


def sum_statistics(stats: Iterable[Statistic]) -> Statistic:
    total = Statistic.zero()
    for stat in stats:
        total = total + stat
    return total


__all__ = ["compute_statistic", "text_range_statistic", "sum_statistics"]
