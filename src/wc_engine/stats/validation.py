"""Offset checks shared by range and edit handling."""

from __future__ import annotations

from wc_engine.errors import RangeValidationError


def ensure_span(text: str, start: int, end: int) -> tuple[int, int]:
    if start < 0 or start > len(text):
        raise RangeValidationError("Start offset out of range", span=(start, end))
    if end < start or end > len(text):
        raise RangeValidationError("End offset out of range", span=(start, end))
    return start, end


__all__ = ["ensure_span"]
