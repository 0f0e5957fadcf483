"""Statistic engine: value type, classification rules, and counting."""

from .engine import compute_statistic, sum_statistics, text_range_statistic
from .rules import (
    DEFAULT_NEW_LINE,
    DEFAULT_WHITE_SPACE,
    ByteEncoder,
    ClassificationRules,
    make_encoder,
)
from .statistic import Statistic
from .validation import ensure_span

__all__ = [
    "Statistic",
    "ClassificationRules",
    "ByteEncoder",
    "DEFAULT_WHITE_SPACE",
    "DEFAULT_NEW_LINE",
    "make_encoder",
    "compute_statistic",
    "text_range_statistic",
    "sum_statistics",
    "ensure_span",
]
