"""Incremental per-document statistic cache."""

from .edits import TextEdit, apply_edits, edit_between, normalize_edits
from .manager import DocumentId, ErrorReporter, StatisticCache, TextSource
from .state import DocumentState

__all__ = [
    "DocumentId",
    "DocumentState",
    "ErrorReporter",
    "StatisticCache",
    "TextEdit",
    "TextSource",
    "apply_edits",
    "edit_between",
    "normalize_edits",
]
