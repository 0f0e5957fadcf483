"""Exception types raised or reported by the word-count engine."""

from __future__ import annotations

from typing import Hashable, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from wc_engine.stats import Statistic

Span = Tuple[int, int]


class WordCountError(RuntimeError):
    """Base class for every engine error."""


class ConfigurationError(WordCountError):
    """Raised when host settings cannot be turned into classification rules."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class RangeValidationError(WordCountError):
    """Raised when a host supplies offsets outside the text they refer to."""

    def __init__(self, message: str, *, span: Span | None = None) -> None:
        super().__init__(message)
        self.span = span


class EditValidationError(WordCountError):
    """Raised when a batch of edits cannot be applied as independent deltas."""


class UnknownDocumentError(WordCountError, KeyError):
    """Raised when no cached state or text exists for a document id."""

    def __init__(self, doc_id: Hashable) -> None:
        super().__init__(f"No text available for document {doc_id!r}")
        self.doc_id = doc_id

    def __str__(self) -> str:
        return str(self.args[0])


class ConsistencyError(WordCountError):
    """Incremental statistic disagrees with a full recomputation.

    Never raised out of the cache; it is handed to the error reporter.
    """

    def __init__(
        self,
        doc_id: Hashable,
        *,
        expected: "Statistic",
        actual: "Statistic",
        repaired: bool = False,
        reason: Optional[str] = None,
    ) -> None:
        message = reason or f"Incremental word count drifted for {doc_id!r}"
        super().__init__(message)
        self.doc_id = doc_id
        self.expected = expected
        self.actual = actual
        self.repaired = repaired


__all__ = [
    "WordCountError",
    "ConfigurationError",
    "RangeValidationError",
    "EditValidationError",
    "UnknownDocumentError",
    "ConsistencyError",
]
