"""Host-facing facade over the statistic cache."""

from .service import DisplayToggles, SelectionReport, StatusReport, WordCountService

__all__ = [
    "DisplayToggles",
    "SelectionReport",
    "StatusReport",
    "WordCountService",
]
