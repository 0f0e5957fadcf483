"""Textual adapter: status controller plus the demo app in ``.app``."""

from .controller import (
    WordCountStatusController,
    WordCountUIHooks,
    format_document_status,
    format_selection_status,
)

__all__ = [
    "WordCountStatusController",
    "WordCountUIHooks",
    "format_document_status",
    "format_selection_status",
]
