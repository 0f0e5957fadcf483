"""UI-agnostic status-line controller used by the Textual demo."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, Mapping, Optional, Sequence

from wc_engine.cache import TextEdit, edit_between
from wc_engine.errors import WordCountError
from wc_engine.host import SelectionReport, StatusReport, WordCountService

Span = tuple[int, int]


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def format_document_status(report: Optional[StatusReport]) -> str:
    if report is None:
        return "wc (all): ( - )"
    return f"wc (all): ( {report.lines} | {report.words} | {report.size} )"


def format_selection_status(
    report: Optional[SelectionReport], *, has_selection: bool
) -> Optional[str]:
    """Render the selection label, or ``None`` when it should be hidden."""

    if report is None:
        return "wc (sel): ( - )" if has_selection else None
    if report.characters <= 0:
        return None
    text = f"wc (sel): ( {report.lines} | {report.words} | {report.size} )"
    if report.selection_count > 1:
        text += f" ({report.selection_count} selections)"
    return text


@dataclass(slots=True)
class WordCountUIHooks:
    """Callbacks the controller uses to update host widgets.

    A status value of ``None`` means the widget should be hidden.
    """

    update_document_status: Callable[[Optional[str]], None]
    update_selection_status: Callable[[Optional[str]], None] = _noop
    show_message: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class WordCountStatusController:
    """Feeds editor events to a ``WordCountService`` and refreshes the labels."""

    def __init__(self, service: WordCountService, hooks: WordCountUIHooks) -> None:
        self.service = service
        self.hooks = hooks
        if service.on_error is None:
            service.on_error = self._handle_error
        self._active: Optional[Hashable] = None
        self._texts: Dict[Hashable, str] = {}
        self._selections: Dict[Hashable, tuple[Span, ...]] = {}
        self.refresh()

    @property
    def active_document(self) -> Optional[Hashable]:
        return self._active

    def open_document(self, doc_id: Hashable, text: str, *, activate: bool = True) -> None:
        self._texts[doc_id] = text
        self.service.open_document(doc_id, text)
        self._log("open ->", document=doc_id, length=len(text))
        if activate:
            self._active = doc_id
        self.refresh()

    def close_document(self, doc_id: Hashable) -> None:
        self.service.close_document(doc_id)
        self._texts.pop(doc_id, None)
        self._selections.pop(doc_id, None)
        if self._active == doc_id:
            self._active = None
        self._log("close ->", document=doc_id)
        self.refresh()

    def activate(self, doc_id: Optional[Hashable]) -> None:
        self._active = doc_id
        self.refresh()

    def change_document(
        self,
        doc_id: Hashable,
        text: str,
        edits: Optional[Iterable[TextEdit]] = None,
    ) -> None:
        """Apply an edit batch; without one, diff against the last known text."""

        if edits is None:
            previous = self.service.cache.previous_text(doc_id)
            if previous is None:
                previous = self._texts.get(doc_id, "")
            edit = edit_between(previous, text)
            batch = [edit] if edit is not None else []
        else:
            batch = list(edits)
        self._texts[doc_id] = text
        self.service.change_document(doc_id, text, batch)
        self._log("change ->", document=doc_id, edits=len(batch))
        self.refresh()

    def select(self, doc_id: Hashable, spans: Sequence[Span]) -> None:
        self._selections[doc_id] = tuple(
            (min(start, end), max(start, end)) for start, end in spans
        )
        self.refresh()

    def toggle_document(self) -> None:
        enabled = self.service.toggle_document()
        self._log("toggle ->", document=enabled)
        self.refresh()

    def toggle_selection(self) -> None:
        enabled = self.service.toggle_selection()
        self._log("toggle ->", selection=enabled)
        self.refresh()

    def apply_configuration(self, settings: Mapping[str, Any]) -> bool:
        applied = self.service.apply_configuration(settings)
        self.refresh()
        return applied

    def refresh(self) -> None:
        doc_id = self._active
        if doc_id is None:
            self.hooks.update_document_status(None)
            self.hooks.update_selection_status(None)
            return

        text = self._texts.get(doc_id)
        spans = self._selections.get(doc_id, ())
        has_selection = any(start != end for start, end in spans)
        selection = self.service.selection_statistic(doc_id, spans, text)
        self.hooks.update_selection_status(
            format_selection_status(selection, has_selection=has_selection)
        )
        document = self.service.document_statistic(doc_id, text)
        self.hooks.update_document_status(format_document_status(document))

    def _handle_error(self, error: WordCountError) -> None:
        self.hooks.show_message(str(error))
        self._log("error ->", kind=type(error).__name__, message=str(error))

    def _log(self, prefix: str, **fields: object) -> None:
        parts = [prefix]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        self.hooks.log(" ".join(parts))


__all__ = [
    "WordCountStatusController",
    "WordCountUIHooks",
    "format_document_status",
    "format_selection_status",
]
