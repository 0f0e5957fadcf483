"""Facade that host adapters drive with editor events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Tuple

from wc_engine.cache import DocumentId, StatisticCache, TextEdit, TextSource
from wc_engine.config import CountMode, WordCountConfig
from wc_engine.errors import ConfigurationError, WordCountError
from wc_engine.runtime import telemetry
from wc_engine.stats import Statistic, sum_statistics

Span = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class StatusReport:
    """``(lines, words, size)`` triple handed to the display sink."""

    lines: int
    words: int
    size: int

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.lines, self.words, self.size)


@dataclass(frozen=True, slots=True)
class SelectionReport:
    lines: int
    words: int
    size: int
    selection_count: int
    characters: int = 0

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.lines, self.words, self.size, self.selection_count)


@dataclass(slots=True)
class DisplayToggles:
    document: bool = True
    selection: bool = True


class WordCountService:
    """Routes open/change/close/config events into a ``StatisticCache``.

    Display toggles only decide whether reports are produced; flipping them
    never touches cached statistics.
    """

    def __init__(
        self,
        config: WordCountConfig | None = None,
        *,
        text_source: TextSource | None = None,
        on_error: Callable[[WordCountError], None] | None = None,
    ) -> None:
        self._config = config or WordCountConfig()
        self.on_error = on_error
        self.cache = StatisticCache(
            self._config.build_rules(),
            self._config.build_encoder(),
            text_source=text_source,
            debug=self._config.debug,
            repair_on_mismatch=self._config.repair_on_mismatch,
            on_error=self._report,
        )
        self.toggles = DisplayToggles(
            document=self._config.default_document_toggle,
            selection=self._config.default_selection_toggle,
        )

    @property
    def config(self) -> WordCountConfig:
        return self._config

    @property
    def count_mode(self) -> CountMode:
        return self._config.count_mode

    def open_document(self, doc_id: DocumentId, text: str) -> Statistic:
        return self.cache.full_update(doc_id, text)

    def change_document(
        self, doc_id: DocumentId, full_text: str, edits: Iterable[TextEdit]
    ) -> Statistic:
        return self.cache.incremental_update(doc_id, full_text, edits)

    def close_document(self, doc_id: DocumentId) -> None:
        self.cache.invalidate(doc_id)

    def save_document(self, doc_id: DocumentId) -> None:
        # Saving does not change the text; the cached entry stays valid.
        del doc_id

    def apply_configuration(self, settings: Mapping[str, Any]) -> bool:
        """Adopt new settings; keep the current ones if they are invalid."""

        try:
            config = WordCountConfig.from_mapping(settings, base=self._config)
            rules = config.build_rules()
            encoder = config.build_encoder()
        except ConfigurationError as exc:
            telemetry.record_event(
                "config.rejected",
                level="warning",
                data={"key": exc.key, "reason": str(exc)},
                logger_name="wc_engine.host",
            )
            self._report(exc)
            return False

        self._config = config
        self.cache.debug = config.debug
        self.cache.repair_on_mismatch = config.repair_on_mismatch
        self.cache.reconfigure(rules, encoder)
        self.toggles = DisplayToggles(
            document=config.default_document_toggle,
            selection=config.default_selection_toggle,
        )
        telemetry.record_event(
            "config.applied",
            data={"count_mode": config.count_mode.value, "debug": config.debug},
            logger_name="wc_engine.host",
        )
        return True

    def document_statistic(
        self, doc_id: DocumentId, text: Optional[str] = None
    ) -> Optional[StatusReport]:
        if not self.toggles.document:
            return None
        stat = self.cache.get_or_create(doc_id, text)
        return StatusReport(
            lines=stat.lines,
            words=stat.words,
            size=stat.size(self._config.byte_mode),
        )

    def selection_statistic(
        self,
        doc_id: DocumentId,
        spans: Sequence[Span],
        text: Optional[str] = None,
    ) -> Optional[SelectionReport]:
        """Sum fresh counts over each ``(start, end)`` span; never cached."""

        if not self.toggles.selection:
            return None
        if text is None:
            stats = (self.cache.range_statistic(doc_id, s, e) for s, e in spans)
        else:
            stats = (self.cache.text_statistic(text, s, e) for s, e in spans)
        total = sum_statistics(stats)
        return SelectionReport(
            lines=total.lines,
            words=total.words,
            size=total.size(self._config.byte_mode),
            selection_count=len(spans),
            characters=total.characters,
        )

    def toggle_document(self) -> bool:
        self.toggles.document = not self.toggles.document
        return self.toggles.document

    def toggle_selection(self) -> bool:
        self.toggles.selection = not self.toggles.selection
        return self.toggles.selection

    def _report(self, error: WordCountError) -> None:
        if self.on_error is not None:
            self.on_error(error)


__all__ = [
    "DisplayToggles",
    "SelectionReport",
    "StatusReport",
    "WordCountService",
]
