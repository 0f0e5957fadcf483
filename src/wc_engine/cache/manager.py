"""Per-document statistic cache kept current from edit hints."""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, Optional

from wc_engine.errors import ConsistencyError, UnknownDocumentError, WordCountError
from wc_engine.runtime import telemetry
from wc_engine.stats import (
    ByteEncoder,
    ClassificationRules,
    Statistic,
    compute_statistic,
    text_range_statistic,
)

from .edits import TextEdit, normalize_edits
from .state import DocumentState

DocumentId = Hashable
TextSource = Callable[[DocumentId], str]
ErrorReporter = Callable[[WordCountError], None]


class StatisticCache:
    """Owns the mapping from document id to ``DocumentState``.

    Entries are populated by a full count and afterwards patched with one
    local delta per edit. Each delta counts only the edited span plus one
    boundary character on either side, once as it was and once as it is now.
    """

    def __init__(
        self,
        rules: ClassificationRules | None = None,
        encoder: ByteEncoder | None = None,
        *,
        text_source: TextSource | None = None,
        debug: bool = False,
        repair_on_mismatch: bool = True,
        on_error: ErrorReporter | None = None,
        logger_name: str | None = "wc_engine.cache",
    ) -> None:
        self._rules = rules or ClassificationRules.default()
        self._encoder = encoder
        self._entries: Dict[DocumentId, DocumentState] = {}
        self._text_source = text_source
        self._on_error = on_error
        self._logger_name = logger_name
        self.debug = debug
        self.repair_on_mismatch = repair_on_mismatch

    @property
    def rules(self) -> ClassificationRules:
        return self._rules

    @property
    def encoder(self) -> Optional[ByteEncoder]:
        return self._encoder

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def document_ids(self) -> tuple[DocumentId, ...]:
        return tuple(self._entries)

    def previous_text(self, doc_id: DocumentId) -> Optional[str]:
        entry = self._entries.get(doc_id)
        return entry.previous_text if entry is not None else None

    def statistic(self, doc_id: DocumentId) -> Statistic:
        entry = self._entries.get(doc_id)
        if entry is None:
            raise UnknownDocumentError(doc_id)
        return entry.statistic

    def get_or_create(self, doc_id: DocumentId, text: Optional[str] = None) -> Statistic:
        entry = self._entries.get(doc_id)
        if entry is not None:
            return entry.statistic
        if text is None:
            if self._text_source is None:
                raise UnknownDocumentError(doc_id)
            text = self._text_source(doc_id)
        return self._populate(doc_id, text, reason="create").statistic

    def full_update(self, doc_id: DocumentId, full_text: str) -> Statistic:
        return self._populate(doc_id, full_text, reason="full").statistic

    def incremental_update(
        self,
        doc_id: DocumentId,
        full_text: str,
        edits: Iterable[TextEdit],
    ) -> Statistic:
        entry = self._entries.get(doc_id)
        if entry is None:
            return self._populate(doc_id, full_text, reason="create").statistic

        with telemetry.span(
            "cache::incremental_update",
            logger_name=self._logger_name,
            component="cache",
            metadata={"document": doc_id},
        ) as handle:
            previous = entry.previous_text
            batch = normalize_edits(previous, edits)
            handle.add_metadata("edits", len(batch))

            updated = entry.statistic
            for edit in batch:
                updated = updated + self._delta(previous, edit)

            entry.previous_text = full_text
            entry.revision += 1

            if self.debug or updated.is_negative():
                updated = self._self_check(doc_id, full_text, updated)
            entry.statistic = updated
            return updated

    def invalidate(self, doc_id: DocumentId) -> bool:
        removed = self._entries.pop(doc_id, None) is not None
        if removed:
            telemetry.record_event(
                "cache.invalidate",
                level="debug",
                data={"document": doc_id},
                logger_name=self._logger_name,
            )
        return removed

    def invalidate_all(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        telemetry.record_event(
            "cache.invalidate_all",
            level="debug",
            data={"dropped": count},
            logger_name=self._logger_name,
        )
        return count

    def reconfigure(
        self, rules: ClassificationRules, encoder: Optional[ByteEncoder] = None
    ) -> None:
        """Swap rules and encoder; every cached entry becomes stale."""

        self._rules = rules
        self._encoder = encoder
        self.invalidate_all()

    def range_statistic(self, doc_id: DocumentId, start: int, end: int) -> Statistic:
        return text_range_statistic(
            self._current_text(doc_id), start, end, self._rules, self._encoder
        )

    def text_statistic(
        self, text: str, start: Optional[int] = None, end: Optional[int] = None
    ) -> Statistic:
        if start is None and end is None:
            return compute_statistic(text, self._rules, self._encoder)
        return text_range_statistic(
            text,
            0 if start is None else start,
            len(text) if end is None else end,
            self._rules,
            self._encoder,
        )

    def _current_text(self, doc_id: DocumentId) -> str:
        if self._text_source is not None:
            return self._text_source(doc_id)
        entry = self._entries.get(doc_id)
        if entry is None:
            raise UnknownDocumentError(doc_id)
        return entry.previous_text

    def _populate(self, doc_id: DocumentId, text: str, *, reason: str) -> DocumentState:
        with telemetry.span(
            f"cache::{reason}",
            logger_name=self._logger_name,
            component="cache",
            metadata={"document": doc_id, "length": len(text)},
        ):
            entry = self._entries.get(doc_id)
            stat = compute_statistic(text, self._rules, self._encoder)
            if entry is None:
                entry = DocumentState(previous_text=text, statistic=stat)
                self._entries[doc_id] = entry
            else:
                entry.previous_text = text
                entry.statistic = stat
                entry.revision += 1
            return entry

    def _delta(self, previous: str, edit: TextEdit) -> Statistic:
        start = edit.start_offset
        end = edit.end_offset
        before = previous[start - 1] if start > 0 else ""
        after = previous[end] if end < len(previous) else ""
        removed = compute_statistic(
            before + previous[start:end] + after, self._rules, self._encoder
        )
        inserted = compute_statistic(
            before + edit.inserted_text + after, self._rules, self._encoder
        )
        return inserted - removed

    def _self_check(
        self, doc_id: DocumentId, full_text: str, updated: Statistic
    ) -> Statistic:
        fresh = compute_statistic(full_text, self._rules, self._encoder)
        if fresh == updated:
            return updated

        negative = updated.is_negative()
        repair = self.repair_on_mismatch or negative
        reason = (
            f"Incremental word count went negative for {doc_id!r}"
            if negative
            else f"Incremental word count failed for {doc_id!r}"
        )
        self._report(
            ConsistencyError(
                doc_id,
                expected=fresh,
                actual=updated,
                repaired=repair,
                reason=reason,
            )
        )
        return fresh if repair else updated

    def _report(self, error: ConsistencyError) -> None:
        telemetry.record_event(
            "cache.consistency",
            level="error",
            data={
                "document": error.doc_id,
                "expected": error.expected.as_dict(),
                "actual": error.actual.as_dict(),
                "repaired": error.repaired,
            },
            logger_name=self._logger_name,
        )
        if self._on_error is not None:
            self._on_error(error)


__all__ = ["StatisticCache", "DocumentId", "TextSource", "ErrorReporter"]
