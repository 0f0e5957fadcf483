"""Per-document cache entry."""

from __future__ import annotations

from dataclasses import dataclass, field

from wc_engine.stats import Statistic


@dataclass(slots=True)
class DocumentState:
    """Text as of the last synchronization plus the statistic matching it."""

    previous_text: str = ""
    statistic: Statistic = field(default_factory=Statistic.zero)
    revision: int = 0
