"""Value type holding the four counts tracked per text."""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True, slots=True)
class Statistic:
    """Character, byte, word and line counts for a piece of text.

    ``bytes`` stays zero unless the statistic was computed with an encoder.
    Arithmetic returns new instances, so a cached value can be handed out
    without copying.
    """

    characters: int = 0
    bytes: int = 0
    words: int = 0
    lines: int = 0

    @classmethod
    def zero(cls) -> "Statistic":
        return cls()

    def __add__(self, other: "Statistic") -> "Statistic":
        if not isinstance(other, Statistic):
            return NotImplemented
        return Statistic(
            characters=self.characters + other.characters,
            bytes=self.bytes + other.bytes,
            words=self.words + other.words,
            lines=self.lines + other.lines,
        )

    def __sub__(self, other: "Statistic") -> "Statistic":
        if not isinstance(other, Statistic):
            return NotImplemented
        return Statistic(
            characters=self.characters - other.characters,
            bytes=self.bytes - other.bytes,
            words=self.words - other.words,
            lines=self.lines - other.lines,
        )

    def is_negative(self) -> bool:
        return any(getattr(self, f.name) < 0 for f in fields(self))

    def size(self, byte_mode: bool) -> int:
        """Return ``bytes`` in byte mode and ``characters`` otherwise."""

        return self.bytes if byte_mode else self.characters

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


__all__ = ["Statistic"]
