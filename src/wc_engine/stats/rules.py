"""Classification predicates and byte encoders used by the statistic engine."""

from __future__ import annotations

import codecs
import re
from dataclasses import dataclass
from functools import lru_cache, partial
from typing import Callable

from wc_engine.errors import ConfigurationError

DEFAULT_WHITE_SPACE = r"\s"
DEFAULT_NEW_LINE = r"\n"

CharPredicate = Callable[[str], bool]
ByteEncoder = Callable[[str], bytes]


def _compile(pattern: str | None, key: str) -> re.Pattern[str]:
    if pattern is None:
        raise ConfigurationError(f"Regexp for {key} is not defined.", key=key)
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigurationError(
            f"Regexp for {key} is invalid: {exc}", key=key
        ) from exc


def pattern_predicate(pattern: re.Pattern[str]) -> CharPredicate:
    """Predicate true when ``pattern`` matches anywhere in the character."""

    @lru_cache(maxsize=4096)
    def predicate(ch: str) -> bool:
        return pattern.search(ch) is not None

    return predicate


@dataclass(frozen=True, slots=True)
class ClassificationRules:
    """Pair of per-character predicates deciding word and line boundaries."""

    is_whitespace: CharPredicate
    is_newline: CharPredicate
    white_space_pattern: str | None = None
    new_line_pattern: str | None = None

    @classmethod
    def from_patterns(
        cls,
        white_space: str | None = DEFAULT_WHITE_SPACE,
        new_line: str | None = DEFAULT_NEW_LINE,
    ) -> "ClassificationRules":
        space_re = _compile(white_space, "white space")
        line_re = _compile(new_line, "newline")
        return cls(
            is_whitespace=pattern_predicate(space_re),
            is_newline=pattern_predicate(line_re),
            white_space_pattern=white_space,
            new_line_pattern=new_line,
        )

    @classmethod
    def default(cls) -> "ClassificationRules":
        return cls.from_patterns()


def make_encoder(encoding: str = "utf-8") -> ByteEncoder:
    """Return a callable encoding whole strings with ``encoding``.

    Lone surrogates are passed through for UTF codecs so that any string a
    host hands over can be measured.
    """

    try:
        name = codecs.lookup(encoding).name
    except LookupError as exc:
        raise ConfigurationError(
            f"Unknown encoding '{encoding}'", key="encoding"
        ) from exc
    errors = "surrogatepass" if name.startswith("utf") else "replace"
    return partial(str.encode, encoding=name, errors=errors)


__all__ = [
    "ByteEncoder",
    "CharPredicate",
    "ClassificationRules",
    "DEFAULT_NEW_LINE",
    "DEFAULT_WHITE_SPACE",
    "make_encoder",
    "pattern_predicate",
]
