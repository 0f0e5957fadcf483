"""Host settings for the word-count engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping, Optional

from wc_engine.errors import ConfigurationError
from wc_engine.stats import (
    DEFAULT_NEW_LINE,
    DEFAULT_WHITE_SPACE,
    ByteEncoder,
    ClassificationRules,
    make_encoder,
)

ENV_PREFIX = "WC_ENGINE_"


class CountMode(str, Enum):
    """What the ``size`` column reports."""

    CHARACTER = "character"
    BYTE = "byte"


# Setting name -> (dataclass field, accepted aliases)
_KEYS: dict[str, tuple[str, ...]] = {
    "white_space": ("whiteSpace", "white_space"),
    "new_line": ("newLine", "new_line"),
    "count_mode": ("characterCount", "character_count", "count_mode"),
    "encoding": ("encoding",),
    "debug": ("debug",),
    "repair_on_mismatch": ("repairOnMismatch", "repair_on_mismatch"),
    "default_document_toggle": ("defaultDocumentToggle", "default_document_toggle"),
    "default_selection_toggle": ("defaultSelectionToggle", "default_selection_toggle"),
}

_REQUIRED = ("white_space", "new_line")


@dataclass(frozen=True)
class WordCountConfig:
    white_space: str = DEFAULT_WHITE_SPACE
    new_line: str = DEFAULT_NEW_LINE
    count_mode: CountMode = CountMode.CHARACTER
    encoding: str = "utf-8"
    debug: bool = False
    repair_on_mismatch: bool = True
    default_document_toggle: bool = True
    default_selection_toggle: bool = True

    def __post_init__(self) -> None:
        try:
            mode = CountMode(self.count_mode)
        except ValueError as exc:
            raise ConfigurationError(
                f"Unexpected character count mode '{self.count_mode}'",
                key="characterCount",
            ) from exc
        object.__setattr__(self, "count_mode", mode)

    @property
    def byte_mode(self) -> bool:
        return self.count_mode is CountMode.BYTE

    def build_rules(self) -> ClassificationRules:
        return ClassificationRules.from_patterns(self.white_space, self.new_line)

    def build_encoder(self) -> Optional[ByteEncoder]:
        if not self.byte_mode:
            return None
        return make_encoder(self.encoding)

    @classmethod
    def from_mapping(
        cls,
        settings: Mapping[str, Any],
        *,
        base: Optional["WordCountConfig"] = None,
    ) -> "WordCountConfig":
        """Build a config from host settings.

        Keys may use the camelCase names of the editor settings or the field
        names. The two patterns are required; anything else missing falls
        back to ``base`` (or the defaults). Patterns and the encoding are
        compiled here so bad values surface before anything is swapped.
        """

        values: dict[str, Any] = {}
        for field_name, aliases in _KEYS.items():
            for alias in aliases:
                if alias in settings:
                    values[field_name] = settings[alias]
                    break

        for field_name in _REQUIRED:
            if values.get(field_name) is None:
                label = "white space" if field_name == "white_space" else "newline"
                raise ConfigurationError(
                    f"Regexp for {label} is not defined.", key=_KEYS[field_name][0]
                )

        for flag in (
            "debug",
            "repair_on_mismatch",
            "default_document_toggle",
            "default_selection_toggle",
        ):
            if flag in values:
                values[flag] = _coerce_bool(values[flag], _KEYS[flag][0])

        config = replace(base, **values) if base is not None else cls(**values)
        config.build_rules()
        config.build_encoder()
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WordCountConfig":
        env = os.environ if environ is None else environ
        settings: dict[str, Any] = {
            "white_space": env.get(f"{ENV_PREFIX}WHITE_SPACE", DEFAULT_WHITE_SPACE),
            "new_line": env.get(f"{ENV_PREFIX}NEW_LINE", DEFAULT_NEW_LINE),
        }
        for name, field_name in (
            ("CHARACTER_COUNT", "count_mode"),
            ("ENCODING", "encoding"),
            ("DEBUG", "debug"),
            ("REPAIR_ON_MISMATCH", "repair_on_mismatch"),
        ):
            raw = env.get(f"{ENV_PREFIX}{name}")
            if raw is not None:
                settings[field_name] = raw
        return cls.from_mapping(settings)


def _coerce_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off", ""}:
            return False
    raise ConfigurationError(f"Setting '{key}' expects a boolean, got {value!r}", key=key)


__all__ = ["CountMode", "WordCountConfig"]
