from __future__ import annotations

import pytest

from wc_engine.config import CountMode, WordCountConfig
from wc_engine.errors import ConfigurationError
from wc_engine.stats import compute_statistic


def test_defaults_use_character_mode() -> None:
    config = WordCountConfig()

    assert config.count_mode is CountMode.CHARACTER
    assert config.byte_mode is False
    assert config.build_encoder() is None
    assert compute_statistic("a b\n", config.build_rules()).words == 2


def test_from_mapping_accepts_editor_setting_names() -> None:
    config = WordCountConfig.from_mapping(
        {
            "whiteSpace": r"[\s,]",
            "newLine": r"[\r\n]",
            "characterCount": "byte",
            "debug": True,
            "defaultSelectionToggle": False,
        }
    )

    assert config.white_space == r"[\s,]"
    assert config.count_mode is CountMode.BYTE
    assert config.debug is True
    assert config.default_selection_toggle is False
    encoder = config.build_encoder()
    assert encoder is not None
    assert len(encoder("é")) == 2


@pytest.mark.parametrize(
    "settings",
    [
        {"newLine": r"\n"},
        {"whiteSpace": r"\s"},
        {"whiteSpace": None, "newLine": r"\n"},
    ],
)
def test_from_mapping_requires_both_patterns(settings: dict) -> None:
    with pytest.raises(ConfigurationError) as info:
        WordCountConfig.from_mapping(settings)

    assert "not defined" in str(info.value)


def test_invalid_pattern_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as info:
        WordCountConfig.from_mapping({"whiteSpace": "(", "newLine": r"\n"})

    assert info.value.key == "white space"


def test_unknown_count_mode() -> None:
    with pytest.raises(ConfigurationError):
        WordCountConfig.from_mapping(
            {"whiteSpace": r"\s", "newLine": r"\n", "characterCount": "glyph"}
        )


def test_unknown_encoding_in_byte_mode() -> None:
    with pytest.raises(ConfigurationError):
        WordCountConfig.from_mapping(
            {
                "whiteSpace": r"\s",
                "newLine": r"\n",
                "characterCount": "byte",
                "encoding": "no-such-codec",
            }
        )


def test_boolean_settings_are_coerced() -> None:
    config = WordCountConfig.from_mapping(
        {"white_space": r"\s", "new_line": r"\n", "debug": "yes", "repair_on_mismatch": "0"}
    )

    assert config.debug is True
    assert config.repair_on_mismatch is False

    with pytest.raises(ConfigurationError):
        WordCountConfig.from_mapping({"white_space": r"\s", "new_line": r"\n", "debug": 3})


def test_from_mapping_keeps_base_values() -> None:
    base = WordCountConfig(count_mode="byte", debug=True)

    config = WordCountConfig.from_mapping(
        {"whiteSpace": r" ", "newLine": r"\n"}, base=base
    )

    assert config.white_space == " "
    assert config.count_mode is CountMode.BYTE
    assert config.debug is True


def test_from_env() -> None:
    config = WordCountConfig.from_env(
        {
            "WC_ENGINE_WHITE_SPACE": r"[ \t]",
            "WC_ENGINE_CHARACTER_COUNT": "byte",
            "WC_ENGINE_DEBUG": "true",
        }
    )

    assert config.white_space == r"[ \t]"
    assert config.new_line == r"\n"
    assert config.byte_mode is True
    assert config.debug is True
