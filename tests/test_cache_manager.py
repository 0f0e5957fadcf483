from __future__ import annotations

import random
from typing import List

import pytest

from wc_engine.cache import StatisticCache, TextEdit, apply_edits
from wc_engine.errors import (
    ConsistencyError,
    EditValidationError,
    RangeValidationError,
    UnknownDocumentError,
    WordCountError,
)
from wc_engine.stats import ClassificationRules, Statistic, compute_statistic, make_encoder

SAMPLE = "The quick  brown\nfox, jumps!\n\n over\tthe lazy dog "


def make_cache(**kwargs) -> StatisticCache:
    return StatisticCache(ClassificationRules.default(), **kwargs)


def full_count(text: str, encoder=None) -> Statistic:
    return compute_statistic(text, ClassificationRules.default(), encoder)


def random_batch(rng: random.Random, text: str, alphabet: str) -> List[TextEdit]:
    count = rng.randint(1, 3)
    points = sorted(rng.randint(0, len(text)) for _ in range(count * 2))
    edits = []
    for start, end in zip(points[::2], points[1::2]):
        inserted = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 4)))
        edits.append(TextEdit(start, end - start, inserted))
    rng.shuffle(edits)
    return edits


def test_get_or_create_computes_once() -> None:
    calls: List[str] = []

    def source(doc_id: str) -> str:
        calls.append(doc_id)
        return "hello world"

    cache = make_cache(text_source=source)

    first = cache.get_or_create("doc")
    second = cache.get_or_create("doc")

    assert first == second == Statistic(characters=11, words=2)
    assert calls == ["doc"]
    assert "doc" in cache


def test_get_or_create_prefers_explicit_text() -> None:
    cache = make_cache()

    stat = cache.get_or_create("doc", "a  b\n")

    assert stat == Statistic(characters=5, words=2, lines=1)
    assert cache.previous_text("doc") == "a  b\n"


def test_get_or_create_without_text_raises() -> None:
    cache = make_cache()

    with pytest.raises(UnknownDocumentError):
        cache.get_or_create("missing")
    with pytest.raises(KeyError):
        cache.statistic("missing")


def test_removing_space_merges_words() -> None:
    cache = make_cache()
    cache.full_update("doc", "foo bar")

    stat = cache.incremental_update("doc", "foobar", [TextEdit(3, 1, "")])

    assert stat.words == 1
    assert stat.characters == 6


def test_inserting_space_splits_word() -> None:
    cache = make_cache()
    cache.full_update("doc", "foobar")

    stat = cache.incremental_update("doc", "foo bar", [TextEdit.insert(3, " ")])

    assert stat.words == 2
    assert stat.characters == 7
    assert cache.previous_text("doc") == "foo bar"


def test_edits_at_document_edges() -> None:
    cache = make_cache()
    cache.full_update("doc", "middle")

    cache.incremental_update("doc", "start middle", [TextEdit.insert(0, "start ")])
    stat = cache.incremental_update(
        "doc", "start middle end\n", [TextEdit.insert(12, " end\n")]
    )

    assert stat == full_count("start middle end\n")


def test_incremental_update_on_absent_document_is_full() -> None:
    cache = make_cache()

    stat = cache.incremental_update("doc", "one two three", [TextEdit(0, 5, "zzz")])

    assert stat == full_count("one two three")


def test_full_update_is_idempotent() -> None:
    cache = make_cache()

    once = cache.full_update("doc", SAMPLE)
    twice = cache.full_update("doc", SAMPLE)

    assert once == twice == full_count(SAMPLE)


def test_split_at_every_boundary_matches_full_count() -> None:
    expected = full_count(SAMPLE)
    for index in range(len(SAMPLE) + 1):
        cache = make_cache()
        cache.full_update("doc", SAMPLE[:index])

        stat = cache.incremental_update(
            "doc", SAMPLE, [TextEdit.insert(index, SAMPLE[index:])]
        )

        assert stat == expected, index


def test_delete_tail_at_every_boundary() -> None:
    for index in range(len(SAMPLE) + 1):
        cache = make_cache()
        cache.full_update("doc", SAMPLE)

        stat = cache.incremental_update(
            "doc", SAMPLE[:index], [TextEdit.delete(index, len(SAMPLE))]
        )

        assert stat == full_count(SAMPLE[:index]), index


@pytest.mark.parametrize("seed", [1, 7, 42, 1234])
def test_random_edit_stream_matches_full_count(seed: int) -> None:
    rng = random.Random(seed)
    errors: List[WordCountError] = []
    cache = make_cache(debug=True, on_error=errors.append)
    text = "seed text\nwith some words"
    cache.full_update("doc", text)

    for _ in range(150):
        edits = random_batch(rng, text, "ab \n\t.")
        text = apply_edits(text, edits)
        stat = cache.incremental_update("doc", text, edits)
        assert stat == full_count(text)

    assert errors == []


def test_random_edit_stream_in_byte_mode() -> None:
    rng = random.Random(99)
    encoder = make_encoder("utf-8")
    cache = make_cache(encoder=encoder)
    text = "grüße aus köln"
    cache.full_update("doc", text)

    for _ in range(100):
        edits = random_batch(rng, text, "aé 😀\n")
        text = apply_edits(text, edits)
        cache.incremental_update("doc", text, edits)

    assert cache.statistic("doc") == full_count(text, encoder)


def test_touching_edits_are_applied_together() -> None:
    errors: List[WordCountError] = []
    cache = make_cache(debug=True, on_error=errors.append)
    cache.full_update("doc", "ab cd")
    edits = [TextEdit(2, 1, "x"), TextEdit(0, 2, "  ")]

    stat = cache.incremental_update("doc", apply_edits("ab cd", edits), edits)

    assert apply_edits("ab cd", edits) == "  xcd"
    assert stat.words == 1
    assert errors == []


def test_overlapping_edits_are_rejected() -> None:
    cache = make_cache()
    cache.full_update("doc", "hello world")

    with pytest.raises(EditValidationError):
        cache.incremental_update(
            "doc", "ignored", [TextEdit(0, 5, "x"), TextEdit(3, 2, "y")]
        )

    assert cache.previous_text("doc") == "hello world"
    assert cache.statistic("doc") == full_count("hello world")


def test_out_of_range_edit_is_rejected() -> None:
    cache = make_cache()
    cache.full_update("doc", "short")

    with pytest.raises(RangeValidationError):
        cache.incremental_update("doc", "short!", [TextEdit(4, 3, "")])
    with pytest.raises(EditValidationError):
        cache.incremental_update("doc", "short!", [TextEdit(2, -1, "")])

    assert cache.previous_text("doc") == "short"


def test_zero_length_edit_changes_nothing() -> None:
    cache = make_cache()
    cache.full_update("doc", "a b")

    stat = cache.incremental_update("doc", "a b", [TextEdit(1, 0, "")])

    assert stat == full_count("a b")


def test_self_check_repairs_drift() -> None:
    errors: List[WordCountError] = []
    cache = make_cache(debug=True, on_error=errors.append)
    cache.full_update("doc", "foo bar")

    stat = cache.incremental_update(
        "doc", "completely different text here", [TextEdit.insert(0, "x")]
    )

    assert stat == full_count("completely different text here")
    assert len(errors) == 1
    error = errors[0]
    assert isinstance(error, ConsistencyError)
    assert error.repaired is True
    assert error.doc_id == "doc"
    assert error.actual == Statistic(characters=8, words=2)


def test_self_check_can_keep_drifted_value() -> None:
    errors: List[WordCountError] = []
    cache = make_cache(debug=True, repair_on_mismatch=False, on_error=errors.append)
    cache.full_update("doc", "foo bar")

    stat = cache.incremental_update(
        "doc", "completely different text here", [TextEdit.insert(0, "x")]
    )

    assert stat == Statistic(characters=8, words=2)
    assert isinstance(errors[0], ConsistencyError)
    assert errors[0].repaired is False


def test_negative_result_is_always_repaired() -> None:
    errors: List[WordCountError] = []
    cache = make_cache(repair_on_mismatch=False, on_error=errors.append)
    cache.full_update("doc", "")
    cache.incremental_update("doc", "hello world", [])

    stat = cache.incremental_update("doc", "", [TextEdit.delete(0, 11)])

    assert stat == Statistic.zero()
    assert len(errors) == 1
    assert "negative" in str(errors[0])


def test_invalidate_and_invalidate_all() -> None:
    cache = make_cache()
    cache.full_update("a", "one")
    cache.full_update("b", "two words")

    assert cache.invalidate("a") is True
    assert cache.invalidate("a") is False
    assert cache.document_ids() == ("b",)

    assert cache.invalidate_all() == 1
    assert len(cache) == 0


def test_reconfigure_swaps_rules_and_drops_entries() -> None:
    cache = make_cache()
    cache.full_update("doc", "a,b c")
    assert cache.statistic("doc").words == 2

    cache.reconfigure(ClassificationRules.from_patterns(r"[\s,]", r"\n"), make_encoder())

    assert "doc" not in cache
    stat = cache.get_or_create("doc", "a,b c")
    assert stat.words == 3
    assert stat.bytes == 5


def test_range_statistic_uses_cached_text() -> None:
    cache = make_cache()
    cache.full_update("doc", "one two\nthree")

    stat = cache.range_statistic("doc", 4, 13)

    assert stat == Statistic(characters=9, words=2, lines=1)
    with pytest.raises(RangeValidationError):
        cache.range_statistic("doc", 4, 14)
    with pytest.raises(UnknownDocumentError):
        cache.range_statistic("other", 0, 0)


def test_range_statistic_reads_text_source() -> None:
    texts = {"doc": "alpha beta gamma"}
    cache = make_cache(text_source=texts.__getitem__)

    assert cache.range_statistic("doc", 6, 10).words == 1
    assert "doc" not in cache


def test_text_statistic_on_raw_text() -> None:
    cache = make_cache()

    assert cache.text_statistic("a b c").words == 3
    assert cache.text_statistic("a b c", 2).words == 2
    assert cache.text_statistic("a b c", end=1).characters == 1
