"""Unit tests for full-pinyin and initials conversion."""

from __future__ import annotations

import logging
import threading
import time

import pytest

from hanzi_pinyin import convert
from hanzi_pinyin.convert import Transliterator
from hanzi_pinyin.dictionary.repository import PolyphoneDictionary, load_dictionary
from hanzi_pinyin.models import OutputFormat, ReadingChoice, ToneType, VCharType

TABLE = {
    "重": ("zhong", "chong"),
    "庆": ("qing",),
    "银": ("yin",),
    "行": ("xing", "hang"),
    "好": ("hao", "hao"),
    "〇": ("ling",),
}


class FakeLookup:
    """Candidate lookup answering from a fixed table."""

    def __init__(self, table: dict[str, tuple[str, ...]]) -> None:
        self.table = table

    def candidates_for(self, char: str, output_format: OutputFormat) -> tuple[str, ...]:
        output_format.validate()
        return self.table.get(char, ())


def _transliterator(
    dictionary: PolyphoneDictionary | None = None,
    output_format: OutputFormat = OutputFormat(),
) -> Transliterator:
    if dictionary is None:
        dictionary = load_dictionary(["xing:行 行人", "hang:银行", "chong:重庆"])
    return Transliterator(
        dictionary=dictionary,
        lookup=FakeLookup(TABLE),
        output_format=output_format,
    )


def test_empty_input_yields_empty_output() -> None:
    transliterator = _transliterator()

    assert transliterator.full_form("") == ""
    assert transliterator.initials_form("") == ""
    assert transliterator.convert_full("").ok


def test_full_form_resolves_polyphones_from_context() -> None:
    transliterator = _transliterator()

    assert transliterator.full_form("重庆") == "chongqing"
    assert transliterator.full_form("银行") == "yinhang"
    # 人 is missing from the lookup table and is copied as is.
    assert transliterator.full_form("行人") == "xing人"
    assert transliterator.full_form("行") == "xing"


def test_initials_form_uses_first_letter_of_resolved_reading() -> None:
    transliterator = _transliterator()

    assert transliterator.initials_form("重庆") == "cq"
    assert transliterator.initials_form("银行") == "yh"


def test_non_chinese_characters_pass_through_unchanged() -> None:
    transliterator = _transliterator()

    assert transliterator.full_form("abc 123!") == "abc 123!"
    assert transliterator.initials_form("abc 123!") == "abc 123!"
    assert transliterator.full_form("去重庆, ok") == "去chongqing, ok"
    assert transliterator.initials_form("去重庆, ok") == "去cq, ok"


def test_full_form_only_converts_common_ideograph_range() -> None:
    """Characters outside U+4E00..U+9FA5 keep their form even with candidates."""

    transliterator = _transliterator()

    assert transliterator.full_form("〇") == "〇"
    assert transliterator.initials_form("〇") == "l"


def test_duplicate_candidates_short_circuit() -> None:
    transliterator = _transliterator(load_dictionary(["hao:好人"]))

    assert transliterator.full_form("好人") == "hao人"


def test_empty_dictionary_falls_back_to_first_candidate() -> None:
    transliterator = _transliterator(PolyphoneDictionary())

    assert transliterator.full_form("重庆银行") == "zhongqingyinxing"


def test_format_combination_error_aborts_whole_call(caplog: pytest.LogCaptureFixture) -> None:
    transliterator = _transliterator(
        output_format=OutputFormat(tone=ToneType.WITH_TONE_MARK, v_char=VCharType.WITH_V)
    )

    with caplog.at_level(logging.ERROR, logger="hanzi_pinyin.convert"):
        result = transliterator.convert_full("a重庆")

    assert not result.ok
    assert result.text == ""
    assert result.error is not None and "Tone marks require" in result.error
    assert transliterator.full_form("重庆") == ""
    assert transliterator.initials_form("重庆") == ""
    assert "failed" in caplog.text


def test_format_error_does_not_affect_pass_through_only_text() -> None:
    transliterator = _transliterator(
        output_format=OutputFormat(tone=ToneType.WITH_TONE_MARK, v_char=VCharType.WITH_V)
    )

    # No character reaches the lookup, so nothing can fail.
    assert transliterator.full_form("abc") == "abc"


def test_initial_of_is_context_free() -> None:
    transliterator = _transliterator()

    assert transliterator.initial_of("重") == "z"
    assert transliterator.initial_of("a") == "a"


def test_explain_reports_rule_per_character() -> None:
    transliterator = _transliterator()

    assert transliterator.explain("银行a") == [
        ("银", ReadingChoice("yin", "single")),
        ("行", ReadingChoice("hang", "backward-1")),
        ("a", None),
    ]


def test_explain_with_initials_classifies_like_initials_form() -> None:
    transliterator = _transliterator()

    # 〇 lies outside the common ideograph range but has a reading.
    assert transliterator.explain("〇") == [("〇", None)]
    assert transliterator.explain("〇", initials=True) == [("〇", ReadingChoice("ling", "single"))]
    assert transliterator.initials_form("〇") == "l"


def test_default_transliterator_is_built_once_under_concurrent_first_access(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    built = _transliterator()
    calls: list[int] = []

    def slow_build() -> Transliterator:
        calls.append(1)
        time.sleep(0.05)
        return built

    monkeypatch.setattr(convert, "_default_transliterator", None)
    monkeypatch.setattr(convert, "Transliterator", slow_build)

    barrier = threading.Barrier(8)
    results: list[Transliterator] = []

    def worker() -> None:
        barrier.wait()
        results.append(convert.default_transliterator())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(result is built for result in results)
