"""Unit tests for polyphone dictionary line parsing."""

from __future__ import annotations

import logging

import pytest

from hanzi_pinyin.dictionary.parser import parse_dictionary_line, parse_dictionary_lines
from hanzi_pinyin.models import DictionaryEntry


def test_parse_dictionary_lines_ignores_comments_and_blank_lines() -> None:
    entries, skipped = parse_dictionary_lines(
        iter(["# header\n", "\n", "   \n", "  # indented comment\n", "hang:银行 行业\n"])
    )

    assert entries == [DictionaryEntry(reading="hang", words=("银行", "行业"))]
    assert skipped == []


def test_parse_dictionary_lines_keeps_word_order_and_collapses_spaces() -> None:
    entries, _ = parse_dictionary_lines(["chong:重庆  重复\t重新\r\n"])

    assert entries[0].words == ("重庆", "重复", "重新")


def test_parse_dictionary_line_reports_reason_for_malformed_lines() -> None:
    assert parse_dictionary_line("hang 银行") == "missing_colon"
    assert parse_dictionary_line(":银行") == "empty_reading"
    assert parse_dictionary_line("hang:") == "empty_word_list"
    assert parse_dictionary_line("hang:   ") == "empty_word_list"
    assert parse_dictionary_line("行:银行") == "invalid_reading:行"


def test_parse_dictionary_lines_skips_malformed_lines_and_logs(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """One bad line must not abort the load of the remaining lines."""

    lines = ["xing:行 行人", "no colon here", "hang:", "hang:银行"]

    with caplog.at_level(logging.WARNING, logger="hanzi_pinyin.dictionary.parser"):
        entries, skipped = parse_dictionary_lines(lines)

    assert [entry.reading for entry in entries] == ["xing", "hang"]
    assert [(item.line_number, item.reason) for item in skipped] == [
        (2, "missing_colon"),
        (3, "empty_word_list"),
    ]
    assert skipped[0].text == "no colon here"
    assert "Skipping malformed dictionary line 2" in caplog.text


def test_parse_dictionary_lines_normalizes_readings() -> None:
    entries, skipped = parse_dictionary_lines(["lü:绿色", "Zhòng:重要", "shuai3:率领"])

    assert skipped == []
    assert [entry.reading for entry in entries] == ["lv", "zhong", "shuai"]


def test_parse_dictionary_line_splits_on_first_colon_only() -> None:
    assert parse_dictionary_line("lu:4:率领") == ("lu", ("4:率领",))


def test_parse_dictionary_lines_later_reading_replaces_earlier(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING):
        entries, _ = parse_dictionary_lines(["hang:银行", "xing:行人", "hang:行业"])

    assert [(entry.reading, entry.words) for entry in entries] == [
        ("hang", ("行业",)),
        ("xing", ("行人",)),
    ]
    assert "redefines reading 'hang'" in caplog.text


def test_dictionary_entry_requires_words() -> None:
    with pytest.raises(ValueError, match="has no words"):
        DictionaryEntry(reading="hang", words=())
