"""Parsing utilities for ``reading:word word`` polyphone dictionary files."""

from __future__ import annotations

import logging
from typing import Iterable

from hanzi_pinyin.models import DictionaryEntry, MalformedLine
from hanzi_pinyin.text import CANONICAL_READING_RE, canonical_reading

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"
READING_SEPARATOR = ":"


def parse_dictionary_line(line: str) -> tuple[str, tuple[str, ...]] | str:
    """Parse one non-comment dictionary line.

    Args:
        line: Raw line such as ``chang:长城 长江``.

    Returns:
        ``(reading, words)`` on success, otherwise a short reason string
        describing why the line is malformed.
    """

    reading_field, separator, words_field = line.partition(READING_SEPARATOR)
    if not separator:
        return "missing_colon"

    reading = canonical_reading(reading_field)
    if not reading:
        return "empty_reading"
    if not CANONICAL_READING_RE.fullmatch(reading):
        return f"invalid_reading:{reading_field.strip()}"

    words = tuple(word for word in words_field.split() if word)
    if not words:
        return "empty_word_list"
    return reading, words


def parse_dictionary_lines(
    lines: Iterable[str],
) -> tuple[list[DictionaryEntry], list[MalformedLine]]:
    """Parse dictionary lines into entries, skipping malformed ones.

    Blank lines and lines starting with ``#`` are ignored. Each malformed line
    is logged and reported instead of aborting the whole load. When a reading
    appears twice, the later line replaces the earlier one.

    Args:
        lines: Iterable of raw dictionary lines.

    Returns:
        Tuple ``(entries, skipped)`` with entries in first-seen reading order.
    """

    entries: dict[str, DictionaryEntry] = {}
    skipped: list[MalformedLine] = []

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith(COMMENT_PREFIX):
            continue

        parsed = parse_dictionary_line(line)
        if isinstance(parsed, str):
            logger.warning("Skipping malformed dictionary line %d (%s): %r", line_number, parsed, line)
            skipped.append(MalformedLine(line_number=line_number, text=line, reason=parsed))
            continue

        reading, words = parsed
        if reading in entries:
            logger.warning(
                "Dictionary line %d redefines reading '%s'; earlier words are replaced.",
                line_number,
                reading,
            )
        entries[reading] = DictionaryEntry(reading=reading, words=words)

    return list(entries.values()), skipped
