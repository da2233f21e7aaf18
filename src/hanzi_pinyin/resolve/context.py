"""Context-window disambiguation of polyphonic characters.

For a character at position ``i`` with several candidate readings, each
candidate's dictionary words are compared against substrings around ``i``.
Windows are tried in this order, and the first exact match wins:

1. ``forward-2``   ``text[i:i+3]``  (字xx)
2. ``forward-1``   ``text[i:i+2]``  (字x)
3. ``backward-2``  ``text[i-2:i+1]`` (xx字)
4. ``backward-1``  ``text[i-1:i+1]`` (x字)
5. ``around``      ``text[i-1:i+2]`` (x字x)

A candidate whose words contain the bare character is kept as the default
when no candidate matches a window. Without a default, the first candidate is
used.
"""

from __future__ import annotations

import logging
from typing import Sequence

from hanzi_pinyin.dictionary.repository import PolyphoneDictionary
from hanzi_pinyin.models import ReadingChoice
from hanzi_pinyin.resolve.candidates import fast_path
from hanzi_pinyin.text import canonical_reading

logger = logging.getLogger(__name__)

# (rule, start offset, end offset) relative to the character index.
WINDOWS: tuple[tuple[str, int, int], ...] = (
    ("forward-2", 0, 3),
    ("forward-1", 0, 2),
    ("backward-2", -2, 1),
    ("backward-1", -1, 1),
    ("around", -1, 2),
)


def _window_match(
    text: str,
    index: int,
    reading: str,
    dictionary: PolyphoneDictionary,
) -> str | None:
    """Return the rule of the first window around ``index`` listed under ``reading``."""

    length = len(text)
    for rule, start_offset, end_offset in WINDOWS:
        start = index + start_offset
        end = index + end_offset
        if start < 0 or end > length:
            continue
        if dictionary.contains(reading, text[start:end]):
            return rule
    return None


def choose_reading(
    text: str,
    index: int,
    candidates: Sequence[str],
    dictionary: PolyphoneDictionary,
) -> ReadingChoice:
    """Select the reading of ``text[index]`` from its candidates.

    Args:
        text: Full input string the character appears in.
        index: Position of the character in ``text``.
        candidates: Candidate readings in the lookup's priority order.
        dictionary: Polyphone dictionary keyed by canonical reading.

    Returns:
        The chosen reading, exactly as it appears in ``candidates``, and the
        rule that selected it.

    Raises:
        ValueError: If ``candidates`` is empty or ``index`` is out of range.
    """

    if not candidates:
        raise ValueError(f"No candidate readings for position {index} in '{text}'.")
    if not 0 <= index < len(text):
        raise ValueError(f"Index {index} is outside '{text}'.")

    quick = fast_path(candidates)
    if quick is not None:
        return quick

    default: str | None = None
    char = text[index]
    for reading in candidates:
        key = canonical_reading(reading)
        if not dictionary.lookup(key):
            continue

        rule = _window_match(text, index, key, dictionary)
        if rule is not None:
            logger.debug("'%s' at %d in '%s' -> %s (%s)", char, index, text, reading, rule)
            return ReadingChoice(reading=reading, rule=rule)

        if dictionary.contains(key, char):
            default = reading

    if default is not None:
        return ReadingChoice(reading=default, rule="default")
    return ReadingChoice(reading=candidates[0], rule="first")


def resolve(
    text: str,
    index: int,
    candidates: Sequence[str],
    dictionary: PolyphoneDictionary,
) -> str:
    """Return only the reading selected by :func:`choose_reading`."""

    return choose_reading(text, index, candidates, dictionary).reading
