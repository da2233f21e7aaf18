"""Top-level conversion of Chinese text to full pinyin or pinyin initials."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from hanzi_pinyin.dictionary.repository import PolyphoneDictionary, default_dictionary
from hanzi_pinyin.errors import FormatCombinationError
from hanzi_pinyin.models import CANONICAL_FORMAT, ConversionResult, OutputFormat, ReadingChoice
from hanzi_pinyin.resolve.candidates import CandidateLookup, CandidateResolver
from hanzi_pinyin.resolve.context import choose_reading
from hanzi_pinyin.text import is_chinese_sequence

logger = logging.getLogger(__name__)


def _has_any_form(char: str) -> bool:
    """Initials have no ideograph range check; the lookup decides."""

    return True


class Transliterator:
    """Convert strings to pinyin, resolving polyphones from context.

    The dictionary and lookup are injected so callers can share one loaded
    dictionary or substitute a fake lookup in tests. Instances hold no mutable
    state and can be used from several threads.

    Args:
        dictionary: Polyphone dictionary; the bundled one when ``None``.
        lookup: Candidate lookup; pypinyin when ``None``.
        output_format: Formatting applied to every reading.
    """

    def __init__(
        self,
        dictionary: PolyphoneDictionary | None = None,
        lookup: CandidateLookup | None = None,
        output_format: OutputFormat = CANONICAL_FORMAT,
    ) -> None:
        self.dictionary = dictionary if dictionary is not None else default_dictionary()
        self.resolver = CandidateResolver(lookup=lookup, output_format=output_format)

    def _choose(self, text: str, index: int, candidates: tuple[str, ...]) -> ReadingChoice:
        return choose_reading(text, index, candidates, self.dictionary)

    def _convert(
        self,
        text: str,
        transliterable: Callable[[str], bool],
        render: Callable[[str], str],
        label: str,
    ) -> ConversionResult:
        parts: list[str] = []
        try:
            for index, char in enumerate(text):
                candidates = self.resolver.candidates(char) if transliterable(char) else ()
                if not candidates:
                    parts.append(char)
                    continue
                parts.append(render(self._choose(text, index, candidates).reading))
        except FormatCombinationError as exc:
            logger.error("Converting %r to %s failed: %s", text, label, exc)
            return ConversionResult(text="", ok=False, error=str(exc))
        return ConversionResult(text="".join(parts))

    def convert_full(self, text: str) -> ConversionResult:
        """Convert every Hanzi in ``text`` to its full reading.

        Only characters in the common ideograph range are converted; all other
        characters are copied unchanged.
        """

        return self._convert(text, is_chinese_sequence, lambda reading: reading, "full pinyin")

    def convert_initials(self, text: str) -> ConversionResult:
        """Convert every character with a reading to the reading's first letter.

        Characters without candidates are copied unchanged.
        """

        return self._convert(text, _has_any_form, lambda reading: reading[0], "pinyin initials")

    def full_form(self, text: str) -> str:
        """Return the full pinyin of ``text``, or ``""`` if conversion failed."""

        return self.convert_full(text).text

    def initials_form(self, text: str) -> str:
        """Return the pinyin initials of ``text``, or ``""`` if conversion failed."""

        return self.convert_initials(text).text

    def initial_of(self, char: str) -> str:
        """Return the initial of ``char`` without context.

        A single character carries no context, so polyphones always take
        their most common reading. Pass a word to :meth:`initials_form` when
        the reading matters.
        """

        try:
            return self.resolver.initial_of(char)
        except FormatCombinationError as exc:
            logger.error("Reading initial of %r failed: %s", char, exc)
            return ""

    def explain(
        self, text: str, initials: bool = False
    ) -> list[tuple[str, ReadingChoice | None]]:
        """Return each character of ``text`` with the choice made for it.

        Characters that are passed through are paired with ``None``. With
        ``initials`` set, characters are classified as in
        :meth:`convert_initials`, otherwise as in :meth:`convert_full`.

        Raises:
            FormatCombinationError: If the output format cannot be rendered.
        """

        transliterable = _has_any_form if initials else is_chinese_sequence
        explained: list[tuple[str, ReadingChoice | None]] = []
        for index, char in enumerate(text):
            candidates = self.resolver.candidates(char) if transliterable(char) else ()
            choice = self._choose(text, index, candidates) if candidates else None
            explained.append((char, choice))
        return explained


_default_lock = threading.Lock()
_default_transliterator: Transliterator | None = None


def default_transliterator() -> Transliterator:
    """Return the shared transliterator built on the bundled dictionary."""

    global _default_transliterator
    if _default_transliterator is None:
        with _default_lock:
            if _default_transliterator is None:
                _default_transliterator = Transliterator()
    return _default_transliterator


def full_form(text: str) -> str:
    """Convert ``text`` to full pinyin with the default transliterator."""

    return default_transliterator().full_form(text)


def initials_form(text: str) -> str:
    """Convert ``text`` to pinyin initials with the default transliterator."""

    return default_transliterator().initials_form(text)


def initial_of(char: str) -> str:
    """Return the context-free initial of ``char``."""

    return default_transliterator().initial_of(char)
