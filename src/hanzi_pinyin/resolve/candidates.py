"""Single-character pinyin candidates backed by pypinyin."""

from __future__ import annotations

from typing import Protocol, Sequence

from pypinyin import Style, pinyin

from hanzi_pinyin.models import (
    CANONICAL_FORMAT,
    TONE_NUMBER_FORMAT,
    CaseType,
    OutputFormat,
    ReadingChoice,
    ToneType,
    VCharType,
)

TONE_STYLES = {
    ToneType.WITHOUT_TONE: Style.NORMAL,
    ToneType.WITH_TONE_NUMBER: Style.TONE3,
    ToneType.WITH_TONE_MARK: Style.TONE,
}


class CandidateLookup(Protocol):
    """Capability returning the ordered candidate readings of one character."""

    def candidates_for(self, char: str, output_format: OutputFormat) -> tuple[str, ...]:
        ...


class PypinyinLookup:
    """Candidate lookup using pypinyin heteronym data.

    Readings keep pypinyin's own priority order. Characters pypinyin does not
    know, including ASCII and punctuation, have no candidates.
    """

    def candidates_for(self, char: str, output_format: OutputFormat) -> tuple[str, ...]:
        """Return the formatted readings of ``char``.

        Raises:
            FormatCombinationError: If ``output_format`` cannot be rendered.
        """

        output_format.validate()
        result = pinyin(
            char,
            style=TONE_STYLES[output_format.tone],
            heteronym=True,
            errors="ignore",
            v_to_u=output_format.v_char is VCharType.WITH_U_UNICODE,
            neutral_tone_with_five=True,
        )
        if not result:
            return ()

        readings: list[str] = []
        for reading in result[0]:
            if output_format.v_char is VCharType.WITH_U_AND_COLON:
                reading = reading.replace("v", "u:")
            if output_format.case is CaseType.UPPERCASE:
                reading = reading.upper()
            readings.append(reading)
        return tuple(readings)


def fast_path(candidates: Sequence[str]) -> ReadingChoice | None:
    """Pick a reading without context when the candidates are not ambiguous.

    A single candidate is unambiguous. Two identical leading candidates mean
    the source listed one reading twice, so the first is taken as well.

    Returns:
        The choice, or ``None`` when context is needed.
    """

    if len(candidates) == 1:
        return ReadingChoice(reading=candidates[0], rule="single")
    if len(candidates) > 1 and candidates[0] == candidates[1]:
        return ReadingChoice(reading=candidates[0], rule="duplicate")
    return None


class CandidateResolver:
    """Fetch candidate readings for characters in a fixed output format."""

    def __init__(
        self,
        lookup: CandidateLookup | None = None,
        output_format: OutputFormat = CANONICAL_FORMAT,
    ) -> None:
        self.lookup = lookup if lookup is not None else PypinyinLookup()
        self.output_format = output_format

    def candidates(self, char: str) -> tuple[str, ...]:
        """Return the ordered candidates of ``char``; empty when it has none."""

        return self.lookup.candidates_for(char, self.output_format)

    def initial_of(self, char: str) -> str:
        """Return the first letter of the top-ranked reading of ``char``.

        No context is used, so a polyphonic character always yields the
        initial of its most common reading. Characters without candidates are
        returned unchanged.
        """

        candidates = self.lookup.candidates_for(char, TONE_NUMBER_FORMAT)
        if not candidates:
            return char
        return candidates[0][0]
