"""Data models shared by the dictionary, resolver and conversion layers.

Every model is an immutable dataclass so dictionaries and formats can be
shared between threads once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from hanzi_pinyin.errors import FormatCombinationError


class CaseType(Enum):
    LOWERCASE = "lower"
    UPPERCASE = "upper"


class ToneType(Enum):
    WITHOUT_TONE = "none"
    WITH_TONE_NUMBER = "number"
    WITH_TONE_MARK = "mark"


class VCharType(Enum):
    WITH_V = "v"
    WITH_U_AND_COLON = "u-colon"
    WITH_U_UNICODE = "u"


@dataclass(frozen=True)
class OutputFormat:
    """Formatting options passed through to the candidate lookup.

    The default instance is the canonical format used by dictionary keys:
    lowercase, no tone, ``ü`` written as ``v``.
    """

    case: CaseType = CaseType.LOWERCASE
    tone: ToneType = ToneType.WITHOUT_TONE
    v_char: VCharType = VCharType.WITH_V

    def validate(self) -> None:
        """Reject option combinations that cannot be rendered.

        Raises:
            FormatCombinationError: If tone marks are requested without
                ``VCharType.WITH_U_UNICODE``.
        """

        if self.tone is ToneType.WITH_TONE_MARK and self.v_char is not VCharType.WITH_U_UNICODE:
            raise FormatCombinationError(
                f"Tone marks require v_char={VCharType.WITH_U_UNICODE.value!r}, "
                f"got {self.v_char.value!r}."
            )


CANONICAL_FORMAT = OutputFormat()
TONE_NUMBER_FORMAT = OutputFormat(
    case=CaseType.LOWERCASE,
    tone=ToneType.WITH_TONE_NUMBER,
    v_char=VCharType.WITH_U_AND_COLON,
)


@dataclass(frozen=True)
class DictionaryEntry:
    """Words in which a polyphonic character takes ``reading``.

    ``reading`` is canonical (lowercase letters, no tone, ``v`` for ``ü``) and
    ``words`` keeps file order. A frozen set of the words is kept alongside
    for constant-time membership checks.
    """

    reading: str
    words: tuple[str, ...]
    word_set: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.words:
            raise ValueError(f"Dictionary entry for '{self.reading}' has no words.")
        object.__setattr__(self, "word_set", frozenset(self.words))


@dataclass(frozen=True)
class MalformedLine:
    """Dictionary line skipped during parsing."""

    line_number: int
    text: str
    reason: str


@dataclass(frozen=True)
class ReadingChoice:
    """Reading selected for one character and the rule that selected it.

    Rules, in the order they are tried: ``single``, ``duplicate``, then the
    window rules ``forward-2``, ``forward-1``, ``backward-2``, ``backward-1``,
    ``around``, then ``default`` and finally ``first``.
    """

    reading: str
    rule: str


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one conversion call.

    Attributes:
        text: Converted text, or ``""`` when the call was aborted.
        ok: Whether every character was converted.
        error: Failure message when ``ok`` is false.
    """

    text: str
    ok: bool = True
    error: str | None = None


@dataclass(frozen=True)
class ConversionRow:
    """One line of batch conversion output."""

    source: str
    full: str
    initials: str
