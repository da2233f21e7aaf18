"""Text helpers: Hanzi classification, reading normalisation and hex dumps."""

from __future__ import annotations

import re

from pypinyin.contrib.tone_convert import to_normal

HANZI_RE = re.compile(r"[一-龥]+")
TONE_NUMBER_RE = re.compile(r"[0-9]")
CANONICAL_READING_RE = re.compile(r"[a-zv]+")


def is_chinese_sequence(text: str) -> bool:
    """Return whether ``text`` is made only of common CJK ideographs.

    The accepted range is U+4E00 to U+9FA5. An empty string is not a Chinese
    sequence.
    """

    return HANZI_RE.fullmatch(text) is not None


def canonical_reading(reading: str) -> str:
    """Normalise one pinyin syllable to dictionary key form.

    Tone marks and tone numbers are removed, the text is lowercased, and both
    ``ü`` and ``u:`` become ``v``.

    Args:
        reading: Pinyin syllable in any supported output format.

    Returns:
        Canonical reading such as ``lv`` for ``lǜ``, ``LU:4`` or ``lv4``.
    """

    lowered = reading.strip().lower().replace("u:", "v")
    normal = to_normal(lowered, v_to_u=False) if lowered else lowered
    return TONE_NUMBER_RE.sub("", normal).replace("ü", "v")


def hex_encode(text: str) -> str:
    """Dump the UTF-8 bytes of ``text`` as lowercase hex.

    Each byte is written without zero padding, so bytes below ``0x10``
    contribute a single digit.
    """

    return "".join(format(byte, "x") for byte in text.encode("utf-8"))
