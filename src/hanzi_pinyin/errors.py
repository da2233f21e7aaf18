"""Exception types raised by dictionary loading and pinyin formatting."""

from __future__ import annotations


class HanziPinyinError(ValueError):
    """Base class for data errors raised inside the package."""


class ResourceLoadError(HanziPinyinError):
    """Raised when a polyphone dictionary resource is missing or unreadable."""


class FormatCombinationError(HanziPinyinError):
    """Raised when an output format combines options the lookup cannot render.

    Tone marks can only be written on a real ``ü``; asking for tone marks
    together with ``v`` or ``u:`` is rejected.
    """
