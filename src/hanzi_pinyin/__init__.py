"""Chinese to pinyin conversion with context-based polyphone resolution."""

from .convert import Transliterator, full_form, initial_of, initials_form
from .dictionary.repository import (
    PolyphoneDictionary,
    default_dictionary,
    load_dictionary,
    load_dictionary_file,
)
from .errors import FormatCombinationError, HanziPinyinError, ResourceLoadError
from .models import CaseType, ConversionResult, OutputFormat, ReadingChoice, ToneType, VCharType
from .text import hex_encode, is_chinese_sequence

__all__ = [
    "Transliterator",
    "full_form",
    "initials_form",
    "initial_of",
    "is_chinese_sequence",
    "hex_encode",
    "PolyphoneDictionary",
    "default_dictionary",
    "load_dictionary",
    "load_dictionary_file",
    "OutputFormat",
    "CaseType",
    "ToneType",
    "VCharType",
    "ConversionResult",
    "ReadingChoice",
    "HanziPinyinError",
    "ResourceLoadError",
    "FormatCombinationError",
]
