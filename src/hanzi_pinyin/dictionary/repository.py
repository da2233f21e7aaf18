"""Read-only polyphone dictionary and its loaders."""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
import logging
from pathlib import Path
import threading
from types import MappingProxyType
from typing import Iterable, Mapping

from hanzi_pinyin.dictionary.parser import parse_dictionary_lines
from hanzi_pinyin.errors import ResourceLoadError
from hanzi_pinyin.models import DictionaryEntry, MalformedLine

logger = logging.getLogger(__name__)

BUNDLED_PACKAGE = "hanzi_pinyin"
BUNDLED_RESOURCE = "polyphones.txt"


@dataclass(frozen=True)
class PolyphoneDictionary:
    """Immutable mapping from canonical reading to the words that select it.

    Instances are built once and never mutated, so a single dictionary can be
    shared by every converter in the process.

    Attributes:
        entries: Read-only mapping keyed by canonical reading.
        skipped: Malformed lines ignored while loading.
        load_error: Message describing why the source could not be read, or
            ``None`` when it was read.
    """

    entries: Mapping[str, DictionaryEntry] = field(default_factory=lambda: MappingProxyType({}))
    skipped: tuple[MalformedLine, ...] = ()
    load_error: str | None = None

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def readings(self) -> tuple[str, ...]:
        """Return the readings defined by the dictionary in file order."""

        return tuple(self.entries)

    def lookup(self, reading: str) -> tuple[str, ...]:
        """Return the words listed under ``reading``; empty tuple when absent."""

        entry = self.entries.get(reading)
        return entry.words if entry is not None else ()

    def contains(self, reading: str, word: str) -> bool:
        """Return whether ``word`` is listed under ``reading``."""

        entry = self.entries.get(reading)
        return entry is not None and word in entry.word_set


def load_dictionary(lines: Iterable[str]) -> PolyphoneDictionary:
    """Build a dictionary from raw ``reading:word word`` lines.

    Args:
        lines: Iterable of dictionary lines.

    Returns:
        Dictionary containing every well-formed line.
    """

    entries, skipped = parse_dictionary_lines(lines)
    return PolyphoneDictionary(
        entries=MappingProxyType({entry.reading: entry for entry in entries}),
        skipped=tuple(skipped),
    )


def _read_lines(path: Path) -> list[str]:
    """Read a UTF-8 dictionary file.

    Raises:
        ResourceLoadError: If the file is missing or cannot be decoded.
    """

    if not path.exists():
        raise ResourceLoadError(f"Polyphone dictionary not found: {path}")
    try:
        with path.open("r", encoding="utf-8-sig") as handle:
            return handle.readlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise ResourceLoadError(f"Unable to read polyphone dictionary {path}: {exc}") from exc


def _empty_dictionary(error: ResourceLoadError) -> PolyphoneDictionary:
    logger.error("%s; polyphone disambiguation is disabled.", error)
    return PolyphoneDictionary(load_error=str(error))


def load_dictionary_file(path: Path) -> PolyphoneDictionary:
    """Load a dictionary from disk, degrading to an empty one on failure.

    Args:
        path: Dictionary file path.

    Returns:
        Loaded dictionary, or an empty dictionary with ``load_error`` set when
        the file is missing or unreadable.
    """

    try:
        lines = _read_lines(path)
    except ResourceLoadError as exc:
        return _empty_dictionary(exc)

    dictionary = load_dictionary(lines)
    logger.debug("Loaded %d polyphone readings from %s", len(dictionary), path)
    return dictionary


def load_bundled_dictionary() -> PolyphoneDictionary:
    """Load the dictionary shipped inside the package."""

    resource = resources.files(BUNDLED_PACKAGE) / "data" / BUNDLED_RESOURCE
    try:
        with resources.as_file(resource) as path:
            lines = _read_lines(Path(path))
    except ResourceLoadError as exc:
        return _empty_dictionary(exc)

    dictionary = load_dictionary(lines)
    logger.debug("Loaded %d bundled polyphone readings", len(dictionary))
    return dictionary


_default_lock = threading.Lock()
_default_dictionary: PolyphoneDictionary | None = None


def default_dictionary() -> PolyphoneDictionary:
    """Return the process-wide bundled dictionary, loading it exactly once."""

    global _default_dictionary
    if _default_dictionary is None:
        with _default_lock:
            if _default_dictionary is None:
                _default_dictionary = load_bundled_dictionary()
    return _default_dictionary
