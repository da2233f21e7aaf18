"""TSV read/write helpers for batch conversion."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterator, Sequence

from hanzi_pinyin.models import ConversionRow

TSV_HEADER = ["text", "full", "initials"]


def read_source_lines(input_path: Path) -> Iterator[str]:
    """Yield non-blank input lines with trailing newlines removed."""

    with input_path.open("r", encoding="utf-8-sig") as handle:
        for line in handle:
            text = line.rstrip("\r\n")
            if text.strip():
                yield text


def write_tsv(rows: Sequence[ConversionRow], output_path: Path, include_header: bool = True) -> None:
    """Write conversion rows to a TSV file using the canonical column order.

    Cells containing tabs or quotes are quoted, so every row keeps three
    columns when read back with ``csv.reader(..., delimiter="\\t")``.

    Args:
        rows: Converted rows to serialize.
        output_path: Destination TSV file path.
        include_header: Whether to include a header row.
    """

    with output_path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle, delimiter="\t", lineterminator="\n")
        if include_header:
            writer.writerow(TSV_HEADER)
        writer.writerows([row.source, row.full, row.initials] for row in rows)
