"""CLI entrypoint for Chinese to pinyin conversion."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from hanzi_pinyin.convert import Transliterator
from hanzi_pinyin.dictionary.repository import (
    PolyphoneDictionary,
    default_dictionary,
    load_dictionary_file,
)
from hanzi_pinyin.errors import FormatCombinationError
from hanzi_pinyin.io.tsv_io import read_source_lines, write_tsv
from hanzi_pinyin.models import CaseType, ConversionRow, OutputFormat, ToneType, VCharType


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Render a header and rows as ``|``-separated, left-aligned columns.

    Args:
        headers: Column labels.
        data_rows: Cell values, one sequence per row.

    Returns:
        Table text with a ``-+-`` rule under the header.
    """

    columns = list(zip(headers, *data_rows))
    widths = [max(len(cell) for cell in column) for column in columns]

    def render(cells: Sequence[str]) -> str:
        return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths))

    rule = "-+-".join("-" * width for width in widths)
    return "\n".join([render(headers), rule, *(render(row) for row in data_rows)])


def _add_dict_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dict",
        dest="dict_path",
        type=Path,
        default=None,
        help="Path to a polyphone dictionary (default: bundled dictionary).",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser with ``convert``, ``batch`` and ``check-dict``
        subcommands.
    """

    parser = argparse.ArgumentParser(description="Convert Chinese text to pinyin.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert text given on the command line.")
    convert.add_argument("text", nargs="+", help="Text to convert.")
    convert.add_argument("--initials", action="store_true", help="Print initials only.")
    convert.add_argument(
        "--tone",
        choices=[tone.value for tone in ToneType],
        default=ToneType.WITHOUT_TONE.value,
        help="Tone rendering (default: none).",
    )
    convert.add_argument(
        "--v-char",
        choices=[v_char.value for v_char in VCharType],
        default=VCharType.WITH_V.value,
        help="How to write ü (default: v).",
    )
    convert.add_argument("--upper", action="store_true", help="Print uppercase pinyin.")
    convert.add_argument(
        "--explain",
        action="store_true",
        help="Print the reading and selection rule for every character.",
    )
    _add_dict_argument(convert)

    batch = subparsers.add_parser("batch", help="Convert every line of a file into a TSV.")
    batch.add_argument("--input", required=True, type=Path, help="UTF-8 text file, one entry per line.")
    batch.add_argument("--output", required=True, type=Path, help="Destination TSV output path.")
    batch.add_argument("--no-header", action="store_true", help="Do not write TSV header.")
    _add_dict_argument(batch)

    check = subparsers.add_parser("check-dict", help="Load a dictionary and report problems.")
    _add_dict_argument(check)
    return parser


def _load_dictionary(dict_path: Path | None) -> PolyphoneDictionary:
    if dict_path is None:
        return default_dictionary()
    if not dict_path.exists():
        raise SystemExit(f"Dictionary not found: {dict_path}")
    return load_dictionary_file(dict_path)


def _output_format(args: argparse.Namespace) -> OutputFormat:
    return OutputFormat(
        case=CaseType.UPPERCASE if args.upper else CaseType.LOWERCASE,
        tone=ToneType(args.tone),
        v_char=VCharType(args.v_char),
    )


def _run_convert(args: argparse.Namespace) -> int:
    transliterator = Transliterator(
        dictionary=_load_dictionary(args.dict_path),
        output_format=_output_format(args),
    )
    status = 0
    for text in args.text:
        if args.explain:
            try:
                explained = transliterator.explain(text, initials=args.initials)
            except FormatCombinationError as exc:
                print(f"ERROR: {exc}")
                return 1
            rows = [
                [char, choice.reading[0] if args.initials else choice.reading, choice.rule]
                if choice
                else [char, char, "pass-through"]
                for char, choice in explained
            ]
            print(_format_table(["char", "reading", "rule"], rows))
            continue

        if args.initials:
            result = transliterator.convert_initials(text)
        else:
            result = transliterator.convert_full(text)
        if not result.ok:
            print(f"ERROR: {result.error}")
            status = 1
            continue
        print(result.text)
    return status


def _run_batch(args: argparse.Namespace) -> int:
    if not args.input.exists():
        raise SystemExit(f"Input not found: {args.input}")

    transliterator = Transliterator(dictionary=_load_dictionary(args.dict_path))
    rows = [
        ConversionRow(
            source=text,
            full=transliterator.full_form(text),
            initials=transliterator.initials_form(text),
        )
        for text in read_source_lines(args.input)
    ]
    write_tsv(rows, output_path=args.output, include_header=not args.no_header)
    print(f"Wrote {len(rows)} rows to {args.output}")
    return 0


def _run_check_dict(args: argparse.Namespace) -> int:
    dictionary = _load_dictionary(args.dict_path)
    if dictionary.load_error is not None:
        print(f"ERROR: {dictionary.load_error}")
        return 1

    rows = [
        [reading, str(len(dictionary.lookup(reading)))] for reading in sorted(dictionary.readings)
    ]
    print(_format_table(["reading", "word_count"], rows))
    print(f"\nReadings: {len(dictionary)}, skipped lines: {len(dictionary.skipped)}")
    if dictionary.skipped:
        print("\nSkipped lines:")
        print(
            _format_table(
                ["line", "reason", "text"],
                [[str(item.line_number), item.reason, item.text] for item in dictionary.skipped],
            )
        )
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through printed output.

    Args:
        argv: Argument list; ``sys.argv[1:]`` when ``None``.

    Returns:
        Zero exit status on success, one when a conversion or check failed.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "convert":
        return _run_convert(args)
    if args.command == "batch":
        return _run_batch(args)
    return _run_check_dict(args)


if __name__ == "__main__":
    raise SystemExit(main())
