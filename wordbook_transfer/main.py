"""Command-line entrypoint for converting, checking and templating wordbook files."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .application.transfer_service import TransferService
from .config import load_config
from .domain.errors import TransferError, TransferIOError
from .formats.templates import TARGET_CHAPTER, TARGET_WORDBOOK, TEMPLATE_FORMATS
from .logging_config import setup_logging
from .utils import file_extension


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordbook-transfer",
        description="Convert, validate and template wordbook import/export files.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser(
        "convert",
        help="Decode INPUT by its extension and write OUTPUT in the format of its extension.",
    )
    convert.add_argument("input", help="Source file (json, xml, xlsx, xls, csv, tsv).")
    convert.add_argument("output", help="Destination file (json, xml, csv, xlsx).")
    _add_target_arguments(convert)

    check = subparsers.add_parser("check", help="Decode INPUT and print a summary.")
    check.add_argument("input", help="File to validate.")
    _add_target_arguments(check)

    template = subparsers.add_parser("template", help="Write a sample import file.")
    template.add_argument("format", choices=TEMPLATE_FORMATS)
    template.add_argument("target", choices=(TARGET_WORDBOOK, TARGET_CHAPTER))
    template.add_argument("output", help="Destination file.")
    return parser


def _add_target_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--target",
        choices=(TARGET_WORDBOOK, TARGET_CHAPTER),
        default=TARGET_WORDBOOK,
        help="Whether the file holds a whole wordbook or a single chapter.",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Name for formats that do not carry one (csv, tsv, xlsx).",
    )


def _read_input(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise TransferIOError(f"{path}: {exc.strerror or exc}") from exc


def _write_output(path: str, content: bytes) -> None:
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    except OSError as exc:
        raise TransferIOError(f"{path}: {exc.strerror or exc}") from exc


def _run(args: argparse.Namespace, service: TransferService) -> str:
    if args.command == "template":
        payload = service.download_template(args.format, args.target)
        _write_output(args.output, payload.content)
        return f"TEMPLATE_OK {args.output}"

    data = _read_input(args.input)
    if args.target == TARGET_CHAPTER:
        chapter = service.parse_chapter(data, args.input, args.name)
        chapters, words = 1, chapter.word_count
        if args.command == "convert":
            payload = service.build_chapter_export(chapter, file_extension(args.output))
    else:
        wordbook = service.parse_wordbook(data, args.input, args.name)
        chapters, words = len(wordbook.chapters), wordbook.word_count
        if args.command == "convert":
            payload = service.build_wordbook_export(wordbook, file_extension(args.output))

    if args.command == "convert":
        _write_output(args.output, payload.content)
        return f"CONVERT_OK {args.output} chapters={chapters} words={words}"
    return f"CHECK_OK chapters={chapters} words={words}"


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    logger = setup_logging(config)
    service = TransferService(config=config)

    try:
        print(_run(args, service))
    except TransferError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    except Exception:
        logger.exception("wordbook-transfer %s failed", args.command)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
