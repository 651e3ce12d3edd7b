#!/usr/bin/env python3
# filename: huffman_cli.py

import argparse
import logging
import os
import sys

from huffman_errors import HuffmanError
from huffman_header import Header
from huffman_service import HuffmanService

logger = logging.getLogger("huffman_cli")


def build_parser():
    parser = argparse.ArgumentParser(description="Lossless Huffman compression with a self-describing tree header.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-stage details.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors.")
    sub = parser.add_subparsers(dest="command", required=True)

    compress = sub.add_parser("compress", help="Compress a file.")
    compress.add_argument("input")
    compress.add_argument("output")
    compress.add_argument(
        "--header",
        choices=[h.value for h in Header],
        default=Header.TREE_HEADER.value,
        help="Header format to write (only 'tree' is supported).",
    )

    decompress = sub.add_parser("decompress", help="Decompress a file.")
    decompress.add_argument("input")
    decompress.add_argument("output")
    return parser


def configure_logging(args):
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args)

    service = HuffmanService()
    try:
        if args.command == "compress":
            header = Header(args.header)
            if header is not service.header:
                service.set_header(header)
            size_in, size_out = service.compress_file(args.input, args.output)
            saved = 100.0 * (size_in - size_out) / size_in if size_in else 0.0
            logger.info(f"Encode: {args.input} ({size_in}B) -> {args.output} ({size_out}B), {saved:.2f}% saved")
        else:
            size_in, size_out = service.decompress_file(args.input, args.output)
            logger.info(f"Decode: {args.input} ({size_in}B) -> {args.output} ({size_out}B)")
    except HuffmanError as exc:
        logger.error(f"{args.command} failed: {exc}")
        _discard(args.output)
        return 2
    except OSError as exc:
        logger.error(f"{args.command} failed: {exc}")
        return 1
    return 0


def _discard(path):
    if os.path.exists(path):
        os.remove(path)


if __name__ == "__main__":
    sys.exit(main())
