#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
命令行入口

    python -m gobarchive list path/to/RES.GOB
    python -m gobarchive extract path/to/RES.GOB out_dir
    python -m gobarchive pack src_dir -o path/to/RES.GOB [--separator "\\"]
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .archive import GobReader, GobBuilder, import_directory, export_directory
from .exceptions import GobError, ImportIoError
from .utils import DEFAULT_ENCODING, check_encoding


logger = logging.getLogger("gobarchive")


def _cmd_list(args: argparse.Namespace) -> int:
    data = _read_input(args.archive)
    header, entries = GobReader(encoding=args.encoding).read_entries(data)
    print(f"{args.archive}: {len(entries)} file(s), body_offset={header.body_offset}")
    for path, entry in entries:
        print(f"  {entry.offset:>10}  {entry.size:>10}  {path}")
    return 0


def _cmd_extract(args: argparse.Namespace) -> int:
    archive = GobReader(encoding=args.encoding).parse_file(args.archive)
    count = export_directory(archive, args.directory)
    print(f"Extracted {count} file(s) to {args.directory}")
    return 0


def _cmd_pack(args: argparse.Namespace) -> int:
    archive = import_directory(args.directory, encoding=args.encoding)
    size = GobBuilder(encoding=args.encoding, separator=args.separator).write(archive, args.output)
    print(f"Packed {len(archive)} file(s) into {args.output} ({size} bytes)")
    return 0


def _read_input(path: str) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise ImportIoError(path, e) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gobarchive",
        description="List, extract, or pack GOB archives."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--encoding", default=DEFAULT_ENCODING, type=check_encoding,
                        help="path field text encoding (ASCII-compatible)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug")
    
    sub = parser.add_subparsers(dest="command", required=True)
    
    p_list = sub.add_parser("list", help="list the file table")
    p_list.add_argument("archive")
    p_list.set_defaults(func=_cmd_list)
    
    p_extract = sub.add_parser("extract", help="extract every file into a directory")
    p_extract.add_argument("archive")
    p_extract.add_argument("directory")
    p_extract.set_defaults(func=_cmd_extract)
    
    p_pack = sub.add_parser("pack", help="pack a directory into a GOB file")
    p_pack.add_argument("directory")
    p_pack.add_argument("-o", "--output", required=True)
    p_pack.add_argument("--separator", choices=["/", "\\"], default="/",
                        help="separator written into path fields")
    p_pack.set_defaults(func=_cmd_pack)
    
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    
    try:
        return args.func(args)
    except GobError as e:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
