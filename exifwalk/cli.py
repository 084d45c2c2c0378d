# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for exifwalk

Prints the decoded EXIF entries of one or more image files, as text or
JSON.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from exifwalk import __version__
from exifwalk.config import DEFAULT_CONFIG, ExifConfig
from exifwalk.exceptions import ExifWalkError
from exifwalk.exif_parser import parse_file
from exifwalk.exif_types import ExifData


def format_output(data: ExifData, format_type: str = "text") -> str:
    """
    Format a parse result.

    Args:
        data: Parse result
        format_type: Output format ('text' or 'json')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(data.to_dict(), indent=2, ensure_ascii=False)
    lines = []
    for entry in data.entries:
        lines.append(f"{entry.key}: {entry.readable}")
    for error in data.errors:
        lines.append(f"Error: {error.message}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='exifwalk',
        description='Decode EXIF metadata from JPEG and TIFF files',
    )
    parser.add_argument('files', nargs='+', help='Image file(s) to read')
    parser.add_argument('-j', '--json', action='store_true', help='Output metadata in JSON format')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Log warnings (-v) or decoding details (-vv) to stderr')
    parser.add_argument('--gps-precision', type=int, default=DEFAULT_CONFIG.gps_precision,
                        help='Decimal places for GPS coordinates')
    parser.add_argument('--no-thumbnail', action='store_true', help='Skip IFD1 thumbnail extraction')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command-line interface.

    Returns:
        0 on success, 1 if any file could not be read at all
    """
    args = build_parser().parse_args(argv)

    if args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose == 1:
        level = logging.WARNING
    else:
        level = logging.ERROR
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    config = ExifConfig(gps_precision=args.gps_precision, extract_thumbnail=not args.no_thumbnail)
    format_type = "json" if args.json else "text"
    status = 0

    for index, file_path in enumerate(args.files):
        try:
            data = parse_file(file_path, config)
        except ExifWalkError as e:
            print(f"Error: {file_path}: {e.message}", file=sys.stderr)
            status = 1
            continue

        if len(args.files) > 1 and format_type == "text":
            if index:
                print()
            print(f"======== {file_path}")
        print(format_output(data, format_type))

    return status
