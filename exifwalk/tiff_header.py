# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF header parser

Copyright 2025 DNAi inc.
"""

import struct

from exifwalk.exceptions import InvalidFormatError
from exifwalk.exif_types import ByteOrder, TiffHeader

TIFF_MAGIC = 42
TIFF_HEADER_SIZE = 8


def parse_tiff_header(blob: bytes) -> TiffHeader:
    """
    Parse the 8-byte TIFF header at the start of a blob.

    Args:
        blob: TIFF-structured metadata

    Returns:
        TiffHeader with the byte order and the offset of IFD0

    Raises:
        InvalidFormatError: If the header is truncated, the byte order mark
            or magic number is wrong, or IFD0 lies outside the blob
    """
    if len(blob) < TIFF_HEADER_SIZE:
        raise InvalidFormatError("TIFF header truncated")

    byte_order = ByteOrder.from_mark(blob[:2])
    if byte_order is None:
        raise InvalidFormatError(f"Invalid TIFF byte order mark {blob[:2]!r}")

    magic, first_ifd_offset = struct.unpack_from(f'{byte_order.value}HI', blob, 2)
    if magic != TIFF_MAGIC:
        raise InvalidFormatError(f"Invalid TIFF magic number {magic}")

    # IFD0 must at least have room for its entry count
    if first_ifd_offset + 2 > len(blob):
        raise InvalidFormatError(
            f"IFD0 offset {first_ifd_offset} outside of {len(blob)}-byte TIFF blob"
        )

    return TiffHeader(byte_order, first_ifd_offset)
