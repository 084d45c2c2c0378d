# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Container locator

Finds the TIFF-structured EXIF blob inside a JPEG file, or recognises a
bare TIFF file whose whole content is the blob. Only enough of the JPEG
segment structure is parsed to reach the APP1 segment.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from typing import Optional, Tuple

from exifwalk.exceptions import JpegWithoutExifError, UnknownFileTypeError

logger = logging.getLogger(__name__)

MIME_JPEG = 'image/jpeg'
MIME_TIFF = 'image/tiff'

JPEG_SOI = b'\xff\xd8'
EXIF_HEADER = b'Exif\x00\x00'
TIFF_MARKS = (b'II', b'MM')

APP1_MARKER = 0xFFE1
SOS_MARKER = 0xFFDA


def detect_mime(data: bytes) -> Optional[str]:
    """
    Detect the container type from magic bytes.

    Returns:
        "image/jpeg", "image/tiff" or None
    """
    if data[:2] in TIFF_MARKS:
        return MIME_TIFF
    if data[:2] == JPEG_SOI:
        return MIME_JPEG
    return None


def find_exif_in_jpeg(data: bytes) -> Tuple[int, int]:
    """
    Find the EXIF payload of a JPEG file.

    Walks the marker segments following SOI until an APP1 segment whose
    payload starts with ``Exif\\0\\0``.

    Args:
        data: Complete JPEG file content

    Returns:
        Tuple of (start, end) of the TIFF blob inside ``data``

    Raises:
        JpegWithoutExifError: If the scan data starts, the segment structure
            is broken, or the file ends before an EXIF segment is found
    """
    offset = 2  # Skip JPEG SOI marker

    while offset < len(data):
        if offset + 4 > len(data):
            raise JpegWithoutExifError("JPEG truncated in marker header")

        if data[offset] != 0xFF:
            raise JpegWithoutExifError(f"Invalid marker byte 0x{data[offset]:02X} at offset {offset}")

        # Fill bytes may precede a marker
        if data[offset + 1] == 0xFF:
            offset += 1
            continue

        marker, size = struct.unpack_from('>HH', data, offset)

        if marker == SOS_MARKER:
            raise JpegWithoutExifError("Start of scan reached without EXIF segment")
        if size < 2:
            raise JpegWithoutExifError(f"JPEG segment 0x{marker:04X} declares invalid length {size}")

        segment_end = offset + 2 + size
        if segment_end > len(data):
            raise JpegWithoutExifError(f"JPEG segment 0x{marker:04X} truncated")

        payload = offset + 4
        if marker == APP1_MARKER and data[payload:payload + len(EXIF_HEADER)] == EXIF_HEADER:
            logger.debug("EXIF APP1 segment at offset %d (%d bytes)", offset, size)
            return payload + len(EXIF_HEADER), segment_end

        offset = segment_end

    raise JpegWithoutExifError("End of file reached without EXIF segment")


def locate_exif_blob(data: bytes) -> Tuple[bytes, str]:
    """
    Locate the TIFF-structured metadata blob in raw file content.

    Args:
        data: Raw file bytes

    Returns:
        Tuple of (blob, mime type)

    Raises:
        UnknownFileTypeError: If the data is neither JPEG nor TIFF
        JpegWithoutExifError: If a JPEG carries no EXIF segment
    """
    mime = detect_mime(data)
    if mime == MIME_TIFF:
        return bytes(data), mime
    if mime == MIME_JPEG:
        start, end = find_exif_in_jpeg(data)
        return bytes(data[start:end]), mime
    raise UnknownFileTypeError("File type unknown: neither JPEG nor TIFF signature found")
