# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF metadata parser

Entry point of the decoding engine: locates the metadata blob in a JPEG or
TIFF file, validates the TIFF header and walks every directory.

Copyright 2025 DNAi inc.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from exifwalk.config import DEFAULT_CONFIG, ExifConfig
from exifwalk.container import locate_exif_blob
from exifwalk.exceptions import MetadataReadError
from exifwalk.exif_types import ByteOrder, ExifData
from exifwalk.ifd_walker import IfdWalker
from exifwalk.tiff_header import parse_tiff_header

logger = logging.getLogger(__name__)


def parse_exif(data: bytes, config: Optional[ExifConfig] = None) -> ExifData:
    """
    Decode the EXIF metadata of an image.

    Args:
        data: Complete JPEG or TIFF file content
        config: Decoding and formatting configuration

    Returns:
        ExifData with every entry decoded, in discovery order. Structural
        problems met while walking directories are listed in ``errors``
        next to the entries decoded despite them.

    Raises:
        UnknownFileTypeError: If the data is neither JPEG nor TIFF
        JpegWithoutExifError: If a JPEG carries no EXIF segment
        InvalidFormatError: If the TIFF header is invalid
    """
    config = config or DEFAULT_CONFIG
    blob, mime = locate_exif_blob(data)
    header = parse_tiff_header(blob)
    logger.debug("%s blob of %d bytes, %s byte order, IFD0 at %d",
                 mime, len(blob), header.byte_order.name.lower(), header.first_ifd_offset)

    walker = IfdWalker(blob, header.byte_order, config)
    entries = walker.walk(header.first_ifd_offset)

    result = ExifData(
        mime=mime,
        entries=entries,
        little_endian=header.byte_order is ByteOrder.LITTLE,
        warnings=walker.warnings,
        errors=walker.errors,
    )
    if config.extract_thumbnail:
        result.thumbnail = walker.thumbnail()
    return result


def parse_file(path: Union[str, Path], config: Optional[ExifConfig] = None) -> ExifData:
    """Read a file and decode its EXIF metadata."""
    return ExifParser(file_path=str(path), config=config).read()


class ExifParser:
    """
    Parser for EXIF metadata from JPEG and TIFF files.

    Example:
        >>> parser = ExifParser(file_path='photo.jpg')
        >>> data = parser.read()
        >>> data.get('Orientation').readable
        'Top-left'
    """

    def __init__(
        self,
        file_path: Optional[str] = None,
        file_data: Optional[bytes] = None,
        config: Optional[ExifConfig] = None,
    ):
        """
        Initialize the EXIF parser.

        Args:
            file_path: Path to the image file
            file_data: Raw file data (alternative to file_path)
            config: Decoding and formatting configuration
        """
        self.file_path = file_path
        self.file_data = file_data
        self.config = config or DEFAULT_CONFIG

    def read(self) -> ExifData:
        """
        Read EXIF metadata from the file.

        Returns:
            ExifData for the file

        Raises:
            MetadataReadError: If no input was given, the file cannot be
                read, or the container or TIFF header is invalid
        """
        if self.file_path:
            try:
                with open(self.file_path, 'rb') as f:
                    self.file_data = f.read()
            except OSError as e:
                raise MetadataReadError(f"Failed to read {self.file_path}: {e}") from e
        elif self.file_data is None:
            raise MetadataReadError("No file path or file data provided")

        return parse_exif(self.file_data, self.config)
