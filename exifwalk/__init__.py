# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
exifwalk - A pure Python EXIF/TIFF metadata decoder

Reads the TIFF-structured metadata of JPEG and TIFF images: locates the
EXIF blob, walks IFD0, IFD1 and the Exif, GPS and Interoperability
sub-directories, and turns every entry into a typed value with a
human-readable rendering.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from exifwalk.config import DEFAULT_CONFIG, ExifConfig
from exifwalk.exceptions import (
    ErrorKind,
    ExifWalkError,
    IfdLoopError,
    InvalidFormatError,
    JpegWithoutExifError,
    MetadataReadError,
    StructureError,
    TruncatedIfdError,
    UnknownFileTypeError,
    ValueOutOfBoundsError,
)
from exifwalk.exif_parser import ExifParser, parse_exif, parse_file
from exifwalk.exif_tags import TAG_REGISTRY, TagDescriptor, ValueKind, describe_tag, lookup_tag
from exifwalk.exif_types import (
    ByteOrder,
    ExifData,
    ExifEntry,
    ExifTagType,
    IfdKind,
    ParseWarning,
    Rational,
    TagValue,
    WarningKind,
)
from exifwalk.value_formatter import format_value

__all__ = [
    'ExifParser',
    'parse_exif',
    'parse_file',
    'ExifConfig',
    'DEFAULT_CONFIG',
    'ExifData',
    'ExifEntry',
    'TagValue',
    'Rational',
    'ByteOrder',
    'IfdKind',
    'ExifTagType',
    'ParseWarning',
    'WarningKind',
    'TAG_REGISTRY',
    'TagDescriptor',
    'ValueKind',
    'lookup_tag',
    'describe_tag',
    'format_value',
    'ErrorKind',
    'ExifWalkError',
    'MetadataReadError',
    'UnknownFileTypeError',
    'JpegWithoutExifError',
    'InvalidFormatError',
    'StructureError',
    'TruncatedIfdError',
    'IfdLoopError',
    'ValueOutOfBoundsError',
]
