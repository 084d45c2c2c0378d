# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for exifwalk

This module defines the error taxonomy of the EXIF decoding engine.
Errors raised before any directory is read are fatal; errors raised
while walking directories are recovered per branch by the walker.

Copyright 2025 DNAi inc.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Machine-readable error kinds reported by the parser."""
    UNKNOWN_FILE_TYPE = "UnknownFileType"
    JPEG_WITHOUT_EXIF = "JpegWithoutExif"
    INVALID_FORMAT = "InvalidFormat"
    TRUNCATED_IFD = "TruncatedIfd"
    IFD_LOOP = "IfdLoop"
    VALUE_OUT_OF_BOUNDS = "ValueOutOfBounds"


class ExifWalkError(Exception):
    """
    Base exception for all exifwalk errors.

    All exifwalk exceptions inherit from this class, allowing
    catch-all error handling for any decoding-related errors.
    """
    kind: Optional[ErrorKind] = None

    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(ExifWalkError):
    """
    Raised when metadata cannot be read at all.

    This exception (and its subclasses) is fatal: no partial result
    is meaningful because no directory has been read yet.
    """
    pass


class UnknownFileTypeError(MetadataReadError):
    """Raised when the data starts with neither a JPEG nor a TIFF signature."""
    kind = ErrorKind.UNKNOWN_FILE_TYPE


class JpegWithoutExifError(MetadataReadError):
    """Raised when a JPEG file carries no APP1/Exif segment before its scan data."""
    kind = ErrorKind.JPEG_WITHOUT_EXIF


class InvalidFormatError(MetadataReadError):
    """Raised when the TIFF header is truncated or its magic number is wrong."""
    kind = ErrorKind.INVALID_FORMAT


class StructureError(ExifWalkError):
    """
    Raised for malformed structures found while walking directories.

    Structure errors never discard entries that were already decoded.

    Attributes:
        offset: Blob offset at which the problem was detected
    """

    def __init__(self, message: str = "", offset: int = 0):
        self.offset = offset
        super().__init__(message)


class TruncatedIfdError(StructureError):
    """Raised when a directory's entry table extends past the end of the blob."""
    kind = ErrorKind.TRUNCATED_IFD


class IfdLoopError(StructureError):
    """Raised when a directory offset is reached a second time in one parse."""
    kind = ErrorKind.IFD_LOOP


class ValueOutOfBoundsError(StructureError):
    """
    Raised when an entry's indirect value lies outside the blob.

    Only the offending entry is affected; sibling entries decode normally.
    """
    kind = ErrorKind.VALUE_OUT_OF_BOUNDS

    def __init__(self, message: str = "", offset: int = 0, size: int = 0):
        self.size = size
        super().__init__(message, offset)
