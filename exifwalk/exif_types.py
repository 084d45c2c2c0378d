# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Core data model for exifwalk

Byte orders, directory kinds, the twelve canonical TIFF field types and
the records produced by a parse: typed values, entries and the overall
result container.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from exifwalk.exceptions import ErrorKind, StructureError


class ByteOrder(Enum):
    """TIFF byte order, valued with the matching struct prefix."""
    LITTLE = '<'
    BIG = '>'

    @property
    def mark(self) -> bytes:
        """Two-byte order mark as found in the TIFF header."""
        return b'II' if self is ByteOrder.LITTLE else b'MM'

    @classmethod
    def from_mark(cls, mark: bytes) -> Optional['ByteOrder']:
        if mark == b'II':
            return cls.LITTLE
        if mark == b'MM':
            return cls.BIG
        return None


class IfdKind(Enum):
    """Logical directory an entry belongs to."""
    ROOT = "IFD0"
    EXIF = "Exif"
    GPS = "GPS"
    INTEROPERABILITY = "Interop"
    THUMBNAIL = "IFD1"


class ExifTagType(IntEnum):
    """EXIF/TIFF field types"""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    FLOAT = 11
    DOUBLE = 12
    IFD = 13  # TIFF-EP sub-directory offset


# Field sizes in bytes
TAG_SIZES = {
    ExifTagType.BYTE: 1,
    ExifTagType.ASCII: 1,
    ExifTagType.SHORT: 2,
    ExifTagType.LONG: 4,
    ExifTagType.RATIONAL: 8,
    ExifTagType.SBYTE: 1,
    ExifTagType.UNDEFINED: 1,
    ExifTagType.SSHORT: 2,
    ExifTagType.SLONG: 4,
    ExifTagType.SRATIONAL: 8,
    ExifTagType.FLOAT: 4,
    ExifTagType.DOUBLE: 8,
    ExifTagType.IFD: 4,
}

INTEGER_TYPES = frozenset({
    ExifTagType.BYTE,
    ExifTagType.SHORT,
    ExifTagType.LONG,
    ExifTagType.SBYTE,
    ExifTagType.SSHORT,
    ExifTagType.SLONG,
    ExifTagType.IFD,
})

RATIONAL_TYPES = frozenset({ExifTagType.RATIONAL, ExifTagType.SRATIONAL})

FLOAT_TYPES = frozenset({ExifTagType.FLOAT, ExifTagType.DOUBLE})


def tag_type_of(type_id: int) -> Optional[ExifTagType]:
    """Return the canonical type for a type id, or None for unknown ids."""
    try:
        return ExifTagType(type_id)
    except ValueError:
        return None


@dataclass(frozen=True)
class Rational:
    """
    A numerator/denominator pair.

    A zero denominator is kept as is: it represents an undefined ratio,
    not a decoding error.
    """
    numerator: int
    denominator: int

    @property
    def is_undefined(self) -> bool:
        return self.denominator == 0

    @property
    def value(self) -> Optional[float]:
        """Floating point value, or None when the denominator is zero."""
        if self.denominator == 0:
            return None
        return self.numerator / self.denominator

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


ValueData = Union[str, bytes, Tuple[Any, ...]]


@dataclass(frozen=True)
class TagValue:
    """
    Decoded value of a directory entry.

    Attributes:
        type_id: Field type as declared in the directory entry
        count: Declared number of elements
        values: ``str`` for ASCII, ``bytes`` for UNDEFINED and unknown
            type ids, otherwise a tuple of ints, floats or Rationals
        byte_order: Byte order of the blob the value came from
        invalid: True when the value's storage was out of bounds; ``values``
            then holds the raw 4-byte value field
        lossy: True when ASCII bytes were not valid text and were
            decoded with replacement characters
    """
    type_id: int
    count: int
    values: ValueData
    byte_order: ByteOrder = ByteOrder.LITTLE
    invalid: bool = False
    lossy: bool = False

    @property
    def tag_type(self) -> Optional[ExifTagType]:
        return tag_type_of(self.type_id)

    @property
    def is_unknown_type(self) -> bool:
        return self.tag_type is None

    @property
    def is_text(self) -> bool:
        return isinstance(self.values, str)

    @property
    def is_bytes(self) -> bool:
        return isinstance(self.values, bytes)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    @property
    def first(self) -> Any:
        """First element, or None for an empty value."""
        if self.invalid or len(self.values) == 0:
            return None
        return self.values[0]

    def to_int(self, index: int = 0) -> Optional[int]:
        """
        Get an element as an integer.

        Out of range indexes, text and non-integer types return None.
        Bytes of UNDEFINED values are returned as integers.
        """
        if self.invalid or self.is_text or index >= len(self.values):
            return None
        item = self.values[index]
        if isinstance(item, int):
            return item
        return None

    def to_float(self, index: int = 0) -> Optional[float]:
        """
        Get an element as a floating point number.

        Undefined rationals, out of range indexes and text return None.
        """
        if self.invalid or self.is_text or index >= len(self.values):
            return None
        item = self.values[index]
        if isinstance(item, Rational):
            return item.value
        return float(item)

    def __str__(self) -> str:
        from exifwalk.value_formatter import render_generic
        return render_generic(self)


@dataclass(frozen=True)
class RawDirectoryEntry:
    """One 12-byte directory record, undecoded."""
    tag_id: int
    type_id: int
    count: int
    value_field: bytes
    offset: int = 0


@dataclass(frozen=True)
class TiffHeader:
    """Decoded 8-byte TIFF header."""
    byte_order: ByteOrder
    first_ifd_offset: int


class WarningKind(Enum):
    """Non-fatal quality degradations."""
    UNKNOWN_TAG = "unknown_tag"
    UNEXPECTED_TYPE = "unexpected_type"
    UNDEFINED_RATIONAL = "undefined_rational"
    UNKNOWN_CODE = "unknown_code"
    LOSSY_TEXT = "lossy_text"
    VALUE_OUT_OF_BOUNDS = "value_out_of_bounds"
    BAD_POINTER = "bad_pointer"
    MISSING_NEXT_IFD = "missing_next_ifd"
    DIRECTORY_LIMIT = "directory_limit"
    UNEXPECTED_COUNT = "unexpected_count"


@dataclass(frozen=True)
class ParseWarning:
    """A non-fatal problem noticed while decoding one entry or directory."""
    kind: WarningKind
    ifd: IfdKind
    tag_id: Optional[int] = None
    message: str = ""

    def __str__(self) -> str:
        where = self.ifd.value
        if self.tag_id is not None:
            where = f"{where}:0x{self.tag_id:04X}"
        return f"[{where}] {self.message or self.kind.value}"


@dataclass
class ExifEntry:
    """
    One decoded EXIF tag.

    Attributes:
        ifd: Directory the entry was found in
        tag_id: Numeric tag
        tag_name: Registry name, or a generic ``Unknown_XXXX`` name
        value: Decoded typed value
        readable: Human-readable rendering of the value
        unit: Unit of the raw value, empty when not applicable
        error: Set when the entry could not be decoded completely
    """
    ifd: IfdKind
    tag_id: int
    tag_name: str
    value: TagValue
    readable: str = ""
    unit: str = ""
    error: Optional[ErrorKind] = None

    @property
    def key(self) -> str:
        """Group-qualified name, e.g. ``Exif:ExposureTime``."""
        return f"{self.ifd.value}:{self.tag_name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ifd': self.ifd.value,
            'tag_id': self.tag_id,
            'tag': self.tag_name,
            'value': self.readable,
            'unit': self.unit,
            'error': self.error.value if self.error else None,
        }


@dataclass
class ExifData:
    """
    Result of parsing one image.

    ``errors`` holds the structural errors met while walking directories;
    ``entries`` always holds everything decoded before and after them.
    """
    mime: str
    entries: List[ExifEntry] = field(default_factory=list)
    little_endian: bool = True
    warnings: List[ParseWarning] = field(default_factory=list)
    errors: List[StructureError] = field(default_factory=list)
    thumbnail: Optional[bytes] = None

    @property
    def complete(self) -> bool:
        """True when no structural error stopped any part of the walk."""
        return not self.errors

    @property
    def error(self) -> Optional[StructureError]:
        """First structural error, if any."""
        return self.errors[0] if self.errors else None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ExifEntry]:
        return iter(self.entries)

    def get(self, tag_name: str, ifd: Optional[IfdKind] = None) -> Optional[ExifEntry]:
        """
        Find the first entry with a given tag name.

        Args:
            tag_name: Tag name (e.g., "Orientation") or group-qualified
                key (e.g., "IFD0:Orientation")
            ifd: Optional directory to restrict the search to

        Returns:
            Matching entry or None
        """
        for entry in self.entries:
            if ifd is not None and entry.ifd is not ifd:
                continue
            if entry.tag_name == tag_name or entry.key == tag_name:
                return entry
        return None

    def by_ifd(self, ifd: IfdKind) -> List[ExifEntry]:
        return [entry for entry in self.entries if entry.ifd is ifd]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mime': self.mime,
            'byte_order': 'little-endian' if self.little_endian else 'big-endian',
            'entries': [entry.to_dict() for entry in self.entries],
            'warnings': [str(warning) for warning in self.warnings],
            'errors': [
                {'kind': error.kind.value if error.kind else None, 'message': error.message}
                for error in self.errors
            ],
            'thumbnail_size': len(self.thumbnail) if self.thumbnail is not None else None,
        }
