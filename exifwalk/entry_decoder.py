# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Directory entry decoder

Turns a 12-byte directory record into a typed value, reading the value
either from the record itself (up to 4 bytes) or from the offset it
points to.

Copyright 2025 DNAi inc.
"""

import struct
from typing import Tuple

from exifwalk.exceptions import ValueOutOfBoundsError
from exifwalk.exif_types import (
    ByteOrder,
    ExifTagType,
    RawDirectoryEntry,
    Rational,
    TAG_SIZES,
    TagValue,
    tag_type_of,
)

ENTRY_SIZE = 12

# struct codes for the fixed-width numeric types
_STRUCT_CODES = {
    ExifTagType.BYTE: 'B',
    ExifTagType.SBYTE: 'b',
    ExifTagType.SHORT: 'H',
    ExifTagType.SSHORT: 'h',
    ExifTagType.LONG: 'I',
    ExifTagType.SLONG: 'i',
    ExifTagType.FLOAT: 'f',
    ExifTagType.DOUBLE: 'd',
    ExifTagType.IFD: 'I',
    ExifTagType.RATIONAL: 'I',
    ExifTagType.SRATIONAL: 'i',
}


def type_width(type_id: int) -> int:
    """Size in bytes of one element; unknown type ids count as single bytes."""
    tag_type = tag_type_of(type_id)
    if tag_type is None:
        return 1
    return TAG_SIZES[tag_type]


def read_directory_entry(blob: bytes, offset: int, byte_order: ByteOrder) -> RawDirectoryEntry:
    """
    Unpack the 12-byte directory record at ``offset``.

    The caller is responsible for checking that the record lies inside
    the blob.
    """
    tag_id, type_id, count, value_field = struct.unpack_from(
        f'{byte_order.value}HHI4s', blob, offset
    )
    return RawDirectoryEntry(tag_id, type_id, count, value_field, offset)


def read_offset(value_field: bytes, byte_order: ByteOrder) -> int:
    """Interpret a 4-byte value field as an unsigned offset."""
    return struct.unpack(f'{byte_order.value}I', value_field)[0]


def decode_text(data: bytes) -> Tuple[str, bool]:
    """
    Decode ASCII field bytes.

    One trailing NUL terminator is dropped. Bytes that are not valid
    UTF-8 are decoded with replacement characters.

    Returns:
        Tuple of (text, lossy)
    """
    if data.endswith(b'\x00'):
        data = data[:-1]
    try:
        return data.decode('utf-8'), False
    except UnicodeDecodeError:
        return data.decode('utf-8', errors='replace'), True


def decode_value(type_id: int, count: int, data: bytes, byte_order: ByteOrder) -> TagValue:
    """
    Decode exactly ``width * count`` bytes into a typed value.

    Args:
        type_id: Field type from the directory record
        count: Number of elements
        data: Value bytes
        byte_order: Byte order of the blob

    Returns:
        TagValue holding the decoded elements
    """
    tag_type = tag_type_of(type_id)

    if tag_type is None or tag_type == ExifTagType.UNDEFINED:
        return TagValue(type_id, count, bytes(data), byte_order)

    if tag_type == ExifTagType.ASCII:
        text, lossy = decode_text(data)
        return TagValue(type_id, count, text, byte_order, lossy=lossy)

    code = _STRUCT_CODES[tag_type]
    if tag_type in (ExifTagType.RATIONAL, ExifTagType.SRATIONAL):
        numbers = struct.unpack(f'{byte_order.value}{count * 2}{code}', data)
        values = tuple(
            Rational(numbers[i], numbers[i + 1]) for i in range(0, len(numbers), 2)
        )
    else:
        values = struct.unpack(f'{byte_order.value}{count}{code}', data)

    return TagValue(type_id, count, tuple(values), byte_order)


def value_location(raw: RawDirectoryEntry, byte_order: ByteOrder) -> Tuple[bool, int, int]:
    """
    Work out where an entry's value is stored.

    Returns:
        Tuple of (inline, offset, size); ``offset`` is meaningless when
        the value is inline
    """
    size = type_width(raw.type_id) * raw.count
    if size <= 4:
        return True, 0, size
    return False, read_offset(raw.value_field, byte_order), size


def decode_entry(raw: RawDirectoryEntry, blob: bytes, byte_order: ByteOrder) -> TagValue:
    """
    Decode a directory record into a typed value.

    Args:
        raw: Directory record
        blob: TIFF blob all offsets are relative to
        byte_order: Byte order of the blob

    Returns:
        Decoded TagValue

    Raises:
        ValueOutOfBoundsError: If the value is stored indirectly and
            offset + size runs past the end of the blob
    """
    inline, offset, size = value_location(raw, byte_order)
    if inline:
        data = raw.value_field[:size]
    else:
        if offset + size > len(blob):
            raise ValueOutOfBoundsError(
                f"Value of tag 0x{raw.tag_id:04X} ({size} bytes at offset {offset}) "
                f"exceeds blob of {len(blob)} bytes",
                offset=offset,
                size=size,
            )
        data = blob[offset:offset + size]
    return decode_value(raw.type_id, raw.count, data, byte_order)


def invalid_value(raw: RawDirectoryEntry, byte_order: ByteOrder) -> TagValue:
    """Placeholder value for an entry whose storage could not be read."""
    return TagValue(raw.type_id, raw.count, raw.value_field, byte_order, invalid=True)
