"""
Builders for synthetic TIFF blobs and JPEG files used by the tests.
"""

import struct
from typing import List, Optional, Tuple, Union

ASCII = 2
UNDEFINED = 7
RATIONAL_TYPES = (5, 10)

STRUCT_CODES = {1: 'B', 3: 'H', 4: 'I', 6: 'b', 8: 'h', 9: 'i', 11: 'f', 12: 'd', 13: 'I'}


def encode_values(type_id: int, values, order: str) -> Tuple[bytes, int]:
    """
    Encode values of a field type.

    ``bytes`` are used as is (count = length); ``str`` gets a NUL
    terminator; rationals are ``(numerator, denominator)`` pairs.

    Returns:
        Tuple of (data, count)
    """
    if isinstance(values, (bytes, bytearray)):
        return bytes(values), len(values)
    if type_id == ASCII:
        data = values.encode('utf-8') + b'\x00'
        return data, len(data)
    if type_id in RATIONAL_TYPES:
        code = 'I' if type_id == 5 else 'i'
        data = b''.join(struct.pack(f'{order}2{code}', n, d) for n, d in values)
        return data, len(values)
    data = struct.pack(f'{order}{len(values)}{STRUCT_CODES[type_id]}', *values)
    return data, len(values)


class _Entry:
    def __init__(self, tag, type_id, count, data, target=None, offset=None):
        self.tag = tag
        self.type_id = type_id
        self.count = count
        self.data = data
        self.target = target
        self.offset = offset

    @property
    def stored_apart(self) -> bool:
        return self.target is None and self.offset is None and len(self.data) > 4


class _Directory:
    def __init__(self):
        self.entries: List[_Entry] = []
        self.next_index: Optional[int] = None
        self.next_offset: Optional[int] = None


class TiffBuilder:
    """
    Lays out directories one after another, each followed by the values
    that do not fit in its entries.

    Directories are referred to by the index returned from ``add_ifd``;
    the first one added is IFD0.
    """

    def __init__(self, little_endian: bool = True, preamble: bytes = b''):
        self.order = '<' if little_endian else '>'
        self.preamble = preamble
        self.directories: List[_Directory] = []

    def add_ifd(self) -> int:
        self.directories.append(_Directory())
        return len(self.directories) - 1

    def entry(self, ifd: int, tag: int, type_id: int, values,
              count: Optional[int] = None, offset: Optional[int] = None) -> 'TiffBuilder':
        """
        Add an entry.

        Args:
            count: Overrides the element count written to the entry
            offset: Writes this offset in the value field instead of
                storing the value
        """
        data, natural_count = encode_values(type_id, values, self.order)
        self.directories[ifd].entries.append(
            _Entry(tag, type_id, natural_count if count is None else count, data, offset=offset)
        )
        return self

    def pointer(self, ifd: int, tag: int, target: int, type_id: int = 4) -> 'TiffBuilder':
        """Add a 32-bit entry (LONG or IFD) holding the offset of directory ``target``."""
        self.directories[ifd].entries.append(_Entry(tag, type_id, 1, b'', target=target))
        return self

    def link(self, ifd: int, target: Optional[int] = None, offset: Optional[int] = None) -> 'TiffBuilder':
        """Set the next-directory pointer to a directory index or a raw offset."""
        self.directories[ifd].next_index = target
        self.directories[ifd].next_offset = offset
        return self

    def offsets(self) -> List[int]:
        """Offsets of every directory in the built blob."""
        result = []
        position = 8 + len(self.preamble)
        for directory in self.directories:
            result.append(position)
            position += 2 + 12 * len(directory.entries) + 4
            position += sum(len(e.data) for e in directory.entries if e.stored_apart)
        return result

    def build(self) -> bytes:
        order = self.order
        offsets = self.offsets()
        mark = b'II' if order == '<' else b'MM'
        out = bytearray(mark + struct.pack(f'{order}HI', 42, 8 + len(self.preamble)))
        out += self.preamble

        for directory, start in zip(self.directories, offsets):
            data_position = start + 2 + 12 * len(directory.entries) + 4
            table = bytearray(struct.pack(f'{order}H', len(directory.entries)))
            extra = bytearray()
            for e in directory.entries:
                if e.target is not None:
                    field = struct.pack(f'{order}I', offsets[e.target])
                elif e.offset is not None:
                    field = struct.pack(f'{order}I', e.offset)
                elif e.stored_apart:
                    field = struct.pack(f'{order}I', data_position + len(extra))
                    extra += e.data
                else:
                    field = e.data.ljust(4, b'\x00')
                table += struct.pack(f'{order}HHI', e.tag, e.type_id, e.count) + field

            if directory.next_index is not None:
                next_offset = offsets[directory.next_index]
            else:
                next_offset = directory.next_offset or 0
            table += struct.pack(f'{order}I', next_offset)
            out += table + extra

        return bytes(out)


def jpeg_segment(marker: int, payload: bytes) -> bytes:
    """One JPEG marker segment; the length field covers itself and the payload."""
    return struct.pack('>HH', marker, len(payload) + 2) + payload


def wrap_jpeg(tiff: Union[bytes, None], before: Tuple[bytes, ...] = ()) -> bytes:
    """
    Build a JPEG file: SOI, ``before`` segments, the Exif APP1 segment
    (when ``tiff`` is given), then a start-of-scan segment.
    """
    out = b'\xff\xd8' + b''.join(before)
    if tiff is not None:
        out += jpeg_segment(0xFFE1, b'Exif\x00\x00' + tiff)
    out += jpeg_segment(0xFFDA, b'\x00' * 10) + b'\x12\x34\xff\xd9'
    return out


def orientation_tiff(value: int = 1, little_endian: bool = True) -> bytes:
    """Single-directory TIFF holding only an Orientation entry."""
    builder = TiffBuilder(little_endian)
    ifd0 = builder.add_ifd()
    builder.entry(ifd0, 0x0112, 3, [value])
    return builder.build()
