# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD walker

Traverses the chain and tree of Image File Directories inside a TIFF blob:
IFD0 and the IFDs linked after it, plus the Exif, GPS and Interoperability
sub-directories they point to. Every directory entry is decoded, looked up
in the tag registry and formatted as it is discovered.

Malformed structures are handled per branch: a directory offset seen twice
(loop) or a directory running past the end of the blob (truncation) stops
only the chain it belongs to. Entries decoded before, and in other
branches, are kept.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from typing import Dict, List, Optional, Set, Tuple

from exifwalk.config import DEFAULT_CONFIG, ExifConfig
from exifwalk.entry_decoder import (
    ENTRY_SIZE,
    decode_entry,
    invalid_value,
    read_directory_entry,
    read_offset,
)
from exifwalk.exceptions import (
    IfdLoopError,
    StructureError,
    TruncatedIfdError,
    ValueOutOfBoundsError,
)
from exifwalk.exif_tags import describe_tag, lookup_tag, pointer_target
from exifwalk.exif_types import (
    INTEGER_TYPES,
    ByteOrder,
    ExifEntry,
    IfdKind,
    ParseWarning,
    RawDirectoryEntry,
    TagValue,
    WarningKind,
)
from exifwalk.value_formatter import render_value

logger = logging.getLogger(__name__)

THUMBNAIL_OFFSET_TAG = 0x0201
THUMBNAIL_LENGTH_TAG = 0x0202

DecodedEntry = Tuple[RawDirectoryEntry, TagValue, Optional[ValueOutOfBoundsError]]


class IfdWalker:
    """
    Walks the directories of one TIFF blob.

    A walker is single-use: its visited-offset set, entries, warnings and
    errors belong to one parse and are never shared.
    """

    def __init__(self, blob: bytes, byte_order: ByteOrder, config: Optional[ExifConfig] = None):
        """
        Initialize the walker.

        Args:
            blob: TIFF blob; all offsets are relative to its start
            byte_order: Byte order read from the TIFF header
            config: Decoding and formatting configuration
        """
        self.blob = blob
        self.byte_order = byte_order
        self.config = config or DEFAULT_CONFIG
        self.visited: Set[int] = set()
        self.entries: List[ExifEntry] = []
        self.warnings: List[ParseWarning] = []
        self.errors: List[StructureError] = []
        self.directories_read = 0

    def walk(self, first_ifd_offset: int) -> List[ExifEntry]:
        """
        Walk every directory reachable from IFD0.

        Args:
            first_ifd_offset: Offset of IFD0 from the TIFF header

        Returns:
            Entries in discovery order; see ``errors`` for structural problems
        """
        self._walk_chain(first_ifd_offset, IfdKind.ROOT)
        return self.entries

    def thumbnail(self) -> Optional[bytes]:
        """
        Return the JPEG thumbnail referenced by IFD1, if it lies inside the blob.
        """
        start = length = None
        for entry in self.entries:
            if entry.ifd is not IfdKind.THUMBNAIL or entry.error is not None:
                continue
            if entry.tag_id == THUMBNAIL_OFFSET_TAG:
                start = entry.value.to_int(0)
            elif entry.tag_id == THUMBNAIL_LENGTH_TAG:
                length = entry.value.to_int(0)
        if start is None or not length:
            return None
        if start + length > len(self.blob):
            logger.debug("Thumbnail at %d (%d bytes) exceeds blob", start, length)
            return None
        return self.blob[start:start + length]

    def _walk_chain(self, offset: int, ifd: IfdKind) -> None:
        """Read a directory and the directories linked after it."""
        kind = ifd
        while offset:
            try:
                next_offset = self._read_directory(offset, kind)
            except (IfdLoopError, TruncatedIfdError) as e:
                logger.warning("Stopped walking %s directories: %s", kind.value, e.message)
                self.errors.append(e)
                return
            if next_offset is None:
                return
            # IFD1, linked after IFD0, describes the thumbnail image
            if kind is IfdKind.ROOT:
                kind = IfdKind.THUMBNAIL
            offset = next_offset

    def _read_directory(self, offset: int, ifd: IfdKind) -> Optional[int]:
        """
        Read one directory, recursing into the sub-directories it points to.

        Returns:
            Offset of the next directory in the chain (0 for none), or None
            when the chain cannot be followed any further

        Raises:
            IfdLoopError: If the offset was already visited in this walk
            TruncatedIfdError: If the directory runs past the end of the blob
        """
        if offset in self.visited:
            raise IfdLoopError(f"{ifd.value} directory at offset {offset} already visited", offset)
        if self.directories_read >= self.config.max_directories:
            self._warn(WarningKind.DIRECTORY_LIMIT, ifd, None,
                       f"Directory limit of {self.config.max_directories} reached")
            return None
        self.visited.add(offset)
        self.directories_read += 1

        if offset + 2 > len(self.blob):
            raise TruncatedIfdError(
                f"{ifd.value} directory offset {offset} beyond {len(self.blob)}-byte blob", offset
            )
        count = struct.unpack_from(f'{self.byte_order.value}H', self.blob, offset)[0]
        table_end = offset + 2 + count * ENTRY_SIZE
        available = min(count, (len(self.blob) - offset - 2) // ENTRY_SIZE)
        logger.debug("Reading %s directory at offset %d with %d entries", ifd.value, offset, count)

        decoded = [
            self._decode(read_directory_entry(self.blob, offset + 2 + i * ENTRY_SIZE, self.byte_order))
            for i in range(available)
        ]
        siblings: Dict[int, TagValue] = {}
        for raw, value, error in decoded:
            if error is None:
                siblings.setdefault(raw.tag_id, value)

        for raw, value, error in decoded:
            self.entries.append(self._make_entry(ifd, raw, value, error, siblings))
            target = pointer_target(ifd, raw.tag_id)
            if target is not None and error is None:
                self._follow_pointer(ifd, raw, value, target)

        if available < count:
            raise TruncatedIfdError(
                f"{ifd.value} directory at offset {offset} declares {count} entries, "
                f"only {available} fit in the blob",
                offset,
            )

        if table_end + 4 > len(self.blob):
            self._warn(WarningKind.MISSING_NEXT_IFD, ifd, None,
                       f"Next-directory pointer after offset {table_end} is missing")
            return None
        return read_offset(self.blob[table_end:table_end + 4], self.byte_order)

    def _decode(self, raw: RawDirectoryEntry) -> DecodedEntry:
        try:
            return raw, decode_entry(raw, self.blob, self.byte_order), None
        except ValueOutOfBoundsError as e:
            return raw, invalid_value(raw, self.byte_order), e

    def _follow_pointer(self, ifd: IfdKind, raw: RawDirectoryEntry, value: TagValue,
                        target: IfdKind) -> None:
        """Walk the sub-directory a pointer tag refers to."""
        offset = None
        if value.tag_type in INTEGER_TYPES:
            offset = value.to_int(0)
        if offset is None:
            self._warn(WarningKind.BAD_POINTER, ifd, raw.tag_id,
                       f"Pointer to {target.value} directory has unusable type {raw.type_id}")
            return
        if offset == 0:
            return
        logger.debug("Following %s pointer to offset %d", target.value, offset)
        self._walk_chain(offset, target)

    def _make_entry(self, ifd: IfdKind, raw: RawDirectoryEntry, value: TagValue,
                    error: Optional[ValueOutOfBoundsError],
                    siblings: Dict[int, TagValue]) -> ExifEntry:
        descriptor = lookup_tag(ifd, raw.tag_id)
        if descriptor is None:
            descriptor = describe_tag(ifd, raw.tag_id)
            self._warn(WarningKind.UNKNOWN_TAG, ifd, raw.tag_id, "Unrecognized tag")
        elif error is None and not descriptor.accepts(value.tag_type):
            self._warn(WarningKind.UNEXPECTED_TYPE, ifd, raw.tag_id,
                       f"{descriptor.name} stored with unexpected type {raw.type_id}")
        if error is None and not descriptor.accepts_count(raw.count):
            self._warn(WarningKind.UNEXPECTED_COUNT, ifd, raw.tag_id,
                       f"{descriptor.name} stored with unexpected count {raw.count}")

        if error is not None:
            self._warn(WarningKind.VALUE_OUT_OF_BOUNDS, ifd, raw.tag_id, error.message)

        reference = None
        if descriptor.reference_tag is not None:
            reference = siblings.get(descriptor.reference_tag)

        readable, degradations = render_value(value, descriptor, reference, self.config)
        for kind in degradations:
            self._warn(kind, ifd, raw.tag_id, f"{descriptor.name}: {kind.value.replace('_', ' ')}")

        return ExifEntry(
            ifd=ifd,
            tag_id=raw.tag_id,
            tag_name=descriptor.name,
            value=value,
            readable=readable,
            unit=descriptor.unit,
            error=error.kind if error is not None else None,
        )

    def _warn(self, kind: WarningKind, ifd: IfdKind, tag_id: Optional[int], message: str) -> None:
        logger.debug("%s", message)
        self.warnings.append(ParseWarning(kind, ifd, tag_id, message))
