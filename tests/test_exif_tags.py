"""
Unit tests for the tag registry.
"""

import pytest

from exifwalk.exif_tags import (
    TAG_REGISTRY,
    ValueKind,
    describe_tag,
    find_tag,
    lookup_tag,
    pointer_target,
    unknown_tag_name,
)
from exifwalk.exif_types import ExifTagType, IfdKind


class TestLookupTag:
    """Tests for registry lookups."""

    def test_root_tag(self):
        """Test a well-known IFD0 tag."""
        descriptor = lookup_tag(IfdKind.ROOT, 0x0112)

        assert descriptor.name == 'Orientation'
        assert descriptor.kind is ValueKind.ENUMERATED
        assert descriptor.labels[1] == 'Top-left'

    def test_thumbnail_directory_uses_image_tags(self):
        """Test that IFD1 shares the IFD0 tag table."""
        assert lookup_tag(IfdKind.THUMBNAIL, 0x0201).name == 'JPEGInterchangeFormat'

    def test_same_id_differs_by_directory(self):
        """Test that tag 0x0001 means different things in GPS and Interop."""
        assert lookup_tag(IfdKind.GPS, 0x0001).name == 'GPSLatitudeRef'
        assert lookup_tag(IfdKind.INTEROPERABILITY, 0x0001).name == 'InteroperabilityIndex'
        assert lookup_tag(IfdKind.ROOT, 0x0001) is None

    def test_unregistered_tag(self):
        """Test that unknown tags return None."""
        assert lookup_tag(IfdKind.EXIF, 0xBEEF) is None

    def test_expected_types(self):
        """Test the expected-type check of a descriptor."""
        descriptor = lookup_tag(IfdKind.EXIF, 0x829A)

        assert descriptor.accepts(ExifTagType.RATIONAL)
        assert not descriptor.accepts(ExifTagType.ASCII)

    def test_pointer_tags_accept_ifd_type(self):
        """Test that pointer tags accept the TIFF-EP IFD field type."""
        descriptor = lookup_tag(IfdKind.ROOT, 0x8769)

        assert descriptor.accepts(ExifTagType.IFD)
        assert descriptor.accepts(ExifTagType.LONG)
        assert not descriptor.accepts(ExifTagType.RATIONAL)

    def test_count_bounds(self):
        """Test the element count check of a descriptor."""
        orientation = lookup_tag(IfdKind.ROOT, 0x0112)
        iso = lookup_tag(IfdKind.EXIF, 0x8827)
        latitude = lookup_tag(IfdKind.GPS, 0x0002)

        assert (orientation.min_count, orientation.max_count) == (1, 1)
        assert orientation.accepts_count(1)
        assert not orientation.accepts_count(2)
        assert not orientation.accepts_count(0)
        assert iso.accepts_count(3)
        assert not iso.accepts_count(4)
        assert (latitude.min_count, latitude.max_count) == (3, 3)

    def test_unbounded_counts(self):
        """Test that text and unregistered tags accept any count."""
        assert lookup_tag(IfdKind.ROOT, 0x010F).accepts_count(500)
        assert describe_tag(IfdKind.ROOT, 0xABCD).accepts_count(0)

    def test_count_bounds_are_ordered(self):
        """Test that every registered range has min <= max."""
        for descriptor in TAG_REGISTRY.values():
            if descriptor.min_count is not None:
                assert 1 <= descriptor.min_count <= descriptor.max_count


class TestDescribeTag:
    """Tests for the generic fallback descriptor."""

    def test_generic_name(self):
        """Test the name given to unregistered tags."""
        descriptor = describe_tag(IfdKind.ROOT, 0xABCD)

        assert descriptor.name == 'Unknown_ABCD'
        assert descriptor.kind is ValueKind.NUMERIC
        assert descriptor.accepts(ExifTagType.ASCII)

    def test_name_is_zero_padded(self):
        """Test that short ids are padded to four hex digits."""
        assert unknown_tag_name(0x2A) == 'Unknown_002A'

    def test_registered_tag_is_returned(self):
        """Test that registered tags are not replaced."""
        assert describe_tag(IfdKind.GPS, 0x0002).name == 'GPSLatitude'


class TestRegistry:
    """Tests for registry-wide properties."""

    def test_find_by_name(self):
        """Test reverse lookup by canonical name."""
        matches = find_tag('ExposureTime')

        assert len(matches) == 1
        assert matches[0].tag_id == 0x829A
        assert matches[0].ifd is IfdKind.EXIF

    def test_pointer_tags(self):
        """Test the sub-directory pointer tags."""
        assert pointer_target(IfdKind.ROOT, 0x8769) is IfdKind.EXIF
        assert pointer_target(IfdKind.ROOT, 0x8825) is IfdKind.GPS
        assert pointer_target(IfdKind.THUMBNAIL, 0x8769) is IfdKind.EXIF
        assert pointer_target(IfdKind.EXIF, 0xA005) is IfdKind.INTEROPERABILITY
        assert pointer_target(IfdKind.ROOT, 0x0112) is None

    def test_registry_is_read_only(self):
        """Test that the registry and its label tables cannot be modified."""
        with pytest.raises(TypeError):
            TAG_REGISTRY[(IfdKind.ROOT, 0xFFFF)] = None
        with pytest.raises(TypeError):
            lookup_tag(IfdKind.ROOT, 0x0112).labels[9] = 'Mirrored'

    def test_gps_coordinates_reference_their_hemisphere(self):
        """Test that coordinate tags name their reference sibling."""
        assert lookup_tag(IfdKind.GPS, 0x0002).reference_tag == 0x0001
        assert lookup_tag(IfdKind.GPS, 0x0004).reference_tag == 0x0003

    def test_keys_match_descriptors(self):
        """Test that every key agrees with its descriptor."""
        for (ifd, tag_id), descriptor in TAG_REGISTRY.items():
            assert descriptor.ifd is ifd
            assert descriptor.tag_id == tag_id
