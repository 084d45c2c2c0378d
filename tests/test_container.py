"""
Unit tests for the container locator.
"""

import pytest

from exifwalk.container import (
    MIME_JPEG,
    MIME_TIFF,
    detect_mime,
    find_exif_in_jpeg,
    locate_exif_blob,
)
from exifwalk.exceptions import ErrorKind, JpegWithoutExifError, UnknownFileTypeError
from tests.tiff_builder import jpeg_segment, orientation_tiff, wrap_jpeg


class TestDetectMime:
    """Tests for magic-byte detection."""

    def test_tiff_marks(self):
        """Test both TIFF byte order marks."""
        assert detect_mime(b'II*\x00') == MIME_TIFF
        assert detect_mime(b'MM\x00*') == MIME_TIFF

    def test_jpeg_soi(self):
        """Test the JPEG start-of-image marker."""
        assert detect_mime(b'\xff\xd8\xff\xe0') == MIME_JPEG

    def test_unknown(self):
        """Test data that is neither JPEG nor TIFF."""
        assert detect_mime(b'\x89PNG\r\n\x1a\n') is None
        assert detect_mime(b'') is None


class TestLocateExifBlob:
    """Tests for locating the TIFF blob."""

    def test_jpeg_app1_blob(self):
        """Test that the blob starts right after the Exif signature."""
        tiff = orientation_tiff()
        blob, mime = locate_exif_blob(wrap_jpeg(tiff))

        assert mime == 'image/jpeg'
        assert blob == tiff

    def test_tiff_is_whole_blob(self):
        """Test that a TIFF file is its own blob."""
        tiff = orientation_tiff()
        blob, mime = locate_exif_blob(tiff)

        assert mime == 'image/tiff'
        assert blob == tiff

    def test_skips_app0(self):
        """Test that a JFIF APP0 segment before APP1 is skipped."""
        tiff = orientation_tiff()
        app0 = jpeg_segment(0xFFE0, b'JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00')
        blob, _ = locate_exif_blob(wrap_jpeg(tiff, before=(app0,)))

        assert blob == tiff

    def test_skips_non_exif_app1(self):
        """Test that an XMP APP1 segment is not mistaken for EXIF."""
        tiff = orientation_tiff()
        xmp = jpeg_segment(0xFFE1, b'http://ns.adobe.com/xap/1.0/\x00<x:xmpmeta/>')
        blob, _ = locate_exif_blob(wrap_jpeg(tiff, before=(xmp,)))

        assert blob == tiff

    def test_fill_bytes_before_marker(self):
        """Test that 0xFF fill bytes between segments are skipped."""
        tiff = orientation_tiff()
        data = b'\xff\xd8' + b'\xff\xff' + jpeg_segment(0xFFE1, b'Exif\x00\x00' + tiff)
        start, end = find_exif_in_jpeg(data)

        assert data[start:end] == tiff

    def test_unknown_file_type(self):
        """Test that unrecognised data raises UnknownFileTypeError."""
        with pytest.raises(UnknownFileTypeError) as exc_info:
            locate_exif_blob(b'GIF89a\x00\x00')

        assert exc_info.value.kind is ErrorKind.UNKNOWN_FILE_TYPE


class TestJpegWithoutExif:
    """Tests for JPEG files that carry no EXIF segment."""

    def test_scan_reached(self):
        """Test that reaching start-of-scan stops the search."""
        with pytest.raises(JpegWithoutExifError) as exc_info:
            locate_exif_blob(wrap_jpeg(None))

        assert exc_info.value.kind is ErrorKind.JPEG_WITHOUT_EXIF

    def test_exif_after_scan_is_ignored(self):
        """Test that an APP1 segment after the scan data is never reached."""
        data = wrap_jpeg(None) + jpeg_segment(0xFFE1, b'Exif\x00\x00' + orientation_tiff())
        with pytest.raises(JpegWithoutExifError):
            locate_exif_blob(data)

    def test_soi_only(self):
        """Test a JPEG that ends right after SOI."""
        with pytest.raises(JpegWithoutExifError):
            locate_exif_blob(b'\xff\xd8')

    def test_truncated_segment(self):
        """Test a segment whose length runs past the end of the file."""
        data = b'\xff\xd8' + b'\xff\xe1\x01\x00' + b'Exif\x00\x00II'
        with pytest.raises(JpegWithoutExifError):
            locate_exif_blob(data)

    def test_invalid_segment_length(self):
        """Test a segment length smaller than the length field itself."""
        with pytest.raises(JpegWithoutExifError):
            locate_exif_blob(b'\xff\xd8\xff\xe0\x00\x01\x00\x00')

    def test_garbage_instead_of_marker(self):
        """Test data that does not start with a marker byte."""
        with pytest.raises(JpegWithoutExifError):
            locate_exif_blob(b'\xff\xd8\x00\x00\x00\x00')
