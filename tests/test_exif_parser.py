"""
Integration tests for the top-level parser.
"""

import pytest

from exifwalk import (
    ExifConfig,
    ExifParser,
    IfdKind,
    InvalidFormatError,
    JpegWithoutExifError,
    MetadataReadError,
    Rational,
    UnknownFileTypeError,
    parse_exif,
    parse_file,
)
from exifwalk.exceptions import ErrorKind
from tests.tiff_builder import TiffBuilder, orientation_tiff, wrap_jpeg

SHORT, LONG, ASCII, RATIONAL = 3, 4, 2, 5

# Little-endian header, IFD0 at 8, one Orientation entry, no next directory
ORIENTATION_TIFF = (
    b'II*\x00\x08\x00\x00\x00'
    b'\x01\x00'
    b'\x12\x01\x03\x00\x01\x00\x00\x00\x01\x00\x00\x00'
    b'\x00\x00\x00\x00'
)


def gps_tiff():
    builder = TiffBuilder()
    ifd0, gps = builder.add_ifd(), builder.add_ifd()
    builder.pointer(ifd0, 0x8825, gps)
    builder.entry(gps, 0x0001, ASCII, 'N')
    builder.entry(gps, 0x0002, RATIONAL, [(40, 1), (26, 1), (46, 1)])
    return builder.build()


class TestScenarios:
    """End-to-end decoding of small images."""

    def test_orientation_in_tiff(self):
        """Test a TIFF with a single Orientation entry."""
        data = parse_exif(ORIENTATION_TIFF)

        assert data.mime == 'image/tiff'
        assert len(data) == 1
        assert data.entries[0].tag_name == 'Orientation'
        assert data.entries[0].readable == 'Top-left'
        assert data.complete
        assert data.error is None

    def test_exif_in_jpeg(self):
        """Test a JPEG carrying the same blob in APP1."""
        data = parse_exif(wrap_jpeg(ORIENTATION_TIFF))

        assert data.mime == 'image/jpeg'
        assert data.get('Orientation').readable == 'Top-left'

    def test_gps_latitude(self):
        """Test GPS latitude converted to decimal degrees."""
        data = parse_exif(gps_tiff())
        latitude = data.get('GPSLatitude', IfdKind.GPS)

        assert latitude.readable == '40.446111'
        assert latitude.unit == 'D/M/S'

    def test_zero_denominator(self):
        """Test that a zero-denominator rational is kept and rendered as undefined."""
        builder = TiffBuilder()
        ifd0 = builder.add_ifd()
        builder.entry(ifd0, 0x011A, RATIONAL, [(72, 0)])
        data = parse_exif(builder.build())
        resolution = data.get('XResolution')

        assert resolution.value.values == (Rational(72, 0),)
        assert resolution.readable == 'undefined'
        assert data.complete


class TestParseExif:
    """Tests for parse_exif results."""

    def test_idempotent(self):
        """Test that parsing the same bytes twice gives equal results."""
        blob = gps_tiff()

        assert parse_exif(blob).entries == parse_exif(blob).entries

    def test_byte_order_reported(self):
        """Test the little_endian flag."""
        assert parse_exif(orientation_tiff()).little_endian
        assert not parse_exif(orientation_tiff(little_endian=False)).little_endian

    def test_partial_result_on_loop(self):
        """Test that a loop is reported next to the entries read before it."""
        builder = TiffBuilder()
        ifd0 = builder.add_ifd()
        builder.entry(ifd0, 0x0112, SHORT, [3])
        builder.link(ifd0, ifd0)
        data = parse_exif(builder.build())

        assert not data.complete
        assert data.error.kind is ErrorKind.IFD_LOOP
        assert data.get('Orientation').readable == 'Bottom-right'

    def test_get_by_key_and_directory(self):
        """Test entry lookups by name, key and directory."""
        builder = TiffBuilder()
        ifd0, ifd1 = builder.add_ifd(), builder.add_ifd()
        builder.entry(ifd0, 0x0112, SHORT, [1])
        builder.entry(ifd1, 0x0112, SHORT, [8])
        builder.link(ifd0, ifd1)
        data = parse_exif(builder.build())

        assert data.get('Orientation').readable == 'Top-left'
        assert data.get('IFD1:Orientation').readable == 'Left-bottom'
        assert data.get('Orientation', IfdKind.THUMBNAIL).readable == 'Left-bottom'
        assert data.get('Make') is None
        assert len(data.by_ifd(IfdKind.THUMBNAIL)) == 1

    def test_to_dict(self):
        """Test the JSON-friendly rendering."""
        result = parse_exif(ORIENTATION_TIFF).to_dict()

        assert result['mime'] == 'image/tiff'
        assert result['byte_order'] == 'little-endian'
        assert result['entries'] == [{
            'ifd': 'IFD0',
            'tag_id': 0x0112,
            'tag': 'Orientation',
            'value': 'Top-left',
            'unit': '',
            'error': None,
        }]
        assert result['errors'] == []

    def test_thumbnail(self):
        """Test thumbnail extraction and its configuration switch."""
        jpeg = b'\xff\xd8' + b'\x00' * 6 + b'\xff\xd9'
        builder = TiffBuilder(preamble=jpeg)
        ifd0, ifd1 = builder.add_ifd(), builder.add_ifd()
        builder.entry(ifd1, 0x0201, LONG, [8])
        builder.entry(ifd1, 0x0202, LONG, [len(jpeg)])
        builder.link(ifd0, ifd1)
        blob = builder.build()

        assert parse_exif(blob).thumbnail == jpeg
        assert parse_exif(blob, ExifConfig(extract_thumbnail=False)).thumbnail is None


class TestFatalErrors:
    """Tests for inputs that cannot be decoded at all."""

    def test_unknown_file_type(self):
        """Test data that is neither JPEG nor TIFF."""
        with pytest.raises(UnknownFileTypeError):
            parse_exif(b'\x89PNG\r\n\x1a\n')

    def test_jpeg_without_exif(self):
        """Test a JPEG without an Exif segment."""
        with pytest.raises(JpegWithoutExifError):
            parse_exif(wrap_jpeg(None))

    def test_invalid_tiff_header(self):
        """Test a blob with a wrong magic number."""
        with pytest.raises(InvalidFormatError):
            parse_exif(b'II+\x00\x08\x00\x00\x00\x00\x00')

    def test_fatal_errors_share_a_base(self):
        """Test that every fatal error is a MetadataReadError."""
        for data in (b'xx', wrap_jpeg(None), b'MM\x00\x2b\x00\x00\x00\x08\x00\x00'):
            with pytest.raises(MetadataReadError):
                parse_exif(data)


class TestExifParser:
    """Tests for the ExifParser class and parse_file."""

    def test_read_file_data(self):
        """Test parsing in-memory data."""
        data = ExifParser(file_data=ORIENTATION_TIFF).read()

        assert data.get('Orientation').readable == 'Top-left'

    def test_read_file_path(self, tmp_path):
        """Test parsing a file from disk."""
        path = tmp_path / 'photo.jpg'
        path.write_bytes(wrap_jpeg(ORIENTATION_TIFF))

        assert ExifParser(file_path=str(path)).read().mime == 'image/jpeg'
        assert parse_file(path).get('Orientation').readable == 'Top-left'

    def test_no_input(self):
        """Test that a parser without input raises."""
        with pytest.raises(MetadataReadError):
            ExifParser().read()

    def test_empty_file_data(self):
        """Test that empty content is treated as an unrecognised file."""
        with pytest.raises(UnknownFileTypeError):
            ExifParser(file_data=b'').read()

    def test_empty_file(self, tmp_path):
        """Test that an empty file on disk is treated as an unrecognised file."""
        path = tmp_path / 'empty.jpg'
        path.write_bytes(b'')

        with pytest.raises(UnknownFileTypeError):
            ExifParser(file_path=str(path)).read()

    def test_missing_file(self, tmp_path):
        """Test that an unreadable file raises MetadataReadError."""
        with pytest.raises(MetadataReadError) as exc_info:
            parse_file(tmp_path / 'missing.jpg')

        assert 'missing.jpg' in exc_info.value.message

    def test_config_is_applied(self):
        """Test that the parser passes its configuration on."""
        parser = ExifParser(file_data=gps_tiff(), config=ExifConfig(gps_precision=3))

        assert parser.read().get('GPSLatitude').readable == '40.446'
