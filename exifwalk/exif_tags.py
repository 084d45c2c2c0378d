# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF tag registry

Static, read-only table of tag descriptors keyed by (directory, tag id).
Based on the TIFF 6.0 and EXIF 2.32 specifications.

Adding support for a tag means adding a row to the tables below.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from exifwalk.exif_types import ExifTagType, IfdKind


class ValueKind(Enum):
    """How the formatter interprets a tag's value."""
    NUMERIC = "numeric"
    TEXT = "text"
    ENUMERATED = "enumerated"
    BITMASK = "bitmask"
    DATETIME = "datetime"
    GPS_COMPONENT = "gps_component"
    GPS_COORDINATE = "gps_coordinate"
    COMPUTED = "computed"
    USER_COMMENT = "user_comment"
    BINARY = "binary"


@dataclass(frozen=True)
class TagDescriptor:
    """
    Registry record for one tag.

    Attributes:
        tag_id: Numeric tag
        ifd: Directory the tag is defined for
        name: Canonical tag name
        types: Field types the tag is expected to use (empty means any)
        kind: Formatting kind
        unit: Unit of the raw value
        labels: Code-to-label table for enumerated and bitmask kinds, or
            reference-code-to-unit table for reference-unit quantities
        reference_tag: Sibling tag whose value qualifies this one
            (hemisphere, altitude reference, speed unit)
        quantity: Name of the computation for COMPUTED tags
        pointer: Sub-directory the tag's value points to
        min_count: Fewest elements a well-formed value has
        max_count: Most elements a well-formed value has
    """
    tag_id: int
    ifd: IfdKind
    name: str
    types: Tuple[ExifTagType, ...] = ()
    kind: ValueKind = ValueKind.NUMERIC
    unit: str = ""
    labels: Optional[Mapping[Any, str]] = None
    reference_tag: Optional[int] = None
    quantity: Optional[str] = None
    pointer: Optional[IfdKind] = None
    min_count: Optional[int] = None
    max_count: Optional[int] = None

    def accepts(self, tag_type: Optional[ExifTagType]) -> bool:
        """True if values of ``tag_type`` are expected for this tag."""
        return not self.types or tag_type in self.types

    def accepts_count(self, count: int) -> bool:
        """True if ``count`` lies within the tag's element count bounds."""
        if self.min_count is not None and count < self.min_count:
            return False
        return self.max_count is None or count <= self.max_count


B = ExifTagType.BYTE
A = ExifTagType.ASCII
S = ExifTagType.SHORT
L = ExifTagType.LONG
R = ExifTagType.RATIONAL
U = ExifTagType.UNDEFINED
SR = ExifTagType.SRATIONAL

# Sub-directory pointer types; TIFF-EP adds IFD
PTR = (ExifTagType.LONG, ExifTagType.SHORT, ExifTagType.IFD)


# ============================================================
# Enumerated value tables
# ============================================================

NEW_SUBFILE_TYPE = {
    0x0: 'Full-resolution image',
    0x1: 'Reduced-resolution image',
    0x2: 'Single page of multi-page image',
    0x4: 'Transparency mask',
}

COMPRESSION = {
    1: 'Uncompressed',
    2: 'CCITT 1D',
    3: 'T4/Group 3 Fax',
    4: 'T6/Group 4 Fax',
    5: 'LZW',
    6: 'JPEG (old-style)',
    7: 'JPEG',
    8: 'Adobe Deflate',
    32773: 'PackBits',
}

PHOTOMETRIC_INTERPRETATION = {
    0: 'WhiteIsZero',
    1: 'BlackIsZero',
    2: 'RGB',
    3: 'RGB Palette',
    4: 'Transparency Mask',
    5: 'CMYK',
    6: 'YCbCr',
    8: 'CIELab',
}

ORIENTATION = {
    1: 'Top-left',
    2: 'Top-right',
    3: 'Bottom-right',
    4: 'Bottom-left',
    5: 'Left-top',
    6: 'Right-top',
    7: 'Right-bottom',
    8: 'Left-bottom',
}

PLANAR_CONFIGURATION = {
    1: 'Chunky format',
    2: 'Planar format',
}

RESOLUTION_UNIT = {
    1: 'No absolute unit',
    2: 'Inch',
    3: 'Centimeter',
}

YCBCR_POSITIONING = {
    1: 'Centered',
    2: 'Co-sited',
}

EXPOSURE_PROGRAM = {
    0: 'Not defined',
    1: 'Manual',
    2: 'Normal program',
    3: 'Aperture priority',
    4: 'Shutter priority',
    5: 'Creative program (biased toward depth of field)',
    6: 'Action program (biased toward fast shutter speed)',
    7: 'Portrait mode',
    8: 'Landscape mode',
}

SENSITIVITY_TYPE = {
    0: 'Unknown',
    1: 'Standard output sensitivity',
    2: 'Recommended exposure index',
    3: 'ISO speed',
    4: 'Standard output sensitivity and recommended exposure index',
    5: 'Standard output sensitivity and ISO speed',
    6: 'Recommended exposure index and ISO speed',
    7: 'Standard output sensitivity, recommended exposure index and ISO speed',
}

METERING_MODE = {
    0: 'Unknown',
    1: 'Average',
    2: 'Center-weighted average',
    3: 'Spot',
    4: 'Multi-spot',
    5: 'Pattern',
    6: 'Partial',
    255: 'Other',
}

LIGHT_SOURCE = {
    0: 'Unknown',
    1: 'Daylight',
    2: 'Fluorescent',
    3: 'Tungsten (incandescent light)',
    4: 'Flash',
    9: 'Fine weather',
    10: 'Cloudy weather',
    11: 'Shade',
    12: 'Daylight fluorescent (D 5700 - 7100K)',
    13: 'Day white fluorescent (N 4600 - 5500K)',
    14: 'Cool white fluorescent (W 3800 - 4500K)',
    15: 'White fluorescent (WW 3250 - 3800K)',
    16: 'Warm white fluorescent (L 2600 - 3250K)',
    17: 'Standard light A',
    18: 'Standard light B',
    19: 'Standard light C',
    20: 'D55',
    21: 'D65',
    22: 'D75',
    23: 'D50',
    24: 'ISO studio tungsten',
    255: 'Other light source',
}

COLOR_SPACE = {
    1: 'sRGB',
    0xFFFF: 'Uncalibrated',
}

SENSING_METHOD = {
    1: 'Not defined',
    2: 'One-chip color area sensor',
    3: 'Two-chip color area sensor',
    4: 'Three-chip color area sensor',
    5: 'Color sequential area sensor',
    7: 'Trilinear sensor',
    8: 'Color sequential linear sensor',
}

FILE_SOURCE = {
    0: 'Others',
    1: 'Scanner of transparent type',
    2: 'Scanner of reflex type',
    3: 'DSC',
}

SCENE_TYPE = {
    1: 'Directly photographed',
}

CUSTOM_RENDERED = {
    0: 'Normal process',
    1: 'Custom process',
}

EXPOSURE_MODE = {
    0: 'Auto exposure',
    1: 'Manual exposure',
    2: 'Auto bracket',
}

WHITE_BALANCE = {
    0: 'Auto white balance',
    1: 'Manual white balance',
}

SCENE_CAPTURE_TYPE = {
    0: 'Standard',
    1: 'Landscape',
    2: 'Portrait',
    3: 'Night scene',
}

GAIN_CONTROL = {
    0: 'None',
    1: 'Low gain up',
    2: 'High gain up',
    3: 'Low gain down',
    4: 'High gain down',
}

CONTRAST = {
    0: 'Normal',
    1: 'Soft',
    2: 'Hard',
}

SATURATION = {
    0: 'Normal',
    1: 'Low saturation',
    2: 'High saturation',
}

SHARPNESS = {
    0: 'Normal',
    1: 'Soft',
    2: 'Hard',
}

SUBJECT_DISTANCE_RANGE = {
    0: 'Unknown',
    1: 'Macro',
    2: 'Close view',
    3: 'Distant view',
}

GPS_LATITUDE_REF = {'N': 'North', 'S': 'South'}

GPS_LONGITUDE_REF = {'E': 'East', 'W': 'West'}

GPS_ALTITUDE_REF = {
    0: 'Above sea level',
    1: 'Below sea level',
}

GPS_STATUS = {
    'A': 'Measurement in progress',
    'V': 'Measurement interrupted',
}

GPS_MEASURE_MODE = {
    '2': '2-dimensional measurement',
    '3': '3-dimensional measurement',
}

GPS_SPEED_REF = {
    'K': 'Kilometers per hour',
    'M': 'Miles per hour',
    'N': 'Knots',
}

GPS_SPEED_UNITS = {'K': 'km/h', 'M': 'mph', 'N': 'knots'}

GPS_DIRECTION_REF = {
    'T': 'True direction',
    'M': 'Magnetic direction',
}

GPS_DISTANCE_REF = {
    'K': 'Kilometers',
    'M': 'Miles',
    'N': 'Nautical miles',
}

GPS_DISTANCE_UNITS = {'K': 'km', 'M': 'mi', 'N': 'nmi'}

GPS_DIFFERENTIAL = {
    0: 'Without correction',
    1: 'Correction applied',
}


def _tags(ifd: IfdKind, rows: List[tuple]) -> Dict[Tuple[IfdKind, int], TagDescriptor]:
    """
    Build registry rows: (tag_id, name, types, kind, extra-fields).

    A ``count`` extra field holds the (min, max) element count bounds.
    """
    table = {}
    for row in rows:
        tag_id, name, types, kind = row[:4]
        extra = row[4] if len(row) > 4 else {}
        if not isinstance(types, tuple):
            types = (types,)
        labels = extra.get('labels')
        if labels is not None:
            extra = dict(extra, labels=MappingProxyType(labels))
        bounds = extra.get('count')
        if bounds is not None:
            extra = {key: item for key, item in extra.items() if key != 'count'}
            extra['min_count'], extra['max_count'] = bounds
        table[(ifd, tag_id)] = TagDescriptor(tag_id, ifd, name, types, kind, **extra)
    return table


N = ValueKind.NUMERIC
T = ValueKind.TEXT
E = ValueKind.ENUMERATED
C = ValueKind.COMPUTED
BIN = ValueKind.BINARY
DT = ValueKind.DATETIME


# ============================================================
# IFD0 / IFD1 (image) tags
# ============================================================
_ROOT_TAGS = _tags(IfdKind.ROOT, [
    (0x00FE, 'NewSubfileType', L, ValueKind.BITMASK, {'labels': NEW_SUBFILE_TYPE}),
    (0x0100, 'ImageWidth', (S, L), N, {'unit': 'px'}),
    (0x0101, 'ImageLength', (S, L), N, {'unit': 'px'}),
    (0x0102, 'BitsPerSample', S, N),
    (0x0103, 'Compression', S, E, {'labels': COMPRESSION}),
    (0x0106, 'PhotometricInterpretation', S, E, {'labels': PHOTOMETRIC_INTERPRETATION}),
    (0x010E, 'ImageDescription', A, T),
    (0x010F, 'Make', A, T),
    (0x0110, 'Model', A, T),
    (0x0111, 'StripOffsets', (S, L), N),
    (0x0112, 'Orientation', S, E, {'count': (1, 1), 'labels': ORIENTATION}),
    (0x0115, 'SamplesPerPixel', S, N),
    (0x0116, 'RowsPerStrip', (S, L), N),
    (0x0117, 'StripByteCounts', (S, L), N, {'unit': 'bytes'}),
    (0x011A, 'XResolution', R, N, {'count': (1, 1)}),
    (0x011B, 'YResolution', R, N, {'count': (1, 1)}),
    (0x011C, 'PlanarConfiguration', S, E, {'labels': PLANAR_CONFIGURATION}),
    (0x0128, 'ResolutionUnit', S, E, {'count': (1, 1), 'labels': RESOLUTION_UNIT}),
    (0x012D, 'TransferFunction', S, N),
    (0x0131, 'Software', A, T),
    (0x0132, 'DateTime', A, DT),
    (0x013B, 'Artist', A, T),
    (0x013C, 'HostComputer', A, T),
    (0x013E, 'WhitePoint', R, N, {'count': (2, 2)}),
    (0x013F, 'PrimaryChromaticities', R, N, {'count': (6, 6)}),
    (0x0201, 'JPEGInterchangeFormat', L, N),
    (0x0202, 'JPEGInterchangeFormatLength', L, N, {'unit': 'bytes'}),
    (0x0211, 'YCbCrCoefficients', R, N, {'count': (3, 3)}),
    (0x0212, 'YCbCrSubSampling', S, N),
    (0x0213, 'YCbCrPositioning', S, E, {'labels': YCBCR_POSITIONING}),
    (0x0214, 'ReferenceBlackWhite', R, N, {'count': (6, 6)}),
    (0x02BC, 'ApplicationNotes', (B, U), BIN),
    (0x8298, 'Copyright', A, T),
    (0x8769, 'ExifOffset', PTR, N, {'count': (1, 1), 'pointer': IfdKind.EXIF}),
    (0x8825, 'GPSOffset', PTR, N, {'count': (1, 1), 'pointer': IfdKind.GPS}),
    (0xC4A5, 'PrintIM', U, BIN),
])


# ============================================================
# Exif sub-IFD tags
# ============================================================
_EXIF_TAGS = _tags(IfdKind.EXIF, [
    (0x829A, 'ExposureTime', R, C, {'count': (1, 1), 'unit': 's', 'quantity': 'exposure_time'}),
    (0x829D, 'FNumber', R, C, {'count': (1, 1), 'unit': 'f-number', 'quantity': 'f_number'}),
    (0x8822, 'ExposureProgram', S, E, {'count': (1, 1), 'labels': EXPOSURE_PROGRAM}),
    (0x8824, 'SpectralSensitivity', A, T),
    (0x8827, 'ISOSpeedRatings', S, C, {'count': (1, 3), 'unit': 'ISO', 'quantity': 'iso'}),
    (0x8828, 'OECF', U, BIN),
    (0x8830, 'SensitivityType', S, E, {'count': (1, 1), 'labels': SENSITIVITY_TYPE}),
    (0x8831, 'StandardOutputSensitivity', L, N),
    (0x8832, 'RecommendedExposureIndex', L, N),
    (0x9000, 'ExifVersion', U, C, {'count': (4, 4), 'quantity': 'version'}),
    (0x9003, 'DateTimeOriginal', A, DT),
    (0x9004, 'DateTimeDigitized', A, DT),
    (0x9010, 'OffsetTime', A, T),
    (0x9011, 'OffsetTimeOriginal', A, T),
    (0x9012, 'OffsetTimeDigitized', A, T),
    (0x9101, 'ComponentsConfiguration', U, C, {'count': (4, 4), 'quantity': 'components'}),
    (0x9102, 'CompressedBitsPerPixel', R, N, {'unit': 'bits/pixel'}),
    (0x9201, 'ShutterSpeedValue', SR, C, {'count': (1, 1), 'unit': 'APEX', 'quantity': 'apex_tv'}),
    (0x9202, 'ApertureValue', R, C, {'count': (1, 1), 'unit': 'APEX', 'quantity': 'apex_av'}),
    (0x9203, 'BrightnessValue', SR, C, {'count': (1, 1), 'unit': 'APEX', 'quantity': 'apex_brightness'}),
    (0x9204, 'ExposureBiasValue', SR, C, {'count': (1, 1), 'unit': 'APEX', 'quantity': 'apex_ev'}),
    (0x9205, 'MaxApertureValue', R, C, {'count': (1, 1), 'unit': 'APEX', 'quantity': 'apex_av'}),
    (0x9206, 'SubjectDistance', R, N, {'count': (1, 1), 'unit': 'm'}),
    (0x9207, 'MeteringMode', S, E, {'count': (1, 1), 'labels': METERING_MODE}),
    (0x9208, 'LightSource', S, E, {'count': (1, 1), 'labels': LIGHT_SOURCE}),
    (0x9209, 'Flash', S, C, {'count': (1, 2), 'quantity': 'flash'}),
    (0x920A, 'FocalLength', R, N, {'count': (1, 1), 'unit': 'mm'}),
    (0x9214, 'SubjectArea', S, C, {'count': (2, 4), 'unit': 'px', 'quantity': 'subject_area'}),
    (0x927C, 'MakerNote', U, BIN),
    (0x9286, 'UserComment', U, ValueKind.USER_COMMENT),
    (0x9290, 'SubSecTime', A, T),
    (0x9291, 'SubSecTimeOriginal', A, T),
    (0x9292, 'SubSecTimeDigitized', A, T),
    (0xA000, 'FlashpixVersion', U, C, {'count': (4, 4), 'quantity': 'version'}),
    (0xA001, 'ColorSpace', S, E, {'count': (1, 1), 'labels': COLOR_SPACE}),
    (0xA002, 'PixelXDimension', (S, L), N, {'unit': 'px'}),
    (0xA003, 'PixelYDimension', (S, L), N, {'unit': 'px'}),
    (0xA004, 'RelatedSoundFile', A, T),
    (0xA005, 'InteroperabilityOffset', PTR, N, {'count': (1, 1), 'pointer': IfdKind.INTEROPERABILITY}),
    (0xA20B, 'FlashEnergy', R, N, {'count': (1, 1), 'unit': 'BCPS'}),
    (0xA20E, 'FocalPlaneXResolution', R, N),
    (0xA20F, 'FocalPlaneYResolution', R, N),
    (0xA210, 'FocalPlaneResolutionUnit', S, E, {'count': (1, 1), 'labels': RESOLUTION_UNIT}),
    (0xA214, 'SubjectLocation', S, C, {'count': (2, 2), 'unit': 'px', 'quantity': 'subject_location'}),
    (0xA215, 'ExposureIndex', R, N, {'count': (1, 1)}),
    (0xA217, 'SensingMethod', S, E, {'count': (1, 1), 'labels': SENSING_METHOD}),
    (0xA300, 'FileSource', U, E, {'count': (1, 1), 'labels': FILE_SOURCE}),
    (0xA301, 'SceneType', U, E, {'count': (1, 1), 'labels': SCENE_TYPE}),
    (0xA302, 'CFAPattern', U, BIN),
    (0xA401, 'CustomRendered', S, E, {'count': (1, 1), 'labels': CUSTOM_RENDERED}),
    (0xA402, 'ExposureMode', S, E, {'count': (1, 1), 'labels': EXPOSURE_MODE}),
    (0xA403, 'WhiteBalance', S, E, {'count': (1, 1), 'labels': WHITE_BALANCE}),
    (0xA404, 'DigitalZoomRatio', R, N, {'count': (1, 1)}),
    (0xA405, 'FocalLengthIn35mmFilm', S, N, {'count': (1, 1), 'unit': 'mm'}),
    (0xA406, 'SceneCaptureType', S, E, {'count': (1, 1), 'labels': SCENE_CAPTURE_TYPE}),
    (0xA407, 'GainControl', S, E, {'count': (1, 1), 'labels': GAIN_CONTROL}),
    (0xA408, 'Contrast', S, E, {'count': (1, 1), 'labels': CONTRAST}),
    (0xA409, 'Saturation', S, E, {'count': (1, 1), 'labels': SATURATION}),
    (0xA40A, 'Sharpness', S, E, {'count': (1, 1), 'labels': SHARPNESS}),
    (0xA40B, 'DeviceSettingDescription', U, BIN),
    (0xA40C, 'SubjectDistanceRange', S, E, {'count': (1, 1), 'labels': SUBJECT_DISTANCE_RANGE}),
    (0xA420, 'ImageUniqueID', A, T),
    (0xA430, 'CameraOwnerName', A, T),
    (0xA431, 'BodySerialNumber', A, T),
    (0xA432, 'LensSpecification', R, C, {'count': (4, 4), 'quantity': 'lens_specification'}),
    (0xA433, 'LensMake', A, T),
    (0xA434, 'LensModel', A, T),
    (0xA435, 'LensSerialNumber', A, T),
    (0xA500, 'Gamma', R, N, {'count': (1, 1)}),
])


# ============================================================
# GPS sub-IFD tags
# ============================================================
_GPS_TAGS = _tags(IfdKind.GPS, [
    (0x0000, 'GPSVersionID', B, C, {'count': (4, 4), 'quantity': 'gps_version'}),
    (0x0001, 'GPSLatitudeRef', A, E, {'labels': GPS_LATITUDE_REF}),
    (0x0002, 'GPSLatitude', R, ValueKind.GPS_COORDINATE, {'count': (3, 3), 'unit': 'D/M/S',
                'reference_tag': 0x0001}),
    (0x0003, 'GPSLongitudeRef', A, E, {'labels': GPS_LONGITUDE_REF}),
    (0x0004, 'GPSLongitude', R, ValueKind.GPS_COORDINATE, {'count': (3, 3), 'unit': 'D/M/S',
                'reference_tag': 0x0003}),
    (0x0005, 'GPSAltitudeRef', B, E, {'count': (1, 1), 'labels': GPS_ALTITUDE_REF}),
    (0x0006, 'GPSAltitude', R, C, {'count': (1, 1), 'unit': 'm',
                'quantity': 'gps_altitude', 'reference_tag': 0x0005}),
    (0x0007, 'GPSTimeStamp', R, ValueKind.GPS_COMPONENT, {'count': (3, 3), 'unit': 'UTC time'}),
    (0x0008, 'GPSSatellites', A, T),
    (0x0009, 'GPSStatus', A, E, {'labels': GPS_STATUS}),
    (0x000A, 'GPSMeasureMode', A, E, {'labels': GPS_MEASURE_MODE}),
    (0x000B, 'GPSDOP', R, N, {'count': (1, 1)}),
    (0x000C, 'GPSSpeedRef', A, E, {'labels': GPS_SPEED_REF}),
    (0x000D, 'GPSSpeed', R, C, {'count': (1, 1), 'quantity': 'reference_unit', 'reference_tag': 0x000C,
                                'labels': GPS_SPEED_UNITS}),
    (0x000E, 'GPSTrackRef', A, E, {'labels': GPS_DIRECTION_REF}),
    (0x000F, 'GPSTrack', R, N, {'count': (1, 1), 'unit': 'degrees'}),
    (0x0010, 'GPSImgDirectionRef', A, E, {'labels': GPS_DIRECTION_REF}),
    (0x0011, 'GPSImgDirection', R, N, {'count': (1, 1), 'unit': 'degrees'}),
    (0x0012, 'GPSMapDatum', A, T),
    (0x0013, 'GPSDestLatitudeRef', A, E, {'labels': GPS_LATITUDE_REF}),
    (0x0014, 'GPSDestLatitude', R, ValueKind.GPS_COORDINATE, {'count': (3, 3), 'unit': 'D/M/S',
                'reference_tag': 0x0013}),
    (0x0015, 'GPSDestLongitudeRef', A, E, {'labels': GPS_LONGITUDE_REF}),
    (0x0016, 'GPSDestLongitude', R, ValueKind.GPS_COORDINATE, {'count': (3, 3), 'unit': 'D/M/S',
                'reference_tag': 0x0015}),
    (0x0017, 'GPSDestBearingRef', A, E, {'labels': GPS_DIRECTION_REF}),
    (0x0018, 'GPSDestBearing', R, N, {'count': (1, 1), 'unit': 'degrees'}),
    (0x0019, 'GPSDestDistanceRef', A, E, {'labels': GPS_DISTANCE_REF}),
    (0x001A, 'GPSDestDistance', R, C, {'count': (1, 1), 'quantity': 'reference_unit', 'reference_tag': 0x0019,
                                       'labels': GPS_DISTANCE_UNITS}),
    (0x001B, 'GPSProcessingMethod', U, ValueKind.USER_COMMENT),
    (0x001C, 'GPSAreaInformation', U, ValueKind.USER_COMMENT),
    (0x001D, 'GPSDateStamp', A, DT),
    (0x001E, 'GPSDifferential', S, E, {'count': (1, 1), 'labels': GPS_DIFFERENTIAL}),
    (0x001F, 'GPSHPositioningError', R, N, {'unit': 'm'}),
])


# ============================================================
# Interoperability sub-IFD tags
# ============================================================
_INTEROP_TAGS = _tags(IfdKind.INTEROPERABILITY, [
    (0x0001, 'InteroperabilityIndex', A, T),
    (0x0002, 'InteroperabilityVersion', U, C, {'count': (4, 4), 'quantity': 'version'}),
    (0x1000, 'RelatedImageFileFormat', A, T),
    (0x1001, 'RelatedImageWidth', (S, L), N, {'unit': 'px'}),
    (0x1002, 'RelatedImageLength', (S, L), N, {'unit': 'px'}),
])


TAG_REGISTRY: Mapping[Tuple[IfdKind, int], TagDescriptor] = MappingProxyType({
    **_ROOT_TAGS,
    **_EXIF_TAGS,
    **_GPS_TAGS,
    **_INTEROP_TAGS,
})

# IFD1 carries the same image tags as IFD0
_TABLE_ALIASES = {IfdKind.THUMBNAIL: IfdKind.ROOT}


def lookup_tag(ifd: IfdKind, tag_id: int) -> Optional[TagDescriptor]:
    """
    Look up the descriptor of a tag.

    Args:
        ifd: Directory the tag was found in
        tag_id: Numeric tag

    Returns:
        TagDescriptor or None if the tag is not registered
    """
    return TAG_REGISTRY.get((_TABLE_ALIASES.get(ifd, ifd), tag_id))


def unknown_tag_name(tag_id: int) -> str:
    return f"Unknown_{tag_id:04X}"


def describe_tag(ifd: IfdKind, tag_id: int) -> TagDescriptor:
    """
    Look up a tag, falling back to a generic numeric descriptor.

    Unregistered tags are never dropped; they are formatted from their
    raw value under a generic name.
    """
    descriptor = lookup_tag(ifd, tag_id)
    if descriptor is None:
        descriptor = TagDescriptor(tag_id, ifd, unknown_tag_name(tag_id))
    return descriptor


def find_tag(name: str) -> List[TagDescriptor]:
    """Return all descriptors with the given canonical name."""
    return [descriptor for descriptor in TAG_REGISTRY.values() if descriptor.name == name]


def pointer_target(ifd: IfdKind, tag_id: int) -> Optional[IfdKind]:
    """Sub-directory a tag points to in the given directory, if any."""
    descriptor = lookup_tag(ifd, tag_id)
    return descriptor.pointer if descriptor is not None else None
