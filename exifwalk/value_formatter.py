# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Value formatter for converting decoded EXIF values to human-readable strings.

Formatting is a pure function of the decoded value, the tag descriptor and,
for tags qualified by a sibling (GPS hemisphere, altitude reference, speed
unit), the sibling's value. It performs no I/O and keeps no state.

Copyright 2025 DNAi inc.
"""

import math
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from exifwalk.config import DEFAULT_CONFIG, ExifConfig
from exifwalk.exif_tags import TagDescriptor, ValueKind
from exifwalk.exif_types import Rational, TagValue, WarningKind

# EXIF character code prefixes for UserComment-style fields
CHARSET_ASCII = b'ASCII\x00\x00\x00'
CHARSET_JIS = b'JIS\x00\x00\x00\x00\x00'
CHARSET_UNICODE = b'UNICODE\x00'
CHARSET_UNDEFINED = b'\x00' * 8

COMPONENT_NAMES = {0: '-', 1: 'Y', 2: 'Cb', 3: 'Cr', 4: 'R', 5: 'G', 6: 'B'}

# Bytes of an opaque value shown element by element before switching to a summary
MAX_INLINE_BYTES = 16


def format_value(
    value: TagValue,
    descriptor: TagDescriptor,
    reference: Optional[TagValue] = None,
    config: Optional[ExifConfig] = None,
) -> str:
    """
    Format a decoded value as a human-readable string.

    Args:
        value: Decoded value
        descriptor: Registry descriptor of the tag
        reference: Value of the descriptor's reference tag, if present
        config: Formatting policy (defaults to DEFAULT_CONFIG)

    Returns:
        Readable string
    """
    return render_value(value, descriptor, reference, config)[0]


def render_value(
    value: TagValue,
    descriptor: TagDescriptor,
    reference: Optional[TagValue] = None,
    config: Optional[ExifConfig] = None,
) -> Tuple[str, List[WarningKind]]:
    """
    Format a decoded value and report the degradations met on the way.

    Returns:
        Tuple of (readable string, warning kinds)
    """
    config = config or DEFAULT_CONFIG
    warnings: List[WarningKind] = []

    if value.invalid or value.is_unknown_type:
        return render_generic(value, config), warnings

    kind = descriptor.kind
    if kind == ValueKind.TEXT:
        text = _format_text(value, config, warnings)
    elif kind == ValueKind.ENUMERATED:
        text = _format_enumerated(value, descriptor, config, warnings)
    elif kind == ValueKind.BITMASK:
        text = _format_bitmask(value, descriptor, config, warnings)
    elif kind == ValueKind.DATETIME:
        text = _format_datetime(value, config, warnings)
    elif kind == ValueKind.GPS_COORDINATE:
        text = _format_gps_coordinate(value, reference, config, warnings)
    elif kind == ValueKind.GPS_COMPONENT:
        text = _format_gps_time(value, config, warnings)
    elif kind == ValueKind.COMPUTED:
        text = _format_computed(value, descriptor, reference, config, warnings)
    elif kind == ValueKind.USER_COMMENT:
        text = _format_user_comment(value, config, warnings)
    elif kind == ValueKind.BINARY:
        text = _format_binary(value, config)
    else:
        text = _format_numeric(value, descriptor, config, warnings)

    if value.lossy and WarningKind.LOSSY_TEXT not in warnings:
        warnings.append(WarningKind.LOSSY_TEXT)
    return text, warnings


def render_generic(value: TagValue, config: Optional[ExifConfig] = None) -> str:
    """Render a value without any tag knowledge."""
    config = config or DEFAULT_CONFIG
    if value.invalid:
        return f"<invalid: {value.count} x type {value.type_id} out of bounds>"
    if value.is_unknown_type:
        return f"<unknown type {value.type_id}: {len(value.values)} bytes>"
    if value.is_text:
        return value.values
    if value.is_bytes:
        return _format_binary(value, config)
    return _join(value, config, [])


def format_number(number: float) -> str:
    """Render a number without trailing zeros (at most 4 decimal places)."""
    if isinstance(number, int):
        return str(number)
    if math.isnan(number) or math.isinf(number):
        return str(number)
    if number == int(number):
        return str(int(number))
    text = f"{number:.4f}".rstrip('0').rstrip('.')
    return text if text not in ('', '-0') else '0'


def _element(item: Any, config: ExifConfig, warnings: List[WarningKind]) -> str:
    if isinstance(item, Rational):
        if item.is_undefined:
            _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
            return config.undefined_text
        return format_number(item.value)
    return format_number(item)


def _join(value: TagValue, config: ExifConfig, warnings: List[WarningKind]) -> str:
    return config.delimiter.join(_element(item, config, warnings) for item in value.values)


def _warn(warnings: List[WarningKind], kind: WarningKind) -> None:
    if kind not in warnings:
        warnings.append(kind)


def _rationals(value: TagValue) -> Optional[List[Rational]]:
    if value.is_text or value.is_bytes:
        return None
    if not all(isinstance(item, Rational) for item in value.values):
        return None
    return list(value.values)


def _reference_code(reference: Optional[TagValue]) -> Optional[Any]:
    """Code carried by a reference tag: stripped text or first integer."""
    if reference is None or reference.invalid:
        return None
    if reference.is_text:
        return reference.values.strip('\x00 ').upper()
    return reference.to_int(0)


def _format_numeric(value: TagValue, descriptor: TagDescriptor, config: ExifConfig,
                    warnings: List[WarningKind]) -> str:
    if value.is_text or value.is_bytes:
        return render_generic(value, config)
    if len(value.values) == 0:
        return ""
    text = _join(value, config, warnings)
    if len(value.values) == 1 and text == config.undefined_text:
        return text
    if descriptor.unit:
        text = f"{text} {descriptor.unit}"
    return text


def _format_text(value: TagValue, config: ExifConfig, warnings: List[WarningKind]) -> str:
    if value.is_text:
        return value.values.rstrip('\x00').strip()
    if value.is_bytes:
        return _decode_lossy(value.values.rstrip(b'\x00'), 'utf-8', warnings).strip()
    return render_generic(value, config)


def _format_enumerated(value: TagValue, descriptor: TagDescriptor, config: ExifConfig,
                       warnings: List[WarningKind]) -> str:
    if value.is_text:
        code = value.values.strip('\x00 ')
    else:
        code = value.to_int(0)
    if code is None:
        return render_generic(value, config)
    labels = descriptor.labels or {}
    label = labels.get(code)
    if label is None and isinstance(code, str):
        label = labels.get(code.upper())
    if label is None:
        _warn(warnings, WarningKind.UNKNOWN_CODE)
        return config.unknown_code(code)
    return label


def _format_bitmask(value: TagValue, descriptor: TagDescriptor, config: ExifConfig,
                    warnings: List[WarningKind]) -> str:
    code = value.to_int(0)
    if code is None:
        return render_generic(value, config)
    labels = descriptor.labels or {}
    if code == 0:
        return labels.get(0, 'None')
    names = []
    remaining = code
    for bit in sorted(b for b in labels if b):
        if code & bit:
            names.append(labels[bit])
            remaining &= ~bit
    if remaining:
        _warn(warnings, WarningKind.UNKNOWN_CODE)
        names.append(config.unknown_code(f"0x{remaining:X}"))
    return config.delimiter.join(names)


def _format_datetime(value: TagValue, config: ExifConfig, warnings: List[WarningKind]) -> str:
    text = _format_text(value, config, warnings)
    for source, target in (('%Y:%m:%d %H:%M:%S', '%Y-%m-%d %H:%M:%S'), ('%Y:%m:%d', '%Y-%m-%d')):
        try:
            return datetime.strptime(text, source).strftime(target)
        except ValueError:
            continue
    return text


def _dms_to_degrees(parts: List[Rational]) -> float:
    degrees = 0.0
    for part, divisor in zip(parts, (1.0, 60.0, 3600.0)):
        degrees += part.value / divisor
    return degrees


def _format_gps_coordinate(value: TagValue, reference: Optional[TagValue], config: ExifConfig,
                           warnings: List[WarningKind]) -> str:
    parts = _rationals(value)
    if not parts:
        return render_generic(value, config)
    parts = parts[:3]
    if any(part.is_undefined for part in parts):
        _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
        return config.undefined_text
    degrees = _dms_to_degrees(parts)
    if _reference_code(reference) in ('S', 'W'):
        degrees = -degrees
    return f"{degrees:.{config.gps_precision}f}"


def _format_gps_time(value: TagValue, config: ExifConfig, warnings: List[WarningKind]) -> str:
    parts = _rationals(value)
    if not parts or len(parts) < 3:
        return render_generic(value, config)
    if any(part.is_undefined for part in parts[:3]):
        _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
        return config.undefined_text
    hours, minutes, seconds = (part.value for part in parts[:3])
    if seconds == int(seconds):
        second_text = f"{int(seconds):02d}"
    else:
        second_text = f"{seconds:05.2f}"
    return f"{int(hours):02d}:{int(minutes):02d}:{second_text} UTC"


def _format_user_comment(value: TagValue, config: ExifConfig, warnings: List[WarningKind]) -> str:
    if value.is_text:
        return value.values.rstrip('\x00').strip()
    if not value.is_bytes:
        return render_generic(value, config)
    data = value.values
    prefix, body = data[:8], data[8:]
    if prefix == CHARSET_ASCII:
        text = _decode_lossy(body, 'ascii', warnings)
    elif prefix == CHARSET_JIS:
        text = _decode_lossy(body, 'iso2022_jp', warnings)
    elif prefix == CHARSET_UNICODE:
        codec = 'utf-16-le' if value.byte_order.value == '<' else 'utf-16-be'
        text = _decode_lossy(body[:len(body) - len(body) % 2], codec, warnings)
    elif prefix == CHARSET_UNDEFINED:
        text = _decode_lossy(body, 'utf-8', warnings)
    else:
        text = _decode_lossy(data, 'utf-8', warnings)
    return text.rstrip('\x00').strip()


def _decode_lossy(data: bytes, codec: str, warnings: List[WarningKind]) -> str:
    try:
        return data.decode(codec)
    except UnicodeDecodeError:
        _warn(warnings, WarningKind.LOSSY_TEXT)
        return data.decode(codec, errors='replace')


def _format_binary(value: TagValue, config: ExifConfig) -> str:
    if not value.is_bytes:
        return _join(value, config, [])
    if len(value.values) <= MAX_INLINE_BYTES and len(value.values) > 0:
        return ' '.join(str(byte) for byte in value.values)
    return f"(Binary data {len(value.values)} bytes)"


# ============================================================
# Computed photographic quantities
# ============================================================

def _first_rational(value: TagValue) -> Optional[Rational]:
    parts = _rationals(value)
    return parts[0] if parts else None


def _exposure_seconds(seconds: float) -> str:
    if seconds <= 0:
        return f"{format_number(seconds)} s"
    if seconds < 1:
        reciprocal = 1 / seconds
        # subnormal durations overflow the reciprocal
        if math.isinf(reciprocal):
            return f"{seconds:.3g} s"
        return f"1/{round(reciprocal)} s"
    return f"{format_number(round(seconds, 1))} s"


def _exposure_time(value, descriptor, reference, config, warnings) -> Optional[str]:
    rational = _first_rational(value)
    if rational is None:
        return None
    if rational.is_undefined:
        _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
        return config.undefined_text
    if rational.numerator == 1 and rational.denominator > 1:
        return f"{rational} s"
    return _exposure_seconds(rational.value)


def _f_number(value, descriptor, reference, config, warnings) -> Optional[str]:
    rational = _first_rational(value)
    if rational is None:
        return None
    if rational.is_undefined:
        _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
        return config.undefined_text
    return f"f/{rational.value:.1f}"


def _apex_tv(value, descriptor, reference, config, warnings) -> Optional[str]:
    rational = _first_rational(value)
    if rational is None:
        return None
    if rational.is_undefined:
        _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
        return config.undefined_text
    try:
        seconds = 2.0 ** -rational.value
    except OverflowError:
        return f"{rational.value:.2f} EV"
    return f"{rational.value:.2f} EV ({_exposure_seconds(seconds)})"


def _apex_av(value, descriptor, reference, config, warnings) -> Optional[str]:
    rational = _first_rational(value)
    if rational is None:
        return None
    if rational.is_undefined:
        _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
        return config.undefined_text
    try:
        f_number = math.sqrt(2.0) ** rational.value
    except OverflowError:
        return f"{rational.value:.2f} EV"
    return f"{rational.value:.2f} EV (f/{f_number:.1f})"


def _apex_brightness(value, descriptor, reference, config, warnings) -> Optional[str]:
    rational = _first_rational(value)
    if rational is None:
        return None
    # numerator 0xFFFFFFFF means unknown
    if rational.numerator in (-1, 0xFFFFFFFF):
        return "Unknown"
    if rational.is_undefined:
        _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
        return config.undefined_text
    return f"{rational.value:.2f} EV"


def _apex_ev(value, descriptor, reference, config, warnings) -> Optional[str]:
    rational = _first_rational(value)
    if rational is None:
        return None
    if rational.is_undefined:
        _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
        return config.undefined_text
    return f"{rational.value:+.2f} EV"


def _iso(value, descriptor, reference, config, warnings) -> Optional[str]:
    if value.is_text or value.is_bytes or len(value.values) == 0:
        return None
    return "ISO " + config.delimiter.join(_element(item, config, warnings) for item in value.values)


def _flash(value, descriptor, reference, config, warnings) -> Optional[str]:
    code = value.to_int(0)
    if code is None:
        return None
    if code & 0x20:
        return "No flash function"
    parts = ["Fired" if code & 0x01 else "Did not fire"]
    mode = (code >> 3) & 0x03
    if mode == 1:
        parts.append("compulsory flash firing")
    elif mode == 2:
        parts.append("compulsory flash suppression")
    elif mode == 3:
        parts.append("auto mode")
    strobe = (code >> 1) & 0x03
    if strobe == 2:
        parts.append("return light not detected")
    elif strobe == 3:
        parts.append("return light detected")
    if code & 0x40:
        parts.append("red-eye reduction")
    return config.delimiter.join(parts)


def _subject_area(value, descriptor, reference, config, warnings) -> Optional[str]:
    if value.is_text or value.is_bytes:
        return None
    v = value.values
    if len(v) == 2:
        return f"point ({v[0]}, {v[1]})"
    if len(v) == 3:
        return f"circle at ({v[0]}, {v[1]}), diameter {v[2]}"
    if len(v) == 4:
        return f"rectangle at ({v[0]}, {v[1]}), {v[2]}x{v[3]}"
    return None


def _subject_location(value, descriptor, reference, config, warnings) -> Optional[str]:
    if value.is_text or value.is_bytes or len(value.values) < 2:
        return None
    return f"point ({value.values[0]}, {value.values[1]})"


def _lens_specification(value, descriptor, reference, config, warnings) -> Optional[str]:
    parts = _rationals(value)
    if not parts or len(parts) < 4:
        return None
    focal = [_element(part, config, warnings) for part in parts[:2]]
    text = f"{focal[0]} mm" if focal[0] == focal[1] else f"{focal[0]}-{focal[1]} mm"
    apertures = [f"{part.value:.1f}" for part in parts[2:4] if not part.is_undefined]
    if any(part.is_undefined for part in parts[2:4]):
        _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
    if len(apertures) == 2 and apertures[0] != apertures[1]:
        text += f" f/{apertures[0]}-{apertures[1]}"
    elif apertures:
        text += f" f/{apertures[0]}"
    return text


def _version(value, descriptor, reference, config, warnings) -> Optional[str]:
    if value.is_bytes:
        text = _decode_lossy(value.values, 'ascii', warnings).strip('\x00 ')
    elif value.is_text:
        text = value.values.strip('\x00 ')
    else:
        return None
    if len(text) == 4 and text.isdigit():
        return f"{int(text[:2])}.{text[2:]}"
    return text


def _components(value, descriptor, reference, config, warnings) -> Optional[str]:
    if not value.is_bytes:
        return None
    return ' '.join(COMPONENT_NAMES.get(byte, str(byte)) for byte in value.values)


def _gps_version(value, descriptor, reference, config, warnings) -> Optional[str]:
    if value.is_text:
        return None
    return '.'.join(str(item) for item in value.values)


def _gps_altitude(value, descriptor, reference, config, warnings) -> Optional[str]:
    rational = _first_rational(value)
    if rational is None:
        return None
    if rational.is_undefined:
        _warn(warnings, WarningKind.UNDEFINED_RATIONAL)
        return config.undefined_text
    altitude = rational.value
    if _reference_code(reference) == 1:
        altitude = -altitude
    return f"{format_number(altitude)} m"


def _reference_unit(value, descriptor, reference, config, warnings) -> Optional[str]:
    rational = _first_rational(value)
    if rational is None:
        return None
    text = _element(rational, config, warnings)
    if rational.is_undefined:
        return text
    unit = (descriptor.labels or {}).get(_reference_code(reference))
    return f"{text} {unit}" if unit else text


QuantityFn = Callable[..., Optional[str]]

QUANTITIES: Dict[str, QuantityFn] = {
    'exposure_time': _exposure_time,
    'f_number': _f_number,
    'apex_tv': _apex_tv,
    'apex_av': _apex_av,
    'apex_brightness': _apex_brightness,
    'apex_ev': _apex_ev,
    'iso': _iso,
    'flash': _flash,
    'subject_area': _subject_area,
    'subject_location': _subject_location,
    'lens_specification': _lens_specification,
    'version': _version,
    'components': _components,
    'gps_version': _gps_version,
    'gps_altitude': _gps_altitude,
    'reference_unit': _reference_unit,
}


def _format_computed(value: TagValue, descriptor: TagDescriptor, reference: Optional[TagValue],
                     config: ExifConfig, warnings: List[WarningKind]) -> str:
    compute = QUANTITIES.get(descriptor.quantity or '')
    text = None
    if compute is not None:
        text = compute(value, descriptor, reference, config, warnings)
    if text is None:
        return _format_numeric(value, descriptor, config, warnings)
    return text
