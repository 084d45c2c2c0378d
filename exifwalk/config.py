# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Parser configuration

Presentation policy (GPS precision, fallback texts, delimiter) and the
walker's safety limits.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ExifConfig:
    """
    Configuration for decoding and formatting.

    Attributes:
        gps_precision: Decimal places for GPS decimal degrees
        unknown_code_format: Text used for enumerated codes without a label;
            ``{code}`` is replaced by the raw code
        undefined_text: Text used for rationals with a zero denominator
        delimiter: Separator for multi-element values
        max_directories: Maximum number of directories read in one parse
        extract_thumbnail: Copy the IFD1 JPEG thumbnail into the result
    """
    gps_precision: int = 6
    unknown_code_format: str = "Unknown ({code})"
    undefined_text: str = "undefined"
    delimiter: str = ", "
    max_directories: int = 64
    extract_thumbnail: bool = True

    def replace(self, **changes) -> 'ExifConfig':
        """Return a copy with some settings changed."""
        return replace(self, **changes)

    def unknown_code(self, code) -> str:
        return self.unknown_code_format.format(code=code)


DEFAULT_CONFIG = ExifConfig()
