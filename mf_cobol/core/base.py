"""
Base enumerations for COBOL data source options.

Provides the closed sets of values accepted by the enumerated options
(encoding, schema retention, string trimming, floating point format) and
the reader strategy discriminator.
"""

from enum import Enum
from typing import Optional


class _NamedOption(Enum):
    """Enum whose members are looked up by their option string."""

    @classmethod
    def from_name(cls, name: str) -> Optional["_NamedOption"]:
        """
        Find the member matching an option value, ignoring case.

        Args:
            name: Raw option value

        Returns:
            Matching member, or None if the value is not recognized
        """
        wanted = name.lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


class Encoding(_NamedOption):
    """Character encoding family of the data file."""
    EBCDIC = "ebcdic"
    ASCII = "ascii"


class SchemaRetentionPolicy(_NamedOption):
    """How the root group of a copybook is reflected in the schema."""
    KEEP_ORIGINAL = "keep_original"
    COLLAPSE_ROOT = "collapse_root"


class StringTrimmingPolicy(_NamedOption):
    """Which side of decoded strings gets whitespace trimmed."""
    TRIM_NONE = "none"
    TRIM_LEFT = "left"
    TRIM_RIGHT = "right"
    TRIM_BOTH = "both"


class FloatingPointFormat(_NamedOption):
    """Binary layout of COMP-1 / COMP-2 fields."""
    IBM = "IBM"
    IBM_LE = "IBM_little_endian"
    IEEE754 = "IEEE754"
    IEEE754_LE = "IEEE754_little_endian"


class ReaderType(Enum):
    """Decoding strategy chosen for a data source."""
    FIXED_LENGTH = "fixed_length"
    VARIABLE_LENGTH = "variable_length"
