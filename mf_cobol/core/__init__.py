"""
Core module for option enumerations, errors and reader selection.

This module provides:
    - Closed option value sets (encoding, policies, floating point format)
    - CobolOptionError and its subclasses
    - select_reader() and CobolSource (import from their submodules)
"""

from mf_cobol.core.base import (
    Encoding,
    FloatingPointFormat,
    ReaderType,
    SchemaRetentionPolicy,
    StringTrimmingPolicy,
)
from mf_cobol.core.exceptions import (
    CobolOptionError,
    InvalidOptionValue,
    MalformedRedefineMapping,
    MissingOption,
    UnrecognizedOptions,
)

__all__ = [
    "Encoding",
    "FloatingPointFormat",
    "ReaderType",
    "SchemaRetentionPolicy",
    "StringTrimmingPolicy",
    "CobolOptionError",
    "InvalidOptionValue",
    "MalformedRedefineMapping",
    "MissingOption",
    "UnrecognizedOptions",
]
