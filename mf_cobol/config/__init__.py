"""
Configuration Module.

Provides the option accessor and the resolved settings types.

Example:
    >>> from mf_cobol.config import Parameters
    >>> params = Parameters({"encoding": "ascii"})
    >>> print(params.get("encoding"))
"""

from mf_cobol.config.parameters import Parameters
from mf_cobol.config.settings import (
    CobolParameters,
    LocalityParameters,
    MultisegmentParameters,
    VariableLengthParameters,
)

__all__ = [
    "Parameters",
    "CobolParameters",
    "LocalityParameters",
    "MultisegmentParameters",
    "VariableLengthParameters",
]
