"""
Parsers Module.

Provides parsers for COBOL data source options:
    - CobolParametersParser: Resolve raw options into CobolParameters
    - transform_identifier: Copybook name normalization shared with options

Example:
    >>> from mf_cobol.parsers import CobolParametersParser
    >>> params = CobolParametersParser.parse({"copybook": "A.cpy", "path": "a.dat"})
    >>> print(params.encoding)
"""

from mf_cobol.parsers.identifiers import transform_identifier
from mf_cobol.parsers.parameters_parser import CobolParametersParser

__all__ = [
    "CobolParametersParser",
    "transform_identifier",
]
