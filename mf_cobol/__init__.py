"""
Mainframe COBOL Data Source Options.

Resolves the string options of a COBOL read request (copybook, encoding,
record format, multisegment layout, input splits) into typed parameters
and selects the reader the decode engine should use.

Architecture:
    mf_cobol/
    ├── core/           # Enumerations, errors, reader selection, data source
    ├── config/         # Option accessor and resolved settings
    ├── parsers/        # Option parser and copybook identifier rules
    ├── validators/     # Unused option and sanity checks
    └── utils/          # EBCDIC code page lookup

Usage:
    from mf_cobol import CobolSource

    plan = CobolSource().create_reader({
        "copybook": "CUSTREC.cpy",
        "path": "input/CUSTDATA.PS",
        "is_record_sequence": "true",
    })
    print(plan.reader.reader_type)
"""

__version__ = "1.0.0"
__author__ = "Mainframe Migration Team"

from mf_cobol.config.parameters import Parameters
from mf_cobol.config.settings import CobolParameters
from mf_cobol.parsers.parameters_parser import CobolParametersParser
from mf_cobol.core.readers import select_reader
from mf_cobol.core.source import CobolSource, ReaderPlan

__all__ = [
    "Parameters",
    "CobolParameters",
    "CobolParametersParser",
    "select_reader",
    "CobolSource",
    "ReaderPlan",
    "__version__",
]
