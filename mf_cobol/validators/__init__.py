"""
Validators Module.

Provides checks around option resolution:
    - validate_unused_options: Warn about (or reject) unknown options
    - check_sanity: Require a data path and a copybook source
"""

from mf_cobol.validators.parameters_validator import (
    check_sanity,
    find_unused_keys,
    validate_unused_options,
)

__all__ = [
    "check_sanity",
    "find_unused_keys",
    "validate_unused_options",
]
