"""
Copybook identifier normalization.

The same rule is applied to field names when a copybook is parsed and to
group names referenced from options, so both sides agree on the keys.
"""


def transform_identifier(identifier: str) -> str:
    """
    Turn a COBOL name into the identifier used in the schema.

    Colons are dropped and dashes become underscores.

    Example:
        >>> transform_identifier("COMPANY-DETAILS")
        'COMPANY_DETAILS'
    """
    return identifier.replace(":", "").replace("-", "_")
