"""
Parameters Validator.

Checks applied around option resolution:
    - validate_unused_options(): report options no resolver consulted
    - check_sanity(): make sure the resolved options can drive a read

Example:
    >>> params = Parameters({"path": "data/", "foo": "bar"})
    >>> params.get("path")
    'data/'
    >>> validate_unused_options(params, is_pedantic=False)  # logs a warning
    ['foo']
"""

import logging

from mf_cobol.config.parameters import Parameters
from mf_cobol.config.settings import CobolParameters
from mf_cobol.core.exceptions import MissingOption, UnrecognizedOptions

logger = logging.getLogger(__name__)


def find_unused_keys(params: Parameters) -> list[str]:
    """List supplied keys that were never consulted, in supplied order."""
    return [key for key in params.all_keys() if not params.is_key_used(key)]


def validate_unused_options(params: Parameters, is_pedantic: bool) -> list[str]:
    """
    Report options that were passed but never consulted.

    Args:
        params: Option bag after all resolvers have run
        is_pedantic: Fail instead of warning

    Returns:
        The unused keys (empty if all were recognized)

    Raises:
        UnrecognizedOptions: If there are unused keys in pedantic mode
    """
    unused_keys = find_unused_keys(params)
    if unused_keys:
        error = UnrecognizedOptions(unused_keys)
        if is_pedantic:
            raise error
        logger.warning(str(error))
    return unused_keys


def check_sanity(params: CobolParameters) -> None:
    """
    Make sure resolved parameters point at some data and some copybook.

    Supplying more than one copybook source is not rejected here.

    Raises:
        MissingOption: If the data path or every copybook source is missing
    """
    if not params.source_path:
        raise MissingOption(["path"], "Data source path must be specified.")

    has_copybook = (
        bool(params.copybook_path)
        or bool(params.copybook_content)
        or len(params.multi_copybook_path) > 0
    )
    if not has_copybook:
        raise MissingOption(
            ["copybook", "copybooks", "copybook_contents"],
            "Either 'copybook', 'copybooks' or 'copybook_contents' option must be specified.",
        )
