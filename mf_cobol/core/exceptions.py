"""
Exceptions raised while resolving COBOL data source options.

All of them are ValueError subclasses so callers that only care about
"bad options" can catch a single type.
"""

from typing import Iterable


class CobolOptionError(ValueError):
    """Base class for option resolution failures."""


class InvalidOptionValue(CobolOptionError):
    """An option value could not be parsed or is not one of the allowed values."""

    def __init__(self, key: str, value: str, expected: str = ""):
        self.key = key
        self.value = value
        message = f"Invalid value '{value}' for '{key}' option."
        if expected:
            message = f"{message} {expected}"
        super().__init__(message)


class MalformedRedefineMapping(CobolOptionError):
    """A redefine-segment-id-map entry is not of the form 'NAME => ID1,ID2'."""

    def __init__(self, raw_value: str):
        self.raw_value = raw_value
        super().__init__(
            f"Illegal argument for the 'redefine_segment_id_map' option: '{raw_value}'."
        )


class UnrecognizedOptions(CobolOptionError):
    """Options were passed that no resolver consulted."""

    def __init__(self, keys: Iterable[str]):
        self.keys = list(keys)
        super().__init__(
            f"Redundant or unrecognized option(s) to the 'cobol' data source: {','.join(self.keys)}."
        )


class MissingOption(CobolOptionError):
    """A required option (or one of a group of alternatives) was not given."""

    def __init__(self, keys: Iterable[str], message: str):
        self.keys = list(keys)
        super().__init__(message)
