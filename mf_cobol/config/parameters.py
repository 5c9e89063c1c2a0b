"""
Option Accessor.

Wraps the raw string options of a read request and remembers which keys
were consulted, so that options nobody looked at can be reported.

Example:
    >>> params = Parameters({"encoding": "ascii", "foo": "bar"})
    >>> params.get_or_else("encoding", "")
    'ascii'
    >>> params.is_key_used("foo")
    False
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional

from mf_cobol.core.exceptions import InvalidOptionValue

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class Parameters:
    """
    Read-only option bag with per-instance usage tracking.

    Every lookup (including a negative `contains` check) marks the key as
    used. The usage set belongs to this instance only.

    Attributes:
        params: Immutable view of the original options
    """

    def __init__(self, params: Mapping[str, str]):
        self.params = MappingProxyType(dict(params))
        self._used_keys: set[str] = set()

    def get(self, key: str) -> Optional[str]:
        """Get a value, or None if absent."""
        self._used_keys.add(key)
        return self.params.get(key)

    def get_or_else(self, key: str, default: str) -> str:
        """Get a value, falling back to a default."""
        self._used_keys.add(key)
        return self.params.get(key, default)

    def contains(self, key: str) -> bool:
        """Check if the option was supplied."""
        self._used_keys.add(key)
        return key in self.params

    def __getitem__(self, key: str) -> str:
        self._used_keys.add(key)
        return self.params[key]

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def mark_used(self, key: str) -> None:
        """Mark a key as consulted without reading it."""
        self._used_keys.add(key)

    def is_key_used(self, key: str) -> bool:
        """Check if a key has been consulted."""
        return key in self._used_keys

    def all_keys(self) -> list[str]:
        """All supplied keys, in the order they were given."""
        return list(self.params.keys())

    def as_dict(self) -> dict[str, str]:
        """Copy of the supplied options."""
        return dict(self.params)

    def get_bool(self, key: str, default: bool) -> bool:
        """
        Get a boolean option.

        Accepts 'true' and 'false' in any case.

        Raises:
            InvalidOptionValue: If the value is neither
        """
        value = self.get(key)
        if value is None:
            return default
        return _to_bool(key, value)

    def get_int(self, key: str, default: int) -> int:
        """
        Get an integer option.

        Raises:
            InvalidOptionValue: If the value is not an integer
        """
        value = self.get(key)
        if value is None:
            return default
        return _to_int(key, value)

    def get_optional_int(self, key: str) -> Optional[int]:
        """Get an integer option, or None if absent."""
        value = self.get(key)
        if value is None:
            return None
        return _to_int(key, value)

    def __repr__(self) -> str:
        return f"Parameters({dict(self.params)!r})"


def _to_bool(key: str, value: str) -> bool:
    normalized = value.lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise InvalidOptionValue(key, value, "Should be either 'true' or 'false'.")


def _to_int(key: str, value: str) -> int:
    if not _INT_PATTERN.fullmatch(value):
        raise InvalidOptionValue(key, value, "Should be an integer.")
    return int(value)
