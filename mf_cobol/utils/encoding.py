"""
EBCDIC Code Page Utilities.

Resolves the code page selector of a read request (a custom class or a
named code page) to a Python codec.

Example:
    >>> page = get_code_page("cp037")
    >>> page.decode(b"\\xc8\\x85\\x93\\x93\\x96")
    'Hello'
"""

import codecs
import importlib
from dataclasses import dataclass
from typing import Optional

from mf_cobol.core.exceptions import InvalidOptionValue


# Code page name (as accepted by 'ebcdic_code_page') to Python codec
CODE_PAGE_CODECS = {
    # Invariant EBCDIC characters, same layout as US/English
    "common": "cp037",
    "common_extended": "cp037",
    # US/English EBCDIC
    "cp037": "cp037",
    "cp037_extended": "cp037",
    # International EBCDIC
    "cp500": "cp500",
    # US EBCDIC with Euro
    "cp1140": "cp1140",
    # Greek
    "cp875": "cp875",
    # European EBCDIC
    "cp273": "cp273",     # German
    "cp1026": "cp1026",   # Turkish
}


@dataclass(frozen=True)
class CodePage:
    """
    A resolved EBCDIC code page.

    Attributes:
        name: Code page name or class path it was resolved from
        codec: Python codec name
    """
    name: str
    codec: str

    def decode(self, data: bytes, errors: str = "replace") -> str:
        """Decode bytes with this code page."""
        if data is None:
            return ""
        return data.decode(self.codec, errors=errors)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "codec": self.codec}


def get_code_page_by_name(name: str) -> CodePage:
    """
    Look up a code page by name.

    Raises:
        InvalidOptionValue: If the name is not a supported code page
    """
    codec = CODE_PAGE_CODECS.get(name.lower())
    if codec is None:
        supported = ", ".join(sorted(CODE_PAGE_CODECS))
        raise InvalidOptionValue(
            "ebcdic_code_page", name, f"Supported code pages: {supported}."
        )
    return CodePage(name=name, codec=codec)


def get_code_page_by_class(class_path: str) -> CodePage:
    """
    Load a custom code page from an import path.

    The path is either 'package.module:attr' or 'package.module.attr'. The
    attribute may be a codec name, or a class or object exposing a 'codec'
    attribute (and optionally 'name').

    Raises:
        InvalidOptionValue: If the path cannot be imported or names no codec
    """
    if ":" in class_path:
        module_name, _, attr_name = class_path.partition(":")
    else:
        module_name, _, attr_name = class_path.rpartition(".")

    try:
        module = importlib.import_module(module_name)
        target = getattr(module, attr_name)
    except (ImportError, AttributeError, ValueError):
        raise InvalidOptionValue(
            "ebcdic_code_page_class", class_path, "Unable to load the code page class."
        ) from None

    if isinstance(target, type):
        target = target()

    codec = target if isinstance(target, str) else getattr(target, "codec", None)
    if not isinstance(codec, str) or not _is_known_codec(codec):
        raise InvalidOptionValue(
            "ebcdic_code_page_class", class_path, "The class does not define a known codec."
        )
    return CodePage(name=getattr(target, "name", class_path), codec=codec)


def get_code_page(name: str = "common", class_path: Optional[str] = None) -> CodePage:
    """
    Resolve a code page selector. A custom class overrides the name.

    Args:
        name: Code page name
        class_path: Import path of a custom code page

    Returns:
        CodePage
    """
    if class_path:
        return get_code_page_by_class(class_path)
    return get_code_page_by_name(name)


def _is_known_codec(codec: str) -> bool:
    try:
        codecs.lookup(codec)
    except LookupError:
        return False
    return True
