"""
Utilities Module.

Provides EBCDIC code page lookup for the decode engine.

Example:
    >>> from mf_cobol.utils import get_code_page
    >>> get_code_page("common").codec
    'cp037'
"""

from mf_cobol.utils.encoding import CODE_PAGE_CODECS, CodePage, get_code_page

__all__ = [
    "CODE_PAGE_CODECS",
    "CodePage",
    "get_code_page",
]
