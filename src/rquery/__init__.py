"""rquery.

Parse XML documents into immutable element trees and query them with a small
CSS selector dialect: tag names, ``#id``, ``[attr="value"]``, descendant
(``a b``) and direct child (``a > b``) combinators.

    >>> from rquery import Document
    >>> document = Document.from_string("<list><item>a</item><item>b</item></list>")
    >>> [item.text for item in document.select_all("list > item")]
    ['a', 'b']
"""

__version__ = "0.1.0"
__author__ = "rquery contributors"

from .api import Document
from .selector import (
    Attribute,
    CompoundSelector,
    Id,
    MatchType,
    Scope,
    TagName,
    parse_selector,
)
from .shared import (
    DocumentConfig,
    DocumentError,
    NoMatchError,
    ParseError,
    RQueryError,
    SelectError,
    SelectorParseError,
    UnableToOpenFileError,
    UnexpectedTokenError,
)
from .tree import Element

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Documents and elements
    "Document",
    "DocumentConfig",
    "Element",

    # Selectors
    "Attribute",
    "CompoundSelector",
    "Id",
    "MatchType",
    "Scope",
    "TagName",
    "parse_selector",

    # Errors
    "DocumentError",
    "NoMatchError",
    "ParseError",
    "RQueryError",
    "SelectError",
    "SelectorParseError",
    "UnableToOpenFileError",
    "UnexpectedTokenError",
]
