"""Selector parsing and matching.

Key Components:
    parse_selector: Turns selector text into CompoundSelector stages
    select_all, select: Run a selector against an element subtree
"""

from .parser import (
    Attribute,
    CompoundSelector,
    Id,
    MatchType,
    Scope,
    SimpleSelector,
    TagName,
    parse_selector,
)
from .engine import select, select_all

__all__ = [
    "Attribute",
    "CompoundSelector",
    "Id",
    "MatchType",
    "Scope",
    "SimpleSelector",
    "TagName",
    "parse_selector",
    "select",
    "select_all",
]
