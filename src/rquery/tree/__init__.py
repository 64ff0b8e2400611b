"""Element tree and tree construction.

Key Components:
    Element: Immutable document element with attributes, text and children
    TreeBuilder: Builds an element tree from structural events
"""

from .builder import TreeBuilder
from .element import ROOT_TAG, Element

__all__ = [
    "Element",
    "ROOT_TAG",
    "TreeBuilder",
]
