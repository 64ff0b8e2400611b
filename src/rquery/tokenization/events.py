"""Structural events consumed by the tree builder.

The tree builder never sees raw XML. It consumes this small event vocabulary,
which the reader produces from the underlying XML tokenizer.
"""

from dataclasses import dataclass, field
from typing import Dict, Union


@dataclass(frozen=True)
class ElementStart:
    """An element's start tag with its attributes."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate event values."""
        if not self.tag:
            raise ValueError("Element tag cannot be empty")


@dataclass(frozen=True)
class ElementEnd:
    """An element's end tag."""

    tag: str

    def __post_init__(self) -> None:
        """Validate event values."""
        if not self.tag:
            raise ValueError("Element tag cannot be empty")


@dataclass(frozen=True)
class Text:
    """Character or whitespace data."""

    content: str


Event = Union[ElementStart, ElementEnd, Text]
