"""Immutable element tree.

Elements are created by the tree builder once their end tag has been seen and
never change afterwards. Parents own their children; there are no parent
pointers, so a tree is released as soon as its root is dropped.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Iterator, Mapping, Optional, Tuple

from rquery.selector import engine

if TYPE_CHECKING:
    from rquery.selector.parser import CompoundSelector

# Tag of the synthetic element wrapping the document element; it cannot be
# matched by a tag selector since those must start with a letter
ROOT_TAG = "#root"
ROOT_INDEX = 0


@dataclass(frozen=True, eq=False)
class Element:
    """A single element of the document tree.

    ``text`` holds only the character data found directly inside this element;
    ``full_text`` interleaves it with the text of all descendants.

    ``traversal_index`` numbers elements in document order. It is an ordering
    key for query deduplication, not an identity.
    """

    tag_name: str
    traversal_index: int
    attributes: Mapping[str, str] = field(default_factory=dict)
    children: Tuple["Element", ...] = ()
    # Text before the first child, between consecutive children, and after
    # the last child; always one entry more than there are children
    text_segments: Tuple[str, ...] = ("",)

    def __post_init__(self) -> None:
        """Validate element values and freeze the attribute mapping."""
        if not self.tag_name:
            raise ValueError("Element tag cannot be empty")
        if self.traversal_index < 0:
            raise ValueError("Traversal index must be >= 0")
        if len(self.text_segments) != len(self.children) + 1:
            raise ValueError("Element needs exactly one text segment per child gap")

        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def synthetic_root(cls, document_element: "Element") -> "Element":
        """Wrap the document element in the synthetic tree root."""
        return cls(
            tag_name=ROOT_TAG,
            traversal_index=ROOT_INDEX,
            children=(document_element,),
            text_segments=("", ""),
        )

    @property
    def is_root(self) -> bool:
        """Check if this is the synthetic tree root."""
        return self.tag_name == ROOT_TAG

    @property
    def text(self) -> str:
        """Character data directly inside this element, in document order."""
        return "".join(self.text_segments)

    @property
    def full_text(self) -> str:
        """Text of this element and all descendants, in document order."""
        parts = [self.text_segments[0]]
        for child, segment in zip(self.children, self.text_segments[1:]):
            parts.append(child.full_text)
            parts.append(segment)
        return "".join(parts)

    def attr(self, name: str) -> Optional[str]:
        """Get attribute value, or None if the attribute is absent."""
        return self.attributes.get(name)

    def has_attr(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return name in self.attributes

    def children_count(self) -> int:
        """Number of direct children."""
        return len(self.children)

    def subtree_size(self) -> int:
        """Number of elements in this subtree, including this element."""
        return 1 + sum(1 for _ in self.iter_descendants())

    def iter_children(self) -> Iterator["Element"]:
        """Iterate over direct children in document order."""
        return iter(self.children)

    def iter_descendants(self) -> Iterator["Element"]:
        """Iterate over all proper descendants in document order."""
        stack = list(reversed(self.children))
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def matches(self, compound_selector: "CompoundSelector") -> bool:
        """Check if this element satisfies every part of ``compound_selector``."""
        return compound_selector.matches(self)

    def select_all(self, selector: str) -> Iterator["Element"]:
        """Find the elements below this one that match ``selector``.

        Raises:
            SelectorParseError: If the selector is malformed
        """
        return engine.select_all(self, selector)

    def select(self, selector: str) -> "Element":
        """Find the first element below this one that matches ``selector``.

        Raises:
            SelectorParseError: If the selector is malformed
            NoMatchError: If nothing matches
        """
        return engine.select(self, selector)

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {
            "tag": self.tag_name,
            "attributes": dict(self.attributes),
        }

        text = self.text
        if text.strip():
            result["text"] = text

        if self.children:
            result["children"] = [child.to_dict() for child in self.children]

        return result

    def __repr__(self) -> str:
        return (
            f"Element(tag_name={self.tag_name!r}, "
            f"traversal_index={self.traversal_index}, "
            f"children={len(self.children)})"
        )
