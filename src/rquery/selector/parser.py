"""Selector string parsing.

A selector such as ``related > item[index="1"] title`` is split into compound
selectors, one per whitespace separated unit. Each compound selector carries
its scope relative to the previous one and a conjunction of simple selectors:
tag name, ``#id`` and ``[attr=value]``.

Identifiers (tag names, ids, attribute names and unquoted attribute values)
are limited to ``[A-Za-z][A-Za-z0-9_-]*``; there is no escaping.
"""

import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, List, Tuple, Union

from rquery.shared.errors import END_OF_INPUT, UnexpectedTokenError

if TYPE_CHECKING:
    from rquery.tree.element import Element

COMBINATOR = ">"

_NAME_START_CHARS = frozenset(string.ascii_letters)
_NAME_CHARS = _NAME_START_CHARS | frozenset(string.digits) | frozenset("-_")


class Scope(Enum):
    """Where a compound selector looks relative to the previous stage."""

    DIRECT_CHILD = auto()    # Immediate children only (``a > b``)
    INDIRECT_CHILD = auto()  # Any descendant (``a b``)


class MatchType(Enum):
    """Attribute comparison operators."""

    EQUALS = auto()


@dataclass(frozen=True)
class TagName:
    """Matches elements by tag name (``item``)."""

    name: str

    def matches(self, element: "Element") -> bool:
        return element.tag_name == self.name

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Id:
    """Matches elements by their ``id`` attribute (``#main``)."""

    value: str

    def matches(self, element: "Element") -> bool:
        return element.attr("id") == self.value

    def __str__(self) -> str:
        return f"#{self.value}"


@dataclass(frozen=True)
class Attribute:
    """Matches elements by an attribute value (``[type="simple"]``)."""

    name: str
    match_type: MatchType
    value: str

    def matches(self, element: "Element") -> bool:
        if self.match_type is MatchType.EQUALS:
            return element.attr(self.name) == self.value
        return False

    def __str__(self) -> str:
        return f'[{self.name}="{self.value}"]'


SimpleSelector = Union[TagName, Id, Attribute]


@dataclass(frozen=True)
class CompoundSelector:
    """A scoped conjunction of simple selectors."""

    scope: Scope
    parts: Tuple[SimpleSelector, ...]

    @classmethod
    def parse(cls, selector: str) -> List["CompoundSelector"]:
        """Parse a selector string, see ``parse_selector``."""
        return parse_selector(selector)

    def matches(self, element: "Element") -> bool:
        """Check if every part of this compound selector matches ``element``."""
        return all(part.matches(element) for part in self.parts)

    def __str__(self) -> str:
        text = "".join(str(part) for part in self.parts)
        if self.scope is Scope.DIRECT_CHILD:
            return f"{COMBINATOR} {text}"
        return text


def parse_selector(selector: str) -> List[CompoundSelector]:
    """Parse a selector string into compound selectors in source order.

    Args:
        selector: Selector text, e.g. ``'sample > title'``

    Returns:
        List of CompoundSelector; the first one is scoped to the element the
        query runs on

    Raises:
        UnexpectedTokenError: If the selector is empty or malformed

    Examples:
        >>> [str(part) for part in parse_selector("a>b c")]
        ['a', '> b', 'c']
    """
    tokens = selector.replace(COMBINATOR, f" {COMBINATOR} ").split()
    if not tokens:
        raise UnexpectedTokenError(END_OF_INPUT)

    compound_selectors: List[CompoundSelector] = []
    direct_child = False

    for token in tokens:
        if token == COMBINATOR:
            if direct_child:
                raise UnexpectedTokenError(COMBINATOR)
            direct_child = True
            continue

        scope = Scope.DIRECT_CHILD if direct_child else Scope.INDIRECT_CHILD
        compound_selectors.append(
            CompoundSelector(scope=scope, parts=_CompoundParser(token).parse())
        )
        direct_child = False

    # A trailing combinator has nothing to apply to
    if direct_child:
        raise UnexpectedTokenError(END_OF_INPUT)

    return compound_selectors


class _CompoundParser:
    """Parses one whitespace-free token into simple selectors."""

    __slots__ = ("token", "pos")

    def __init__(self, token: str) -> None:
        self.token = token
        self.pos = 0

    def _peek(self) -> str:
        if self.pos < len(self.token):
            return self.token[self.pos]
        return ""

    def _unexpected(self) -> UnexpectedTokenError:
        return UnexpectedTokenError(self._peek() or END_OF_INPUT)

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            raise self._unexpected()
        self.pos += 1

    def _read_name(self) -> str:
        start = self.pos
        if self._peek() not in _NAME_START_CHARS:
            raise self._unexpected()
        self.pos += 1
        while self.pos < len(self.token) and self.token[self.pos] in _NAME_CHARS:
            self.pos += 1
        return self.token[start:self.pos]

    def _read_attribute(self) -> Attribute:
        self._expect("[")
        name = self._read_name()
        self._expect("=")

        if self._peek() == '"':
            self.pos += 1
            end = self.token.find('"', self.pos)
            if end < 0:
                raise UnexpectedTokenError(END_OF_INPUT)
            value = self.token[self.pos:end]
            self.pos = end + 1
        else:
            value = self._read_name()

        self._expect("]")
        return Attribute(name, MatchType.EQUALS, value)

    def parse(self) -> Tuple[SimpleSelector, ...]:
        parts: List[SimpleSelector] = []

        while self.pos < len(self.token):
            char = self._peek()
            if char in _NAME_START_CHARS and not parts:
                parts.append(TagName(self._read_name()))
            elif char == "#":
                self.pos += 1
                parts.append(Id(self._read_name()))
            elif char == "[":
                parts.append(self._read_attribute())
            else:
                raise self._unexpected()

        return tuple(parts)
