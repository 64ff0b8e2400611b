"""Selector query engine.

A query is a left fold over the parsed compound selectors. Starting from the
element the query runs on, every stage expands the surviving elements to their
children or descendants, keeps those matching the stage's compound selector,
and drops repeats.

Repeats are detected with a watermark over ``traversal_index``: each stage's
expansion is merged into index order first, so an element is emitted only if
its index is above the highest index emitted so far. Nested matches of a
descendant stage (``div div``) and re-entrant child expansions (``div > div``)
are both handled without keeping a set of seen elements.
"""

import heapq
import logging
from operator import attrgetter
from typing import TYPE_CHECKING, Iterable, Iterator, List

from rquery.selector.parser import CompoundSelector, Scope, parse_selector
from rquery.shared.errors import NoMatchError, SelectorParseError, UnexpectedTokenError
from rquery.shared.logging import get_logger

if TYPE_CHECKING:
    from rquery.tree.element import Element

_by_index = attrgetter("traversal_index")

logger = get_logger(__name__, component="query_engine")


def select_all(element: "Element", selector: str) -> Iterator["Element"]:
    """Lazily find all elements below ``element`` matching ``selector``.

    The selector is parsed eagerly so syntax errors surface here; matching
    happens as the returned iterator is consumed. Results are unique and in
    document order. An empty result is not an error.

    Args:
        element: Element the query is rooted at (never part of the result)
        selector: Selector text

    Returns:
        Iterator over matching elements

    Raises:
        SelectorParseError: If the selector is malformed
    """
    compound_selectors = _parse(selector)

    if logger.is_enabled_for(logging.DEBUG):
        logger.debug(
            "Running selector query",
            extra={
                "selector": selector,
                "stages": [str(stage) for stage in compound_selectors],
                "root_index": element.traversal_index,
            }
        )

    matches: Iterator["Element"] = iter((element,))
    for compound_selector in compound_selectors:
        matches = _run_stage(matches, compound_selector)
    return matches


def select(element: "Element", selector: str) -> "Element":
    """Return the first element below ``element`` matching ``selector``.

    Raises:
        SelectorParseError: If the selector is malformed
        NoMatchError: If the selector matches nothing
    """
    for match in select_all(element, selector):
        return match
    raise NoMatchError(selector)


def _parse(selector: str) -> List[CompoundSelector]:
    try:
        return parse_selector(selector)
    except UnexpectedTokenError as e:
        logger.debug(
            "Rejected malformed selector",
            extra={"selector": selector, "token": e.token}
        )
        raise SelectorParseError(selector, e) from e


def _expand(element: "Element", scope: Scope) -> Iterator["Element"]:
    if scope is Scope.DIRECT_CHILD:
        return element.iter_children()
    return element.iter_descendants()


def _run_stage(
    previous: Iterable["Element"],
    compound_selector: CompoundSelector
) -> Iterator["Element"]:
    """Expand, filter and deduplicate one stage of the fold."""
    expansions = [_expand(element, compound_selector.scope) for element in previous]
    candidates = heapq.merge(*expansions, key=_by_index)

    watermark = -1
    for candidate in candidates:
        if candidate.traversal_index <= watermark:
            continue
        if compound_selector.matches(candidate):
            watermark = candidate.traversal_index
            yield candidate
