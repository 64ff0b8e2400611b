"""Tree construction from structural events.

``TreeBuilder`` consumes ``ElementStart`` / ``Text`` / ``ElementEnd`` events
and produces an immutable element tree below a synthetic root. Elements are
numbered in document order: the number is reserved when the start tag is seen
and stamped onto the element when it is frozen at its end tag, so a parent
always has a lower index than its descendants and its descendants a lower
index than any later sibling.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from rquery.shared import BuildMetrics, ParseError, get_logger
from rquery.tokenization import ElementEnd, ElementStart, Event, Text
from rquery.tree.element import ROOT_INDEX, Element

MS_PER_SECOND = 1000


@dataclass
class _OpenElement:
    """An element whose end tag has not been seen yet."""

    tag_name: str
    attributes: Dict[str, str]
    traversal_index: int
    children: List[Element] = field(default_factory=list)
    text_segments: List[str] = field(default_factory=lambda: [""])

    def append_text(self, content: str) -> None:
        self.text_segments[-1] += content

    def append_child(self, child: Element) -> None:
        self.children.append(child)
        self.text_segments.append("")

    def freeze(self) -> Element:
        return Element(
            tag_name=self.tag_name,
            traversal_index=self.traversal_index,
            attributes=self.attributes,
            children=tuple(self.children),
            text_segments=tuple(self.text_segments),
        )


class TreeBuilder:
    """Builds element trees from structural event streams.

    A builder keeps no state between ``build`` calls apart from the metrics of
    the last build, and the traversal counter starts over for every build.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize tree builder.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_builder")
        self.metrics = BuildMetrics()

    def build(self, events: Iterable[Event]) -> Element:
        """Build an element tree from an event stream.

        Args:
            events: Structural events of exactly one XML document

        Returns:
            The synthetic root, whose single child is the document element

        Raises:
            ParseError: If the events do not describe one properly nested
                document, or if the event source itself fails to tokenize
        """
        start_time = time.time()
        self.metrics = BuildMetrics()
        self.logger.debug("Starting tree building")

        try:
            root = self._build_tree(events)
        except ParseError as e:
            self.metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
            self.logger.warning(
                "Tree building failed",
                extra={
                    "error": e.message,
                    "events_processed": self.metrics.events_processed,
                }
            )
            raise

        self.metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        self.logger.info(
            "Tree building completed",
            extra={
                "element_count": self.metrics.elements_created,
                "max_depth": self.metrics.max_depth,
                "processing_time_ms": self.metrics.processing_time_ms,
            }
        )
        return root

    def _build_tree(self, events: Iterable[Event]) -> Element:
        stack: List[_OpenElement] = []
        next_index = ROOT_INDEX + 1
        root: Optional[Element] = None
        metrics = self.metrics

        for event in events:
            metrics.events_processed += 1

            if isinstance(event, Text):
                # Text outside the document element carries no information
                if stack:
                    stack[-1].append_text(event.content)
                    metrics.characters_processed += len(event.content)

            elif isinstance(event, ElementStart):
                if root is not None:
                    raise ParseError(
                        f"Unexpected element <{event.tag}> after the document element"
                    )
                stack.append(
                    _OpenElement(event.tag, dict(event.attributes), next_index)
                )
                next_index += 1
                metrics.max_depth = max(metrics.max_depth, len(stack))

            elif isinstance(event, ElementEnd):
                if not stack:
                    raise ParseError(f"Unexpected end tag </{event.tag}>")
                if stack[-1].tag_name != event.tag:
                    raise ParseError(
                        f"Mismatched end tag: expected </{stack[-1].tag_name}>, "
                        f"found </{event.tag}>"
                    )

                element = stack.pop().freeze()
                metrics.elements_created += 1

                if stack:
                    stack[-1].append_child(element)
                else:
                    root = Element.synthetic_root(element)

            else:
                raise TypeError(f"Unsupported event type: {type(event).__name__}")

        if root is None:
            if stack:
                raise ParseError(f"Unexpected end of document inside <{stack[-1].tag_name}>")
            raise ParseError("Document contains no elements")

        return root
