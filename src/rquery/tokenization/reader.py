"""Structural event reader backed by lxml's pull parser.

This module turns raw XML input into the ``ElementStart`` / ``Text`` /
``ElementEnd`` event sequence consumed by the tree builder. Tokenizing, well
formedness checks and entity handling are delegated to
``lxml.etree.XMLPullParser``; comments and processing instructions are dropped
by the parser itself so they never contribute text.
"""

from typing import BinaryIO, Dict, Iterable, Iterator, Optional

from lxml import etree

from rquery.shared import DocumentConfig, ParseError, get_logger
from rquery.tokenization.events import ElementEnd, ElementStart, Event, Text

STRING_ENCODING = "utf-8"
XML_DECLARATION = b"<?xml"
_XML_WHITESPACE = b" \t\r\n"


def local_name(name: str) -> str:
    """Strip any ``{namespace}`` prefix from an lxml tag or attribute name."""
    if name[:1] == "{":
        return etree.QName(name).localname
    return name


def _attributes(element: "etree._Element") -> Dict[str, str]:
    return {local_name(key): value for key, value in element.attrib.items()}


def _strip_before_declaration(chunks: Iterable[bytes]) -> Iterator[bytes]:
    """Drop whitespace ahead of an XML declaration, which the tokenizer rejects.

    Enough leading chunks are joined to see past the whitespace, so the
    declaration may be split across chunks of any size.
    """
    remaining = iter(chunks)
    head = b""
    for chunk in remaining:
        head += chunk
        if len(head.lstrip(_XML_WHITESPACE)) >= len(XML_DECLARATION):
            break

    stripped = head.lstrip(_XML_WHITESPACE)
    if stripped.startswith(XML_DECLARATION):
        head = stripped

    yield head
    yield from remaining


class EventReader:
    """Reads XML input and yields structural events.

    One reader can be reused for several inputs; every ``read_*`` call creates
    its own pull parser.
    """

    def __init__(
        self,
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize event reader.

        Args:
            config: Document configuration (defaults to ``DocumentConfig()``)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or DocumentConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "event_reader")

    def read_string(self, text: str) -> Iterator[Event]:
        """Yield events for a complete XML string."""
        # Decoded text ignores any encoding named in the XML declaration
        return self.read_chunks([text.encode(STRING_ENCODING)], STRING_ENCODING)

    def read_bytes(self, data: bytes) -> Iterator[Event]:
        """Yield events for a complete XML byte buffer."""
        return self.read_chunks([data], self.config.encoding)

    def read_stream(self, stream: BinaryIO) -> Iterator[Event]:
        """Yield events for a readable binary stream, read in chunks."""
        return self.read_chunks(self._iter_stream(stream), self.config.encoding)

    def _iter_stream(self, stream: BinaryIO) -> Iterator[bytes]:
        while True:
            chunk = stream.read(self.config.chunk_size)
            if not chunk:
                return
            yield chunk

    def read_chunks(
        self,
        chunks: Iterable[bytes],
        encoding: Optional[str] = None
    ) -> Iterator[Event]:
        """Feed byte chunks to a fresh pull parser and yield structural events.

        Args:
            chunks: Consecutive pieces of one XML document
            encoding: Encoding override; ``None`` uses the document's own

        Raises:
            ParseError: If the tokenizer rejects the input
        """
        parser = etree.XMLPullParser(
            events=("start", "end"),
            encoding=encoding,
            remove_comments=True,
            remove_pis=True,
            huge_tree=self.config.huge_tree,
        )

        try:
            for chunk in _strip_before_declaration(chunks):
                parser.feed(chunk)
                yield from self._drain(parser)
            parser.close()
            yield from self._drain(parser)
        except etree.LxmlError as e:
            self.logger.warning(
                "XML tokenizer rejected input",
                extra={"error": str(e), "exception_type": type(e).__name__}
            )
            raise ParseError(str(e)) from e

    def _drain(self, parser: "etree.XMLPullParser") -> Iterator[Event]:
        for action, element in parser.read_events():
            if action == "start":
                yield from self._on_start(element)
            else:
                yield from self._on_end(element)

    def _on_start(self, element: "etree._Element") -> Iterator[Event]:
        # Text in the parent up to this start tag is complete by now
        preceding = element.getprevious()
        if preceding is not None:
            if preceding.tail:
                yield Text(preceding.tail)
            element.getparent().remove(preceding)
        else:
            parent = element.getparent()
            if parent is not None and parent.text:
                yield Text(parent.text)

        yield ElementStart(local_name(element.tag), _attributes(element))

    def _on_end(self, element: "etree._Element") -> Iterator[Event]:
        if len(element):
            trailing = element[-1].tail
        else:
            trailing = element.text
        if trailing:
            yield Text(trailing)

        yield ElementEnd(local_name(element.tag))

        # Only the tail is still needed, by the next sibling or the parent
        element.clear(keep_tail=True)
