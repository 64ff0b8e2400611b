"""Document loading and querying.

``Document`` is the composition root: it reads XML from a string, bytes, a
binary stream or a file, owns the resulting element tree and runs selector
queries against it.

Examples:
    >>> document = Document.from_string('<root><item id="a">value</item></root>')
    >>> document.element_count
    2
    >>> document.select("#a").text
    'value'
"""

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from rquery.shared import (
    BuildMetrics,
    DocumentConfig,
    UnableToOpenFileError,
    get_logger,
)
from rquery.tokenization import Event, EventReader
from rquery.tree import Element, TreeBuilder

# Constants for log output
PREVIEW_LENGTH = 100  # Max length for content preview in logs


class Document:
    """A parsed XML document.

    The document is immutable once built, so any number of threads may query
    it concurrently.
    """

    def __init__(self, tree: Element, metrics: Optional[BuildMetrics] = None) -> None:
        """Wrap an already built tree.

        Args:
            tree: Synthetic root as returned by ``TreeBuilder.build``
            metrics: Metrics of the build that produced ``tree``

        Raises:
            ValueError: If ``tree`` is not a synthetic root
        """
        if not tree.is_root or len(tree.children) != 1:
            raise ValueError("Document tree must be a synthetic root with one child")
        self._tree = tree
        self.metrics = metrics or BuildMetrics()

    @classmethod
    def from_string(
        cls,
        text: str,
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None
    ) -> "Document":
        """Parse a document from a complete XML string.

        Raises:
            ParseError: If the XML is malformed
        """
        logger = get_logger(__name__, correlation_id, "document")
        if logger.is_enabled_for(logging.DEBUG):
            logger.debug(
                "Parsing document from string",
                extra={
                    "content_length": len(text),
                    "preview": text[:PREVIEW_LENGTH],
                }
            )
        reader = EventReader(config, correlation_id)
        return cls._build(reader.read_string(text), correlation_id)

    @classmethod
    def from_bytes(
        cls,
        data: Union[bytes, bytearray, BinaryIO],
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None
    ) -> "Document":
        """Parse a document from a byte buffer or a readable binary stream.

        Raises:
            ParseError: If the XML is malformed
        """
        reader = EventReader(config, correlation_id)
        if isinstance(data, (bytes, bytearray)):
            events = reader.read_bytes(bytes(data))
        else:
            events = reader.read_stream(data)
        return cls._build(events, correlation_id)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None
    ) -> "Document":
        """Parse a document from a file.

        Raises:
            UnableToOpenFileError: If the file cannot be opened
            ParseError: If the XML is malformed
        """
        logger = get_logger(__name__, correlation_id, "document")
        file_path = Path(path)

        try:
            stream = file_path.open("rb")
        except OSError as e:
            logger.warning(
                "Unable to open document file",
                extra={"path": str(file_path), "error": str(e)}
            )
            raise UnableToOpenFileError(str(path), e.strerror) from e

        logger.debug("Parsing document from file", extra={"path": str(file_path)})
        with stream:
            return cls.from_bytes(stream, config, correlation_id)

    @classmethod
    def _build(cls, events: Iterator[Event], correlation_id: Optional[str]) -> "Document":
        builder = TreeBuilder(correlation_id)
        tree = builder.build(events)
        return cls(tree, builder.metrics)

    @property
    def tree(self) -> Element:
        """The synthetic root above the document element."""
        return self._tree

    @property
    def root(self) -> Element:
        """The document element."""
        return self._tree.children[0]

    @property
    def element_count(self) -> int:
        """Number of elements in the document, excluding the synthetic root."""
        return self._tree.subtree_size() - 1

    def iter_elements(self) -> Iterator[Element]:
        """Iterate over all document elements in document order."""
        return self._tree.iter_descendants()

    def select_all(self, selector: str) -> Iterator[Element]:
        """Find all elements matching ``selector``, in document order.

        Raises:
            SelectorParseError: If the selector is malformed
        """
        return self._tree.select_all(selector)

    def select(self, selector: str) -> Element:
        """Find the first element matching ``selector``.

        Raises:
            SelectorParseError: If the selector is malformed
            NoMatchError: If nothing matches
        """
        return self._tree.select(selector)

    def __repr__(self) -> str:
        return f"Document(root={self.root.tag_name!r}, elements={self.element_count})"
