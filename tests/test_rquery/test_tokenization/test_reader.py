"""Tests for the lxml-backed structural event reader."""

import io

import pytest

from rquery.shared import DocumentConfig, ParseError
from rquery.tokenization import ElementEnd, ElementStart, EventReader, Text, local_name


class TestEventSequence:
    """Test the events produced for well-formed input."""

    def test_simple_document(self) -> None:
        """Test start, text and end events in document order."""
        events = list(EventReader().read_string('<a x="1">hi<b/>there</a>'))

        assert events == [
            ElementStart("a", {"x": "1"}),
            Text("hi"),
            ElementStart("b", {}),
            ElementEnd("b"),
            Text("there"),
            ElementEnd("a"),
        ]

    def test_comments_and_processing_instructions_are_dropped(self) -> None:
        """Test comments and PIs contribute no events and no text."""
        xml = "<a>one<!-- comment --><?pi data?>two<b/>three<!-- x --></a>"

        events = list(EventReader().read_string(xml))

        texts = "".join(e.content for e in events if isinstance(e, Text))
        assert texts == "onetwothree"
        assert [type(e) for e in events if not isinstance(e, Text)] == [
            ElementStart, ElementStart, ElementEnd, ElementEnd
        ]

    def test_entities_are_resolved(self) -> None:
        """Test predefined entities and character references."""
        events = list(EventReader().read_string("<a>&lt;&amp;&#65;</a>"))

        assert Text("<&A") in events

    def test_cdata_is_text(self) -> None:
        """Test CDATA sections become character data."""
        events = list(EventReader().read_string("<a><![CDATA[<raw>]]></a>"))

        assert Text("<raw>") in events

    def test_namespaces_are_reduced_to_local_names(self) -> None:
        """Test namespaced tags and attributes use their local names."""
        xml = '<x:root xmlns:x="urn:x"><x:item x:id="1" plain="2"/></x:root>'

        events = list(EventReader().read_string(xml))

        assert events[0] == ElementStart("root", {})
        assert events[1] == ElementStart("item", {"id": "1", "plain": "2"})
        assert events[-1] == ElementEnd("root")

    def test_whitespace_is_preserved(self) -> None:
        """Test whitespace-only text is reported."""
        events = list(EventReader().read_string("<a>\n  <b/>\n</a>"))

        assert events.count(Text("\n  ")) == 1
        assert events.count(Text("\n")) == 1

    def test_non_ascii_string(self) -> None:
        """Test str input with characters outside ASCII."""
        events = list(EventReader().read_string("<a>Ní mé</a>"))

        assert Text("Ní mé") in events


class TestInputSources:
    """Test bytes, streams and encodings."""

    XML = b'<list><item id="1">one</item><item id="2">two</item></list>'

    def test_bytes_and_stream_agree(self) -> None:
        """Test bytes and chunked stream input give identical events."""
        reader = EventReader(DocumentConfig(chunk_size=5))

        from_bytes = list(reader.read_bytes(self.XML))
        from_stream = list(reader.read_stream(io.BytesIO(self.XML)))

        assert from_bytes == from_stream
        assert Text("two") in from_stream

    @pytest.mark.parametrize("chunk_size", [1, 3, 1024])
    def test_whitespace_before_declaration(self, chunk_size: int) -> None:
        """Test leading whitespace ahead of the declaration in any chunking."""
        data = b' \r\n\t\n<?xml version="1.0"?>\n<a>x</a>'
        reader = EventReader(DocumentConfig(chunk_size=chunk_size))

        from_stream = list(reader.read_stream(io.BytesIO(data)))

        assert from_stream == list(reader.read_bytes(data))
        assert from_stream == [ElementStart("a", {}), Text("x"), ElementEnd("a")]

    def test_whitespace_before_root_without_declaration(self) -> None:
        """Test documents without a declaration keep parsing as before."""
        events = list(EventReader().read_string("\n  <a/>"))

        assert events == [ElementStart("a", {}), ElementEnd("a")]

    def test_declared_encoding_is_honoured(self) -> None:
        """Test byte input decoded according to its XML declaration."""
        data = '<?xml version="1.0" encoding="ISO-8859-1"?><a>café</a>'.encode("iso-8859-1")

        events = list(EventReader().read_bytes(data))

        assert Text("café") in events

    def test_encoding_override(self) -> None:
        """Test the configured encoding applies to undeclared byte input."""
        reader = EventReader(DocumentConfig(encoding="ISO-8859-1"))

        events = list(reader.read_bytes("<a>café</a>".encode("iso-8859-1")))

        assert Text("café") in events


class TestTokenizerErrors:
    """Test malformed input surfaces as ParseError."""

    @pytest.mark.parametrize(
        "xml",
        [
            "<a><b></a>",
            "<a>",
            "<a></a><b></b>",
            "not xml",
            "",
            '<a x="1" x="2"/>',
        ],
    )
    def test_malformed_input(self, xml: str) -> None:
        """Test the tokenizer's error is wrapped in ParseError."""
        with pytest.raises(ParseError) as excinfo:
            list(EventReader().read_string(xml))

        assert excinfo.value.message == str(excinfo.value)
        assert excinfo.value.__cause__ is not None

    def test_events_before_error_are_delivered(self) -> None:
        """Test the reader yields events until the tokenizer fails."""
        events = []

        with pytest.raises(ParseError):
            for event in EventReader().read_string("<a><b/>"):
                events.append(event)

        assert ElementStart("a", {}) in events


def test_local_name() -> None:
    """Test namespace stripping of lxml names."""
    assert local_name("{urn:x}item") == "item"
    assert local_name("item") == "item"
