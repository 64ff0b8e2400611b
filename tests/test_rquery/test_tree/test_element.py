"""Tests for the immutable element model."""

import dataclasses

import pytest

from rquery.selector import parse_selector
from rquery.tree import ROOT_TAG, Element


def _tree() -> Element:
    """<list>Items: <item id="a">one</item>, <item>two</item>.</list>"""
    first = Element("item", 2, {"id": "a"}, text_segments=("one",))
    second = Element("item", 3, text_segments=("two",))
    return Element(
        "list",
        1,
        children=(first, second),
        text_segments=("Items: ", ", ", "."),
    )


class TestElementCreation:
    """Test Element validation and immutability."""

    def test_element_creation_with_valid_data(self) -> None:
        """Test creating an Element with valid data."""
        element = Element("root", 1, {"id": "test"}, text_segments=("content",))

        assert element.tag_name == "root"
        assert element.traversal_index == 1
        assert element.attr("id") == "test"
        assert element.text == "content"
        assert element.children == ()

    def test_empty_tag_raises_error(self) -> None:
        """Test that an empty tag raises ValueError."""
        with pytest.raises(ValueError, match="Element tag cannot be empty"):
            Element("", 1)

    def test_negative_index_raises_error(self) -> None:
        """Test that a negative traversal index raises ValueError."""
        with pytest.raises(ValueError, match="Traversal index must be >= 0"):
            Element("a", -1)

    def test_segment_count_must_match_children(self) -> None:
        """Test text segments must fill every gap around the children."""
        child = Element("b", 2)

        with pytest.raises(ValueError, match="one text segment per child gap"):
            Element("a", 1, children=(child,))

    def test_fields_are_frozen(self) -> None:
        """Test elements cannot be modified after construction."""
        element = Element("a", 1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            element.tag_name = "b"  # type: ignore[misc]

    def test_attributes_are_read_only(self) -> None:
        """Test the attribute mapping cannot be modified."""
        source = {"id": "x"}
        element = Element("a", 1, source)

        with pytest.raises(TypeError):
            element.attributes["id"] = "y"  # type: ignore[index]

        source["id"] = "changed"
        assert element.attr("id") == "x"

    def test_children_list_is_frozen_to_tuple(self) -> None:
        """Test a children list is stored as a tuple."""
        child = Element("b", 2)
        element = Element("a", 1, children=[child], text_segments=("", ""))  # type: ignore[arg-type]

        assert element.children == (child,)

    def test_equality_is_identity(self) -> None:
        """Test structurally equal elements are still distinct."""
        assert Element("a", 1) != Element("a", 1)


class TestElementAccessors:
    """Test text, attribute and size accessors."""

    def test_text_is_own_character_data(self) -> None:
        """Test text joins only the element's own segments."""
        assert _tree().text == "Items: , ."

    def test_full_text_interleaves_descendants(self) -> None:
        """Test full_text follows document order."""
        assert _tree().full_text == "Items: one, two."

    def test_attr_missing_returns_none(self) -> None:
        """Test attr returns None for absent attributes."""
        first = _tree().children[0]

        assert first.attr("missing") is None
        assert first.has_attr("id")
        assert not first.has_attr("missing")

    def test_counts(self) -> None:
        """Test children_count and subtree_size."""
        tree = _tree()

        assert tree.children_count() == 2
        assert tree.subtree_size() == 3
        assert tree.children[0].subtree_size() == 1

    def test_iter_descendants_is_pre_order(self) -> None:
        """Test descendants are yielded parents first, in document order."""
        leaf = Element("leaf", 3)
        inner = Element("inner", 2, children=(leaf,), text_segments=("", ""))
        sibling = Element("sibling", 4)
        outer = Element("outer", 1, children=(inner, sibling), text_segments=("", "", ""))

        assert [e.tag_name for e in outer.iter_descendants()] == ["inner", "leaf", "sibling"]
        assert [e.tag_name for e in outer.iter_children()] == ["inner", "sibling"]

    def test_to_dict(self) -> None:
        """Test dictionary conversion."""
        result = _tree().to_dict()

        assert result["tag"] == "list"
        assert result["text"] == "Items: , ."
        assert result["children"][0] == {
            "tag": "item",
            "attributes": {"id": "a"},
            "text": "one",
        }

    def test_matches_compound_selector(self) -> None:
        """Test an element checks itself against one compound selector."""
        first = _tree().children[0]
        matching, other_id, other_tag = (
            parse_selector(text)[0] for text in ("item#a", "item#b", "list")
        )

        assert first.matches(matching)
        assert not first.matches(other_id)
        assert not first.matches(other_tag)
        assert first.matches(matching) == matching.matches(first)

    def test_repr(self) -> None:
        """Test repr mentions tag and index."""
        assert repr(Element("a", 7)) == "Element(tag_name='a', traversal_index=7, children=0)"


class TestSyntheticRoot:
    """Test the synthetic root wrapper."""

    def test_synthetic_root(self) -> None:
        """Test the synthetic root wraps the document element."""
        document_element = _tree()
        root = Element.synthetic_root(document_element)

        assert root.is_root
        assert root.tag_name == ROOT_TAG
        assert root.traversal_index == 0
        assert root.children == (document_element,)
        assert root.text == ""
        assert not document_element.is_root
