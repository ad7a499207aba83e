"""Tests for component ID generation."""

from ulid import ULID

from sdui.core.id import new_component_id


class TestGeneration:
    """Test basic ID generation."""

    def test_prefixed_by_lowercase_tag(self):
        """IDs carry the lowercased node tag."""
        component_id = new_component_id("TextField")

        prefix, _, ulid_part = component_id.rpartition("_")
        assert prefix == "textfield"
        assert len(ulid_part) == 26

    def test_generate_unique_ids(self):
        """IDs should be unique."""
        ids = {new_component_id("Text") for _ in range(100)}
        assert len(ids) == 100

    def test_ulid_part_parses(self):
        """The suffix is a real ULID."""
        ulid_part = new_component_id("Button").rsplit("_", 1)[-1]
        assert str(ULID.from_str(ulid_part)) == ulid_part

    def test_sortable_by_creation(self):
        """Later ids sort after earlier ones."""
        first = new_component_id("Text").split("_", 1)[1]
        second = new_component_id("Text").split("_", 1)[1]

        assert ULID.from_str(first).timestamp <= ULID.from_str(second).timestamp
