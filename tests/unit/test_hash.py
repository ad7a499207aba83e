"""Tests for hash module."""

from hypothesis import given, strategies as st

from sdui.core.hash import hash_bytes, hash_string


def test_hash_string_xxhash():
    """Test xxhash string hashing."""
    result = hash_string("test")
    assert isinstance(result, str)
    assert len(result) == 16  # xxhash64 produces 16 hex chars
    assert result == hash_bytes(b"test")


def test_hash_string_truncate():
    """Test hash truncation."""
    full = hash_string("test")
    truncated = hash_string("test", truncate=8)

    assert len(truncated) == 8
    assert full.startswith(truncated)


def test_documents_differ():
    """Different documents get different keys."""
    assert hash_string('{"type":"Text","text":"a"}') != hash_string('{"type":"Text","text":"b"}')


@given(st.text())
def test_hash_deterministic(text):
    """Property: same input always produces same hash."""
    assert hash_string(text) == hash_string(text)
