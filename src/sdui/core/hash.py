"""Fast hashing for document cache keys."""

import xxhash


def hash_bytes(data: bytes) -> str:
    """xxhash64 hex digest (16 characters)."""
    return xxhash.xxh64(data).hexdigest()


def hash_string(text: str, truncate: int | None = None) -> str:
    """
    Hash a string.

    Args:
        text: Input text, encoded as UTF-8
        truncate: Keep only the first N hex characters

    Returns:
        Hex digest
    """
    digest = hash_bytes(text.encode("utf-8"))
    return digest[:truncate] if truncate else digest
