"""Component ID Generation.

ULID-based identifiers for nodes that arrive without an ``id``.

Design:
- Prefixed: ``<tag>_<ULID>`` so logs and state keys show the node kind
- K-sortable: nodes decoded later sort after earlier ones
"""

from typing import NewType
from ulid import ULID

ComponentID = NewType("ComponentID", str)
"""Component node identifier"""


def new_component_id(tag: str) -> ComponentID:
    """Generate a component ID for a node tag (``TextField`` -> ``textfield_<ULID>``)."""
    return ComponentID(f"{tag.lower()}_{ULID()}")
