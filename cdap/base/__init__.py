"""Abstract resource blueprint and core utilities.

Every resource controller inherits from the blueprint defined here.
Import it to type-hint your own code or to add new resource kinds.
"""

from .resource import ResourceBlueprint
from .supported_resources import existing_resources


__all__ = [
    "ResourceBlueprint",
    "existing_resources",
]
