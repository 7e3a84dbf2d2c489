"""
TagCrypt Core Package
=====================
Record model for tag-searchable encrypted storage.

Provides:
- Row: encrypted payload + random tags, with client-only plaintext and plain tags
- TagPairs: client-held index resolving random tags back to plain tags
- secretbox cipher collaborator and key helpers
- JSON structured logging and runtime config
"""

from .config import RowConfig, load_config
from .errors import (
    RowError,
    GenerationError,
    DeserializationError,
    MissingKeyError,
    DecryptionError,
    EncryptionError,
    NoMatchingTagsError,
    PopulateError,
    ReservedTagError,
)
from .row import Row
from .rows import Rows
from .tagpairs import TagPair, TagPairs
from .tags import Tag, TagKind

__all__ = [
    "Row",
    "Rows",
    "TagPair",
    "TagPairs",
    "Tag",
    "TagKind",
    "RowConfig",
    "load_config",
    "RowError",
    "GenerationError",
    "DeserializationError",
    "MissingKeyError",
    "DecryptionError",
    "EncryptionError",
    "NoMatchingTagsError",
    "PopulateError",
    "ReservedTagError",
]
