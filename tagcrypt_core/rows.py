# tagcrypt_core/rows.py

from __future__ import annotations
from typing import Optional
import json

from .config import RowConfig
from .crypto import Cipher
from .errors import DeserializationError
from .row import Row
from .utils import as_bytes
from .tagpairs import TagPairs


class Rows(list):
    """A batch of Rows as returned by a backend query."""

    @classmethod
    def from_bytes(cls, data: bytes, *, config: Optional[RowConfig] = None) -> "Rows":
        """Unmarshal a JSON array of wire-form rows. Any bad element fails the batch."""
        try:
            items = json.loads(data)
        except (TypeError, ValueError, RecursionError) as e:
            raise DeserializationError(f"Error creating rows: `{e}`", as_bytes(data)) from e
        if not isinstance(items, list):
            raise DeserializationError("Error creating rows: `expected a JSON array`", as_bytes(data))
        return cls(Row.from_dict(item, config=config) for item in items)

    def to_wire(self) -> bytes:
        return json.dumps([r.to_dict() for r in self], separators=(",", ":")).encode("utf-8")

    def populate(self, key: Optional[bytes], pairs: TagPairs, *, cipher: Optional[Cipher] = None) -> None:
        for row in self:
            row.populate(key, pairs, cipher=cipher)

    def with_plain_tag(self, plain: str) -> "Rows":
        return Rows(r for r in self if r.has_plain_tag(plain))

    def with_random_tag(self, token: str) -> "Rows":
        return Rows(r for r in self if r.has_random_tag(token))

    def sort_by_created(self) -> None:
        """Oldest first; rows without a created tag go last."""
        self.sort(key=lambda r: (r.created is None, r.created or ""))
