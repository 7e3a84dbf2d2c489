"""
tagcrypt_core.row
-----------------
Row is the unit of stored data: an encrypted payload plus a set of random
tags (tokens) the server can match on without learning the plain tags.

The server-visible part (ciphertext, tokens, nonce) is what to_dict() /
to_wire() emit and from_bytes() reads. The decrypted payload and the plain
tags live only on the client and are exposed through read-only properties;
decrypt() and set_plain_tags() fill them in.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
from datetime import datetime
import json
import logging

from .config import RowConfig, DEFAULT_CONFIG
from .constants import NONCE_SIZE, WIRE_DATA, WIRE_TAGS, WIRE_NONCE
from .crypto import Cipher, DEFAULT_CIPHER, random_nonce
from .errors import (
    RowError,
    GenerationError,
    DeserializationError,
    MissingKeyError,
    DecryptionError,
    EncryptionError,
    PopulateError,
    ReservedTagError,
)
from .logger import get_logger
from .tagpairs import TagPairs
from .tags import Tag, TagKind, parse_tags, render_tags
from .utils import b64e, b64d, new_id, time_str, utc_now, contains, as_bytes, canonical_json

log = get_logger("TagCrypt.Row", level=logging.DEBUG)

TagLike = Union[str, Tag]


class Row:
    def __init__(
        self,
        ciphertext: bytes = b"",
        tokens: Optional[Iterable[str]] = None,
        nonce: Optional[bytes] = None,
        *,
        plaintext: bytes = b"",
        plain_tags: Optional[Iterable[TagLike]] = None,
        config: Optional[RowConfig] = None,
    ):
        # Populated by server
        self._ciphertext = bytes(ciphertext or b"")
        self._tokens: List[str] = list(tokens or [])
        self._nonce = bytes(nonce) if nonce is not None else None

        # Populated locally
        self._plaintext = bytes(plaintext or b"")
        self._tags: List[Tag] = [_to_tag(t) for t in (plain_tags or [])]
        self.config = config or DEFAULT_CONFIG

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def new(
        cls,
        plaintext: bytes,
        tags: Iterable[TagLike],
        *,
        config: Optional[RowConfig] = None,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], datetime] = utc_now,
        nonce_factory: Callable[[], bytes] = random_nonce,
    ) -> "Row":
        """
        Build a Row holding `plaintext` and the tags
        [id:<uuid>, *tags, created:<now>, all] plus a fresh nonce.

        The id tag must come first; lookups by id depend on it.
        Ciphertext and tokens stay empty until encrypt() / set_random_tags().
        """
        caller_tags = [_to_tag(t) for t in tags]
        for t in caller_tags:
            if t.kind is not TagKind.PLAIN:
                raise ReservedTagError(f"`{t}` is a reserved tag and is added automatically")

        try:
            row_id = id_factory()
        except Exception as e:
            raise GenerationError(f"Error generating new UUID for Row: {e}") from e

        created = Tag.created(time_str(clock()))
        all_tags = [Tag.id(str(row_id)), *caller_tags, created, Tag.all()]

        nonce = _generate_nonce(nonce_factory)
        row = cls(nonce=nonce, plaintext=plaintext, plain_tags=all_tags, config=config)
        row._debug(f"new row created with {len(all_tags)} plain tags")
        return row

    @classmethod
    def new_simple(
        cls,
        plaintext: bytes,
        tags: Iterable[TagLike],
        *,
        config: Optional[RowConfig] = None,
        nonce_factory: Callable[[], bytes] = random_nonce,
    ) -> "Row":
        """Like new(), but `tags` is used verbatim with no id/created/all tags added."""
        nonce = _generate_nonce(nonce_factory)
        return cls(nonce=nonce, plaintext=plaintext, plain_tags=list(tags), config=config)

    @classmethod
    def from_bytes(cls, data: bytes, *, config: Optional[RowConfig] = None) -> "Row":
        """Unmarshal the wire form in `data` into a new Row."""
        try:
            obj = json.loads(data)
        except (TypeError, ValueError, RecursionError) as e:
            raise DeserializationError(f"Error creating new row: `{e}`", as_bytes(data)) from e

        row = cls._from_obj(obj, as_bytes(data), config)
        row._debug(f"created new row from {len(as_bytes(data))} bytes")
        return row

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, config: Optional[RowConfig] = None) -> "Row":
        return cls._from_obj(data, as_bytes(data), config)

    @classmethod
    def _from_obj(cls, data: Any, raw: bytes, config: Optional[RowConfig]) -> "Row":
        def fail(reason: str) -> DeserializationError:
            return DeserializationError(f"Error creating new row: `{reason}`", raw)

        if not isinstance(data, dict):
            raise fail(f"expected a JSON object, got {type(data).__name__}")

        encoded = data.get(WIRE_DATA)
        if encoded is None:
            ciphertext = b""
        elif isinstance(encoded, str):
            try:
                ciphertext = b64d(encoded)
            except ValueError as e:
                raise fail(f"`{WIRE_DATA}` is not valid base64") from e
        else:
            raise fail(f"`{WIRE_DATA}` must be a base64 string")

        tokens = data.get(WIRE_TAGS)
        if tokens is None:
            tokens = []
        if not isinstance(tokens, list) or not all(isinstance(t, str) for t in tokens):
            raise fail(f"`{WIRE_TAGS}` must be a list of strings")

        try:
            nonce = _decode_nonce(data.get(WIRE_NONCE))
        except ValueError as e:
            raise fail(str(e)) from e

        if ciphertext and nonce is None:
            raise fail(f"`{WIRE_NONCE}` is required when `{WIRE_DATA}` is set")

        return cls(ciphertext, tokens, nonce, config=config)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def ciphertext(self) -> bytes:
        return self._ciphertext

    @property
    def tokens(self) -> List[str]:
        """Random tags, in wire order. Returns a copy."""
        return list(self._tokens)

    @property
    def nonce(self) -> Optional[bytes]:
        return self._nonce

    @property
    def plaintext(self) -> bytes:
        """Decrypted payload; empty until decrypt() succeeds."""
        return self._plaintext

    @property
    def plain_tags(self) -> List[str]:
        """Plain (human-entered, human-readable) tags."""
        return render_tags(self._tags)

    @property
    def tags(self) -> List[Tag]:
        return list(self._tags)

    @property
    def id(self) -> Optional[str]:
        return self._tag_value(TagKind.ID)

    @property
    def created(self) -> Optional[str]:
        return self._tag_value(TagKind.CREATED)

    def _tag_value(self, kind: TagKind) -> Optional[str]:
        return next((t.value for t in self._tags if t.kind is kind), None)

    def has_random_tag(self, token: str) -> bool:
        return contains(self._tokens, token)

    def has_plain_tag(self, plain: str) -> bool:
        return contains(self.plain_tags, plain)

    def tag_with_prefix(self, prefix: str) -> Optional[str]:
        return next((t for t in self.plain_tags if t.startswith(prefix)), None)

    def format(self) -> str:
        """Render row for printing to a terminal. Only suitable for text payloads."""
        text = self._plaintext.decode("utf-8", errors="replace")
        return f"{text}    {'   '.join(self.plain_tags)}\n"

    def __repr__(self) -> str:
        return (
            f"Row(ciphertext=<{len(self._ciphertext)} bytes>, tokens={self._tokens!r}, "
            f"plain_tags={self.plain_tags!r})"
        )

    # ------------------------------------------------------------------
    # Decrypt / resolve
    # ------------------------------------------------------------------
    def decrypt(self, key: Optional[bytes], *, cipher: Optional[Cipher] = None) -> None:
        """
        Set plaintext from ciphertext and nonce. A row with no ciphertext
        has nothing to decrypt; that is not an error.
        """
        if not self._ciphertext:
            self._debug("row.decrypt: no data to decrypt, returning (no error)")
            return

        if not key:
            self._debug("row.decrypt: no key passed")
            raise MissingKeyError("No key passed to row.decrypt")

        cipher = cipher or DEFAULT_CIPHER
        try:
            self._plaintext = cipher.decrypt(self._ciphertext, self._nonce, key)
        except Exception as e:
            raise DecryptionError(f"Error decrypting: {e or type(e).__name__}") from e

    def set_plain_tags(self, pairs: TagPairs) -> None:
        """Resolve tokens to plain tags. Order follows the index, not creation."""
        matches = pairs.with_all_random_tags(self._tokens)
        self._tags = parse_tags(matches.all_plain())
        self._debug(f"row plain tags set ({len(self._tags)} tags)")

    def populate(
        self, key: Optional[bytes], pairs: TagPairs, *, cipher: Optional[Cipher] = None
    ) -> None:
        """Decrypt the payload, then resolve plain tags."""
        try:
            self.decrypt(key, cipher=cipher)
        except RowError as e:
            raise PopulateError("decrypt", e) from e
        try:
            self.set_plain_tags(pairs)
        except RowError as e:
            raise PopulateError("tags", e) from e

    # ------------------------------------------------------------------
    # Producer side
    # ------------------------------------------------------------------
    def encrypt(self, key: Optional[bytes], *, cipher: Optional[Cipher] = None) -> None:
        """Set ciphertext by sealing plaintext with this row's own nonce."""
        if not self._plaintext:
            self._ciphertext = b""
            return
        if not key:
            raise MissingKeyError("No key passed to row.encrypt")
        if self._nonce is None:
            raise EncryptionError("Row has no nonce")

        cipher = cipher or DEFAULT_CIPHER
        try:
            self._ciphertext = cipher.encrypt(self._plaintext, self._nonce, key)
        except Exception as e:
            raise EncryptionError(f"Error encrypting: {e or type(e).__name__}") from e

    def set_random_tags(self, pairs: TagPairs) -> None:
        self._tokens = pairs.random_tags_for(self.plain_tags)

    def to_dict(self) -> Dict[str, Any]:
        return {
            WIRE_DATA: b64e(self._ciphertext) if self._ciphertext else None,
            WIRE_TAGS: list(self._tokens),
            WIRE_NONCE: list(self._nonce) if self._nonce is not None else None,
        }

    def to_wire(self) -> bytes:
        return canonical_json(self.to_dict())

    def _debug(self, msg: str) -> None:
        if self.config.debug:
            log.debug(msg)


# ----------------------------------------------------------------------
# helpers
# ----------------------------------------------------------------------
def _to_tag(t: TagLike) -> Tag:
    return t if isinstance(t, Tag) else Tag.parse(t)


def _generate_nonce(nonce_factory: Callable[[], bytes]) -> bytes:
    try:
        nonce = nonce_factory()
    except Exception as e:
        raise GenerationError(f"Error generating nonce for Row: {e}") from e
    if not isinstance(nonce, (bytes, bytearray)) or len(nonce) != NONCE_SIZE:
        raise GenerationError(f"Nonce generator must return {NONCE_SIZE} bytes")
    return bytes(nonce)


def _decode_nonce(value: Any) -> Optional[bytes]:
    # Accepts the fixed-size array form [n0, ..., n23] and base64 strings.
    if value is None:
        return None
    if isinstance(value, str):
        nonce = b64d(value)
    elif isinstance(value, list):
        if not all(isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255 for b in value):
            raise ValueError(f"`{WIRE_NONCE}` must hold byte values 0-255")
        nonce = bytes(value)
    else:
        raise ValueError(f"`{WIRE_NONCE}` must be an array of bytes")
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"`{WIRE_NONCE}` must be {NONCE_SIZE} bytes, got {len(nonce)}")
    return nonce

