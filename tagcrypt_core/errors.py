# tagcrypt_core/errors.py
from __future__ import annotations
from typing import Iterable, Optional


class RowError(Exception):
    pass


class GenerationError(RowError):
    """Identifier or nonce generation failed while building a Row."""


class DeserializationError(RowError):
    """Wire bytes could not be turned into a Row. Keeps the input around."""

    def __init__(self, message: str, input: bytes = b""):
        self.input = input
        super().__init__(f"{message}. Input: `{input!r}`")


class MissingKeyError(RowError):
    pass


class DecryptionError(RowError):
    pass


class EncryptionError(RowError):
    pass


class NoMatchingTagsError(RowError):
    def __init__(
        self,
        message: str = "No matching tag pairs found",
        tokens: Optional[Iterable[str]] = None,
        plain_tags: Optional[Iterable[str]] = None,
    ):
        self.tokens = list(tokens or [])
        self.plain_tags = list(plain_tags or [])
        super().__init__(message)


class PopulateError(RowError):
    """
    Raised by Row.populate(). `stage` is "decrypt" or "tags" and `cause`
    is the error the stage raised (also chained as __cause__).
    """

    def __init__(self, stage: str, cause: Exception):
        self.stage = stage
        self.cause = cause
        if stage == "decrypt":
            msg = f"Error decrypting row: {cause}"
        else:
            msg = f"Error setting row's plain tags: {cause}"
        super().__init__(msg)


class ReservedTagError(RowError, ValueError):
    """A caller passed an id:/created:/all tag to Row.new(), which adds its own."""
