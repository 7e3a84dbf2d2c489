"""
tagcrypt_core.crypto
--------------------
Default cipher collaborator for Rows:

- secretbox (XSalsa20-Poly1305): 24-byte nonce, 32-byte key, ciphertext
  carries the Poly1305 tag but not the nonce
- random_nonce() / random_key(): CSPRNG material
- derive_key() / derive_subkey(): passphrase and sub-key derivation

Rows accept any object with the Cipher shape, so callers can plug in a
different primitive without touching row.py.
"""

from __future__ import annotations
from typing import Optional, Protocol
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives import hashes
from nacl.secret import SecretBox
import os
from .constants import NONCE_SIZE, KEY_SIZE

PBKDF2_ITERATIONS = 600_000
SALT_SIZE = 16


class Cipher(Protocol):
    def encrypt(self, plaintext: bytes, nonce: bytes, key: bytes) -> bytes: ...

    def decrypt(self, ciphertext: bytes, nonce: bytes, key: bytes) -> bytes: ...


# --------- random material ----------
def random_nonce() -> bytes:
    return os.urandom(NONCE_SIZE)

def random_key() -> bytes:
    return os.urandom(KEY_SIZE)

def random_salt() -> bytes:
    return os.urandom(SALT_SIZE)

# --------- secretbox ----------
def encrypt(plaintext: bytes, nonce: bytes, key: bytes) -> bytes:
    _check_nonce(nonce)
    return SecretBox(key).encrypt(plaintext, nonce).ciphertext

def decrypt(ciphertext: bytes, nonce: bytes, key: bytes) -> bytes:
    _check_nonce(nonce)
    return SecretBox(key).decrypt(ciphertext, nonce)

def _check_nonce(nonce: Optional[bytes]) -> None:
    if nonce is None or len(nonce) != NONCE_SIZE:
        raise ValueError(f"nonce must be exactly {NONCE_SIZE} bytes")


class SecretBoxCipher:
    """Cipher backed by PyNaCl's SecretBox."""

    def encrypt(self, plaintext: bytes, nonce: bytes, key: bytes) -> bytes:
        return encrypt(plaintext, nonce, key)

    def decrypt(self, ciphertext: bytes, nonce: bytes, key: bytes) -> bytes:
        return decrypt(ciphertext, nonce, key)


DEFAULT_CIPHER = SecretBoxCipher()

# --------- key derivation ----------
def derive_key(passphrase: str, salt: bytes, iterations: int = PBKDF2_ITERATIONS) -> bytes:
    """Derive a secretbox key from a passphrase using PBKDF2-HMAC-SHA256."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(passphrase.encode("utf-8"))

def derive_subkey(master: bytes, info: bytes, salt: Optional[bytes] = None) -> bytes:
    hkdf = HKDF(algorithm=hashes.SHA256(), length=KEY_SIZE, salt=salt, info=info)
    return hkdf.derive(master)
