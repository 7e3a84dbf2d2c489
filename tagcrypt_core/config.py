# tagcrypt_core/config.py
from __future__ import annotations
from dataclasses import dataclass
import os

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class RowConfig:
    """
    Options handed to Row constructors and operations.

    debug: emit DEBUG lines describing row construction, decryption and
           tag resolution. Plaintext and keys are never logged.
    """
    debug: bool = False


DEFAULT_CONFIG = RowConfig()


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def load_config(config: dict | None = None) -> RowConfig:
    """
    Resolve a RowConfig.

    Precedence: explicit dict, then TAGCRYPT_DEBUG, then defaults.
    """
    config = config or {}

    debug = config.get("debug")
    if debug is None:
        debug = os.getenv("TAGCRYPT_DEBUG", "0")

    return RowConfig(debug=_as_bool(debug))
