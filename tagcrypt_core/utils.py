"""
tagcrypt_core.utils
-------------------
Small helpers for identifiers, timestamps, base64 and canonical JSON.
"""

from __future__ import annotations
import base64, binascii, json, uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional
from .constants import TIME_FORMAT

def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    # validate=True so stray characters fail instead of being skipped
    try:
        return base64.b64decode(s.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise ValueError(f"invalid base64: {e}") from e

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def time_str(t: datetime) -> str:
    return t.astimezone(timezone.utc).strftime(TIME_FORMAT)

def new_id() -> str:
    return str(uuid.uuid4())

def canonical_json(obj: Dict[str, Any]) -> bytes:
    return json.dumps(obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False).encode("utf-8")

def contains(items: Optional[Iterable[str]], value: str) -> bool:
    if not items:
        return False
    return value in items

def as_bytes(data: Any) -> bytes:
    # best-effort bytes view of arbitrary input, for error reports
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8", errors="replace")
    try:
        return json.dumps(data).encode("utf-8")
    except (TypeError, ValueError, RecursionError):
        return repr(data).encode("utf-8")
