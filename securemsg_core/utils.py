"""
securemsg_core.utils
--------------------
Base64 helpers (standard and JWK base64url) and canonical JSON.
"""

from __future__ import annotations
import base64, binascii, json, re
from typing import Any, Dict

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")


def b64d(s: str, validate: bool = False) -> bytes:
    return base64.b64decode(s.encode("ascii"), validate=validate)


def b64url_e(b: bytes) -> str:
    # JWK form: url-safe alphabet, no padding
    return base64.urlsafe_b64encode(b).decode("ascii").rstrip("=")


def b64url_d(s: str) -> bytes:
    if not _B64URL_RE.fullmatch(s) or len(s) % 4 == 1:
        raise binascii.Error("invalid base64url string")
    return base64.urlsafe_b64decode(s + "=" * (-len(s) % 4))


def canonical_json(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
