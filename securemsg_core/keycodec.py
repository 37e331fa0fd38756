"""
securemsg_core.keycodec
-----------------------
JWK (JSON Web Key) export/import for the symmetric message key.

The exported form is canonical JSON, so export_key() is deterministic and
import_key(export_key(k)) == k.
"""

from __future__ import annotations
import binascii, json
from .constants import ALGORITHM, KEY_SIZE, KEY_TYPE, KEY_USAGES
from .crypto import SymmetricKey
from .errors import MalformedKeyError, UnsupportedAlgorithmError
from .utils import b64url_d, b64url_e, canonical_json


def export_key(key: SymmetricKey) -> str:
    jwk = {
        "alg": key.algorithm,
        "ext": True,
        "k": b64url_e(key.raw),
        "key_ops": list(key.usages),
        "kty": KEY_TYPE,
    }
    return canonical_json(jwk)


def import_key(serialized: str) -> SymmetricKey:
    try:
        jwk = json.loads(serialized)
    except (TypeError, ValueError) as e:
        raise MalformedKeyError("Stored key is not valid JSON") from e
    if not isinstance(jwk, dict):
        raise MalformedKeyError("Stored key is not a JWK object")

    if "kty" not in jwk:
        raise MalformedKeyError("JWK is missing kty")
    if jwk["kty"] != KEY_TYPE:
        raise UnsupportedAlgorithmError(f"Unsupported key type: {jwk['kty']!r}")
    alg = jwk.get("alg", ALGORITHM)
    if alg != ALGORITHM:
        raise UnsupportedAlgorithmError(f"Unsupported algorithm: {alg!r}")

    k = jwk.get("k")
    if not isinstance(k, str):
        raise MalformedKeyError("JWK is missing key material")
    try:
        raw = b64url_d(k)
    except (binascii.Error, ValueError) as e:
        raise MalformedKeyError("JWK key material is not base64url") from e
    if len(raw) != KEY_SIZE:
        raise MalformedKeyError(f"Expected {KEY_SIZE}-byte key, got {len(raw)}")

    ops = jwk.get("key_ops", list(KEY_USAGES))
    if not isinstance(ops, list) or not all(op in ops for op in KEY_USAGES):
        raise MalformedKeyError("JWK key_ops must allow encrypt and decrypt")

    return SymmetricKey(raw=raw, algorithm=ALGORITHM, usages=KEY_USAGES)
