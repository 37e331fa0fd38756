"""
securemsg_core.crypto
---------------------
Symmetric AES-256-GCM primitives for message bodies:

- generate_key(): fresh 256-bit key usable for encrypt + decrypt
- encrypt()/decrypt(): UTF-8 text <-> base64(nonce || ciphertext || tag)
- aead_encrypt()/aead_decrypt(): raw byte-level helpers

Stateless: every function is parameterized by the key. A new nonce is drawn
from the OS CSPRNG on every encrypt call; callers never supply one.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple
from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
import secrets
from .constants import ALGORITHM, KEY_SIZE, KEY_USAGES, NONCE_SIZE
from .errors import (
    AuthenticationFailureError, DecryptionError, EncryptionError, MalformedPayloadError, UnsupportedPlatformError,
)
from .utils import b64e, b64d


@dataclass(frozen=True)
class SymmetricKey:
    raw: bytes = field(repr=False)
    algorithm: str = ALGORITHM
    usages: Tuple[str, ...] = KEY_USAGES

    def __post_init__(self):
        if len(self.raw) != KEY_SIZE:
            raise ValueError(f"Key must be {KEY_SIZE} bytes")

    def can(self, usage: str) -> bool:
        return usage in self.usages


def ensure_platform_support() -> None:
    try:
        AESGCM(bytes(KEY_SIZE)).encrypt(bytes(NONCE_SIZE), b"probe", None)
    except UnsupportedAlgorithm as e:
        raise UnsupportedPlatformError("AES-256-GCM is not available on this platform") from e


def generate_key() -> SymmetricKey:
    return SymmetricKey(raw=AESGCM.generate_key(bit_length=KEY_SIZE * 8))


# --------- byte-level AEAD ----------
def aead_encrypt(key: bytes, plaintext: bytes, aad: Optional[bytes] = None) -> Tuple[bytes, bytes]:
    aes = AESGCM(key)
    nonce = secrets.token_bytes(NONCE_SIZE)
    ct = aes.encrypt(nonce, plaintext, aad)
    return nonce, ct

def aead_decrypt(key: bytes, nonce: bytes, ciphertext: bytes, aad: Optional[bytes] = None) -> bytes:
    aes = AESGCM(key)
    return aes.decrypt(nonce, ciphertext, aad)


# --------- text payloads ----------
def encrypt(plaintext: str, key: SymmetricKey) -> str:
    if not key.can("encrypt"):
        raise EncryptionError("Key is not usable for encryption")
    if not isinstance(plaintext, str):
        raise EncryptionError("Plaintext must be text")
    try:
        nonce, ct = aead_encrypt(key.raw, plaintext.encode("utf-8"))
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise EncryptionError(f"Encryption failed: {e}") from e
    return b64e(nonce + ct)


def decrypt(payload: str, key: SymmetricKey) -> str:
    """
    Decode and verify an EncryptedPayload.

    Raises MalformedPayloadError when the payload is not valid base64 or is
    shorter than a nonce, and AuthenticationFailureError when the tag does
    not verify (tampered data or wrong key).
    """
    if not key.can("decrypt"):
        raise DecryptionError("Key is not usable for decryption")
    try:
        combined = b64d(payload, validate=True)
    except (ValueError, AttributeError) as e:
        raise MalformedPayloadError("Payload is not valid base64") from e
    if len(combined) < NONCE_SIZE:
        raise MalformedPayloadError(f"Payload shorter than {NONCE_SIZE}-byte nonce")

    nonce, ct = combined[:NONCE_SIZE], combined[NONCE_SIZE:]
    try:
        pt = aead_decrypt(key.raw, nonce, ct)
    except InvalidTag as e:
        raise AuthenticationFailureError("Authentication tag did not verify") from e

    try:
        return pt.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedPayloadError("Decrypted body is not UTF-8") from e
