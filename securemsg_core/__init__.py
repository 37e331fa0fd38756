"""
SecureMsg Core Package
======================
Client-side secure messaging primitives.

Provides:
- AES-256-GCM key generation, JWK export/import and payload encryption
- Message log with enforced lifecycle transitions (encrypted -> decrypted -> read)
- Session bootstrap over a pluggable string storage (SQLite default)
- Text enhancement collaborators (Gemini REST, local passthrough)
"""

from .crypto import SymmetricKey, generate_key, encrypt, decrypt
from .keycodec import export_key, import_key
from .message import Message, MessageState, Sender
from .store import MessageStore
from .bootstrap import SessionBootstrap

__all__ = [
    "SymmetricKey",
    "generate_key",
    "encrypt",
    "decrypt",
    "export_key",
    "import_key",
    "Message",
    "MessageState",
    "Sender",
    "MessageStore",
    "SessionBootstrap",
]
