"""
securemsg_core.bootstrap
------------------------
Session startup: obtain the device key, then build and seed the message log.

A stored key that fails to import is fatal. The bootstrap never regenerates
over it, since a new key would orphan every payload encrypted under the old one.
A freshly generated key is persisted before any message exists.
"""

from __future__ import annotations
from typing import Optional
from .constants import KEY_STORAGE_ID
from .crypto import SymmetricKey, ensure_platform_support, generate_key
from .errors import KeyImportError
from .keycodec import export_key, import_key
from .logger import get_logger
from .storage import StorageProvider
from .store import MessageStore

log = get_logger("SecureMsg.Bootstrap")


class SessionBootstrap:
    def __init__(self, storage: StorageProvider, enhancer=None, key_id: str = KEY_STORAGE_ID):
        self.storage = storage
        self.enhancer = enhancer
        self.key_id = key_id
        self.key: Optional[SymmetricKey] = None

    def load_key(self) -> SymmetricKey:
        ensure_platform_support()

        stored = self.storage.get_string(self.key_id)
        if stored:
            try:
                key = import_key(stored)
            except KeyImportError as e:
                log.error(f"[BOOT] stored key rejected: {type(e).__name__}")
                raise
            log.info("[BOOT] imported stored key")
        else:
            key = generate_key()
            self.storage.set_string(self.key_id, export_key(key))
            log.info("[BOOT] generated and persisted new key")

        self.key = key
        return key

    def start(self) -> MessageStore:
        key = self.key or self.load_key()
        store = MessageStore(key, enhancer=self.enhancer)
        store.seed_welcome()
        return store
