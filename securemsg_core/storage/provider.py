# securemsg_core/storage/provider.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional


class StorageProvider(ABC):
    """
    Minimal string-by-id persistence used by the session bootstrap.

    The core persists exactly one entry: the exported key. Providers may be
    backed by SQLite, memory, or any platform key-value store.
    """

    @abstractmethod
    def get_string(self, key_id: str) -> Optional[str]: ...

    @abstractmethod
    def set_string(self, key_id: str, value: str) -> None: ...

    @abstractmethod
    def delete(self, key_id: str) -> None: ...

    def close(self) -> None:
        return
