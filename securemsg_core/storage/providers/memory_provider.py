from typing import Dict, Optional
from securemsg_core.storage.provider import StorageProvider


class InMemoryStorage(StorageProvider):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def get_string(self, key_id: str) -> Optional[str]:
        return self.values.get(key_id)

    def set_string(self, key_id: str, value: str) -> None:
        self.values[key_id] = value

    def delete(self, key_id: str) -> None:
        self.values.pop(key_id, None)
