from __future__ import annotations
from typing import Optional
import sqlite3, os
from securemsg_core.storage.provider import StorageProvider


class SQLiteStorage(StorageProvider):
    def __init__(self, path="db/securemsg_state.db"):
        # If no directory, default to current working directory
        dir_path = os.path.dirname(path) or "."
        os.makedirs(dir_path, exist_ok=True)
        self.db = sqlite3.connect(path, check_same_thread=False)

        self._init()

    def _init(self) -> None:
        self.db.execute("""CREATE TABLE IF NOT EXISTS kv_store(
            id TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )""")
        self.db.commit()

    def get_string(self, key_id: str) -> Optional[str]:
        cur = self.db.execute("SELECT value FROM kv_store WHERE id=?", (key_id,))
        row = cur.fetchone()
        return row[0] if row else None

    def set_string(self, key_id: str, value: str) -> None:
        self.db.execute(
            "INSERT INTO kv_store(id,value) VALUES(?,?) "
            "ON CONFLICT(id) DO UPDATE SET value=excluded.value",
            (key_id, value)
        )
        self.db.commit()

    def delete(self, key_id: str) -> None:
        self.db.execute("DELETE FROM kv_store WHERE id=?", (key_id,))
        self.db.commit()

    def close(self):
        self.db.close()
