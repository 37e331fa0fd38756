import pytest
import securemsg_core.bootstrap as bootstrap_mod
from securemsg_core.bootstrap import SessionBootstrap
from securemsg_core.constants import KEY_STORAGE_ID
from securemsg_core.crypto import decrypt, encrypt, generate_key
from securemsg_core.errors import (
    KeyImportError, MalformedKeyError, UnsupportedAlgorithmError, UnsupportedPlatformError,
)
from securemsg_core.keycodec import export_key
from securemsg_core.message import MessageState
from securemsg_core.storage import InMemoryStorage, SQLiteStorage
from securemsg_core.enhancer import LocalEnhancer


class RecordingStorage(InMemoryStorage):
    def __init__(self, *a, **kw):
        super().__init__(*a, **kw)
        self.writes = []

    def set_string(self, key_id, value):
        self.writes.append(key_id)
        super().set_string(key_id, value)


def test_fresh_start_persists_key_before_messages():
    storage = RecordingStorage()
    boot = SessionBootstrap(storage, enhancer=LocalEnhancer())
    store = boot.start()

    assert storage.writes == [KEY_STORAGE_ID]
    assert storage.get_string(KEY_STORAGE_ID) == export_key(boot.key)
    assert len(store) == 1
    welcome = store.messages[0]
    assert welcome.is_read and welcome.state is MessageState.PLAINTEXT


def test_failed_persist_aborts_start():
    class BrokenStorage(InMemoryStorage):
        def set_string(self, key_id, value):
            raise OSError("disk full")

    with pytest.raises(OSError):
        SessionBootstrap(BrokenStorage()).start()


def test_restart_reuses_key(tmp_path):
    db = str(tmp_path / "state.db")
    first = SessionBootstrap(SQLiteStorage(db), enhancer=LocalEnhancer())
    store = first.start()
    reply = store.send("see you tomorrow")
    first.storage.close()

    second = SessionBootstrap(SQLiteStorage(db))
    key = second.load_key()
    assert key == first.key
    assert decrypt(reply.encrypted_text, key) == "see you tomorrow"
    second.storage.close()


def test_stored_key_is_not_regenerated():
    stored = export_key(generate_key())
    storage = RecordingStorage({KEY_STORAGE_ID: stored})
    SessionBootstrap(storage).start()
    assert storage.writes == []
    assert storage.get_string(KEY_STORAGE_ID) == stored


@pytest.mark.parametrize("stored,err", [
    ("{broken", MalformedKeyError),
    ('{"kty": "oct", "alg": "A128GCM", "k": "AAAAAAAAAAAAAAAAAAAAAA"}', UnsupportedAlgorithmError),
])
def test_bad_stored_key_is_fatal(stored, err, caplog):
    storage = RecordingStorage({KEY_STORAGE_ID: stored})
    with pytest.raises(err):
        SessionBootstrap(storage).start()
    assert issubclass(err, KeyImportError)
    assert storage.writes == []
    assert storage.get_string(KEY_STORAGE_ID) == stored
    assert "stored key rejected" in caplog.text


def test_unsupported_platform(monkeypatch):
    def unsupported():
        raise UnsupportedPlatformError("no AES-GCM")

    monkeypatch.setattr(bootstrap_mod, "ensure_platform_support", unsupported)
    storage = RecordingStorage()
    with pytest.raises(UnsupportedPlatformError):
        SessionBootstrap(storage).start()
    assert storage.writes == []


def test_key_never_logged(caplog):
    boot = SessionBootstrap(InMemoryStorage(), enhancer=LocalEnhancer())
    boot.start()
    exported = boot.storage.get_string(KEY_STORAGE_ID)
    assert exported not in caplog.text
    assert boot.key.raw.hex() not in caplog.text
