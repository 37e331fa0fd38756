"""
securemsg_core.store
--------------------
MessageStore owns the ordered conversation log and mediates every state
transition:

- send():            user message -> enhance -> encrypt -> assistant message
                     (rolls back the user message if either stage fails)
- request_decrypt(): Encrypted -> Decrypted
- mark_read():       Unread -> Read, only when the content is visible

Sends must be serialized by the caller. Overlapping sends are rejected with
SendInProgressError rather than queued.
"""

from __future__ import annotations
import itertools, threading
from typing import Any, Dict, List, Optional, Tuple
from .constants import WELCOME_TEXT
from .crypto import SymmetricKey, encrypt, decrypt
from .errors import DecryptionError, EncryptionError, EnhancementError, SendInProgressError
from .logger import get_logger
from .message import Message, MessageState, Sender

log = get_logger("SecureMsg.Store")


class MessageStore:
    def __init__(self, key: SymmetricKey, enhancer=None):
        self.key = key
        self.enhancer = enhancer
        self._messages: List[Message] = []
        self._ids = itertools.count(1)
        self._lock = threading.RLock()
        self._sending = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def messages(self) -> Tuple[Message, ...]:
        with self._lock:
            return tuple(self._messages)

    @property
    def is_sending(self) -> bool:
        return self._sending

    def get(self, message_id: int) -> Optional[Message]:
        with self._lock:
            return next((m for m in self._messages if m.id == message_id), None)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [m.to_dict() for m in self.messages]

    def __len__(self) -> int:
        return len(self._messages)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def seed_welcome(self) -> Optional[Message]:
        with self._lock:
            if self._messages:
                return None
            msg = self._append(Sender.ASSISTANT, text=WELCOME_TEXT, is_read=True)
        log.info(f"[STORE] seeded welcome message id={msg.id}")
        return msg

    def send(self, text: str) -> Optional[Message]:
        """
        Append the user message, enhance and encrypt it, then append the
        encrypted assistant reply and return it.

        Empty or whitespace-only text is a no-op. On EnhancementError or
        EncryptionError the pending user message is removed and the error
        is re-raised.
        """
        if not text or not text.strip():
            return None
        if self.enhancer is None:
            raise EnhancementError("No text enhancer configured")

        with self._lock:
            if self._sending:
                raise SendInProgressError("A send is already in flight")
            self._sending = True
            user_msg = self._append(Sender.USER, text=text)
        log.info(f"[STORE SEND] user message id={user_msg.id} appended")

        try:
            try:
                enhanced = self.enhancer.enhance(text)
            except EnhancementError:
                raise
            except Exception as e:
                raise EnhancementError(f"Could not enhance message: {e}") from e
            if not isinstance(enhanced, str):
                raise EnhancementError("Enhancer returned non-text")
            payload = encrypt(enhanced, self.key)
        except (EnhancementError, EncryptionError) as e:
            with self._lock:
                self._rollback(user_msg)
            log.error(f"[STORE SEND] {type(e).__name__}, rolled back id={user_msg.id}")
            raise
        else:
            with self._lock:
                reply = self._append(Sender.ASSISTANT, encrypted_text=payload)
            log.info(f"[STORE SEND] encrypted reply id={reply.id} appended")
            return reply
        finally:
            self._sending = False

    def request_decrypt(self, message_id: int) -> Optional[Message]:
        with self._lock:
            msg = self.get(message_id)
            if msg is None or msg.state is not MessageState.ENCRYPTED:
                return msg
            try:
                msg.decrypted_text = decrypt(msg.encrypted_text, self.key)
            except DecryptionError as e:
                log.error(f"[STORE DECRYPT] id={message_id} failed: {type(e).__name__}")
                raise
        log.info(f"[STORE DECRYPT] id={message_id} decrypted")
        return msg

    def mark_read(self, message_id: int) -> bool:
        with self._lock:
            msg = self.get(message_id)
            if msg is None or msg.is_read or not msg.is_content_visible:
                return False
            msg.is_read = True
        log.debug(f"[STORE READ] id={message_id}")
        return True

    # ------------------------------------------------------------------
    # Internals (caller holds the lock)
    # ------------------------------------------------------------------
    def _append(self, sender: Sender, **fields) -> Message:
        msg = Message(id=next(self._ids), sender=sender, **fields)
        self._messages.append(msg)
        return msg

    def _rollback(self, user_msg: Message) -> None:
        # sends are serialized, so the pending user message is the latest one
        for i in range(len(self._messages) - 1, -1, -1):
            if self._messages[i] is user_msg:
                del self._messages[i]
                return
