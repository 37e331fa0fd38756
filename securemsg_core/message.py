# securemsg_core/message.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Sender(str, Enum):
    USER = "user"
    ASSISTANT = "ai"


class MessageState(str, Enum):
    COMPOSED = "composed"      # user message, delivered in the clear
    PLAINTEXT = "plaintext"    # assistant message that was never encrypted
    ENCRYPTED = "encrypted"
    DECRYPTED = "decrypted"


@dataclass
class Message:
    """
    One entry of the conversation log.

    Only assistant replies carry an encrypted payload. For an encrypted reply
    ``text`` stays None; the body is only available through ``decrypted_text``
    after a successful decrypt.
    """
    id: int
    sender: Sender
    text: Optional[str] = None
    encrypted_text: Optional[str] = None
    decrypted_text: Optional[str] = None
    is_read: bool = False

    def __post_init__(self):
        self.sender = Sender(self.sender)
        if self.sender is Sender.USER and self.encrypted_text is not None:
            raise ValueError("User messages are never encrypted")
        if self.decrypted_text is not None and self.encrypted_text is None:
            raise ValueError("decrypted_text requires an encrypted payload")

    @property
    def state(self) -> MessageState:
        if self.sender is Sender.USER:
            return MessageState.COMPOSED
        if self.encrypted_text is None:
            return MessageState.PLAINTEXT
        if self.decrypted_text is None:
            return MessageState.ENCRYPTED
        return MessageState.DECRYPTED

    @property
    def is_content_visible(self) -> bool:
        return self.state is not MessageState.ENCRYPTED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sender": self.sender.value,
            "text": self.text,
            "encryptedText": self.encrypted_text,
            "decryptedText": self.decrypted_text,
            "isRead": self.is_read,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        return cls(
            id=int(data["id"]),
            sender=Sender(data["sender"]),
            text=data.get("text"),
            encrypted_text=data.get("encryptedText"),
            decrypted_text=data.get("decryptedText"),
            is_read=bool(data.get("isRead", False)),
        )
