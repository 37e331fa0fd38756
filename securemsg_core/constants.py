# securemsg_core/constants.py

KEY_STORAGE_ID = "secure-messenger-crypto-key"

ALGORITHM = "A256GCM"
KEY_TYPE = "oct"
KEY_USAGES = ("encrypt", "decrypt")

KEY_SIZE = 32     # AES-256
NONCE_SIZE = 12   # 96-bit GCM nonce
TAG_SIZE = 16

WELCOME_TEXT = (
    "Hello! I'm your secure messaging assistant. I'll rephrase your messages "
    "to be more professional and then encrypt them. Let's start!"
)
