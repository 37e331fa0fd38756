# securemsg_core/errors.py

class SecureMessagingError(Exception):
    pass


# --- key material ---
class KeyImportError(SecureMessagingError):
    """Stored key could not be imported. Fatal to startup."""


class MalformedKeyError(KeyImportError):
    pass


class UnsupportedAlgorithmError(KeyImportError):
    pass


# --- send pipeline (rolls back the pending user message) ---
class EnhancementError(SecureMessagingError):
    pass


class EncryptionError(SecureMessagingError):
    pass


class SendInProgressError(SecureMessagingError):
    pass


# --- decrypt (recoverable, message stays encrypted) ---
class DecryptionError(SecureMessagingError):
    pass


class AuthenticationFailureError(DecryptionError):
    pass


class MalformedPayloadError(DecryptionError):
    pass


class UnsupportedPlatformError(SecureMessagingError):
    pass
