from __future__ import annotations


class TextEnhancer:
    """
    Out-of-process rewrite of an outgoing message.

    Any failure must surface as an exception; the store treats every failure
    as a hard failure of the enclosing send and performs no retry.
    """
    name: str = "base"

    def enhance(self, text: str) -> str:
        raise NotImplementedError


class LocalEnhancer(TextEnhancer):
    """Offline enhancer: returns the message unchanged apart from trimming."""
    name = "local"

    def enhance(self, text: str) -> str:
        return text.strip()
