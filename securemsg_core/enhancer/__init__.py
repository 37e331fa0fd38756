# securemsg_core/enhancer/__init__.py
import os
from securemsg_core.enhancer.enhancer_base import TextEnhancer, LocalEnhancer
from securemsg_core.enhancer.enhancer_gemini import GeminiEnhancer, DEFAULT_MODEL


def enhancer_factory(config: dict = None) -> TextEnhancer:
    """
    mode (config["enhancer"] or SECUREMSG_ENHANCER):
      - "gemini" → GeminiEnhancer (default; needs GEMINI_API_KEY or API_KEY)
      - "local"  → LocalEnhancer
    """
    config = config or {}
    mode = (config.get("enhancer") or os.getenv("SECUREMSG_ENHANCER", "gemini")).lower()

    if mode == "local":
        return LocalEnhancer()

    if mode == "gemini":
        api_key = config.get("api_key") or os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
        if not api_key:
            raise ValueError("GEMINI_API_KEY environment variable not set")
        return GeminiEnhancer(api_key, model=config.get("model") or os.getenv("GEMINI_MODEL", DEFAULT_MODEL))

    raise ValueError(f"Unknown enhancer: {mode}")


__all__ = ["TextEnhancer", "LocalEnhancer", "GeminiEnhancer", "enhancer_factory"]
