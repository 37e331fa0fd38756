# securemsg_core/enhancer/enhancer_gemini.py
import requests
from securemsg_core.enhancer.enhancer_base import TextEnhancer
from securemsg_core.errors import EnhancementError
from securemsg_core.logger import get_logger

log = get_logger("SecureMsg.Enhancer.Gemini")

API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"

PROMPT = (
    "You are a secure messaging assistant. Rephrase the following message to sound "
    "more professional and formal. Return only the rephrased message, without any "
    "preamble, explanation, or quotation marks.\n\n"
    'Original message: "{message}"'
)


class GeminiEnhancer(TextEnhancer):
    """
    Rephrases messages through the Gemini generateContent REST endpoint.

    Network, HTTP and response-shape failures all raise EnhancementError.
    """
    name = "gemini"

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, base_url: str = API_BASE, timeout: float = 30):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _body(self, text: str) -> dict:
        return {
            "contents": [{"parts": [{"text": PROMPT.format(message=text)}]}],
            "generationConfig": {"temperature": 0.7, "topP": 1, "topK": 1},
        }

    def enhance(self, text: str) -> str:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}

        log.debug(f"[GEMINI] → {url} | model={self.model}")
        try:
            res = requests.post(url, json=self._body(text), headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            log.error(f"[GEMINI] request failed: {type(e).__name__}")
            raise EnhancementError("Could not enhance message. Please try again.") from e

        if not res.ok:
            log.error(f"[GEMINI] {res.status_code} {res.reason}")
            raise EnhancementError(f"Could not enhance message: HTTP {res.status_code}")

        try:
            data = res.json()
            parts = data["candidates"][0]["content"]["parts"]
            enhanced = "".join(p.get("text", "") for p in parts).strip()
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            log.error(f"[GEMINI] unexpected response shape: {e}")
            raise EnhancementError("Could not enhance message: malformed response") from e

        if not enhanced:
            raise EnhancementError("Could not enhance message: empty response")
        log.info(f"[GEMINI] {res.status_code} enhanced message")
        return enhanced
