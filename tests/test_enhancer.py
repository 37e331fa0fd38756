import pytest
import requests
from securemsg_core.enhancer import GeminiEnhancer, LocalEnhancer, enhancer_factory
from securemsg_core.errors import EnhancementError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_local_enhancer():
    assert LocalEnhancer().enhance("  hi  ") == "hi"


def test_gemini_enhance(monkeypatch):
    captured = {}

    def fake_post(url, json=None, headers=None, timeout=None):
        captured.update(url=url, json=json, headers=headers, timeout=timeout)
        return FakeResponse(payload=_reply("  Greetings.\n"))

    monkeypatch.setattr(requests, "post", fake_post)
    out = GeminiEnhancer("test-key").enhance("hi")

    assert out == "Greetings."
    assert captured["url"].endswith("/models/gemini-2.5-flash:generateContent")
    assert captured["headers"]["x-goog-api-key"] == "test-key"
    assert '"hi"' in captured["json"]["contents"][0]["parts"][0]["text"]
    assert captured["json"]["generationConfig"]["temperature"] == 0.7


@pytest.mark.parametrize("response", [
    FakeResponse(status_code=429, reason="Too Many Requests"),
    FakeResponse(payload={"candidates": []}),
    FakeResponse(payload=None),
    FakeResponse(payload=_reply("   ")),
])
def test_gemini_failures(monkeypatch, response):
    monkeypatch.setattr(requests, "post", lambda *a, **kw: response)
    with pytest.raises(EnhancementError):
        GeminiEnhancer("test-key").enhance("hi")


def test_gemini_network_error(monkeypatch):
    def offline(*a, **kw):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(requests, "post", offline)
    with pytest.raises(EnhancementError):
        GeminiEnhancer("test-key").enhance("hi")


def test_enhancer_factory_modes(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)

    monkeypatch.setenv("SECUREMSG_ENHANCER", "local")
    assert isinstance(enhancer_factory(), LocalEnhancer)

    monkeypatch.setenv("SECUREMSG_ENHANCER", "gemini")
    with pytest.raises(ValueError):
        enhancer_factory()

    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    enh = enhancer_factory()
    assert isinstance(enh, GeminiEnhancer)
    assert enh.model == "gemini-test"

    with pytest.raises(ValueError):
        enhancer_factory({"enhancer": "openai"})
