from types import SimpleNamespace

import openai
import pytest
import requests

from fallback_responses import DEFAULT_RESPONSE, OFFLINE_NOTE, get_fallback_response
from prompts import SYSTEM_PROMPT
from services.backends import (
    PLACEHOLDER_API_KEY,
    AnthropicBackend,
    BackendReply,
    OfflineBackend,
    OpenAIBackend,
    decode_messages_response,
    get_backend,
    resolve_reply,
)


class FakeResponse:
    def __init__(self, status=200, body=None, json_error=False):
        self.status_code = status
        self._body = body
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._json_error:
            raise ValueError("Expecting value")
        return self._body


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc:
            raise self.exc
        return self.response


def ok_body(text="You're doing the right thing by reaching out."):
    return {"content": [{"type": "text", "text": text}], "model": "claude-test"}


# ---------------- decode ----------------
def test_decode_accepts_well_formed_body():
    reply = decode_messages_response(ok_body("Hi."))
    assert reply.ok
    assert reply.text == "Hi."
    assert reply.model == "claude-test"


@pytest.mark.parametrize(
    "body",
    [
        None,
        [],
        "text",
        {},
        {"content": []},
        {"content": "hello"},
        {"content": ["hello"]},
        {"content": [{"type": "text"}]},
        {"content": [{"text": 42}]},
        {"content": [{"text": "   "}]},
    ],
)
def test_decode_rejects_malformed_body(body):
    reply = decode_messages_response(body)
    assert not reply.ok
    assert reply.error


# ---------------- Anthropic ----------------
def test_anthropic_request_shape(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    session = FakeSession(FakeResponse(body=ok_body()))
    reply = AnthropicBackend(session=session).reply("I had a long day")

    assert reply.ok
    url, kwargs = session.calls[0]
    assert url == "https://api.anthropic.com/v1/messages"
    assert kwargs["headers"]["x-api-key"] == "sk-test"
    assert kwargs["headers"]["anthropic-version"] == "2023-06-01"
    assert kwargs["timeout"] == 30.0
    payload = kwargs["json"]
    assert payload["model"] == "claude-sonnet-4-20250514"
    assert payload["max_tokens"] == 1000
    assert payload["system"] == SYSTEM_PROMPT
    assert payload["messages"] == [{"role": "user", "content": "I had a long day"}]


def test_anthropic_env_overrides(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_MODEL", "claude-other")
    monkeypatch.setenv("ANTHROPIC_MAX_TOKENS", "200")
    monkeypatch.setenv("WELLNESS_REQUEST_TIMEOUT", "5")
    backend = AnthropicBackend(session=FakeSession())
    assert backend.model == "claude-other"
    assert backend.max_tokens == 200
    assert backend.timeout == 5.0


def test_anthropic_uses_placeholder_without_key():
    assert AnthropicBackend(session=FakeSession()).api_key == PLACEHOLDER_API_KEY


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(exc=requests.ConnectionError("no route to host")),
        FakeSession(exc=requests.Timeout("timed out")),
        FakeSession(FakeResponse(status=401, body={"error": "invalid x-api-key"})),
        FakeSession(FakeResponse(status=500)),
        FakeSession(FakeResponse(json_error=True)),
        FakeSession(FakeResponse(body={"type": "error"})),
    ],
)
def test_anthropic_failures_are_tagged(session):
    reply = AnthropicBackend(session=session).reply("hello")
    assert not reply.ok
    assert reply.backend == "anthropic"


# ---------------- OpenAI ----------------
def fake_openai_client(create):
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def test_openai_sends_system_prompt_first():
    seen = {}

    def create(**kwargs):
        seen.update(kwargs)
        message = SimpleNamespace(content=" Take a slow breath with me. ")
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    reply = OpenAIBackend(client=fake_openai_client(create)).reply("panicking")
    assert reply.ok
    assert reply.text == "Take a slow breath with me."
    assert seen["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert seen["messages"][1] == {"role": "user", "content": "panicking"}


def test_openai_error_is_tagged():
    def create(**kwargs):
        raise openai.OpenAIError("boom")

    reply = OpenAIBackend(client=fake_openai_client(create)).reply("hi")
    assert not reply.ok


def test_openai_empty_choices_is_tagged():
    reply = OpenAIBackend(client=fake_openai_client(lambda **kw: SimpleNamespace(choices=[]))).reply("hi")
    assert not reply.ok


def test_openai_without_key_is_not_configured():
    backend = OpenAIBackend()
    assert backend.client is None
    assert not backend.reply("hi").ok


# ---------------- selection ----------------
@pytest.mark.parametrize(
    "name, cls",
    [(None, AnthropicBackend), ("anthropic", AnthropicBackend), ("OpenAI", OpenAIBackend),
     ("offline", OfflineBackend), ("carrier-pigeon", AnthropicBackend)],
)
def test_get_backend(monkeypatch, name, cls):
    if name:
        monkeypatch.setenv("WELLNESS_BACKEND", name)
    assert isinstance(get_backend(), cls)


# ---------------- resolve ----------------
class StubBackend:
    name = "stub"

    def __init__(self, result=None, exc=None):
        self.result = result
        self.exc = exc

    def reply(self, user_message):
        if self.exc:
            raise self.exc
        return self.result


def test_resolve_returns_remote_text_verbatim():
    text = "That sounds hard. I'm here with you."
    assert resolve_reply("rough day", StubBackend(BackendReply(ok=True, text=text, backend="stub"))) == text


def test_resolve_falls_back_on_failed_reply():
    backend = StubBackend(BackendReply.failed("stub", "HTTP 401"))
    assert resolve_reply("I feel so anxious about tomorrow", backend) == get_fallback_response(
        "I feel so anxious about tomorrow"
    )


def test_resolve_never_raises():
    reply = resolve_reply("What time is it?", StubBackend(exc=RuntimeError("bug")))
    assert reply == DEFAULT_RESPONSE + OFFLINE_NOTE


def test_resolve_with_network_down(monkeypatch):
    def refuse(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(requests, "post", refuse)
    reply = resolve_reply("What time is it?")
    assert reply == DEFAULT_RESPONSE + OFFLINE_NOTE


def test_resolve_offline_backend(monkeypatch):
    monkeypatch.setenv("WELLNESS_BACKEND", "offline")
    assert resolve_reply("so lonely").endswith(OFFLINE_NOTE)
