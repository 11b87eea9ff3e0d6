# services/backends.py
# Remote reply backends (Anthropic Messages API, OpenAI chat completions),
# the offline rule-based fallback, and resolve_reply() which ties them together.

import os
import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from fallback_responses import get_fallback_response
from prompts import SYSTEM_PROMPT, build_messages

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "YOUR_API_KEY_HERE"

# -------------------------
# Helpers
# -------------------------

def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        logger.warning("%s is not an integer, using %s", name, default)
        return default

def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        logger.warning("%s is not a number, using %s", name, default)
        return default

def request_timeout() -> float:
    return _env_float("WELLNESS_REQUEST_TIMEOUT", 30.0)

# -------------------------
# Tagged result
# -------------------------

@dataclass(frozen=True)
class BackendReply:
    """Either ok=True with text, or ok=False with the reason in error."""
    ok: bool
    text: str = ""
    backend: str = ""
    model: str = ""
    error: str = ""

    @classmethod
    def failed(cls, backend: str, error: str) -> "BackendReply":
        return cls(ok=False, backend=backend, error=error)

def decode_messages_response(data: Any, backend: str = "anthropic", model: str = "") -> BackendReply:
    """
    Validate a Messages API body: an object whose `content` is a non-empty
    list whose first block carries a non-empty string `text`.
    """
    if not isinstance(data, dict):
        return BackendReply.failed(backend, "response body is not an object")
    content = data.get("content")
    if not isinstance(content, list) or not content:
        return BackendReply.failed(backend, "response has no content blocks")
    first = content[0]
    if not isinstance(first, dict):
        return BackendReply.failed(backend, "first content block is not an object")
    text = first.get("text")
    if not isinstance(text, str) or not text.strip():
        return BackendReply.failed(backend, "first content block has no text")
    return BackendReply(ok=True, text=text, backend=backend, model=data.get("model") or model)

# -------------------------
# Offline Fallback
# -------------------------

class OfflineBackend:
    """Ordered keyword rules, so you always get something."""
    name = "offline"

    def reply(self, user_message: str) -> BackendReply:
        return BackendReply(ok=True, text=get_fallback_response(user_message), backend=self.name, model="offline")

# -------------------------
# Anthropic Messages API
# -------------------------

class AnthropicBackend:
    """Single POST to the Messages API with the wellness persona as the system prompt."""
    name = "anthropic"

    def __init__(self, api_key: Optional[str] = None, session: Optional[requests.Session] = None):
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY") or PLACEHOLDER_API_KEY
        self.url = os.getenv("ANTHROPIC_API_URL", "https://api.anthropic.com/v1/messages")
        self.model = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-20250514")
        self.max_tokens = _env_int("ANTHROPIC_MAX_TOKENS", 1000)
        self.version = os.getenv("ANTHROPIC_VERSION", "2023-06-01")
        self.timeout = request_timeout()
        self._http = session or requests

    def build_payload(self, user_message: str) -> dict:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": SYSTEM_PROMPT,
            "messages": build_messages(user_message),
        }

    def reply(self, user_message: str) -> BackendReply:
        headers = {
            "content-type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.version,
        }
        try:
            r = self._http.post(self.url, headers=headers, json=self.build_payload(user_message), timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as e:
            return BackendReply.failed(self.name, f"request failed: {e}")
        except ValueError as e:
            return BackendReply.failed(self.name, f"response is not JSON: {e}")
        return decode_messages_response(data, backend=self.name, model=self.model)

# -------------------------
# OpenAI chat completions
# -------------------------

class OpenAIBackend:
    """OpenAI chat backend, used when WELLNESS_BACKEND=openai."""
    name = "openai"

    def __init__(self, client: Any = None):
        self.client = client
        self.model = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
        self.max_tokens = _env_int("OPENAI_MAX_TOKENS", 1000)
        if self.client is None:
            self._init_client()

    def _init_client(self):
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            logger.warning("OPENAI_API_KEY not set; replies will use offline mode")
            return
        from openai import OpenAI
        base_url = os.getenv("OPENAI_API_BASE") or None  # optional
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=request_timeout(), max_retries=0)

    def reply(self, user_message: str) -> BackendReply:
        if not self.client:
            return BackendReply.failed(self.name, "client not configured")
        import openai
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=build_messages(user_message, include_system=True),
                max_tokens=self.max_tokens,
            )
        except openai.OpenAIError as e:
            return BackendReply.failed(self.name, f"call failed: {e}")
        try:
            text = resp.choices[0].message.content
        except (AttributeError, IndexError, TypeError):
            return BackendReply.failed(self.name, "response has no message content")
        if not isinstance(text, str) or not text.strip():
            return BackendReply.failed(self.name, "response has no message content")
        return BackendReply(ok=True, text=text.strip(), backend=self.name, model=self.model)

# -------------------------
# Orchestrator
# -------------------------

def _make_backend(name: str):
    if name == "openai":
        return OpenAIBackend()
    if name == "offline":
        return OfflineBackend()
    return AnthropicBackend()

def get_backend():
    """Remote backend picked by WELLNESS_BACKEND (anthropic by default)."""
    name = (os.getenv("WELLNESS_BACKEND") or "anthropic").strip().lower()
    if name not in {"anthropic", "openai", "offline"}:
        logger.warning("Unknown WELLNESS_BACKEND %r, using anthropic", name)
        name = "anthropic"
    return _make_backend(name)

def resolve_reply(user_message: str, backend=None) -> str:
    """
    One attempt at the remote backend, then the offline rules.
    Never raises: every failure ends in a fallback reply with the offline note.
    """
    backend = backend or get_backend()
    try:
        result = backend.reply(user_message)
    except Exception as e:
        logger.exception("Backend %s raised", getattr(backend, "name", type(backend).__name__))
        result = BackendReply.failed(getattr(backend, "name", "unknown"), str(e))

    if result.ok:
        logger.info("Reply from %s (%s)", result.backend, result.model)
        return result.text

    logger.warning("Backend %s failed: %s; using offline mode", result.backend, result.error)
    return get_fallback_response(user_message)
