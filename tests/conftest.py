import pytest

BACKEND_ENV = [
    "WELLNESS_BACKEND",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_API_URL",
    "ANTHROPIC_MODEL",
    "ANTHROPIC_MAX_TOKENS",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_MAX_TOKENS",
    "OPENAI_API_BASE",
    "ANTHROPIC_VERSION",
    "WELLNESS_REQUEST_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_backend_env(monkeypatch):
    for name in BACKEND_ENV:
        monkeypatch.delenv(name, raising=False)
