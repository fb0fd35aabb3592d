"""
Shared fixtures: an app built from explicit settings, and a fake upstream
model standing in for OpenRouter.
"""

import pytest
from fastapi.testclient import TestClient

from chat_relay.api.services import model_client
from chat_relay.config import Settings
from chat_relay.llm import ChatModel
from chat_relay.main import create_app


class FakeChatModel(ChatModel):
    """
    Replays a fixed list of fragments. When ``fail_after`` is set, raises
    ``error`` once that many fragments have been produced (0 = before the first).
    """

    def __init__(self, fragments=("Hello", ", ", "world!"), fail_after=None, error=None):
        self.fragments = list(fragments)
        self.fail_after = fail_after
        self.error = error or RuntimeError("upstream exploded")
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if self.fail_after is not None:
            raise self.error
        return "".join(self.fragments)

    async def stream(self, prompt):
        self.prompts.append(prompt)
        for i, fragment in enumerate(self.fragments):
            if i == self.fail_after:
                raise self.error
            yield fragment
        if self.fail_after is not None and self.fail_after >= len(self.fragments):
            raise self.error


def make_settings(**overrides) -> Settings:
    values = {"OPENROUTER_API_KEY": "test-key", "CHAT_RESPONSE_MODE": "stream"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


# ── Fixtures ─────────────────────────────────────────────────

@pytest.fixture
def fake_model(monkeypatch):
    """Swap the OpenRouter model for a fake; the API-key check stays real."""
    model = FakeChatModel()
    built = []

    def build(**kwargs):
        built.append(kwargs)
        return model

    monkeypatch.setattr(model_client, "OpenRouterChatModel", build)
    model.built = built
    return model


@pytest.fixture
def make_client():
    def _make(**overrides) -> TestClient:
        return TestClient(create_app(make_settings(**overrides)), raise_server_exceptions=False)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()
