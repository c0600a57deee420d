from types import SimpleNamespace

import pytest

from tools.settings import settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in ("PERPLEXITY_API_KEY", "PERPLEXITY_MODEL", "WALLET_RPC_URL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings.cache_clear()
    yield
    settings.cache_clear()


class FakeCompletions:
    def __init__(self, content=None, exc=None):
        self.content = content
        self.exc = exc
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content=None, exc=None):
    """Stands in for the OpenAI client: client.chat.completions.create(...)."""
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(content, exc)))


@pytest.fixture
def make_client():
    return fake_client
