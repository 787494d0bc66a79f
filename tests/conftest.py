from __future__ import annotations

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from health_concierge.config import get_settings
from health_concierge.openrouter_client import TextGenerator, get_text_generator
from health_concierge.services.storage import InMemoryStorage, get_storage


class FakeTextGenerator(TextGenerator):
    """Scripted stand-in for the generative text service.

    Replies are consumed in order; once exhausted ``default`` is returned.
    An Exception in the reply list (or ``error``) is raised instead.
    """

    def __init__(self, replies: Optional[list] = None, default: str = "OK", error: Optional[Exception] = None):
        self.replies = list(replies or [])
        self.default = default
        self.error = error
        self.calls: List[dict] = []

    async def generate(self, prompt, system=None, json_response=False, model=None):
        self.calls.append({"prompt": prompt, "system": system, "json_response": json_response, "model": model})
        if self.error is not None:
            raise self.error
        if self.replies:
            reply = self.replies.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return reply
        return self.default


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in ("SUPABASE_URL", "SUPABASE_KEY", "OPENROUTER_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_storage.cache_clear()
    yield
    get_settings.cache_clear()
    get_storage.cache_clear()


@pytest.fixture
def fake_generator():
    return FakeTextGenerator()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def client(storage, fake_generator):
    from health_concierge.app import app

    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_text_generator] = lambda: fake_generator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
