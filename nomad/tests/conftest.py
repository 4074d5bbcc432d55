"""
Shared fixtures: fake model clients and an app client with settings
overridden so tests never pick up real credentials from the environment.
"""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from nomad.main import app
from nomad.shared.config import Settings, get_settings


class FakeChatClient:
    """
    Stand-in for the OpenAI client.

    Replies are served in order (the last one repeats). An Exception in
    the reply list is raised instead of returned.
    """

    def __init__(self, replies: Optional[List[Any]] = None):
        self.replies = list(replies or ["Done."])
        self.calls: List[Dict[str, Any]] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        index = min(len(self.calls) - 1, len(self.replies) - 1)
        reply = self.replies[index]
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply, tool_calls=None)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def fake_chat_client():
    return FakeChatClient


@pytest.fixture
def app_client():
    """Factory returning a TestClient bound to the given settings."""

    def _make(settings: Optional[Settings] = None) -> TestClient:
        resolved = settings or Settings()
        app.dependency_overrides[get_settings] = lambda: resolved
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
