from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from lyricos.config import Settings
from lyricos.lyric import LyricClient
from main import create_app


class FakeCompletions:
    """Stands in for AsyncGroq().chat.completions; replays canned replies."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        if not isinstance(reply, str):
            reply = json.dumps(reply)
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeGroq:
    def __init__(self, *replies):
        self.chat = SimpleNamespace(completions=FakeCompletions(replies))

    @property
    def calls(self):
        return self.chat.completions.calls


VARIANT_PAYLOAD = {
    "name": "Midnight Drive",
    "metadata": {"bpm": 92, "key": "A minor", "mood": "wistful", "anchorsUsed": ["road"]},
    "content": [
        {"type": "header", "text": "[Verse 1]"},
        {"type": "lyric", "text": "I love you", "syllables": 0},
        {"type": "lyric", "text": "hello नमस्ते", "syllables": 7, "flags": ["locked_word_conflict"]},
    ],
}


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", model="test-model")


@pytest.fixture
def make_api(settings):
    def _make(*replies) -> tuple[TestClient, FakeGroq]:
        fake = FakeGroq(*replies)
        lyric_client = LyricClient(model=settings.model, client=fake)
        return TestClient(create_app(client=lyric_client, settings=settings)), fake
    return _make
