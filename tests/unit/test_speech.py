"""Unit tests for speech synthesis with a fake OpenAI client"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from cardinal.llm import speech
from cardinal.llm.speech import SpeechConfigurationError, resolve_voice, synthesize_speech


class FakeSpeechAPI:
    def __init__(self):
        self.requests: list[dict] = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        return SimpleNamespace(content=b"ID3-fake-mp3")


@pytest.fixture
def fake_client(monkeypatch):
    api = FakeSpeechAPI()
    client = SimpleNamespace(audio=SimpleNamespace(speech=api))
    monkeypatch.setattr(speech, "get_speech_client", lambda: client)
    return api


def test_synthesize_returns_audio_bytes(fake_client):
    audio = synthesize_speech("Your quote is one hundred fifty dollars.", "nova")

    assert audio == b"ID3-fake-mp3"
    request = fake_client.requests[0]
    assert request["voice"] == "nova"
    assert request["response_format"] == "mp3"
    assert request["input"] == "Your quote is one hundred fifty dollars."


def test_unknown_voice_uses_default(fake_client):
    synthesize_speech("hello", "robot")

    assert fake_client.requests[0]["voice"] == speech.TTS_VOICE


@pytest.mark.parametrize(("voice", "expected"), [("ALLOY", "alloy"), ("shimmer", "shimmer"), (None, speech.TTS_VOICE)])
def test_resolve_voice(voice, expected):
    assert resolve_voice(voice) == expected


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(speech, "OPENAI_API_KEY", None)
    speech.get_speech_client.cache_clear()

    with pytest.raises(SpeechConfigurationError):
        speech.get_speech_client()

    speech.get_speech_client.cache_clear()
