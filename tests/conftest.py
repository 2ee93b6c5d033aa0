import socket

import pytest

from report_api.core.config import Settings


VALID_PAYLOAD = {
    "address": "1 rue Test",
    "propertyType": "Appartement",
    "surface": None,
    "yearBuilt": None,
    "notes": "visite ok",
    "extraContext": "",
    "detailLevel": "standard",
}


class FakeModel:
    """Stands in for the chat-completion writer and records every call."""

    def __init__(self, reply="Rapport", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture(autouse=True)
def block_network(monkeypatch):
    real_connect = socket.socket.connect

    def guarded_connect(sock, address):
        host = address[0] if isinstance(address, tuple) else address
        if host not in ("127.0.0.1", "localhost"):
            raise RuntimeError("Network access blocked in tests")
        return real_connect(sock, address)

    monkeypatch.setattr(socket.socket, "connect", guarded_connect)


@pytest.fixture
def make_client():
    from fastapi.testclient import TestClient

    from report_api.main import create_app

    def _make(model=None, **overrides):
        overrides.setdefault("OPENAI_API_KEY", "sk-test")
        settings = Settings(**overrides)
        return TestClient(create_app(settings, model=model))

    return _make


@pytest.fixture
def payload():
    return dict(VALID_PAYLOAD)
