import os

os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient
import requests

from storefront.app import app as fastapi_app
from storefront.notifications.mailer import get_mailer
from storefront.payments import gateway

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid or nodeid.startswith("tests/unit/") or nodeid.startswith("unit/"):
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid or nodeid.startswith("tests/integration/") or nodeid.startswith("integration/"):
            item.add_marker(pytest.mark.integration)


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self._body = body

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeHttpSession:
    """Remplace la session requests partagée: enregistre les POST, rejoue des réponses."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.responses: List[Any] = []

    def queue(self, status_code: int = 200, body: Any = None) -> None:
        self.responses.append(FakeResponse(status_code, body))

    def fail_transport(self, message: str = "connection refused") -> None:
        self.responses.append(requests.ConnectionError(message))

    def post(self, url: str, json: Optional[Dict[str, Any]] = None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers or {}, "timeout": timeout})
        if not self.responses:
            raise requests.ConnectionError("no network in tests")
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


class FakeMailer:
    def __init__(self):
        self.sent: List[Dict[str, str]] = []

    def send(self, to: str, subject: str, text: str) -> None:
        self.sent.append({"to": to, "subject": subject, "text": text})

    def close(self) -> None:
        pass


@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Aucun appel réseau réel vers les prestataires
@pytest.fixture(autouse=True)
def http(monkeypatch) -> FakeHttpSession:
    fake = FakeHttpSession()
    monkeypatch.setattr(gateway, "get_session", lambda: fake)
    return fake

# Aucun envoi SMTP réel
@pytest.fixture(autouse=True)
def mailer(app) -> Generator[FakeMailer, None, None]:
    fake = FakeMailer()
    app.dependency_overrides[get_mailer] = lambda: fake
    try:
        yield fake
    finally:
        app.dependency_overrides.pop(get_mailer, None)
