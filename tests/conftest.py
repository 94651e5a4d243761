from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the member_api package importable when running from a source checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from member_api.core import config as core_config  # noqa: E402
from member_api.core.rate_limiter import reset_rate_limits  # noqa: E402
from member_api.db import models  # noqa: E402
from member_api.db import session as db_session  # noqa: E402
import member_api.services.email_service as email_service_module  # noqa: E402


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and reset settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    reset_rate_limits()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    core_config.get_settings.cache_clear()


@pytest.fixture()
def sent_emails(monkeypatch):
    """Capture outgoing mail instead of talking to SMTP."""
    outbox: list[dict] = []

    def _fake_send(subject, to_email, html_body, text_body=None):
        outbox.append({"subject": subject, "to": to_email, "html": html_body, "text": text_body})
        return True

    monkeypatch.setattr(email_service_module, "send_email", _fake_send)
    return outbox


def last_code(outbox: list[dict], email: str) -> str:
    for message in reversed(outbox):
        if message["to"] == email.strip().lower():
            return message["text"].rsplit(" ", 1)[-1]
    raise AssertionError(f"no auth code mailed to {email}")


@pytest.fixture()
def client(db_env, sent_emails):
    from member_api.app import create_app

    return TestClient(create_app())


@pytest.fixture()
def register_member(client, sent_emails):
    """Run the full signup flow and return the created member's Location header."""

    def _register(email: str, nickname: str, password: str = "s3cret-pass", profile: str | None = None) -> str:
        resp = client.post("/emails/auth-code", json={"email": email})
        assert resp.status_code == 200, resp.text
        code = last_code(sent_emails, email)
        resp = client.post("/emails/verify", json={"email": email, "authCode": code})
        assert resp.status_code == 200, resp.text
        resp = client.post(
            "/members",
            json={"email": email, "password": password, "nickName": nickname, "profile": profile, "authCode": code},
        )
        assert resp.status_code == 201, resp.text
        return resp.headers["location"]

    return _register


@pytest.fixture()
def login(client):
    """Log in and return Authorization headers for the session."""

    def _login(email: str, password: str = "s3cret-pass") -> dict:
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["accessToken"]
        return {"Authorization": f"Bearer {token}"}

    return _login
