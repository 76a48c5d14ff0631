"""Shared fixtures: isolated SQLite store and a scripted fake upstream."""
from __future__ import annotations

import base64
import os
import tempfile
from urllib.parse import parse_qs, urlsplit

import pytest

# Settings are read once; point the default database somewhere disposable
# before the application modules are imported.
os.environ.setdefault("ICONBADGES_DATA_DIR", tempfile.mkdtemp(prefix="iconbadges-"))
os.environ.setdefault("ICONBADGES_ENABLE_PROMETHEUS", "false")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from iconbadges.api.dependencies import get_badge_fetcher, get_db  # noqa: E402
from iconbadges.api.main import create_app  # noqa: E402
from iconbadges.core import models  # noqa: E402,F401
from iconbadges.core.database import Base  # noqa: E402
from iconbadges.core.settings import get_settings  # noqa: E402
from iconbadges.services.upstream import BadgeFetcher  # noqa: E402

SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path fill="#000000" d="M0 0h24v24H0z"/></svg>'
SVG_B64 = base64.b64encode(SVG.encode("utf-8")).decode("ascii")

BADGE_SVG = b'<svg xmlns="http://www.w3.org/2000/svg"><text>badge</text></svg>'
PROBE_WITH_LOGO = b'<svg xmlns="http://www.w3.org/2000/svg"><image x="5" href="data:image/svg+xml;base64,AA=="/></svg>'
PROBE_WITHOUT_LOGO = b'<svg xmlns="http://www.w3.org/2000/svg"><text>test</text></svg>'


class FakeResponse:
    def __init__(self, status_code: int, content: bytes, headers: dict[str, str] | None = None, reason: str = "OK"):
        self.status_code = status_code
        self.content = content
        self.headers = headers if headers is not None else {"Content-Type": "image/svg+xml;charset=utf-8"}
        self.reason = reason


class FakeUpstream:
    """Stands in for ``requests.Session`` and records every requested URL."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.urls: list[str] = []
        self.builtin: set[str] = set()
        self.status = 200
        self.reason = "OK"
        self.response_headers: dict[str, str] | None = None
        self.error: Exception | None = None

    def get(self, url: str, timeout=None) -> FakeResponse:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        parts = urlsplit(url)
        if parts.path == "/badge/-test-blue":
            logo = parse_qs(parts.query).get("logo", [""])[0]
            body = PROBE_WITH_LOGO if logo in self.builtin else PROBE_WITHOUT_LOGO
            return FakeResponse(200, body)
        return FakeResponse(self.status, BADGE_SVG, self.response_headers, self.reason)

    @property
    def last_url(self) -> str:
        return self.urls[-1]

    def last_query(self) -> dict[str, list[str]]:
        return parse_qs(urlsplit(self.last_url).query, keep_blank_values=True)


@pytest.fixture()
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture()
def fetcher(upstream: FakeUpstream) -> BadgeFetcher:
    return BadgeFetcher(settings=get_settings(), session=upstream)


@pytest.fixture()
def session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'icons.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    yield factory
    engine.dispose()


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(session_factory, fetcher: BadgeFetcher):
    application = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_badge_fetcher] = lambda: fetcher
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def svg_b64() -> str:
    return SVG_B64
