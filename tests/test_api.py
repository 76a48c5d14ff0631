"""HTTP-level checks for the icon API and the badge proxy."""
from __future__ import annotations

import base64

import requests
from fastapi.testclient import TestClient

from iconbadges.core import models


def _submit(client: TestClient, slug: str, data: str, type_: str = "svg+xml"):
    return client.post("/icons", json={"slug": slug, "type": type_, "data": data})


def test_healthcheck(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_icons_starts_empty(client: TestClient) -> None:
    response = client.get("/icons")
    assert response.status_code == 200
    assert response.json() == {"icons": []}


def test_submit_then_list_round_trip(client: TestClient, svg_b64: str) -> None:
    response = _submit(client, "foo", svg_b64)
    assert response.status_code == 200, response.text
    assert response.json() == {
        "type": "success",
        "message": "Your icon has been added successfully.",
        "body": {"slug": "foo", "type": "svg+xml", "data": svg_b64},
    }

    icons = client.get("/icons").json()["icons"]
    assert icons == [{"slug": "foo", "type": "svg+xml", "data": svg_b64}]


def test_submit_missing_fields_is_bad_request(client: TestClient, upstream) -> None:
    response = client.post("/icons", json={"slug": "foo"})
    assert response.status_code == 400
    assert response.json() == {
        "type": "error",
        "message": "Bad request.",
        "body": {"slug": "foo", "type": None, "data": None},
    }
    assert upstream.urls == []


def test_submit_without_body_is_bad_request(client: TestClient) -> None:
    response = client.post("/icons")
    assert response.status_code == 400
    assert response.json()["message"] == "Bad request."


def test_submit_non_object_body_is_bad_request(client: TestClient, upstream) -> None:
    response = client.post("/icons", json=["x"])
    assert response.status_code == 400
    assert response.json() == {
        "type": "error",
        "message": "Bad request.",
        "body": {"slug": None, "type": None, "data": None},
    }
    assert upstream.urls == []


def test_submit_non_string_field_is_bad_request(client: TestClient) -> None:
    response = client.post("/icons", json={"slug": 123, "type": "svg+xml", "data": "x"})
    assert response.status_code == 400
    assert response.json()["message"] == "Bad request."


def test_submit_malformed_json_is_bad_request(client: TestClient) -> None:
    response = client.post("/icons", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["type"] == "error"


def test_submit_with_trailing_slash(client: TestClient, svg_b64: str) -> None:
    response = client.post("/icons/", json={"slug": "foo", "type": "svg+xml", "data": svg_b64})
    assert response.status_code == 200, response.text


def test_duplicate_slug_is_conflict(client: TestClient, svg_b64: str) -> None:
    assert _submit(client, "foo", svg_b64).status_code == 200
    response = _submit(client, "foo", "iVBORw0KGgo=", "png")
    assert response.status_code == 409
    assert response.json()["message"] == "This slug is already in use."
    assert response.json()["body"]["type"] == "png"
    assert client.get("/icons").json()["icons"] == [{"slug": "foo", "type": "svg+xml", "data": svg_b64}]


def test_builtin_upstream_slug_is_conflict(client: TestClient, upstream, svg_b64: str) -> None:
    upstream.builtin = {"python"}
    response = _submit(client, "python", svg_b64)
    assert response.status_code == 409
    assert client.get("/icons").json() == {"icons": []}


def test_oversized_icon_reports_upstream_status(client: TestClient, upstream, svg_b64: str) -> None:
    upstream.status = 414
    upstream.reason = "URI Too Long"
    response = _submit(client, "big", svg_b64)
    assert response.status_code == 414
    assert response.json() == {
        "type": "error",
        "message": "The icon you uploaded is too big.",
        "body": {"slug": "big", "type": "svg+xml", "data": svg_b64},
    }
    assert client.get("/icons").json() == {"icons": []}


def test_other_upstream_failure_reports_status_text(client: TestClient, upstream, svg_b64: str) -> None:
    upstream.status = 503
    upstream.reason = "Service Unavailable"
    response = _submit(client, "foo", svg_b64)
    assert response.status_code == 503
    assert response.json()["message"] == (
        "There was an error with your request. Status: 503 - Service Unavailable."
    )


def test_get_icon_resolves_curated_and_custom(client: TestClient, svg_b64: str) -> None:
    _submit(client, "foo", svg_b64)
    assert client.get("/icons/foo").json() == {"slug": "foo", "type": "svg+xml", "data": svg_b64}
    assert client.get("/icons/check").json()["type"] == "svg+xml"

    missing = client.get("/icons/nope")
    assert missing.status_code == 404
    assert missing.json() == {"type": "error", "message": "Icon not found.", "body": {"slug": "nope"}}


def test_badge_with_custom_icon_and_color(client: TestClient, upstream, svg_b64: str) -> None:
    _submit(client, "foo", svg_b64)
    response = client.get("/badge/build-passing-green?logo=foo&logoColor=ff0000&style=flat")

    assert response.status_code == 200
    assert response.content.startswith(b"<svg")
    assert response.headers["content-type"].startswith("image/svg+xml")

    forwarded = upstream.last_query()
    assert upstream.last_url.startswith("https://img.shields.io/badge/build-passing-green?")
    assert "logoColor" not in forwarded
    assert forwarded["style"] == ["flat"]
    logo = forwarded["logo"][0]
    assert logo.startswith("data:image/svg+xml;base64,")
    markup = base64.b64decode(logo.split(",", 1)[1]).decode()
    assert 'fill="#ff0000"' in markup
    assert "#000000" not in markup


def test_badge_with_octicon(client: TestClient, upstream) -> None:
    client.get("/badge/status-ok-green?logo=check")
    logo = upstream.last_query()["logo"][0]
    assert 'fill="whitesmoke"' in base64.b64decode(logo.split(",", 1)[1]).decode()


def test_curated_icon_wins_over_custom_row(client: TestClient, upstream, session_factory, svg_b64: str) -> None:
    session = session_factory()
    session.add(models.Icon(slug="check", type="png", data="iVBORw0KGgo="))
    session.commit()
    session.close()

    client.get("/badge/a-b-c?logo=check")
    assert upstream.last_query()["logo"][0].startswith("data:image/svg+xml;base64,")


def test_unknown_logo_is_forwarded_literally(client: TestClient, upstream) -> None:
    client.get("/badge/foo-bar-blue?logo=unknown-thing&logoColor=red&style=flat")
    assert upstream.last_url == "https://img.shields.io/badge/foo-bar-blue?logo=unknown-thing&logoColor=red&style=flat"


def test_missing_logo_forwards_query_unchanged(client: TestClient, upstream) -> None:
    client.get("/badge/foo-bar-blue?label=hello%20world&style=social")
    assert upstream.last_url == "https://img.shields.io/badge/foo-bar-blue?label=hello%20world&style=social"


def test_other_upstream_endpoints_are_relayed(client: TestClient, upstream) -> None:
    client.get("/github/license/octo/repo?logo=")
    assert upstream.last_url == "https://img.shields.io/github/license/octo/repo?logo="


def test_upstream_status_and_content_type_are_mirrored(client: TestClient, upstream) -> None:
    upstream.status = 404
    upstream.reason = "Not Found"
    upstream.response_headers = {}
    response = client.get("/badge/nope")
    assert response.status_code == 404
    assert response.headers["content-type"] == "image/svg+xml"


def test_unreachable_upstream_is_bad_gateway(client: TestClient, upstream) -> None:
    upstream.error = requests.ConnectionError("down")
    response = client.get("/badge/a-b-c")
    assert response.status_code == 502
    assert response.json()["type"] == "error"


def test_root_path_is_not_a_badge(client: TestClient, upstream) -> None:
    response = client.get("/")
    assert response.status_code == 404
    assert upstream.urls == []


def test_encoded_slash_stays_inside_its_segment(client: TestClient, upstream) -> None:
    response = client.get("/badge/CI%2FCD-passing-green")
    assert response.status_code == 200
    assert upstream.last_url == "https://img.shields.io/badge/CI%2FCD-passing-green?"


def test_icons_paths_are_never_relayed(client: TestClient, upstream) -> None:
    assert client.get("/icons/").json() == {"icons": []}
    assert client.get("/icons/a/b").status_code == 404
    assert upstream.urls == []
