"""Unit tests for HttpTransport with requests.get patched out."""

import pytest
import requests

from vitae.contexts.citations import transport as transport_module
from vitae.contexts.citations.transport import HttpTransport
from vitae.utils.exceptions import FormatError, NetworkError


class StubResponse:
    def __init__(self, text, status_code=200, content_type="text/html; charset=utf-8"):
        self.text = text
        self.status_code = status_code
        self.headers = {"Content-Type": content_type}
        self.encoding = "ISO-8859-1"
        self.apparent_encoding = "utf-8"

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}")


@pytest.mark.unit
def test_get_text_sends_accept_and_user_agent(monkeypatch):
    seen = {}

    def fake_get(url, headers=None, timeout=None, allow_redirects=None):
        seen.update(url=url, headers=headers, timeout=timeout, allow_redirects=allow_redirects)
        return StubResponse("{}")

    monkeypatch.setattr(transport_module.requests, "get", fake_get)

    body = HttpTransport(timeout=5, user_agent="tests").get_text(
        "https://doi.org/10.1/1", accept="application/citeproc+json"
    )

    assert body == "{}"
    assert seen["headers"] == {"User-Agent": "tests", "Accept": "application/citeproc+json"}
    assert seen["timeout"] == 5
    assert seen["allow_redirects"] is True


@pytest.mark.unit
def test_missing_charset_falls_back_to_detected_encoding(monkeypatch):
    response = StubResponse("<title>x</title>", content_type="text/html")
    monkeypatch.setattr(transport_module.requests, "get", lambda *args, **kwargs: response)

    HttpTransport().get_text("https://example.com")

    assert response.encoding == "utf-8"


@pytest.mark.unit
@pytest.mark.parametrize(
    "outcome",
    [StubResponse("gone", status_code=404), requests.ConnectionError("refused")],
)
def test_failures_become_network_errors(monkeypatch, outcome):
    def fake_get(*args, **kwargs):
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(transport_module.requests, "get", fake_get)

    with pytest.raises(NetworkError) as exc_info:
        HttpTransport().get_text("https://example.com/page")

    assert exc_info.value.url == "https://example.com/page"
    assert exc_info.value.original_error is not None


@pytest.mark.unit
def test_get_json_decodes_body(monkeypatch):
    monkeypatch.setattr(
        transport_module.requests, "get", lambda *args, **kwargs: StubResponse('{"title": "A Paper"}')
    )

    assert HttpTransport().get_json("https://doi.org/10.1/1", accept="application/citeproc+json") == {
        "title": "A Paper"
    }


@pytest.mark.unit
def test_get_json_rejects_non_json(monkeypatch):
    monkeypatch.setattr(transport_module.requests, "get", lambda *args, **kwargs: StubResponse("<html>"))

    with pytest.raises(FormatError):
        HttpTransport().get_json("https://doi.org/10.1/1")
