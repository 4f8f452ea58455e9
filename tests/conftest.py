"""Shared fakes for network collaborators."""

import threading
from typing import Dict, List, Optional

import pytest

from vitae.contexts.citations.transport import decode_json
from vitae.contexts.projects.project_data_structures import Project


class FakeTransport:
    """In-memory transport: maps URL -> body text, or an exception to raise."""

    def __init__(self, responses: Dict[str, object] = None):
        self.responses = responses or {}
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def get_text(self, url: str, accept: Optional[str] = None) -> str:
        with self._lock:
            self.calls.append((url, accept))
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    def get_json(self, url: str, accept: Optional[str] = None):
        return decode_json(self.get_text(url, accept), url)


class FakeProjectSource:
    """Project source returning canned projects and recording every call."""

    def __init__(self, owned: List[Project] = None, repos: Dict[str, Project] = None, error: Exception = None):
        self.owned = owned or []
        self.repos = repos or {}
        self.error = error
        self.calls: List[tuple] = []

    def list_owned(self, ignore_forks, token=None, viewer=None):
        self.calls.append(("owned", ignore_forks, token, viewer))
        if self.error:
            raise self.error
        return list(self.owned)

    def list_by_names(self, names, token=None, viewer=None):
        self.calls.append(("names", tuple(names), token, viewer))
        if self.error:
            raise self.error
        return [self.repos[name] for name in names if name in self.repos]


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def person_data():
    """Minimal valid person record."""
    return {
        "name": "Jane Doe",
        "contacts": [
            {"type": "github", "value": "janedoe"},
            {"type": "email", "value": "jane@example.com"},
        ],
        "educations": [
            {
                "institution": "State University",
                "degree": "MS",
                "major": "Computer Science",
                "duration": "2016-09~2018-06",
            }
        ],
        "experiences": [
            {
                "company": "Acme",
                "position": "Engineer",
                "duration": "2018-07~",
                "description": "Built the compiler[^dragon] and the linker[^blog].",
            }
        ],
        "projects": [],
    }


@pytest.fixture
def make_source():
    return FakeProjectSource


@pytest.fixture
def make_transport():
    return FakeTransport
