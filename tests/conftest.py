"""Shared test fixtures for glen tests."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from glen.base import RemoteReader, VariableSource
from glen.client import GitLabClient
from glen.exceptions import RemoteReadError, VariableSourceError
from glen.models import ScopeKind, VariablePage

# Constants for use in tests - pytest makes conftest.py fixtures available,
# but these constants need to be imported directly from tests
MOCK_GITLAB_HOST = "gitlab.example.com"
MOCK_API_URL = f"https://{MOCK_GITLAB_HOST}/api/v4"


class FakeVariableSource(VariableSource):
    """In-memory variable source, paging stored variables like GitLab does."""

    def __init__(self, variables=None, failing=()):
        # {(ScopeKind, path): [(key, value), ...]}
        self.variables = variables or {}
        self.failing = set(failing)
        self.calls = []
        self.closed = False

    def close(self):
        self.closed = True

    def list_variables(self, scope, scope_path, page, page_size):
        self.calls.append((scope, scope_path, page, page_size))
        if (scope, scope_path) in self.failing:
            raise VariableSourceError(f"401 Unauthorized for {scope.value} {scope_path}")
        items = self.variables.get((scope, scope_path), [])
        total = max(1, -(-len(items) // page_size))
        start = (page - 1) * page_size
        return VariablePage(
            items=items[start : start + page_size],
            current_page=page,
            total_pages=total,
            next_page=page + 1 if page < total else 0,
        )


class FakeRemoteReader(RemoteReader):
    def __init__(self, remotes=None):
        self.remotes = remotes or {}

    def get_remote_url(self, local_path, remote_name):
        try:
            return self.remotes[remote_name]
        except KeyError:
            raise RemoteReadError(f"unable to find selected remote ({remote_name})") from None


def project(path):
    return (ScopeKind.PROJECT, path)


def group(path):
    return (ScopeKind.GROUP, path)


@pytest.fixture
def mock_client():
    """GitLabClient pointing at mock server."""
    return GitLabClient(MOCK_GITLAB_HOST, "test-token")


@pytest.fixture
def precedence_source():
    """Project, nearest group and root group that all define FOO."""
    return FakeVariableSource(
        {
            project("org/team/service"): [("FOO", "p")],
            group("org/team"): [("FOO", "g1"), ("BAR", "b1")],
            group("org"): [("FOO", "g2"), ("BAR", "b2"), ("BAZ", "z")],
        }
    )


def factory_for(source):
    """Source factory that records the base URL and API key it was called with."""
    seen = {}

    def factory(base_url, api_key):
        seen["base_url"] = base_url
        seen["api_key"] = api_key
        return source

    factory.seen = seen
    return factory
