"""Data models and constants for glen."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_SCHEME = "https"
API_V4 = "/api/v4"
PER_PAGE = 100  # GitLab's maximum page size
REQUEST_TIMEOUT = 30  # seconds

DEFAULT_LOCAL_PATH = "."
DEFAULT_REMOTE_NAME = "origin"
DEFAULT_OUTPUT = "export"
TOKEN_ENV_VAR = "GITLAB_TOKEN"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ScopeKind(Enum):
    PROJECT = "project"
    GROUP = "group"


# ---------------------------------------------------------------------------
# Data Classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParsedRemote:
    """Host and project path extracted from a git remote URL."""

    base_url: str  # host, optionally with a port
    path: str  # group/subgroup/project, no scheme or .git suffix
    http_url: str  # base_url + "/" + path


@dataclass
class VariablePage:
    """One page of variables as returned by a variable source."""

    items: list[tuple[str, str]] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 1
    next_page: int = 0

    @property
    def has_more(self) -> bool:
        return self.current_page < self.total_pages


@dataclass
class Repository:
    """A local checkout resolved to its GitLab project and parent groups."""

    local_path: str
    remote_name: str
    remote_url: str
    base_url: str
    path: str
    http_url: str
    groups: list[str] = field(default_factory=list)
