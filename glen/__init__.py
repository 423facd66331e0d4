"""
glen: print the CI/CD variables of a GitLab project and its parent groups.

Run inside a git checkout with a GitLab remote. glen parses the remote URL,
derives the chain of parent groups, fetches variables from the GitLab API and
merges them using GitLab's precedence (project > nearest group > ... > root group).

Environment:
    GITLAB_TOKEN - GitLab Personal Access Token (read by the CLI only)
"""

__version__ = "0.1.0"

from glen.exceptions import (
    GlenError,
    GroupFetchWarning,
    InvalidRemoteURL,
    RemoteReadError,
    SourceUnavailable,
    VariableSourceError,
)
from glen.models import ParsedRemote, Repository, ScopeKind, VariablePage
from glen.remote import extract_groups, parse_remote_url, resolve_repository
from glen.variables import VariableCollector

__all__ = [
    "__version__",
    "GlenError",
    "GroupFetchWarning",
    "InvalidRemoteURL",
    "RemoteReadError",
    "SourceUnavailable",
    "VariableSourceError",
    "ParsedRemote",
    "Repository",
    "ScopeKind",
    "VariablePage",
    "extract_groups",
    "parse_remote_url",
    "resolve_repository",
    "VariableCollector",
]
