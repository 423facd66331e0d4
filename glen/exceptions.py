"""Exceptions raised by glen."""

from __future__ import annotations


class GlenError(Exception):
    """Base class for all glen errors."""


class InvalidRemoteURL(GlenError, ValueError):
    """A remote URL could not be parsed into a host and project path."""


class RemoteReadError(GlenError):
    """The remote URL could not be read from the local repository."""


class VariableSourceError(GlenError):
    """A variable source failed to return a page (network, HTTP or auth error)."""


class SourceUnavailable(GlenError):
    """The project variables could not be fetched."""

    def __init__(self, project_path: str, reason: str):
        super().__init__(f"failed to get variables from project {project_path}: {reason}")
        self.project_path = project_path
        self.reason = reason


class GroupFetchWarning(GlenError):
    """A group's variables could not be fetched. The group is skipped."""

    def __init__(self, group_path: str, reason: str):
        super().__init__(f"failed to get variables from group {group_path}: {reason}")
        self.group_path = group_path
        self.reason = reason
