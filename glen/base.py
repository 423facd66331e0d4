"""Collaborator interfaces: where remote URLs and variables come from."""

from __future__ import annotations

from abc import ABC, abstractmethod

from glen.models import ScopeKind, VariablePage


class RemoteReader(ABC):
    """Reads the URL of a named remote from a local repository."""

    @abstractmethod
    def get_remote_url(self, local_path: str, remote_name: str) -> str:
        """Return the first URL of ``remote_name``.

        Raises:
            RemoteReadError: if ``local_path`` is not a repository, the remote
                does not exist, or it has no configured URL.
        """
        ...


class VariableSource(ABC):
    """Returns CI/CD variables for a project or group, one page at a time."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release any resources held by the source."""

    @abstractmethod
    def list_variables(self, scope: ScopeKind, scope_path: str, page: int, page_size: int) -> VariablePage:
        """Fetch a single page of variables for ``scope_path``.

        Raises:
            VariableSourceError: on network, HTTP or authentication failure.
        """
        ...
