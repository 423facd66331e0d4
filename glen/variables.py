"""Collection and precedence merge of project and group variables."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from glen.base import VariableSource
from glen.client import GitLabClient
from glen.exceptions import GroupFetchWarning, SourceUnavailable, VariableSourceError
from glen.models import PER_PAGE, ScopeKind

SourceFactory = Callable[[str, str], VariableSource]


class VariableCollector:
    """
    Collects CI/CD variables for a project and, optionally, its parent groups.

    Precedence follows GitLab's rules: project variables win over group
    variables, and a nearer group wins over a farther one. Groups are merged
    root first, nearest last, then the project on top.

    Only the project fetch is required. A group that fails to load is skipped,
    logged, and recorded in ``warnings``.
    """

    def __init__(self, source_factory: SourceFactory = GitLabClient, page_size: int = PER_PAGE):
        self.source_factory = source_factory
        self.page_size = max(1, min(page_size, PER_PAGE))
        self.logger = logging.getLogger("glen")
        self.warnings: list[GroupFetchWarning] = []

    def collect(
        self,
        base_url: str,
        project_path: str,
        groups: Sequence[str],
        recurse: bool,
        api_key: str,
        group_only: bool = False,
    ) -> dict[str, str]:
        """Return the merged variables for ``project_path``.

        ``groups`` is ordered nearest parent first, as returned by
        ``extract_groups``. Raises SourceUnavailable if the project fetch fails.
        """
        self.warnings = []
        with self.source_factory(base_url, api_key) as source:
            return self._collect(source, project_path, groups, recurse, group_only)

    def _collect(
        self, source: VariableSource, project_path: str, groups: Sequence[str], recurse: bool, group_only: bool
    ) -> dict[str, str]:
        project_items: list[tuple[str, str]] = []
        if not group_only:
            try:
                project_items = self._fetch_all(source, ScopeKind.PROJECT, project_path)
            except VariableSourceError as e:
                raise SourceUnavailable(project_path, str(e)) from e

        group_items: list[list[tuple[str, str]]] = []
        if recurse or group_only:
            for group in reversed(groups):
                try:
                    group_items.append(self._fetch_all(source, ScopeKind.GROUP, group))
                except VariableSourceError as e:
                    self._skip_group(group, e)

        env: dict[str, str] = {}
        for items in group_items:
            env.update(items)
        env.update(project_items)
        return env

    def _fetch_all(self, source: VariableSource, scope: ScopeKind, path: str) -> list[tuple[str, str]]:
        """Drain every page of ``path`` before returning."""
        items: list[tuple[str, str]] = []
        page = 1
        while True:
            result = source.list_variables(scope, path, page, self.page_size)
            items.extend(result.items)
            if not result.has_more:
                break
            if result.next_page <= result.current_page:
                raise VariableSourceError(
                    f"pagination stalled at page {result.current_page} of {result.total_pages} for {scope.value} {path}"
                )
            page = result.next_page

        self.logger.debug(f"Fetched {len(items)} variables from {scope.value} {path} (last page {page})")
        return items

    def _skip_group(self, group: str, error: VariableSourceError) -> None:
        warning = GroupFetchWarning(group, str(error))
        self.warnings.append(warning)
        self.logger.warning(
            f"Skipping group {group}: {error}",
            extra={"scope": ScopeKind.GROUP.value, "scope_path": group},
        )
