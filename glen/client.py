"""GitLab API client for CI/CD variables."""

from __future__ import annotations

import logging
import urllib.parse

import requests

from glen.base import VariableSource
from glen.exceptions import VariableSourceError
from glen.models import API_V4, DEFAULT_SCHEME, PER_PAGE, REQUEST_TIMEOUT, ScopeKind, VariablePage

SCOPE_ENDPOINTS = {
    ScopeKind.PROJECT: "/projects/{id}/variables",
    ScopeKind.GROUP: "/groups/{id}/variables",
}


class GitLabClient(VariableSource):
    """Thin wrapper around the GitLab REST API v4 variables endpoints."""

    def __init__(self, base_url: str, token: str, scheme: str = DEFAULT_SCHEME, timeout: float = REQUEST_TIMEOUT):
        base_url = base_url.rstrip("/")
        if "://" not in base_url:
            base_url = f"{scheme}://{base_url}"
        self.base_url = base_url
        self.api_url = f"{self.base_url}{API_V4}"
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"PRIVATE-TOKEN": token})
        self.logger = logging.getLogger("glen")

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """Make an HTTP request, converting transport and HTTP failures to VariableSourceError."""
        url = f"{self.api_url}{endpoint}"
        self.logger.debug(f"{method.upper()} {url} {kwargs.get('params', '')}")
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            if resp.status_code >= 400:
                self.logger.error(f"API error {resp.status_code}: {resp.text[:500]}")
            resp.raise_for_status()
        except requests.RequestException as e:
            raise VariableSourceError(str(e)) from e
        return resp

    def list_variables(
        self, scope: ScopeKind, scope_path: str, page: int = 1, page_size: int = PER_PAGE
    ) -> VariablePage:
        """Fetch one page of variables for a project or group, addressed by its full path."""
        encoded_path = urllib.parse.quote(scope_path, safe="")
        endpoint = SCOPE_ENDPOINTS[scope].format(id=encoded_path)
        resp = self._request("GET", endpoint, params={"page": page, "per_page": page_size})

        try:
            data = resp.json()
        except ValueError as e:
            raise VariableSourceError(f"invalid JSON from {endpoint}: {e}") from e
        if not isinstance(data, list):
            raise VariableSourceError(f"unexpected response from {endpoint}: expected a list")

        try:
            items = [(var["key"], var.get("value") or "") for var in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise VariableSourceError(f"unexpected response from {endpoint}: malformed variable ({e!r})") from e
        return self._page_from_headers(resp.headers, page, items)

    @staticmethod
    def _page_from_headers(headers, requested_page: int, items: list[tuple[str, str]]) -> VariablePage:
        """Build a VariablePage from GitLab's x-page / x-total-pages / x-next-page headers."""
        current = _int_header(headers, "x-page", requested_page)
        next_page = _int_header(headers, "x-next-page", 0)
        # x-total-pages is omitted for very large collections
        default_total = current + 1 if next_page else current
        total = _int_header(headers, "x-total-pages", default_total)
        return VariablePage(items=items, current_page=current, total_pages=total, next_page=next_page)


def _int_header(headers, name: str, default: int) -> int:
    value = headers.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default
