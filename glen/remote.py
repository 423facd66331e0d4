"""Remote URL parsing, group hierarchy and local repository resolution."""

from __future__ import annotations

import logging
import posixpath

import git
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from glen.base import RemoteReader
from glen.exceptions import InvalidRemoteURL, RemoteReadError
from glen.models import DEFAULT_LOCAL_PATH, DEFAULT_REMOTE_NAME, ParsedRemote, Repository

logger = logging.getLogger("glen")

GIT_SUFFIX = ".git"


def parse_remote_url(raw: str) -> ParsedRemote:
    """
    Split a git remote URL into host and project path.

    Supported forms:
        https://host[:port]/group/project[.git]
        http://host[:port]/group/project[.git]
        ssh://git@host[:port]/group/project[.git]
        git@host:group/project[.git]

    Raises InvalidRemoteURL for empty input, unrecognised forms, and URLs
    without a project path.
    """
    remote = (raw or "").strip()
    if not remote:
        raise InvalidRemoteURL("invalid remote URL: empty")

    if "://" in remote:
        # Scheme form: drop the scheme and any user info before the host
        remote = remote.split("://", 1)[1]
        host, sep, path = remote.partition("/")
        if "@" in host:
            host = host.rsplit("@", 1)[1]
    elif "@" in remote:
        # SCP-like form: user@host:path
        remote = remote.split("@", 1)[1]
        host, sep, path = remote.partition(":")
    else:
        raise InvalidRemoteURL(f"invalid remote URL: {raw!r} is not an SSH or HTTP remote")

    path = path.strip("/").removesuffix(GIT_SUFFIX)
    if not sep or not path or not host:
        raise InvalidRemoteURL(f"invalid remote URL: {raw!r} has no project path")

    return ParsedRemote(base_url=host, path=path, http_url=f"{host}/{path}")


def extract_groups(project_path: str) -> list[str]:
    """
    Return the parent group paths of a project, nearest first.

    "org/team/sub/project" -> ["org/team/sub", "org/team", "org"]
    """
    groups: list[str] = []
    group_path = posixpath.dirname(project_path or "")
    while group_path and group_path != "/":
        groups.append(group_path)
        group_path = posixpath.dirname(group_path)
    return groups


class GitRemoteReader(RemoteReader):
    """Reads remote URLs from a git checkout with GitPython."""

    def get_remote_url(self, local_path: str, remote_name: str) -> str:
        try:
            repo = git.Repo(local_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RemoteReadError(
                f"unable to open git repository ({local_path}) with the following error: {e!r}"
            ) from e

        try:
            with repo:
                remote = repo.remote(remote_name)
                urls = list(remote.urls)
        except (ValueError, GitCommandError) as e:
            raise RemoteReadError(
                f"unable to find selected remote ({remote_name}) with the following error: {e}"
            ) from e

        if not urls:
            raise RemoteReadError(f"remote ({remote_name}) has no configured URLs")
        return urls[0]


def resolve_repository(
    local_path: str = DEFAULT_LOCAL_PATH,
    remote_name: str = DEFAULT_REMOTE_NAME,
    reader: RemoteReader | None = None,
) -> Repository:
    """Resolve a local checkout to its GitLab host, project path and parent groups."""
    reader = reader or GitRemoteReader()
    remote_url = reader.get_remote_url(local_path, remote_name)
    logger.debug(f"Remote {remote_name}: {remote_url}")

    try:
        parsed = parse_remote_url(remote_url)
    except InvalidRemoteURL as e:
        raise InvalidRemoteURL(
            f"your remote ({remote_name}), {remote_url}, is not an SSH or HTTP remote: {e}"
        ) from e

    return Repository(
        local_path=local_path,
        remote_name=remote_name,
        remote_url=remote_url,
        base_url=parsed.base_url,
        path=parsed.path,
        http_url=parsed.http_url,
        groups=extract_groups(parsed.path),
    )
