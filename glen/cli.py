"""CLI entry point for glen."""

from __future__ import annotations

import argparse
import logging
import os
import sys

import glen
from glen.exceptions import GlenError, InvalidRemoteURL, RemoteReadError, SourceUnavailable
from glen.logging_utils import setup_logging
from glen.models import DEFAULT_LOCAL_PATH, DEFAULT_OUTPUT, DEFAULT_REMOTE_NAME, PER_PAGE, TOKEN_ENV_VAR
from glen.output import get_formatter_registry, write_variables
from glen.remote import resolve_repository
from glen.variables import VariableCollector


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glen",
        description="Print the CI/CD variables of a GitLab project and its parent groups.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Run inside a git checkout whose remote points at GitLab. glen reads the remote
URL, calls the GitLab API and prints the project's variables, ready for
exporting. Project variables override group variables, and nearer groups
override farther ones.

Environment:
    GITLAB_TOKEN - GitLab Personal Access Token (used when --api-key is not given)

Examples:
    # Export the project's variables and those of every parent group
    eval $(glen -r)

    # Parent group variables only, as a table
    glen --group-only -o table

    # A different checkout and remote, as JSON
    glen -d ~/src/service -n upstream -o json
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {glen.__version__}")
    parser.add_argument(
        "--recurse", "-r", action="store_true", help="Include the variables of the project's parent groups"
    )
    parser.add_argument(
        "--group-only", "-g", action="store_true", help="Only get variables from the project's parent groups"
    )
    parser.add_argument(
        "--api-key", "-k", default=None, help=f"GitLab API key (default: from {TOKEN_ENV_VAR} env)"
    )
    parser.add_argument(
        "--directory",
        "-d",
        default=DEFAULT_LOCAL_PATH,
        help="Directory of the git repo (default: current working directory)",
    )
    parser.add_argument(
        "--remote-name",
        "-n",
        default=DEFAULT_REMOTE_NAME,
        help=f"Name of the GitLab remote in your git repo (default: {DEFAULT_REMOTE_NAME})",
    )
    parser.add_argument(
        "--output",
        "-o",
        default=DEFAULT_OUTPUT,
        choices=sorted(get_formatter_registry()),
        help=f"Output format (default: {DEFAULT_OUTPUT}, which can be evaluated to export variables)",
    )
    parser.add_argument(
        "--per-page",
        type=int,
        default=PER_PAGE,
        help=f"Variables requested per API page, 1-{PER_PAGE} (default: {PER_PAGE})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines (to stderr)")
    return parser


def run(args: argparse.Namespace, api_key: str) -> int:
    """Resolve the checkout, collect its variables and print them."""
    logger = logging.getLogger("glen")

    # Resolve the project from the local checkout
    try:
        repo = resolve_repository(args.directory, args.remote_name)
    except (RemoteReadError, InvalidRemoteURL) as e:
        logger.error(f"Failed to initialize the repository: {e}")
        return 1

    logger.debug(f"Resolved: project '{repo.path}' on {repo.base_url}, groups {repo.groups}")

    collector = VariableCollector(page_size=args.per_page)
    try:
        env = collector.collect(
            repo.base_url,
            repo.path,
            repo.groups,
            recurse=args.recurse,
            api_key=api_key,
            group_only=args.group_only,
        )
    except SourceUnavailable as e:
        logger.error(f"Failed to initialize variables: {e}")
        return 1
    except GlenError as e:
        logger.error(f"Fatal error: {e}")
        return 1

    write_variables(env, args.output, sys.stdout)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_logging(json_mode=args.log_json, verbose=args.verbose)

    # Get token
    api_key = args.api_key or os.environ.get(TOKEN_ENV_VAR)
    if not api_key:
        logger.error(f"GitLab API key not set. Please use --api-key/-k flag or set {TOKEN_ENV_VAR} environment variable.")
        return 1

    try:
        return run(args, api_key)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
