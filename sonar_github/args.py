"""sonar_github.args

Turn the command line into an :class:`InvocationOptions` record.

Flag names are camelCase (``--projectKey``, ``--githubRepoOwner``...) to
match the SonarCloud / GitHub parameter names CI scripts already use.

Credentials and hosts may also come from the environment (typically filled
from ``.env`` by the entrypoint). A value given on the command line always
wins over the environment.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Mapping, Optional, Sequence

from . import __version__
from .errors import ArgError, MissingIdentifierError
from .types import GITHUB_API_DEFAULT, SONAR_HOST_DEFAULT, InvocationOptions

logger = logging.getLogger(__name__)

PROG = "sonar-gate-to-github"


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ArgError instead of exiting with status 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ArgError(f"Error parsing command line: {message}")


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


def _add_from_env(
    parser: argparse.ArgumentParser,
    flag: str,
    *,
    env: Mapping[str, str],
    env_var: str,
    required: bool,
    help_text: str,
) -> None:
    """Register a string flag that may be satisfied by an environment variable."""
    default = env.get(env_var) or None
    parser.add_argument(
        flag,
        default=default,
        required=required and default is None,
        help=f"{help_text} (env: {env_var})",
    )


def build_parser(env: Optional[Mapping[str, str]] = None) -> argparse.ArgumentParser:
    env = os.environ if env is None else env

    parser = _ArgumentParser(
        prog=PROG,
        description=(
            "Get the state of the quality gate for a SonarCloud project and "
            "propagate it to a GitHub commit as a commit status."
        ),
    )

    # SonarCloud side
    parser.add_argument("--analysisId", help="Analysis id")
    parser.add_argument("--projectKey", help="Project key")
    parser.add_argument("--branch", help="Branch key")
    parser.add_argument("--pullRequest", type=int, help="Pull request id")
    parser.add_argument(
        "--sonarCloudUrl",
        default=env.get("SONAR_HOST") or SONAR_HOST_DEFAULT,
        help=f"Base Sonar Cloud URL (default: {SONAR_HOST_DEFAULT}; env: SONAR_HOST)",
    )
    _add_from_env(
        parser,
        "--sonarToken",
        env=env,
        env_var="SONAR_TOKEN",
        required=False,
        help_text="SonarCloud token, only needed for private projects",
    )

    # GitHub side
    parser.add_argument(
        "--githubApiUrl",
        default=env.get("GITHUB_API_URL") or GITHUB_API_DEFAULT,
        help=f"Base GitHub API URL (default: {GITHUB_API_DEFAULT}; env: GITHUB_API_URL)",
    )
    parser.add_argument("--githubRepoOwner", required=True, help="The owner of the github repo")
    parser.add_argument("--githubRepoName", required=True, help="The name of the github repo")
    _add_from_env(
        parser,
        "--githubUser",
        env=env,
        env_var="GITHUB_USER",
        required=True,
        help_text="github user name",
    )
    _add_from_env(
        parser,
        "--githubToken",
        env=env,
        env_var="GITHUB_TOKEN",
        required=True,
        help_text="github personal access token used in place of a password",
    )
    parser.add_argument(
        "--sha",
        required=True,
        help="The SHA hash of the commit this analysis applies to",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="If this is specified, all requests are logged (at INFO level).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_options(
    argv: Optional[Sequence[str]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> InvocationOptions:
    """Parse and validate the command line.

    Raises ArgError (MissingIdentifierError when neither --analysisId nor
    --projectKey is given). --help and --version print and raise
    SystemExit(0) as argparse does.
    """
    args = build_parser(env).parse_args(argv)

    # CI scripts often pass unset variables through, e.g. --branch "$BRANCH".
    analysis_id = _blank_to_none(args.analysisId)
    project_key = _blank_to_none(args.projectKey)
    if analysis_id is None and project_key is None:
        raise MissingIdentifierError()

    for flag, value in (
        ("--githubRepoOwner", args.githubRepoOwner),
        ("--githubRepoName", args.githubRepoName),
        ("--githubUser", args.githubUser),
        ("--githubToken", args.githubToken),
        ("--sha", args.sha),
    ):
        if _blank_to_none(value) is None:
            raise ArgError(f"Error parsing command line: {flag} must not be empty")

    options = InvocationOptions(
        analysis_id=analysis_id,
        project_key=project_key,
        branch=_blank_to_none(args.branch),
        pull_request=args.pullRequest,
        sonar_url=args.sonarCloudUrl.rstrip("/"),
        sonar_token=_blank_to_none(args.sonarToken),
        github_api_url=args.githubApiUrl.rstrip("/"),
        repo_owner=args.githubRepoOwner,
        repo_name=args.githubRepoName,
        sha=args.sha,
        github_user=args.githubUser,
        github_token=args.githubToken,
        verbose=args.verbose,
    )
    logger.info("%s", options)
    return options
