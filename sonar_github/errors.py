"""sonar_github.errors

Every failure a run can end with.

Errors are raised where they are detected (args.py, sonar_api.py,
github_api.py) and caught exactly once, in runner.py, where they are logged
and turned into a process exit code.
"""

from __future__ import annotations

from typing import Sequence


EXIT_OK = 0
EXIT_ARG_ERROR = 1
EXIT_FETCH_ERROR = 2
EXIT_PUBLISH_ERROR = 3

# Raw response bodies can be large HTML error pages.
_BODY_EXCERPT = 500


def excerpt(body: str) -> str:
    if len(body) <= _BODY_EXCERPT:
        return body
    return body[:_BODY_EXCERPT] + "..."


class BridgeError(Exception):
    exit_code = EXIT_ARG_ERROR


class ArgError(BridgeError):
    """The command line could not be turned into InvocationOptions."""

    exit_code = EXIT_ARG_ERROR


class MissingIdentifierError(ArgError):
    def __init__(self) -> None:
        super().__init__("Either --analysisId or --projectKey must be specified")


class FetchError(BridgeError):
    """The quality gate status could not be read from SonarCloud."""

    exit_code = EXIT_FETCH_ERROR


class FetchTransportError(FetchError):
    pass


class MalformedResponseError(FetchError):
    def __init__(self, body: str, reason: str) -> None:
        self.body = body
        self.reason = reason
        super().__init__(
            f"Error parsing quality gate status response ({reason}): {excerpt(body)}"
        )


class UnknownStatusError(FetchError):
    def __init__(self, status: str, accepted: Sequence[str]) -> None:
        self.status = status
        self.accepted = list(accepted)
        super().__init__(
            f'Unable to handle unexpected quality gate status "{status}". '
            f"Expected one of {self.accepted}"
        )


class NoStatusYetError(FetchError):
    """SonarCloud has not computed a quality gate result yet (status NONE)."""

    def __init__(self) -> None:
        super().__init__("The quality gate does not yet have a status")


class PublishError(BridgeError):
    """The commit status could not be posted to GitHub."""

    exit_code = EXIT_PUBLISH_ERROR


class PublishTransportError(PublishError):
    pass
