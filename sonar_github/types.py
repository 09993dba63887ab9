from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


SONAR_HOST_DEFAULT = "https://sonarcloud.io"
GITHUB_API_DEFAULT = "https://api.github.com"


class QualityGateStatus(str, Enum):
    """Valid values for a SonarCloud quality gate status."""

    OK = "OK"
    WARN = "WARN"
    ERROR = "ERROR"
    NONE = "NONE"


class CommitState(str, Enum):
    """The subset of GitHub commit status states this tool publishes."""

    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"


def redact(secret: Optional[str]) -> Optional[str]:
    """Render a secret for logs: never more than its last 4 characters."""
    if secret is None:
        return None
    if len(secret) <= 8:
        return "****"
    return f"****{secret[-4:]}"


@dataclass(frozen=True)
class InvocationOptions:
    """Resolved command-line settings for one run."""

    repo_owner: str
    repo_name: str
    sha: str
    github_user: str
    github_token: str
    analysis_id: Optional[str] = None
    project_key: Optional[str] = None
    branch: Optional[str] = None
    pull_request: Optional[int] = None
    sonar_url: str = SONAR_HOST_DEFAULT
    sonar_token: Optional[str] = None
    github_api_url: str = GITHUB_API_DEFAULT
    verbose: bool = False

    @property
    def dashboard_url(self) -> str:
        return f"{self.sonar_url.rstrip('/')}/dashboard"

    def __repr__(self) -> str:
        return (
            "InvocationOptions("
            f"analysis_id={self.analysis_id!r}, "
            f"project_key={self.project_key!r}, "
            f"branch={self.branch!r}, "
            f"pull_request={self.pull_request!r}, "
            f"sonar_url={self.sonar_url!r}, "
            f"sonar_token={redact(self.sonar_token)!r}, "
            f"github_api_url={self.github_api_url!r}, "
            f"repo={self.repo_owner}/{self.repo_name}, "
            f"sha={self.sha!r}, "
            f"github_user={self.github_user!r}, "
            f"github_token={redact(self.github_token)!r}, "
            f"verbose={self.verbose!r})"
        )

    __str__ = __repr__
