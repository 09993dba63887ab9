"""sonar_github/github_api.py

Publishing a quality gate status to GitHub as a commit status.

  POST {api}/repos/{owner}/{repo}/statuses/{sha}

Authentication is HTTP basic with a GitHub user name and a personal access
token used in place of a password.
"""

from __future__ import annotations

import json
from typing import Dict, Optional

import requests
from requests.utils import quote

from .errors import PublishTransportError, excerpt
from .http import send
from .types import CommitState, InvocationOptions, QualityGateStatus


STATUS_CONTEXT = "Sonar Cloud"

# Must cover every QualityGateStatus member (checked in tests).
COMMIT_STATE_BY_GATE_STATUS: Dict[QualityGateStatus, CommitState] = {
    QualityGateStatus.OK: CommitState.SUCCESS,
    QualityGateStatus.WARN: CommitState.SUCCESS,
    QualityGateStatus.ERROR: CommitState.FAILURE,
    QualityGateStatus.NONE: CommitState.ERROR,
}


def to_commit_state(status: QualityGateStatus) -> CommitState:
    return COMMIT_STATE_BY_GATE_STATUS[status]


def build_target_url(options: InvocationOptions) -> str:
    if options.project_key is None:
        return options.dashboard_url
    return f"{options.dashboard_url}?id={options.project_key}"


def build_status_payload(status: QualityGateStatus, options: InvocationOptions) -> Dict[str, str]:
    """The JSON document GitHub expects for a commit status."""
    return {
        "state": to_commit_state(status).value,
        "target_url": build_target_url(options),
        "description": f"Quality gate status: {status.name}",
        "context": STATUS_CONTEXT,
    }


def build_status_request(status: QualityGateStatus, options: InvocationOptions) -> requests.Request:
    owner, repo, sha = (
        quote(part, safe="") for part in (options.repo_owner, options.repo_name, options.sha)
    )
    url = f"{options.github_api_url.rstrip('/')}/repos/{owner}/{repo}/statuses/{sha}"
    return requests.Request(
        "POST",
        url,
        data=json.dumps(build_status_payload(status, options), separators=(",", ":")),
        headers={
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
        },
        auth=(options.github_user, options.github_token),
    )


def publish_status(
    status: QualityGateStatus,
    options: InvocationOptions,
    session: Optional[requests.Session] = None,
) -> str:
    """Push the given quality gate status to GitHub.

    Returns the JSON text GitHub answered with. There is no retry; any
    transport or HTTP failure raises PublishTransportError.
    """
    sess = session or requests.Session()
    try:
        resp = send(sess, build_status_request(status, options), verbose=options.verbose)
    except requests.RequestException as e:
        raise PublishTransportError(f"GitHub request failed: {e}") from e
    finally:
        if session is None:
            sess.close()

    if not resp.ok:
        raise PublishTransportError(
            f"GitHub HTTP {resp.status_code} for {resp.url}: {excerpt(resp.text)!r}"
        )
    return resp.text
