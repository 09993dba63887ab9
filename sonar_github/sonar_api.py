"""sonar_github/sonar_api.py

All SonarCloud HTTP calls live here.

Only one endpoint is used:

  GET {host}/api/qualitygates/project_status

which answers with ``{"projectStatus": {"status": "OK|WARN|ERROR|NONE", ...}}``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

import requests

from .errors import (
    FetchTransportError,
    MalformedResponseError,
    NoStatusYetError,
    UnknownStatusError,
    excerpt,
)
from .http import send
from .types import InvocationOptions, QualityGateStatus


PROJECT_STATUS_PATH = "/api/qualitygates/project_status"


def _auth_headers(options: InvocationOptions) -> Dict[str, str]:
    headers = {"Accept": "application/json"}
    if options.sonar_token:
        headers["Authorization"] = f"Bearer {options.sonar_token}"
    return headers


def build_query_params(options: InvocationOptions) -> List[Tuple[str, Any]]:
    """Query parameters for project_status; absent values are left out entirely."""
    candidates: List[Tuple[str, Optional[Any]]] = [
        ("analysisId", options.analysis_id),
        ("branch", options.branch),
        ("projectKey", options.project_key),
        ("pullRequest", options.pull_request),
    ]
    return [(name, value) for name, value in candidates if value is not None and value != ""]


def build_quality_gate_request(options: InvocationOptions) -> requests.Request:
    return requests.Request(
        "GET",
        f"{options.sonar_url.rstrip('/')}{PROJECT_STATUS_PATH}",
        params=build_query_params(options),
        headers=_auth_headers(options),
    )


def parse_quality_gate_response(body: str) -> QualityGateStatus:
    """Extract projectStatus.status from a project_status response body.

    Returns NONE as-is; filtering it out is fetch_quality_gate's job.
    """
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise MalformedResponseError(body, f"invalid JSON: {e}") from e

    project_status = data.get("projectStatus") if isinstance(data, dict) else None
    if not isinstance(project_status, dict):
        raise MalformedResponseError(body, "missing projectStatus")

    status = project_status.get("status")
    if not isinstance(status, str):
        raise MalformedResponseError(body, "missing projectStatus.status")

    accepted = [s.name for s in QualityGateStatus]
    if status not in accepted:
        raise UnknownStatusError(status, accepted)
    return QualityGateStatus[status]


def fetch_quality_gate(
    options: InvocationOptions,
    session: Optional[requests.Session] = None,
) -> QualityGateStatus:
    """Get the quality gate status from SonarCloud.

    Raises a FetchError subclass when no usable status is available,
    including NoStatusYetError when SonarCloud reports NONE.
    """
    sess = session or requests.Session()
    try:
        resp = send(sess, build_quality_gate_request(options), verbose=options.verbose)
    except requests.RequestException as e:
        raise FetchTransportError(f"SonarCloud request failed: {e}") from e
    finally:
        if session is None:
            sess.close()

    if not resp.ok:
        raise FetchTransportError(
            f"SonarCloud HTTP {resp.status_code} for {resp.url}: {excerpt(resp.text)!r}"
        )

    status = parse_quality_gate_response(resp.text)
    if status is QualityGateStatus.NONE:
        raise NoStatusYetError()
    return status
