"""sonar_github.http

Request sending shared by the SonarCloud and GitHub calls.

Requests are prepared explicitly (rather than via ``session.get``/``post``)
so that --verbose can log exactly what goes on the wire: method, final URL
with query string, and headers, including ones added by the session and the
auth handler.
"""

from __future__ import annotations

import logging
from typing import Mapping

import requests

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SEC = 30

_SECRET_HEADERS = {"authorization", "proxy-authorization"}


def redact_header(name: str, value: str) -> str:
    if name.lower() not in _SECRET_HEADERS:
        return value
    scheme, _, _credentials = value.partition(" ")
    return f"{scheme} ****" if _credentials else "****"


def log_request(prepared: requests.PreparedRequest) -> None:
    logger.info("Request: %s %s", prepared.method, prepared.url)
    headers: Mapping[str, str] = prepared.headers or {}
    for name, value in headers.items():
        logger.info("%s=%s", name, redact_header(name, value))


def send(
    session: requests.Session,
    request: requests.Request,
    *,
    verbose: bool = False,
) -> requests.Response:
    """Prepare and send one request. Raises requests.RequestException on transport errors."""
    prepared = session.prepare_request(request)
    if verbose:
        log_request(prepared)
    settings = session.merge_environment_settings(prepared.url, {}, None, None, None)
    return session.send(prepared, timeout=REQUEST_TIMEOUT_SEC, **settings)
