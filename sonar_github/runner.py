"""sonar_github/runner.py

Fetch-then-publish orchestration:

  options -> GET quality gate (SonarCloud) -> POST commit status (GitHub) -> exit code

Both phases must succeed. If fetching fails nothing is posted, and every run
reports exactly one outcome: the GitHub response on success, or the single
error that stopped it.

Errors raised anywhere below are caught here and only here.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

import requests

from .args import resolve_options
from .errors import EXIT_OK, BridgeError, NoStatusYetError
from .github_api import publish_status
from .sonar_api import fetch_quality_gate
from .types import InvocationOptions

logger = logging.getLogger(__name__)


def _report(err: BridgeError) -> int:
    if isinstance(err, NoStatusYetError):
        logger.warning("%s", err)
    else:
        logger.error("%s", err, exc_info=err if err.__cause__ is not None else None)
    return err.exit_code


def execute(options: InvocationOptions, session: Optional[requests.Session] = None) -> int:
    """Run one fetch + publish cycle and return the process exit code.

    Safe to import and call from tests with a prepared session.
    """
    sess = session or requests.Session()
    try:
        status = fetch_quality_gate(options, sess)
        logger.info("Quality gate status: %s", status.name)
        body = publish_status(status, options, sess)
    except BridgeError as e:
        return _report(e)
    finally:
        if session is None:
            sess.close()

    logger.info("Pushed status: %s", body)
    return EXIT_OK


def run(
    argv: Optional[Sequence[str]] = None,
    env: Optional[Mapping[str, str]] = None,
    session: Optional[requests.Session] = None,
) -> int:
    try:
        options = resolve_options(argv, env)
    except BridgeError as e:
        return _report(e)
    return execute(options, session)
