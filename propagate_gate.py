#!/usr/bin/env python3
"""propagate_gate.py

Read the quality gate of a SonarCloud analysis and report it as a GitHub
commit status.

This file is intentionally kept as a thin entrypoint:
  - load .env (if present)
  - configure logging
  - hand argv to sonar_github.runner and exit with its code

Usage:
  python propagate_gate.py --projectKey my_org_my_repo --sha "$GITHUB_SHA" \\
      --githubRepoOwner my-org --githubRepoName my-repo \\
      --githubUser ci-bot --githubToken "$GITHUB_TOKEN"

  python propagate_gate.py --analysisId AYx... --pullRequest 42 ...   # same flags

Exit codes: 0 published, 1 bad arguments, 2 no usable quality gate, 3 GitHub error.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from sonar_github.runner import run

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main(argv: Optional[Sequence[str]] = None) -> int:
    # Load .env once, at runtime (not import-time). Real environment wins.
    load_dotenv(Path.cwd() / ".env", override=False)
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    return run(argv)


if __name__ == "__main__":
    sys.exit(main())
