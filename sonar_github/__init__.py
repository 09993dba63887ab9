"""SonarCloud quality gate -> GitHub commit status.

Split into:
  - types.py      : options record + status enums
  - errors.py     : error taxonomy and exit codes
  - args.py       : command-line parsing into InvocationOptions
  - http.py       : shared request sending (+ verbose request logging)
  - sonar_api.py  : GET /api/qualitygates/project_status
  - github_api.py : POST /repos/{owner}/{repo}/statuses/{sha}
  - runner.py     : fetch-then-publish orchestration

propagate_gate.py (repo root) acts as the CLI entrypoint.
"""

__version__ = "1.0.0"
