import json
import unittest
from unittest.mock import patch

import requests

from sonar_github.errors import PublishTransportError
from sonar_github.github_api import (
    COMMIT_STATE_BY_GATE_STATUS,
    build_status_payload,
    publish_status,
    to_commit_state,
)
from sonar_github.types import CommitState, InvocationOptions, QualityGateStatus


def _options(**overrides) -> InvocationOptions:
    fields = dict(
        repo_owner="o",
        repo_name="r",
        sha="deadbeef",
        github_user="u",
        github_token="t",
        project_key="abc",
    )
    fields.update(overrides)
    return InvocationOptions(**fields)


def _response(status_code: int, body: str) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = body.encode("utf-8")
    resp.encoding = "utf-8"
    resp.url = "https://api.github.com/repos/o/r/statuses/deadbeef"
    return resp


class TestCommitStateMapping(unittest.TestCase):
    def test_mapping_covers_every_gate_status(self) -> None:
        self.assertEqual(set(QualityGateStatus), set(COMMIT_STATE_BY_GATE_STATUS))

    def test_mapping_table(self) -> None:
        self.assertEqual("success", to_commit_state(QualityGateStatus.OK).value)
        self.assertEqual("success", to_commit_state(QualityGateStatus.WARN).value)
        self.assertEqual("failure", to_commit_state(QualityGateStatus.ERROR).value)
        self.assertIs(CommitState.ERROR, to_commit_state(QualityGateStatus.NONE))


class TestBuildStatusPayload(unittest.TestCase):
    def test_error_gate_payload(self) -> None:
        payload = build_status_payload(QualityGateStatus.ERROR, _options())
        self.assertEqual(
            {
                "state": "failure",
                "target_url": "https://sonarcloud.io/dashboard?id=abc",
                "description": "Quality gate status: ERROR",
                "context": "Sonar Cloud",
            },
            payload,
        )

    def test_target_url_follows_sonar_host(self) -> None:
        payload = build_status_payload(
            QualityGateStatus.OK, _options(sonar_url="https://sonar.example.com")
        )
        self.assertEqual("https://sonar.example.com/dashboard?id=abc", payload["target_url"])

    def test_analysis_only_run_links_bare_dashboard(self) -> None:
        payload = build_status_payload(
            QualityGateStatus.OK, _options(project_key=None, analysis_id="AX1")
        )
        self.assertEqual("https://sonarcloud.io/dashboard", payload["target_url"])


class TestPublishStatus(unittest.TestCase):
    def test_post_request_shape(self) -> None:
        session = requests.Session()
        with patch.object(session, "send", return_value=_response(201, '{"id": 1}')) as send:
            body = publish_status(QualityGateStatus.OK, _options(), session)

        self.assertEqual('{"id": 1}', body)
        prepared = send.call_args.args[0]
        self.assertEqual("POST", prepared.method)
        self.assertEqual("https://api.github.com/repos/o/r/statuses/deadbeef", prepared.url)
        self.assertEqual("Basic dTp0", prepared.headers["Authorization"])
        self.assertEqual("application/vnd.github+json", prepared.headers["Accept"])
        self.assertEqual("application/json", prepared.headers["Content-Type"])
        self.assertEqual("success", json.loads(prepared.body)["state"])

    def test_custom_api_url(self) -> None:
        session = requests.Session()
        opts = _options(github_api_url="https://ghe.example.com/api/v3")
        with patch.object(session, "send", return_value=_response(201, "{}")) as send:
            publish_status(QualityGateStatus.WARN, opts, session)
        self.assertEqual(
            "https://ghe.example.com/api/v3/repos/o/r/statuses/deadbeef",
            send.call_args.args[0].url,
        )

    def test_path_segments_are_quoted(self) -> None:
        session = requests.Session()
        opts = _options(repo_name="r/x", sha="dead?beef")
        with patch.object(session, "send", return_value=_response(201, "{}")) as send:
            publish_status(QualityGateStatus.OK, opts, session)
        self.assertEqual(
            "https://api.github.com/repos/o/r%2Fx/statuses/dead%3Fbeef",
            send.call_args.args[0].url,
        )

    def test_http_error_is_transport_failure(self) -> None:
        session = requests.Session()
        with patch.object(session, "send", return_value=_response(401, '{"message":"Bad credentials"}')):
            with self.assertRaises(PublishTransportError) as ctx:
                publish_status(QualityGateStatus.OK, _options(), session)
        self.assertIn("401", str(ctx.exception))
        self.assertIn("Bad credentials", str(ctx.exception))

    def test_connection_error_is_not_retried(self) -> None:
        session = requests.Session()
        with patch.object(session, "send", side_effect=requests.Timeout("read timed out")) as send:
            with self.assertRaises(PublishTransportError):
                publish_status(QualityGateStatus.OK, _options(), session)
        self.assertEqual(1, send.call_count)


if __name__ == "__main__":
    unittest.main()
