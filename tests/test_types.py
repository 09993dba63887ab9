import unittest

from sonar_github.http import redact_header
from sonar_github.types import InvocationOptions, redact


class TestRedaction(unittest.TestCase):
    def test_redact_keeps_at_most_last_four_characters(self) -> None:
        self.assertIsNone(redact(None))
        self.assertEqual("****", redact("short"))
        self.assertEqual("****5678", redact("ghp_abcdefgh12345678"))

    def test_options_repr_hides_tokens(self) -> None:
        opts = InvocationOptions(
            repo_owner="o",
            repo_name="r",
            sha="deadbeef",
            github_user="u",
            github_token="ghp_abcdefgh12345678",
            project_key="abc",
            sonar_token="squ_0123456789abcdef",
        )
        text = repr(opts)
        self.assertEqual(text, str(opts))
        self.assertNotIn("ghp_abcdefgh12345678", text)
        self.assertNotIn("squ_0123456789abcdef", text)
        self.assertIn("github_token='****5678'", text)
        self.assertIn("repo=o/r", text)

    def test_dashboard_url(self) -> None:
        opts = InvocationOptions(
            repo_owner="o",
            repo_name="r",
            sha="s",
            github_user="u",
            github_token="t",
            sonar_url="https://sonar.example.com/",
        )
        self.assertEqual("https://sonar.example.com/dashboard", opts.dashboard_url)

    def test_redact_header(self) -> None:
        self.assertEqual("Basic ****", redact_header("Authorization", "Basic dTp0"))
        self.assertEqual("****", redact_header("authorization", "token"))
        self.assertEqual("application/json", redact_header("Accept", "application/json"))


if __name__ == "__main__":
    unittest.main()
