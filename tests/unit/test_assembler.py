"""Response Assembler: result markers and header hygiene."""

from customization import RewriteOutcome
from proxy.assembler import assemble_headers
from store import Personality

PIRATE = Personality(id="funny-pirate", name="Funny Pirate", prompt="Arr.")

UPSTREAM = [
    ("Content-Type", "text/html; charset=utf-8"),
    ("Content-Length", "120"),
    ("Content-Encoding", "gzip"),
    ("Transfer-Encoding", "chunked"),
    ("Cache-Control", "public, max-age=60"),
    ("Set-Cookie", "a=1"),
    ("Set-Cookie", "b=2"),
]


class TestPassThrough:

    def test_marks_not_customized_and_keeps_body_headers(self):
        headers = assemble_headers(UPSTREAM)

        assert headers["x-customized"] == "false"
        assert headers["content-length"] == "120"
        assert headers["content-encoding"] == "gzip"
        assert "transfer-encoding" not in headers
        assert headers["cache-control"] == "public, max-age=60"
        assert headers.getlist("set-cookie") == ["a=1", "b=2"]


class TestRewritten:

    def test_customized_markers(self):
        outcome = RewriteOutcome(
            html="<p>Ahoy</p>",
            customized=True,
            personality=PIRATE,
            provider="Cerebras",
            model="gpt-oss-120b",
        )

        headers = assemble_headers(UPSTREAM, outcome)

        assert headers["x-customized"] == "true"
        assert headers["x-generative-profile"] == "funny-pirate"
        assert headers.getlist("cache-control") == ["private"]
        assert headers["x-debug"] == "provider=Cerebras; model=gpt-oss-120b"
        assert "x-errors" not in headers
        assert "content-length" not in headers
        assert "content-encoding" not in headers
        assert headers.getlist("set-cookie") == ["a=1", "b=2"]

    def test_errors_joined_without_customization(self):
        outcome = RewriteOutcome(
            html="<p>Hello</p>",
            customized=False,
            personality=PIRATE,
            errors=["Cerebras: expected 1 items but got 2", "Cloudflare Workers AI: timed out after 20.0s"],
        )

        headers = assemble_headers(UPSTREAM, outcome)

        assert headers["x-customized"] == "false"
        assert headers["x-errors"] == (
            "Cerebras: expected 1 items but got 2; Cloudflare Workers AI: timed out after 20.0s"
        )
        assert "x-generative-profile" not in headers
        assert "x-debug" not in headers
        assert headers["cache-control"] == "public, max-age=60"

    def test_multiline_error_is_flattened(self):
        outcome = RewriteOutcome(html="", errors=["Cerebras API 500: line one\nline two"])

        headers = assemble_headers(UPSTREAM, outcome)

        assert headers["x-errors"] == "Cerebras API 500: line one line two"
