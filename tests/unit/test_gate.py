"""Rewrite Gate: all three conditions required, each one alone blocks."""

import pytest

from proxy.gate import should_rewrite

ENABLED = {"x-generative-enabled": "1"}
HTML = {"content-type": "text/html; charset=utf-8"}


class TestShouldRewrite:

    def test_eligible(self):
        assert should_rewrite("GET", ENABLED, HTML) is True

    @pytest.mark.parametrize("value", ["1", "true"])
    def test_truthy_values(self, value):
        assert should_rewrite("GET", {"x-generative-enabled": value}, HTML) is True

    @pytest.mark.parametrize("method", ["POST", "HEAD", "PUT", "get"])
    def test_non_get_blocks(self, method):
        assert should_rewrite(method, ENABLED, HTML) is False

    @pytest.mark.parametrize("value", [None, "", "0", "false", "yes", "TRUE"])
    def test_missing_or_falsy_header_blocks(self, value):
        headers = {} if value is None else {"x-generative-enabled": value}
        assert should_rewrite("GET", headers, HTML) is False

    @pytest.mark.parametrize("content_type", [None, "application/json", "text/plain", "image/png"])
    def test_non_html_blocks(self, content_type):
        headers = {} if content_type is None else {"content-type": content_type}
        assert should_rewrite("GET", ENABLED, headers) is False
