"""Tests for website fetching and HTML sanitising."""

import pytest
import requests

from vcscout.core.config import FetchConfig
from vcscout.intelligence.content_fetcher import (
    ContentFetcher,
    extract_links,
    normalize_website_url,
    sanitize_html,
)
from tests.sample_data import ACME_HTML, html_response


class TestSanitizeHtml:
    """Validate the HTML to plain-text reduction."""

    def test_removes_script_content(self):
        html = "<p>Before</p><script type='text/javascript'>var token = 'abc123';</script><p>After</p>"
        text = sanitize_html(html)
        assert "abc123" not in text
        assert "token" not in text
        assert text == "Before After"

    def test_removes_multiline_script_and_style_blocks(self):
        html = """
        <SCRIPT>
            function track() { return "hidden-value"; }
        </SCRIPT>
        <style media="screen">.hero { display: none; }</style>
        <div>Visible copy</div>
        """
        text = sanitize_html(html)
        assert "hidden-value" not in text
        assert ".hero" not in text
        assert text == "Visible copy"

    def test_removes_comments_and_tags(self):
        html = "<!-- internal note --><h1 class='x'>Acme</h1><p>Builds <b>tools</b></p>"
        assert sanitize_html(html) == "Acme Builds tools"

    def test_collapses_whitespace_and_trims(self):
        html = "  <p>one\n\n   two</p>\t<p>three</p>  "
        assert sanitize_html(html) == "one two three"

    def test_decodes_entities(self):
        assert sanitize_html("<p>R&amp;D &nbsp;team</p>") == "R&D team"

    @pytest.mark.parametrize("budget", [0, 1, 10, 50])
    def test_output_never_exceeds_budget(self, budget):
        text = sanitize_html("<p>" + "word " * 100 + "</p>", max_chars=budget)
        assert len(text) <= budget

    def test_truncation_is_a_hard_cut(self):
        assert sanitize_html("<p>abcdefghij</p>", max_chars=4) == "abcd"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input(self, value):
        assert sanitize_html(value) == ""


class TestExtractLinks:
    """Validate href collection from raw markup."""

    def test_collects_hrefs_in_document_order(self):
        html = (
            "<nav><a href=\"/careers\">Jobs</a> <A HREF='/pricing'>Plans</A>"
            " <a href=\"/careers\">Again</a></nav>"
        )
        assert extract_links(html) == ["/careers", "/pricing"]

    def test_ignores_scripts_and_comments(self):
        html = (
            "<script>el.innerHTML = '<a href=\"/docs\">x</a>';</script>"
            "<!-- <a href=\"/blog\">old</a> -->"
            "<a href=\"https://acme.com/?a=1&amp;b=2\">Home</a>"
        )
        assert extract_links(html) == ["https://acme.com/?a=1&b=2"]

    @pytest.mark.parametrize("value", [None, "", "<p>no links here</p>"])
    def test_no_links(self, value):
        assert extract_links(value) == []


class TestNormalizeWebsiteUrl:
    def test_adds_https_scheme(self):
        assert normalize_website_url("acme.com") == "https://acme.com"

    def test_keeps_existing_scheme(self):
        assert normalize_website_url("http://acme.com/about") == "http://acme.com/about"
        assert normalize_website_url("HTTPS://acme.com") == "HTTPS://acme.com"

    def test_strips_surrounding_whitespace(self):
        assert normalize_website_url("  acme.com ") == "https://acme.com"


class TestContentFetcher:
    """Validate fetch behaviour and the degrade-to-empty policy."""

    def test_fetch_returns_sanitised_text(self, fetcher, http_session):
        text = fetcher.fetch("acme.com")

        assert "Acme builds AI infrastructure for enterprises" in text
        assert "do-not-leak" not in text
        assert fetcher.calls == 1

        args, kwargs = http_session.get.call_args
        assert args[0] == "https://acme.com"
        assert kwargs["timeout"] == 10.0
        assert "VCScoutBot" in kwargs["headers"]["User-Agent"]

    def test_fetch_content_keeps_links_out_of_text(self, fetcher):
        page = fetcher.fetch_content("acme.com")

        assert page.links == ["/careers", "/pricing"]
        assert "/careers" not in page.text
        assert page.text == fetcher.fetch("acme.com")

    def test_failed_fetch_has_no_links(self, http_session):
        http_session.get.side_effect = requests.ConnectionError("connection refused")
        page = ContentFetcher(FetchConfig(), session=http_session).fetch_content("acme.com")

        assert page.text == ""
        assert page.links == []

    def test_fetch_respects_character_budget(self, http_session):
        fetcher = ContentFetcher(FetchConfig(max_chars=20), session=http_session)
        assert len(fetcher.fetch("acme.com")) <= 20

    @pytest.mark.parametrize(
        "error",
        [
            requests.ConnectionError("connection refused"),
            requests.Timeout("read timed out"),
            requests.TooManyRedirects("redirect loop"),
        ],
    )
    def test_network_errors_degrade_to_empty_string(self, http_session, error):
        http_session.get.side_effect = error
        fetcher = ContentFetcher(FetchConfig(), session=http_session)

        assert fetcher.fetch("acme.com") == ""
        assert fetcher.calls == 1

    @pytest.mark.parametrize("status_code", [403, 404, 500, 503])
    def test_non_2xx_degrades_to_empty_string(self, http_session, status_code):
        http_session.get.return_value = html_response(ACME_HTML, status_code=status_code)
        fetcher = ContentFetcher(FetchConfig(), session=http_session)

        assert fetcher.fetch("acme.com") == ""

    def test_blank_website_makes_no_request(self, fetcher, http_session):
        assert fetcher.fetch("   ") == ""
        assert fetcher.calls == 0
        http_session.get.assert_not_called()

    def test_default_session_sends_bot_user_agent(self):
        fetcher = ContentFetcher(FetchConfig(user_agent="TestBot/9"))
        try:
            assert fetcher.session.headers["User-Agent"] == "TestBot/9"
        finally:
            fetcher.close()
