"""Tests for keyword-rule website signals."""

import pytest

from vcscout.intelligence.content_fetcher import extract_links, sanitize_html
from vcscout.intelligence.signal_detector import SIGNAL_RULES, detect_website_signals

TS = "2024-05-01T12:00:00.000Z"


def _types(signals):
    return [signal.type for signal in signals]


def test_careers_and_pricing_emit_hiring_and_commercial_signals():
    """Both rules fire with their fixed confidences and the website source tag."""
    signals = detect_website_signals("Visit /careers and compare tiers on /pricing", TS)

    by_type = {signal.type: signal for signal in signals}
    assert by_type["Hiring Activity"].confidence == 0.95
    assert by_type["Commercial Intent"].confidence == 0.90
    assert all(signal.source == "website" for signal in signals)
    assert all(signal.timestamp == TS for signal in signals)
    assert all(signal.detail for signal in signals)


def test_matching_is_case_insensitive():
    signals = detect_website_signals("WE'RE HIRING across Engineering", TS)
    assert _types(signals) == ["Hiring Activity"]


def test_emission_follows_rule_table_order():
    text = (
        "Roadmap and changelog. Join our Discord community. "
        "Read the API reference and SDK docs. See /pricing. Latest posts on /blog. Join our team."
    )
    assert _types(detect_website_signals(text, TS)) == [rule.signal_type for rule in SIGNAL_RULES]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Team plans start at $49/month", ["Commercial Intent"]),
        ("Flexible plans for every team", []),
        ("Costs $10", []),
        ("Read our insights", ["Content Engine"]),
        ("docs.acme.com", ["Developer Focus"]),
        ("Star us on GitHub", ["Community Building"]),
        ("Release notes: see releases", ["Product Maturity"]),
    ],
)
def test_individual_rules(text, expected):
    assert _types(detect_website_signals(text, TS)) == expected


def test_detection_is_pure_and_order_stable():
    text = "Join our team. /docs. Slack community. /pricing"
    first = detect_website_signals(text, TS)
    second = detect_website_signals(text, TS)
    assert first == second


@pytest.mark.parametrize("text", ["", "A company with nothing notable on its homepage"])
def test_no_matches_yields_empty_list(text):
    assert detect_website_signals(text, TS) == []


def test_paths_linked_only_through_href_still_match():
    """Navigation links lose their paths in sanitised text, so links are matched too."""
    html = '<nav><a href="/careers">Careers</a> <a href="/pricing">Pricing</a></nav>'

    assert detect_website_signals(sanitize_html(html), TS) == []
    signals = detect_website_signals(sanitize_html(html), TS, links=extract_links(html))

    assert _types(signals) == ["Hiring Activity", "Commercial Intent"]


def test_links_alone_are_enough():
    signals = detect_website_signals("", TS, links=["https://docs.acme.com/api", "/changelog"])
    assert _types(signals) == ["Developer Focus", "Product Maturity"]
