"""Keyword-rule signal detection over sanitised website text and its links."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from vcscout.core.models import Signal

WEBSITE_SOURCE = "website"


@dataclass(frozen=True)
class SignalRule:
    """One row of the detection table."""

    signal_type: str
    confidence: float
    detail: str
    triggers: Tuple[str, ...] = ()
    extra_match: Optional[Callable[[str], bool]] = None

    def matches(self, text_lower: str) -> bool:
        if any(trigger in text_lower for trigger in self.triggers):
            return True
        return bool(self.extra_match and self.extra_match(text_lower))


def _plans_with_prices(text_lower: str) -> bool:
    return "plans" in text_lower and "$" in text_lower


# Emission order follows this table.
SIGNAL_RULES: Tuple[SignalRule, ...] = (
    SignalRule(
        "Hiring Activity",
        0.95,
        "Careers page or hiring call-to-action found on website",
        ("/careers", "join our team", "we're hiring"),
    ),
    SignalRule(
        "Content Engine",
        0.90,
        "Blog or resource hub suggests an active content strategy",
        ("/blog", "latest posts", "insights", "resources"),
    ),
    SignalRule(
        "Commercial Intent",
        0.90,
        "Public pricing suggests a self-serve commercial motion",
        ("/pricing", "pricing page"),
        _plans_with_prices,
    ),
    SignalRule(
        "Developer Focus",
        0.85,
        "Developer docs, API reference or SDK advertised",
        ("docs.", "/docs", "api reference", "sdk"),
    ),
    SignalRule(
        "Community Building",
        0.80,
        "Community channels (Discord, Slack, GitHub) promoted",
        ("discord", "community", "slack", "github"),
    ),
    SignalRule(
        "Product Maturity",
        0.85,
        "Changelog, roadmap or release notes published",
        ("changelog", "roadmap", "releases"),
    ),
)


def detect_website_signals(
    text: str, timestamp: str, links: Optional[Sequence[str]] = None
) -> List[Signal]:
    """
    Return one ``Signal`` per matching rule, in rule-table order.

    ``links`` are the page's ``href`` targets; path triggers such as
    ``/careers`` usually only appear there once markup is stripped.
    """
    if not text and not links:
        return []

    text_lower = "\n".join([text or "", *(links or ())]).lower()
    return [
        Signal(
            type=rule.signal_type,
            confidence=rule.confidence,
            timestamp=timestamp,
            detail=rule.detail,
            source=WEBSITE_SOURCE,
        )
        for rule in SIGNAL_RULES
        if rule.matches(text_lower)
    ]
