"""
LLM-powered structured extraction from company website text.

Sends the sanitised site content to a chat-completion model and validates
the returned JSON into a fixed shape (summary, what they do, keywords,
signals). Service failures and unparsable output raise ``ExtractionError``
so the API layer can choose a status code.
"""

from __future__ import annotations

from typing import Any, Dict, List

import openai
import structlog

from vcscout.clients.llm_client import LLMClient
from vcscout.core.exceptions import ExtractionError, ExtractionErrorKind
from vcscout.core.models import AIExtraction, Signal, clamp_confidence
from vcscout.intelligence.json_utils import extract_json_object, parse_json_object

logger = structlog.get_logger(__name__)

AI_SOURCE = "ai"
UNKNOWN_SIGNAL = "Unknown Signal"
EMPTY_CONTENT_PLACEHOLDER = "No website content available."

_SYSTEM_PROMPT = "You are a venture capital research analyst. You respond with JSON only."

_AUTH_MARKERS = (
    "api key",
    "api_key",
    "apikey",
    "authentication",
    "unauthorized",
    "invalid_api_key",
    "incorrect api key",
    "401",
)


def build_extraction_prompt(company_name: str, website_text: str) -> str:
    """Format the user instructions fed to the LLM."""
    content = website_text.strip() if website_text else ""
    return f"""You are a research analyst at a venture capital firm.
Analyze the following company based on the content of its website.

Company: {company_name}

Website content:
{content or EMPTY_CONTENT_PLACEHOLDER}

Return ONLY a JSON object matching this schema (no markdown, no extra text):
{{
  "summary": "2-3 sentence overview of the company",
  "whatTheyDo": "plain-language description of the product and who it serves",
  "keywords": ["5-10 short keywords describing sector, product and market"],
  "signals": [
    {{
      "type": "growth or risk signal name, e.g. Enterprise Traction",
      "confidence": 0.0-1.0,
      "detail": "one sentence of supporting evidence"
    }}
  ]
}}

If the website content is missing, infer cautiously from the company name,
keep confidence values low, and say so in the summary."""


def _is_auth_failure(exc: Exception) -> bool:
    if isinstance(exc, openai.AuthenticationError):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in _AUTH_MARKERS)


def _classify_call_failure(exc: Exception) -> ExtractionErrorKind:
    if isinstance(exc, openai.APITimeoutError):
        return ExtractionErrorKind.TIMEOUT
    if _is_auth_failure(exc):
        return ExtractionErrorKind.AUTH_FAILURE
    return ExtractionErrorKind.SERVICE_UNAVAILABLE


def _coerce_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _coerce_keywords(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _coerce_signals(value: Any, timestamp: str) -> List[Signal]:
    if not isinstance(value, list):
        return []

    signals = []
    for item in value:
        if not isinstance(item, dict):
            continue
        signal_type = item.get("type")
        if not isinstance(signal_type, str) or not signal_type.strip():
            signal_type = UNKNOWN_SIGNAL
        detail = item.get("detail")
        signals.append(
            Signal(
                type=signal_type.strip(),
                confidence=clamp_confidence(item.get("confidence")),
                timestamp=timestamp,
                detail=detail if isinstance(detail, str) and detail else None,
                source=AI_SOURCE,
            )
        )
    return signals


def coerce_extraction(data: Dict[str, Any], timestamp: str) -> AIExtraction:
    """Apply defaults and validation to a parsed LLM payload."""
    return AIExtraction(
        summary=_coerce_text(data.get("summary")),
        what_they_do=_coerce_text(data.get("whatTheyDo")),
        keywords=_coerce_keywords(data.get("keywords")),
        signals=_coerce_signals(data.get("signals"), timestamp),
    )


class LLMExtractor:
    """Agent that turns website text into a structured company profile."""

    def __init__(self, llm_client: LLMClient) -> None:
        self.llm = llm_client

    @property
    def model(self) -> str:
        return self.llm.model

    def extract(self, company_name: str, website_text: str, timestamp: str) -> AIExtraction:
        """Run the extraction prompt and return the validated payload."""
        prompt = build_extraction_prompt(company_name, website_text)
        messages = [
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        json_mode = self.llm.json_mode
        logger.info(
            "llm_extraction_started",
            company=company_name,
            model=self.llm.model,
            content_chars=len(website_text or ""),
            json_mode=json_mode,
        )

        try:
            raw_text = self.llm.run_chat(
                messages,
                response_format={"type": "json_object"} if json_mode else None,
            )
        except Exception as exc:  # noqa: BLE001
            kind = _classify_call_failure(exc)
            logger.error(
                "llm_extraction_call_failed",
                company=company_name,
                model=self.llm.model,
                kind=kind.value,
                error=str(exc),
            )
            raise ExtractionError(
                f"Completion service call failed: {exc}",
                kind=kind,
                details={"model": self.llm.model},
            ) from exc

        try:
            data = parse_json_object(raw_text) if json_mode else extract_json_object(raw_text)
        except ValueError as exc:
            logger.error(
                "llm_extraction_parse_failed",
                company=company_name,
                error=str(exc),
                preview=(raw_text or "")[:200],
            )
            raise ExtractionError(
                "Failed to parse AI response",
                kind=ExtractionErrorKind.PARSE_FAILURE,
                details={"payload": (raw_text or "")[:500]},
            ) from exc

        extraction = coerce_extraction(data, timestamp)
        logger.info(
            "llm_extraction_completed",
            company=company_name,
            keywords=len(extraction.keywords),
            signals=len(extraction.signals),
        )
        return extraction
