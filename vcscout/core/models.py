"""
Data models for VC Scout.

Request/response payloads for the enrichment endpoint plus the
intermediate records passed between pipeline stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import InputValidationError


class EnrichmentRequest(BaseModel):
    """Body of ``POST /api/enrich``."""

    website: Optional[str] = None
    company_name: Optional[str] = None
    thesis: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("website", "company_name", "thesis", mode="before")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError("must be a string")
        return v.strip()

    @classmethod
    def from_payload(cls, payload: dict) -> "EnrichmentRequest":
        """Validate a decoded JSON body, raising ``InputValidationError`` on bad fields."""
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            fields = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
            raise InputValidationError(
                f"Invalid request fields: {', '.join(fields)}", {"fields": fields}
            ) from exc

    def require_fields(self) -> "EnrichmentRequest":
        """Raise ``InputValidationError`` when website or company name is missing."""
        if not self.website or not self.company_name:
            raise InputValidationError(
                "Missing website or company name",
                {"website": bool(self.website), "company_name": bool(self.company_name)},
            )
        return self


class Signal(BaseModel):
    """Typed, confidence-scored observation about a company."""

    type: str
    confidence: float
    timestamp: str
    detail: Optional[str] = None
    source: Optional[str] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v):
        return clamp_confidence(v)


class ThesisMatch(BaseModel):
    score: int = Field(ge=0, le=100)
    reasons: List[str] = Field(default_factory=list)


class Source(BaseModel):
    url: str
    title: str
    timestamp: str


class EnrichmentResult(BaseModel):
    """Unit returned to callers and stored in the cache."""

    summary: str = ""
    what_they_do: str = Field(default="", alias="whatTheyDo")
    keywords: List[str] = Field(default_factory=list)
    signals: List[Signal] = Field(default_factory=list)
    thesis_match: Optional[ThesisMatch] = Field(default=None, alias="thesisMatch")
    sources: List[Source] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        """Serialise with the camelCase keys exposed over HTTP."""
        return self.model_dump(by_alias=True, exclude_none=False)


@dataclass(slots=True)
class AIExtraction:
    """Validated output of the LLM extractor."""

    summary: str = ""
    what_they_do: str = ""
    keywords: List[str] = field(default_factory=list)
    signals: List[Signal] = field(default_factory=list)


@dataclass(slots=True)
class WebsiteContent:
    """Fetched page: sanitised text for the prompt plus the link targets it carried."""

    text: str = ""
    links: List[str] = field(default_factory=list)


@dataclass(slots=True)
class CacheEntry:
    key: str
    payload: EnrichmentResult
    stored_at: datetime


def clamp_confidence(value) -> float:
    """Coerce a confidence value into ``[0, 1]``; non-numeric input becomes 0."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number:  # NaN
        return 0.0
    return max(0.0, min(1.0, number))
