"""Pydantic schemas for API request/response."""

import re
from enum import Enum
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

_INVALID_HOST_CHARS = re.compile(r"[\s<>\"{}|\\^`]")


class _CamelModel(BaseModel):
    """Read-only model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AnalyzeRequest(BaseModel):
    """Request body for POST /api/analyze."""

    url: str

    @field_validator("url", mode="before")
    @classmethod
    def validate_url_syntax(cls, value: object) -> str:
        if not isinstance(value, str):
            raise ValueError("URL must be a string")

        normalized = value.strip()
        if not normalized:
            raise ValueError("URL is required")

        try:
            parsed = urlparse(normalized)
        except ValueError as exc:
            raise ValueError("Invalid URL format") from exc

        if not parsed.scheme or not (parsed.netloc or parsed.path):
            raise ValueError("Invalid URL format")
        if _INVALID_HOST_CHARS.search(parsed.netloc):
            raise ValueError("Invalid URL format")
        return normalized


class SeoAnalysis(_CamelModel):
    """Raw tag values extracted from one page. Absent tags stay None."""

    url: str
    title: str | None = None
    description: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    og_type: str | None = None
    twitter_card: str | None = None
    twitter_title: str | None = None
    twitter_description: str | None = None
    twitter_image: str | None = None
    canonical: str | None = None
    robots: str | None = None
    viewport: str | None = None


class IssueType(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"


class IssueCategory(str, Enum):
    BASIC = "Basic Meta Tags"
    OPEN_GRAPH = "Open Graph Tags"
    TWITTER = "Twitter Cards"
    TECHNICAL = "Technical Tags"


class SeoIssue(_CamelModel):
    """Single finding produced by a scoring rule."""

    type: IssueType
    category: IssueCategory
    message: str
    tag: str | None = None
    recommendation: str | None = None


class CategoryScores(_CamelModel):
    basic: int = 0
    open_graph: int = 0
    twitter: int = 0
    technical: int = 0


class SeoScore(_CamelModel):
    """Per-category points plus their rounded mean."""

    overall: int
    categories: CategoryScores


class AnalyzeResponse(_CamelModel):
    """Response for POST /api/analyze."""

    analysis: SeoAnalysis
    score: SeoScore
    issues: list[SeoIssue]


class ErrorResponse(BaseModel):
    """Body of every non-200 answer."""

    error: str
