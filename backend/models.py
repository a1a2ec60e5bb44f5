"""Internal types passed between pipeline stages.

API request/response shapes are in schemas.py.
Types for fetcher and rule output live here.
"""

from typing import NamedTuple, TypedDict

from schemas import SeoIssue


class FetchedPage(TypedDict):
    """Structured output from the safe fetcher."""

    html: str
    final_url: str
    status_code: int
    content_type: str


class RuleOutcome(NamedTuple):
    """Issues emitted by one scoring rule and the points it awards."""

    issues: list[SeoIssue]
    points: int
