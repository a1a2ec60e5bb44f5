"""Analysis pipeline: validate URL -> fetch page -> extract tags -> score.

Stateless: every call builds its result from scratch. Network access goes
through the injected `resolver` and `session`, so callers (and tests) can
swap in their own collaborators.
"""

import logging

import requests

from errors import AnalysisError
from schemas import AnalyzeResponse
from scoring import score_analysis
from scraper import extract_metadata, fetch_page
from url_guard import Resolver, resolve_host, validate_url

logger = logging.getLogger(__name__)


def analyze_url(
    url: str,
    resolver: Resolver = resolve_host,
    session: requests.Session | None = None,
) -> AnalyzeResponse:
    """
    Run the full pipeline for `url`.

    Raises AnalysisError (or a subclass) on any failure; unexpected
    exceptions are wrapped into the base AnalysisError.
    """
    logger.info("Analyzing %s", url)
    try:
        validate_url(url, resolver=resolver)
        page = fetch_page(url, session=session)
        analysis = extract_metadata(page["html"], page["final_url"])
        issues, score = score_analysis(analysis)
    except AnalysisError as exc:
        logger.warning("Analysis of %s failed: %s", url, exc.message)
        raise
    except Exception as exc:
        logger.exception("Unexpected error while analyzing %s", url)
        raise AnalysisError(str(exc) or None) from exc

    logger.info("Analyzed %s (final URL %s): overall score %d", url, analysis.url, score.overall)
    return AnalyzeResponse(analysis=analysis, score=score, issues=issues)
