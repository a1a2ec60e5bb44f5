"""Rule-based scoring of extracted SEO tags.

Each rule is a pure function SeoAnalysis -> RuleOutcome(issues, points).
Rules are grouped per score category; a category's score is the sum of
its rules' points and the overall score is the mean of the four
categories rounded half up. Issue order follows rule order below.
"""

import math
from typing import Callable

from models import RuleOutcome
from schemas import CategoryScores, IssueCategory, IssueType, SeoAnalysis, SeoIssue, SeoScore

Rule = Callable[[SeoAnalysis], RuleOutcome]

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 160
SNIPPET_LENGTH = 50


def _issue(
    type_: IssueType,
    category: IssueCategory,
    message: str,
    tag: str | None = None,
    recommendation: str | None = None,
) -> SeoIssue:
    return SeoIssue(type=type_, category=category, message=message, tag=tag, recommendation=recommendation)


def _snippet(value: str) -> str:
    return f"{value[:SNIPPET_LENGTH]}..."


# --- Basic meta tags ---


def title_rule(analysis: SeoAnalysis) -> RuleOutcome:
    title = analysis.title
    category = IssueCategory.BASIC
    if not title:
        return RuleOutcome(
            [
                _issue(
                    IssueType.ERROR,
                    category,
                    "Title tag is missing",
                    "<title>Your Page Title Here</title>",
                    "Add a unique, descriptive title tag to every page. This is crucial for SEO.",
                )
            ],
            0,
        )

    tag = f"<title>{title}</title>"
    if TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        return RuleOutcome(
            [_issue(IssueType.SUCCESS, category, "Title tag is present and optimal length", tag)],
            50,
        )
    if len(title) < TITLE_MIN_LENGTH:
        return RuleOutcome(
            [
                _issue(
                    IssueType.WARNING,
                    category,
                    "Title tag is too short",
                    tag,
                    "Aim for 30-60 characters for optimal display in search results.",
                )
            ],
            25,
        )
    return RuleOutcome(
        [
            _issue(
                IssueType.WARNING,
                category,
                "Title tag is too long",
                tag,
                "Keep title tags between 30-60 characters to avoid truncation in search results.",
            )
        ],
        25,
    )


def description_rule(analysis: SeoAnalysis) -> RuleOutcome:
    description = analysis.description
    category = IssueCategory.BASIC
    if not description:
        return RuleOutcome(
            [
                _issue(
                    IssueType.ERROR,
                    category,
                    "Meta description is missing",
                    '<meta name="description" content="Your page description here">',
                    "Add a unique meta description to every page. "
                    "Search engines often display this in results.",
                )
            ],
            0,
        )

    if DESCRIPTION_MIN_LENGTH <= len(description) <= DESCRIPTION_MAX_LENGTH:
        return RuleOutcome(
            [
                _issue(
                    IssueType.SUCCESS,
                    category,
                    "Meta description is present and optimal length",
                    f'<meta name="description" content="{_snippet(description)}">',
                )
            ],
            50,
        )
    if len(description) < DESCRIPTION_MIN_LENGTH:
        return RuleOutcome(
            [
                _issue(
                    IssueType.WARNING,
                    category,
                    "Meta description is too short",
                    f'<meta name="description" content="{description}">',
                    "Aim for 120-160 characters to maximize visibility in search results.",
                )
            ],
            30,
        )
    return RuleOutcome(
        [
            _issue(
                IssueType.WARNING,
                category,
                "Meta description is too long",
                f'<meta name="description" content="{_snippet(description)}">',
                "Keep meta descriptions between 120-160 characters to avoid truncation.",
            )
        ],
        30,
    )


# --- Open Graph ---


def og_title_rule(analysis: SeoAnalysis) -> RuleOutcome:
    category = IssueCategory.OPEN_GRAPH
    if analysis.og_title:
        return RuleOutcome(
            [
                _issue(
                    IssueType.SUCCESS,
                    category,
                    "og:title is present",
                    f'<meta property="og:title" content="{analysis.og_title}">',
                )
            ],
            33,
        )
    return RuleOutcome(
        [
            _issue(
                IssueType.WARNING,
                category,
                "og:title is missing",
                '<meta property="og:title" content="Your Title">',
                "Add Open Graph title for better social media sharing on Facebook and LinkedIn.",
            )
        ],
        0,
    )


def og_description_rule(analysis: SeoAnalysis) -> RuleOutcome:
    category = IssueCategory.OPEN_GRAPH
    if analysis.og_description:
        return RuleOutcome(
            [
                _issue(
                    IssueType.SUCCESS,
                    category,
                    "og:description is present",
                    f'<meta property="og:description" content="{_snippet(analysis.og_description)}">',
                )
            ],
            33,
        )
    return RuleOutcome(
        [
            _issue(
                IssueType.WARNING,
                category,
                "og:description is missing",
                '<meta property="og:description" content="Your description">',
                "Add Open Graph description for better context when shared on social media.",
            )
        ],
        0,
    )


def og_image_rule(analysis: SeoAnalysis) -> RuleOutcome:
    category = IssueCategory.OPEN_GRAPH
    if analysis.og_image:
        return RuleOutcome(
            [
                _issue(
                    IssueType.SUCCESS,
                    category,
                    "og:image is present",
                    f'<meta property="og:image" content="{analysis.og_image}">',
                )
            ],
            34,
        )
    return RuleOutcome(
        [
            _issue(
                IssueType.ERROR,
                category,
                "og:image is missing",
                '<meta property="og:image" content="https://example.com/image.jpg">',
                "Add an Open Graph image (1200x630px recommended) "
                "for visual appeal when shared on social media.",
            )
        ],
        0,
    )


# --- Twitter Cards ---


def twitter_card_rule(analysis: SeoAnalysis) -> RuleOutcome:
    category = IssueCategory.TWITTER
    if analysis.twitter_card:
        return RuleOutcome(
            [
                _issue(
                    IssueType.SUCCESS,
                    category,
                    "twitter:card is specified",
                    f'<meta name="twitter:card" content="{analysis.twitter_card}">',
                )
            ],
            40,
        )
    if analysis.og_image:
        return RuleOutcome(
            [
                _issue(
                    IssueType.INFO,
                    category,
                    "twitter:card not specified, but Open Graph tags will be used as fallback",
                    recommendation=(
                        "While Twitter will use og: tags as fallback, "
                        "adding dedicated twitter:card provides better control."
                    ),
                )
            ],
            20,
        )
    return RuleOutcome(
        [
            _issue(
                IssueType.WARNING,
                category,
                "twitter:card is not specified",
                '<meta name="twitter:card" content="summary_large_image">',
                'Specify a Twitter card type. Use "summary_large_image" for rich media content.',
            )
        ],
        0,
    )


def twitter_title_rule(analysis: SeoAnalysis) -> RuleOutcome:
    # An og:title fallback earns the points without an issue of its own.
    if analysis.twitter_title:
        return RuleOutcome(
            [
                _issue(
                    IssueType.SUCCESS,
                    IssueCategory.TWITTER,
                    "twitter:title is present",
                    f'<meta name="twitter:title" content="{analysis.twitter_title}">',
                )
            ],
            30,
        )
    return RuleOutcome([], 30 if analysis.og_title else 0)


def twitter_description_rule(analysis: SeoAnalysis) -> RuleOutcome:
    if analysis.twitter_description:
        return RuleOutcome(
            [
                _issue(
                    IssueType.SUCCESS,
                    IssueCategory.TWITTER,
                    "twitter:description is present",
                    f'<meta name="twitter:description" content="{analysis.twitter_description}">',
                )
            ],
            30,
        )
    return RuleOutcome([], 30 if analysis.og_description else 0)


# --- Technical ---


def viewport_rule(analysis: SeoAnalysis) -> RuleOutcome:
    category = IssueCategory.TECHNICAL
    if analysis.viewport:
        return RuleOutcome(
            [
                _issue(
                    IssueType.SUCCESS,
                    category,
                    "Viewport meta tag is properly configured",
                    f'<meta name="viewport" content="{analysis.viewport}">',
                )
            ],
            40,
        )
    return RuleOutcome(
        [
            _issue(
                IssueType.ERROR,
                category,
                "Viewport meta tag is missing",
                '<meta name="viewport" content="width=device-width, initial-scale=1">',
                "Add viewport meta tag for proper mobile rendering. This is essential for mobile SEO.",
            )
        ],
        0,
    )


def canonical_rule(analysis: SeoAnalysis) -> RuleOutcome:
    category = IssueCategory.TECHNICAL
    if analysis.canonical:
        return RuleOutcome(
            [
                _issue(
                    IssueType.SUCCESS,
                    category,
                    "Canonical URL is specified",
                    f'<link rel="canonical" href="{analysis.canonical}">',
                )
            ],
            30,
        )
    return RuleOutcome(
        [
            _issue(
                IssueType.INFO,
                category,
                "Canonical URL is not specified",
                '<link rel="canonical" href="https://example.com/page">',
                "Add canonical URL to avoid duplicate content issues, "
                "especially if you have URL parameters.",
            )
        ],
        0,
    )


def robots_rule(analysis: SeoAnalysis) -> RuleOutcome:
    category = IssueCategory.TECHNICAL
    if analysis.robots:
        return RuleOutcome(
            [
                _issue(
                    IssueType.SUCCESS,
                    category,
                    "Robots meta tag is specified",
                    f'<meta name="robots" content="{analysis.robots}">',
                )
            ],
            30,
        )
    return RuleOutcome(
        [
            _issue(
                IssueType.INFO,
                category,
                "Robots meta tag is not specified (default: index, follow)",
                recommendation=(
                    "If default behavior is desired, no action needed. "
                    "Otherwise, specify crawling directives."
                ),
            )
        ],
        0,
    )


CATEGORY_RULES: dict[str, list[Rule]] = {
    "basic": [title_rule, description_rule],
    "open_graph": [og_title_rule, og_description_rule, og_image_rule],
    "twitter": [twitter_card_rule, twitter_title_rule, twitter_description_rule],
    "technical": [viewport_rule, canonical_rule, robots_rule],
}


def overall_score(categories: CategoryScores) -> int:
    """Mean of the four category scores, rounded half up."""
    total = categories.basic + categories.open_graph + categories.twitter + categories.technical
    return int(math.floor(total / 4 + 0.5))


def score_analysis(analysis: SeoAnalysis) -> tuple[list[SeoIssue], SeoScore]:
    """Run every rule against `analysis` and return (issues, score)."""
    issues: list[SeoIssue] = []
    points: dict[str, int] = {}

    for category, rules in CATEGORY_RULES.items():
        points[category] = 0
        for rule in rules:
            outcome = rule(analysis)
            issues.extend(outcome.issues)
            points[category] += outcome.points

    categories = CategoryScores(**points)
    return issues, SeoScore(overall=overall_score(categories), categories=categories)
