"""
Heuristic SEO scorers.

Each check starts from 100, subtracts fixed penalties and never goes below 0.
Findings are appended to the caller's ``issues`` / ``recommendations`` lists,
so their order is the order the checks ran in.
"""

import math
from typing import List

from loguru import logger

from core.data_models import HealthStatus, PageMetadata, PageStructure, ScoreBreakdown, SEOIssue


TITLE_MIN, TITLE_MAX = 30, 60
DESCRIPTION_MIN, DESCRIPTION_MAX = 120, 160
MAX_INLINE_SCRIPTS = 3
MAX_STYLE_BLOCKS = 2


def _issue(issues: List[SEOIssue], severity: str, category: str, message: str, element: str) -> None:
    issues.append(SEOIssue(severity=severity, category=category, message=message, element=element))


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------
def check_meta_tags(metadata: PageMetadata, issues: List[SEOIssue], recommendations: List[str]) -> int:
    score = 100

    if not metadata.title:
        score -= 25
        _issue(issues, "critical", "Meta Tags", "Missing page title", "<title>")
        recommendations.append("Add a descriptive title tag (50-60 characters)")
    elif len(metadata.title) < TITLE_MIN or len(metadata.title) > TITLE_MAX:
        score -= 10
        _issue(
            issues,
            "warning",
            "Meta Tags",
            f"Title length ({len(metadata.title)}) is not optimal (recommended: 50-60 characters)",
            "<title>",
        )

    if not metadata.description:
        score -= 20
        _issue(issues, "critical", "Meta Tags", "Missing meta description", '<meta name="description">')
        recommendations.append("Add a meta description (150-160 characters)")
    elif len(metadata.description) < DESCRIPTION_MIN or len(metadata.description) > DESCRIPTION_MAX:
        score -= 10
        _issue(
            issues,
            "warning",
            "Meta Tags",
            f"Description length ({len(metadata.description)}) is not optimal "
            "(recommended: 150-160 characters)",
            '<meta name="description">',
        )

    if not metadata.og_image:
        score -= 15
        _issue(
            issues,
            "warning",
            "Social Media",
            "Missing Open Graph image for social media sharing",
            '<meta property="og:image">',
        )
        recommendations.append("Add Open Graph meta tags for better social media sharing")

    if not metadata.canonical:
        score -= 10
        _issue(issues, "info", "Meta Tags", "Missing canonical URL", '<link rel="canonical">')

    return max(0, score)


def check_headings(structure: PageStructure, issues: List[SEOIssue], recommendations: List[str]) -> int:
    score = 100
    h1_count = structure.h1_count

    if h1_count == 0:
        score -= 30
        _issue(issues, "critical", "Headings", "Missing H1 heading", "<h1>")
        recommendations.append("Add one H1 heading per page with main keyword")
    elif h1_count > 1:
        score -= 20
        _issue(
            issues,
            "warning",
            "Headings",
            f"Multiple H1 headings found ({h1_count}). Should have only one.",
            "<h1>",
        )

    if structure.h2_count == 0:
        score -= 10
        _issue(
            issues,
            "info",
            "Headings",
            "No H2 headings found. Consider using heading hierarchy.",
            "<h2>",
        )
        recommendations.append("Use H2 subheadings to build a clear heading hierarchy")

    return max(0, score)


def check_images(structure: PageStructure, issues: List[SEOIssue], recommendations: List[str]) -> int:
    score = 100
    missing = structure.images_missing_alt

    if missing > 0:
        score -= 20
        _issue(issues, "warning", "Images", f"{missing} images missing alt text", "<img>")
        recommendations.append("Add descriptive alt text to all images for accessibility and SEO")

    return max(0, score)


def check_ssl(url: str, issues: List[SEOIssue], recommendations: List[str]) -> int:
    if url.startswith("https://"):
        return 100

    _issue(issues, "critical", "Security", "Website is not using HTTPS", "SSL Certificate")
    recommendations.append("Enable HTTPS with SSL certificate for security and SEO")
    return 0


def check_mobile(structure: PageStructure, issues: List[SEOIssue], recommendations: List[str]) -> int:
    score = 100

    if not structure.has_viewport:
        score -= 50
        _issue(issues, "critical", "Mobile", "Missing viewport meta tag", '<meta name="viewport">')
        recommendations.append("Add viewport meta tag for mobile responsiveness")

    # Informational only: responsive hints never change the mobile score.
    logger.debug("Responsive hints present: {}", structure.has_responsive_hints)

    return max(0, score)


def check_performance(structure: PageStructure, issues: List[SEOIssue], recommendations: List[str]) -> int:
    score = 100

    inline = structure.inline_scripts
    if inline > MAX_INLINE_SCRIPTS:
        score -= 15
        _issue(
            issues,
            "warning",
            "Performance",
            f"{inline} inline scripts found. Consider moving to external files.",
            "<script>",
        )
        recommendations.append("Minimize inline scripts to improve page load performance")

    styles = structure.style_blocks
    if styles > MAX_STYLE_BLOCKS:
        score -= 10
        _issue(
            issues,
            "info",
            "Performance",
            f"{styles} inline style blocks found. Consider using external CSS.",
            "<style>",
        )

    if structure.external_scripts > 0 and structure.async_or_defer_scripts == 0:
        score -= 20
        _issue(
            issues,
            "warning",
            "Performance",
            "Scripts are not using async or defer attributes",
            "<script>",
        )
        recommendations.append("Add async or defer attributes to script tags for better performance")

    return max(0, score)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------
def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def overall_score(breakdown: ScoreBreakdown) -> int:
    """Unweighted mean of the six sub-scores."""
    values = breakdown.as_list()
    return round_half_up(sum(values) / len(values))


def classify_health(score: int) -> HealthStatus:
    if score >= 90:
        return "excellent"
    if score >= 75:
        return "good"
    if score >= 60:
        return "fair"
    return "poor"
