from typing import List

from loguru import logger

from core.data_models import HealthCheck, ScoreBreakdown, SEOIssue, SEOScore
from core.seo_scoring import (
    check_headings,
    check_images,
    check_meta_tags,
    check_mobile,
    check_performance,
    check_ssl,
    classify_health,
    overall_score,
)
from utils.error_utils import FetchError, SEOAnalysisError, log_error
from utils.html_utils import extract_metadata, extract_page_structure
from utils.http_utils import fetch_page
from utils.url_safety import validate_url


class SEOService:
    """
    On-demand SEO analysis for a single site.

    The URL is validated on construction (URLValidationError propagates to the
    caller). Each analyze_seo() call performs its own fetch; nothing is cached.
    """

    def __init__(self, site_url: str) -> None:
        validate_url(site_url)
        self.site_url = site_url

    def _fetch_html(self) -> str:
        """Fetch the page, degrading any transient failure to empty content."""
        try:
            return fetch_page(self.site_url)
        except FetchError as exc:
            log_error(exc, {"context": "fetch_page", "url": exc.url or self.site_url})
            logger.warning("Scoring {} against empty content after fetch failure", self.site_url)
            return ""

    def score_html(self, html: str) -> SEOScore:
        """Score already-fetched HTML. Pure: same HTML in, same SEOScore out."""
        issues: List[SEOIssue] = []
        recommendations: List[str] = []

        metadata = extract_metadata(html)
        structure = extract_page_structure(html)

        # Order matters: it is the order issues and recommendations are reported in.
        meta_score = check_meta_tags(metadata, issues, recommendations)
        headings_score = check_headings(structure, issues, recommendations)
        images_score = check_images(structure, issues, recommendations)
        ssl_score = check_ssl(self.site_url, issues, recommendations)
        mobile_score = check_mobile(structure, issues, recommendations)
        perf_score = check_performance(structure, issues, recommendations)

        breakdown = ScoreBreakdown(
            meta_tags=meta_score,
            headings=headings_score,
            images=images_score,
            performance=perf_score,
            mobile=mobile_score,
            ssl=ssl_score,
        )

        return SEOScore(
            overall=overall_score(breakdown),
            breakdown=breakdown,
            issues=issues,
            recommendations=recommendations,
        )

    def analyze_seo(self) -> SEOScore:
        """Fetch the site and score it. Failures surface only as SEOAnalysisError."""
        try:
            logger.info("Analyzing SEO for {}", self.site_url)
            html = self._fetch_html()
            result = self.score_html(html)
            logger.info(
                "SEO analysis for {} done: overall={}, issues={}",
                self.site_url,
                result.overall,
                len(result.issues),
            )
            return result
        except Exception as exc:  # noqa: BLE001
            log_error(exc, {"context": "analyze_seo", "site_url": self.site_url})
            raise SEOAnalysisError() from None

    def get_health_check(self) -> HealthCheck:
        seo_score = self.analyze_seo()
        return HealthCheck(
            score=seo_score.overall,
            status=classify_health(seo_score.overall),
            critical_issues=seo_score.critical_issue_count,
        )
