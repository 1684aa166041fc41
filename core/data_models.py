from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


Severity = Literal["critical", "warning", "info"]
HealthStatus = Literal["excellent", "good", "fair", "poor"]


class _WireModel(BaseModel):
    # Python code uses snake_case; JSON uses the camelCase aliases.
    model_config = ConfigDict(populate_by_name=True)


# ------------------------------------------------------------
# Extraction
# ------------------------------------------------------------
class PageMetadata(_WireModel):
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None
    og_image: Optional[str] = Field(default=None, alias="ogImage")
    og_title: Optional[str] = Field(default=None, alias="ogTitle")
    og_description: Optional[str] = Field(default=None, alias="ogDescription")
    canonical: Optional[str] = None
    robots: Optional[str] = None
    lang: Optional[str] = None


class PageStructure(BaseModel):
    """Tag counts the scorers need, gathered in one parse of the page."""
    h1_count: int = 0
    h2_count: int = 0
    image_count: int = 0
    images_missing_alt: int = 0
    inline_scripts: int = 0
    external_scripts: int = 0
    async_or_defer_scripts: int = 0
    style_blocks: int = 0
    has_viewport: bool = False
    # computed for reporting only; not part of the mobile score
    has_responsive_hints: bool = False


# ------------------------------------------------------------
# Scoring
# ------------------------------------------------------------
class SEOIssue(_WireModel):
    severity: Severity
    category: str
    message: str
    element: Optional[str] = None


class ScoreBreakdown(_WireModel):
    meta_tags: int = Field(ge=0, le=100, alias="metaTags")
    headings: int = Field(ge=0, le=100)
    images: int = Field(ge=0, le=100)
    performance: int = Field(ge=0, le=100)
    mobile: int = Field(ge=0, le=100)
    ssl: int = Field(ge=0, le=100)

    def as_list(self) -> List[int]:
        return [self.meta_tags, self.headings, self.images, self.ssl, self.mobile, self.performance]


class SEOScore(_WireModel):
    overall: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    issues: List[SEOIssue] = []
    recommendations: List[str] = []

    @property
    def critical_issue_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "critical")


class HealthCheck(_WireModel):
    score: int = Field(ge=0, le=100)
    status: HealthStatus
    critical_issues: int = Field(ge=0, alias="criticalIssues")
