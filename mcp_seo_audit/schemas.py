from typing import Optional

from pydantic import BaseModel

from core.data_models import HealthCheck, SEOScore


class SEOAuditInput(BaseModel):
    """Input for the SEO audit MCP."""
    url: str


class SEOAuditOutput(BaseModel):
    """Full analysis result."""
    success: bool
    url: str
    score: Optional[SEOScore] = None
    error: Optional[str] = None


class HealthCheckOutput(BaseModel):
    """Reduced health view of an analysis."""
    success: bool
    url: str
    health: Optional[HealthCheck] = None
    error: Optional[str] = None
