import os

from dotenv import load_dotenv
from fastapi import FastAPI
from loguru import logger

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
load_dotenv(os.path.join(BASE_DIR, ".env"))

from core.seo_service import SEOService  # noqa: E402
from utils.error_utils import GENERIC_ANALYSIS_ERROR, SEOAnalysisError, URLValidationError  # noqa: E402

from .schemas import HealthCheckOutput, SEOAuditInput, SEOAuditOutput  # noqa: E402

app = FastAPI(title="MCP SEO Audit", version="1.0.0")


@app.post("/run", response_model=SEOAuditOutput)
def run_seo_audit(payload: SEOAuditInput) -> SEOAuditOutput:
    """Fetch the site and return the full SEO score breakdown."""
    logger.info("mcp_seo_audit: received /run for url={}", payload.url)
    try:
        score = SEOService(payload.url).analyze_seo()
        return SEOAuditOutput(success=True, url=payload.url, score=score)
    except URLValidationError as exc:
        logger.warning("mcp_seo_audit: rejected url={}: {}", payload.url, exc)
        return SEOAuditOutput(success=False, url=payload.url, error=str(exc))
    except SEOAnalysisError as exc:
        return SEOAuditOutput(success=False, url=payload.url, error=str(exc))
    except Exception:  # noqa: BLE001
        logger.exception("mcp_seo_audit: unhandled error")
        return SEOAuditOutput(success=False, url=payload.url, error=GENERIC_ANALYSIS_ERROR)


@app.post("/health", response_model=HealthCheckOutput)
def run_health_check(payload: SEOAuditInput) -> HealthCheckOutput:
    """Score, status label and critical-issue count for the site."""
    logger.info("mcp_seo_audit: received /health for url={}", payload.url)
    try:
        health = SEOService(payload.url).get_health_check()
        return HealthCheckOutput(success=True, url=payload.url, health=health)
    except URLValidationError as exc:
        logger.warning("mcp_seo_audit: rejected url={}: {}", payload.url, exc)
        return HealthCheckOutput(success=False, url=payload.url, error=str(exc))
    except SEOAnalysisError as exc:
        return HealthCheckOutput(success=False, url=payload.url, error=str(exc))
    except Exception:  # noqa: BLE001
        logger.exception("mcp_seo_audit: unhandled error")
        return HealthCheckOutput(success=False, url=payload.url, error=GENERIC_ANALYSIS_ERROR)
