from typing import Any, Dict, Optional

from loguru import logger


GENERIC_ANALYSIS_ERROR = "Failed to analyze SEO. Please check the website URL is accessible."


class URLValidationError(ValueError):
    """Raised when a URL points somewhere the analyzer must not reach."""


class FetchError(RuntimeError):
    """Transient failure while fetching a page (timeout, transport error, redirect cap)."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class SEOAnalysisError(RuntimeError):
    """The only error callers of the analysis entry points ever see."""

    def __init__(self, message: str = GENERIC_ANALYSIS_ERROR) -> None:
        super().__init__(message)


def log_error(exc: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Error-tracking sink.

    Emits one structured loguru record carrying the exception and a context
    map such as {"context": "analyze_seo", "site_url": "..."}. The context is
    bound onto the record (``record["extra"]``) and also rendered in the
    message so plain text sinks keep it.
    """
    ctx = dict(context or {})
    logger.bind(**ctx).opt(exception=exc).error(
        "{}: {} | context={}", type(exc).__name__, exc, ctx
    )
