"""
Central configuration for the SEO audit service.
All tuneable constants live here. Override via environment variables.
"""
import os


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# ---------------------------------------------------------------------------
# HTTP / Network
# ---------------------------------------------------------------------------
# Seconds before a single page request is abandoned
FETCH_TIMEOUT: int = int(os.getenv("SEO_FETCH_TIMEOUT", 10))

# Maximum redirect hops followed (each hop is re-validated)
MAX_REDIRECTS: int = int(os.getenv("SEO_MAX_REDIRECTS", 5))

USER_AGENT: str = os.getenv("SEO_USER_AGENT", "SEO-Analyzer/1.0")

# Response bodies beyond this many characters are truncated before parsing
MAX_HTML_CHARS: int = int(os.getenv("SEO_MAX_HTML_CHARS", 2_000_000))

# ---------------------------------------------------------------------------
# SSRF hardening
# ---------------------------------------------------------------------------
# Resolve hostnames and reject private/loopback addresses before each hop
RESOLVE_DNS: bool = _env_bool("SEO_RESOLVE_DNS", False)
