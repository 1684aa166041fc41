import threading
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import NamedTuple, Optional
from urllib.parse import urljoin, urlsplit

import requests
from loguru import logger

from core import config
from utils.error_utils import FetchError
from utils.html_utils import truncate_text
from utils.url_safety import validate_resolved_host, validate_url


REDIRECT_STATUSES = range(300, 400)
CHUNK_SIZE = 1024
TIMEOUT_MESSAGE = "Request timeout: The website took too long to respond"


class _Download(NamedTuple):
    status_code: int
    location: Optional[str]
    body: str


def _decode(body: bytes, encoding: Optional[str]) -> str:
    try:
        return body.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


def _download(url: str, timeout: float, max_bytes: int, cancelled: threading.Event) -> _Download:
    """Issue one GET and stream at most ``max_bytes`` of the body."""
    resp = requests.get(
        url,
        timeout=timeout,
        allow_redirects=False,
        stream=True,
        headers={"User-Agent": config.USER_AGENT},
    )
    try:
        location = resp.headers.get("Location")
        if resp.status_code in REDIRECT_STATUSES and location:
            return _Download(resp.status_code, location, "")

        chunks = []
        size = 0
        for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
            if cancelled.is_set():
                break
            if not chunk:
                continue
            chunks.append(chunk)
            size += len(chunk)
            if size >= max_bytes:
                logger.warning("Body of {} exceeds {} bytes; truncating", url, max_bytes)
                break

        body = b"".join(chunks)[:max_bytes]
        return _Download(resp.status_code, None, _decode(body, resp.encoding))
    finally:
        resp.close()


def _download_before(url: str, deadline: float, max_bytes: int) -> _Download:
    """
    Run one hop in a worker so the whole exchange (connect, headers, body)
    is cut off at ``deadline``, not just each individual socket read.
    """
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise FetchError(TIMEOUT_MESSAGE, url=url)

    cancelled = threading.Event()
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="seo-fetch")
    try:
        future = executor.submit(_download, url, remaining, max_bytes, cancelled)
        try:
            return future.result(timeout=remaining)
        except FuturesTimeout:
            cancelled.set()
            raise FetchError(TIMEOUT_MESSAGE, url=url) from None
        except requests.Timeout as exc:
            raise FetchError(TIMEOUT_MESSAGE, url=url) from exc
        except requests.RequestException as exc:
            raise FetchError(f"Request failed for {url}: {exc}", url=url) from exc
    finally:
        executor.shutdown(wait=False)


def fetch_page(
    url: str,
    timeout: Optional[float] = None,
    max_redirects: Optional[int] = None,
    _hops: int = 0,
    _deadline: Optional[float] = None,
) -> str:
    """
    Fetch a page's HTML without letting the transport follow redirects.

    Every hop is re-validated before any request goes out; a redirect towards
    a forbidden target raises URLValidationError. ``timeout`` bounds the whole
    fetch, redirects included. Timeouts, transport errors and an exceeded hop
    cap raise FetchError. At most ``config.MAX_HTML_CHARS`` of the body is read.
    """
    timeout = config.FETCH_TIMEOUT if timeout is None else timeout
    max_redirects = config.MAX_REDIRECTS if max_redirects is None else max_redirects
    deadline = time.monotonic() + timeout if _deadline is None else _deadline

    validate_url(url)
    if config.RESOLVE_DNS:
        validate_resolved_host(urlsplit(url).hostname or "")

    logger.debug("HTTP fetch hop {} for {}", _hops, url)
    result = _download_before(url, deadline, config.MAX_HTML_CHARS)

    if result.location:
        target = urljoin(url, result.location)
        validate_url(target)
        if _hops >= max_redirects:
            raise FetchError(f"Too many redirects (>{max_redirects}) starting from {url}", url=url)
        logger.info("Following redirect {} -> {} ({})", url, target, result.status_code)
        return fetch_page(
            target,
            timeout=timeout,
            max_redirects=max_redirects,
            _hops=_hops + 1,
            _deadline=deadline,
        )

    return truncate_text(result.body, config.MAX_HTML_CHARS) or ""
