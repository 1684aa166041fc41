from __future__ import annotations

import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup  # type: ignore

from core.data_models import PageMetadata, PageStructure


# Raw tag scan: an image "has alt" when `alt=` appears anywhere in its tag text.
_IMG_TAG_RE = re.compile(r"<img[^>]+>", re.IGNORECASE)


def _soup(html: Optional[str]) -> BeautifulSoup:
    # Built-in html.parser is lenient enough for broken markup and needs no lxml.
    return BeautifulSoup(html or "", "html.parser")


def _attr_text(tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        value = " ".join(value)
    return str(value)


def _first_meta_content(metas: Iterable, attr: str, key: str) -> Optional[str]:
    """First non-empty ``content`` of a <meta> whose ``attr`` equals ``key`` (case-insensitive)."""
    for tag in metas:
        if _attr_text(tag, attr).strip().lower() != key:
            continue
        content = _attr_text(tag, "content")
        if content:
            return content
    return None


def _canonical_href(soup: BeautifulSoup) -> Optional[str]:
    for link in soup.find_all("link"):
        rel = [r.lower() for r in _attr_text(link, "rel").split()]
        if "canonical" not in rel:
            continue
        href = _attr_text(link, "href")
        if href:
            return href
    return None


def extract_metadata(html: Optional[str]) -> PageMetadata:
    """
    Pull SEO metadata out of raw HTML.

    Missing tags leave the matching field as None; the first match wins.
    Values are passed through unchecked (a malformed canonical URL stays as-is).
    """
    soup = _soup(html)
    metas = soup.find_all("meta")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else None

    html_tag = soup.find("html")
    lang = _attr_text(html_tag, "lang").strip() if html_tag else ""

    return PageMetadata(
        title=title or None,
        description=_first_meta_content(metas, "name", "description"),
        keywords=_first_meta_content(metas, "name", "keywords"),
        og_title=_first_meta_content(metas, "property", "og:title"),
        og_description=_first_meta_content(metas, "property", "og:description"),
        og_image=_first_meta_content(metas, "property", "og:image"),
        canonical=_canonical_href(soup),
        robots=_first_meta_content(metas, "name", "robots"),
        lang=lang or None,
    )


def extract_page_structure(html: Optional[str]) -> PageStructure:
    """Count headings, images, scripts and styles in a single parse."""
    html = html or ""
    soup = _soup(html)

    images = _IMG_TAG_RE.findall(html)
    scripts = soup.find_all("script")
    external = [s for s in scripts if s.has_attr("src")]

    return PageStructure(
        h1_count=len(soup.find_all("h1")),
        h2_count=len(soup.find_all("h2")),
        image_count=len(images),
        images_missing_alt=sum(1 for tag in images if "alt=" not in tag.lower()),
        inline_scripts=len(scripts) - len(external),
        external_scripts=len(external),
        async_or_defer_scripts=sum(
            1 for s in scripts if s.has_attr("async") or s.has_attr("defer")
        ),
        style_blocks=len(soup.find_all("style")),
        # Raw substring checks, not tag lookups
        has_viewport="viewport" in html,
        has_responsive_hints="@media" in html or "responsive" in html,
    )


def truncate_text(text: Optional[str], max_length: int) -> Optional[str]:
    """
    Simple truncation helper.

    Behavior:
    - If text is None: return None.
    - If max_length <= 0: return "" (non-None, but empty).
    - If len(text) <= max_length: return text unchanged.
    - Else: return the first max_length characters (no ellipsis).
    """
    if text is None:
        return None

    if max_length <= 0:
        return ""

    if len(text) <= max_length:
        return text

    return text[:max_length]
