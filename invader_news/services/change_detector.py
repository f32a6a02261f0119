"""Detect whether the news page changed since the cached copy.

Only the news content is compared: scripts, styles, cache busters,
nonces, comments and formatting whitespace are stripped before hashing.
"""

from __future__ import annotations

import hashlib
import logging
import re

logger = logging.getLogger(__name__)

_SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_TIMESTAMP_ATTR_RE = re.compile(r"data-timestamp=[\"'][^\"']*[\"']", re.IGNORECASE)
_CACHE_BUSTER_RE = re.compile(r"\?v=\d+", re.IGNORECASE)
_NONCE_ATTR_RE = re.compile(r"nonce=[\"'][^\"']*[\"']", re.IGNORECASE)
_BODY_RE = re.compile(r"<body[^>]*>([\s\S]*)</body>", re.IGNORECASE)

_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
_BETWEEN_TAGS_RE = re.compile(r">\s+<")
_LINE_EDGES_RE = re.compile(r"^[ \t\r\f\v]+|[ \t\r\f\v]+$", re.MULTILINE)
_BLANK_LINES_RE = re.compile(r"\n{2,}")


def extract_news_content(html: str) -> str:
    """Drop dynamic elements and return the inner content of <body>."""
    content = _SCRIPT_RE.sub("", html)
    content = _STYLE_RE.sub("", content)
    content = _TIMESTAMP_ATTR_RE.sub("", content)
    content = _CACHE_BUSTER_RE.sub("", content)
    content = _NONCE_ATTR_RE.sub("", content)

    m = _BODY_RE.search(content)
    if m:
        content = m.group(1)
    return content


def normalise_html(content: str) -> str:
    """Remove comments and formatting-only whitespace."""
    content = _COMMENT_RE.sub("", content)
    content = _BETWEEN_TAGS_RE.sub("><", content)
    content = _LINE_EDGES_RE.sub("", content)
    content = _BLANK_LINES_RE.sub("\n", content)
    return content.strip()


def content_hash(html: str) -> str:
    normalised = normalise_html(extract_news_content(html))
    return hashlib.sha256(normalised.encode("utf-8")).hexdigest()


def has_changed(new_html: str, old_html: str | None) -> bool:
    """Return True if *new_html* carries different news than *old_html*."""
    if old_html is None:
        logger.info("No previous cache found - treating as changed")
        return True

    new_hash = content_hash(new_html)
    old_hash = content_hash(old_html)
    changed = new_hash != old_hash

    if changed:
        logger.info("Content changed (hash: %s -> %s)", old_hash[:12], new_hash[:12])
    else:
        logger.info("No changes detected (same hash)")
    return changed
