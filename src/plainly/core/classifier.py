"""Content classification with the YouTube override.

The capture layer already decides text vs. URL vs. media vs. file, so the only
non-trivial job here is spotting a YouTube video reference inside a `Text` or
`Link` payload. The pattern is searched, not fully matched: a YouTube URL
anywhere in a longer passage turns the whole input into a video request.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

from plainly.core.types import ContentKind, Link, Text, YouTubeVideo

logger = logging.getLogger(__name__)

YOUTUBE_URL_PATTERN = re.compile(
    r"((?:https?:)?//)?"  # optional scheme
    r"((?:www|m)\.)?"  # optional subdomain
    r"(youtube\.com|youtu\.be)"
    r"(/(?:[\w\-]+\?v=|embed/|v/)?)"  # /watch?v=, /embed/, /v/ or a bare slash
    r"([\w\-]+)"  # video id
    r"(\S+)?",  # trailing query/fragment noise
    re.IGNORECASE,
)


def extract_youtube_url(text: str) -> str | None:
    """Return the first YouTube URL in `text`, or None.

    A match only counts when the matched span parses as an absolute URL with
    both a scheme and a host.
    """
    match = YOUTUBE_URL_PATTERN.search(text.strip())
    if match is None:
        return None
    candidate = match.group(0)
    try:
        parts = urlsplit(candidate)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return candidate


def is_youtube_url(text: str) -> bool:
    return extract_youtube_url(text) is not None


def classify(raw: ContentKind) -> ContentKind:
    """Resolve the effective content kind of a submitted input.

    `Text` and `Link` payloads containing a YouTube URL become a
    `YouTubeVideo`; every other input is returned unchanged.
    """
    if isinstance(raw, Text):
        url = extract_youtube_url(raw.body)
    elif isinstance(raw, Link):
        url = extract_youtube_url(raw.url)
    else:
        return raw

    if url is None:
        return raw
    logger.debug("YouTube reference detected in %s input", raw.tag.value)
    return YouTubeVideo(url=url, found_in=raw)
