"""Stock image lookup against the Freepik resource search API.

The lookup is best effort: callers always receive a non-empty list of image
URLs. Any transport or upstream failure (network error, non-success status,
malformed payload) is recorded on a :class:`StockImageResult` and collapsed to
a fixed fallback list by :meth:`StockImageResult.or_fallback`, so failures
stay visible in the type without leaking into the caller's control flow.

Usage
-----
::

    from visionbootstrap.core.stock_images import search_images

    urls = search_images("modern office workspace")
"""

from __future__ import annotations

import logging
import urllib.parse
from dataclasses import dataclass, field

import requests

from visionbootstrap.core.config import VisionBootstrapConfig
from visionbootstrap.core.config import config as default_config

logger = logging.getLogger(__name__)

FALLBACK_IMAGE_URLS: tuple[str, ...] = (
    "https://images.unsplash.com/photo-1497215728101-856f4ea42174?auto=format&fit=crop&q=80&w=1200",
    "https://images.unsplash.com/photo-1486406146926-c627a92ad1ab?auto=format&fit=crop&q=80&w=1200",
    "https://images.unsplash.com/photo-1557804506-669a67965ba0?auto=format&fit=crop&q=80&w=1200",
)


class StockImageLookupError(Exception):
    """The image search backend could not be used."""

    pass


@dataclass(frozen=True)
class StockImageResult:
    """Outcome of one image search: either URLs or the error that occurred."""

    urls: tuple[str, ...] = ()
    error: Exception | None = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def or_fallback(self) -> list[str]:
        """Return the found URLs, or the fallback list on error or no hits."""
        if self.ok and self.urls:
            return list(self.urls)
        return list(FALLBACK_IMAGE_URLS)


def build_search_url(query: str, cfg: VisionBootstrapConfig) -> str:
    """Build the search URL, routed through the proxy when one is configured."""
    params = urllib.parse.urlencode(
        {"term": query, "order": "relevance", "limit": cfg.stock_result_limit}
    )
    target = f"{cfg.freepik_api_url}?{params}"
    if cfg.stock_proxy_url:
        return f"{cfg.stock_proxy_url}{urllib.parse.quote(target, safe='')}"
    return target


def extract_image_urls(payload: object) -> list[str]:
    """Pull usable URLs out of a search response body.

    Each item contributes ``image.source.url`` or, failing that, ``image.url``;
    items with neither are discarded.

    Raises:
        StockImageLookupError: If the payload has no ``data`` list.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        raise StockImageLookupError("Malformed search payload: missing 'data' list")

    urls: list[str] = []
    for item in payload["data"]:
        if not isinstance(item, dict):
            continue
        image = item.get("image")
        if not isinstance(image, dict):
            continue
        source = image.get("source")
        url = source.get("url") if isinstance(source, dict) else None
        url = url or image.get("url")
        if isinstance(url, str) and url:
            urls.append(url)
    return urls


def fetch_stock_images(
    query: str,
    *,
    config: VisionBootstrapConfig | None = None,
    session: requests.Session | None = None,
) -> StockImageResult:
    """Run one image search and report the outcome without raising."""
    cfg = config or default_config
    http = session or requests
    url = build_search_url(query, cfg)
    headers = {
        "x-freepik-api-key": cfg.freepik_api_key,
        "Accept": "application/json",
    }

    try:
        response = http.get(url, headers=headers, timeout=cfg.stock_request_timeout)
        response.raise_for_status()
        urls = extract_image_urls(response.json())
    except (requests.RequestException, ValueError, StockImageLookupError) as e:
        logger.warning(f"Stock image search failed for {query!r}: {e}")
        return StockImageResult(error=e)

    logger.info(f"Stock image search for {query!r} returned {len(urls)} images")
    return StockImageResult(urls=tuple(urls))


def search_images(
    query: str,
    *,
    config: VisionBootstrapConfig | None = None,
    session: requests.Session | None = None,
) -> list[str]:
    """Search for stock images; never empty, never raises.

    Args:
        query: Free-text search term.
        config: Configuration override (defaults to the global config).
        session: Optional ``requests.Session`` used for the call.

    Returns:
        List of image URLs, or the fixed three-URL fallback list.
    """
    return fetch_stock_images(query, config=config, session=session).or_fallback()
