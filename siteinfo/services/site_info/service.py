from __future__ import annotations

import logging
from datetime import timedelta

import httpx

from siteinfo.core.config import Settings
from siteinfo.models.site_info.record import FetchConfig
from siteinfo.models.site_info.schemas import SiteInfoData
from siteinfo.pipeline.fetcher import get_site_info

logger = logging.getLogger(__name__)


class InvalidSiteUrlError(ValueError):
    """The requested URL is not an absolute http(s) URL."""


def parse_site_url(url: str) -> httpx.URL:
    """Validate *url* as an absolute ``http``/``https`` URL.

    Raises:
        InvalidSiteUrlError: with a message suitable for the client.
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidSiteUrlError(f"Invalid URL: {exc}") from exc
    if not parsed.is_absolute_url:
        raise InvalidSiteUrlError(
            "The URL must be absolute, e.g. http(s)://example.com/**"
        )
    if parsed.scheme not in ("http", "https"):
        raise InvalidSiteUrlError(
            "The URL scheme must be http or https, e.g. http(s)://example.com/**"
        )
    return parsed


def format_duration(delta: timedelta) -> str:
    """Render *delta* with the largest unit below it, e.g. ``"85.2ms"``."""
    seconds = delta.total_seconds()
    if seconds <= 0:
        return "0s"
    if seconds < 1e-3:
        value, unit = seconds * 1e6, "µs"
    elif seconds < 1:
        value, unit = seconds * 1e3, "ms"
    else:
        value, unit = seconds, "s"
    return f"{value:.6f}".rstrip("0").rstrip(".") + unit


class SiteInfoService:
    """Maps an incoming site URL onto the fetch pipeline."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def build_config(self, url: str) -> FetchConfig:
        return FetchConfig(
            url=url,
            timeout_ms=self._settings.http_timeout_ms,
            proxy_address=self._settings.http_proxy,
            tls_override=None if self._settings.http_verify_ssl else False,
            only_basic_info=self._settings.only_basic_info,
        )

    async def describe(self, url: str) -> SiteInfoData:
        """Fetch *url* and return its head information in API form.

        Raises:
            InvalidSiteUrlError: *url* is not an absolute http(s) URL.
            FetchError: propagated from the pipeline.
        """
        site_url = parse_site_url(url)
        info = await get_site_info(self.build_config(str(site_url)))
        icon_url = str(site_url.join(info.icon_url)) if info.icon_url else ""
        host = site_url.netloc.decode("ascii")
        logger.info("Collected site info for %s in %s", site_url, info.request_cost)
        return SiteInfoData(
            title=info.title,
            description=info.description,
            keywords=info.keywords,
            icon_url=icon_url,
            host=host,
            request_html_cost=format_duration(info.request_cost),
        )
