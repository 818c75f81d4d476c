"""Async page fetcher.

Fetches one URL, decodes its body according to ``Content-Encoding``,
parses it and extracts the ``<head>`` metadata.

A fresh ``httpx.AsyncClient`` is built for every call: proxy and TLS
settings belong to the ``FetchConfig`` of that call, and nothing is
shared between fetches.  There are no retries.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import timedelta

import httpx

from siteinfo.models.site_info.record import FetchConfig, SiteInfo
from siteinfo.pipeline.decoders import select_decoder
from siteinfo.pipeline.errors import BadStatusError, InvalidRequestError, NetworkError
from siteinfo.pipeline.extractor import extract_site_info
from siteinfo.pipeline.parser import parse_document
from siteinfo.pipeline.tree import DocumentTree, find_head

logger = logging.getLogger(__name__)

REQUEST_HEADERS: dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9",
    "Accept-Language": "zh-CN,zh;q=0.9,en-CN;q=0.8,en;q=0.7,fr-FR;q=0.6,fr;q=0.5",
    "Accept-Encoding": "gzip, deflate, br",
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/123.0.0.0 Safari/537.36"
    ),
    "Connection": "keep-alive",
}


@dataclass
class FetchedPage:
    status_code: int
    tree: DocumentTree
    elapsed: timedelta


def _build_client(config: FetchConfig) -> httpx.AsyncClient:
    """Return a client for *config*; proxy and TLS override go together."""
    options = dict(
        timeout=httpx.Timeout(config.timeout_seconds),
        follow_redirects=True,
        trust_env=False,
    )
    if config.proxy_address:
        verify = True if config.tls_override is None else config.tls_override
        return httpx.AsyncClient(proxy=config.proxy_address, verify=verify, **options)
    return httpx.AsyncClient(**options)


async def fetch_page(config: FetchConfig) -> FetchedPage:
    """GET ``config.url`` and parse the body into a ``DocumentTree``.

    ``elapsed`` covers dispatch until the response headers arrive; decoding
    and parsing are not included.  The deadline from ``config`` bounds the
    whole network phase (connect, TLS, headers and body).

    Raises:
        InvalidRequestError: the URL or proxy address is unusable.
        NetworkError: transport failure or deadline exceeded.
        BadStatusError: the response status is not 200; the body is not parsed.
        DecodeError: a gzip body with a broken header.
        ParseError: the decoded body could not be read.
    """
    try:
        client = _build_client(config)
    except (ValueError, httpx.InvalidURL) as exc:
        raise InvalidRequestError(
            f"Invalid proxy address '{config.proxy_address}': {exc}"
        ) from exc

    async with client:
        try:
            request = client.build_request("GET", config.url, headers=REQUEST_HEADERS)
        except httpx.InvalidURL as exc:
            raise InvalidRequestError(f"Invalid URL '{config.url}': {exc}") from exc

        try:
            async with asyncio.timeout(config.timeout_seconds):
                started = time.perf_counter()
                response = await client.send(request, stream=True)
                elapsed = timedelta(seconds=time.perf_counter() - started)
                try:
                    if response.status_code != httpx.codes.OK:
                        raise BadStatusError(response.status_code)
                    raw_chunks = [chunk async for chunk in response.aiter_raw()]
                finally:
                    await response.aclose()
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise InvalidRequestError(f"Invalid URL '{config.url}': {exc}") from exc
        except TimeoutError as exc:
            raise NetworkError(
                f"website request error: timed out after {config.timeout_seconds:g}s"
            ) from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"website request error: {exc}") from exc

    logger.debug(
        "GET %s -> %d in %.1f ms",
        config.url,
        response.status_code,
        elapsed / timedelta(milliseconds=1),
    )
    body = select_decoder(response.headers.get("content-encoding", ""), raw_chunks)
    tree = parse_document(body)
    return FetchedPage(status_code=response.status_code, tree=tree, elapsed=elapsed)


async def get_site_info(config: FetchConfig) -> SiteInfo:
    """Fetch ``config.url`` and return the metadata found in its ``<head>``.

    A document without a ``head`` element yields an empty ``SiteInfo``.
    """
    page = await fetch_page(config)
    head = find_head(page.tree)
    if head is None:
        logger.info("No <head> element found at %s", config.url)
        return SiteInfo(request_cost=page.elapsed)
    info = extract_site_info(page.tree, head, only_basic_info=config.only_basic_info)
    return info.model_copy(update={"request_cost": page.elapsed})
