from __future__ import annotations

import ssl
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT_MS = 5000


class FetchConfig(BaseModel):
    """Options for one fetch of a site's ``<head>`` information.

    ``tls_override`` is handed to the transport as httpx ``verify`` and only
    takes effect together with ``proxy_address``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url: str
    # 0 means DEFAULT_TIMEOUT_MS
    timeout_ms: int = Field(default=0, ge=0)
    proxy_address: str = ""
    tls_override: bool | ssl.SSLContext | None = None
    only_basic_info: bool = False

    @property
    def timeout_seconds(self) -> float:
        return (self.timeout_ms or DEFAULT_TIMEOUT_MS) / 1000


class SiteInfo(BaseModel):
    """Metadata found in a page's ``<head>``.

    Missing fields are empty strings.  ``icon_url`` is returned exactly as
    written in the page; resolving it against the site URL is up to the
    caller.
    """

    title: str = ""
    description: str = ""
    keywords: str = ""
    icon_url: str = ""
    request_cost: timedelta = timedelta(0)
