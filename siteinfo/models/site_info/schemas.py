from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SiteInfoData(BaseModel):
    """API response shape for a site's head information.

    ``icon_url`` is already resolved against the requested URL and
    ``request_html_cost`` is a human-readable duration such as ``"85.2ms"``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    description: str
    keywords: str
    icon_url: str
    host: str
    request_html_cost: str
