from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from siteinfo.core.config import settings
from siteinfo.models.common import Envelope
from siteinfo.models.site_info.schemas import SiteInfoData
from siteinfo.pipeline.errors import BadStatusError, FetchError
from siteinfo.services.site_info.service import InvalidSiteUrlError, SiteInfoService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/site-info", tags=["site-info"])


# ---------------------------------------------------------------------------
# Dependency
# ---------------------------------------------------------------------------


def _get_service() -> SiteInfoService:
    """FastAPI dependency that builds a ``SiteInfoService`` for each request."""
    return SiteInfoService(settings)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=Envelope[SiteInfoData](code=status_code, message=message).model_dump(),
    )


# ---------------------------------------------------------------------------
# GET /site-info
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=Envelope[SiteInfoData],
    responses={
        400: {"model": Envelope[SiteInfoData]},
        502: {"model": Envelope[SiteInfoData]},
    },
    summary="Fetch the head information of a web page",
)
async def get_site_info(
    url: str | None = None,
    service: SiteInfoService = Depends(_get_service),
) -> Envelope[SiteInfoData] | JSONResponse:
    """Fetch *url* and return its title, description, keywords and icon.

    - **200** — page fetched and parsed (missing fields are empty strings)
    - **400** — invalid URL, or the page could not be fetched / decoded / parsed
    - **502** — the site answered with a status other than 200
    - **500** — unexpected failure
    """
    target = url or settings.default_site_url
    try:
        data = await service.describe(target)
    except InvalidSiteUrlError as exc:
        return _error(400, str(exc))
    except BadStatusError as exc:
        logger.warning("GET /site-info bad status for %s: %s", target, exc)
        return _error(502, str(exc))
    except FetchError as exc:
        logger.warning("GET /site-info fetch error for %s: %s", target, exc)
        return _error(400, str(exc))
    except Exception as exc:
        logger.exception("GET /site-info unexpected error for %s", target)
        return _error(500, f"internal server error: {exc}")
    return Envelope[SiteInfoData](code=200, message="ok", data=data)
