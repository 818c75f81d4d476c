from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from siteinfo.api.router import router
from siteinfo.core.config import settings


def _configure_logging() -> None:
    """Configure the ``siteinfo`` logger namespace.

    ``logging.basicConfig`` is a no-op when the root logger already has
    handlers (e.g. when uvicorn sets up its own handlers first), so the
    ``siteinfo`` namespace is configured directly with ``propagate = False``.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
    )
    app_log = logging.getLogger("siteinfo")
    app_log.setLevel(level)
    if not app_log.handlers:
        app_log.addHandler(handler)
    app_log.propagate = False


_configure_logging()


app = FastAPI(
    title="Site Info",
    description="Fetches a web page and reports the metadata in its <head>.",
    version="1.0.0",
)

app.include_router(router)


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def index() -> str:
    return "Hi~"


@app.get("/ping", tags=["health"])
async def ping() -> dict[str, str]:
    return {"message": "pong"}


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    return {"status": "ok"}
