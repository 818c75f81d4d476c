from fastapi import APIRouter

from siteinfo.api.site_info.routes import router as site_info_router

router = APIRouter()
router.include_router(site_info_router)
