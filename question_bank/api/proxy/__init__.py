"""Storage proxies mounted under /api (download and upload)."""

from fastapi import APIRouter

from question_bank.api.proxy import download, upload

proxy_router = APIRouter()
proxy_router.include_router(download.router, tags=["proxy"])
proxy_router.include_router(upload.router, tags=["proxy"])

__all__ = ["proxy_router"]
