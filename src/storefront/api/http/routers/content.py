"""Site content endpoints: homepage, global settings and banners."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from src.storefront.api.http.deps import get_content_service, require_permission
from src.storefront.api.http.responses import success_response
from src.storefront.core.services import ContentService

router = APIRouter(prefix="/api/content", tags=["content"])

_can_edit = [Depends(require_permission("design", "edit"))]


@router.get("/homepage")
async def get_homepage(content: ContentService = Depends(get_content_service)):
    return success_response(content.get_homepage())


@router.post("/homepage", dependencies=_can_edit)
async def update_homepage(
    changes: dict[str, Any] = Body(...),
    content: ContentService = Depends(get_content_service),
):
    return success_response(content.update_homepage(changes))


@router.get("/global")
async def get_global_content(content: ContentService = Depends(get_content_service)):
    return success_response(content.get_global_content())


@router.post("/global", dependencies=_can_edit)
async def update_global_content(
    changes: dict[str, Any] = Body(...),
    content: ContentService = Depends(get_content_service),
):
    return success_response(content.update_global_content(changes))


@router.get("/banners")
async def list_banners(
    page: str | None = None,
    content: ContentService = Depends(get_content_service),
):
    """Active banners targeting ``page`` (``/`` when not given)."""
    target = page or "/"
    banners = content.get_banners(target)
    return success_response(banners, page=target, count=len(banners))


@router.put("/banners/{banner_id}", dependencies=_can_edit)
async def update_banner(
    banner_id: str,
    changes: dict[str, Any] = Body(...),
    content: ContentService = Depends(get_content_service),
):
    return success_response(content.update_banner(banner_id, changes))
