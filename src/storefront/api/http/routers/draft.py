"""Draft-mode preview links opened from the Sanity studio."""

import hmac

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from loguru import logger
from starlette.responses import JSONResponse

from src.storefront.api.http.responses import timestamp
from src.storefront.runtime.context import get_config

router = APIRouter(prefix="/api/draft", tags=["draft"])

DRAFT_COOKIE = "draft_mode"

PREVIEW_PATHS = {
    "product": "/products/{slug}",
    "blogPost": "/blog/{slug}",
    "category": "/categories/{slug}",
}


def preview_path(doc_type: str | None, slug: str | None) -> str:
    """Storefront path for a document; unknown types go to the home page."""
    if not doc_type or not slug or doc_type not in PREVIEW_PATHS:
        return "/"
    return PREVIEW_PATHS[doc_type].format(slug=slug)


def _token_valid(token: str | None) -> bool:
    secret = get_config().sanity.preview_secret
    # Draft mode stays off until a secret is configured
    if not secret or not token:
        return False
    return hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8"))


@router.get("")
async def enable_draft_mode(
    request: Request,
    token: str | None = None,
    slug: str | None = None,
    type: str | None = None,
):
    if not _token_valid(token):
        logger.bind(doc_type=type).warning("draft.invalid_token")
        return PlainTextResponse("Invalid token", status_code=401)

    url = request.url.replace(path=preview_path(type, slug), query="preview=true")
    response = RedirectResponse(str(url), status_code=307)
    response.set_cookie(
        DRAFT_COOKIE,
        "true",
        httponly=True,
        secure=get_config().app.environment == "production",
        samesite="none" if get_config().app.environment == "production" else "lax",
        path="/",
    )
    logger.bind(doc_type=type, slug=slug).info("draft.enabled")
    return response


@router.delete("")
async def disable_draft_mode():
    response = JSONResponse(
        {"message": "Draft mode disabled", "enabled": False, "timestamp": timestamp()}
    )
    response.delete_cookie(DRAFT_COOKIE, path="/")
    return response
