"""Homepage, banner and global site content held in process memory."""

from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from src.storefront.core.exceptions import (
    BannerNotFoundError,
    ContentNotFoundError,
    InvalidRequestError,
)
from src.storefront.core.models.content import Banner, GlobalContent, HomepageContent

_HERO_IMAGE = "https://images.unsplash.com/photo-1596755389378-c31d21fd1273"


def default_homepage() -> HomepageContent:
    return HomepageContent.model_validate(
        {
            "id": "homepage-1",
            "title": "INKEY List Admin - Homepage",
            "meta_description": (
                "Discover effective skincare with INKEY List. Shop our range of "
                "affordable, high-quality products."
            ),
            "hero_section": {
                "headline": "Effective Skincare Made Simple",
                "subheadline": (
                    "Discover the power of simple, effective ingredients with our "
                    "range of affordable skincare products."
                ),
                "background_image": {
                    "url": f"{_HERO_IMAGE}?w=1200&h=600&fit=crop",
                    "alt": "Skincare products",
                },
                "cta_button": {"text": "Shop Now", "link": "/products"},
                "overlay": {"enabled": True, "opacity": 0.4, "color": "#000000"},
            },
            "featured_products_section": {
                "enabled": True,
                "title": "Featured Products",
                "subtitle": "Our most popular and effective skincare solutions",
                "product_tags": ["bestseller", "featured"],
                "limit": 8,
            },
            "categories_section": {
                "enabled": True,
                "title": "Shop by Category",
                "subtitle": "Find the right products for your skincare routine",
                "featured_categories": ["cleansers", "serums", "moisturizers", "treatments"],
            },
            "testimonials_section": {
                "enabled": True,
                "title": "What Our Customers Say",
                "testimonials": [
                    {
                        "name": "Sarah M.",
                        "text": (
                            "The Niacinamide serum has completely transformed my "
                            "skin. Highly recommend!"
                        ),
                        "rating": 5,
                        "verified": True,
                    },
                    {
                        "name": "Emma L.",
                        "text": (
                            "Great quality products at amazing prices. My go-to "
                            "skincare brand now."
                        ),
                        "rating": 5,
                        "verified": True,
                    },
                ],
            },
            "seo": {
                "title": "INKEY List - Effective Skincare Made Simple",
                "description": (
                    "Shop affordable, effective skincare products with simple "
                    "ingredients. Transform your routine with INKEY List."
                ),
                "og_image": {"url": f"{_HERO_IMAGE}?w=1200&h=630&fit=crop"},
            },
        }
    )


def default_banners() -> list[Banner]:
    return [
        Banner(
            id="banner-1",
            title="Free Shipping",
            message="Free shipping on orders over $25!",
            type="info",
            link={"text": "Shop Now", "url": "/products"},
            is_active=True,
            target_pages=["homepage", "products"],
        )
    ]


def default_global_content() -> GlobalContent:
    return GlobalContent.model_validate(
        {
            "id": "global-1",
            "site_title": "INKEY List",
            "site_description": "Effective skincare made simple",
            "logo": {
                "url": "https://images.unsplash.com/photo-1618677366787-ca0f2d40bcc0?w=200&h=60&fit=crop",
                "alt": "INKEY List Logo",
            },
            "social_links": {
                "instagram": "https://instagram.com/theinkeylist",
                "facebook": "https://facebook.com/theinkeylist",
                "twitter": "https://twitter.com/theinkeylist",
            },
            "contact_info": {"email": "hello@theinkeylist.com", "phone": "+1 (555) 123-4567"},
            "footer_text": "© 2024 INKEY List. All rights reserved.",
            "cookie_policy": {
                "enabled": True,
                "message": "We use cookies to enhance your browsing experience.",
                "policy_link": "/privacy-policy",
            },
        }
    )


M = TypeVar("M", bound=BaseModel)


def _merge(current: M, changes: dict[str, Any]) -> M:
    """Replace top-level fields of ``current`` with those in ``changes``."""
    changes = {key: value for key, value in changes.items() if key != "id"}
    try:
        return type(current).model_validate({**current.model_dump(), **changes})
    except ValidationError as e:
        raise InvalidRequestError(
            "Validation failed", details=e.errors(include_url=False, include_context=False)
        ) from e


class ContentService:
    """Editable site content, seeded with the shop's default copy.

    Updates are shallow: a nested section sent in an update replaces the
    whole section. A document passed as None is treated as not published.
    """

    def __init__(
        self,
        homepage: HomepageContent | None = None,
        banners: list[Banner] | None = None,
        global_content: GlobalContent | None = None,
    ):
        self._homepage = homepage
        self._banners = list(banners or [])
        self._global = global_content

    @classmethod
    def with_defaults(cls) -> "ContentService":
        return cls(default_homepage(), default_banners(), default_global_content())

    def get_homepage(self) -> HomepageContent:
        if self._homepage is None:
            raise ContentNotFoundError("Homepage content not found")
        return self._homepage

    def update_homepage(self, changes: dict[str, Any]) -> HomepageContent:
        self._homepage = _merge(self.get_homepage(), changes)
        logger.bind(fields=sorted(changes)).info("content.homepage.updated")
        return self._homepage

    def get_global_content(self) -> GlobalContent:
        if self._global is None:
            raise ContentNotFoundError("Global content not found")
        return self._global

    def update_global_content(self, changes: dict[str, Any]) -> GlobalContent:
        self._global = _merge(self.get_global_content(), changes)
        logger.bind(fields=sorted(changes)).info("content.global.updated")
        return self._global

    def get_banners(self, target_page: str | None = None) -> list[Banner]:
        """Active banners, limited to those targeting ``target_page`` when given."""
        active = [banner for banner in self._banners if banner.is_active]
        if target_page:
            return [banner for banner in active if target_page in banner.target_pages]
        return active

    def update_banner(self, banner_id: str, changes: dict[str, Any]) -> Banner:
        for index, banner in enumerate(self._banners):
            if banner.id == banner_id:
                self._banners[index] = _merge(banner, changes)
                logger.bind(banner_id=banner_id).info("content.banner.updated")
                return self._banners[index]
        raise BannerNotFoundError(banner_id)
