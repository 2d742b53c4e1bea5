"""Tests for editable site content."""

import pytest

from src.storefront.core.exceptions import (
    BannerNotFoundError,
    ContentNotFoundError,
    InvalidRequestError,
)
from src.storefront.core.services.content.content_service import (
    ContentService,
    default_banners,
)


class TestHomepage:
    def test_default_homepage(self, content_service: ContentService):
        """Test the default homepage copy is served."""
        homepage = content_service.get_homepage()
        assert homepage.id == "homepage-1"
        assert homepage.hero_section.cta_button.link == "/products"

    def test_update_replaces_top_level_fields(self, content_service: ContentService):
        """Test updates change only the sent top-level fields."""
        updated = content_service.update_homepage({"title": "Spring Sale"})

        assert updated.title == "Spring Sale"
        assert updated.seo.title == "INKEY List - Effective Skincare Made Simple"
        assert content_service.get_homepage().title == "Spring Sale"

    def test_nested_sections_are_replaced_whole(self, content_service: ContentService):
        """Test a sent section replaces the existing section entirely."""
        updated = content_service.update_homepage(
            {"categories_section": {"title": "Browse", "enabled": False}}
        )
        assert updated.categories_section.title == "Browse"
        assert updated.categories_section.featured_categories == []

    def test_id_cannot_change(self, content_service: ContentService):
        """Test the document id is kept."""
        assert content_service.update_homepage({"id": "other"}).id == "homepage-1"

    def test_invalid_update(self, content_service: ContentService):
        """Test invalid content is rejected and the stored copy kept."""
        with pytest.raises(InvalidRequestError) as exc_info:
            content_service.update_homepage({"hero_section": {"headline": "Only"}})

        assert exc_info.value.message == "Validation failed"
        assert exc_info.value.details
        assert content_service.get_homepage().hero_section.headline == (
            "Effective Skincare Made Simple"
        )

    def test_missing_homepage(self):
        """Test an unpublished homepage is not found."""
        with pytest.raises(ContentNotFoundError):
            ContentService().get_homepage()


class TestGlobalContent:
    def test_get_and_update(self, content_service: ContentService):
        """Test reading and updating the global settings."""
        assert content_service.get_global_content().site_title == "INKEY List"

        updated = content_service.update_global_content({"footer_text": "© INKEY"})

        assert updated.footer_text == "© INKEY"
        assert updated.contact_info.email == "hello@theinkeylist.com"

    def test_missing_global_content(self):
        """Test unpublished global content is not found."""
        with pytest.raises(ContentNotFoundError):
            ContentService().update_global_content({"footer_text": "x"})


class TestBanners:
    def test_banners_for_page(self, content_service: ContentService):
        """Test banners are filtered by target page."""
        assert [b.id for b in content_service.get_banners("homepage")] == ["banner-1"]
        assert content_service.get_banners("/checkout") == []
        assert len(content_service.get_banners()) == 1

    def test_inactive_banners_hidden(self):
        """Test inactive banners are never listed."""
        banner = default_banners()[0].model_copy(update={"is_active": False})
        service = ContentService(banners=[banner])
        assert service.get_banners() == []
        assert service.get_banners("homepage") == []

    def test_update_banner(self, content_service: ContentService):
        """Test a banner can be changed and deactivated."""
        updated = content_service.update_banner(
            "banner-1", {"message": "Free shipping this weekend", "is_active": False}
        )

        assert updated.message == "Free shipping this weekend"
        assert content_service.get_banners("homepage") == []

    def test_update_missing_banner(self, content_service: ContentService):
        """Test updating an unknown banner raises not found."""
        with pytest.raises(BannerNotFoundError):
            content_service.update_banner("banner-9", {"title": "x"})
