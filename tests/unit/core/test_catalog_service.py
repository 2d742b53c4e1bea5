"""Tests for the database-backed catalog service."""

import pytest

from src.storefront.core.exceptions import (
    DuplicateHandleError,
    InvalidRequestError,
    ProductNotFoundError,
)
from src.storefront.core.services.catalog.catalog_service import (
    CatalogService,
    category_display_name,
    short_description,
)
from src.storefront.entities.catalog.category import CategoryCreate
from src.storefront.entities.catalog.product import (
    ProductCreate,
    ProductSearch,
    ProductUpdate,
)
from src.storefront.entities.catalog.skin_concern import SkinConcernCreate


def _new_product(**overrides) -> ProductCreate:
    data = {
        "title": "Peptide Moisturiser",
        "description": "A rich cream with peptides.",
        "price": 11.5,
        "category": "serums",
    }
    data.update(overrides)
    return ProductCreate(**data)


class TestHelpers:
    def test_short_description(self):
        """Test descriptions are cut at 150 characters with an ellipsis."""
        assert short_description("short") == "short"
        text = "x" * 200
        assert short_description(text) == "x" * 150 + "..."
        assert short_description("y" * 150) == "y" * 150

    def test_category_display_name(self):
        """Test a readable name is derived from a handle."""
        assert category_display_name("eye-care") == "Eye care"
        assert category_display_name("") == ""


class TestListing:
    """Listing and filtering the seeded catalogue."""

    def test_list_all(self, catalog: CatalogService):
        """Test every seeded product is returned without filters."""
        assert len(catalog.list_products()) == 6
        assert len(catalog.list_products(ProductSearch())) == 6

    def test_filter_by_category(self, catalog: CatalogService):
        """Test category filtering uses the category handle."""
        handles = {p.handle for p in catalog.list_products(ProductSearch(category="eye-care"))}
        assert handles == {"retinol-eye-cream", "caffeine-eye-serum"}

    def test_filter_by_stock_and_featured(self, catalog: CatalogService):
        """Test boolean filters."""
        out_of_stock = catalog.list_products(ProductSearch(in_stock=False))
        assert [p.handle for p in out_of_stock] == ["vitamin-c-serum"]
        featured = catalog.list_products(ProductSearch(featured=True))
        assert {p.handle for p in featured} == {
            "hyaluronic-acid-serum",
            "niacinamide",
            "caffeine-eye-serum",
        }

    def test_search_title_and_description(self, catalog: CatalogService):
        """Test text search is case-insensitive over title and description."""
        results = catalog.list_products(ProductSearch(search="PUFFINESS"))
        assert [p.handle for p in results] == ["caffeine-eye-serum"]

    def test_filter_by_any_skin_concern(self, catalog: CatalogService):
        """Test products matching any requested concern are returned."""
        results = catalog.list_products(
            ProductSearch(skin_concerns=["Dark Circles", "Acne"])
        )
        assert {p.handle for p in results} == {
            "retinol-eye-cream",
            "caffeine-eye-serum",
            "salicylic-acid-cleanser",
        }

    def test_get_product_missing(self, catalog: CatalogService):
        """Test a missing handle raises not found."""
        with pytest.raises(ProductNotFoundError):
            catalog.get_product("does-not-exist")


class TestWrites:
    """Creating, updating and deleting products."""

    def test_create_generates_handle(self, catalog: CatalogService):
        """Test the handle is derived from the title when omitted."""
        product = catalog.create_product(_new_product())
        assert product.handle == "peptide-moisturiser"
        assert catalog.get_product("peptide-moisturiser").id == product.id

    def test_create_duplicate_handle(self, catalog: CatalogService):
        """Test an existing handle is rejected."""
        with pytest.raises(DuplicateHandleError, match="niacinamide"):
            catalog.create_product(_new_product(handle="niacinamide"))

    def test_create_unsluggable_title(self, catalog: CatalogService):
        """Test a title with no usable characters needs an explicit handle."""
        with pytest.raises(InvalidRequestError):
            catalog.create_product(_new_product(title="!!!"))

    def test_update_only_sent_fields(self, catalog: CatalogService):
        """Test a partial update leaves other fields alone."""
        before = catalog.get_product("niacinamide")

        updated = catalog.update_product("niacinamide", ProductUpdate(price=6.49))

        assert updated.price == 6.49
        assert updated.title == before.title
        assert updated.skin_concerns == before.skin_concerns
        assert updated.updated_at >= before.updated_at

    def test_update_can_clear_compare_at_price(self, catalog: CatalogService):
        """Test compare_at_price may be explicitly cleared."""
        updated = catalog.update_product(
            "hyaluronic-acid-serum", ProductUpdate(compare_at_price=None)
        )
        assert updated.compare_at_price is None

    def test_update_ignores_null_required_fields(self, catalog: CatalogService):
        """Test nulls for required fields are ignored rather than stored."""
        updated = catalog.update_product("niacinamide", ProductUpdate(title=None))
        assert updated.title == "Niacinamide 10%"

    def test_update_handle_conflict(self, catalog: CatalogService):
        """Test renaming onto another product's handle is rejected."""
        with pytest.raises(DuplicateHandleError):
            catalog.update_product("niacinamide", ProductUpdate(handle="vitamin-c-serum"))

    def test_update_missing(self, catalog: CatalogService):
        """Test updating a missing product raises not found."""
        with pytest.raises(ProductNotFoundError):
            catalog.update_product("missing", ProductUpdate(price=1))

    def test_delete(self, catalog: CatalogService):
        """Test a deleted product can no longer be fetched."""
        catalog.delete_product("niacinamide")
        with pytest.raises(ProductNotFoundError):
            catalog.get_product("niacinamide")
        assert len(catalog.list_products()) == 5

    def test_bulk_update_skips_unknown_ids(self, catalog: CatalogService):
        """Test bulk updates apply to known ids only."""
        ids = [catalog.get_product("niacinamide").id, "unknown"]

        updated = catalog.bulk_update_products(ids, ProductUpdate(featured=False))

        assert [p.handle for p in updated] == ["niacinamide"]
        assert catalog.get_product("niacinamide").featured is False


class TestRelatedAndTaxonomy:
    def test_related_products(self, catalog: CatalogService):
        """Test related products share the category and exclude the product."""
        product = catalog.get_product("niacinamide")
        related = catalog.related_products(product)
        assert {p.handle for p in related} == {"hyaluronic-acid-serum", "vitamin-c-serum"}

    def test_related_products_limit(self, catalog: CatalogService):
        """Test at most four related products are returned."""
        for index in range(5):
            catalog.create_product(_new_product(title=f"Extra Serum {index}"))
        related = catalog.related_products(catalog.get_product("niacinamide"))
        assert len(related) == 4

    def test_categories_and_concerns_seeded(self, catalog: CatalogService):
        """Test the seed loads categories and unique concerns."""
        assert [c.handle for c in catalog.list_categories()] == [
            "serums",
            "eye-care",
            "cleansers",
        ]
        names = [c.name for c in catalog.list_skin_concerns()]
        assert len(names) == len(set(names))
        assert "Dark Circles" in names

    def test_create_category_requires_name(self, catalog: CatalogService):
        """Test a category without a name is rejected."""
        with pytest.raises(InvalidRequestError, match="Missing required field: name"):
            catalog.create_category(CategoryCreate())

    def test_create_category_and_concern(self, catalog: CatalogService):
        """Test handles are generated for new categories and concerns."""
        category = catalog.create_category(CategoryCreate(name="Sun Care"))
        concern = catalog.create_skin_concern(SkinConcernCreate(name="Sun Damage"))
        assert category.handle == "sun-care"
        assert concern.handle == "sun-damage"

    def test_create_concern_requires_name(self, catalog: CatalogService):
        """Test a concern without a name is rejected."""
        with pytest.raises(InvalidRequestError):
            catalog.create_skin_concern(SkinConcernCreate(name=""))

    def test_handle_must_be_generatable(self, catalog: CatalogService):
        """Test names made only of punctuation are rejected instead of stored."""
        with pytest.raises(InvalidRequestError, match="Handle could not be generated"):
            catalog.create_category(CategoryCreate(name="!!!"))
        with pytest.raises(InvalidRequestError, match="Handle could not be generated"):
            catalog.create_skin_concern(SkinConcernCreate(name="???"))

        assert len(catalog.list_categories()) == 3


class TestAnalyticsAndFrontend:
    def test_analytics(self, catalog: CatalogService):
        """Test analytics counts stock, featured and categories."""
        analytics = catalog.get_analytics()

        assert analytics["total"] == 6
        assert analytics["in_stock"] == 5
        assert analytics["out_of_stock"] == 1
        assert analytics["featured"] == 3
        counts = {entry["handle"]: entry["count"] for entry in analytics["categories"].values()}
        assert counts == {"serums": 3, "eye-care": 2, "cleansers": 1}
        assert len(analytics["recently_updated"]) == 5

    def test_to_frontend_resolves_category(self, catalog: CatalogService):
        """Test the storefront shape carries category name and short description."""
        product = catalog.get_product("hyaluronic-acid-serum")

        shaped = catalog.to_frontend(product, catalog.categories_by_handle())

        assert shaped["category"]["name"] == "Serums"
        assert shaped["category"]["handle"] == "serums"
        assert shaped["short_description"].endswith("...")
        assert len(shaped["short_description"]) == 153

    def test_to_frontend_unknown_category(self, catalog: CatalogService):
        """Test a category without a record gets a derived name."""
        product = catalog.create_product(_new_product(category="lip-care"))
        shaped = catalog.to_frontend(product, catalog.categories_by_handle())
        assert shaped["category"] == {"id": "lip-care", "name": "Lip care", "handle": "lip-care"}
