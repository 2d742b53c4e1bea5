"""Tests for product formatting and list helpers."""

from decimal import Decimal

import pytest

from src.storefront.core.models.workspace import ManagedProduct, ProductVariant
from src.storefront.core.utils.product_utils import (
    PLACEHOLDER_IMAGE,
    calculate_discount_percentage,
    filter_products_by_availability,
    filter_products_by_category,
    format_price,
    format_price_range,
    generate_handle,
    generate_product_handle,
    get_product_analytics,
    get_product_image_url,
    get_product_status,
    get_product_variant_price,
    is_product_on_sale,
    is_shopify_product,
    search_products,
    sort_products,
    to_decimal,
    validate_product,
)


def _product(**overrides) -> ManagedProduct:
    data = {
        "id": "p-1",
        "title": "Test Serum",
        "description": "A serum",
        "price": Decimal("10.00"),
        "category": "Serums",
        "handle": "test-serum",
    }
    data.update(overrides)
    return ManagedProduct(**data)


class TestPriceFormatting:
    """Price parsing and display."""

    def test_format_price_two_decimals(self):
        """Test prices are shown in pounds with two decimals."""
        assert format_price(7.99) == "£7.99"
        assert format_price("5") == "£5.00"
        assert format_price(Decimal("12.5")) == "£12.50"

    def test_format_price_unparseable(self):
        """Test unparseable input renders as NaN instead of raising."""
        assert format_price("abc") == "£NaN"

    def test_format_price_range_collapses_equal_prices(self):
        """Test a range with equal ends is shown as a single price."""
        assert format_price_range("5.00", 5) == "£5.00"
        assert format_price_range(5, 9.99) == "£5.00 - £9.99"

    def test_to_decimal_blank_and_invalid(self):
        """Test blanks and garbage parse to None."""
        assert to_decimal(None) is None
        assert to_decimal("") is None
        assert to_decimal("nope") is None
        assert to_decimal(" 3.50 ") == Decimal("3.50")


class TestDiscounts:
    """Discount percentage and sale detection."""

    @pytest.mark.parametrize(
        ("original", "sale", "expected"),
        [
            (100, 75, 25),
            (9.99, 7.99, 20),
            (10, 10, 0),
            (10, 12, 0),
            (3, 2, 33),
        ],
    )
    def test_calculate_discount_percentage(self, original, sale, expected):
        """Test the saving is rounded to a whole percentage."""
        assert calculate_discount_percentage(original, sale) == expected

    def test_is_product_on_sale(self):
        """Test a product is on sale only when compare-at exceeds price."""
        assert is_product_on_sale(_product(compare_at_price=Decimal("12.99")))
        assert not is_product_on_sale(_product(compare_at_price=Decimal("10.00")))
        assert not is_product_on_sale(_product())


class TestHandles:
    """Slug generation."""

    def test_generate_product_handle(self):
        """Test punctuation becomes separators and ends are trimmed."""
        assert generate_product_handle("Vitamin C Serum!") == "vitamin-c-serum"
        assert generate_product_handle("  10% Niacinamide  ") == "10-niacinamide"

    def test_generate_handle_drops_punctuation(self):
        """Test catalog handles drop punctuation instead of splitting on it."""
        assert generate_handle("Dr. Jart+ Serum") == "dr-jart-serum"
        assert generate_handle("Eye   Care") == "eye-care"
        assert generate_handle("--Hydration--") == "hydration"


class TestProductStatus:
    """Stock status derived from availability and variants."""

    def test_unavailable_is_out_of_stock(self):
        """Test an unavailable product is out of stock."""
        assert get_product_status(_product(available=False)) == "out-of-stock"

    def test_all_variants_unavailable_is_out_of_stock(self):
        """Test a product with no purchasable variant is out of stock."""
        variant = ProductVariant(id="v1", title="30ml", price=Decimal("10"), available=False)
        assert get_product_status(_product(variants=[variant])) == "out-of-stock"

    def test_low_stock_products(self):
        """Test the known low-stock products are flagged."""
        assert get_product_status(_product(id="niacinamide")) == "low-stock"

    def test_in_stock(self):
        """Test an ordinary available product is in stock."""
        assert get_product_status(_product()) == "in-stock"


class TestListHelpers:
    """Filtering, searching and sorting workspace products."""

    @pytest.fixture
    def products(self) -> list[ManagedProduct]:
        return [
            _product(id="a", title="Alpha Serum", price=Decimal("5"), tags=["hydrating"]),
            _product(
                id="b",
                title="Beta Cleanser",
                category="Cleansers",
                price=Decimal("9"),
                available=False,
            ),
            _product(id="c", title="Gamma Cream", category="Moisturisers", price=Decimal("7")),
        ]

    def test_filter_by_category_case_insensitive(self, products):
        """Test category matching ignores case and 'all' keeps everything."""
        assert [p.id for p in filter_products_by_category(products, "serums")] == ["a"]
        assert len(filter_products_by_category(products, "all")) == 3

    def test_filter_by_availability(self, products):
        """Test availability filtering."""
        assert [p.id for p in filter_products_by_availability(products, False)] == ["b"]

    def test_search_matches_tags_and_title(self, products):
        """Test search covers title and tags; blank queries keep everything."""
        assert [p.id for p in search_products(products, "HYDRAT")] == ["a"]
        assert [p.id for p in search_products(products, "cleanser")] == ["b"]
        assert len(search_products(products, "   ")) == 3

    def test_sort_products(self, products):
        """Test known sort keys order the copy and unknown keys keep order."""
        assert [p.id for p in sort_products(products, "price-asc")] == ["a", "c", "b"]
        assert [p.id for p in sort_products(products, "title-desc")] == ["c", "b", "a"]
        assert [p.id for p in sort_products(products, "bogus")] == ["a", "b", "c"]

    def test_variant_price_range(self):
        """Test the price range spans the variant prices."""
        product = _product(
            variants=[
                ProductVariant(id="v1", title="15ml", price=Decimal("6.99")),
                ProductVariant(id="v2", title="30ml", price=Decimal("9.99")),
            ]
        )
        assert get_product_variant_price(product) == {
            "min": Decimal("6.99"),
            "max": Decimal("9.99"),
        }
        assert get_product_variant_price(_product()) == {
            "min": Decimal("10.00"),
            "max": Decimal("10.00"),
        }

    def test_analytics(self, products):
        """Test analytics counts availability and categories."""
        analytics = get_product_analytics(products)
        assert analytics["total"] == 3
        assert analytics["available"] == 2
        assert analytics["unavailable"] == 1
        assert analytics["categories"] == {"Serums": 1, "Cleansers": 1, "Moisturisers": 1}
        assert analytics["avg_price"] == pytest.approx(7.0)

    def test_analytics_empty(self):
        """Test analytics of an empty list does not divide by zero."""
        assert get_product_analytics([])["avg_price"] == 0


class TestImagesAndValidation:
    """Image URLs, validation and shape checks."""

    def test_placeholder_when_no_image(self):
        """Test products without an image get the placeholder."""
        assert get_product_image_url(_product()) == PLACEHOLDER_IMAGE

    def test_unsplash_images_are_resized(self):
        """Test Unsplash URLs get size parameters for the requested size."""
        url = get_product_image_url(
            _product(image="https://images.unsplash.com/photo-1?w=400&h=400&fit=crop"),
            "small",
        )
        assert "w=200" in url
        assert "h=200" in url
        assert "fit=crop" in url

    def test_other_images_pass_through(self):
        """Test non-Unsplash URLs are returned unchanged."""
        image = "https://cdn.example.com/serum.jpg"
        assert get_product_image_url(_product(image=image), "large") == image

    def test_validate_product_reports_every_problem(self):
        """Test validation lists each missing field."""
        ok, errors = validate_product({"title": " ", "price": "0"})
        assert not ok
        assert errors == [
            "Product title is required",
            "Product description is required",
            "Valid product price is required",
            "Product category is required",
            "Product image is required",
        ]

    def test_validate_product_valid(self):
        """Test a complete payload passes."""
        ok, errors = validate_product(
            {
                "title": "Serum",
                "description": "Nice",
                "price": "9.99",
                "category": "Serums",
                "image": "/img.jpg",
            }
        )
        assert ok
        assert errors == []

    def test_is_shopify_product(self):
        """Test the duck-type check needs string id, title and price."""
        assert is_shopify_product({"id": "gid://1", "title": "Serum", "price": "9.99"})
        assert not is_shopify_product({"id": 1, "title": "Serum", "price": "9.99"})
        assert not is_shopify_product(None)
