"""Sample catalogue shipped with the dashboard.

Loaded into an empty catalog database on startup (or via ``storefront db
init``) and used as the initial product-management workspace.
"""

from decimal import Decimal

from loguru import logger
from sqlmodel import Session

from src.storefront.core.models.workspace import ManagedProduct, ProductVariant
from src.storefront.core.utils.product_utils import generate_handle
from src.storefront.entities import (
    Category,
    CategoryRepository,
    Product,
    ProductRepository,
    SkinConcern,
    SkinConcernRepository,
)

_IMG = "https://images.unsplash.com/photo-{}?w=400&h=400&fit=crop"

CATEGORIES = [
    {
        "name": "Serums",
        "handle": "serums",
        "description": "Targeted treatment serums for specific skin concerns",
    },
    {
        "name": "Eye Care",
        "handle": "eye-care",
        "description": "Specialized products for the delicate eye area",
    },
    {
        "name": "Cleansers",
        "handle": "cleansers",
        "description": "Gentle yet effective facial cleansers",
    },
]

CATALOG_PRODUCTS = [
    {
        "handle": "hyaluronic-acid-serum",
        "title": "Hyaluronic Acid Serum",
        "description": (
            "A lightweight serum that holds up to 1000 times its weight in water, "
            "providing instant and long-lasting hydration for all skin types. This "
            "powerful humectant helps plump fine lines and leaves skin looking dewy "
            "and refreshed."
        ),
        "price": 7.99,
        "compare_at_price": 9.99,
        "images": [_IMG.format("1608248543803-ba4f8c70ae0b"), _IMG.format("1512290923902-8a9f81dc236c")],
        "category": "serums",
        "skin_concerns": ["Hydration", "Fine Lines", "Dryness"],
        "ingredients": ["Hyaluronic Acid", "Water", "Pentylene Glycol"],
        "benefits": ["Provides instant hydration", "Plumps fine lines", "Suitable for all skin types"],
        "how_to_use": "Apply 2-3 drops to clean skin morning and evening. Follow with moisturizer.",
        "in_stock": True,
        "featured": True,
    },
    {
        "handle": "niacinamide",
        "title": "Niacinamide 10%",
        "description": (
            "A 10% niacinamide serum that helps control excess oil production and "
            "reduce the appearance of enlarged pores. This powerful ingredient also "
            "helps even skin tone and improve overall skin texture."
        ),
        "price": 5.99,
        "images": [_IMG.format("1620916566398-39f1143ab7be")],
        "category": "serums",
        "skin_concerns": ["Oil Control", "Large Pores", "Uneven Texture"],
        "ingredients": ["Niacinamide 10%", "Water", "Pentylene Glycol", "Zinc PCA"],
        "benefits": ["Controls excess oil", "Minimizes pore appearance", "Evens skin tone"],
        "how_to_use": (
            "Apply 2-3 drops to clean skin morning and evening. "
            "Start with once daily if new to niacinamide."
        ),
        "in_stock": True,
        "featured": True,
    },
    {
        "handle": "retinol-eye-cream",
        "title": "Retinol Eye Cream",
        "description": (
            "A gentle retinol formula specifically designed for the delicate eye "
            "area. Helps reduce the appearance of fine lines and improve skin "
            "texture while being gentle enough for nightly use."
        ),
        "price": 9.99,
        "images": [_IMG.format("1556228720-195a672e8a03")],
        "category": "eye-care",
        "skin_concerns": ["Fine Lines", "Dark Circles", "Eye Area Aging"],
        "ingredients": ["Retinol", "Squalane", "Ceramides", "Peptides"],
        "benefits": ["Reduces fine lines", "Gentle for eye area", "Improves skin texture"],
        "how_to_use": (
            "Apply a small amount around the eye area before bed. "
            "Start 2-3 times per week and build up tolerance."
        ),
        "in_stock": True,
        "featured": False,
    },
    {
        "handle": "vitamin-c-serum",
        "title": "Vitamin C Serum",
        "description": (
            "A potent vitamin C serum with 30% L-Ascorbic Acid that brightens skin "
            "and helps reduce dark spots. Enhanced with vitamin E for antioxidant "
            "protection and improved stability."
        ),
        "price": 9.99,
        "images": [_IMG.format("1571875257727-256c39da42af")],
        "category": "serums",
        "skin_concerns": ["Dark Spots", "Dullness", "Uneven Skin Tone"],
        "ingredients": ["L-Ascorbic Acid 30%", "Vitamin E", "Water", "Propylene Glycol"],
        "benefits": ["Brightens complexion", "Reduces dark spots", "Antioxidant protection"],
        "how_to_use": (
            "Apply 2-3 drops to clean skin in the morning. Always follow with SPF. "
            "Start with every other day."
        ),
        "in_stock": False,
        "featured": False,
    },
    {
        "handle": "caffeine-eye-serum",
        "title": "Caffeine Eye Serum",
        "description": (
            "An energizing eye serum with 5% caffeine solution that helps reduce "
            "puffiness and the appearance of dark circles. The lightweight formula "
            "absorbs quickly for instant refreshment."
        ),
        "price": 6.99,
        "images": [_IMG.format("1594824704818-61db69c33bb3")],
        "category": "eye-care",
        "skin_concerns": ["Puffiness", "Dark Circles", "Tired Eyes"],
        "ingredients": ["Caffeine 5%", "Epigallocatechin Gallatyl Glucoside", "Water"],
        "benefits": ["Reduces puffiness", "Minimizes dark circles", "Energizes tired eyes"],
        "how_to_use": (
            "Apply 1-2 drops around the eye area morning and evening. "
            "Gently pat in with ring finger."
        ),
        "in_stock": True,
        "featured": True,
    },
    {
        "handle": "salicylic-acid-cleanser",
        "title": "Salicylic Acid Cleanser",
        "description": (
            "A gentle daily cleanser with 2% salicylic acid that helps unclog pores "
            "and remove dead skin cells. Perfect for oily and blemish-prone skin "
            "without over-drying."
        ),
        "price": 8.99,
        "images": [_IMG.format("1571019613454-1cb2f99b2d8b")],
        "category": "cleansers",
        "skin_concerns": ["Acne", "Blackheads", "Clogged Pores"],
        "ingredients": ["Salicylic Acid 2%", "Cocamidopropyl Betaine", "Water"],
        "benefits": ["Unclogs pores", "Removes dead skin cells", "Gentle on skin"],
        "how_to_use": (
            "Use morning and evening. Apply to damp skin, massage gently, "
            "and rinse thoroughly with water."
        ),
        "in_stock": True,
        "featured": False,
    },
]


def skin_concern_names() -> list[str]:
    """Unique concerns across the sample products, in first-seen order."""
    seen: dict[str, None] = {}
    for product in CATALOG_PRODUCTS:
        for concern in product["skin_concerns"]:
            seen.setdefault(concern, None)
    return list(seen)


def seed_catalog(session: Session) -> int:
    """Load the sample catalogue into an empty database.

    Returns the number of products inserted (0 when products already exist).
    """
    products = ProductRepository(session)
    if products.count() > 0:
        logger.debug("Catalog already populated; skipping seed")
        return 0

    categories = CategoryRepository(session)
    for data in CATEGORIES:
        categories.create(Category(**data))

    concerns = SkinConcernRepository(session)
    for name in skin_concern_names():
        concerns.create(SkinConcern(name=name, handle=generate_handle(name)))

    for data in CATALOG_PRODUCTS:
        products.create(Product(**data))

    logger.info("Seeded catalog with {} products", len(CATALOG_PRODUCTS))
    return len(CATALOG_PRODUCTS)


def _variant(product_id: str, size: str, price: str, sku: str, *, available=True, compare_at=None):
    return ProductVariant(
        id=f"{product_id}-{size}",
        title=size,
        price=Decimal(price),
        compare_at_price=Decimal(compare_at) if compare_at else None,
        available=available,
        sku=sku,
        weight=float(size.removesuffix("ml")),
        weight_unit="ml",
    )


def sample_workspace_products() -> list[ManagedProduct]:
    """Fresh copies of the products the management workspace starts with."""
    return [
        ManagedProduct(
            id="hyaluronic-acid-serum",
            title="Hyaluronic Acid Serum",
            description=(
                "A lightweight serum that holds up to 1000 times its weight in water, "
                "providing instant and long-lasting hydration for all skin types."
            ),
            price=Decimal("7.99"),
            image=_IMG.format("1608248543803-ba4f8c70ae0b"),
            images=[_IMG.format("1608248543803-ba4f8c70ae0b"), _IMG.format("1512290923902-8a9f81dc236c")],
            category="Serums",
            handle="hyaluronic-acid-serum",
            tags=["hydrating", "all-skin-types", "plumping"],
            variants=[_variant("hyaluronic-acid-serum", "30ml", "7.99", "INKEY-HA-30ML")],
            available=True,
            featured=True,
            concerns=["Hydration", "Fine Lines"],
        ),
        ManagedProduct(
            id="retinol-eye-cream",
            title="Retinol Eye Cream",
            description=(
                "A gentle retinol formula specifically designed for the delicate eye "
                "area, helping to reduce fine lines and improve skin texture."
            ),
            price=Decimal("9.99"),
            image=_IMG.format("1556228720-195a672e8a03"),
            images=[_IMG.format("1556228720-195a672e8a03")],
            category="Eye Care",
            handle="retinol-eye-cream",
            tags=["anti-aging", "eye-care", "retinol"],
            variants=[_variant("retinol-eye-cream", "15ml", "9.99", "INKEY-RET-EYE-15ML")],
            available=True,
            featured=True,
            concerns=["Fine Lines", "Dark Circles"],
        ),
        ManagedProduct(
            id="niacinamide",
            title="Niacinamide",
            description=(
                "A 10% niacinamide serum that helps control excess oil production and "
                "reduce the appearance of enlarged pores."
            ),
            price=Decimal("5.99"),
            image=_IMG.format("1620916566398-39f1143ab7be"),
            images=[_IMG.format("1620916566398-39f1143ab7be")],
            category="Serums",
            handle="niacinamide",
            tags=["oil-control", "pore-minimizing", "oily-skin"],
            variants=[_variant("niacinamide", "30ml", "5.99", "INKEY-NIA-30ML", available=False)],
            available=False,
            featured=False,
            concerns=["Oil Control", "Large Pores"],
        ),
        ManagedProduct(
            id="vitamin-c-serum",
            title="Vitamin C Serum",
            description=(
                "A potent vitamin C serum that brightens skin and helps reduce dark "
                "spots for a more even complexion."
            ),
            price=Decimal("9.99"),
            compare_at_price=Decimal("12.99"),
            image=_IMG.format("1571875257727-256c39da42af"),
            images=[_IMG.format("1571875257727-256c39da42af")],
            category="Serums",
            handle="vitamin-c-serum",
            tags=["brightening", "vitamin-c", "dark-spots"],
            variants=[
                _variant("vitamin-c-serum", "30ml", "9.99", "INKEY-VIT-C-30ML", compare_at="12.99")
            ],
            available=True,
            featured=False,
            concerns=["Dark Spots", "Dullness"],
        ),
        ManagedProduct(
            id="caffeine-eye-serum",
            title="Caffeine Eye Serum",
            description=(
                "A caffeine-infused eye serum that helps reduce puffiness and the "
                "appearance of dark circles."
            ),
            price=Decimal("6.99"),
            image=_IMG.format("1594824704818-61db69c33bb3"),
            images=[_IMG.format("1594824704818-61db69c33bb3")],
            category="Eye Care",
            handle="caffeine-eye-serum",
            tags=["caffeine", "eye-care", "depuffing"],
            variants=[_variant("caffeine-eye-serum", "15ml", "6.99", "INKEY-CAFF-EYE-15ML")],
            available=True,
            featured=True,
            concerns=["Puffiness", "Dark Circles"],
        ),
        ManagedProduct(
            id="salicylic-acid-cleanser",
            title="Salicylic Acid Cleanser",
            description=(
                "A gentle yet effective cleanser with salicylic acid that deeply "
                "cleanses and helps unclog pores."
            ),
            price=Decimal("8.99"),
            image=_IMG.format("1571019613454-1cb2f99b2d8b"),
            images=[_IMG.format("1571019613454-1cb2f99b2d8b")],
            category="Cleansers",
            handle="salicylic-acid-cleanser",
            tags=["salicylic-acid", "cleansing", "acne-prone"],
            variants=[
                _variant("salicylic-acid-cleanser", "150ml", "8.99", "INKEY-SA-CLEAN-150ML")
            ],
            available=True,
            featured=False,
            concerns=["Acne", "Clogged Pores"],
        ),
    ]
