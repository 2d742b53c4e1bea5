"""Product documents stored in Sanity, as managed from the admin dashboard."""

from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from src.storefront.core.services.sanity.sanity_client import SanityClient
from src.storefront.core.utils.product_utils import generate_handle

PRODUCT_PROJECTION = """{
  _id,
  _type,
  name,
  slug,
  description,
  price,
  inStock,
  featured,
  skinConcerns,
  ingredients,
  benefits,
  howToUse,
  category->{
    _id,
    name,
    slug
  },
  images[]{
    asset->{
      _id,
      url
    },
    alt
  },
  _createdAt,
  _updatedAt
}"""

CATEGORY_QUERY = """*[_type == "category"] | order(name asc) {
  _id,
  name,
  slug,
  description
}"""


class SanityProductFilters(BaseModel):
    search: str | None = None
    category: str | None = None
    in_stock: bool | None = None
    featured: bool | None = None


class SanityProductInput(BaseModel):
    """Admin payload for creating or patching a Sanity product.

    ``name`` and ``title`` are interchangeable; ``title`` is what the dashboard
    sends.
    """

    name: str | None = None
    title: str | None = None
    handle: str | None = None
    description: str | None = None
    price: float | None = None
    in_stock: bool | None = None
    featured: bool | None = None
    skin_concerns: list[str] | None = None
    ingredients: list[str] | None = None
    benefits: list[str] | None = None
    how_to_use: str | None = None

    @property
    def display_name(self) -> str | None:
        return self.name or self.title


class AdminProduct(BaseModel):
    """A Sanity product flattened for the dashboard product table."""

    id: str
    handle: str
    title: str
    description: str = ""
    price: float = 0
    images: list[str] = Field(default_factory=list)
    category: str = "Uncategorized"
    skin_concerns: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    how_to_use: str = ""
    in_stock: bool = True
    featured: bool = False
    created_at: str | None = None
    updated_at: str | None = None


def build_product_query(filters: SanityProductFilters) -> tuple[str, dict[str, Any]]:
    """Build the GROQ listing query and its parameters for ``filters``."""
    clauses = ['_type == "product"']
    params: dict[str, Any] = {}

    if filters.search:
        clauses.append("(name match $search || description match $search)")
        params["search"] = f"*{filters.search}*"
    if filters.category:
        clauses.append("category->slug.current == $category")
        params["category"] = filters.category
    if filters.in_stock is not None:
        clauses.append("inStock == $inStock")
        params["inStock"] = filters.in_stock
    if filters.featured is not None:
        clauses.append("featured == $featured")
        params["featured"] = filters.featured

    query = f"*[{' && '.join(clauses)}] | order(_createdAt desc) {PRODUCT_PROJECTION}"
    return query, params


def convert_to_admin_format(document: dict[str, Any]) -> AdminProduct:
    category = document.get("category") or {}
    return AdminProduct(
        id=document["_id"],
        handle=(document.get("slug") or {}).get("current", ""),
        title=document.get("name") or "",
        description=document.get("description") or "",
        price=document.get("price") or 0,
        images=[
            image["asset"]["url"]
            for image in document.get("images") or []
            if image.get("asset") and image["asset"].get("url")
        ],
        category=category.get("name") or "Uncategorized",
        skin_concerns=document.get("skinConcerns") or [],
        ingredients=document.get("ingredients") or [],
        benefits=document.get("benefits") or [],
        how_to_use=document.get("howToUse") or "",
        in_stock=bool(document.get("inStock")),
        featured=bool(document.get("featured")),
        created_at=document.get("_createdAt"),
        updated_at=document.get("_updatedAt"),
    )


def to_sanity_document(data: SanityProductInput) -> dict[str, Any]:
    """A complete product document, filling gaps with dashboard defaults."""
    name = data.display_name or "Untitled Product"
    return {
        "_type": "product",
        "name": name,
        "slug": {"current": data.handle or generate_handle(data.display_name or "untitled")},
        "description": data.description or "No description provided",
        "price": data.price if data.price is not None else 0,
        "inStock": data.in_stock if data.in_stock is not None else True,
        "featured": data.featured if data.featured is not None else False,
        "skinConcerns": data.skin_concerns or [],
        "ingredients": data.ingredients or [],
        "benefits": data.benefits or [],
        "howToUse": data.how_to_use or "",
    }


def to_sanity_patch(data: SanityProductInput) -> dict[str, Any]:
    """Only the fields the admin actually sent, renamed for Sanity."""
    fields: dict[str, Any] = {}
    if data.display_name:
        fields["name"] = data.display_name
    if data.description:
        fields["description"] = data.description
    if data.price is not None:
        fields["price"] = data.price
    if data.in_stock is not None:
        fields["inStock"] = data.in_stock
    if data.featured is not None:
        fields["featured"] = data.featured
    if data.skin_concerns:
        fields["skinConcerns"] = data.skin_concerns
    if data.ingredients:
        fields["ingredients"] = data.ingredients
    if data.benefits:
        fields["benefits"] = data.benefits
    if data.how_to_use:
        fields["howToUse"] = data.how_to_use
    if data.handle:
        fields["slug"] = {"current": data.handle}
    return fields


class SanityProductService:
    def __init__(self, client: SanityClient | None = None):
        self._client = client or SanityClient()

    @property
    def client(self) -> SanityClient:
        return self._client

    async def list_products(
        self, filters: SanityProductFilters | None = None
    ) -> list[AdminProduct]:
        query, params = build_product_query(filters or SanityProductFilters())
        documents = await self._client.query(query, params) or []
        logger.info("Fetched {} products from Sanity", len(documents))
        return [convert_to_admin_format(doc) for doc in documents]

    async def get_product(self, product_id: str) -> AdminProduct | None:
        query = f'*[_type == "product" && _id == $productId][0] {PRODUCT_PROJECTION}'
        document = await self._client.query(query, {"productId": product_id})
        return convert_to_admin_format(document) if document else None

    async def create_product(self, data: SanityProductInput) -> AdminProduct:
        document = await self._client.create(to_sanity_document(data))
        logger.bind(product_id=document.get("_id")).info("sanity.product.created")
        return convert_to_admin_format(document)

    async def update_product(self, product_id: str, data: SanityProductInput) -> AdminProduct:
        document = await self._client.patch_set(product_id, to_sanity_patch(data))
        logger.bind(product_id=product_id).info("sanity.product.updated")
        return convert_to_admin_format(document)

    async def delete_product(self, product_id: str) -> None:
        await self._client.delete(product_id)
        logger.bind(product_id=product_id).info("sanity.product.deleted")

    async def list_categories(self) -> list[dict[str, Any]]:
        return await self._client.query(CATEGORY_QUERY) or []
