"""Site content managed from the dashboard: homepage, banners and global settings."""

from typing import Literal

from pydantic import BaseModel, Field


class ImageAsset(BaseModel):
    url: str
    alt: str | None = None


class CallToAction(BaseModel):
    text: str
    link: str


class HeroOverlay(BaseModel):
    enabled: bool = False
    opacity: float = Field(default=0.4, ge=0, le=1)
    color: str = "#000000"


class HeroSection(BaseModel):
    headline: str
    subheadline: str
    background_image: ImageAsset | None = None
    cta_button: CallToAction
    overlay: HeroOverlay | None = None


class FeaturedProductsSection(BaseModel):
    enabled: bool = True
    title: str
    subtitle: str | None = None
    product_tags: list[str] = Field(default_factory=list)
    limit: int = Field(default=8, ge=1)


class CategoriesSection(BaseModel):
    enabled: bool = True
    title: str
    subtitle: str | None = None
    featured_categories: list[str] = Field(default_factory=list)


class Testimonial(BaseModel):
    name: str
    text: str
    rating: int = Field(ge=1, le=5)
    verified: bool = False


class TestimonialsSection(BaseModel):
    enabled: bool = True
    title: str
    testimonials: list[Testimonial] = Field(default_factory=list)


class SeoSettings(BaseModel):
    title: str
    description: str
    og_image: ImageAsset | None = None


class HomepageContent(BaseModel):
    id: str
    title: str
    meta_description: str | None = None
    hero_section: HeroSection
    featured_products_section: FeaturedProductsSection
    categories_section: CategoriesSection
    testimonials_section: TestimonialsSection
    seo: SeoSettings


class BannerLink(BaseModel):
    text: str
    url: str


BannerType = Literal["info", "warning", "success", "error"]


class Banner(BaseModel):
    """A site-wide notice shown on the pages listed in ``target_pages``."""

    id: str
    title: str
    message: str
    type: BannerType = "info"
    link: BannerLink | None = None
    is_active: bool = True
    start_date: str | None = None
    end_date: str | None = None
    target_pages: list[str] = Field(default_factory=list)


class SocialLinks(BaseModel):
    instagram: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    youtube: str | None = None


class ContactInfo(BaseModel):
    email: str
    phone: str | None = None
    address: str | None = None


class CookiePolicy(BaseModel):
    enabled: bool = True
    message: str
    policy_link: str


class GlobalContent(BaseModel):
    id: str
    site_title: str
    site_description: str
    logo: ImageAsset | None = None
    favicon: ImageAsset | None = None
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    contact_info: ContactInfo
    footer_text: str
    cookie_policy: CookiePolicy | None = None
