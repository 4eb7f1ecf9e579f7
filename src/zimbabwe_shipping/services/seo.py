"""Page metadata tables and URL helpers for search engines."""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PageMeta:
    title: str
    description: str
    keywords: str


BASE_META = PageMeta(
    title="Zimbabwe Shipping",
    description="Professional shipping services from UK to Zimbabwe",
    keywords="Zimbabwe shipping, courier, freight",
)

PAGE_META: dict[str, PageMeta] = {
    "home": PageMeta(
        title="Zimbabwe Shipping | Professional UK to Zimbabwe Courier Services",
        description=(
            "Professional Zimbabwe shipping and freight services from the UK. "
            "Secure door-to-door delivery, competitive rates, reliable transit "
            "times."
        ),
        keywords=(
            "Zimbabwe courier, UK Zimbabwe freight, professional shipping, "
            "Zimbabwe logistics"
        ),
    ),
    "pricing": PageMeta(
        title="Shipping Rates & Pricing | Zimbabwe Shipping",
        description=(
            "Transparent pricing for UK to Zimbabwe shipping. Competitive rates "
            "for parcels, freight, and door-to-door delivery services."
        ),
        keywords=(
            "Zimbabwe shipping rates, courier prices, freight costs, "
            "parcel delivery prices"
        ),
    ),
    "services": PageMeta(
        title="Shipping Services | Zimbabwe Shipping",
        description=(
            "Comprehensive shipping services including parcel delivery, freight "
            "forwarding, and door-to-door courier services to Zimbabwe."
        ),
        keywords=(
            "shipping services Zimbabwe, freight forwarding, parcel delivery, "
            "courier services"
        ),
    ),
    "track": PageMeta(
        title="Track Your Shipment | Zimbabwe Shipping",
        description=(
            "Track your parcel or freight shipment to Zimbabwe. Enter your "
            "tracking number for live updates."
        ),
        keywords=(
            "track shipment Zimbabwe, parcel tracking, freight tracking, "
            "delivery status"
        ),
    ),
    "contact": PageMeta(
        title="Contact Us | Zimbabwe Shipping",
        description=(
            "Get in touch with Zimbabwe Shipping for quotes, support, and "
            "inquiries."
        ),
        keywords=(
            "contact Zimbabwe shipping, customer support, get quote, "
            "shipping inquiry"
        ),
    ),
}


def page_meta(page_type: str) -> PageMeta:
    """Return metadata for a page, falling back to the site defaults."""
    return PAGE_META.get(page_type, BASE_META)


def clean_url(url: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", url.lower()).strip("-")


def generate_slug(title: str) -> str:
    slug = re.sub(r"[^\w\s-]", "", title.lower().strip())
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def truncate_description(text: str, max_length: int = 160) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def canonical_url(url: str) -> str:
    """Drop the query string and any trailing slash."""
    return url.split("?", 1)[0].rstrip("/")
