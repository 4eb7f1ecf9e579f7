"""Public quote, page metadata and collection route endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from zimbabwe_shipping.api.models import QuoteRequest
from zimbabwe_shipping.services.pricing import (
    PackageType,
    calculate_additional_charges,
    calculate_shipping_cost,
    quote_options,
)
from zimbabwe_shipping.services.seo import (
    canonical_url,
    clean_url,
    page_meta,
    truncate_description,
)
from zimbabwe_shipping.services.validation import validate_shipping_details

if TYPE_CHECKING:
    from zimbabwe_shipping.containers import AppContainer

router = APIRouter(tags=["catalog"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/quote")
async def quote(body: QuoteRequest) -> dict[str, object]:
    """Price a drum or parcel across every service tier."""
    weight = None
    if body.package_type is PackageType.PARCEL:
        weight = validate_shipping_details(body.weight).weight
    base_rate = calculate_shipping_cost(body.origin, body.destination)
    additional = calculate_additional_charges(
        weight=weight,
        express=body.express,
        insurance=body.insurance,
        fragile=body.fragile,
    )
    return {
        "packageType": body.package_type.value,
        "baseRate": base_rate,
        "additionalCharges": additional,
        "total": base_rate + additional,
        "options": [
            {
                "id": option.tier.id,
                "name": option.tier.name,
                "price": option.price,
                "deliveryTime": option.tier.delivery_time,
            }
            for option in quote_options(body.package_type, weight or 1.0)
        ],
    }


@router.get("/page-meta/{page_type}")
async def get_page_meta(page_type: str, request: Request) -> dict[str, str]:
    meta = page_meta(page_type)
    site_url = _container(request).settings.site_url
    slug = "" if page_type == "home" else clean_url(page_type)
    return {
        "title": meta.title,
        "description": truncate_description(meta.description),
        "keywords": meta.keywords,
        "canonicalUrl": canonical_url(f"{site_url.rstrip('/')}/{slug}"),
    }


@router.get("/collection-schedules/route")
async def find_collection_route(city: str, request: Request) -> dict[str, object]:
    """Return the collection route and date serving a UK city."""
    route = _container(request).collection_schedule_service.find_route(city)
    if route is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"route": route.route, "date": route.date, "areas": list(route.areas)}
