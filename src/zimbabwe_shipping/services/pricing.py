"""Shipping cost lookup tables and quote helpers.

All amounts are GBP. Conversion for display happens in the currency
preference.
"""

from dataclasses import dataclass
from enum import StrEnum

ROUTE_RATES: dict[str, float] = {
    "uk-zw": 350.0,
    "ie-zw": 380.0,
    "us-zw": 480.0,
    "ca-zw": 490.0,
}
DEFAULT_ROUTE_RATE = 400.0

FREE_WEIGHT_KG = 20.0
EXCESS_WEIGHT_RATE = 5.0
EXPRESS_CHARGE = 75.0
INSURANCE_CHARGE = 25.0
FRAGILE_CHARGE = 15.0


class PackageType(StrEnum):
    PARCEL = "parcel"
    DRUM = "drum"


@dataclass(frozen=True)
class ServiceTier:
    """Shipping speed option with drum and per-kilogram parcel prices."""

    id: str
    name: str
    drum_price: float
    parcel_rate_per_kg: float
    delivery_time: str


SERVICE_TIERS: tuple[ServiceTier, ...] = (
    ServiceTier("standard", "Standard Shipping", 260.0, 50.0, "2-3 weeks"),
    ServiceTier("express", "Express Shipping", 350.0, 75.0, "10-14 days"),
    ServiceTier("premium", "Premium Shipping", 450.0, 100.0, "7-10 days"),
)


@dataclass(frozen=True)
class QuoteOption:
    tier: ServiceTier
    price: float


def calculate_shipping_cost(origin: str, destination: str) -> float:
    """Return the base rate for a route such as ``uk`` -> ``zw``."""
    route_key = f"{origin.lower()}-{destination.lower()}"
    return ROUTE_RATES.get(route_key, DEFAULT_ROUTE_RATE)


def calculate_additional_charges(
    *,
    weight: float | None = None,
    express: bool = False,
    insurance: bool = False,
    fragile: bool = False,
) -> float:
    """Return surcharges for heavy parcels and optional extras."""
    total = 0.0
    if weight and weight > FREE_WEIGHT_KG:
        total += (weight - FREE_WEIGHT_KG) * EXCESS_WEIGHT_RATE
    if express:
        total += EXPRESS_CHARGE
    if insurance:
        total += INSURANCE_CHARGE
    if fragile:
        total += FRAGILE_CHARGE
    return total


def quote_options(
    package_type: PackageType | str, weight: float = 1.0
) -> list[QuoteOption]:
    """Price every service tier for a drum or a parcel of the given weight."""
    kind = PackageType(package_type)
    options = []
    for tier in SERVICE_TIERS:
        if kind is PackageType.DRUM:
            price = tier.drum_price
        else:
            price = tier.parcel_rate_per_kg * weight
        options.append(QuoteOption(tier=tier, price=price))
    return options
