"""Preference values selectable by visitors."""

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class Currency:
    """Display currency with a static exchange rate relative to GBP."""

    code: str
    symbol: str
    rate: float

    def to_storage(self) -> dict[str, object]:
        return {"code": self.code, "symbol": self.symbol, "rate": self.rate}


GBP = Currency(code="GBP", symbol="£", rate=1.0)

CURRENCIES: tuple[Currency, ...] = (
    GBP,
    Currency(code="USD", symbol="$", rate=1.27),
    Currency(code="EUR", symbol="€", rate=1.17),
    Currency(code="ZWL", symbol="Z$", rate=4600.0),
)

CURRENCIES_BY_CODE: dict[str, Currency] = {
    currency.code: currency for currency in CURRENCIES
}


class Theme(StrEnum):
    """Theme chosen by the visitor."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class ResolvedTheme(StrEnum):
    """Theme actually applied to the document."""

    LIGHT = "light"
    DARK = "dark"


THEME_CYCLE: dict[Theme, Theme] = {
    Theme.LIGHT: Theme.DARK,
    Theme.DARK: Theme.SYSTEM,
    Theme.SYSTEM: Theme.LIGHT,
}
