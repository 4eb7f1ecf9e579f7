"""Currency and theme preference contexts backed by local storage."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

from zimbabwe_shipping.domain.preferences import (
    CURRENCIES,
    CURRENCIES_BY_CODE,
    GBP,
    THEME_CYCLE,
    Currency,
    ResolvedTheme,
    Theme,
)
from zimbabwe_shipping.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

CURRENCY_STORAGE_KEY = "selectedCurrency"
THEME_STORAGE_KEY = "theme"

T = TypeVar("T")


class UnknownCurrencyError(ValueError):
    """Raised when selecting a currency outside the fixed set."""


@dataclass
class _Subscribers(Generic[T]):
    listeners: list[Callable[[T], None]] = field(default_factory=list)

    def add(self, listener: Callable[[T], None]) -> Callable[[], None]:
        self.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def notify(self, value: T) -> None:
        for listener in list(self.listeners):
            listener(value)

    def clear(self) -> None:
        self.listeners.clear()


class CurrencyPreference:
    """Selected display currency; exactly one is selected at all times."""

    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage
        self._selected = _load_currency(storage)
        self._subscribers: _Subscribers[Currency] = _Subscribers()

    @property
    def currencies(self) -> tuple[Currency, ...]:
        return CURRENCIES

    @property
    def selected(self) -> Currency:
        return self._selected

    def set_currency(self, code: str) -> Currency:
        """Select a known currency, persist it and notify subscribers."""
        currency = CURRENCIES_BY_CODE.get(code.upper())
        if currency is None:
            raise UnknownCurrencyError(f"Unsupported currency: {code}")
        self._selected = currency
        self.storage.set_item(CURRENCY_STORAGE_KEY, json.dumps(currency.to_storage()))
        self._subscribers.notify(currency)
        return currency

    def format_price(self, amount: float) -> str:
        """Convert a GBP amount and render it with the currency symbol."""
        converted = amount * self._selected.rate
        return f"{self._selected.symbol}{converted:.2f}"

    def subscribe(self, listener: Callable[[Currency], None]) -> Callable[[], None]:
        return self._subscribers.add(listener)

    def close(self) -> None:
        self._subscribers.clear()


def _load_currency(storage: KeyValueStorage) -> Currency:
    raw = storage.get_item(CURRENCY_STORAGE_KEY)
    if not raw:
        return GBP
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored currency is not valid JSON; using GBP")
        return GBP
    code = data.get("code") if isinstance(data, dict) else None
    if not isinstance(code, str):
        return GBP
    return CURRENCIES_BY_CODE.get(code, GBP)


class ColorSchemeSource(Protocol):
    """Operating system color-scheme preference."""

    def prefers_dark(self) -> bool:
        """Return True when the OS prefers a dark color scheme."""

    def add_listener(self, listener: Callable[[bool], None]) -> Callable[[], None]:
        """Call listener with the new preference; returns a remover."""


@dataclass
class StaticColorScheme(ColorSchemeSource):
    """Color-scheme source whose value is set programmatically."""

    dark: bool = False
    _listeners: _Subscribers[bool] = field(default_factory=_Subscribers)

    def prefers_dark(self) -> bool:
        return self.dark

    def add_listener(self, listener: Callable[[bool], None]) -> Callable[[], None]:
        return self._listeners.add(listener)

    def set_prefers_dark(self, dark: bool) -> None:
        if dark == self.dark:
            return
        self.dark = dark
        self._listeners.notify(dark)


@dataclass
class DocumentRoot:
    """Document-level attributes the theme is applied to."""

    attributes: dict[str, str] = field(default_factory=dict)

    def apply_theme(self, theme: ResolvedTheme) -> None:
        self.attributes["class"] = theme.value
        self.attributes["data-theme"] = theme.value


class ThemePreference:
    """Selected theme with OS preference tracking in system mode."""

    def __init__(
        self,
        storage: KeyValueStorage,
        color_scheme: ColorSchemeSource,
        document: DocumentRoot | None = None,
    ) -> None:
        self.storage = storage
        self.color_scheme = color_scheme
        self.document = document or DocumentRoot()
        self._theme = _load_theme(storage)
        self._subscribers: _Subscribers[ResolvedTheme] = _Subscribers()
        self._resolved = self._resolve()
        self.document.apply_theme(self._resolved)
        self._remove_os_listener: Callable[[], None] | None = (
            color_scheme.add_listener(self._on_color_scheme_change)
        )

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def resolved_theme(self) -> ResolvedTheme:
        return self._resolved

    def set_theme(self, theme: Theme | str) -> Theme:
        """Select a theme, persist it and apply the resolved value."""
        self._theme = Theme(theme)
        self.storage.set_item(THEME_STORAGE_KEY, self._theme.value)
        self._update_resolved()
        return self._theme

    def toggle_theme(self) -> Theme:
        """Cycle light -> dark -> system -> light."""
        return self.set_theme(THEME_CYCLE[self._theme])

    def subscribe(
        self, listener: Callable[[ResolvedTheme], None]
    ) -> Callable[[], None]:
        return self._subscribers.add(listener)

    def close(self) -> None:
        if self._remove_os_listener is not None:
            self._remove_os_listener()
            self._remove_os_listener = None
        self._subscribers.clear()

    def _on_color_scheme_change(self, _prefers_dark: bool) -> None:
        if self._theme is Theme.SYSTEM:
            self._update_resolved()

    def _update_resolved(self) -> None:
        self._resolved = self._resolve()
        self.document.apply_theme(self._resolved)
        self._subscribers.notify(self._resolved)

    def _resolve(self) -> ResolvedTheme:
        if self._theme is Theme.SYSTEM:
            if self.color_scheme.prefers_dark():
                return ResolvedTheme.DARK
            return ResolvedTheme.LIGHT
        return ResolvedTheme(self._theme.value)


def _load_theme(storage: KeyValueStorage) -> Theme:
    raw = storage.get_item(THEME_STORAGE_KEY)
    try:
        return Theme(raw) if raw else Theme.SYSTEM
    except ValueError:
        return Theme.SYSTEM
