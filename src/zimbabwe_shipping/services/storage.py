"""Key-value storage used for visitor preferences and CSRF tokens."""

from dataclasses import dataclass, field
from typing import Protocol


class KeyValueStorage(Protocol):
    """String key-value store with browser local-storage semantics."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value or None."""

    def set_item(self, key: str, value: str) -> None:
        """Store a value."""

    def remove_item(self, key: str) -> None:
        """Delete a value if present."""


@dataclass
class InMemoryStorage(KeyValueStorage):
    """Process-local storage used by tests and headless clients."""

    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)
