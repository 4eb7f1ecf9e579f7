"""Route guards deciding what a visitor sees on protected pages."""

from dataclasses import dataclass
from typing import TypeVar

from zimbabwe_shipping.domain.models import UserRecord
from zimbabwe_shipping.services.auth_session import SessionProvider

T = TypeVar("T")

HOME_ROUTE = "/"
AUTH_ROUTE = "/auth"
DASHBOARD_ROUTE = "/dashboard"


@dataclass(frozen=True)
class Placeholder:
    """Rendered while the session is still loading."""

    text: str = "Loading..."


@dataclass(frozen=True)
class Redirect:
    """Navigate elsewhere instead of rendering."""

    to: str
    replace: bool = True


LOADING = Placeholder()


def guard_route(
    content: T,
    *,
    is_loading: bool,
    user: UserRecord | None,
    redirect_to: str = HOME_ROUTE,
) -> T | Placeholder | Redirect:
    """Return the content for signed-in users, otherwise a redirect."""
    if is_loading:
        return LOADING
    if user is None:
        return Redirect(to=redirect_to)
    return content


def require_admin(
    content: T,
    *,
    is_loading: bool,
    user: UserRecord | None,
    is_admin: bool,
) -> T | Placeholder | Redirect:
    """Guard admin pages; the flag is advisory, the backend re-checks."""
    if is_loading:
        return LOADING
    if user is None:
        return Redirect(to=AUTH_ROUTE)
    if not is_admin:
        return Redirect(to=DASHBOARD_ROUTE)
    return content


def guard_for(provider: SessionProvider, content: T) -> T | Placeholder | Redirect:
    """Apply :func:`guard_route` to the provider's current state."""
    return guard_route(content, is_loading=provider.is_loading, user=provider.user)


def guard_admin_for(
    provider: SessionProvider, content: T
) -> T | Placeholder | Redirect:
    """Apply :func:`require_admin` to the provider's current state."""
    return require_admin(
        content,
        is_loading=provider.is_loading,
        user=provider.user,
        is_admin=provider.is_admin,
    )
