"""Address book and review endpoints for signed-in customers."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from zimbabwe_shipping.api.security import require_user
from zimbabwe_shipping.domain.models import UserRecord
from zimbabwe_shipping.services.validation import AddressForm, ReviewForm

if TYPE_CHECKING:
    from zimbabwe_shipping.containers import AppContainer

router = APIRouter(tags=["account"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/addresses")
async def list_addresses(
    request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's saved addresses, default first."""
    addresses = _container(request).address_service.list_addresses(user.id)
    return {"addresses": [asdict(address) for address in addresses]}


@router.post("/addresses", status_code=status.HTTP_201_CREATED)
async def create_address(
    form: AddressForm, request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    address = _container(request).address_service.create_address(user.id, form)
    return asdict(address)


@router.put("/addresses/{address_id}")
async def update_address(
    address_id: UUID,
    form: AddressForm,
    request: Request,
    user: UserRecord = Depends(require_user),
) -> dict[str, object]:
    address = _container(request).address_service.update_address(
        user.id, address_id, form
    )
    if address is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return asdict(address)


@router.delete("/addresses/{address_id}")
async def delete_address(
    address_id: UUID, request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    deleted = _container(request).address_service.delete_address(user.id, address_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"success": True}


@router.post("/addresses/{address_id}/default")
async def set_default_address(
    address_id: UUID, request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    """Make an address the default, clearing the previous default."""
    address = _container(request).address_service.set_default(user.id, address_id)
    if address is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return asdict(address)


@router.get("/reviews")
async def list_reviews(request: Request, limit: int = 20) -> dict[str, object]:
    """Return the newest published reviews."""
    reviews = _container(request).review_service.list_reviews(limit)
    return {"reviews": [asdict(review) for review in reviews]}


@router.post("/reviews", status_code=status.HTTP_201_CREATED)
async def submit_review(
    form: ReviewForm, request: Request, user: UserRecord = Depends(require_user)
) -> dict[str, object]:
    review = _container(request).review_service.submit_review(user.id, form)
    return asdict(review)
