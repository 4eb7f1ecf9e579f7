"""Serverless handler endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from fastapi import APIRouter, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from zimbabwe_shipping.api.models import (
    AnnouncementNotificationRequest,
    CreatePaymentRequest,
    CreateShipmentRequest,
    EnableMfaRequest,
    GenerateMfaSecretRequest,
    SendEmailRequest,
    SupportNotificationRequest,
    VerifyMfaCodeRequest,
    VerifyMfaLoginRequest,
    VerifyPaymentRequest,
)
from zimbabwe_shipping.api.security import bearer_token
from zimbabwe_shipping.services.payment_verification import PaymentRecordError

if TYPE_CHECKING:
    from zimbabwe_shipping.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["functions"])

ModelT = TypeVar("ModelT", bound=BaseModel)

MISSING_PARAMETERS = "Missing required parameters"


class InvalidRequestError(ValueError):
    """Raised when a request body is not JSON or does not match its model."""


async def parse_body(request: Request, model: type[ModelT]) -> ModelT:
    """Read the JSON body and validate it against ``model``."""
    try:
        payload = await request.json()
    except ValueError as exc:
        raise InvalidRequestError("Request body must be valid JSON") from exc
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise InvalidRequestError(_describe(exc)) from exc


def _describe(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    if first["type"] == "value_error":
        return first["msg"].removeprefix("Value error, ")
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _origin(request: Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc}"


@router.post("/create-payment")
async def create_payment(request: Request) -> JSONResponse:
    """Create a card checkout session for a booking."""
    container = _container(request)
    try:
        body = await parse_body(request, CreatePaymentRequest)
        session = await container.payment_service.create_checkout_session(
            amount=body.amount,
            booking_data=body.booking_data,
            payment_method=body.payment_method,
            origin=_origin(request),
        )
    except Exception as exc:
        logger.exception("Error creating checkout session")
        return JSONResponse({"error": str(exc)}, status_code=500)
    return JSONResponse({"url": session.url, "sessionId": session.session_id})


@router.post("/verify-payment")
async def verify_payment(request: Request) -> JSONResponse:
    """Record a completed checkout and mark its shipment as paid."""
    container = _container(request)
    try:
        body = await parse_body(request, VerifyPaymentRequest)
        verified = await container.payment_verifier.verify(
            session_id=body.session_id, payment_id=body.payment_id
        )
    except PaymentRecordError as exc:
        return JSONResponse(
            {
                "error": "Database operation failed",
                "details": str(exc),
                "code": "DB_ERROR",
            },
            status_code=500,
        )
    except Exception as exc:
        logger.exception("Error verifying payment")
        return JSONResponse(
            {"error": str(exc), "code": "GENERAL_ERROR"}, status_code=500
        )
    return JSONResponse(
        {
            "success": True,
            "paymentId": verified.payment_id,
            "receiptId": verified.receipt_id,
        }
    )


@router.post("/create-shipment")
async def create_shipment(
    request: Request, authorization: str | None = Header(default=None)
) -> JSONResponse:
    """Store a new shipment for the signed-in caller."""
    container = _container(request)
    token = bearer_token(authorization)
    if token is None:
        return JSONResponse({"error": "Missing Authorization header"}, status_code=401)
    user = await container.auth_gateway.get_user(token)
    if user is None:
        return JSONResponse({"error": "Invalid or expired token"}, status_code=401)
    try:
        body = await parse_body(request, CreateShipmentRequest)
        created = container.shipment_service.create_shipment(
            body.shipment_data, user_id=user.id
        )
    except Exception as exc:
        logger.exception("Error creating shipment")
        return JSONResponse({"success": False, "error": str(exc)}, status_code=400)
    return JSONResponse(
        {
            "success": True,
            "shipment": created.shipment,
            "shipmentId": created.shipment_id,
            "trackingNumber": created.tracking_number,
        }
    )


@router.post("/generate-mfa-secret")
async def generate_mfa_secret(request: Request) -> JSONResponse:
    container = _container(request)
    try:
        body = await parse_body(request, GenerateMfaSecretRequest)
    except InvalidRequestError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    if body.user_id is None:
        return JSONResponse({"error": "User ID is required"}, status_code=400)
    enrollment = container.mfa_service.generate_secret(body.user_id)
    return JSONResponse({"secret": enrollment.secret, "qrCode": enrollment.qr_code})


@router.post("/enable-mfa")
async def enable_mfa(request: Request) -> JSONResponse:
    container = _container(request)
    try:
        body = await parse_body(request, EnableMfaRequest)
    except InvalidRequestError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    if body.user_id is None or not body.secret:
        return JSONResponse({"error": MISSING_PARAMETERS}, status_code=400)
    try:
        container.mfa_service.enable(body.user_id, body.secret)
    except Exception:
        logger.exception("Error enabling MFA", extra={"user_id": str(body.user_id)})
        return JSONResponse({"error": "Failed to enable MFA"}, status_code=500)
    return JSONResponse({"success": True})


@router.post("/verify-mfa-code")
async def verify_mfa_code(request: Request) -> JSONResponse:
    """Check a code against a secret the caller is enrolling."""
    container = _container(request)
    try:
        body = await parse_body(request, VerifyMfaCodeRequest)
    except InvalidRequestError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    if body.user_id is None or not body.secret or not body.token:
        return JSONResponse({"error": MISSING_PARAMETERS}, status_code=400)
    try:
        verified = container.mfa_service.verify_code(body.secret, body.token)
    except Exception:
        logger.exception("Error verifying MFA code")
        return JSONResponse({"error": "Failed to verify MFA code"}, status_code=500)
    return JSONResponse({"verified": verified})


@router.post("/verify-mfa-login")
async def verify_mfa_login(request: Request) -> JSONResponse:
    """Check a login code against the secret stored on the profile."""
    container = _container(request)
    try:
        body = await parse_body(request, VerifyMfaLoginRequest)
    except InvalidRequestError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    if body.user_id is None or not body.token:
        return JSONResponse({"error": MISSING_PARAMETERS}, status_code=400)
    try:
        result = container.mfa_service.verify_login(body.user_id, body.token)
    except Exception as exc:
        logger.exception("Error verifying MFA login")
        return JSONResponse(
            {"error": "Failed to verify MFA login", "details": str(exc)},
            status_code=500,
        )
    payload: dict[str, object] = {"verified": result.verified}
    if result.message:
        payload["message"] = result.message
    return JSONResponse(payload)


@router.post("/send-email")
async def send_email(request: Request) -> JSONResponse:
    container = _container(request)
    try:
        body = await parse_body(request, SendEmailRequest)
        await container.email_service.send_auth_email(
            email_type=body.type,
            email=body.email,
            token=body.token,
            redirect_to=body.redirect_to,
        )
    except Exception as exc:
        logger.exception("Email sending error")
        return JSONResponse({"success": False, "message": str(exc)}, status_code=500)
    return JSONResponse({"success": True, "message": "Email sent successfully"})


@router.post("/send-announcement-notification")
async def send_announcement_notification(request: Request) -> JSONResponse:
    container = _container(request)
    try:
        body = await parse_body(request, AnnouncementNotificationRequest)
        if body.announcement_id is None:
            raise InvalidRequestError("Announcement ID is required")
        result = container.notification_service.notify_announcement(
            body.announcement_id
        )
    except Exception as exc:
        logger.exception("Error in send-announcement-notification")
        return JSONResponse({"success": False, "error": str(exc)}, status_code=500)
    return JSONResponse(
        {"success": True, "message": result.message, "count": result.count}
    )


@router.post("/send-support-notification")
async def send_support_notification(request: Request) -> JSONResponse:
    container = _container(request)
    try:
        body = await parse_body(request, SupportNotificationRequest)
    except InvalidRequestError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    if body.ticket_id is None or body.user_id is None:
        return JSONResponse({"error": MISSING_PARAMETERS}, status_code=400)
    try:
        notification = container.notification_service.notify_ticket_response(
            body.ticket_id, body.user_id, body.message_preview
        )
    except Exception as exc:
        logger.exception(
            "Error sending support notification",
            extra={"ticket_id": str(body.ticket_id)},
        )
        return JSONResponse({"error": str(exc)}, status_code=500)
    return JSONResponse({"success": True, "notification": notification})


@router.post("/get-collection-schedules")
async def get_collection_schedules(request: Request) -> JSONResponse:
    container = _container(request)
    try:
        schedules = container.collection_schedule_service.list_schedules()
    except Exception as exc:
        logger.exception("Error fetching collection schedules")
        return JSONResponse({"error": str(exc)}, status_code=500)
    return JSONResponse({"data": [schedule.to_dict() for schedule in schedules]})
