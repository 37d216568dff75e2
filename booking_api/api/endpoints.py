"""
FastAPI Endpoints for the Car Service Booking API

Endpoints only handle:
- Request parsing (Pydantic models)
- Authentication / authorization dependencies
- Delegating to the service layer

Errors are not caught here: service exceptions propagate to the
exception handlers registered in ``main``.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Response
from sqlmodel.ext.asyncio.session import AsyncSession

from booking_api.api.dependencies import get_current_identity, get_settings, get_token_service
from booking_api.api.schemas import (
    BookingCreate,
    BookingStatusUpdate,
    DeleteAcknowledgment,
    Document,
    InsertAcknowledgment,
    LoginRequest,
    SessionResponse,
    UpdateAcknowledgment,
)
from booking_api.core.exceptions import OwnershipMismatchError
from booking_api.core.security import Identity, TokenService
from booking_api.core.setting import Settings
from booking_api.db.session import get_session
from booking_api.services.booking_service import BookingService
from booking_api.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/services",
    response_model=list[Document],
    tags=["Services"],
    summary="List services",
)
async def list_services(session: AsyncSession = Depends(get_session)) -> list[Document]:
    return await CatalogService(session).list_services()


@router.get(
    "/services/{service_id}",
    response_model=Optional[Document],
    tags=["Services"],
    summary="Get a service",
    description="Returns the service document, or null when no service has this identifier",
)
async def get_service(
    service_id: str,
    session: AsyncSession = Depends(get_session)
) -> Optional[Document]:
    return await CatalogService(session).get_service(service_id)


@router.get(
    "/bookings",
    response_model=list[Document],
    tags=["Bookings"],
    summary="List bookings of the signed-in user",
)
async def list_bookings(
    email: Optional[str] = None,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_session)
) -> list[Document]:
    """
    List the bookings owned by ``email``.

    Requires a valid session cookie whose identity matches ``email``;
    a missing or different ``email`` is rejected as unauthorized access.
    """
    if identity.email != email:
        logger.warning("Booking list for %r refused to %r", email, identity.email)
        raise OwnershipMismatchError(identity.email, email)

    return await BookingService(session).list_bookings(email)


@router.post(
    "/bookings",
    response_model=InsertAcknowledgment,
    tags=["Bookings"],
    summary="Create a booking",
)
async def create_booking(
    body: BookingCreate,
    session: AsyncSession = Depends(get_session)
) -> InsertAcknowledgment:
    booking_id = await BookingService(session).create_booking(body.model_dump())
    logger.info("Created booking %s", booking_id)
    return InsertAcknowledgment(inserted_id=booking_id)


@router.delete(
    "/bookings/{booking_id}",
    response_model=DeleteAcknowledgment,
    tags=["Bookings"],
    summary="Delete a booking",
)
async def delete_booking(
    booking_id: str,
    session: AsyncSession = Depends(get_session)
) -> DeleteAcknowledgment:
    deleted = await BookingService(session).delete_booking(booking_id)
    return DeleteAcknowledgment(deleted_count=deleted)


@router.patch(
    "/bookings/{booking_id}",
    response_model=UpdateAcknowledgment,
    tags=["Bookings"],
    summary="Update a booking's status",
)
async def update_booking_status(
    booking_id: str,
    body: BookingStatusUpdate,
    session: AsyncSession = Depends(get_session)
) -> UpdateAcknowledgment:
    matched, modified = await BookingService(session).update_status(booking_id, body.status)
    return UpdateAcknowledgment(matched_count=matched, modified_count=modified)


@router.post(
    "/jwt",
    response_model=SessionResponse,
    tags=["Session"],
    summary="Sign in",
    description="Issues a session token for the posted identity and stores it in an httpOnly cookie",
)
async def issue_token(
    body: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
    tokens: TokenService = Depends(get_token_service),
) -> SessionResponse:
    claims: dict[str, Any] = body.model_dump()
    token = tokens.issue(claims)
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
    )
    logger.info("Issued session token for %s", body.email)
    return SessionResponse(success=True)


@router.post(
    "/logout",
    response_model=SessionResponse,
    tags=["Session"],
    summary="Sign out",
)
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> SessionResponse:
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
    )
    return SessionResponse(success=True)
