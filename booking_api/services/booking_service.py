"""
Booking Service

Business logic for the ``bookings`` collection: list by owner, insert the
client's body verbatim, set the status, delete.

Writes report acknowledgments the way a document store does (matched /
modified / deleted counts) instead of failing on a missing document.
"""

from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from booking_api.core.exceptions import DatabaseError
from booking_api.core.validators import parse_identifier
from booking_api.db.models import BookingRecord


class BookingService:
    """
    Core business logic for bookings.

    Separated from the API layer for testability; every method maps
    SQLAlchemy failures to DatabaseError.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_bookings(self, email: Optional[str] = None) -> list[dict[str, Any]]:
        """
        List bookings, optionally restricted to one owner.

        Args:
            email: Owner email; None returns every booking
        """
        statement = select(BookingRecord).order_by(BookingRecord.created_at)
        if email is not None:
            statement = statement.where(BookingRecord.email == email)
        try:
            result = await self.session.exec(statement)
            return [record.to_document() for record in result.all()]
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to list bookings", original_error=e) from e

    async def create_booking(self, document: dict[str, Any]) -> str:
        """
        Store a booking exactly as the client sent it.

        Returns:
            Identifier of the new booking
        """
        record = BookingRecord.from_document(document)
        try:
            self.session.add(record)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError("Failed to create booking", original_error=e) from e
        return record.id

    async def update_status(self, booking_id: str, status: str) -> tuple[int, int]:
        """
        Set the ``status`` field of one booking; no other field is touched.

        Returns:
            (matched, modified) counts, each 0 or 1
        """
        identifier = parse_identifier(booking_id)
        try:
            record = await self.session.get(BookingRecord, identifier)
            if record is None:
                return 0, 0
            if record.status == status:
                return 1, 0
            record.status = status
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError(f"Failed to update booking {identifier}", original_error=e) from e
        return 1, 1

    async def delete_booking(self, booking_id: str) -> int:
        """
        Delete one booking.

        Returns:
            Number of deleted bookings (0 when it did not exist)
        """
        identifier = parse_identifier(booking_id)
        try:
            record = await self.session.get(BookingRecord, identifier)
            if record is None:
                return 0
            await self.session.delete(record)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError(f"Failed to delete booking {identifier}", original_error=e) from e
        return 1
