"""
Database Models for the Booking Service

The API treats its storage as two schema-less collections. Each collection
is a table with the fields the service reads or filters on pulled out into
columns, and everything else kept verbatim in a JSON ``document`` column:

- ServiceRecord: catalogue entries, stored whole
- BookingRecord: bookings (email, status, created_at + extras such as
  service_id, date, price)

``to_document`` rebuilds the JSON object clients see, with the identifier
under ``_id``.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, String
from sqlmodel import Column, Field, SQLModel

from booking_api.core.validators import new_identifier

BOOKING_COLUMNS = ("_id", "email", "status", "created_at")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ServiceRecord(SQLModel, table=True):
    """
    Car service offered for booking.

    The document is kept exactly as given: price strings stay strings and
    absent fields stay absent.
    """
    __tablename__ = "services"

    id: str = Field(default_factory=new_identifier, sa_column=Column(String(32), primary_key=True))
    document: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    @classmethod
    def from_document(cls, document: dict[str, Any], identifier: Optional[str] = None) -> "ServiceRecord":
        fields = {k: v for k, v in document.items() if k != "_id"}
        if identifier is None:
            return cls(document=fields)
        return cls(id=identifier, document=fields)

    def to_document(self) -> dict[str, Any]:
        return {"_id": self.id, **self.document}


class BookingRecord(SQLModel, table=True):
    """
    Booking of a service by a user.

    Indexes:
    - email: bookings are always listed per owner
    """
    __tablename__ = "bookings"

    id: str = Field(default_factory=new_identifier, sa_column=Column(String(32), primary_key=True))
    email: Optional[str] = Field(default=None, sa_column=Column(String(320), nullable=True, index=True))
    status: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    document: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "BookingRecord":
        """Build a record from a client body; unknown fields are stored as-is."""
        extras = {k: v for k, v in document.items() if k not in BOOKING_COLUMNS}
        return cls(
            email=document.get("email"),
            status=document.get("status"),
            document=extras,
        )

    def to_document(self) -> dict[str, Any]:
        rendered = {"_id": self.id, **self.document}
        if self.email is not None:
            rendered["email"] = self.email
        if self.status is not None:
            rendered["status"] = self.status
        created_at = self.created_at
        # SQLite hands back naive datetimes
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        rendered["created_at"] = created_at.isoformat()
        return rendered
