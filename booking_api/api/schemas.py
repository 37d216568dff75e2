"""
API Request and Response Schemas

Request bodies are deliberately loose: bookings and login payloads accept
any extra fields and pass them through untouched. Response models describe
the write acknowledgments and session responses.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Identity payload for POST /jwt; extra claims are embedded in the token."""
    model_config = ConfigDict(extra="allow")

    email: str = Field(..., description="Email identifying the user")


class BookingCreate(BaseModel):
    """Booking body; stored exactly as received."""
    model_config = ConfigDict(extra="allow")


class BookingStatusUpdate(BaseModel):
    """Body for PATCH /bookings/{id}; only ``status`` is read."""
    status: str = Field(..., description="New booking status, e.g. pending, confirmed, done")


class InsertAcknowledgment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    inserted_id: str = Field(..., alias="insertedId")


class DeleteAcknowledgment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    deleted_count: int = Field(..., alias="deletedCount")


class UpdateAcknowledgment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    matched_count: int = Field(..., alias="matchedCount")
    modified_count: int = Field(..., alias="modifiedCount")


class SessionResponse(BaseModel):
    """Body returned by login and logout."""
    success: bool = True


Document = dict[str, Any]
