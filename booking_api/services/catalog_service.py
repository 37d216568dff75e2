"""
Service Catalogue

Read access to the ``services`` collection. Services are created out of
band (see ``load_seed_services``); the API never modifies them.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from booking_api.core.exceptions import DatabaseError, InvalidIdentifierError
from booking_api.core.validators import parse_identifier
from booking_api.db.models import ServiceRecord
from booking_api.db.session import Datastore

logger = logging.getLogger(__name__)


class CatalogService:
    """Queries over the services collection."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_services(self) -> list[dict[str, Any]]:
        """Return every service document."""
        try:
            result = await self.session.exec(select(ServiceRecord))
            return [record.to_document() for record in result.all()]
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to list services", original_error=e) from e

    async def get_service(self, service_id: str) -> Optional[dict[str, Any]]:
        """
        Look up one service by identifier.

        Returns:
            The service document, or None when no service has that identifier

        Raises:
            InvalidIdentifierError: If ``service_id`` is malformed
        """
        identifier = parse_identifier(service_id)
        try:
            record = await self.session.get(ServiceRecord, identifier)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to load service {identifier}", original_error=e) from e
        return record.to_document() if record else None

    async def count_services(self) -> int:
        result = await self.session.exec(select(func.count()).select_from(ServiceRecord))
        return result.one()

    async def add_services(self, documents: list[dict[str, Any]]) -> list[str]:
        """
        Insert service documents and return their identifiers.

        A document's own ``_id`` is kept when it is a valid identifier;
        otherwise a new one is generated.
        """
        records = [
            ServiceRecord.from_document(document, self._seeded_identifier(document))
            for document in documents
        ]
        try:
            self.session.add_all(records)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError("Failed to insert services", original_error=e) from e
        return [record.id for record in records]

    @staticmethod
    def _seeded_identifier(document: dict[str, Any]) -> Optional[str]:
        raw = document.get("_id")
        if raw is None:
            return None
        try:
            return parse_identifier(str(raw))
        except InvalidIdentifierError:
            logger.warning("Ignoring unusable service _id %r, generating a new one", raw)
            return None


async def load_seed_services(datastore: Datastore, seed_file: str) -> int:
    """
    Populate an empty services collection from a JSON file.

    The file holds a JSON array of service objects. Nothing is inserted when
    the collection already has documents.

    Returns:
        Number of services inserted
    """
    documents = json.loads(Path(seed_file).read_text(encoding="utf-8"))
    if not isinstance(documents, list):
        raise ValueError(f"{seed_file} must contain a JSON array of services")

    async with datastore.session() as session:
        catalog = CatalogService(session)
        if await catalog.count_services():
            logger.info("Services collection already populated, skipping seed file %s", seed_file)
            return 0
        inserted = await catalog.add_services(documents)

    logger.info("Seeded %d services from %s", len(inserted), seed_file)
    return len(inserted)
