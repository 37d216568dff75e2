"""
Tests for the booking and catalogue services against a real SQLite datastore.
"""

import json
from datetime import datetime, timedelta

import pytest

from booking_api.core.exceptions import InvalidIdentifierError
from booking_api.services.booking_service import BookingService
from booking_api.services.catalog_service import CatalogService, load_seed_services

BOOKING = {
    "customerName": "Alex",
    "email": "a@x.com",
    "service_id": "3",
    "service": "Engine Oil Change",
    "date": "2026-11-02",
    "price": 45.5,
}


class TestBookingService:
    """CRUD behaviour of the bookings collection."""

    @pytest.mark.asyncio
    async def test_created_booking_listed_for_owner(self, datastore):
        async with datastore.session() as session:
            service = BookingService(session)
            booking_id = await service.create_booking(BOOKING)
            await service.create_booking({**BOOKING, "email": "b@y.com"})

            bookings = await service.list_bookings("a@x.com")

        assert len(bookings) == 1
        document = bookings[0]
        assert document["_id"] == booking_id
        for key, value in BOOKING.items():
            assert document[key] == value
        assert "created_at" in document
        assert "status" not in document

    @pytest.mark.asyncio
    async def test_booking_without_email_keeps_its_shape(self, datastore):
        body = {"customerName": "Sam", "date": "2026-11-03"}
        async with datastore.session() as session:
            service = BookingService(session)
            booking_id = await service.create_booking(body)

            document = (await service.list_bookings())[0]

        assert document["_id"] == booking_id
        assert "email" not in document
        assert {k: document[k] for k in body} == body

    @pytest.mark.asyncio
    async def test_created_at_is_utc(self, datastore):
        async with datastore.session() as session:
            service = BookingService(session)
            await service.create_booking(BOOKING)

            document = (await service.list_bookings("a@x.com"))[0]

        created_at = datetime.fromisoformat(document["created_at"])
        assert created_at.utcoffset() == timedelta(0)

    @pytest.mark.asyncio
    async def test_list_without_email_returns_everything(self, datastore):
        async with datastore.session() as session:
            service = BookingService(session)
            await service.create_booking(BOOKING)
            await service.create_booking({**BOOKING, "email": "b@y.com"})

            bookings = await service.list_bookings()

        assert {b["email"] for b in bookings} == {"a@x.com", "b@y.com"}

    @pytest.mark.asyncio
    async def test_update_status_touches_only_status(self, datastore):
        async with datastore.session() as session:
            service = BookingService(session)
            booking_id = await service.create_booking(BOOKING)
            before = (await service.list_bookings("a@x.com"))[0]

            assert await service.update_status(booking_id, "confirmed") == (1, 1)
            after = (await service.list_bookings("a@x.com"))[0]

        assert after["status"] == "confirmed"
        assert {k: v for k, v in after.items() if k != "status"} == before

    @pytest.mark.asyncio
    async def test_update_with_same_status_matches_without_modifying(self, datastore):
        async with datastore.session() as session:
            service = BookingService(session)
            booking_id = await service.create_booking({**BOOKING, "status": "pending"})

            assert await service.update_status(booking_id, "pending") == (1, 0)

    @pytest.mark.asyncio
    async def test_update_unknown_booking_matches_nothing(self, datastore):
        async with datastore.session() as session:
            assert await BookingService(session).update_status("0" * 32, "done") == (0, 0)

    @pytest.mark.asyncio
    async def test_delete_removes_exactly_one(self, datastore):
        async with datastore.session() as session:
            service = BookingService(session)
            first = await service.create_booking(BOOKING)
            await service.create_booking(BOOKING)

            assert await service.delete_booking(first) == 1
            assert await service.delete_booking(first) == 0
            remaining = await service.list_bookings("a@x.com")

        assert len(remaining) == 1
        assert remaining[0]["_id"] != first

    @pytest.mark.asyncio
    async def test_malformed_identifier_raises(self, datastore):
        async with datastore.session() as session:
            with pytest.raises(InvalidIdentifierError):
                await BookingService(session).delete_booking("not-an-id")


class TestCatalogService:
    """Read access to services and seeding."""

    @pytest.mark.asyncio
    async def test_get_service_by_identifier(self, datastore):
        async with datastore.session() as session:
            catalog = CatalogService(session)
            ids = await catalog.add_services([
                {"name": "Brake Check", "price": 30, "description": "Pads and discs", "img": "b.jpg"},
            ])

            service = await catalog.get_service(ids[0])

        assert service == {
            "_id": ids[0],
            "name": "Brake Check",
            "price": 30,
            "description": "Pads and discs",
            "img": "b.jpg",
        }

    @pytest.mark.asyncio
    async def test_unknown_service_is_none(self, datastore):
        async with datastore.session() as session:
            assert await CatalogService(session).get_service("f" * 32) is None

    @pytest.mark.asyncio
    async def test_uppercase_identifier_is_normalised(self, datastore):
        async with datastore.session() as session:
            catalog = CatalogService(session)
            ids = await catalog.add_services([{"name": "Wash"}])

            service = await catalog.get_service(ids[0].upper())

        assert service["_id"] == ids[0]

    @pytest.mark.asyncio
    async def test_seed_file_loaded_once(self, datastore, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps([{"name": "Wash"}, {"name": "Polish"}]), encoding="utf-8")

        assert await load_seed_services(datastore, str(seed)) == 2
        assert await load_seed_services(datastore, str(seed)) == 0

        async with datastore.session() as session:
            services = await CatalogService(session).list_services()

        assert sorted(s["name"] for s in services) == ["Polish", "Wash"]

    @pytest.mark.asyncio
    async def test_seeded_services_read_back_as_written(self, datastore, tmp_path):
        seeded_id = "0" * 31 + "1"
        seed = tmp_path / "seed.json"
        seed.write_text(
            json.dumps([
                {"_id": seeded_id, "name": "Oil", "price": "20.00"},
                {"_id": "not-an-id", "title": "Wash"},
            ]),
            encoding="utf-8",
        )

        assert await load_seed_services(datastore, str(seed)) == 2

        async with datastore.session() as session:
            catalog = CatalogService(session)
            oil = await catalog.get_service(seeded_id)
            services = await catalog.list_services()

        assert oil == {"_id": seeded_id, "name": "Oil", "price": "20.00"}
        wash = next(s for s in services if s["_id"] != seeded_id)
        assert len(wash["_id"]) == 32
        assert wash == {"_id": wash["_id"], "title": "Wash"}

    @pytest.mark.asyncio
    async def test_seed_file_must_hold_an_array(self, datastore, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps({"name": "Wash"}), encoding="utf-8")

        with pytest.raises(ValueError):
            await load_seed_services(datastore, str(seed))
