"""Contract tests every booking store backend must pass identically.

The SQL backend runs on an in-process SQLite database through aiosqlite.
"""

import uuid
from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
import pytest_asyncio

from staybook.repositories import Repositories, build_memory_repositories, build_sql_repositories
from staybook.reservations.types import NewBooking, PropertyInfo


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request) -> AsyncGenerator[Repositories, None]:
    if request.param == "memory":
        repositories = build_memory_repositories()
    else:
        repositories = build_sql_repositories("sqlite+aiosqlite://")
        await repositories.create_tables()
    yield repositories
    await repositories.close()


@pytest_asyncio.fixture
async def prop(store: Repositories) -> PropertyInfo:
    return await store.properties.add(
        host_id="host-1",
        title="Store Test",
        price_per_night=Decimal("100.00"),
        max_guests=4,
    )


def _fields(property_id: str, user_id: str = "guest-1", check_in: str = "2025-06-01", check_out: str = "2025-06-04"):
    return NewBooking(
        property_id=property_id,
        user_id=user_id,
        check_in=check_in,
        check_out=check_out,
        guests=2,
        total_price=Decimal("300.00"),
        status="confirmed",
    )


class TestCreateAndGet:
    async def test_create_assigns_id_and_timestamps(self, store: Repositories, prop: PropertyInfo):
        booking = await store.bookings.create(_fields(prop.id))
        assert booking.id
        assert booking.created_at is not None
        assert booking.updated_at is not None
        assert booking.property_id == prop.id
        assert booking.user_id == "guest-1"
        assert booking.check_in == "2025-06-01"
        assert booking.check_out == "2025-06-04"
        assert booking.guests == 2
        assert booking.total_price == Decimal("300")
        assert booking.status == "confirmed"

    async def test_ids_are_unique(self, store: Repositories, prop: PropertyInfo):
        first = await store.bookings.create(_fields(prop.id))
        second = await store.bookings.create(_fields(prop.id, check_in="2025-07-01", check_out="2025-07-02"))
        assert first.id != second.id

    async def test_get_by_id_round_trip(self, store: Repositories, prop: PropertyInfo):
        created = await store.bookings.create(_fields(prop.id))
        fetched = await store.bookings.get_by_id(created.id)
        assert fetched is not None
        assert fetched.id == created.id
        assert fetched.total_price == created.total_price
        assert fetched.check_in == created.check_in

    @pytest.mark.parametrize("booking_id", [str(uuid.uuid4()), "not-an-id", ""])
    async def test_get_unknown_returns_none(self, store: Repositories, booking_id: str):
        assert await store.bookings.get_by_id(booking_id) is None


class TestListing:
    async def test_list_by_user(self, store: Repositories, prop: PropertyInfo):
        mine_a = await store.bookings.create(_fields(prop.id, user_id="guest-1"))
        await store.bookings.create(_fields(prop.id, user_id="guest-2", check_in="2025-07-01", check_out="2025-07-03"))
        mine_b = await store.bookings.create(
            _fields(prop.id, user_id="guest-1", check_in="2025-08-01", check_out="2025-08-03")
        )

        items = await store.bookings.list_by_user("guest-1")
        assert {b.id for b in items} == {mine_a.id, mine_b.id}
        assert await store.bookings.list_by_user("nobody") == []

    async def test_list_by_property_ordered_by_check_in(self, store: Repositories, prop: PropertyInfo):
        other = await store.properties.add(host_id="host-2", title="Other", price_per_night=Decimal("50"))
        late = await store.bookings.create(_fields(prop.id, check_in="2025-09-01", check_out="2025-09-03"))
        early = await store.bookings.create(_fields(prop.id, check_in="2025-06-01", check_out="2025-06-03"))
        await store.bookings.create(_fields(other.id))

        items = await store.bookings.list_by_property(prop.id)
        assert [b.id for b in items] == [early.id, late.id]

    async def test_list_by_unknown_property_is_empty(self, store: Repositories):
        assert await store.bookings.list_by_property(str(uuid.uuid4())) == []
        assert await store.bookings.list_by_property("garbage") == []


class TestUpdateStatus:
    async def test_only_status_changes(self, store: Repositories, prop: PropertyInfo):
        created = await store.bookings.create(_fields(prop.id))
        updated = await store.bookings.update_status(created.id, "cancelled")

        assert updated is not None
        assert updated.status == "cancelled"
        assert updated.id == created.id
        assert updated.user_id == created.user_id
        assert updated.property_id == created.property_id
        assert updated.check_in == created.check_in
        assert updated.check_out == created.check_out
        assert updated.guests == created.guests
        assert updated.total_price == created.total_price

        fetched = await store.bookings.get_by_id(created.id)
        assert fetched is not None
        assert fetched.status == "cancelled"

    async def test_unknown_returns_none(self, store: Repositories):
        assert await store.bookings.update_status(str(uuid.uuid4()), "cancelled") is None
        assert await store.bookings.update_status("not-an-id", "cancelled") is None


class TestDeleteByProperty:
    async def test_removes_only_that_property(self, store: Repositories, prop: PropertyInfo):
        other = await store.properties.add(host_id="host-2", title="Other", price_per_night=Decimal("50"))
        await store.bookings.create(_fields(prop.id))
        await store.bookings.create(_fields(prop.id, check_in="2025-07-01", check_out="2025-07-03"))
        survivor = await store.bookings.create(_fields(other.id))

        removed = await store.bookings.delete_by_property(prop.id)

        assert removed == 2
        assert await store.bookings.list_by_property(prop.id) == []
        remaining = await store.bookings.list_by_property(other.id)
        assert [b.id for b in remaining] == [survivor.id]

    async def test_nothing_to_delete(self, store: Repositories):
        assert await store.bookings.delete_by_property(str(uuid.uuid4())) == 0
        assert await store.bookings.delete_by_property("garbage") == 0


class TestPropertyStore:
    async def test_get_and_update_price(self, store: Repositories, prop: PropertyInfo):
        fetched = await store.properties.get_by_id(prop.id)
        assert fetched is not None
        assert fetched.host_id == "host-1"
        assert fetched.max_guests == 4
        assert fetched.price_per_night == Decimal("100")

        repriced = await store.properties.update_price(prop.id, Decimal("150.00"))
        assert repriced is not None
        assert repriced.price_per_night == Decimal("150")

    async def test_delete(self, store: Repositories, prop: PropertyInfo):
        assert await store.properties.delete(prop.id) is True
        assert await store.properties.get_by_id(prop.id) is None
        assert await store.properties.delete(prop.id) is False


class TestNotificationStore:
    async def test_create_and_list(self, store: Repositories):
        await store.notifications.create(user_id="host-1", type="booking_confirmed", title="A", message="first")
        await store.notifications.create(
            user_id="host-1", type="booking_cancelled", title="B", message="second", link="/host/dashboard"
        )
        await store.notifications.create(user_id="host-2", type="booking_confirmed", title="C", message="other")

        items = await store.notifications.list_by_user("host-1")
        assert {n.title for n in items} == {"A", "B"}
        assert all(n.read is False for n in items)
        assert {n.link for n in items} == {None, "/host/dashboard"}
