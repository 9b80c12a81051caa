"""Development seed data.

In memory mode the stores are emptied first; against the database the seed
only adds rows, so run it on an empty schema.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal

from staybook.repositories import Repositories
from staybook.services.reservations import ReservationService

logger = logging.getLogger(__name__)

SEED_HOSTS = ("host-ana", "host-bruno")
SEED_GUESTS = ("guest-carla", "guest-diego")

PROPERTIES = [
    {
        "host_id": "host-ana",
        "title": "Casa del Mar",
        "description": "Two-bedroom apartment a block from the beach.",
        "location": "Valencia",
        "price_per_night": Decimal("100.00"),
        "max_guests": 4,
    },
    {
        "host_id": "host-ana",
        "title": "Loft Centro",
        "description": "Open-plan loft in the old town.",
        "location": "Madrid",
        "price_per_night": Decimal("85.00"),
        "max_guests": 2,
    },
    {
        "host_id": "host-bruno",
        "title": "Cabaña del Bosque",
        "description": "Wooden cabin with a fireplace, no capacity limit for events.",
        "location": "Asturias",
        "price_per_night": Decimal("140.00"),
        "max_guests": None,
    },
]

# (property index, guest, days from today to check-in, nights, guests)
BOOKINGS = [
    (0, "guest-carla", 14, 3, 2),
    (0, "guest-diego", 21, 5, 4),
    (1, "guest-carla", 30, 2, 1),
    (2, "guest-diego", 45, 7, 6),
]


@dataclass
class SeedResult:
    ok: bool = True
    property_ids: list[str] = field(default_factory=list)
    booking_ids: list[str] = field(default_factory=list)

    @property
    def properties_count(self) -> int:
        return len(self.property_ids)

    @property
    def bookings_count(self) -> int:
        return len(self.booking_ids)


async def run_seed(
    repositories: Repositories,
    reservations: ReservationService,
    today: date | None = None,
) -> SeedResult:
    """Populate properties and bookings; bookings go through the reservation engine."""
    if repositories.backend == "memory":
        repositories.reset()

    today = today or date.today()
    result = SeedResult()

    created = []
    for pdata in PROPERTIES:
        prop = await repositories.properties.add(**pdata)
        created.append(prop)
        result.property_ids.append(prop.id)

    for prop_index, guest_id, offset, nights, guests in BOOKINGS:
        check_in = today + timedelta(days=offset)
        check_out = check_in + timedelta(days=nights)
        booking = await reservations.create_booking(
            guest_id,
            created[prop_index].id,
            check_in.isoformat(),
            check_out.isoformat(),
            guests,
        )
        result.booking_ids.append(booking.id)

    logger.info(
        "Seeded %d properties and %d bookings (%s backend)",
        result.properties_count,
        result.bookings_count,
        repositories.backend,
    )
    return result
