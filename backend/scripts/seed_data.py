"""Seed the configured storage backend with sample properties and bookings.

Against the database the tables are created if missing. In memory mode the
data only lives as long as this process, so the script is mostly useful as a
smoke test of the reservation flow:

    STORAGE_BACKEND=database python -m scripts.seed_data
"""

import asyncio
import sys
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from staybook.config import settings
from staybook.dev.seed import run_seed
from staybook.repositories import build_repositories
from staybook.services.notifications import HostNotifier
from staybook.services.reservations import ReservationService


async def seed() -> None:
    repositories = build_repositories(settings)
    notifier = HostNotifier(repositories.notifications)
    reservations = ReservationService(
        repositories,
        notifier,
        host_dashboard_link=settings.host_dashboard_link,
    )
    try:
        await repositories.create_tables()
        result = await run_seed(repositories, reservations)
        await notifier.drain()
    finally:
        await repositories.close()

    print("=" * 60)
    print("Seed Summary")
    print("=" * 60)
    print(f"   Backend:       {repositories.backend}")
    print(f"   Properties:    {result.properties_count}")
    print(f"   Bookings:      {result.bookings_count}")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(seed())
