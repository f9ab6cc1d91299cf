from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from src.config import settings
from src.crud.users import UserStore
from src.exceptions import ConflictError
from src.schemas.user import UserRead

logger = logging.getLogger("users_api.seed")


@dataclass(frozen=True)
class SeedUserSpec:
    name: str
    email: str
    is_active: bool | None


DEMO_USERS: tuple[SeedUserSpec, ...] = (
    SeedUserSpec(name="Mario Rossi", email="mario.rossi@example.com", is_active=True),
    SeedUserSpec(name="Giulia Bianchi", email="giulia.bianchi@example.com", is_active=True),
    SeedUserSpec(name="Luca Verdi", email="luca.verdi@example.com", is_active=False),
    SeedUserSpec(name="Anna Neri", email="anna.neri@example.com", is_active=None),
)


async def seed_dev_data(path: Path | str | None = None) -> list[UserRead]:
    """Add the demo users that are not in the collection yet. Returns the users created."""

    store = UserStore(path or settings.users_path)

    created: list[UserRead] = []
    for spec in DEMO_USERS:
        try:
            user = await store.create(name=spec.name, email=spec.email, is_active=spec.is_active)
        except ConflictError:
            # Already seeded.
            continue
        created.append(user)

    logger.info("seeded %d user(s) into %s", len(created), store.path)
    return created


def main() -> None:
    logging.basicConfig(level=settings.log_level.upper())
    asyncio.run(seed_dev_data())


if __name__ == "__main__":
    main()
