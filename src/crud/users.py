from __future__ import annotations

import asyncio
import json
import logging
import math
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import anyio
from pydantic import ValidationError as PydanticValidationError

from src.exceptions import ConflictError, NotFoundError, ValidationError
from src.schemas.user import Pagination, UserCreate, UserRead

logger = logging.getLogger("users_api.store")


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_canonical_uuid(value: str) -> bool:
    """True for the 8-4-4-4-12 hex form only (no braces, no urn: prefix, no bare hex)."""

    return bool(_UUID_RE.fullmatch(value))


def _positive_or_default(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def normalize_page_params(page: Any, limit: Any) -> tuple[int, int]:
    """Coerce raw page/limit values; absent, non-numeric or non-positive values fall back to 1/10."""

    return _positive_or_default(page, DEFAULT_PAGE), _positive_or_default(limit, DEFAULT_LIMIT)


class UserStore:
    """User collection persisted as a single JSON array.

    Every operation reads the whole file; mutations rewrite it wholesale.
    Read-modify-write cycles are serialized with an in-process lock, so
    concurrent creates/deletes handled by this process cannot lose updates.
    Separate processes sharing the same file are not coordinated.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = anyio.Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return Path(self._path)

    async def _read_all(self) -> list[UserRead]:
        try:
            raw = await self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []

        if not raw.strip():
            return []

        return [UserRead.model_validate(item) for item in json.loads(raw)]

    async def _write_all(self, users: list[UserRead]) -> None:
        await self._path.parent.mkdir(parents=True, exist_ok=True)

        payload = json.dumps(
            [u.model_dump(mode="json", by_alias=True, exclude_none=True) for u in users],
            indent=2,
        )

        # Write next to the target and swap it in, so readers never see a partial file.
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        await tmp_path.write_text(payload, encoding="utf-8")
        await tmp_path.replace(self._path)

    async def list(self, *, page: Any = None, limit: Any = None) -> tuple[list[UserRead], Pagination]:
        page, limit = normalize_page_params(page, limit)

        users = await self._read_all()
        total = len(users)

        newest_first = users[::-1]
        start = (page - 1) * limit
        items = newest_first[start : start + limit]

        return items, Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit))

    async def list_active(self) -> list[UserRead]:
        users = await self._read_all()
        return [u for u in users if u.is_active is True]

    async def get(self, user_id: str) -> UserRead:
        if not is_canonical_uuid(user_id):
            raise NotFoundError("User not found")

        for user in await self._read_all():
            if user.id == user_id:
                return user

        raise NotFoundError("User not found")

    async def create(self, *, name: Any, email: Any, is_active: bool | None = None) -> UserRead:
        try:
            obj_in = UserCreate.model_validate({"name": name, "email": email})
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc.errors()) from exc

        async with self._lock:
            users = await self._read_all()

            # Exact, case-sensitive comparison.
            if any(u.email == obj_in.email for u in users):
                raise ConflictError("Email already exists")

            user = UserRead(
                id=str(uuid.uuid4()),
                name=obj_in.name,
                email=obj_in.email,
                created_at=datetime.now(timezone.utc),
                is_active=is_active,
            )
            users.append(user)
            await self._write_all(users)

        logger.info("user_created id=%s", user.id)
        return user

    async def delete(self, user_id: str) -> None:
        if not is_canonical_uuid(user_id):
            raise NotFoundError("User not found")

        async with self._lock:
            users = await self._read_all()

            remaining = [u for u in users if u.id != user_id]
            if len(remaining) == len(users):
                raise NotFoundError("User not found")

            await self._write_all(remaining)

        logger.info("user_deleted id=%s", user_id)
