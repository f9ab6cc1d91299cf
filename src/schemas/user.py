from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email


class UserCreate(BaseModel):
    name: str = Field(min_length=2)
    email: str

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        # Syntax check only; the address is stored exactly as sent.
        _, normalized = validate_email(value)
        # validate_email also accepts "Name <addr>" and lowercases the domain.
        if normalized.casefold() != value.casefold():
            raise ValueError("value is not a bare email address")
        return value


class UserRead(BaseModel):
    """A stored user, serialized with camelCase keys both on disk and on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    created_at: datetime = Field(alias="createdAt")
    is_active: bool | None = Field(default=None, alias="isActive")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class UserListResponse(BaseModel):
    data: list[UserRead]
    pagination: Pagination
