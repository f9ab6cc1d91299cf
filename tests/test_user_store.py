import asyncio
import json
import uuid

import pytest

from src.crud.users import UserStore, is_canonical_uuid, normalize_page_params
from src.exceptions import ConflictError, NotFoundError, ValidationError


@pytest.fixture()
def store(tmp_path) -> UserStore:
    return UserStore(tmp_path / "data" / "users.json")


@pytest.mark.anyio
async def test_missing_file_reads_as_empty(store):
    items, pagination = await store.list()

    assert items == []
    assert pagination.total == 0
    assert pagination.pages == 0
    assert not store.path.exists()


@pytest.mark.anyio
async def test_create_writes_camel_case_array_without_temp_leftovers(store):
    user = await store.create(name="Jane Doe", email="jane@example.com")

    stored = json.loads(store.path.read_text())
    assert stored == [
        {
            "id": user.id,
            "name": "Jane Doe",
            "email": "jane@example.com",
            "createdAt": stored[0]["createdAt"],
        }
    ]
    assert [p.name for p in store.path.parent.iterdir()] == ["users.json"]


@pytest.mark.anyio
async def test_create_keeps_is_active_when_given(store):
    await store.create(name="Jane Doe", email="jane@example.com", is_active=True)

    stored = json.loads(store.path.read_text())
    assert stored[0]["isActive"] is True
    assert [u.email for u in await store.list_active()] == ["jane@example.com"]


@pytest.mark.anyio
async def test_create_validation_error_lists_issues(store):
    with pytest.raises(ValidationError) as exc_info:
        await store.create(name="J", email="nope")

    assert {i["field"] for i in exc_info.value.issues} == {"name", "email"}
    assert not store.path.exists()


@pytest.mark.anyio
async def test_create_conflict_on_duplicate_email(store):
    await store.create(name="Jane Doe", email="jane@example.com")

    with pytest.raises(ConflictError):
        await store.create(name="Jane Two", email="jane@example.com")


@pytest.mark.anyio
async def test_concurrent_creates_do_not_lose_updates(store):
    await asyncio.gather(
        *(store.create(name=f"User {i}", email=f"user{i}@example.com") for i in range(20))
    )

    _, pagination = await store.list()
    assert pagination.total == 20


@pytest.mark.anyio
async def test_concurrent_duplicate_creates_keep_one_record(store):
    results = await asyncio.gather(
        *(store.create(name="Same Person", email="same@example.com") for _ in range(5)),
        return_exceptions=True,
    )

    assert sum(1 for r in results if isinstance(r, ConflictError)) == 4
    assert len(json.loads(store.path.read_text())) == 1


@pytest.mark.anyio
async def test_get_and_delete(store):
    user = await store.create(name="Jane Doe", email="jane@example.com")

    assert await store.get(user.id) == user
    # Uppercase passes the format check but does not match the stored id.
    with pytest.raises(NotFoundError):
        await store.get(user.id.upper())

    await store.delete(user.id)
    with pytest.raises(NotFoundError):
        await store.get(user.id)
    with pytest.raises(NotFoundError):
        await store.delete(user.id)


@pytest.mark.anyio
async def test_malformed_ids_never_touch_storage(tmp_path):
    # A directory where the file should be would make any read fail.
    path = tmp_path / "users.json"
    path.mkdir()
    store = UserStore(path)

    with pytest.raises(NotFoundError):
        await store.get("123")
    with pytest.raises(NotFoundError):
        await store.delete("123")


def test_is_canonical_uuid():
    value = uuid.uuid4()

    assert is_canonical_uuid(str(value))
    assert is_canonical_uuid(str(value).upper())
    assert not is_canonical_uuid(value.hex)
    assert not is_canonical_uuid("{" + str(value) + "}")
    assert not is_canonical_uuid(f"urn:uuid:{value}")
    assert not is_canonical_uuid(str(value) + "\n")
    assert not is_canonical_uuid("999")


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 10)),
        ("2", "5", (2, 5)),
        (3, 500, (3, 500)),
        ("0", "-1", (1, 10)),
        ("abc", "", (1, 10)),
    ],
)
def test_normalize_page_params(page, limit, expected):
    assert normalize_page_params(page, limit) == expected


@pytest.mark.anyio
async def test_create_keeps_raw_email_for_dedup(store):
    first = await store.create(name="Jane Doe", email="jane@EXAMPLE.com")
    second = await store.create(name="Jane Doe", email="jane@example.com")

    assert first.email == "jane@EXAMPLE.com"
    assert second.email == "jane@example.com"
    with pytest.raises(ConflictError):
        await store.create(name="Jane Three", email="jane@EXAMPLE.com")
