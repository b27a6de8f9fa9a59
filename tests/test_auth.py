import base64
import string
import uuid
from datetime import timezone

import pytest
import pytest_asyncio

from scoreboard.auth import User, create_anon_user, gen_random_string
from scoreboard.database import open_database


@pytest_asyncio.fixture
async def db():
    connection = await open_database(":memory:")
    yield connection
    await connection.close()


@pytest.mark.asyncio
async def test_new_anon_user(db):
    user = await create_anon_user(db)
    assert user.is_anonymous
    assert user.email is None
    assert user.user_name is None
    assert user.created_at.tzinfo == timezone.utc


@pytest.mark.asyncio
async def test_anon_user_is_stored(db):
    user = await create_anon_user(db)
    async with db.execute("SELECT * FROM users WHERE id = ?", (str(user.id),)) as cursor:
        row = await cursor.fetchone()
    assert User.from_row(row) == user


@pytest.mark.asyncio
async def test_anon_users_are_distinct(db):
    first = await create_anon_user(db)
    second = await create_anon_user(db)
    assert first.id != second.id


@pytest.mark.asyncio
async def test_to_dict_shape(db):
    user = await create_anon_user(db)
    data = user.to_dict()
    assert data["id"] == str(user.id)
    assert data["is_anonymous"] is True
    assert data["created_at"].endswith("Z")
    assert set(data) == {
        "id",
        "email",
        "user_name",
        "created_at",
        "phone_number",
        "encrypted_password",
        "is_anonymous",
    }


def test_from_row_reads_naive_timestamp_as_utc():
    user_id = uuid.uuid4()
    row = {
        "id": str(user_id),
        "email": "someone@example.com",
        "user_name": "someone",
        "created_at": "2024-05-01T10:00:00",
        "phone_number": None,
        "encrypted_password": None,
        "is_anonymous": 0,
    }
    user = User.from_row(row)
    assert user.id == user_id
    assert user.email == "someone@example.com"
    assert user.is_anonymous is False
    assert user.created_at.tzinfo == timezone.utc


@pytest.mark.parametrize("n", [1, 5, 16, 33])
def test_random_string_decodes_to_n_bytes(n):
    text = gen_random_string(n)
    assert set(text) <= set(string.ascii_letters + string.digits + "-_=")
    assert len(base64.urlsafe_b64decode(text)) == n


def test_random_string_repeats_one_byte():
    decoded = base64.urlsafe_b64decode(gen_random_string(12))
    assert len(set(decoded)) == 1


def test_random_string_empty():
    assert gen_random_string(0) == ""


def test_random_string_negative():
    with pytest.raises(ValueError):
        gen_random_string(-1)