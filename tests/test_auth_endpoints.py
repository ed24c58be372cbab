import pytest
from sqlalchemy.future import select

from app.models.user import User
from app.utils.security import get_password_hash, verify_password

pytestmark = pytest.mark.asyncio

SIGNUP_URL = "/api/auth/signup"
LOGIN_URL = "/api/auth/login"

CREDENTIALS = {"email": "staff@bloodbank.org", "password": "SecurePass123!"}


class TestSignup:
    async def test_signup(self, client):
        response = await client.post(SIGNUP_URL, json=CREDENTIALS)

        assert response.status_code == 201
        assert response.json() == {"message": "User registered successfully"}

    async def test_duplicate_signup_rejected(self, client):
        await client.post(SIGNUP_URL, json=CREDENTIALS)

        response = await client.post(
            SIGNUP_URL, json={**CREDENTIALS, "email": "STAFF@bloodbank.org"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"

    async def test_password_stored_hashed(self, client, db_session):
        await client.post(SIGNUP_URL, json=CREDENTIALS)

        result = await db_session.execute(
            select(User).where(User.email == CREDENTIALS["email"])
        )
        user = result.scalar_one()
        assert user.hashed_password != CREDENTIALS["password"]
        assert user.hashed_password.startswith("$argon2")
        assert verify_password(CREDENTIALS["password"], user.hashed_password)

    async def test_signup_requires_valid_email(self, client):
        response = await client.post(
            SIGNUP_URL, json={"email": "nobody", "password": "x"}
        )

        assert response.status_code == 400
        assert "email" in [e["field"] for e in response.json()["errors"]]


class TestLogin:
    async def test_login_success(self, client):
        await client.post(SIGNUP_URL, json=CREDENTIALS)

        response = await client.post(LOGIN_URL, json=CREDENTIALS)

        assert response.status_code == 200
        assert response.json() == {
            "message": "Login successful",
            "user": {"email": CREDENTIALS["email"]},
        }

    async def test_wrong_password_and_unknown_user_look_the_same(self, client):
        await client.post(SIGNUP_URL, json=CREDENTIALS)

        wrong_password = await client.post(
            LOGIN_URL, json={**CREDENTIALS, "password": "WrongPass"}
        )
        unknown_user = await client.post(
            LOGIN_URL, json={"email": "ghost@bloodbank.org", "password": "WrongPass"}
        )

        assert wrong_password.status_code == unknown_user.status_code == 400
        assert wrong_password.json() == unknown_user.json() == {
            "detail": "Invalid Credentials"
        }


def test_each_hash_is_salted():
    first = get_password_hash("same-password")
    second = get_password_hash("same-password")

    assert first != second
    assert verify_password("same-password", first)
    assert not verify_password("other-password", first)
