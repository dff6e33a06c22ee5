from datetime import timedelta

from fastapi.concurrency import run_in_threadpool
from jose import JWTError
from sqlalchemy.future import select

from app.models.user import User
from app.services import auth as auth_service
from app.utils.security import create_access_token, verify_password

PAYLOAD = {
    "name": "John Doe",
    "email": "john@example.com",
    "password": "secret123",
    "password_confirmation": "secret123",
}


async def test_register_returns_user_and_working_token(client):
    response = await client.post("/register", json=PAYLOAD)

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == "john@example.com"
    assert data["user"]["role"] == "USER"
    assert "password" not in data["user"] and "hashed_password" not in data["user"]

    # The token authenticates as the new user
    headers = {"Authorization": f"Bearer {data['token']}"}
    created = await client.post("/categories", json={"name": "Mine", "type": "normal"}, headers=headers)
    assert created.status_code == 201
    assert created.json()["owner_id"] == data["user"]["user_id"]


async def test_register_stores_hash_not_plaintext(client, db):
    await client.post("/register", json=PAYLOAD)

    result = await db.execute(select(User).filter(User.email == "john@example.com"))
    stored = result.scalars().first()
    assert stored.hashed_password != "secret123"
    assert verify_password("secret123", stored.hashed_password)


async def test_register_duplicate_email_is_rejected(client):
    await client.post("/register", json=PAYLOAD)
    response = await client.post("/register", json={**PAYLOAD, "name": "Someone Else"})

    assert response.status_code == 422
    assert response.json()["errors"] == {"email": ["The email has already been taken."]}


async def test_register_short_password(client):
    response = await client.post("/register", json={**PAYLOAD, "password": "abc", "password_confirmation": "abc"})

    assert response.status_code == 422
    assert "password" in response.json()["errors"]


async def test_register_confirmation_mismatch(client):
    response = await client.post("/register", json={**PAYLOAD, "password_confirmation": "different"})

    assert response.status_code == 422
    assert response.json()["errors"]["password_confirmation"] == ["The password confirmation does not match."]


async def test_register_missing_and_invalid_fields(client):
    response = await client.post("/register", json={"email": "not-an-email", "password": "secret123"})

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert {"name", "email", "password_confirmation"} <= set(errors)


async def test_login_returns_token(client):
    await client.post("/register", json=PAYLOAD)
    response = await client.post("/login", json={"email": "john@example.com", "password": "secret123"})

    assert response.status_code == 200
    token = response.json()["token"]
    listed = await client.get("/tasks", headers={"Authorization": f"Bearer {token}"})
    assert listed.status_code == 200


async def test_login_wrong_password_is_400(client):
    await client.post("/register", json=PAYLOAD)
    response = await client.post("/login", json={"email": "john@example.com", "password": "wrong-password"})

    assert response.status_code == 400
    assert response.json() == {"error": "invalid_credentials"}


async def test_login_unknown_email_is_400(client):
    response = await client.post("/login", json={"email": "ghost@example.com", "password": "secret123"})

    assert response.status_code == 400
    assert response.json() == {"error": "invalid_credentials"}


async def test_login_token_issuance_failure_is_500(client, monkeypatch):
    await client.post("/register", json=PAYLOAD)

    def broken_signer(*args, **kwargs):
        raise JWTError("signing failed")

    monkeypatch.setattr(auth_service, "create_access_token", broken_signer)
    response = await client.post("/login", json={"email": "john@example.com", "password": "secret123"})

    assert response.status_code == 500
    assert response.json() == {"error": "could_not_create_token"}


async def test_missing_token_is_401(client):
    response = await client.get("/categories")

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthenticated."}
    assert response.headers["www-authenticate"] == "Bearer"


async def test_garbage_token_is_401(client):
    response = await client.get("/tasks", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 401


async def test_expired_token_is_401(client):
    registered = await client.post("/register", json=PAYLOAD)
    user_id = registered.json()["user"]["user_id"]
    expired = create_access_token({"sub": str(user_id)}, expires_delta=timedelta(minutes=-5))

    response = await client.get("/tasks", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401


async def test_token_for_unknown_user_is_401(client):
    token = create_access_token({"sub": "9999"})
    response = await client.get("/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


async def test_token_without_subject_is_401(client):
    token = create_access_token({"scope": "nothing"})
    response = await client.get("/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


async def test_email_is_stored_lowercase_and_login_ignores_case(client, db):
    registered = await client.post("/register", json={**PAYLOAD, "email": "John@Example.COM"})

    assert registered.status_code == 201
    assert registered.json()["user"]["email"] == "john@example.com"
    result = await db.execute(select(User).filter(User.email == "john@example.com"))
    assert result.scalars().first() is not None

    for spelling in ("John@Example.COM", "john@example.com", "  JOHN@EXAMPLE.com "):
        response = await client.post("/login", json={"email": spelling, "password": "secret123"})
        assert response.status_code == 200, spelling


async def test_register_duplicate_email_differing_only_in_case(client):
    await client.post("/register", json=PAYLOAD)
    response = await client.post("/register", json={**PAYLOAD, "email": "John@example.com"})

    assert response.status_code == 422
    assert response.json()["errors"] == {"email": ["The email has already been taken."]}


async def test_token_with_out_of_range_subject_is_401(client):
    token = create_access_token({"sub": str(2**63)})
    response = await client.get("/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


async def test_password_hashing_runs_in_threadpool(client, monkeypatch):
    calls = []

    async def recording_threadpool(func, *args, **kwargs):
        calls.append(func.__name__)
        return await run_in_threadpool(func, *args, **kwargs)

    monkeypatch.setattr(auth_service, "run_in_threadpool", recording_threadpool)
    await client.post("/register", json=PAYLOAD)
    response = await client.post("/login", json={"email": "john@example.com", "password": "secret123"})

    assert response.status_code == 200
    assert calls == ["get_password_hash", "verify_password"]
