"""Accounts, tokens and password hashing."""

from fundtheworld.core.security import (
    create_access_token, decode_access_token, hash_password, verify_password
)
from fundtheworld.repositories.user_repository import user_repository


def test_register_login_and_me(client):
    response = client.post("/api/users/register", json={"email": "Ada@Example.org", "password": "s3cret-pass"})
    assert response.status_code == 201
    user = response.json()["data"]
    assert user["email"] == "ada@example.org"
    assert "password" not in user

    login = client.post("/api/users/login", json={"email": "ada@example.org", "password": "s3cret-pass"})
    assert login.status_code == 200
    token = login.json()["data"]
    assert token["token_type"] == "bearer"

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {token['access_token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["id"] == user["id"]
    assert "createdAt" in user


def test_duplicate_email_conflicts(client):
    payload = {"email": "ada@example.org", "password": "s3cret-pass"}
    assert client.post("/api/users/register", json=payload).status_code == 201
    assert client.post("/api/users/register", json=payload).status_code == 409


def test_short_password_is_rejected(client):
    response = client.post("/api/users/register", json={"email": "ada@example.org", "password": "abc"})
    assert response.status_code == 400


def test_wrong_password_is_unauthorized(client):
    client.post("/api/users/register", json={"email": "ada@example.org", "password": "s3cret-pass"})
    response = client.post("/api/users/login", json={"email": "ada@example.org", "password": "wrong-pass"})
    assert response.status_code == 401
    unknown = client.post("/api/users/login", json={"email": "nobody@example.org", "password": "s3cret-pass"})
    assert unknown.status_code == 401


def test_me_requires_valid_token(client):
    assert client.get("/api/users/me").status_code == 401
    assert client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_password_hash_is_salted_bcrypt():
    first, second = hash_password("hunter22"), hash_password("hunter22")
    assert first.startswith("$2b$10$")
    assert "hunter22" not in first
    assert first != second
    assert verify_password("hunter22", first)
    assert not verify_password("hunter23", first)
    assert not verify_password("hunter22", None)
    assert not verify_password("hunter22", "no-separator")


def test_long_passwords_register_and_login(client):
    password = "correct horse battery staple " * 4
    payload = {"email": "ada@example.org", "password": password}
    assert client.post("/api/users/register", json=payload).status_code == 201
    assert client.post("/api/users/login", json=payload).status_code == 200


def test_stored_hash_is_not_plaintext(client, db):
    client.post("/api/users/register", json={"email": "ada@example.org", "password": "s3cret-pass"})
    stored = user_repository.get_by_email(db, "ada@example.org").password
    assert stored.startswith("$2b$")
    assert verify_password("s3cret-pass", stored)


def test_token_roundtrip_and_expiry():
    assert decode_access_token(create_access_token("user-1")) == "user-1"
    assert decode_access_token(create_access_token("user-1", expires_minutes=-1)) is None
    assert decode_access_token("garbage") is None
