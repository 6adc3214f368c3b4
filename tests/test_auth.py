"""Tests for registration, login and the current-user endpoint."""

import pytest
from django.contrib.auth import get_user_model
from rest_framework.authtoken.models import Token

pytestmark = pytest.mark.django_db

User = get_user_model()

REGISTRATION = {
    "name": "Dana",
    "email": "Dana@Example.com",
    "password": "hunter22",
    "phone_number": "+15550001111",
}


def test_register(api_client):
    response = api_client.post("/api/auth/register", REGISTRATION, format="json")

    body = response.json()
    assert response.status_code == 201
    assert body["user"]["email"] == "dana@example.com"
    assert body["user"]["rating"] == 0
    assert body["user"]["completed_jobs"] == 0
    assert "password" not in body["user"]
    assert Token.objects.get(key=body["token"]).user.email == "dana@example.com"


def test_register_hashes_password(api_client):
    api_client.post("/api/auth/register", REGISTRATION, format="json")

    user = User.objects.get(email="dana@example.com")
    assert user.password != "hunter22"
    assert user.check_password("hunter22")


def test_register_duplicate_email(api_client, make_user):
    make_user(email="dana@example.com")

    response = api_client.post("/api/auth/register", REGISTRATION, format="json")

    assert response.status_code == 400
    assert response.json()["errors"]["email"] == ["User already exists"]


def test_register_short_password(api_client):
    response = api_client.post("/api/auth/register", {**REGISTRATION, "password": "abc"}, format="json")

    assert response.status_code == 400
    assert "password" in response.json()["errors"]


def test_login(api_client, make_user):
    user = make_user(email="sam@example.com", password="secret123")

    response = api_client.post(
        "/api/auth/login", {"email": "SAM@example.com", "password": "secret123"}, format="json"
    )

    assert response.status_code == 200
    assert response.json()["user"]["id"] == user.pk
    assert response.json()["token"] == Token.objects.get(user=user).key


def test_login_bad_password(api_client, make_user):
    make_user(email="sam@example.com", password="secret123")

    response = api_client.post(
        "/api/auth/login", {"email": "sam@example.com", "password": "wrong"}, format="json"
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_unknown_user(api_client):
    response = api_client.post(
        "/api/auth/login", {"email": "ghost@example.com", "password": "whatever"}, format="json"
    )
    assert response.status_code == 401


def test_me(auth_client, make_user):
    user = make_user(name="Robin", rating=3.5, completed_jobs=2)

    response = auth_client(user).get("/api/auth/me")

    assert response.status_code == 200
    assert response.json() == {
        "id": user.pk,
        "name": "Robin",
        "email": user.email,
        "phone_number": user.phone_number,
        "rating": 3.5,
        "completed_jobs": 2,
        "created_jobs": 0,
    }


def test_me_requires_token(api_client):
    response = api_client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json() == {"message": "Please authenticate", "code": "not_authenticated"}
