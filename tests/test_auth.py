"""Tests for bearer-token identity resolution."""

from unittest import mock

import jwt
import pytest
from fastapi.testclient import TestClient
from jwt.exceptions import InvalidTokenError

import AuthAndUser as auth
from config import Settings, get_settings
from main import app
from routers.posts import get_post_store

SECRET = "unit-test-secret"
SETTINGS = Settings(jwt_secret=SECRET)


def token(claims, secret=SECRET):
    return jwt.encode(claims, secret, algorithm="HS256")


def test_decode_reads_username_and_role():
    identity = auth.decode_identity(token({"username": "alice", "role": "teacher"}), SETTINGS)
    assert identity.username == "alice"
    assert identity.role == "teacher"


def test_decode_falls_back_to_sub():
    identity = auth.decode_identity(token({"sub": "bob", "role": "student"}), SETTINGS)
    assert identity.username == "bob"


@pytest.mark.parametrize("claims", [{"username": "alice"}, {"role": "admin"}])
def test_decode_requires_both_claims(claims):
    with pytest.raises(InvalidTokenError):
        auth.decode_identity(token(claims), SETTINGS)


def test_decode_rejects_wrong_signature():
    with pytest.raises(InvalidTokenError):
        auth.decode_identity(token({"username": "alice", "role": "admin"}, secret="other"), SETTINGS)


def test_secret_key_comes_from_secret_manager_when_not_inline():
    settings = Settings(jwt_secret=None, jwt_secret_id="projects/1/secrets/post-service-jwt/versions/latest")
    with mock.patch("AuthAndUser.secretmanager.get_secret", return_value="from-sm") as get_secret:
        assert auth.get_secret_key(settings) == "from-sm"
    get_secret.assert_called_once_with("projects/1/secrets/post-service-jwt/versions/latest")


@pytest.fixture()
def client(store):
    app.dependency_overrides[get_settings] = lambda: SETTINGS
    app.dependency_overrides[get_post_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_request_without_token_is_unauthorized(client):
    response = client.get("/api/post-service/posts")
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_request_with_bad_token_is_unauthorized(client):
    response = client.get("/api/post-service/posts", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Could not validate credentials"}


def test_request_with_valid_token_reaches_handler(client):
    headers = {"Authorization": f"Bearer {token({'username': 'alice', 'role': 'teacher'})}"}
    response = client.post("/api/post-service/posts/create", json={"title": "Intro"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["post"]["postedBy"] == "alice"
