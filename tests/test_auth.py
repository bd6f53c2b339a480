"""
Authentication: token verification, session resolution, login endpoint.
"""

import time
from unittest.mock import Mock, patch

import pytest
from fastapi import HTTPException
from jose import jwt

from core.config import settings
from dependencies.auth import UNASSIGNED_ROLE, resolve_session, verify_access_token


# ============================================================
# SESSION RESOLUTION
# ============================================================
def test_resolve_session_from_profile(store):
    store.seed(
        "user_profiles",
        id="P-42",
        auth_user_id="auth-42",
        role="censeur",
        tenant_id="S1",
        first_name="Aminata",
        last_name="Koné",
        phone="+225 01 02 03",
    )

    ctx = resolve_session(store, "auth-42", "aminata@ecole.ci")

    assert ctx.user_id == "P-42"
    assert ctx.role == "censeur"
    assert ctx.tenant_id == "S1"
    assert ctx.display_name == "Aminata Koné"
    assert ctx.email == "aminata@ecole.ci"


def test_missing_profile_gives_minimal_session(store):
    ctx = resolve_session(store, "auth-new", "new@ecole.ci")

    assert ctx.role == UNASSIGNED_ROLE
    assert ctx.tenant_id is None
    assert ctx.display_name == "new@ecole.ci"


def test_session_is_immutable(store):
    ctx = resolve_session(store, "auth-new")
    with pytest.raises(Exception):
        ctx.role = "direction"


# ============================================================
# TOKEN VERIFICATION
# ============================================================
def _token(secret="test-secret", **claims):
    payload = {
        "sub": "auth-1",
        "email": "a@ecole.ci",
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def test_local_jwt_verification(monkeypatch):
    monkeypatch.setattr(settings, "SUPABASE_JWT_SECRET", "test-secret")
    client = Mock()

    assert verify_access_token(_token(), client) == ("auth-1", "a@ecole.ci")
    client.auth.get_user.assert_not_called()


@pytest.mark.parametrize("token_kwargs", [
    {"secret": "other-secret"},
    {"exp": int(time.time()) - 10},
    {"aud": "anon"},
])
def test_bad_jwt_is_401(monkeypatch, token_kwargs):
    monkeypatch.setattr(settings, "SUPABASE_JWT_SECRET", "test-secret")
    with pytest.raises(HTTPException) as exc:
        verify_access_token(_token(**token_kwargs), Mock())
    assert exc.value.status_code == 401


def test_remote_verification_without_secret(monkeypatch):
    monkeypatch.setattr(settings, "SUPABASE_JWT_SECRET", None)
    client = Mock()
    client.auth.get_user.return_value = Mock(user=Mock(id="auth-7", email="b@ecole.ci"))

    assert verify_access_token("opaque", client) == ("auth-7", "b@ecole.ci")


def test_remote_verification_failure(monkeypatch):
    monkeypatch.setattr(settings, "SUPABASE_JWT_SECRET", None)
    client = Mock()
    client.auth.get_user.side_effect = Exception("expired")

    with pytest.raises(HTTPException) as exc:
        verify_access_token("opaque", client)
    assert exc.value.status_code == 401


# ============================================================
# ENDPOINTS
# ============================================================
def test_protected_endpoint_requires_token(client):
    response = client.get("/dashboard/")
    assert response.status_code in (401, 403)


def test_login_success(client):
    mock_client = Mock()
    mock_client.auth.sign_in_with_password.return_value = Mock(
        session=Mock(access_token="access-123")
    )

    with patch("routers.auth.get_supabase_client", return_value=mock_client):
        response = client.post("/auth/login", json={"email": "A@Ecole.ci", "password": "secret1"})

    assert response.status_code == 200
    assert response.json() == {"access_token": "access-123", "token_type": "bearer"}
    mock_client.auth.sign_in_with_password.assert_called_once_with(
        {"email": "a@ecole.ci", "password": "secret1"}
    )


def test_login_failure_is_generic(client):
    mock_client = Mock()
    mock_client.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")

    with patch("routers.auth.get_supabase_client", return_value=mock_client):
        response = client.post("/auth/login", json={"email": "a@ecole.ci", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_rate_limited(client):
    mock_client = Mock()
    mock_client.auth.sign_in_with_password.side_effect = Exception("bad")

    with patch("routers.auth.get_supabase_client", return_value=mock_client):
        for _ in range(10):
            client.post("/auth/login", json={"email": "a@ecole.ci", "password": "x"})
        response = client.post("/auth/login", json={"email": "a@ecole.ci", "password": "x"})

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "300"


def test_login_without_supabase_is_503(client):
    with patch("routers.auth.get_supabase_client", return_value=None):
        response = client.post("/auth/login", json={"email": "a@ecole.ci", "password": "x"})
    assert response.status_code == 503


def test_register(client):
    mock_client = Mock()
    with patch("routers.auth.get_supabase_client", return_value=mock_client):
        response = client.post("/auth/register", json={
            "email": "parent@ecole.ci",
            "password": "secret1",
            "full_name": " Fatou Diallo ",
        })

    assert response.status_code == 200
    assert response.json()["success"] is True
    args = mock_client.auth.sign_up.call_args[0][0]
    assert args["options"]["data"]["full_name"] == "Fatou Diallo"


def test_me(client, login_as, ctx_factory):
    login_as(ctx_factory(user_id="U1", role="econome", tenant_id="S1"))
    response = client.get("/auth/me")
    assert response.status_code == 200
    assert response.json()["role_label"] == "Économe"
    assert response.json()["tenant_id"] == "S1"
