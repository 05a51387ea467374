"""
Authentication endpoint tests.
Tests for signup, login, logout, token refresh and credential checks.
"""

import httpx
import pytest
from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Company, User, UserProfile
from drivelog_api.core.cookie_auth import (
    COOKIE_NAME_ACCESS,
    COOKIE_NAME_REFRESH,
    COOKIE_NAME_SESSION,
    create_tokens,
)
from tests.factories import UserProfileFactory
from tests.test_drivelog_api.utils import extract_cookies_from_response


class TestSignUp:
    """Test suite for signup endpoint."""

    @pytest.mark.asyncio
    async def test_signup_creates_identity(self, app_client: httpx.AsyncClient):
        response = await app_client.post(
            "/v1/auth/signup",
            json={
                "email": "new-driver@example.com",
                "password": "averysecretpassword",
                "name": "New Driver",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["user"]["email"] == "new-driver@example.com"
        assert data["user"]["name"] == "New Driver"
        assert "password" not in data["user"]
        assert data["profile"] is None
        assert data["company"] is None

        cookies = extract_cookies_from_response(response)
        assert COOKIE_NAME_ACCESS in cookies
        assert COOKIE_NAME_REFRESH in cookies

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(
        self, app_client: httpx.AsyncClient, foo_user: User
    ):
        response = await app_client.post(
            "/v1/auth/signup",
            json={
                "email": foo_user.email,
                "password": "averysecretpassword",
                "name": "Someone Else",
            },
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "User with this email already exists"

    @pytest.mark.asyncio
    async def test_signup_short_password(self, app_client: httpx.AsyncClient):
        response = await app_client.post(
            "/v1/auth/signup",
            json={"email": "short@example.com", "password": "short", "name": "Short"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_signup_links_pending_profile(
        self,
        app_client: httpx.AsyncClient,
        db_session: AsyncSession,
        foo_company: Company,
    ):
        """An invited driver gets its profile when signing up with the same email."""
        pending = await UserProfileFactory.create_async(
            session=db_session,
            company_id=foo_company.id,
            name="Invited Driver",
            email="invited@example.com",
        )

        response = await app_client.post(
            "/v1/auth/signup",
            json={
                "email": "Invited@Example.com",
                "password": "averysecretpassword",
                "name": "Invited Driver",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["profile"]["id"] == str(pending.id)
        assert data["profile"]["role"] == "driver"
        assert data["profile"]["user_id"] == data["user"]["id"]
        assert data["company"]["id"] == str(foo_company.id)

        await db_session.refresh(pending)
        assert str(pending.user_id) == data["user"]["id"]


class TestLogin:
    """Test suite for login endpoint."""

    @pytest.mark.asyncio
    async def test_login_success(
        self,
        app_client: httpx.AsyncClient,
        foo_user: User,
        foo_admin: UserProfile,
        foo_company: Company,
    ):
        response = await app_client.post(
            "/v1/auth/login",
            json={"email": foo_user.email, "password": foo_user.plain_password},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["user"]["email"] == foo_user.email
        assert "password" not in data["user"]
        assert data["user"]["last_connection"] is not None
        assert data["profile"]["role"] == "admin"
        assert data["company"]["name"] == foo_company.name

        set_cookie_headers = response.headers.get_list("set-cookie")
        assert any(COOKIE_NAME_ACCESS in cookie for cookie in set_cookie_headers)
        assert any(COOKIE_NAME_REFRESH in cookie for cookie in set_cookie_headers)
        assert any(COOKIE_NAME_SESSION in cookie for cookie in set_cookie_headers)

    @pytest.mark.asyncio
    async def test_login_invalid_email(self, app_client: httpx.AsyncClient):
        response = await app_client.post(
            "/v1/auth/login",
            json={"email": "nonexistent@example.com", "password": "wrongpassword"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Incorrect email or password"

    @pytest.mark.asyncio
    async def test_login_invalid_password(
        self, app_client: httpx.AsyncClient, foo_user: User
    ):
        response = await app_client.post(
            "/v1/auth/login",
            json={"email": foo_user.email, "password": "wrongpassword"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Incorrect email or password"

    @pytest.mark.asyncio
    async def test_login_inactive_user(
        self, app_client: httpx.AsyncClient, db_session: AsyncSession, foo_user: User
    ):
        foo_user.is_active = False
        await db_session.flush()

        response = await app_client.post(
            "/v1/auth/login",
            json={"email": foo_user.email, "password": foo_user.plain_password},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestToken:
    """Test suite for bearer token endpoint."""

    @pytest.mark.asyncio
    async def test_token_can_be_used_as_bearer(
        self, app_client: httpx.AsyncClient, foo_user: User
    ):
        response = await app_client.post(
            "/v1/auth/token",
            json={"email": foo_user.email, "password": foo_user.plain_password},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"

        me = await app_client.get(
            "/v1/users/me",
            headers={"Authorization": f"Bearer {data['access_token']}"},
        )
        assert me.status_code == status.HTTP_200_OK
        assert me.json()["user"]["id"] == str(foo_user.id)

    @pytest.mark.asyncio
    async def test_access_cookie_authenticates(
        self, app_client: httpx.AsyncClient, foo_user: User
    ):
        response = await app_client.post(
            "/v1/auth/login",
            json={"email": foo_user.email, "password": foo_user.plain_password},
        )
        cookies = extract_cookies_from_response(response)
        app_client.cookies.clear()
        app_client.cookies.set(COOKIE_NAME_ACCESS, cookies[COOKIE_NAME_ACCESS])

        me = await app_client.get("/v1/users/me")

        assert me.status_code == status.HTTP_200_OK
        assert me.json()["user"]["email"] == foo_user.email


class TestRefresh:
    """Test suite for refresh endpoint."""

    @pytest.mark.asyncio
    async def test_refresh_with_cookie(
        self, app_client: httpx.AsyncClient, foo_user: User
    ):
        tokens = create_tokens({"sub": str(foo_user.id)})
        app_client.cookies.set(COOKIE_NAME_REFRESH, tokens["refresh_token"])

        response = await app_client.post("/v1/auth/refresh")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"ok": True}
        cookies = extract_cookies_from_response(response)
        assert COOKIE_NAME_ACCESS in cookies
        assert COOKIE_NAME_REFRESH in cookies

    @pytest.mark.asyncio
    async def test_refresh_without_cookie(self, app_client: httpx.AsyncClient):
        response = await app_client.post("/v1/auth/refresh")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(
        self, app_client: httpx.AsyncClient, foo_user: User
    ):
        tokens = create_tokens({"sub": str(foo_user.id)})
        app_client.cookies.set(COOKIE_NAME_REFRESH, tokens["access_token"])

        response = await app_client.post("/v1/auth/refresh")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestLogout:
    @pytest.mark.asyncio
    async def test_logout_clears_cookies(self, app_client: httpx.AsyncClient):
        response = await app_client.post("/v1/auth/logout")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Logged out successfully"}
        set_cookie_headers = response.headers.get_list("set-cookie")
        assert len(set_cookie_headers) == 3
        assert all("Max-Age=0" in cookie for cookie in set_cookie_headers)


class TestCredentials:
    """Requests without valid credentials are rejected."""

    @pytest.mark.asyncio
    async def test_missing_token(self, app_client: httpx.AsyncClient):
        response = await app_client.get("/v1/users/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Not authenticated"

    @pytest.mark.asyncio
    async def test_invalid_token(self, app_client: httpx.AsyncClient):
        response = await app_client.get(
            "/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Could not validate credentials"
