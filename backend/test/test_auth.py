"""
Tests for Authentication, CSRF and Health Endpoints
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import Session

from sportnet.config import settings
from sportnet.main import app
from sportnet.models.user import User
from sportnet.utils.auth import create_access_token, create_refresh_token

TEST_PASSWORD = "Password123"


class TestUserRegistration:
    """Test user registration"""

    def test_register_success(self, client: TestClient, db: Session):
        """Test successful registration"""
        response = client.post(
            "/auth/register",
            json={
                "firstName": "Ada",
                "lastName": "Lovelace",
                "email": "ada@example.com",
                "phone": "+46701112233",
                "password": "Analytical1",
            },
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["email"] == "ada@example.com"
        assert data["role"] == 1
        assert "hashed_password" not in data
        user = db.query(User).filter(User.email == "ada@example.com").one()
        assert user.hashed_password != "Analytical1"

    def test_register_duplicate_email(self, client: TestClient, participant_user: User):
        """Test registration with an existing email"""
        response = client.post(
            "/auth/register",
            json={
                "firstName": "Copy",
                "lastName": "Cat",
                "email": participant_user.email,
                "phone": "+46700000000",
                "password": "Password123",
            },
        )

        assert response.status_code == 409
        assert response.json() == {"success": False, "error": "Email already registered"}

    @pytest.mark.parametrize("password", ["short1A", "nouppercase1", "NoDigitsHere"])
    def test_register_weak_password(self, client: TestClient, password: str):
        """Test password rules"""
        response = client.post(
            "/auth/register",
            json={
                "firstName": "Weak",
                "lastName": "Password",
                "email": "weak@example.com",
                "phone": "+46700000000",
                "password": password,
            },
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_register_reports_every_invalid_field(self, client: TestClient):
        """Test validation errors are joined into one message"""
        response = client.post(
            "/auth/register",
            json={
                "firstName": "",
                "lastName": "Nobody",
                "email": "not-an-email",
                "phone": "+46700000000",
                "password": "Password123",
            },
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error.count(", ") >= 1
        assert "firstName" in error
        assert "email" in error


class TestLogin:
    """Test login and account lockout"""

    def test_login_success(self, client: TestClient, participant_user: User):
        """Test successful login returns both tokens"""
        response = client.post("/auth/login", json={"email": participant_user.email, "password": TEST_PASSWORD})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["token_type"] == "bearer"
        assert data["user"]["id"] == str(participant_user.id)
        payload = jwt.decode(data["access_token"], settings.JWT_SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert payload["sub"] == str(participant_user.id)
        assert payload["type"] == "access"

    def test_login_wrong_password(self, client: TestClient, db: Session, participant_user: User):
        """Test a wrong password counts as a failed attempt"""
        response = client.post("/auth/login", json={"email": participant_user.email, "password": "Wrong12345"})

        assert response.status_code == 401
        db.refresh(participant_user)
        assert participant_user.failed_login_attempts == 1

    def test_login_unknown_email(self, client: TestClient):
        """Test login with a non-existent email"""
        response = client.post("/auth/login", json={"email": "nobody@example.com", "password": "Password123"})

        assert response.status_code == 401
        assert response.json()["error"] == "Incorrect email or password"

    def test_lockout_after_repeated_failures(self, client: TestClient, db: Session, participant_user: User):
        """Test the account locks and then refuses the right password"""
        body = {"email": participant_user.email, "password": "Wrong12345"}
        responses = [client.post("/auth/login", json=body) for _ in range(settings.MAX_FAILED_LOGIN_ATTEMPTS)]

        assert [r.status_code for r in responses[:-1]] == [401] * (settings.MAX_FAILED_LOGIN_ATTEMPTS - 1)
        assert responses[-1].status_code == 403

        locked = client.post("/auth/login", json={"email": participant_user.email, "password": TEST_PASSWORD})
        assert locked.status_code == 403
        db.refresh(participant_user)
        assert participant_user.locked_until > datetime.utcnow()

    def test_success_resets_failures(self, client: TestClient, db: Session, participant_user: User):
        """Test a good login clears the failure counter"""
        client.post("/auth/login", json={"email": participant_user.email, "password": "Wrong12345"})

        client.post("/auth/login", json={"email": participant_user.email, "password": TEST_PASSWORD})

        db.refresh(participant_user)
        assert participant_user.failed_login_attempts == 0
        assert participant_user.last_login is not None

    def test_inactive_account(self, client: TestClient, db: Session, participant_user: User):
        """Test inactive users cannot log in"""
        participant_user.is_active = False
        db.commit()

        response = client.post("/auth/login", json={"email": participant_user.email, "password": TEST_PASSWORD})

        assert response.status_code == 403


class TestCurrentUser:
    """Test token handling on protected routes"""

    def test_me(self, client: TestClient, participant_user: User, auth_headers):
        """Test getting current user info"""
        response = client.get("/auth/me", headers=auth_headers(participant_user))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == participant_user.email
        assert data["participant_id"] == str(participant_user.participant_id)

    def test_me_without_token(self, client: TestClient):
        """Test getting current user without token"""
        response = client.get("/auth/me")

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Not authenticated"}

    def test_invalid_token(self, client: TestClient):
        """Test a malformed token"""
        response = client.get("/auth/me", headers={"Authorization": "Bearer invalid_token"})

        assert response.status_code == 401

    def test_expired_token(self, client: TestClient, participant_user: User):
        """Test an expired token"""
        token = create_access_token(participant_user.id, expires_delta=timedelta(minutes=-1))

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"] == "Access token expired"

    def test_refresh_token_rejected(self, client: TestClient, participant_user: User):
        """Test refresh tokens cannot be used as access tokens"""
        token = create_refresh_token(participant_user.id)

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_unknown_user(self, client: TestClient, db: Session):
        """Test a token for a user that does not exist"""
        token = create_access_token(uuid4())

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401


class TestRefreshToken:
    """Test exchanging a refresh token"""

    def test_refresh_issues_new_pair(self, client: TestClient, participant_user: User):
        """Test a refresh token yields a working access token"""
        response = client.post("/auth/refresh", json={"refreshToken": create_refresh_token(participant_user.id)})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == str(participant_user.id)
        me = client.get("/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.status_code == 200

    def test_login_refresh_token_round_trip(self, client: TestClient, participant_user: User):
        """Test the refresh token handed out at login is accepted"""
        login = client.post("/auth/login", json={"email": participant_user.email, "password": TEST_PASSWORD})

        response = client.post("/auth/refresh", json={"refreshToken": login.json()["data"]["refresh_token"]})

        assert response.status_code == 200

    def test_access_token_rejected(self, client: TestClient, participant_user: User):
        """Test an access token cannot be used to refresh"""
        response = client.post("/auth/refresh", json={"refreshToken": create_access_token(participant_user.id)})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    def test_expired_refresh_token(self, client: TestClient, participant_user: User):
        token = create_refresh_token(participant_user.id, expires_delta=timedelta(seconds=-1))

        response = client.post("/auth/refresh", json={"refreshToken": token})

        assert response.status_code == 401
        assert response.json()["error"] == "Refresh token expired"

    def test_inactive_user(self, client: TestClient, db: Session, participant_user: User):
        """Test inactive accounts cannot refresh"""
        participant_user.is_active = False
        db.commit()

        response = client.post("/auth/refresh", json={"refreshToken": create_refresh_token(participant_user.id)})

        assert response.status_code == 403


class TestCsrf:
    """Test the double-submit CSRF check"""

    def test_missing_token_rejected(self):
        """Test unsafe requests without the cookie/header pair"""
        bare = TestClient(app)

        response = bare.post("/auth/login", json={"email": "a@example.com", "password": "Password123"})

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": "Invalid CSRF token"}

    def test_mismatched_token_rejected(self):
        """Test a header that does not match the cookie"""
        bare = TestClient(app, cookies={settings.CSRF_COOKIE_NAME: "one"})

        response = bare.post(
            "/auth/login",
            json={"email": "a@example.com", "password": "Password123"},
            headers={settings.CSRF_HEADER_NAME: "two"},
        )

        assert response.status_code == 403

    def test_safe_request_sets_cookie(self):
        """Test a GET hands out a CSRF cookie"""
        bare = TestClient(app)

        response = bare.get("/health")

        assert response.status_code == 200
        assert settings.CSRF_COOKIE_NAME in response.cookies

    def test_disabled(self, monkeypatch):
        """Test the check can be switched off"""
        monkeypatch.setattr(settings, "CSRF_ENABLED", False)
        bare = TestClient(app)

        response = bare.get("/health")

        assert settings.CSRF_COOKIE_NAME not in response.cookies


class TestHealth:
    def test_root(self, client: TestClient):
        """Test the root endpoint"""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_health(self, client: TestClient):
        """Test health check"""
        response = client.get("/health")

        assert response.json()["data"]["status"] == "healthy"

    def test_unknown_route(self, client: TestClient):
        """Test 404s use the error envelope"""
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not Found"}
