"""Tests for the /auth endpoints and the token dependencies."""

import time

import bcrypt
import pytest

from modules.accounts.models import Role, Subscription
from modules.tokens import codec
from shared.config import get_settings


def _hash(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode()


def _set_cookie_headers(response) -> list[str]:
    return response.headers.get_list("set-cookie")


class TestLogin:
    def test_login_success(self, client, add_account):
        """Correct credentials return a token and set the httpOnly cookie."""
        account = add_account("alice", password_hash=_hash("wonderland"))

        response = client.post("/auth/login", json={"username": "alice", "password": "wonderland"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert codec.verify(data["token"], get_settings().jwt_secret).id == account.id
        assert "message" not in data

        cookie = next(h for h in _set_cookie_headers(response) if h.startswith("token="))
        assert "HttpOnly" in cookie
        assert "Path=/" in cookie
        assert "Max-Age" not in cookie

    def test_login_wrong_password(self, client, add_account):
        """Failures answer 200 with success false and no token."""
        add_account("alice", password_hash=_hash("wonderland"))

        response = client.post("/auth/login", json={"username": "alice", "password": "nope"})

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Invalid credentials"}
        assert _set_cookie_headers(response) == []

    def test_login_unknown_user(self, client):
        """Unknown users get the same answer as a wrong password."""
        response = client.post("/auth/login", json={"username": "ghost", "password": "x"})
        assert response.json() == {"success": False, "message": "Invalid credentials"}

    def test_login_missing_fields(self, client):
        """Bodies without credentials fail validation."""
        response = client.post("/auth/login", json={"username": "alice"})
        assert response.status_code == 422

    def test_admin_login_resets_credits(self, client, add_account, store):
        """Admins get their AI credits reset on login."""
        admin = add_account("root", role=Role.ADMIN, password_hash=_hash("secret"), ai_credits=3)

        client.post("/auth/login", json={"username": "root", "password": "secret"})

        assert store.get(admin.id).ai_credits == 1000


class TestRegister:
    def test_register_then_login(self, client):
        """A registered account can log in right away."""
        response = client.post(
            "/auth/register",
            json={"username": "bob", "email": "bob@example.com", "password": "builder"},
        )
        assert response.json() == {"success": True, "message": "Registration successful"}

        login = client.post("/auth/login", json={"username": "bob", "password": "builder"})
        assert login.json()["success"] is True

    def test_register_defaults(self, client, store):
        """New accounts are basic users with the default credits."""
        client.post(
            "/auth/register",
            json={"username": "bob", "email": "bob@example.com", "password": "builder"},
        )
        account = store.find_by_username("bob")
        assert account.role is Role.USER
        assert account.subscription is Subscription.BASIC
        assert account.ai_credits == 100
        assert account.password_hash != "builder"

    def test_register_duplicate_username(self, client, add_account):
        """A taken username answers success false."""
        add_account("bob")
        response = client.post(
            "/auth/register",
            json={"username": "bob", "email": "other@example.com", "password": "x"},
        )
        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Username already exists"}

    def test_register_duplicate_email(self, client, add_account):
        """A taken email answers success false."""
        add_account("bob", email="bob@example.com")
        response = client.post(
            "/auth/register",
            json={"username": "robert", "email": "bob@example.com", "password": "x"},
        )
        assert response.json() == {"success": False, "message": "Email already exists"}

    def test_register_invalid_email(self, client):
        """Malformed emails fail validation."""
        response = client.post(
            "/auth/register",
            json={"username": "bob", "email": "not-an-email", "password": "x"},
        )
        assert response.status_code == 422


class TestRefresh:
    def test_refresh_valid_token(self, client, add_account, auth_headers):
        """A living token is exchanged for a new one."""
        account = add_account()

        response = client.post("/auth/refresh", headers=auth_headers(account))

        assert response.status_code == 200
        token = response.json()["token"]
        assert codec.verify(token, get_settings().jwt_secret).id == account.id
        assert any(h.startswith("token=") for h in _set_cookie_headers(response))

    def test_refresh_expired_within_grace(self, client, add_account, make_token):
        """Recently expired tokens can still be refreshed."""
        account = add_account()
        expired = make_token(account.id, ttl_seconds=-60)

        response = client.post("/auth/refresh", headers={"Authorization": f"Bearer {expired}"})

        assert response.status_code == 200
        assert codec.verify(response.json()["token"], get_settings().jwt_secret).id == account.id

    def test_refresh_beyond_grace(self, client, add_account, make_token):
        """Tokens expired for longer than the grace window are refused."""
        account = add_account()
        old = make_token(account.id, ttl_seconds=3600, now=time.time() - 3 * 24 * 60 * 60)

        response = client.post("/auth/refresh", headers={"Authorization": f"Bearer {old}"})

        assert response.status_code == 401
        assert response.json()["error"] == "Token too old to refresh"

    def test_refresh_from_cookie(self, client, add_account, make_token):
        """The session cookie works as a carrier."""
        account = add_account()
        client.cookies.set("token", make_token(account.id))

        response = client.post("/auth/refresh")

        assert response.status_code == 200

    def test_refresh_without_token(self, client):
        """No token at all is a 401."""
        response = client.post("/auth/refresh")
        assert response.status_code == 401
        assert response.json()["code"] == "MISSING_TOKEN"

    def test_refresh_forged_token(self, client, add_account, make_token):
        """A token signed with another secret is refused."""
        account = add_account()
        forged = make_token(account.id, secret="someone-else-0123456789abcdef")

        response = client.post("/auth/refresh", headers={"Authorization": f"Bearer {forged}"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    def test_refresh_deleted_account(self, client, make_token):
        """A valid token for a missing account is a 404."""
        response = client.post(
            "/auth/refresh", headers={"Authorization": f"Bearer {make_token(404)}"}
        )
        assert response.status_code == 404
        assert response.json()["error"] == "User not found"


class TestVerifyAndWhoami:
    def test_verify_returns_public_view(self, client, add_account, auth_headers):
        """verify returns the account fields the client renders."""
        account = add_account("carol", subscription=Subscription.PREMIUM)

        response = client.get("/auth/verify", headers=auth_headers(account))

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["id"] == account.id
        assert user["username"] == "carol"
        assert user["subscription"] == "premium"
        assert user["hideAds"] is True
        assert user["aiCredits"] == 100
        assert "password_hash" not in user

    def test_verify_expired_token(self, client, add_account, make_token):
        """Expired tokens are reported like malformed ones."""
        account = add_account()
        expired = client.get(
            "/auth/verify",
            headers={"Authorization": f"Bearer {make_token(account.id, ttl_seconds=-1)}"},
        )
        malformed = client.get("/auth/verify", headers={"Authorization": "Bearer garbage"})

        assert expired.status_code == malformed.status_code == 401
        assert expired.json() == malformed.json()
        assert expired.json()["error"] == "Invalid token"

    def test_verify_ignores_query_token(self, client, add_account, make_token):
        """Session endpoints never read the query string."""
        account = add_account()
        response = client.get(f"/auth/verify?token={make_token(account.id)}")
        assert response.status_code == 401

    def test_whoami(self, client, add_account, auth_headers):
        """whoami returns the minimal view."""
        account = add_account("dave")
        response = client.get("/auth/whoami", headers=auth_headers(account))
        assert response.status_code == 200
        assert response.json() == {
            "id": account.id,
            "username": "dave",
            "role": "user",
            "subscription": "basic",
            "googlePhoto": None,
            "facebookPhoto": None,
        }

    def test_whoami_without_session(self, client):
        """No usable session is a 204."""
        assert client.get("/auth/whoami").status_code == 204
        assert client.get("/auth/whoami", headers={"Authorization": "Bearer x"}).status_code == 204


class TestLogout:
    def test_logout_clears_cookies(self, client):
        """POST logout expires both cookies."""
        response = client.post("/auth/logout")

        assert response.json() == {"success": True, "message": "Logged out successfully"}
        cookies = _set_cookie_headers(response)
        assert any(h.startswith("token=") and "Max-Age=0" in h for h in cookies)
        assert any(h.startswith("session=") and "Max-Age=0" in h for h in cookies)

    def test_logout_redirect(self, client):
        """GET logout redirects to the login page."""
        response = client.get("/auth/logout", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/login"


class TestProfile:
    def test_update_profile(self, client, add_account, auth_headers, store):
        """Username and email changes are applied."""
        account = add_account("erin")
        response = client.post(
            "/auth/update-profile",
            json={"username": "erin2", "email": "erin2@example.com"},
            headers=auth_headers(account),
        )
        assert response.json() == {"success": True, "message": "Profile updated successfully"}
        updated = store.get(account.id)
        assert updated.username == "erin2"
        assert updated.email == "erin2@example.com"

    def test_update_profile_duplicate(self, client, add_account, auth_headers):
        """Taking another account's username fails softly."""
        add_account("frank")
        account = add_account("erin")
        response = client.post(
            "/auth/update-profile", json={"username": "frank"}, headers=auth_headers(account)
        )
        assert response.json() == {"success": False, "message": "Username already exists"}

    def test_update_profile_requires_token(self, client):
        """Profile edits need a token."""
        response = client.post("/auth/update-profile", json={"username": "x"})
        assert response.status_code == 401

    def test_upload_profile_image(self, client, add_account, auth_headers):
        """The image path is derived from the account id."""
        account = add_account()
        response = client.post("/auth/upload-profile-image", headers=auth_headers(account))
        assert response.json() == {
            "success": True,
            "imageUrl": f"/images/profile-{account.id}.jpg",
        }


class TestQueryTokenOnApi:
    def test_query_token_accepted_on_api(self, client, add_account, make_token):
        """Protected API endpoints accept ?token= as a fallback."""
        account = add_account()
        response = client.post(
            f"/auth/upload-profile-image?token={make_token(account.id)}"
        )
        assert response.status_code == 200

    def test_header_wins_over_query(self, client, add_account, make_token):
        """The Authorization header has precedence."""
        account = add_account()
        response = client.post(
            f"/auth/upload-profile-image?token={make_token(account.id)}",
            headers={"Authorization": "Bearer garbage"},
        )
        assert response.status_code == 401


@pytest.mark.parametrize("path", ["/auth/verify", "/auth/whoami"])
def test_auth_paths_skip_gate(client, path):
    """Auth endpoints answer themselves instead of redirecting."""
    response = client.get(path, follow_redirects=False)
    assert response.status_code != 302
