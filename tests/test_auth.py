"""HTTP tests for registration, login and account management."""
from wellcheck import db
from wellcheck.models import CheckinEntry, User

REGISTER_URL = "/api/v1/auth/register"
LOGIN_URL = "/api/v1/auth/login"


def login(client, email, password):
    return client.post(LOGIN_URL, json={"email": email, "password": password})


def test_register_returns_token_and_normalised_email(client):
    response = client.post(
        REGISTER_URL,
        json={"email": "  Alice@Example.COM ", "password": "secret123", "name": "Alice"},
    )
    assert response.status_code == 201
    body = response.get_json()
    assert body["success"] is True
    assert body["data"]["email"] == "alice@example.com"
    assert body["data"]["name"] == "Alice"
    assert body["data"]["token"]
    assert isinstance(body["data"]["userId"], int)


def test_register_duplicate_email_is_rejected_case_insensitively(client, user):
    response = client.post(
        REGISTER_URL,
        json={"email": "ALICE@example.com", "password": "another1", "name": "Other"},
    )
    assert response.status_code == 400
    assert response.get_json()["message"] == "Email already in use"


def test_register_rejects_placeholder_name(client):
    response = client.post(
        REGISTER_URL, json={"email": "bob@example.com", "password": "secret123", "name": "String"}
    )
    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_register_validates_fields(client):
    response = client.post(REGISTER_URL, json={"email": "nope", "password": "123", "name": "A"})
    assert response.status_code == 400
    errors = response.get_json()["errors"]
    assert any(error.startswith("email:") for error in errors)
    assert any(error.startswith("password:") for error in errors)
    assert any(error.startswith("name:") for error in errors)


def test_register_without_body(client):
    response = client.post(REGISTER_URL)
    assert response.status_code == 400


def test_login_success(client, user):
    response = login(client, "alice@example.com", "secret123")
    assert response.status_code == 200
    assert response.get_json()["data"]["userId"] == user["userId"]


def test_login_failures_share_one_message(client, user):
    wrong_password = login(client, "alice@example.com", "wrong-password")
    unknown_email = login(client, "ghost@example.com", "secret123")
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.get_json()["message"] == "Invalid email or password"
    assert unknown_email.get_json()["message"] == "Invalid email or password"


def test_protected_route_requires_token(client):
    response = client.put("/api/v1/auth/profile", json={"name": "Alice", "email": "a@example.com"})
    assert response.status_code == 401
    assert response.get_json()["success"] is False


def test_garbage_token_is_rejected(client):
    response = client.get("/api/v1/checkins", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401
    assert response.get_json()["success"] is False


def test_update_profile(client, auth_headers):
    response = client.put(
        "/api/v1/auth/profile",
        json={"name": "Alice Cooper", "email": "Cooper@Example.com"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["name"] == "Alice Cooper"
    assert data["email"] == "cooper@example.com"
    assert "password_hash" not in data
    assert login(client, "cooper@example.com", "secret123").status_code == 200


def test_update_profile_to_taken_email(client, register, auth_headers):
    register(email="bob@example.com", name="Bob")
    response = client.put(
        "/api/v1/auth/profile",
        json={"name": "Alice", "email": "bob@example.com"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.get_json()["message"] == "Email already in use"


class TestPasswordChange:
    url = "/api/v1/auth/password"

    def test_same_password_is_a_conflict(self, client, auth_headers):
        response = client.put(
            self.url,
            json={"currentPassword": "secret123", "newPassword": "secret123"},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert (
            response.get_json()["message"]
            == "New password must be different from current password"
        )

    def test_wrong_current_password(self, client, auth_headers):
        response = client.put(
            self.url,
            json={"currentPassword": "wrong-one", "newPassword": "brand-new"},
            headers=auth_headers,
        )
        assert response.status_code == 401

    def test_old_password_stops_working(self, client, auth_headers):
        response = client.put(
            self.url,
            json={"currentPassword": "secret123", "newPassword": "brand-new"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert login(client, "alice@example.com", "secret123").status_code == 401
        assert login(client, "alice@example.com", "brand-new").status_code == 200


class TestDeleteAccount:
    url = "/api/v1/auth/account"

    def test_wrong_password_keeps_account(self, client, auth_headers):
        response = client.delete(self.url, json={"password": "wrong-one"}, headers=auth_headers)
        assert response.status_code == 401
        assert login(client, "alice@example.com", "secret123").status_code == 200

    def test_removes_only_the_callers_checkins(
        self, app, client, user, register, make_checkin, auth_headers
    ):
        bob = register(email="bob@example.com", name="Bob")
        make_checkin(user["userId"])
        make_checkin(user["userId"])
        make_checkin(bob["userId"])
        make_checkin(bob["userId"])

        response = client.delete(self.url, json={"password": "secret123"}, headers=auth_headers)
        assert response.status_code == 200

        with app.app_context():
            assert db.session.get(User, user["userId"]) is None
            assert CheckinEntry.query.filter_by(user_id=user["userId"]).count() == 0
            assert CheckinEntry.query.filter_by(user_id=bob["userId"]).count() == 2
        assert login(client, "alice@example.com", "secret123").status_code == 401
