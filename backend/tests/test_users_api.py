"""Integration tests for the account endpoints."""
from fastapi.testclient import TestClient

from app.models import User
from conftest import basic_auth


class TestCreateUser:
    """Tests for POST /api/users."""

    def test_create_user_success(self, test_client: TestClient, api_prefix, user_data, count_users):
        response = test_client.post(f"{api_prefix}/users", json=user_data)

        assert response.status_code == 201
        assert response.headers["location"] == "/"
        assert response.content == b""
        assert count_users() == 1

    def test_password_is_stored_hashed(self, test_client, api_prefix, user_data, db_session):
        test_client.post(f"{api_prefix}/users", json=user_data)

        stored = db_session.query(User).filter(User.email_address == user_data["emailAddress"]).one()
        assert stored.password_hash != user_data["password"]
        assert stored.password_hash.startswith("$2")

    def test_secret_alias_is_accepted(self, test_client, api_prefix, user_data):
        payload = {**user_data}
        payload["secret"] = payload.pop("password")

        response = test_client.post(f"{api_prefix}/users", json=payload)

        assert response.status_code == 201
        lookup = test_client.get(
            f"{api_prefix}/users", headers=basic_auth(payload["emailAddress"], payload["secret"])
        )
        assert lookup.status_code == 200

    def test_empty_first_name(self, test_client, api_prefix, user_data, count_users):
        response = test_client.post(f"{api_prefix}/users", json={**user_data, "firstName": ""})

        assert response.status_code == 400
        assert "First name is required" in response.json()["message"]
        assert count_users() == 0

    def test_missing_password_is_a_validation_failure(self, test_client, api_prefix, user_data, gateway_calls):
        payload = {k: v for k, v in user_data.items() if k != "password"}

        response = test_client.post(f"{api_prefix}/users", json=payload)

        assert response.status_code == 400
        assert response.json() == {"message": ["Password is required"]}
        assert gateway_calls["create_user"] == 0

    def test_all_violations_reported_together(self, test_client, api_prefix):
        response = test_client.post(f"{api_prefix}/users", json={"emailAddress": "nope"})

        assert response.status_code == 400
        assert response.json()["message"] == [
            "First name is required",
            "Last name is required",
            "Must be a valid email address",
            "Password is required",
        ]

    def test_duplicate_email(self, test_client, api_prefix, registered_user, count_users):
        response = test_client.post(
            f"{api_prefix}/users",
            json={**registered_user, "firstName": "Someone", "password": "different"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "email address already in use"}
        assert count_users() == 1

    def test_malformed_json_body(self, test_client, api_prefix):
        response = test_client.post(
            f"{api_prefix}/users",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert isinstance(response.json()["message"], list)


class TestGetAuthenticatedUser:
    """Tests for GET /api/users."""

    def test_self_lookup(self, test_client, api_prefix, registered_user, auth_headers):
        response = test_client.get(f"{api_prefix}/users", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"id", "firstName", "lastName", "emailAddress"}
        assert data["firstName"] == registered_user["firstName"]
        assert data["lastName"] == registered_user["lastName"]
        assert data["emailAddress"] == registered_user["emailAddress"]
        assert registered_user["password"] not in response.text
        assert "$2" not in response.text

    def test_missing_header_does_no_lookup(self, test_client, api_prefix, registered_user, gateway_calls):
        response = test_client.get(f"{api_prefix}/users")

        assert response.status_code == 401
        assert response.json() == {"message": "Access Denied"}
        assert gateway_calls["find_user_by_email"] == 0

    def test_malformed_header_does_no_lookup(self, test_client, api_prefix, registered_user, gateway_calls):
        response = test_client.get(f"{api_prefix}/users", headers={"Authorization": "Basic ???"})

        assert response.status_code == 401
        assert gateway_calls["find_user_by_email"] == 0

    def test_wrong_password_and_unknown_email_are_indistinguishable(
        self, test_client, api_prefix, registered_user
    ):
        wrong_password = test_client.get(
            f"{api_prefix}/users", headers=basic_auth(registered_user["emailAddress"], "wrong")
        )
        unknown_email = test_client.get(
            f"{api_prefix}/users", headers=basic_auth("ghost@lovelace.io", registered_user["password"])
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.content == unknown_email.content

    def test_each_request_is_authenticated(self, test_client, api_prefix, auth_headers, gateway_calls):
        test_client.get(f"{api_prefix}/users", headers=auth_headers)
        test_client.get(f"{api_prefix}/users", headers=auth_headers)

        assert gateway_calls["find_user_by_email"] == 2
        assert "set-cookie" not in test_client.get(f"{api_prefix}/users", headers=auth_headers).headers


class TestUnexpectedErrors:
    def test_failure_during_authentication_returns_json_500(
        self, test_client, api_prefix, registered_user, auth_headers, monkeypatch
    ):
        from app.main import app
        from app.persistence.sqlalchemy_gateway import SqlAlchemyGateway

        def broken(self, email_address):
            raise RuntimeError("connection lost: password_hash=$2b$secret")

        monkeypatch.setattr(SqlAlchemyGateway, "find_user_by_email", broken)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get(f"{api_prefix}/users", headers=auth_headers)

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"message": "Unexpected error"}
        assert "secret" not in response.text
