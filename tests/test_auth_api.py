from datetime import timedelta

import pytest

from odia_ocr.security import create_access_token, decode_access_token, hash_password, verify_password
from odia_ocr.status import TaskStatus

from .conftest import bearer


class TestPasswords:
	def test_hash_round_trip(self) -> None:
		hashed = hash_password("secret1")
		assert hashed != "secret1"
		assert verify_password("secret1", hashed)
		assert not verify_password("secret2", hashed)

	def test_long_passwords_are_truncated_consistently(self) -> None:
		long = "x" * 100
		assert verify_password(long, hash_password(long))


class TestSignup:
	def test_new_user_is_first_time(self, register) -> None:
		body = register("reader@example.com")
		assert body["message"] == "User created successfully."
		assert body["token"]
		assert body["user"]["email"] == "reader@example.com"
		assert body["user"]["display_name"] is None
		assert body["user"]["is_first_time"] is True
		assert decode_access_token(body["token"]).id == body["user"]["id"]

	def test_email_is_normalised(self, client, register) -> None:
		body = register("  Reader@Example.COM ")
		assert body["user"]["email"] == "reader@example.com"
		response = client.post("/api/auth/signup", json={"email": "READER@example.com", "password": "secret1"})
		assert response.status_code == 409
		assert response.json()["error_code"] == "EMAIL_EXISTS"

	@pytest.mark.parametrize(
		"payload",
		[
			{"email": "not-an-email", "password": "secret1"},
			{"email": "a@example.com", "password": "12345"},
		],
	)
	def test_bad_input_is_rejected(self, client, payload) -> None:
		response = client.post("/api/auth/signup", json=payload)
		assert response.status_code == 400
		body = response.json()
		assert body["error_code"] == "VALIDATION_ERROR"
		assert body["path"] == "/api/auth/signup"

	def test_missing_field_is_unprocessable(self, client) -> None:
		response = client.post("/api/auth/signup", json={"email": "a@example.com"})
		assert response.status_code == 422
		assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestLogin:
	def test_wrong_password(self, client, register) -> None:
		register("reader@example.com")
		response = client.post("/api/auth/login", json={"email": "reader@example.com", "password": "wrong-one"})
		assert response.status_code == 401
		assert response.json()["error_code"] == "AUTH_INVALID_CREDENTIALS"

	def test_unknown_email_looks_like_wrong_password(self, client) -> None:
		response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret1"})
		assert response.status_code == 401
		assert response.json()["error_code"] == "AUTH_INVALID_CREDENTIALS"

	def test_first_time_until_display_name_set(self, client, register) -> None:
		token = register("reader@example.com")["token"]
		first = client.post("/api/auth/login", json={"email": "reader@example.com", "password": "secret1"})
		assert first.status_code == 200
		assert first.json()["user"]["is_first_time"] is True

		client.put("/api/auth/display-name", json={"display_name": "Jo Ann"}, headers=bearer(token))
		again = client.post("/api/auth/login", json={"email": "reader@example.com", "password": "secret1"})
		assert again.json()["user"]["is_first_time"] is False
		assert again.json()["user"]["display_name"] == "Jo Ann"

	def test_oauth2_token_form(self, client, register) -> None:
		register("reader@example.com")
		response = client.post("/api/auth/token", data={"username": "reader@example.com", "password": "secret1"})
		assert response.status_code == 200
		assert response.json()["token_type"] == "bearer"
		assert response.json()["access_token"]


class TestDisplayName:
	@pytest.mark.parametrize("name,status", [("Jo", 200), ("Jo Ann", 200), ("J", 400), ("Jo3", 400), ("x" * 51, 400)])
	def test_rules(self, client, register, name, status) -> None:
		token = register("reader@example.com")["token"]
		response = client.put("/api/auth/display-name", json={"display_name": name}, headers=bearer(token))
		assert response.status_code == status
		if status == 200:
			assert response.json()["user"]["display_name"] == name

	def test_token_for_deleted_user(self, client) -> None:
		response = client.put(
			"/api/auth/display-name",
			json={"display_name": "Jo"},
			headers=bearer(create_access_token("f" * 32)),
		)
		assert response.status_code == 404
		assert response.json()["error_code"] == "USER_NOT_FOUND"


class TestTokens:
	def test_missing_token(self, client) -> None:
		response = client.get("/api/auth/profile")
		assert response.status_code == 401
		assert response.json()["error_code"] == "AUTH_MISSING_TOKEN"
		assert response.headers["www-authenticate"] == "Bearer"

	def test_expired_token(self, client, register) -> None:
		user_id = register("reader@example.com")["user"]["id"]
		expired = create_access_token(user_id, timedelta(seconds=-10))
		response = client.get("/api/auth/profile", headers=bearer(expired))
		assert response.status_code == 401
		assert response.json()["error_code"] == "AUTH_TOKEN_EXPIRED"

	def test_garbage_token(self, client) -> None:
		response = client.get("/api/auth/profile", headers=bearer("not.a.jwt"))
		assert response.status_code == 401
		assert response.json()["error_code"] == "AUTH_INVALID_TOKEN"


class TestProfileAndStats:
	def test_profile_lists_recent_tasks(self, client, register, make_task) -> None:
		body = register("reader@example.com")
		for _ in range(7):
			make_task(body["user"]["id"], TaskStatus.IN_PROGRESS)
		response = client.get("/api/auth/profile", headers=bearer(body["token"]))
		assert response.status_code == 200
		data = response.json()
		assert data["user"]["email"] == "reader@example.com"
		assert "created_at" in data["user"]
		assert len(data["recent_tasks"]) == 5

	def test_home_stats(self, client, register, make_task) -> None:
		body = register("reader@example.com")
		user_id = body["user"]["id"]
		make_task(user_id, TaskStatus.IN_PROGRESS)
		for _ in range(3):
			make_task(user_id, TaskStatus.SUBMITTED)
		for _ in range(2):
			make_task(user_id, TaskStatus.APPROVED)
		response = client.get("/api/auth/stats", headers=bearer(body["token"]))
		assert response.json() == {
			"total_assigned": 6,
			"total_submitted": 3,
			"total_approved": 2,
			"accuracy_rate": 67,
		}
