from __future__ import annotations

import pytest
from flask.testing import FlaskClient
from sqlalchemy import func, select

from storefront.infrastructure.container import Container
from storefront.infrastructure.db.models import AdminSession, User
from storefront.infrastructure.db.query import MAX_PAGE

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "s3cret-pass"
COOKIE = "storefront_session"


def _count(container: Container, model: type) -> int:
    return int(container.database.fetch_value(select(func.count()).select_from(model)))


def _create_user(client: FlaskClient, **body) -> int:
    response = client.post("/admin/users", json=body)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["id"]


def test_login_hint(client: FlaskClient) -> None:
    response = client.get("/admin/login")

    assert response.status_code == 200
    assert response.get_json() == {"message": "Send POST /admin/login with email & password"}


def test_login_returns_admin_summary_and_sets_session_cookie(client: FlaskClient) -> None:
    response = client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Login successful"
    assert body["admin"]["email"] == ADMIN_EMAIL
    assert body["admin"]["name"] == "Root"
    assert "password" not in body["admin"]

    set_cookie = response.headers["Set-Cookie"]
    assert set_cookie.startswith(f"{COOKIE}=")
    assert "HttpOnly" in set_cookie
    assert "SameSite=Lax" in set_cookie
    assert len(client.get_cookie(COOKIE).value) == 64


def test_login_accepts_form_body(client: FlaskClient) -> None:
    response = client.post("/admin/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    assert client.get("/admin/users").status_code == 200


def test_failed_login_creates_no_session(client: FlaskClient, container: Container) -> None:
    response = client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": "nope"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "Invalid credentials"}
    assert client.get_cookie(COOKIE) is None
    assert _count(container, AdminSession) == 0


def test_login_without_fields_is_bad_request(client: FlaskClient) -> None:
    response = client.post("/admin/login", json={"email": ADMIN_EMAIL})

    assert response.status_code == 400
    assert response.get_json()["error"] == "Email and password are required"


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/admin/users"),
        ("post", "/admin/users"),
        ("get", "/admin/users/1"),
        ("put", "/admin/users/1"),
        ("delete", "/admin/users/1"),
    ],
)
def test_protected_routes_require_session(
    client: FlaskClient, container: Container, method: str, path: str
) -> None:
    response = getattr(client, method)(path, json={"name": "Eve", "email": "eve@example.com"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}
    assert _count(container, User) == 0


def test_bearer_token_does_not_open_admin_panel(
    client: FlaskClient, auth_headers: dict[str, str]
) -> None:
    assert client.get("/admin/users", headers=auth_headers).status_code == 401


def test_client_chosen_session_id_is_never_adopted(
    client: FlaskClient, container: Container
) -> None:
    client.set_cookie(COOKIE, "attacker-chosen-id")
    assert client.get("/admin/users").status_code == 401

    client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    sid = client.get_cookie(COOKIE).value
    assert sid != "attacker-chosen-id"
    assert container.session_store.load("attacker-chosen-id") is None
    assert container.session_store.load(sid)["admin_id"] == 1


def test_login_rotates_existing_session_id(admin_client: FlaskClient, container: Container) -> None:
    first = admin_client.get_cookie(COOKIE).value

    admin_client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    second = admin_client.get_cookie(COOKIE).value
    assert second != first
    assert container.session_store.load(first) is None
    assert _count(container, AdminSession) == 1


def test_user_crud(admin_client: FlaskClient) -> None:
    user_id = _create_user(admin_client, name="Ann", email="ann@example.com", city="Oslo")

    shown = admin_client.get(f"/admin/users/{user_id}").get_json()
    assert shown["name"] == "Ann"
    assert shown["city"] == "Oslo"
    assert shown["phone"] is None

    updated = admin_client.put(f"/admin/users/{user_id}", json={"phone": "+47 555"})
    assert updated.get_json() == {"message": "User updated"}
    shown = admin_client.get(f"/admin/users/{user_id}").get_json()
    assert shown["phone"] == "+47 555"
    assert shown["email"] == "ann@example.com"

    deleted = admin_client.delete(f"/admin/users/{user_id}")
    assert deleted.get_json() == {"message": "User deleted"}

    missing = admin_client.get(f"/admin/users/{user_id}")
    assert missing.status_code == 404
    assert missing.get_json() == {"error": "User not found"}
    assert admin_client.delete(f"/admin/users/{user_id}").status_code == 404


def test_user_list_shape_and_search(admin_client: FlaskClient) -> None:
    _create_user(admin_client, name="Carl", email="carl@example.com")
    _create_user(admin_client, name="Bea", email="bea@corp.io")
    _create_user(admin_client, name="Abe", email="abe@corp.io")

    body = admin_client.get("/admin/users?q=corp&sort=name&dir=asc&limit=1&page=2").get_json()

    assert set(body) == {"data", "page", "limit", "total"}
    assert (body["page"], body["limit"], body["total"]) == (2, 1, 2)
    assert [u["name"] for u in body["data"]] == ["Bea"]


def test_user_list_clamps_limit(admin_client: FlaskClient) -> None:
    body = admin_client.get("/admin/users?limit=1000&page=0").get_json()

    assert body["limit"] == 100
    assert body["page"] == 1


@pytest.mark.parametrize("page", [str(2**63 - 1), "99999999999999999999"])
def test_user_list_far_past_the_end_is_an_empty_page(admin_client: FlaskClient, page: str) -> None:
    _create_user(admin_client, name="Ann", email="ann@example.com")

    response = admin_client.get(f"/admin/users?page={page}&limit=100")

    assert response.status_code == 200
    body = response.get_json()
    assert body["data"] == []
    assert (body["page"], body["total"]) == (MAX_PAGE, 1)


def test_duplicate_email_is_rejected_without_insert(
    admin_client: FlaskClient, container: Container
) -> None:
    _create_user(admin_client, name="Ann", email="ann@example.com")

    response = admin_client.post("/admin/users", json={"name": "Other", "email": "ann@example.com"})

    assert response.status_code == 400
    assert response.get_json() == {"error": "Email already exists"}
    assert _count(container, User) == 1


@pytest.mark.parametrize("body", [{"name": "Ann"}, {"email": "ann@example.com"}, {}])
def test_create_without_required_fields_is_400(admin_client: FlaskClient, body) -> None:
    response = admin_client.post("/admin/users", json=body)

    assert response.status_code == 400
    assert response.get_json()["error"] == "Name and email are required"


def test_create_with_invalid_email_is_422(admin_client: FlaskClient) -> None:
    response = admin_client.post("/admin/users", json={"name": "Ann", "email": "not-an-email"})

    assert response.status_code == 422
    assert response.get_json()["context"]["fields"] == ["email"]


def test_logout_destroys_session(admin_client: FlaskClient, container: Container) -> None:
    assert _count(container, AdminSession) == 1

    response = admin_client.post("/admin/logout")

    assert response.status_code == 200
    assert admin_client.get_cookie(COOKIE) is None
    assert _count(container, AdminSession) == 0
    assert admin_client.get("/admin/users").status_code == 401


def test_logout_without_session_succeeds(client: FlaskClient) -> None:
    assert client.post("/admin/logout").status_code == 200
