from __future__ import annotations

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.entities import ProductFields, UserFields
from storefront.domain.exceptions import EmailAlreadyExistsError
from storefront.infrastructure.container import Container
from storefront.infrastructure.db import Database, ListFilters, init_db
from storefront.infrastructure.db.models import Product, User
from storefront.shared.errors import ConflictError


@pytest.fixture
def container(container: Container) -> Container:
    init_db(container.engine)
    return container


def _user_count(db: Database) -> int:
    return int(db.fetch_value(select(func.count()).select_from(User)))


def test_product_crud_round_trip(container: Container) -> None:
    repo = container.product_repository

    product_id = repo.create(ProductFields(title="Lamp", price=19.5, category="home"))
    row = repo.find(product_id)
    assert row is not None
    assert list(row) == ["id", "title", "description", "price", "category", "created_at"]
    assert row["title"] == "Lamp"
    assert row["price"] == pytest.approx(19.5)

    assert repo.update(product_id, ProductFields(title="Desk lamp", price=21.0, category="home"))
    assert repo.find(product_id)["title"] == "Desk lamp"

    assert repo.delete(product_id) is True
    assert repo.find(product_id) is None
    assert repo.delete(product_id) is False


def test_update_of_missing_row_reports_false(container: Container) -> None:
    assert container.product_repository.update(999, ProductFields(title="Ghost")) is False


def test_product_list_pages_and_counts(container: Container) -> None:
    repo = container.product_repository
    for i in range(1, 8):
        repo.create(ProductFields(title=f"Item {i}", price=float(i), category="a" if i % 2 else "b"))

    rows, total = repo.list(ListFilters(sort="price", direction="asc", page=2, limit=3))
    assert total == 7
    assert [row["price"] for row in rows] == [4, 5, 6]

    rows, total = repo.list(ListFilters(equals={"category": "b"}, sort="price", direction="asc"))
    assert total == 3
    assert [row["title"] for row in rows] == ["Item 2", "Item 4", "Item 6"]


def test_product_search_is_case_insensitive_substring(container: Container) -> None:
    repo = container.product_repository
    repo.create(ProductFields(title="Oak Table"))
    repo.create(ProductFields(title="Chair", description="matches the OAK table"))
    repo.create(ProductFields(title="Sofa"))

    rows, total = repo.list(ListFilters(search="oak"))
    assert total == 2
    assert {row["title"] for row in rows} == {"Oak Table", "Chair"}


def test_list_never_returns_more_than_the_clamped_limit(container: Container) -> None:
    repo = container.product_repository
    for i in range(105):
        repo.create(ProductFields(title=f"P{i}"))

    rows, total = repo.list(ListFilters(limit=1000))
    assert total == 105
    assert len(rows) == 100


def test_duplicate_email_is_a_conflict_and_persists_nothing(container: Container) -> None:
    repo = container.user_repository
    repo.create(UserFields(name="Ann", email="ann@example.com"))

    with pytest.raises(EmailAlreadyExistsError) as info:
        repo.create(UserFields(name="Ann 2", email="ann@example.com"))

    assert isinstance(info.value, ConflictError)
    assert info.value.status == 400
    assert info.value.message == "Email already exists"
    assert _user_count(container.database) == 1


def test_update_to_taken_email_is_a_conflict(container: Container) -> None:
    repo = container.user_repository
    repo.create(UserFields(name="Ann", email="ann@example.com"))
    bob = repo.create(UserFields(name="Bob", email="bob@example.com"))

    with pytest.raises(EmailAlreadyExistsError):
        repo.update(bob, UserFields(name="Bob", email="ann@example.com"))
    assert repo.find(bob)["email"] == "bob@example.com"


def test_user_search_matches_name_or_email(container: Container) -> None:
    repo = container.user_repository
    repo.create(UserFields(name="Zed", email="zed@example.com", city="Oslo"))
    repo.create(UserFields(name="Amy", email="amy@corp.io"))

    rows, total = repo.list(ListFilters(search="CORP"))
    assert total == 1
    assert rows[0]["name"] == "Amy"


def test_admin_lookup_by_email(container: Container) -> None:
    admins = container.admin_repository
    created = admins.add(email="ops@example.com", name="Ops", password_hash="hash")

    found = admins.find_by_email("ops@example.com")
    assert found == created
    assert admins.find_by_email("nobody@example.com") is None


def test_store_failures_propagate(container: Container) -> None:
    with pytest.raises(SQLAlchemyError):
        container.database.fetch_all(text("SELECT id FROM no_such_table"))


def test_explain_returns_plan_rows(container: Container) -> None:
    plan = container.database.explain(select(Product.id).where(Product.id == 1))
    assert plan
