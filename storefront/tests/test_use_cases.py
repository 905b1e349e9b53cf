from __future__ import annotations

import pytest

from storefront.application.services.password_hashing import WerkzeugPasswordHasher
from storefront.application.services.product_service import ProductService
from storefront.application.use_cases.authenticate_admin import AuthenticateAdminUseCase
from storefront.application.use_cases.bootstrap_admin import BootstrapAdminUseCase
from storefront.domain.entities import Admin, ProductFields
from storefront.domain.exceptions import InvalidCredentialsError, ProductNotFoundError
from storefront.domain.repositories import AdminRepository, PasswordHasher, ProductRepository
from storefront.shared.errors import ValidationError


class InMemoryAdminRepository(AdminRepository):
    def __init__(self) -> None:
        self._admins: dict[str, Admin] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> Admin | None:
        return self._admins.get(email)

    def add(self, *, email: str, name: str, password_hash: str) -> Admin:
        admin = Admin(id=self._seq, email=email, name=name, password_hash=password_hash)
        self._seq += 1
        self._admins[email] = admin
        return admin

    def set_password(self, admin_id: int, password_hash: str) -> bool:
        for email, admin in self._admins.items():
            if admin.id == admin_id:
                self._admins[email] = Admin(
                    id=admin.id, email=email, name=admin.name, password_hash=password_hash
                )
                return True
        return False


class InMemoryProductRepository(ProductRepository):
    def __init__(self) -> None:
        self.rows: dict[int, dict] = {}
        self._seq = 1

    def list(self, filters):
        rows = list(self.rows.values())
        return rows, len(rows)

    def find(self, product_id: int):
        return self.rows.get(product_id)

    def create(self, fields: ProductFields) -> int:
        product_id = self._seq
        self._seq += 1
        self.rows[product_id] = {"id": product_id, **fields.as_values()}
        return product_id

    def update(self, product_id: int, fields: ProductFields) -> bool:
        if product_id not in self.rows:
            return False
        self.rows[product_id].update(fields.as_values())
        return True

    def delete(self, product_id: int) -> bool:
        return self.rows.pop(product_id, None) is not None


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture
def admins() -> InMemoryAdminRepository:
    repo = InMemoryAdminRepository()
    repo.add(email="root@example.com", name="Root", password_hash="hashed:pw")
    return repo


def test_authenticate_returns_admin(admins: InMemoryAdminRepository) -> None:
    use_case = AuthenticateAdminUseCase(admins=admins, password_hasher=DeterministicHasher())

    admin = use_case.execute(" root@example.com ", "pw")

    assert admin.id == 1


@pytest.mark.parametrize(
    ("email", "password"), [("root@example.com", "bad"), ("ghost@example.com", "pw")]
)
def test_authenticate_failures_are_indistinguishable(
    admins: InMemoryAdminRepository, email: str, password: str
) -> None:
    use_case = AuthenticateAdminUseCase(admins=admins, password_hasher=DeterministicHasher())

    with pytest.raises(InvalidCredentialsError) as info:
        use_case.execute(email, password)
    assert info.value.message == "Invalid credentials"
    assert info.value.status == 401


def test_bootstrap_creates_once(admins: InMemoryAdminRepository) -> None:
    use_case = BootstrapAdminUseCase(admins=admins, password_hasher=DeterministicHasher())

    admin, created = use_case.execute("ops@example.com", "pw", "Ops")
    again, created_again = use_case.execute("ops@example.com", "other", "Ops")

    assert created is True
    assert created_again is False
    assert again == admin
    assert admin.password_hash == "hashed:pw"


def test_werkzeug_hasher_salts_and_verifies() -> None:
    hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")

    first = hasher.hash("secret")
    second = hasher.hash("secret")

    assert first != second
    assert "secret" not in first
    assert hasher.verify("secret", first)
    assert not hasher.verify("Secret", first)
    assert not hasher.verify("secret", "")


def test_werkzeug_hasher_rejects_foreign_hash_formats() -> None:
    hasher = WerkzeugPasswordHasher()
    bcrypt_hash = "$2y$10$abcdefghijklmnopqrstuuJ3cM2a1qXG7wBj8l3bJw8mN3D0e7x5a"

    assert hasher.verify("secret", bcrypt_hash) is False


def test_bootstrap_reset_password_rehashes_existing_admin(
    admins: InMemoryAdminRepository,
) -> None:
    use_case = BootstrapAdminUseCase(admins=admins, password_hasher=DeterministicHasher())
    legacy = admins.add(email="ops@example.com", name="Ops", password_hash="$2y$10$legacy")

    admin, created = use_case.execute("ops@example.com", "fresh", reset_password=True)

    assert created is False
    assert admin.id == legacy.id
    assert admin.password_hash == "hashed:fresh"
    assert admins.find_by_email("ops@example.com") == admin


def test_product_update_merges_over_stored_row() -> None:
    repo = InMemoryProductRepository()
    service = ProductService(products=repo)
    product_id = service.create({"title": "Lamp", "description": "Warm", "price": None})

    assert repo.rows[product_id]["price"] == 0.0
    assert service.update(product_id, {"price": 12.5}) is True
    assert repo.rows[product_id] == {
        "id": product_id,
        "title": "Lamp",
        "description": "Warm",
        "price": 12.5,
        "category": None,
    }


def test_product_update_rejects_negative_price() -> None:
    service = ProductService(products=InMemoryProductRepository())
    product_id = service.create({"title": "Lamp"})

    with pytest.raises(ValidationError) as info:
        service.update(product_id, {"price": -3})
    assert info.value.status == 422
    assert info.value.context == {"fields": ["price"]}


def test_product_price_must_fit_the_column() -> None:
    products = InMemoryProductRepository()
    service = ProductService(products=products)

    with pytest.raises(ValidationError) as info:
        service.create({"title": "Island", "price": 1e30})
    assert info.value.message == "price must be less than 100000000"
    assert info.value.context == {"fields": ["price"]}
    assert products.rows == {}


def test_product_missing_row_is_not_found() -> None:
    service = ProductService(products=InMemoryProductRepository())

    with pytest.raises(ProductNotFoundError):
        service.update(9, {"title": "x"})
    with pytest.raises(ProductNotFoundError):
        service.delete(9)
