"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from storefront.domain.repositories import PasswordHasher
from storefront.shared.logging import logger


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(self, method: str = "scrypt") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method))

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError:
            # e.g. bcrypt "$2y$" rows imported from another store
            logger.warning(
                "Stored password hash has an unsupported format; "
                "re-seed it with `storefront-create-admin --reset-password`"
            )
            return False
