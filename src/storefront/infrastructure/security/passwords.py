"""bcrypt-backed PasswordHasher."""

from __future__ import annotations

import bcrypt

from storefront.application.ports import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        if not password_hash.startswith("$2"):
            return False
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
