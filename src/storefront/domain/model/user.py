"""User aggregate — the people who can log in."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


@dataclass
class User:
    """A registered account.

    Only the password *hash* is ever held here; hashing and verification
    are infrastructure concerns behind the ``PasswordHasher`` port.
    """

    id: int | None
    name: str
    email: str
    password_hash: str
    role: Role = Role.CUSTOMER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
