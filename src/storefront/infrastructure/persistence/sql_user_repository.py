"""SQL-backed implementation of UserRepository."""

from __future__ import annotations

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection, RowMapping

from storefront.domain.model.user import Role, User
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.persistence.errors import storage_errors
from storefront.infrastructure.persistence.tables import users


class SqlUserRepository(UserRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def get_by_id(self, user_id: int) -> User | None:
        return self._first(select(users).where(users.c.id == user_id))

    def get_by_email(self, email: str) -> User | None:
        return self._first(
            select(users).where(func.lower(users.c.email) == email.strip().lower())
        )

    def add(self, user: User) -> None:
        with storage_errors("add user", duplicate=f"User '{user.email}' already exists"):
            result = self._conn.execute(
                insert(users).values(
                    name=user.name,
                    email=user.email,
                    password_hash=user.password_hash,
                    role=user.role.value,
                )
            )
        user.id = result.inserted_primary_key[0]

    def _first(self, query) -> User | None:
        with storage_errors("load user"):
            row = self._conn.execute(query).mappings().first()
        return self._to_domain(row) if row else None

    @staticmethod
    def _to_domain(row: RowMapping) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            role=Role(row["role"]),
        )
