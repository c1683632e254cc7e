"""Category aggregate — referenced by products through its slug."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain import validation


@dataclass
class Category:

    id: int | None
    name: str
    slug: str

    @staticmethod
    def create(name: str, slug: str) -> Category:
        return Category(
            id=None,
            name=validation.person_name(name, "name"),
            slug=validation.slug(slug),
        )

    def rename(self, name: str | None = None, slug: str | None = None) -> None:
        if name is not None:
            self.name = validation.person_name(name, "name")
        if slug is not None:
            self.slug = validation.slug(slug)
