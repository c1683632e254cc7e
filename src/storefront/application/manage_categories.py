"""Application services: Category use cases.

Slugs are unique; products point at categories by slug without a foreign
key, so deleting a category leaves its products untouched.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CategoryDTO
from storefront.domain import validation
from storefront.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from storefront.domain.model.category import Category
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, slug: str) -> CategoryDTO:
        category = Category.create(name=name, slug=slug)
        with self._uow:
            if self._uow.categories.get_by_slug(category.slug) is not None:
                raise DuplicateEntityError(f"Category slug '{category.slug}' already exists")
            self._uow.categories.add(category)
            self._uow.commit()
        logger.info("Category %s '%s' added", category.id, category.slug)
        return CategoryDTO.from_domain(category)


class UpdateCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        category_id: int,
        name: str | None = None,
        slug: str | None = None,
    ) -> CategoryDTO:
        with self._uow:
            category = self._uow.categories.get_by_id(category_id)
            if category is None:
                raise EntityNotFoundError(f"Category #{category_id} not found")
            if slug is not None:
                wanted = validation.slug(slug)
                clash = self._uow.categories.get_by_slug(wanted)
                if clash is not None and clash.id != category.id:
                    raise DuplicateEntityError(f"Category slug '{wanted}' already exists")
            category.rename(name=name, slug=slug)
            self._uow.categories.save(category)
            self._uow.commit()
        return CategoryDTO.from_domain(category)


class DeleteCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, category_id: int) -> None:
        with self._uow:
            if not self._uow.categories.delete(category_id):
                raise EntityNotFoundError(f"Category #{category_id} not found")
            self._uow.commit()
        logger.info("Category %s deleted", category_id)


class ListCategoriesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[CategoryDTO]:
        with self._uow:
            categories = self._uow.categories.list_all()
        return [CategoryDTO.from_domain(c) for c in categories]


class ShowCategoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, slug: str) -> CategoryDTO:
        with self._uow:
            category = self._uow.categories.get_by_slug(slug.strip().lower())
        if category is None:
            raise EntityNotFoundError(f"Category '{slug}' not found")
        return CategoryDTO.from_domain(category)
