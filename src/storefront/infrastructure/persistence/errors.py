"""Translation of driver errors into domain exceptions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from storefront.domain.exceptions import DuplicateEntityError, StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(action: str, duplicate: str | None = None) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as StorageError.

    When *duplicate* is given, integrity violations become
    DuplicateEntityError with that message instead.
    """
    try:
        yield
    except IntegrityError as exc:
        if duplicate is not None:
            raise DuplicateEntityError(duplicate) from exc
        logger.error("Integrity violation while trying to %s: %s", action, exc.orig)
        raise StorageError(f"Could not {action}") from exc
    except SQLAlchemyError as exc:
        logger.error("Storage failure while trying to %s: %s", action, exc)
        raise StorageError(f"Could not {action}") from exc
