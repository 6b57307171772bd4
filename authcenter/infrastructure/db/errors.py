from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import psycopg

from authcenter.domain.errors import RepositoryError


@contextmanager
def wrap_db_errors(operation: str) -> Iterator[None]:
    """Re-raise driver failures as RepositoryError, keeping the cause."""
    try:
        yield
    except psycopg.Error as e:
        raise RepositoryError(f"{operation} failed: {e}") from e
