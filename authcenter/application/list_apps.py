from typing import Optional

from authcenter.domain.entities import App, AppQuery
from authcenter.domain.ports.unit_of_work import UnitOfWorkPort


async def list_apps(
    uow: UnitOfWorkPort,
    *,
    keywords: Optional[str] = None,
    page: int = 1,
    size: int = 20,
) -> tuple[list[App], int]:
    """A page (1-based) of apps whose name contains any keyword, and the total match count."""
    if page < 1 or size < 1:
        raise ValueError("page and size must be positive")
    words = tuple(keywords.split()) if keywords else ()
    query = AppQuery(name_like_any=words or None)

    async with uow as transaction:
        apps = await transaction.apps.list(query, page, size)
        total = await transaction.apps.count(query)
    return apps, total
