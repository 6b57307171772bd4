from __future__ import annotations

from typing import Any, Sequence

from psycopg import sql


def where_clause(
    equals: Sequence[tuple[str, Any]],
    *,
    extra: Sequence[tuple[sql.Composable, Sequence[Any]]] = (),
) -> tuple[sql.Composable, list[Any]]:
    """
    Build `WHERE a = %s AND ...` from (column, value) pairs, skipping None
    values. No surviving filter means no WHERE at all (match any row).
    """
    parts: list[sql.Composable] = []
    params: list[Any] = []
    for column, value in equals:
        if value is None:
            continue
        parts.append(sql.SQL("{} = %s").format(sql.Identifier(column)))
        params.append(value)
    for fragment, fragment_params in extra:
        parts.append(fragment)
        params.extend(fragment_params)
    if not parts:
        return sql.SQL(""), params
    return sql.SQL("WHERE ") + sql.SQL(" AND ").join(parts), params


def escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
