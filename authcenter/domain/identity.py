from __future__ import annotations

from typing import Any, Callable, Literal, TypeVar

# One concrete identity type per deployment; entities and queries are generic over it.
ID = TypeVar("ID", int, str)

IdentityType = Literal["int", "str"]


def _parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid identity")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    raise ValueError(f"expected an integer identity, got {value!r}")


def _parse_str(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"expected a string identity, got {value!r}")
    text = str(value).strip()
    if not text:
        raise ValueError("identity cannot be empty")
    return text


def identity_parser(kind: IdentityType) -> Callable[[Any], int | str]:
    """
    Return the parser turning raw ids (JSON numbers, strings, DB values)
    into the deployment's identity type. Raises ValueError on bad input.
    """
    if kind == "int":
        return _parse_int
    if kind == "str":
        return _parse_str
    raise ValueError(f"unknown identity type: {kind!r}")
