"""Identifier derivation for exception chains.

An exception and everything it wraps is flattened into a single string so
that structurally identical failures share one cooldown slot:

    "error" + "_<TypeName>:<message>" for each link in the chain

The chain follows ``__cause__`` (``raise ... from ...``) and otherwise the
implicit ``__context__``, unless the exception suppressed it with
``from None``. This matches the chain Python prints in a traceback.

Example:
    >>> try:
    ...     try:
    ...         raise KeyError("id")
    ...     except KeyError as exc:
    ...         raise ValueError("bad row") from exc
    ... except ValueError as err:
    ...     error_identifier(err)
    "error_ValueError:bad row_KeyError:'id'"
"""

from __future__ import annotations

from collections.abc import Iterator

ERROR_IDENTIFIER_PREFIX = "error"


def next_in_chain(error: BaseException) -> BaseException | None:
    """Return the exception ``error`` wraps, or None at the end of the chain."""
    if error.__cause__ is not None:
        return error.__cause__
    if error.__suppress_context__:
        return None
    return error.__context__


def iter_error_chain(error: BaseException) -> Iterator[BaseException]:
    """Yield ``error`` and each wrapped exception, outermost first.

    Walked iteratively. A link already visited ends the walk, since
    ``__context__`` can form a cycle when an exception is re-raised
    inside its own handler.
    """
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = next_in_chain(current)


def describe_error(error: BaseException) -> str:
    """Render one chain link as ``<TypeName>:<message>``."""
    return f"{type(error).__name__}:{error}"


def error_identifier(error: BaseException) -> str:
    """Derive the cooldown identifier for an exception and its cause chain."""
    parts = [ERROR_IDENTIFIER_PREFIX]
    parts.extend(f"_{describe_error(link)}" for link in iter_error_chain(error))
    return "".join(parts)


__all__ = [
    "ERROR_IDENTIFIER_PREFIX",
    "next_in_chain",
    "iter_error_chain",
    "describe_error",
    "error_identifier",
]
