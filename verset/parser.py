"""Parsing of full constraint expressions, e.g. `>=1.2.3, <2.0.0 || ^3.1.0`."""

import logging
import threading
from typing import Final

from ._tokens import parse_token, rewrite_hyphen_ranges
from .constraints import Constraint, intersection, union
from .exceptions import ConstraintSyntaxError

__all__ = ("DEFAULT_CACHE", "ConstraintCache", "parse")

_LOGGER: Final = logging.getLogger(__name__)

OR: Final = "||"
AND: Final = ","


class ConstraintCache:
    """
    Thread-safe memo of parsed expressions. Entries are added on the first successful
    parse and are never evicted.
    """

    __slots__ = "_entries", "_lock"

    def __init__(self, /) -> None:
        self._entries: dict[str, Constraint] = {}
        self._lock = threading.Lock()

    def get(self, expression: str, /) -> Constraint | None:
        with self._lock:
            return self._entries.get(expression)

    def put(self, expression: str, constraint: Constraint, /) -> Constraint:
        """Store `constraint` unless already present, and return the stored one."""
        with self._lock:
            return self._entries.setdefault(expression, constraint)

    def clear(self, /) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self, /) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, expression: object, /) -> bool:
        with self._lock:
            return expression in self._entries


DEFAULT_CACHE: Final = ConstraintCache()


def _parse_group(group: str, /, expression: str) -> Constraint:
    members: list[Constraint] = []
    for token in group.split(AND):
        try:
            members.append(parse_token(token))
        except ConstraintSyntaxError as e:
            raise ConstraintSyntaxError(e.token, expression) from None
    return intersection(*members)


def parse(
    expression: str,
    /,
    *,
    cache: ConstraintCache | None = DEFAULT_CACHE,
) -> Constraint:
    """
    Parse a constraint expression into its normalized form.

    `||` separates alternatives, and binds weaker than `,`, which separates
    requirements that must all hold. `A - B` is shorthand for `>=A, <=B`. Pass
    `cache=None` to bypass memoization.

    Raises `ConstraintSyntaxError` for the first token that is malformed.
    """
    if cache is not None and (cached := cache.get(expression)) is not None:
        _LOGGER.debug("constraint cache hit for %r", expression)
        return cached

    rewritten = rewrite_hyphen_ranges(expression)
    constraint = union(*(
        _parse_group(group, expression=expression)
        for group in rewritten.split(OR)
    ))  # fmt: skip

    if cache is None:
        return constraint

    _LOGGER.debug("caching %r as %s", expression, constraint)
    return cache.put(expression, constraint)
