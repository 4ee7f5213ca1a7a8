from typing import LiteralString

import mainpy

from ._version import Version, parse_version
from .constraints import (
    Constraint,
    Empty,
    Mismatch,
    Point,
    Range,
    UnionSet,
    Universal,
    empty,
    intersection,
    is_empty,
    is_universal,
    matches,
    matches_any,
    span,
    union,
    universal,
)
from .exceptions import ConstraintSyntaxError, InvalidVersion
from .main import app
from .parser import ConstraintCache, parse

__all__ = (
    "Constraint",
    "ConstraintCache",
    "ConstraintSyntaxError",
    "Empty",
    "InvalidVersion",
    "Mismatch",
    "Point",
    "Range",
    "UnionSet",
    "Universal",
    "Version",
    "__version__",
    "empty",
    "intersection",
    "is_empty",
    "is_universal",
    "matches",
    "matches_any",
    "parse",
    "parse_version",
    "span",
    "union",
    "universal",
)
__version__: LiteralString

_ = mainpy.main(app)


def __getattr__(name: str, /) -> object:
    if name == "__version__":
        from ._meta import get_version  # noqa: PLC0415

        return get_version()

    import sys  # noqa: PLC0415

    raise AttributeError(
        f"module {__name__!r} has no attribute {name!r}",
        name=name,
        obj=sys.modules[__name__],
    )


def __dir__() -> list[str]:
    return list(__all__)
