"""
Comparator tokens (e.g. `>=1.2.3`, `~1.2`, `^1`, `!=1.x`) and hyphen ranges.

Missing version segments behave like wildcards, so `1.2` means `1.2.x` and `~1` means
`~1.x`. Wildcard tokens ignore any pre-release or build suffix.
"""

import re
from typing import Final

from ._types import OPERATOR_TOKENS, Operator
from ._version import IDENTIFIER_PATTERN, Version
from .constraints import Constraint, Point, empty, span, union, universal
from .exceptions import ConstraintSyntaxError

__all__ = ("parse_token", "rewrite_hyphen_ranges")

_WILDCARDS: Final = frozenset("xX*")

_SEGMENT: Final = r"(?:\d+|[xX*])"
_VERSION: Final = (
    rf"v?(?P<major>{_SEGMENT})(?:\.(?P<minor>{_SEGMENT}))?(?:\.(?P<patch>{_SEGMENT}))?"
    rf"(?:-(?P<prerelease>{IDENTIFIER_PATTERN}))?"
    rf"(?:\+(?P<build>{IDENTIFIER_PATTERN}))?"
)
_TOKEN_RE: Final = re.compile(
    rf"^\s*(?P<op>{'|'.join(map(re.escape, OPERATOR_TOKENS))})\s*{_VERSION}\s*$",
    re.ASCII,
)

_BARE_VERSION: Final = re.sub(r"\(\?P<\w+>", "(?:", _VERSION)
_HYPHEN_RE: Final = re.compile(
    rf"\s*(?P<lower>{_BARE_VERSION})(?:\s+-\s*|\s*-\s+)(?P<upper>{_BARE_VERSION})\s*",
    re.ASCII,
)


def rewrite_hyphen_ranges(expression: str, /) -> str:
    """Rewrite each `A - B` as the equivalent `>=A, <=B`."""
    return _HYPHEN_RE.sub(r">=\g<lower>, <=\g<upper>", expression)


def _is_wild(segment: str | None, /) -> bool:
    return segment is None or segment in _WILDCARDS


def _caret_upper(base: Version, /, *, wild_minor: bool, wild_patch: bool) -> Version:
    # bump the left-most non-zero component, wildcards count as non-zero
    if base.major or wild_minor:
        return base.next_major()
    if base.minor or wild_patch:
        return base.next_minor()
    return base.next_patch()


def parse_token(token: str, /) -> Constraint:
    """Expand a single comparator token into a normalized constraint."""
    m = _TOKEN_RE.match(token)
    if m is None:
        raise ConstraintSyntaxError(token)

    op = Operator.from_token(m["op"])

    if _is_wild(m["major"]):
        # `<*`, `>*` and `!=*` exclude everything
        return empty() if op in {Operator.LT, Operator.GT, Operator.NE} else universal()

    wild_minor = _is_wild(m["minor"])
    wild_patch = wild_minor or _is_wild(m["patch"])
    wild = wild_minor or wild_patch

    if wild:
        base = Version(
            int(m["major"]),
            0 if wild_minor else int(m["minor"]),
        )
        # the first version beyond the wildcard
        bump = base.next_major() if wild_minor else base.next_minor()
    else:
        pre, build = m["prerelease"], m["build"]
        base = Version(
            int(m["major"]),
            int(m["minor"]),
            int(m["patch"]),
            pre.split(".") if pre else (),
            build.split(".") if build else (),
        )
        bump = base

    match op:
        case Operator.EQ:
            return span(base, bump) if wild else Point(base)
        case Operator.NE:
            if wild:
                return union(span(None, base), span(bump))
            return union(span(None, base), span(base, include_lower=False))
        case Operator.GT:
            return span(bump) if wild else span(base, include_lower=False)
        case Operator.GE:
            return span(base)
        case Operator.LT:
            return span(None, base)
        case Operator.LE:
            return span(None, bump) if wild else span(None, base, include_upper=True)
        case Operator.TILDE:
            upper = base.next_major() if wild_minor else base.next_minor()
            return span(base, upper)
        case Operator.CARET:
            upper = _caret_upper(base, wild_minor=wild_minor, wild_patch=wild_patch)
            return span(base, upper)
