"""
The closed constraint algebra: `Universal`, `Empty`, `Point`, `Range` and `UnionSet`.

Every non-trivial member is treated as the half-open interval `floor <= v < ceiling`,
where `floor` is the least admissible version and `ceiling` the least version above it
that is no longer admitted. Since every version has an immediate successor, two members
can be merged into one interval iff `floor(b) <= ceiling(a)` (and vice versa), which
covers both overlapping and adjacent members.
"""

from __future__ import annotations

import dataclasses
import functools
import itertools
from typing import TYPE_CHECKING, Final, cast, final, override

from ._types import MismatchReason
from ._version import Version, parse_version

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


__all__ = (
    "Constraint",
    "Empty",
    "Mismatch",
    "Point",
    "Range",
    "UnionSet",
    "Universal",
    "empty",
    "intersection",
    "is_empty",
    "is_universal",
    "matches",
    "matches_any",
    "span",
    "union",
    "universal",
)

type Constraint = Universal | Empty | Point | Range | UnionSet
type _Member = Point | Range
type _Bound = tuple[Version | None, bool]


def _binop[FT: Callable[[_Constraint, Constraint], Constraint]](f: FT, /) -> FT:
    @functools.wraps(f)
    def _wrapper(self: _Constraint, x: Constraint, /) -> Constraint:
        return f(self, x) if isinstance(x, _Constraint) else NotImplemented  # pyright: ignore[reportUnnecessaryIsInstance]

    return _wrapper  # type: ignore[return-value]  # pyright: ignore[reportReturnType]


class _Constraint:
    """Operations shared by all variants; not part of the public type hierarchy."""

    __slots__ = ()

    def matches(self, version: Version | str, /) -> Mismatch | None:
        """`None` if `version` satisfies this constraint, else the reason it doesn't."""
        return matches(cast("Constraint", self), version)

    def __contains__(self, version: Version | str, /) -> bool:
        return self.matches(version) is None

    def intersect(self, other: Constraint, /) -> Constraint:
        return intersection(cast("Constraint", self), other)

    def union(self, other: Constraint, /) -> Constraint:
        return union(cast("Constraint", self), other)

    def matches_any(self, other: Constraint, /) -> bool:
        """Whether some version satisfies both this and the `other` constraint."""
        return matches_any(cast("Constraint", self), other)

    @_binop
    def __and__(self, other: Constraint, /) -> Constraint:
        return self.intersect(other)

    @_binop
    def __or__(self, other: Constraint, /) -> Constraint:
        return self.union(other)


@final
class Universal(_Constraint):
    """Matches every version."""

    __slots__ = ()

    @override
    def __repr__(self, /) -> str:
        return f"{type(self).__name__}()"

    @override
    def __str__(self, /) -> str:
        return "*"

    @override
    def __hash__(self, /) -> int:
        return hash(type(self))

    @override
    def __eq__(self, other: object, /) -> bool:
        return isinstance(other, Universal)


@final
class Empty(_Constraint):
    """Matches no version."""

    __slots__ = ()

    @override
    def __repr__(self, /) -> str:
        return f"{type(self).__name__}()"

    @override
    def __str__(self, /) -> str:
        # nothing precedes the least version
        return f"<{Version.MIN}"

    def __bool__(self, /) -> bool:
        return False

    @override
    def __hash__(self, /) -> int:
        return hash(type(self))

    @override
    def __eq__(self, other: object, /) -> bool:
        return isinstance(other, Empty)


_UNIVERSAL: Final = Universal()
_EMPTY: Final = Empty()


def universal() -> Universal:
    return _UNIVERSAL


def empty() -> Empty:
    return _EMPTY


@final
class Point(_Constraint):
    """Matches exactly one version."""

    __slots__ = "_ceiling", "version"
    __match_args__ = ("version",)

    version: Final[Version]
    _ceiling: Final[Version]

    def __init__(self, version: Version | str, /) -> None:
        self.version = parse_version(version)
        self._ceiling = self.version.successor()

    @property
    def floor(self, /) -> Version:
        return self.version

    @property
    def ceiling(self, /) -> Version:
        return self._ceiling

    @property
    def lower_bound(self, /) -> _Bound:
        return self.version, True

    @property
    def upper_bound(self, /) -> _Bound:
        return self.version, True

    @override
    def __repr__(self, /) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    @override
    def __str__(self, /) -> str:
        return str(self.version)

    @override
    def __hash__(self, /) -> int:
        return hash((type(self), self.version))

    @override
    def __eq__(self, other: object, /) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self is other or self.version == other.version


def _floor_of(version: Version | None, inclusive: bool, /) -> Version | None:
    if version is None:
        return None
    return version if inclusive else version.successor()


def _ceiling_of(version: Version | None, inclusive: bool, /) -> Version | None:
    if version is None:
        return None
    return version.successor() if inclusive else version


@final
class Range(_Constraint):
    """
    Matches the versions between a lower and an upper bound, either of which may be
    absent. Use `span` to build one from arbitrary bounds: the constructor rejects
    bounds that admit at most one version, and a lower bound at `Version.MIN` counts
    as absent.
    """

    __slots__ = "_ceiling", "_floor", "include_lower", "include_upper", "lower", "upper"

    lower: Final[Version | None]
    upper: Final[Version | None]
    include_lower: Final[bool]
    include_upper: Final[bool]
    _floor: Final[Version | None]
    _ceiling: Final[Version | None]

    def __init__(
        self,
        /,
        lower: Version | None,
        upper: Version | None,
        *,
        include_lower: bool = True,
        include_upper: bool = False,
    ) -> None:
        floor = _floor_of(lower, include_lower)
        ceiling = _ceiling_of(upper, include_upper)

        if floor is not None and floor <= Version.MIN:
            lower = floor = None

        if floor is None and ceiling is None:
            raise ValueError("a range needs at least one bound")
        if ceiling is not None and (floor or Version.MIN).successor() >= ceiling:
            least = floor or Version.MIN
            raise ValueError(f"bounds {least} and {ceiling} admit at most one version")

        self.lower = lower
        self.upper = upper
        self.include_lower = include_lower and lower is not None
        self.include_upper = include_upper and upper is not None
        self._floor = floor
        self._ceiling = ceiling

    @property
    def floor(self, /) -> Version | None:
        """The least admitted version, or `None` if unbounded below."""
        return self._floor

    @property
    def ceiling(self, /) -> Version | None:
        """The least version above the range, or `None` if unbounded above."""
        return self._ceiling

    @property
    def lower_bound(self, /) -> _Bound:
        return self.lower, self.include_lower

    @property
    def upper_bound(self, /) -> _Bound:
        return self.upper, self.include_upper

    @override
    def __repr__(self, /) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    @override
    def __str__(self, /) -> str:
        parts: list[str] = []
        if self.lower is not None:
            parts.append(f"{'>=' if self.include_lower else '>'}{self.lower}")
        if self.upper is not None:
            parts.append(f"{'<=' if self.include_upper else '<'}{self.upper}")
        return ", ".join(parts)

    @override
    def __hash__(self, /) -> int:
        return hash((type(self), self._floor, self._ceiling))

    @override
    def __eq__(self, other: object, /) -> bool:
        """Set equality, e.g. `>1.2.3` equals `>=1.2.4-0`."""
        if not isinstance(other, Range):
            return NotImplemented
        return self is other or (self._floor, self._ceiling) == (other._floor, other._ceiling)


@final
class UnionSet(_Constraint):
    """
    Ascending, pairwise disjoint and non-adjacent `Point` and `Range` members. Only
    `union` constructs these.
    """

    __slots__ = ("members",)
    __match_args__ = ("members",)

    members: Final[tuple[_Member, ...]]

    def __init__(self, members: Iterable[_Member], /) -> None:
        self.members = tuple(members)
        if len(self.members) < 2:
            raise ValueError("a union needs at least two members")

        for m in self.members:
            if not isinstance(m, Point | Range):
                raise TypeError(f"union members must be points or ranges, not {m!r}")
        for lo, hi in itertools.pairwise(self.members):
            if lo.ceiling is None or hi.floor is None or lo.ceiling >= hi.floor:
                raise ValueError(f"{lo} and {hi} must be ascending with a gap in between")

    @override
    def __repr__(self, /) -> str:
        return f"{type(self).__name__}({list(self.members)!r})"

    @override
    def __str__(self, /) -> str:
        return " || ".join(map(str, self.members))

    @override
    def __hash__(self, /) -> int:
        return hash((type(self), self.members))

    @override
    def __eq__(self, other: object, /) -> bool:
        if not isinstance(other, UnionSet):
            return NotImplemented
        return self is other or self.members == other.members


def span(
    lower: Version | str | None = None,
    upper: Version | str | None = None,
    /,
    *,
    include_lower: bool = True,
    include_upper: bool = False,
) -> Constraint:
    """
    The constraint admitting the versions between `lower` and `upper`, reduced to its
    canonical variant: `Empty` if nothing fits, `Point` if one version does, and
    `Universal` if both sides are unbounded.
    """
    lo = None if lower is None else parse_version(lower)
    hi = None if upper is None else parse_version(upper)

    floor = _floor_of(lo, include_lower)
    ceiling = _ceiling_of(hi, include_upper)

    if floor is not None and floor <= Version.MIN:
        lo = floor = None

    if ceiling is None:
        if floor is None:
            return _UNIVERSAL
    elif ceiling <= Version.MIN or (floor is not None and floor >= ceiling):
        return _EMPTY
    elif (least := floor or Version.MIN).successor() == ceiling:
        return Point(least)

    return Range(lo, hi, include_lower=include_lower, include_upper=include_upper)


def _span_between(lower: _Bound, upper: _Bound, /) -> Constraint:
    (lo, include_lower), (hi, include_upper) = lower, upper
    return span(lo, hi, include_lower=include_lower, include_upper=include_upper)


def _floor_key(member: _Member, /) -> tuple[int] | tuple[int, Version]:
    # unbounded below sorts first
    return (0,) if (floor := member.floor) is None else (1, floor)


def _ceiling_key(member: _Member, /) -> tuple[int] | tuple[int, Version]:
    # unbounded above sorts last
    return (1,) if (ceiling := member.ceiling) is None else (0, ceiling)


def _touches(a: _Member, b: _Member, /) -> bool:
    """Whether `a` starts at or before the first version after `b`."""
    floor, ceiling = a.floor, b.ceiling
    return floor is None or ceiling is None or floor <= ceiling


def _intersect_members(a: _Member, b: _Member, /) -> Constraint:
    lower = max(a, b, key=_floor_key)
    upper = min(a, b, key=_ceiling_key)
    return _span_between(lower.lower_bound, upper.upper_bound)


def _merge_members(a: _Member, b: _Member, /) -> Constraint | None:
    """The union of two overlapping or adjacent members, or `None` if there's a gap."""
    if not (_touches(a, b) and _touches(b, a)):
        return None

    lower = min(a, b, key=_floor_key)
    upper = max(a, b, key=_ceiling_key)
    return _span_between(lower.lower_bound, upper.upper_bound)


def _intersect_pair(a: Constraint, b: Constraint, /) -> Constraint:
    match a, b:
        case (Empty(), _) | (_, Empty()):
            return _EMPTY
        case Universal(), _:
            return b
        case _, Universal():
            return a
        case UnionSet(members), _:
            return union(*(_intersect_pair(m, b) for m in members))
        case _, UnionSet(members):
            return union(*(_intersect_pair(a, m) for m in members))
        case (Point() | Range(), Point() | Range()):
            return _intersect_members(a, b)
        case _:
            raise TypeError(f"not a constraint: {a!r}, {b!r}")


def intersection(*constraints: Constraint) -> Constraint:
    """
    The most compact constraint matching exactly the versions that match every one of
    `constraints`. An empty result is not an error: check it with `is_empty`.

    Without any constraints nothing is admissible, so the result is `Empty`. Union
    operands are distributed over, so their members are intersected one at a time.
    """
    match constraints:
        case ():
            return _EMPTY
        case (single,):
            return single
        case _:
            pass

    operands: list[Constraint] = []
    for c in constraints:
        match c:
            case Universal():
                continue
            case Empty():
                return _EMPTY
            case Point() | Range() | UnionSet():
                operands.append(c)
            case _:  # pyright: ignore[reportUnnecessaryComparison]
                raise TypeError(f"not a constraint: {c!r}")

    if not operands:
        return _UNIVERSAL

    result, *rest = operands
    for c in rest:
        result = _intersect_pair(result, c)
        if isinstance(result, Empty):
            return _EMPTY

    return result


def union(*constraints: Constraint) -> Constraint:
    """
    The most compact constraint matching exactly the versions that match at least one
    of `constraints`. Overlapping and adjacent members are merged, e.g.
    `>=1.0.0, <2.0.0` and `>=2.0.0, <3.0.0` become `>=1.0.0, <3.0.0`.
    """
    match constraints:
        case ():
            return _EMPTY
        case (single,):
            return single
        case _:
            pass

    members: list[_Member] = []
    for c in constraints:
        match c:
            case Universal():
                return _UNIVERSAL
            case Empty():
                continue
            case Point() | Range():
                members.append(c)
            case UnionSet(flat):
                members.extend(flat)
            case _:  # pyright: ignore[reportUnnecessaryComparison]
                raise TypeError(f"not a constraint: {c!r}")

    members.sort(key=lambda m: (_floor_key(m), _ceiling_key(m)))

    merged: list[_Member] = []
    for member in members:
        if merged and (joined := _merge_members(merged[-1], member)) is not None:
            match joined:
                case Universal():
                    return _UNIVERSAL
                case Point() | Range():
                    merged[-1] = joined
                case _:
                    raise AssertionError(f"merging two members produced {joined!r}")
        else:
            merged.append(member)

    match merged:
        case []:
            return _EMPTY
        case [single]:
            return single
        case _:
            return UnionSet(merged)


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Mismatch:
    """Why a version does not satisfy a constraint. This is a result, not an error."""

    reason: MismatchReason
    version: Version
    constraint: Constraint

    @override
    def __str__(self, /) -> str:
        v, c = self.version, self.constraint
        match self.reason, c:
            case MismatchReason.BELOW_LOWER, Range(lower=lower, include_lower=True):
                return f"{v} is less than {lower}"
            case MismatchReason.BELOW_LOWER, Range(lower=lower):
                return f"{v} is less than or equal to {lower}"
            case MismatchReason.ABOVE_UPPER, Range(upper=upper, include_upper=True):
                return f"{v} is greater than {upper}"
            case MismatchReason.ABOVE_UPPER, Range(upper=upper):
                return f"{v} is greater than or equal to {upper}"
            case MismatchReason.NOT_EQUAL, _:
                return f"{v} is not equal to {c}"
            case MismatchReason.EMPTY, _:
                return f"{v} cannot satisfy a constraint that matches nothing"
            case _:
                return f"{v} does not match any of {c}"


def matches(constraint: Constraint, version: Version | str, /) -> Mismatch | None:
    """`None` if `version` satisfies `constraint`, otherwise a `Mismatch` explaining why."""
    v = parse_version(version)

    match constraint:
        case Universal():
            return None
        case Empty():
            return Mismatch(MismatchReason.EMPTY, v, constraint)
        case Point(p):
            return None if v == p else Mismatch(MismatchReason.NOT_EQUAL, v, constraint)
        case Range():
            floor, ceiling = constraint.floor, constraint.ceiling
            if floor is not None and v < floor:
                return Mismatch(MismatchReason.BELOW_LOWER, v, constraint)
            if ceiling is not None and v >= ceiling:
                return Mismatch(MismatchReason.ABOVE_UPPER, v, constraint)
            return None
        case UnionSet(members):
            if any(matches(m, v) is None for m in members):
                return None
            return Mismatch(MismatchReason.NO_MEMBER, v, constraint)
        case _:  # pyright: ignore[reportUnnecessaryComparison]
            raise TypeError(f"not a constraint: {constraint!r}")


def matches_any(a: Constraint, b: Constraint, /) -> bool:
    """Whether at least one version satisfies both `a` and `b`."""
    return not is_empty(intersection(a, b))


def is_empty(constraint: Constraint, /) -> bool:
    return isinstance(constraint, Empty)


def is_universal(constraint: Constraint, /) -> bool:
    return isinstance(constraint, Universal)
