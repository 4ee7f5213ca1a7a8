"""
Semantic version values, ordered by semver precedence (build metadata is ignored).

Every version has an immediate successor, which is what makes adjacency between two
bounds decidable: `1.2.3` is immediately followed by `1.2.4-0`, and `1.2.3-rc` by
`1.2.3-rc.0`.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar, Final, Self, final, override

from .exceptions import InvalidVersion

if TYPE_CHECKING:
    from collections.abc import Iterable


__all__ = ("IDENTIFIER_PATTERN", "Version", "parse_version")

IDENTIFIER_PATTERN: Final = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

_VERSION_RE: Final = re.compile(
    rf"""
    v?
    (?P<major>\d+)
    (?:\.(?P<minor>\d+))?
    (?:\.(?P<patch>\d+))?
    (?:-(?P<prerelease>{IDENTIFIER_PATTERN}))?
    (?:\+(?P<build>{IDENTIFIER_PATTERN}))?
    """,
    re.VERBOSE | re.ASCII,
)

type _PreKey = tuple[tuple[int, int, str], ...]


def _prerelease_key(prerelease: tuple[str, ...], /) -> _PreKey:
    # numeric identifiers sort numerically, and below all alphanumeric ones
    return tuple((0, int(i), "") if i.isdigit() else (1, 0, i) for i in prerelease)


def _split_identifiers(text: str | None, /) -> tuple[str, ...]:
    return tuple(text.split(".")) if text else ()


@final
class Version:
    """A single concrete version, `major.minor.patch[-prerelease][+build]`."""

    __slots__ = "_key", "build", "major", "minor", "patch", "prerelease"
    __match_args__ = "major", "minor", "patch", "prerelease"

    MIN: ClassVar[Version]

    major: Final[int]
    minor: Final[int]
    patch: Final[int]
    prerelease: Final[tuple[str, ...]]
    build: Final[tuple[str, ...]]
    _key: Final[tuple[int, int, int, tuple[int, _PreKey]]]

    def __init__(
        self,
        /,
        major: int,
        minor: int = 0,
        patch: int = 0,
        prerelease: Iterable[str] = (),
        build: Iterable[str] = (),
    ) -> None:
        if major < 0 or minor < 0 or patch < 0:
            raise InvalidVersion(f"negative version component in {(major, minor, patch)}")

        self.major = major
        self.minor = minor
        self.patch = patch
        self.prerelease = tuple(prerelease)
        self.build = tuple(build)

        pre = self.prerelease
        self._key = (
            major,
            minor,
            patch,
            (0, _prerelease_key(pre)) if pre else (1, ()),
        )

    @classmethod
    def parse(cls, text: str, /) -> Self:
        m = _VERSION_RE.fullmatch(text.strip())
        if m is None:
            raise InvalidVersion(f"invalid version: {text!r}")

        return cls(
            int(m["major"]),
            int(m["minor"] or 0),
            int(m["patch"] or 0),
            _split_identifiers(m["prerelease"]),
            _split_identifiers(m["build"]),
        )

    def successor(self, /) -> Version:
        """The least version that is strictly greater than this one."""
        if self.prerelease:
            return Version(self.major, self.minor, self.patch, (*self.prerelease, "0"))
        return Version(self.major, self.minor, self.patch + 1, ("0",))

    def next_major(self, /) -> Version:
        return Version(self.major + 1)

    def next_minor(self, /) -> Version:
        return Version(self.major, self.minor + 1)

    def next_patch(self, /) -> Version:
        return Version(self.major, self.minor, self.patch + 1)

    @override
    def __repr__(self, /) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    @override
    def __str__(self, /) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            out += "-" + ".".join(self.prerelease)
        if self.build:
            out += "+" + ".".join(self.build)
        return out

    @override
    def __hash__(self, /) -> int:
        return hash(self._key)

    @override
    def __eq__(self, other: object, /) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self is other or self._key == other._key

    def __lt__(self, other: Version, /) -> bool:
        if not isinstance(other, Version):  # pyright: ignore[reportUnnecessaryIsInstance]
            return NotImplemented
        return self._key < other._key

    def __le__(self, other: Version, /) -> bool:
        if not isinstance(other, Version):  # pyright: ignore[reportUnnecessaryIsInstance]
            return NotImplemented
        return self._key <= other._key

    def __gt__(self, other: Version, /) -> bool:
        if not isinstance(other, Version):  # pyright: ignore[reportUnnecessaryIsInstance]
            return NotImplemented
        return self._key > other._key

    def __ge__(self, other: Version, /) -> bool:
        if not isinstance(other, Version):  # pyright: ignore[reportUnnecessaryIsInstance]
            return NotImplemented
        return self._key >= other._key


Version.MIN = Version(0, 0, 0, ("0",))


def parse_version(version: Version | str, /) -> Version:
    return version if isinstance(version, Version) else Version.parse(version)
