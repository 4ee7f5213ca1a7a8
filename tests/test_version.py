import pytest
from verset import InvalidVersion, Version, parse_version


def test_parse():
    v = Version.parse("v1.2.3-rc.1+build.5")

    assert v.major == 1
    assert v.minor == 2
    assert v.patch == 3
    assert v.prerelease == ("rc", "1")
    assert v.build == ("build", "5")

    assert str(v) == "1.2.3-rc.1+build.5"
    assert repr(v) == "Version('1.2.3-rc.1+build.5')"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1", Version(1, 0, 0)),
        ("1.2", Version(1, 2, 0)),
        (" 1.2.3 ", Version(1, 2, 3)),
        ("v0.0.0-0", Version.MIN),
    ],
)
def test_parse_partial(text: str, expected: Version):
    assert Version.parse(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "v", "1.2.3.4", "1.x", "1.2.3-", "1.2.3+", "a.b.c", "\u0661.2.3", "1.2.\u0663"],
)
def test_parse_invalid(text: str):
    with pytest.raises(InvalidVersion):
        _ = Version.parse(text)


def test_parse_version_passthrough():
    v = Version(1, 2, 3)
    assert parse_version(v) is v
    assert parse_version("1.2.3") == v


def test_precedence():
    ordered = [
        "0.0.0-0",
        "1.0.0-alpha",
        "1.0.0-alpha.1",
        "1.0.0-alpha.beta",
        "1.0.0-beta",
        "1.0.0-beta.2",
        "1.0.0-beta.11",
        "1.0.0-rc.1",
        "1.0.0",
        "1.0.1-0",
        "1.0.1",
        "1.1.0",
        "2.0.0",
        "10.0.0",
    ]
    versions = [Version.parse(v) for v in ordered]

    assert sorted(reversed(versions)) == versions
    for lo, hi in zip(versions, versions[1:], strict=False):
        assert lo < hi
        assert lo <= hi
        assert hi > lo
        assert hi >= lo
        assert lo != hi


def test_build_metadata_ignored():
    a = Version.parse("1.2.3+a")
    b = Version.parse("1.2.3+b")

    assert a == b
    assert hash(a) == hash(b)
    assert not a < b
    assert not a > b


@pytest.mark.parametrize(
    ("text", "successor"),
    [
        ("1.2.3", "1.2.4-0"),
        ("1.2.3+build", "1.2.4-0"),
        ("1.2.3-rc", "1.2.3-rc.0"),
        ("0.0.0-0", "0.0.0-0.0"),
    ],
)
def test_successor(text: str, successor: str):
    v = Version.parse(text)
    s = v.successor()

    assert s == Version.parse(successor)
    assert v < s


def test_bumps():
    v = Version.parse("1.2.3-rc.1")

    assert v.next_major() == Version(2)
    assert v.next_minor() == Version(1, 3)
    assert v.next_patch() == Version(1, 2, 4)


def test_negative():
    with pytest.raises(InvalidVersion):
        _ = Version(1, -1)
