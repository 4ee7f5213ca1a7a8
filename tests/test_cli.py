from typer.testing import CliRunner
from verset._meta import get_version
from verset.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout == f"verset {get_version()}\n"


def test_no_args():
    result = runner.invoke(app, [])
    assert "normalize" in result.output
    assert "check" in result.output


def test_normalize():
    result = runner.invoke(app, ["normalize", "1.x || 2.0.0 - 2.3"])
    assert result.exit_code == 0
    assert result.stdout == ">=1.0.0, <2.4.0\n"


def test_normalize_empty():
    result = runner.invoke(app, ["normalize", ">=2.0.0, <1.0.0"])
    assert result.exit_code == 0
    assert result.stdout == "<0.0.0-0\n"


def test_normalize_malformed():
    result = runner.invoke(app, ["normalize", ">=1.0.0, ~>>2"])
    assert result.exit_code == 2
    assert "malformed constraint '~>>2'" in result.output


def test_check_satisfied():
    result = runner.invoke(app, ["check", "^1.2", "1.2.0", "1.9.9"])
    assert result.exit_code == 0
    assert result.stdout == "1.2.0: ok\n1.9.9: ok\n"


def test_check_unsatisfied():
    result = runner.invoke(app, ["check", "^1.2", "1.4.0", "2.0.0"])
    assert result.exit_code == 1
    assert result.stdout == "1.4.0: ok\n2.0.0: 2.0.0 is greater than or equal to 2.0.0\n"


def test_check_quiet():
    result = runner.invoke(app, ["check", "--quiet", "1.2.3", "1.2.3", "1.2.4"])
    assert result.exit_code == 1
    assert result.stdout == "1.2.4: 1.2.4 is not equal to 1.2.3\n"


def test_check_invalid_version():
    result = runner.invoke(app, ["check", "*", "one.two"])
    assert result.exit_code == 2
    assert "invalid version: 'one.two'" in result.output


def test_intersect():
    result = runner.invoke(app, ["intersect", ">=1.0.0, <2.0.0", ">=1.5.0, <3.0.0"])
    assert result.exit_code == 0
    assert result.stdout == ">=1.5.0, <2.0.0\n"


def test_intersect_disjoint():
    result = runner.invoke(app, ["intersect", "1.x", "3.x"])
    assert result.exit_code == 0
    assert result.stdout == "<0.0.0-0\n"


def test_union():
    result = runner.invoke(app, ["union", ">=1.0.0, <2.0.0", ">=3.0.0, <4.0.0", "2.x"])
    assert result.exit_code == 0
    assert result.stdout == ">=1.0.0, <4.0.0\n"


def test_union_disjoint():
    result = runner.invoke(app, ["union", "~1.2", "3.0.0"])
    assert result.exit_code == 0
    assert result.stdout == ">=1.2.0, <1.3.0 || 3.0.0\n"
