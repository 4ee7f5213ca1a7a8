from typing import Annotated, Final, TypeAlias

import typer

from .constraints import Constraint, intersection, union
from .exceptions import ConstraintSyntaxError, InvalidVersion
from .parser import parse

__all__ = ("app",)


def _version_callback(*, value: bool) -> None:
    if not value:
        return

    from ._meta import get_version  # noqa: PLC0415

    typer.echo(f"verset {get_version()}")
    raise typer.Exit


_ArgumentExpression: TypeAlias = Annotated[
    str,
    typer.Argument(
        show_default=False,
        help="Constraint expression, e.g. '>=1.2.3, <2.0.0 || ^3.1.0'.",
    ),
]
_ArgumentExpressions: TypeAlias = Annotated[
    list[str],
    typer.Argument(
        show_default=False,
        help="One or more constraint expressions.",
    ),
]
_ArgumentVersions: TypeAlias = Annotated[
    list[str],
    typer.Argument(
        show_default=False,
        help="One or more versions to check against the constraint.",
    ),
]
_OptionVersion: TypeAlias = Annotated[
    bool | None,
    typer.Option(
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
]
_OptionQuiet: TypeAlias = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Only report the versions that do not satisfy the constraint",
    ),
]

# exit codes
_EXIT_UNSATISFIED: Final = 1
_EXIT_INVALID: Final = 2


def _parse(expression: str, /) -> Constraint:
    try:
        return parse(expression)
    except ConstraintSyntaxError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(_EXIT_INVALID) from None


app: Final = typer.Typer(
    name="verset",
    no_args_is_help=True,
    short_help="-h",
    add_completion=False,
    pretty_exceptions_enable=False,
)


@app.callback()  # type: ignore[no-any-expr]
def main(
    *,
    version: _OptionVersion = None,
) -> None:
    """Parse, combine, and check semantic version constraints."""
    assert not version


@app.command()  # type: ignore[no-any-expr]
def normalize(expression: _ArgumentExpression) -> None:
    """Print the normalized form of a constraint expression."""
    typer.echo(_parse(expression))


@app.command()  # type: ignore[no-any-expr]
def check(
    expression: _ArgumentExpression,
    versions: _ArgumentVersions,
    *,
    quiet: _OptionQuiet = False,
) -> None:
    """Check which of the versions satisfy the constraint expression."""
    constraint = _parse(expression)

    unsatisfied = 0
    for version in versions:
        try:
            mismatch = constraint.matches(version)
        except InvalidVersion as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(_EXIT_INVALID) from None

        if mismatch is None:
            if not quiet:
                typer.secho(f"{version}: ok", fg=typer.colors.GREEN)
        else:
            unsatisfied += 1
            typer.secho(f"{version}: {mismatch}", fg=typer.colors.RED)

    if unsatisfied:
        raise typer.Exit(_EXIT_UNSATISFIED)


@app.command()  # type: ignore[no-any-expr]
def intersect(expressions: _ArgumentExpressions) -> None:
    """Print the constraint that all expressions admit together."""
    typer.echo(intersection(*map(_parse, expressions)))


@app.command("union")  # type: ignore[no-any-expr]
def union_(expressions: _ArgumentExpressions) -> None:
    """Print the constraint that admits what any of the expressions admit."""
    typer.echo(union(*map(_parse, expressions)))
