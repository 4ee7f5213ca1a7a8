__all__ = ("ConstraintSyntaxError", "InvalidVersion")


class InvalidVersion(ValueError):
    pass


class ConstraintSyntaxError(ValueError):
    """A comparator token, and thus the whole expression, does not match the grammar."""

    def __init__(self, token: str, /, expression: str | None = None) -> None:
        self.token = token
        self.expression = expression

        msg = f"malformed constraint {token.strip()!r}"
        if expression is not None and expression.strip() != token.strip():
            msg += f" in {expression!r}"
        super().__init__(msg)
