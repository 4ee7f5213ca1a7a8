import enum

__all__ = ("OPERATOR_TOKENS", "MismatchReason", "Operator")


class Operator(enum.StrEnum):
    EQ = "="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    TILDE = "~"
    CARET = "^"

    @classmethod
    def from_token(cls, token: str, /) -> "Operator":
        """Canonical operator for one of the spellings accepted by the grammar."""
        return cls(_ALIASES.get(token, token))


_ALIASES: dict[str, str] = {"": "=", "=>": ">=", "=<": "<=", "~>": "~"}

# every spelling the comparator grammar accepts, longest first
OPERATOR_TOKENS: tuple[str, ...] = tuple(
    sorted({*(op.value for op in Operator), *_ALIASES}, key=len, reverse=True),
)


class MismatchReason(enum.StrEnum):
    NOT_EQUAL = "not-equal"
    BELOW_LOWER = "below-lower"
    ABOVE_UPPER = "above-upper"
    EMPTY = "empty"
    NO_MEMBER = "no-member"
