"""Error taxonomy for the evaluator.

Every failure the evaluator can report is an ``EvalError``. Pattern
non-matches are not errors; only exhausting a whole rule list is.
"""


class EvalError(Exception):
    """Base class for evaluation errors."""

    kind = "error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.kind.replace("_", " "))
        self.detail = message


class UnboundIdentifier(EvalError):
    """Identifier not bound in the environment."""

    kind = "unbound_identifier"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unbound identifier: {name}")


class TypeMismatch(EvalError):
    """Value of the wrong kind for the construct consuming it."""

    kind = "type_mismatch"


class DivisionByZero(EvalError):
    """Integer or float division by a zero divisor."""

    kind = "division_by_zero"


class UnsupportedOperation(EvalError):
    """Operator applied to operand kinds absent from the operator table."""

    kind = "unsupported_operation"


class MatchFailure(EvalError):
    """No rule of a rule list matched the scrutinee."""

    kind = "match_failure"


class NotImplementedForm(EvalError):
    """Language form the evaluator does not support."""

    kind = "not_implemented"
