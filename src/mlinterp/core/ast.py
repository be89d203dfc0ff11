"""Abstract syntax for the ML-style expression language.

The evaluator consumes these nodes directly; producing them from source text
is the job of a parser that lives outside this package.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from mlinterp.core.types import Type


def _freeze(node: object, field: str, items: Sequence) -> None:
    object.__setattr__(node, field, tuple(items))


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


# Constants


class Constant:
    """Base class for literal constants."""

    pass


@dataclass(frozen=True)
class CInt(Constant):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CFloat(Constant):
    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class CBool(Constant):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class CChar(Constant):
    """Character literal: 'a'."""

    value: str

    def __post_init__(self) -> None:
        _require(len(self.value) == 1, "character constant must hold exactly one character")

    def __str__(self) -> str:
        return f"'{self.value}'"


@dataclass(frozen=True)
class CString(Constant):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class CMeasure(Constant):
    """Number annotated with a unit of measure: 5.0<cm>.

    Parsed but not evaluated: the evaluator rejects it with a type mismatch.
    """

    value: int | float
    unit: str

    def __str__(self) -> str:
        return f"{self.value}<{self.unit}>"


# Patterns


class Pattern:
    """Base class for patterns."""

    pass


@dataclass(frozen=True)
class PWild(Pattern):
    def __str__(self) -> str:
        return "_"


@dataclass(frozen=True)
class PConst(Pattern):
    constant: Constant

    def __str__(self) -> str:
        return str(self.constant)


@dataclass(frozen=True)
class PIdent(Pattern):
    """Binds the matched value to a name. Operator names are allowed: ( + )."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PTyped(Pattern):
    pattern: Pattern
    type_annotation: Type

    def __str__(self) -> str:
        return f"({self.pattern} : {self.type_annotation})"


@dataclass(frozen=True)
class POption(Pattern):
    """Some p when pattern is set, None otherwise."""

    pattern: Optional[Pattern] = None

    def __str__(self) -> str:
        if self.pattern is None:
            return "None"
        return f"Some {self.pattern}"


@dataclass(frozen=True)
class POr(Pattern):
    left: Pattern
    right: Pattern

    def __str__(self) -> str:
        return f"({self.left} | {self.right})"


@dataclass(frozen=True)
class PList(Pattern):
    items: tuple[Pattern, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "items", self.items)

    def __str__(self) -> str:
        return "[" + "; ".join(str(item) for item in self.items) + "]"


@dataclass(frozen=True)
class PTuple(Pattern):
    items: tuple[Pattern, ...]

    def __post_init__(self) -> None:
        _freeze(self, "items", self.items)
        _require(len(self.items) >= 2, "tuple pattern needs at least two elements")

    def __str__(self) -> str:
        return "(" + ", ".join(str(item) for item in self.items) + ")"


# Expressions


class Expr:
    """Base class for expressions."""

    pass


@dataclass(frozen=True)
class Rule:
    """Match arm: pattern -> body."""

    pattern: Pattern
    body: Expr

    def __str__(self) -> str:
        return f"{self.pattern} -> {self.body}"


@dataclass(frozen=True)
class Binding:
    """One binding of a let: pattern = expr."""

    pattern: Pattern
    expr: Expr

    def __str__(self) -> str:
        return f"{self.pattern} = {self.expr}"


@dataclass(frozen=True)
class Const(Expr):
    constant: Constant

    def __str__(self) -> str:
        return str(self.constant)


@dataclass(frozen=True)
class Ident(Expr):
    """Identifier or operator reference."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Typed(Expr):
    expr: Expr
    type_annotation: Type

    def __str__(self) -> str:
        return f"({self.expr} : {self.type_annotation})"


@dataclass(frozen=True)
class ListExpr(Expr):
    items: tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "items", self.items)

    def __str__(self) -> str:
        return "[" + "; ".join(str(item) for item in self.items) + "]"


@dataclass(frozen=True)
class TupleExpr(Expr):
    items: tuple[Expr, ...]

    def __post_init__(self) -> None:
        _freeze(self, "items", self.items)
        _require(len(self.items) >= 2, "tuple needs at least two elements")

    def __str__(self) -> str:
        return "(" + ", ".join(str(item) for item in self.items) + ")"


@dataclass(frozen=True)
class Lambda(Expr):
    """Single-clause function: fun p -> body."""

    pattern: Pattern
    body: Expr

    def __str__(self) -> str:
        return f"(fun {self.pattern} -> {self.body})"


@dataclass(frozen=True)
class IfThenElse(Expr):
    cond: Expr
    then_branch: Expr
    else_branch: Optional[Expr] = None

    def __str__(self) -> str:
        if self.else_branch is None:
            return f"if {self.cond} then {self.then_branch}"
        return f"if {self.cond} then {self.then_branch} else {self.else_branch}"


@dataclass(frozen=True)
class OptionExpr(Expr):
    """Some e when expr is set, None otherwise."""

    expr: Optional[Expr] = None

    def __str__(self) -> str:
        if self.expr is None:
            return "None"
        return f"Some {self.expr}"


@dataclass(frozen=True)
class Match(Expr):
    """match scrutinee with rules."""

    scrutinee: Expr
    rules: tuple[Rule, ...]

    def __post_init__(self) -> None:
        _freeze(self, "rules", self.rules)
        _require(len(self.rules) > 0, "match needs at least one rule")

    def __str__(self) -> str:
        rules_str = " | ".join(str(rule) for rule in self.rules)
        return f"(match {self.scrutinee} with {rules_str})"


@dataclass(frozen=True)
class Function(Expr):
    """Multi-clause function literal: function rules."""

    rules: tuple[Rule, ...]

    def __post_init__(self) -> None:
        _freeze(self, "rules", self.rules)
        _require(len(self.rules) > 0, "function needs at least one rule")

    def __str__(self) -> str:
        return "(function " + " | ".join(str(rule) for rule in self.rules) + ")"


@dataclass(frozen=True)
class Apply(Expr):
    func: Expr
    arg: Expr

    def __str__(self) -> str:
        return f"({self.func} {self.arg})"


@dataclass(frozen=True)
class Let(Expr):
    """let [rec] p1 = e1 and ... in body."""

    recursive: bool
    bindings: tuple[Binding, ...]
    body: Expr

    def __post_init__(self) -> None:
        _freeze(self, "bindings", self.bindings)
        _require(len(self.bindings) > 0, "let needs at least one binding")

    def __str__(self) -> str:
        keyword = "let rec" if self.recursive else "let"
        bindings_str = " and ".join(str(b) for b in self.bindings)
        return f"{keyword} {bindings_str} in {self.body}"


# Programs


@dataclass(frozen=True)
class LetDecl:
    """Top-level let without a body."""

    recursive: bool
    bindings: tuple[Binding, ...]

    def __post_init__(self) -> None:
        _freeze(self, "bindings", self.bindings)
        _require(len(self.bindings) > 0, "let needs at least one binding")

    def __str__(self) -> str:
        keyword = "let rec" if self.recursive else "let"
        return f"{keyword} " + " and ".join(str(b) for b in self.bindings)


@dataclass(frozen=True)
class ExprDecl:
    """Top-level expression, evaluated for effect and discarded."""

    expr: Expr

    def __str__(self) -> str:
        return str(self.expr)


Declaration = LetDecl | ExprDecl
Program = Sequence[Declaration]
