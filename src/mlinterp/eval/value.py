"""Runtime values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from mlinterp.core.ast import Expr, Pattern, Rule

if TYPE_CHECKING:
    from mlinterp.eval.environment import Environment


@dataclass(frozen=True)
class VInt:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VFloat:
    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class VChar:
    value: str

    def __str__(self) -> str:
        return f"'{self.value}'"


@dataclass(frozen=True)
class VString:
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class VUnit:
    """The unit value ()."""

    def __str__(self) -> str:
        return "()"


@dataclass(frozen=True)
class VList:
    items: tuple["Value", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __str__(self) -> str:
        return "[" + "; ".join(str(item) for item in self.items) + "]"


@dataclass(frozen=True)
class VTuple:
    items: tuple["Value", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        if len(self.items) < 2:
            raise ValueError("tuple value needs at least two elements")

    def __str__(self) -> str:
        return "(" + ", ".join(str(item) for item in self.items) + ")"


@dataclass(frozen=True)
class VOption:
    """Some v when value is set, None otherwise."""

    value: Optional["Value"] = None

    def __str__(self) -> str:
        if self.value is None:
            return "None"
        return f"Some {self.value}"


@dataclass(frozen=True)
class VFun:
    """Single-clause closure: fun p -> body with captured environment.

    ``recursive`` is set only for closures materialized from a ``let rec``
    frame; their environment already contains their own name.
    """

    pattern: Pattern
    body: Expr
    env: "Environment"
    recursive: bool = False

    def __str__(self) -> str:
        return "<fun>"


@dataclass(frozen=True)
class VFunction:
    """Multi-clause closure: function p1 -> e1 | ... | pn -> en.

    ``env`` is None when the closure was built without capturing its defining
    environment; its rules are then dispatched in the caller's environment.
    """

    rules: tuple[Rule, ...]
    env: Optional["Environment"] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))

    def __str__(self) -> str:
        return "<function>"


# Sum type for all values
Value = VInt | VFloat | VBool | VChar | VString | VUnit | VList | VTuple | VOption | VFun | VFunction

_KIND_NAMES: dict[type, str] = {
    VInt: "int",
    VFloat: "float",
    VBool: "bool",
    VChar: "char",
    VString: "string",
    VUnit: "unit",
    VList: "list",
    VTuple: "tuple",
    VOption: "option",
    VFun: "function",
    VFunction: "function",
}


def kind_of(value: object) -> str:
    """Name the kind of a value without rendering it."""
    return _KIND_NAMES.get(type(value), type(value).__name__)
