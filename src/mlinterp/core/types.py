"""Type annotations carried by the AST.

Annotations are erased during evaluation; they only exist so that typed
patterns and typed expressions can be represented faithfully.
"""

from __future__ import annotations

from dataclasses import dataclass


class Type:
    """Base class for type annotations."""

    pass


@dataclass(frozen=True)
class TypeName(Type):
    """Named type, possibly applied to arguments: int, int list."""

    name: str
    args: tuple[Type, ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        if len(self.args) == 1:
            return f"{self.args[0]} {self.name}"
        args_str = ", ".join(str(arg) for arg in self.args)
        return f"({args_str}) {self.name}"


@dataclass(frozen=True)
class TypeArrow(Type):
    """Function type: σ -> τ."""

    arg: Type
    ret: Type

    def __str__(self) -> str:
        match self.arg:
            case TypeArrow():
                arg_str = f"({self.arg})"
            case _:
                arg_str = str(self.arg)
        return f"{arg_str} -> {self.ret}"


@dataclass(frozen=True)
class TypeTuple(Type):
    """Product type: σ * τ."""

    items: tuple[Type, ...]

    def __str__(self) -> str:
        return " * ".join(str(item) for item in self.items)


@dataclass(frozen=True)
class TypeMeasure(Type):
    """Numeric type annotated with a unit of measure: float<cm>."""

    base: Type
    unit: str

    def __str__(self) -> str:
        return f"{self.base}<{self.unit}>"
