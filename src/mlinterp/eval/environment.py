"""Persistent evaluation environment.

An environment is a chain of immutable frames, newest first. Extending it
allocates one frame and shares the rest of the chain, so closures can keep a
reference to the environment they were created in without copying it, and
the scope that created them can keep extending its own chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from mlinterp.core.ast import Expr, Function, Lambda, Typed
from mlinterp.core.errors import UnboundIdentifier
from mlinterp.eval.value import Value, VFun, VFunction


def _frozen(bindings: Mapping[str, object]) -> Mapping[str, object]:
    return MappingProxyType(dict(bindings))


@dataclass(frozen=True)
class Environment:
    """Mapping from identifiers to values.

    A recursive frame stores function literals instead of values. Looking one
    of its names up builds a closure whose captured environment is the frame
    itself, which is how ``let rec`` ties the knot without mutation.
    """

    frame: Mapping[str, object] = field(default_factory=lambda: _frozen({}))
    parent: Optional["Environment"] = None
    recursive: bool = False

    @staticmethod
    def empty() -> "Environment":
        """Create an empty environment."""
        return Environment()

    def find(self, name: str) -> Value:
        """Lookup value by name, raising UnboundIdentifier on a miss."""
        node: Optional[Environment] = self
        while node is not None:
            if name in node.frame:
                entry = node.frame[name]
                if node.recursive:
                    return node._close(entry)
                return entry
            node = node.parent
        raise UnboundIdentifier(name)

    def extend(self, name: str, value: Value) -> "Environment":
        """Bind name to value in a new environment, shadowing older bindings."""
        return Environment(_frozen({name: value}), self)

    def extend_recursive(self, definitions: Mapping[str, Expr]) -> "Environment":
        """Add a frame of mutually recursive function definitions."""
        for name, expr in definitions.items():
            if not isinstance(_strip(expr), (Lambda, Function)):
                raise ValueError(f"recursive definition of {name} is not a function literal")
        return Environment(_frozen(definitions), self, recursive=True)

    def _close(self, expr: Expr) -> Value:
        match _strip(expr):
            case Lambda(pattern, body):
                return VFun(pattern, body, self, recursive=True)
            case Function(rules):
                return VFunction(rules, self)
        raise ValueError(f"not a function literal: {expr}")

    def names(self) -> set[str]:
        """Return every name visible in this environment."""
        return set(self._iter_names())

    def _iter_names(self) -> Iterator[str]:
        node: Optional[Environment] = self
        while node is not None:
            yield from node.frame
            node = node.parent

    def __contains__(self, name: object) -> bool:
        return name in self.names()

    def __str__(self) -> str:
        return f"Environment({len(self.names())} bindings)"


def _strip(expr: Expr) -> Expr:
    while isinstance(expr, Typed):
        expr = expr.expr
    return expr


def empty() -> Environment:
    return Environment.empty()


def find(env: Environment, name: str) -> Value:
    return env.find(name)


def extend(env: Environment, name: str, value: Value) -> Environment:
    return env.extend(name, value)
