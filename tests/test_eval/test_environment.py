"""Tests for the persistent environment."""

import pytest

from mlinterp.core.ast import CInt, Const, Function, Ident, Lambda, PIdent, PWild, Rule, Typed
from mlinterp.core.errors import UnboundIdentifier
from mlinterp.core.types import TypeArrow, TypeName
from mlinterp.eval import environment
from mlinterp.eval.environment import Environment
from mlinterp.eval.value import VFun, VFunction, VInt, VString


def test_find_in_empty_raises_with_name():
    """Lookup in the empty environment reports the missing name."""
    with pytest.raises(UnboundIdentifier) as excinfo:
        Environment.empty().find("z")
    assert excinfo.value.name == "z"
    assert "z" in str(excinfo.value)


def test_extend_then_find():
    env = Environment.empty().extend("x", VInt(1))
    assert env.find("x") == VInt(1)


def test_extend_shadows_previous_binding():
    """find(extend(env, k, v), k) is v regardless of earlier bindings for k."""
    outer = Environment.empty().extend("x", VInt(1))
    inner = outer.extend("x", VString("shadow"))
    assert inner.find("x") == VString("shadow")


def test_extend_does_not_mutate_original():
    """Extension leaves the original environment untouched."""
    outer = Environment.empty().extend("x", VInt(1))
    outer.extend("y", VInt(2))
    outer.extend("x", VInt(3))
    assert outer.find("x") == VInt(1)
    assert "y" not in outer


def test_lookup_falls_through_to_parent():
    env = Environment.empty().extend("x", VInt(1)).extend("y", VInt(2))
    assert env.find("x") == VInt(1)
    assert env.names() == {"x", "y"}


def test_module_level_functions():
    env = environment.extend(environment.empty(), "k", VInt(7))
    assert environment.find(env, "k") == VInt(7)
    with pytest.raises(UnboundIdentifier):
        environment.find(environment.empty(), "k")


def test_recursive_frame_closes_over_itself():
    """Closures built from a recursive frame capture that frame."""
    lam = Lambda(PIdent("n"), Ident("f"))
    env = Environment.empty().extend_recursive({"f": lam})
    closure = env.find("f")
    assert isinstance(closure, VFun)
    assert closure.recursive is True
    assert closure.env is env
    assert isinstance(closure.env.find("f"), VFun)


def test_recursive_frame_strips_annotations():
    typ = TypeArrow(TypeName("int"), TypeName("int"))
    func = Typed(Function([Rule(PWild(), Const(CInt(0)))]), typ)
    env = Environment.empty().extend_recursive({"g": func})
    closure = env.find("g")
    assert isinstance(closure, VFunction)
    assert closure.env is env


def test_recursive_frame_rejects_non_functions():
    with pytest.raises(ValueError, match="not a function literal"):
        Environment.empty().extend_recursive({"x": Const(CInt(1))})


def test_str_counts_bindings():
    env = Environment.empty().extend("a", VInt(1)).extend("b", VInt(2))
    assert str(env) == "Environment(2 bindings)"
