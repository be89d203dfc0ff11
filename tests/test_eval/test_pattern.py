"""Tests for pattern matching."""

import pytest

from mlinterp.core.ast import (
    CBool,
    CChar,
    CFloat,
    CInt,
    CMeasure,
    Const,
    CString,
    PConst,
    PIdent,
    PList,
    POption,
    POr,
    PTuple,
    PTyped,
    PWild,
    Rule,
)
from mlinterp.core.errors import MatchFailure
from mlinterp.core.types import TypeName
from mlinterp.eval.environment import Environment
from mlinterp.eval.pattern import PatternMatcher, bound_names, match_pattern
from mlinterp.eval.value import (
    VBool,
    VChar,
    VFloat,
    VInt,
    VList,
    VOption,
    VString,
    VTuple,
    VUnit,
    kind_of,
)


@pytest.fixture
def matcher() -> PatternMatcher:
    return PatternMatcher()


def test_wildcard_matches_anything(matcher, empty_env):
    for value in (VInt(1), VString("s"), VList(()), VOption()):
        assert matcher.match(empty_env, PWild(), value) is empty_env


@pytest.mark.parametrize(
    "constant, value",
    [
        (CInt(3), VInt(3)),
        (CFloat(1.5), VFloat(1.5)),
        (CBool(False), VBool(False)),
        (CChar("a"), VChar("a")),
        (CString("hi"), VString("hi")),
    ],
)
def test_constant_pattern_same_kind_and_payload(matcher, empty_env, constant, value):
    assert matcher.match(empty_env, PConst(constant), value) is empty_env


@pytest.mark.parametrize(
    "constant, value",
    [
        (CInt(3), VInt(4)),
        (CInt(1), VBool(True)),
        (CBool(True), VInt(1)),
        (CFloat(1.0), VInt(1)),
        (CChar("a"), VString("a")),
        (CString("a"), VChar("a")),
        (CMeasure(1.0, "cm"), VFloat(1.0)),
    ],
)
def test_constant_pattern_rejects_other_kinds(matcher, empty_env, constant, value):
    assert matcher.match(empty_env, PConst(constant), value) is None


def test_float_constant_is_exact(matcher, empty_env):
    assert matcher.match(empty_env, PConst(CFloat(0.3)), VFloat(0.1 + 0.2)) is None


def test_identifier_binds(matcher, empty_env):
    env = matcher.match(empty_env, PIdent("x"), VInt(9))
    assert env is not None
    assert env.find("x") == VInt(9)


def test_typed_pattern_ignores_annotation(matcher, empty_env):
    env = matcher.match(empty_env, PTyped(PIdent("x"), TypeName("string")), VInt(1))
    assert env is not None
    assert env.find("x") == VInt(1)


def test_option_patterns(matcher, empty_env):
    some_x = POption(PIdent("x"))
    env = matcher.match(empty_env, some_x, VOption(VInt(2)))
    assert env is not None and env.find("x") == VInt(2)
    assert matcher.match(empty_env, POption(), VOption()) is empty_env
    assert matcher.match(empty_env, some_x, VOption()) is None
    assert matcher.match(empty_env, POption(), VOption(VInt(2))) is None
    assert matcher.match(empty_env, some_x, VInt(2)) is None


def test_or_pattern_falls_back_to_right(matcher, empty_env):
    pattern = POr(PConst(CInt(1)), PConst(CInt(2)))
    assert matcher.match(empty_env, pattern, VInt(1)) is empty_env
    assert matcher.match(empty_env, pattern, VInt(2)) is empty_env
    assert matcher.match(empty_env, pattern, VInt(3)) is None


def test_or_pattern_prefers_left_bindings(matcher, empty_env):
    pattern = POr(PTuple([PIdent("x"), PWild()]), PTuple([PWild(), PIdent("x")]))
    env = matcher.match(empty_env, pattern, VTuple([VInt(1), VInt(2)]))
    assert env is not None
    assert env.find("x") == VInt(1)


def test_tuple_pattern_binds_positionally(matcher, empty_env):
    env = matcher.match(empty_env, PTuple([PWild(), PIdent("y")]), VTuple([VInt(1), VInt(2)]))
    assert env is not None
    assert env.find("y") == VInt(2)
    assert env.names() == {"y"}


def test_list_pattern_threads_environment(matcher, empty_env):
    env = matcher.match(
        empty_env,
        PList([PIdent("a"), PIdent("b"), PConst(CInt(3))]),
        VList([VInt(1), VInt(2), VInt(3)]),
    )
    assert env is not None
    assert env.find("a") == VInt(1)
    assert env.find("b") == VInt(2)


@pytest.mark.parametrize(
    "pattern, value",
    [
        (PList([PWild(), PWild()]), VList([VInt(1)])),
        (PList([PWild()]), VList([VInt(1), VInt(2)])),
        (PList([]), VList([VInt(1)])),
        (PTuple([PWild(), PWild()]), VTuple([VInt(1), VInt(2), VInt(3)])),
    ],
)
def test_list_and_tuple_are_arity_strict(matcher, empty_env, pattern, value):
    assert matcher.match(empty_env, pattern, value) is None


def test_element_mismatch_fails_whole_pattern(matcher, empty_env):
    pattern = PList([PIdent("a"), PConst(CInt(0))])
    assert matcher.match(empty_env, pattern, VList([VInt(1), VInt(2)])) is None


def test_kind_mismatch_fails(matcher, empty_env):
    assert matcher.match(empty_env, PList([PWild(), PWild()]), VTuple([VInt(1), VInt(2)])) is None
    assert matcher.match(empty_env, PTuple([PWild(), PWild()]), VList([VInt(1), VInt(2)])) is None


def test_bindings_stack_on_given_environment(matcher):
    outer = Environment.empty().extend("z", VInt(0))
    env = matcher.match(outer, PIdent("x"), VInt(1))
    assert env is not None
    assert env.names() == {"x", "z"}
    assert "x" not in outer


def test_select_rule_first_match_wins(matcher, empty_env):
    rules = [
        Rule(PConst(CInt(1)), Const(CString("one"))),
        Rule(PIdent("n"), Const(CString("first catch-all"))),
        Rule(PWild(), Const(CString("second catch-all"))),
    ]
    rule, env = matcher.select_rule(empty_env, VInt(5), rules)
    assert rule is rules[1]
    assert env.find("n") == VInt(5)


def test_select_rule_exhausted(matcher, empty_env):
    with pytest.raises(MatchFailure):
        matcher.select_rule(empty_env, VInt(5), [Rule(PConst(CInt(1)), Const(CInt(1)))])


def test_match_pattern_function(empty_env):
    env = match_pattern(empty_env, PIdent("v"), VBool(True))
    assert env is not None and env.find("v") == VBool(True)


def test_select_rule_failure_names_only_the_kind(matcher, empty_env):
    nested = VList(())
    for _ in range(3000):
        nested = VList((nested,))
    with pytest.raises(MatchFailure) as excinfo:
        matcher.select_rule(empty_env, nested, [Rule(PConst(CInt(1)), Const(CInt(1)))])
    assert str(excinfo.value) == "no rule matches list value"


@pytest.mark.parametrize(
    "value, kind",
    [
        (VInt(1), "int"),
        (VFloat(1.0), "float"),
        (VChar("a"), "char"),
        (VString("a"), "string"),
        (VUnit(), "unit"),
        (VTuple((VInt(1), VInt(2))), "tuple"),
        (VOption(), "option"),
    ],
)
def test_kind_of(value, kind):
    assert kind_of(value) == kind


def test_bound_names_in_order():
    pattern = PTuple(
        [
            PIdent("a"),
            PList([PTyped(PIdent("b"), TypeName("int")), PWild()]),
            POption(PIdent("c")),
        ]
    )
    assert bound_names(pattern) == ["a", "b", "c"]


def test_bound_names_keeps_repeats():
    assert bound_names(PTuple([PIdent("x"), PIdent("x")])) == ["x", "x"]


def test_bound_names_of_or_pattern_uses_left_side():
    pattern = POr(PTuple([PIdent("x"), PConst(CInt(0))]), PTuple([PConst(CInt(1)), PIdent("x")]))
    assert bound_names(pattern) == ["x"]


@pytest.mark.parametrize("pattern", [PWild(), PConst(CInt(1)), POption()])
def test_bound_names_empty(pattern):
    assert bound_names(pattern) == []
