"""Pattern matching."""

from typing import Optional, Sequence

from mlinterp.core.ast import (
    CBool,
    CChar,
    CFloat,
    CInt,
    Constant,
    CString,
    PConst,
    PIdent,
    PList,
    POption,
    POr,
    PTuple,
    PTyped,
    PWild,
    Pattern,
    Rule,
)
from mlinterp.core.errors import MatchFailure
from mlinterp.eval.environment import Environment
from mlinterp.eval.value import VBool, VChar, VFloat, VInt, VList, VOption, VString, VTuple, Value, kind_of


def _constant_matches(constant: Constant, value: Value) -> bool:
    # Kinds are compared by class first so that true never matches 1.
    match constant, value:
        case CInt(c), VInt(v):
            return c == v
        case CFloat(c), VFloat(v):
            return c == v
        case CBool(c), VBool(v):
            return c == v
        case CChar(c), VChar(v):
            return c == v
        case CString(c), VString(v):
            return c == v
        case _:
            return False


class PatternMatcher:
    """Structural pattern matcher.

    Matching is total: a non-match is ``None``, never an error. Bindings are
    added on top of the environment passed in.
    """

    def match(self, env: Environment, pattern: Pattern, value: Value) -> Optional[Environment]:
        """Match a value against a pattern.

        Returns the environment extended with the pattern's bindings, or None.
        """
        match pattern, value:
            case PWild(), _:
                return env
            case PConst(constant), _:
                return env if _constant_matches(constant, value) else None
            case PIdent(name), _:
                return env.extend(name, value)
            case PTyped(inner, _), _:
                return self.match(env, inner, value)
            case POption(None), VOption(None):
                return env
            case POption(inner), VOption(payload) if inner is not None and payload is not None:
                return self.match(env, inner, payload)
            case POr(left, right), _:
                matched = self.match(env, left, value)
                if matched is not None:
                    return matched
                return self.match(env, right, value)
            case PList(patterns), VList(values):
                return self.match_all(env, patterns, values)
            case PTuple(patterns), VTuple(values):
                return self.match_all(env, patterns, values)
            case _:
                return None

    def match_all(
        self, env: Environment, patterns: Sequence[Pattern], values: Sequence[Value]
    ) -> Optional[Environment]:
        """Match element-wise, left to right, threading the environment.

        Lengths must agree. The result is all-or-nothing.
        """
        if len(patterns) != len(values):
            return None
        acc: Optional[Environment] = env
        for pattern, value in zip(patterns, values):
            acc = self.match(acc, pattern, value)
            if acc is None:
                return None
        return acc

    def select_rule(
        self, env: Environment, value: Value, rules: Sequence[Rule]
    ) -> tuple[Rule, Environment]:
        """Select the first rule whose pattern matches and its environment.

        Raises MatchFailure if no rule matches.
        """
        for rule in rules:
            matched = self.match(env, rule.pattern, value)
            if matched is not None:
                return rule, matched
        raise MatchFailure(f"no rule matches {kind_of(value)} value")


_default_matcher = PatternMatcher()


def match_pattern(env: Environment, pattern: Pattern, value: Value) -> Optional[Environment]:
    """Match with the module-level matcher."""
    return _default_matcher.match(env, pattern, value)


def bound_names(pattern: Pattern) -> list[str]:
    """Names a pattern binds, left to right, repeats included.

    Both sides of an or-pattern bind the same names; the left side is used.
    """
    match pattern:
        case PIdent(name):
            return [name]
        case PTyped(inner, _) | POption(inner) if inner is not None:
            return bound_names(inner)
        case POr(left, _):
            return bound_names(left)
        case PList(items) | PTuple(items):
            return [name for item in items for name in bound_names(item)]
        case _:
            return []
