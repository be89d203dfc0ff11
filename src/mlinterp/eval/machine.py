"""Tree-walking evaluator for the ML core language."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from loguru import logger

from mlinterp.config import MAX_DEPTH_LIMIT, EvalSettings, load_settings
from mlinterp.core.ast import (
    Apply,
    Binding,
    CBool,
    CChar,
    CFloat,
    CInt,
    Const,
    Constant,
    CString,
    Declaration,
    Expr,
    ExprDecl,
    Function,
    Ident,
    IfThenElse,
    Lambda,
    Let,
    LetDecl,
    ListExpr,
    Match,
    OptionExpr,
    PIdent,
    PTyped,
    Pattern,
    Rule,
    TupleExpr,
    Typed,
)
from mlinterp.core.errors import EvalError, MatchFailure, NotImplementedForm, TypeMismatch
from mlinterp.eval.builtins import apply_operator, is_builtin_op
from mlinterp.eval.effects import ErrorEffect, RaiseEffect
from mlinterp.eval.environment import Environment
from mlinterp.eval.pattern import PatternMatcher, bound_names
from mlinterp.eval.value import (
    VBool,
    VChar,
    VFloat,
    VFun,
    VFunction,
    VInt,
    VList,
    VOption,
    VString,
    VTuple,
    VUnit,
    Value,
    kind_of,
)

# Upper bound on Python frames between two nested evaluate() calls.
_FRAMES_PER_LEVEL = 5
_STACK_MARGIN = 200
_RECURSION_CEILING = MAX_DEPTH_LIMIT * _FRAMES_PER_LEVEL + _STACK_MARGIN


class Evaluator:
    """Call-by-value evaluator.

    Sub-expressions are evaluated left to right. Failures are raised as
    ``EvalError`` and short-circuit the rest of the enclosing expression;
    ``run`` and ``interpret`` hand the outcome to the injected effect.

    Evaluation is plain recursion, so nesting depth costs call stack. Depth is
    capped by ``settings.max_depth``; exceeding it raises ``RecursionError``,
    which is fatal and never reported through the effect.
    """

    def __init__(
        self,
        effect: ErrorEffect | None = None,
        settings: EvalSettings | None = None,
    ) -> None:
        self.effect = effect if effect is not None else RaiseEffect()
        self.settings = settings if settings is not None else load_settings()
        self.pattern_matcher = PatternMatcher()
        self._depth = 0

    # Entry points

    def run(self, expr: Expr, env: Environment | None = None):
        """Evaluate an expression and report the outcome through the effect."""
        try:
            with self._stack_allowance():
                value = self.evaluate(expr, env)
        except EvalError as e:
            logger.warning("evaluator.run.failed kind={} error={}", e.kind, e)
            return self.effect.fail(e)
        return self.effect.succeed(value)

    def interpret(self, program: Sequence[Declaration], env: Environment | None = None):
        """Evaluate top-level declarations in order.

        Succeeds with the environment holding every top-level binding.
        """
        if env is None:
            env = Environment.empty()
        logger.info("evaluator.program.start declarations={}", len(program))
        try:
            with self._stack_allowance():
                for decl in program:
                    env = self.declare(decl, env)
        except EvalError as e:
            logger.warning("evaluator.program.failed kind={} error={}", e.kind, e)
            return self.effect.fail(e)
        logger.info("evaluator.program.done bindings={}", len(env.names()))
        return self.effect.succeed(env)

    def declare(self, decl: Declaration, env: Environment) -> Environment:
        """Evaluate one top-level declaration."""
        match decl:
            case LetDecl(recursive, bindings):
                return self.bind(env, recursive, bindings)
            case ExprDecl(expr):
                self.evaluate(expr, env)
                return env
            case _:
                raise NotImplementedForm(f"unknown declaration: {type(decl).__name__}")

    # Evaluation

    def evaluate(self, expr: Expr, env: Environment | None = None) -> Value:
        """Evaluate expression to a value, raising EvalError on failure."""
        if env is None:
            env = Environment.empty()
        if self._depth == 0:
            with self._stack_allowance():
                return self._descend(expr, env)
        return self._descend(expr, env)

    def _descend(self, expr: Expr, env: Environment) -> Value:
        self._depth += 1
        try:
            if self._depth > self.settings.max_depth:
                raise RecursionError(f"evaluation exceeded max_depth={self.settings.max_depth}")
            return self._evaluate(expr, env)
        finally:
            self._depth -= 1

    def _evaluate(self, expr: Expr, env: Environment) -> Value:
        match expr:
            case Const(constant):
                return self.eval_const(constant)

            case Ident(name):
                return env.find(name)

            case Typed(inner, _):
                # Annotation is erased
                return self.evaluate(inner, env)

            case ListExpr(items):
                return VList(self._evaluate_all(items, env))

            case TupleExpr(items):
                return VTuple(self._evaluate_all(items, env))

            case Lambda(pattern, body):
                return VFun(pattern, body, env)

            case IfThenElse(cond, then_branch, else_branch):
                match self.evaluate(cond, env):
                    case VBool(True):
                        return self.evaluate(then_branch, env)
                    case VBool(False):
                        if else_branch is None:
                            return VUnit()
                        return self.evaluate(else_branch, env)
                    case other:
                        raise TypeMismatch(f"condition evaluated to {kind_of(other)}, expected bool")

            case OptionExpr(None):
                return VOption()

            case OptionExpr(inner):
                return VOption(self.evaluate(inner, env))

            case Match(scrutinee, rules):
                value = self.evaluate(scrutinee, env)
                return self.dispatch(env, value, rules)

            case Function(rules):
                return VFunction(rules, env if self.settings.capture_function_env else None)

            case Apply(Apply(Ident(op), left), right) if is_builtin_op(op):
                left_val = self.evaluate(left, env)
                right_val = self.evaluate(right, env)
                return apply_operator(op, left_val, right_val)

            case Apply(func, arg):
                func_val = self.evaluate(func, env)
                arg_val = self.evaluate(arg, env)
                return self.apply(func_val, arg_val, env)

            case Let(recursive, bindings, body):
                return self.evaluate(body, self.bind(env, recursive, bindings))

            case _:
                raise NotImplementedForm(f"unknown expression: {type(expr).__name__}")

    def _evaluate_all(self, exprs: Sequence[Expr], env: Environment) -> list[Value]:
        values = []
        for expr in exprs:
            values.append(self.evaluate(expr, env))
        return values

    def eval_const(self, constant: Constant) -> Value:
        match constant:
            case CInt(value):
                return VInt(value)
            case CFloat(value):
                return VFloat(value)
            case CBool(value):
                return VBool(value)
            case CChar(value):
                return VChar(value)
            case CString(value):
                return VString(value)
            case _:
                raise TypeMismatch(f"unsupported constant: {constant}")

    def dispatch(self, env: Environment, value: Value, rules: Sequence[Rule]) -> Value:
        """Evaluate the body of the first rule whose pattern matches value."""
        rule, matched_env = self.pattern_matcher.select_rule(env, value, rules)
        if self.settings.trace:
            logger.debug("evaluator.dispatch.matched value={} pattern={}", kind_of(value), rule.pattern)
        return self.evaluate(rule.body, matched_env)

    def apply(self, func: Value, arg: Value, env: Environment) -> Value:
        """Apply function value to argument.

        ``env`` is the application site, used only by closures that did not
        capture their own environment.
        """
        match func:
            case VFunction(rules, closure_env):
                return self.dispatch(closure_env if closure_env is not None else env, arg, rules)
            case VFun(pattern, body, closure_env, _):
                matched_env = self.pattern_matcher.match(closure_env, pattern, arg)
                if matched_env is None:
                    raise MatchFailure(f"{kind_of(arg)} argument does not match parameter {pattern}")
                if self.settings.trace:
                    logger.debug("evaluator.apply.closure pattern={} arg={}", pattern, kind_of(arg))
                return self.evaluate(body, matched_env)
            case _:
                raise TypeMismatch(f"cannot apply non-function: {kind_of(func)}")

    # Bindings

    def bind(self, env: Environment, recursive: bool, bindings: Sequence[Binding]) -> Environment:
        """Extend env with the bindings of a let."""
        _reject_duplicate_names(bindings)
        if recursive:
            return env.extend_recursive(
                {_binding_name(b.pattern): _function_literal(b) for b in bindings}
            )
        values = self._evaluate_all([b.expr for b in bindings], env)
        new_env = env
        for binding, value in zip(bindings, values):
            matched = self.pattern_matcher.match(new_env, binding.pattern, value)
            if matched is None:
                raise MatchFailure(f"{kind_of(value)} does not match let pattern {binding.pattern}")
            new_env = matched
        return new_env

    @contextmanager
    def _stack_allowance(self) -> Iterator[None]:
        needed = min(self.settings.max_depth * _FRAMES_PER_LEVEL + _STACK_MARGIN, _RECURSION_CEILING)
        previous = sys.getrecursionlimit()
        if needed <= previous:
            yield
            return
        sys.setrecursionlimit(needed)
        try:
            yield
        finally:
            sys.setrecursionlimit(previous)


def _reject_duplicate_names(bindings: Sequence[Binding]) -> None:
    seen: set[str] = set()
    for binding in bindings:
        for name in bound_names(binding.pattern):
            if name in seen:
                raise NotImplementedForm(f"{name} is bound several times in this let")
            seen.add(name)


def _binding_name(pattern: Pattern) -> str:
    match pattern:
        case PIdent(name):
            return name
        case PTyped(inner, _):
            return _binding_name(inner)
    raise NotImplementedForm(f"let rec cannot bind pattern {pattern}")


def _function_literal(binding: Binding) -> Expr:
    expr = binding.expr
    while isinstance(expr, Typed):
        expr = expr.expr
    if not isinstance(expr, (Lambda, Function)):
        raise NotImplementedForm(f"let rec right-hand side must be a function: {binding.expr}")
    return binding.expr


def evaluate(
    expr: Expr,
    env: Environment | None = None,
    *,
    effect: ErrorEffect | None = None,
    settings: EvalSettings | None = None,
):
    """Evaluate one expression with a fresh evaluator."""
    return Evaluator(effect, settings).run(expr, env)


def interpret(
    program: Sequence[Declaration],
    env: Optional[Environment] = None,
    *,
    effect: ErrorEffect | None = None,
    settings: EvalSettings | None = None,
):
    """Evaluate a program with a fresh evaluator."""
    return Evaluator(effect, settings).interpret(program, env)
