"""Interpreter and operational semantics."""

from mlinterp.eval.builtins import BUILTIN_OPERATORS, apply_operator, is_builtin_op
from mlinterp.eval.effects import Err, ErrorEffect, Ok, RaiseEffect, Result, ResultEffect
from mlinterp.eval.environment import Environment
from mlinterp.eval.machine import Evaluator, evaluate, interpret
from mlinterp.eval.pattern import PatternMatcher, match_pattern
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
)

__all__ = [
    "BUILTIN_OPERATORS",
    "apply_operator",
    "is_builtin_op",
    "Err",
    "ErrorEffect",
    "Ok",
    "RaiseEffect",
    "Result",
    "ResultEffect",
    "Environment",
    "Evaluator",
    "evaluate",
    "interpret",
    "PatternMatcher",
    "match_pattern",
    "VBool",
    "VChar",
    "VFloat",
    "VFun",
    "VFunction",
    "VInt",
    "VList",
    "VOption",
    "VString",
    "VTuple",
    "VUnit",
    "Value",
]
