"""Built-in binary operators.

The table is closed: an operator symbol paired with operand kinds it does not
list is an unsupported operation. Integers and floats are never mixed.
"""

import operator
from typing import Callable

from mlinterp.core.errors import DivisionByZero, UnsupportedOperation
from mlinterp.eval.value import VBool, VFloat, VInt, VList, Value, kind_of


def _int_divide(x: int, y: int) -> int:
    """Integer division truncating toward zero."""
    if y == 0:
        raise DivisionByZero("integer division by zero")
    quotient = abs(x) // abs(y)
    return quotient if (x < 0) == (y < 0) else -quotient


def _float_divide(x: float, y: float) -> float:
    if y == 0.0:
        raise DivisionByZero("float division by zero")
    return x / y


_INT_OPS: dict[str, Callable[[int, int], Value]] = {
    "+": lambda x, y: VInt(x + y),
    "-": lambda x, y: VInt(x - y),
    "*": lambda x, y: VInt(x * y),
    "/": lambda x, y: VInt(_int_divide(x, y)),
}

_FLOAT_OPS: dict[str, Callable[[float, float], Value]] = {
    "+.": lambda x, y: VFloat(x + y),
    "-.": lambda x, y: VFloat(x - y),
    "*.": lambda x, y: VFloat(x * y),
    "/.": lambda x, y: VFloat(_float_divide(x, y)),
}

_COMPARISONS: dict[str, Callable[[object, object], bool]] = {
    "<=": operator.le,
    "<": operator.lt,
    ">=": operator.ge,
    ">": operator.gt,
    "=": operator.eq,
    "<>": operator.ne,
}

_BOOL_OPS: dict[str, Callable[[bool, bool], bool]] = {
    "&&": lambda x, y: x and y,
    "||": lambda x, y: x or y,
}

CONS = "::"

BUILTIN_OPERATORS = frozenset(
    [*_INT_OPS, *_FLOAT_OPS, *_COMPARISONS, *_BOOL_OPS, CONS]
)


def is_builtin_op(name: str) -> bool:
    """Return True if name is a built-in operator symbol."""
    return name in BUILTIN_OPERATORS


def apply_operator(op: str, left: Value, right: Value) -> Value:
    """Apply a built-in operator to two already evaluated operands."""
    match left, right:
        case VInt(x), VInt(y) if op in _INT_OPS:
            return _INT_OPS[op](x, y)
        case VFloat(x), VFloat(y) if op in _FLOAT_OPS:
            return _FLOAT_OPS[op](x, y)
        case (VInt(x), VInt(y)) | (VFloat(x), VFloat(y)) if op in _COMPARISONS:
            return VBool(_COMPARISONS[op](x, y))
        case VBool(x), VBool(y) if op in _BOOL_OPS:
            return VBool(_BOOL_OPS[op](x, y))
        case _, VList(items) if op == CONS:
            return VList((left, *items))
    raise UnsupportedOperation(f"{op} is not defined for {kind_of(left)} and {kind_of(right)}")
