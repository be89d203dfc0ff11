"""Core language: syntax, type annotations and errors."""

from mlinterp.core.ast import (
    Apply,
    Binding,
    CBool,
    CChar,
    CFloat,
    CInt,
    CMeasure,
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
    PConst,
    PIdent,
    PList,
    POption,
    POr,
    PTuple,
    PTyped,
    PWild,
    Pattern,
    Program,
    Rule,
    TupleExpr,
    Typed,
)
from mlinterp.core.errors import (
    DivisionByZero,
    EvalError,
    MatchFailure,
    NotImplementedForm,
    TypeMismatch,
    UnboundIdentifier,
    UnsupportedOperation,
)
from mlinterp.core.types import Type, TypeArrow, TypeMeasure, TypeName, TypeTuple

__all__ = [
    # Constants
    "Constant",
    "CInt",
    "CFloat",
    "CBool",
    "CChar",
    "CString",
    "CMeasure",
    # Patterns
    "Pattern",
    "PWild",
    "PConst",
    "PIdent",
    "PTyped",
    "POption",
    "POr",
    "PList",
    "PTuple",
    # Expressions
    "Expr",
    "Rule",
    "Binding",
    "Const",
    "Ident",
    "Typed",
    "ListExpr",
    "TupleExpr",
    "Lambda",
    "IfThenElse",
    "OptionExpr",
    "Match",
    "Function",
    "Apply",
    "Let",
    # Programs
    "LetDecl",
    "ExprDecl",
    "Declaration",
    "Program",
    # Types
    "Type",
    "TypeName",
    "TypeArrow",
    "TypeTuple",
    "TypeMeasure",
    # Errors
    "EvalError",
    "UnboundIdentifier",
    "TypeMismatch",
    "DivisionByZero",
    "UnsupportedOperation",
    "MatchFailure",
    "NotImplementedForm",
]
