"""Tree-walking evaluator for a small ML-style expression language."""

from loguru import logger

from mlinterp.core.errors import EvalError
from mlinterp.eval import Environment, Evaluator, Err, Ok, RaiseEffect, ResultEffect, evaluate, interpret

# Silent until a host calls logging_utils.configure_logging().
logger.disable("mlinterp")

__all__ = [
    "Environment",
    "EvalError",
    "Evaluator",
    "Err",
    "Ok",
    "RaiseEffect",
    "ResultEffect",
    "evaluate",
    "interpret",
]
