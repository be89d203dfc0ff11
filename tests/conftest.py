"""Test configuration and shared fixtures."""

import pytest

from mlinterp.config import EvalSettings
from mlinterp.eval.environment import Environment
from mlinterp.eval.machine import Evaluator


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> EvalSettings:
    """Default settings, unaffected by MLINTERP_* variables or a local .env."""
    for name in ("MLINTERP_MAX_DEPTH", "MLINTERP_TRACE", "MLINTERP_CAPTURE_FUNCTION_ENV"):
        monkeypatch.delenv(name, raising=False)
    return EvalSettings(_env_file=None)


@pytest.fixture
def evalr(settings: EvalSettings) -> Evaluator:
    return Evaluator(settings=settings)


@pytest.fixture
def empty_env() -> Environment:
    return Environment.empty()
