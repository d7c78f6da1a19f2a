"""Test configuration and shared fixtures."""

import pytest

from stlc.config import CalculusSettings
from stlc.core.checker import TypeChecker
from stlc.eval.machine import Evaluator


@pytest.fixture
def settings() -> CalculusSettings:
    """Settings isolated from the environment and any .env file."""
    return CalculusSettings(_env_file=None, trace=False)


@pytest.fixture
def checker(settings: CalculusSettings) -> TypeChecker:
    return TypeChecker(settings)


@pytest.fixture
def evaluator(settings: CalculusSettings) -> Evaluator:
    return Evaluator(settings)
