"""Simply typed lambda calculus with records, variants and pattern matching."""

from stlc.config import CalculusSettings, load_settings
from stlc.core import Context, TypeChecker, alpha_eq, bind, substitute, unbind
from stlc.eval import Evaluator, PatternMatcher
from stlc.logging_utils import configure_logging

__all__ = [
    "CalculusSettings",
    "Context",
    "Evaluator",
    "PatternMatcher",
    "TypeChecker",
    "alpha_eq",
    "bind",
    "configure_logging",
    "load_settings",
    "substitute",
    "unbind",
]
