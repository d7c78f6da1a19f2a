"""Interpreter and operational semantics."""

from stlc.eval.machine import Evaluator
from stlc.eval.pattern import MatchResult, PatternMatcher

__all__ = [
    "Evaluator",
    "MatchResult",
    "PatternMatcher",
]
