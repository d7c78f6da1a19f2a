"""Pattern matching against evaluated terms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from stlc.core.ast import (
    Lit,
    PAnn,
    PBinder,
    PLit,
    PRecord,
    PTag,
    Pattern,
    Record,
    Scope,
    Tag,
    Term,
)
from stlc.core.binding import unbind
from stlc.core.names import FreeVar

Bindings = list[tuple[FreeVar, Term]]


@dataclass(frozen=True)
class MatchResult:
    """Result of pattern matching."""

    success: bool
    bindings: Bindings = field(default_factory=list)  # In binder order


_NO_MATCH = MatchResult(False)


class PatternMatcher:
    """Pattern matching implementation."""

    def match(self, pattern: Pattern, value: Term) -> MatchResult:
        """Match a value against a pattern.

        The value is assumed to be already evaluated. Returns bindings for
        the pattern's binders, in the order the binders appear.
        """
        bindings: Bindings = []
        if self._match_into(pattern, value, bindings):
            return MatchResult(True, bindings)
        return _NO_MATCH

    def _match_into(self, pattern: Pattern, value: Term, bindings: Bindings) -> bool:
        match pattern, value:
            case PAnn(inner, _), _:
                # Annotations are erased at runtime
                return self._match_into(inner, value, bindings)
            case PLit(expected), Lit(actual):
                return expected == actual
            case PBinder(binder), _:
                bindings.append((binder.var, value))
                return True
            case PRecord(pattern_fields), Record(value_fields):
                if len(pattern_fields) != len(value_fields):
                    return False
                for (label, field_pattern), (value_label, field_value) in zip(
                    pattern_fields, value_fields
                ):
                    if label != value_label:
                        return False
                    if not self._match_into(field_pattern, field_value, bindings):
                        return False
                return True
            case PTag(label, inner), Tag(value_label, payload):
                if label != value_label:
                    return False
                return self._match_into(inner, payload, bindings)
            case _:
                return False

    def select_clause(
        self, value: Term, clauses: Sequence[Scope]
    ) -> tuple[Pattern, Term, Bindings] | None:
        """Select the first clause whose pattern matches ``value``.

        Each clause is opened with fresh variables before matching. Returns
        the opened pattern, the opened body and the bindings, or None when no
        clause matches.
        """
        for clause in clauses:
            pattern, body = unbind(clause)
            result = self.match(pattern, value)
            if result.success:
                return pattern, body, result.bindings
        return None
