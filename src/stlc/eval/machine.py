"""Call-by-value evaluator for the core language."""

from __future__ import annotations

from loguru import logger

from stlc.config import CalculusSettings, load_settings
from stlc.core.ast import Ann, App, Case, Lam, Lit, Proj, Record, Tag, Term, Var
from stlc.core.binding import unbind
from stlc.core.subst import substitute
from stlc.eval.pattern import PatternMatcher


class Evaluator:
    """Call-by-value evaluator producing normal forms.

    Evaluation never fails on well-formed input. When a redex cannot be
    reduced (a non-function is applied, a pattern does not match, a label is
    missing) the redex itself is returned unchanged as a stuck term.
    """

    def __init__(self, settings: CalculusSettings | None = None) -> None:
        self.pattern_matcher = PatternMatcher()
        self.settings = settings if settings is not None else load_settings()

    def evaluate(self, term: Term) -> Term:
        """Evaluate term to a value.

        Types are erased (not evaluated).
        """
        if self.settings.trace:
            logger.trace("eval.step term={}", term)

        match term:
            case Ann(inner, _):
                return self.evaluate(inner)

            case Lit(_) | Var(_) | Lam(_):
                return term

            case App(func, arg):
                func_val = self.evaluate(func)
                match func_val:
                    case Lam(scope):
                        pattern, body = unbind(scope)
                        arg_val = self.evaluate(arg)
                        result = self.pattern_matcher.match(pattern, arg_val)
                        if not result.success:
                            return self._stuck("app_match", term)
                        return self.evaluate(substitute(body, result.bindings))
                    case _:
                        return self._stuck("app_non_function", term)

            case Record(fields):
                return Record([(label, self.evaluate(e)) for label, e in fields])

            case Proj(inner, label):
                inner_val = self.evaluate(inner)
                match inner_val:
                    case Record():
                        field_val = inner_val.lookup(label)
                        if field_val is not None:
                            return field_val
                return self._stuck("proj", term)

            case Tag(label, inner):
                return Tag(label, self.evaluate(inner))

            case Case(scrutinee, clauses):
                # Scrutinee is evaluated once and shared by every clause
                scrut_val = self.evaluate(scrutinee)
                selected = self.pattern_matcher.select_clause(scrut_val, clauses)
                if selected is None:
                    return self._stuck("case", term)
                _, body, bindings = selected
                return self.evaluate(substitute(body, bindings))

            case _:
                raise RuntimeError(f"Unknown term type: {type(term)}")

    def _stuck(self, kind: str, term: Term) -> Term:
        logger.debug("eval.stuck kind={} term={}", kind, term)
        return term
