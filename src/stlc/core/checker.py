"""Bidirectional type checker for the calculus with records and variants."""

from __future__ import annotations

from loguru import logger

from stlc.config import CalculusSettings, load_settings
from stlc.core.ast import (
    Ann,
    App,
    Case,
    FloatLit,
    IntLit,
    Lam,
    Lit,
    LiteralValue,
    PAnn,
    PBinder,
    PLit,
    PRecord,
    PTag,
    Pattern,
    Proj,
    Record,
    StringLit,
    Tag,
    Term,
    Var,
)
from stlc.core.binding import alpha_eq, unbind
from stlc.core.context import Context
from stlc.core.errors import (
    AmbiguousExpression,
    LabelNotFound,
    NotAFunction,
    NotARecord,
    PatternArityMismatch,
    PatternLabelMismatch,
    TypeMismatch,
    UnboundVariable,
    WellScopednessError,
)
from stlc.core.names import BoundVar, FreeVar
from stlc.core.types import FLOAT, INT, STRING, Type, TypeArrow, TypeRecord, TypeVariant


def literal_type(literal: LiteralValue) -> Type:
    """Return the built-in type of a literal."""
    match literal:
        case IntLit(_):
            return INT
        case FloatLit(_):
            return FLOAT
        case StringLit(_):
            return STRING
        case _:
            raise TypeError(f"Unknown literal: {literal!r}")


class TypeChecker:
    """Bidirectional type checker.

    The context is threaded by value: every rule that introduces bindings
    extends its own copy, so nothing leaks between sibling subterms.
    """

    def __init__(self, settings: CalculusSettings | None = None):
        self.settings = settings if settings is not None else load_settings()

    def infer(self, ctx: Context, term: Term) -> Type:
        """Synthesize type from term (bottom-up, ⇒ mode).

        Args:
            ctx: Typing context
            term: Term to infer type for

        Returns:
            The inferred type

        Raises:
            UnboundVariable: If a free variable is not in context
            TypeMismatch: If an argument or annotation does not fit
            NotAFunction: If a non-function is applied
            NotARecord: If a non-record is projected
            LabelNotFound: If a projected label is missing
            AmbiguousExpression: For tags and case expressions
            WellScopednessError: If a bound variable is reached
        """
        if self.settings.trace:
            logger.trace("check.infer term={}", term)

        match term:
            case Ann(inner, ty):
                self.check(ctx, inner, ty)
                return ty

            case Lit(literal):
                return literal_type(literal)

            case Var(FreeVar() as var):
                try:
                    return ctx.lookup_type(var)
                except KeyError as e:
                    raise UnboundVariable(var) from e

            case Var(BoundVar() as var):
                raise WellScopednessError(f"Encountered bound variable {var} during inference")

            case Lam(scope):
                # Parameter type comes from the pattern, which must be annotated
                pattern, body = unbind(scope)
                param_type, bindings = self.infer_pattern(ctx, pattern)
                body_type = self.infer(ctx + bindings, body)
                return TypeArrow(param_type, body_type)

            case App(func, arg):
                func_type = self.infer(ctx, func)
                match func_type:
                    case TypeArrow(param_type, ret_type):
                        arg_type = self.infer(ctx, arg)
                        self._require_equal(param_type, arg_type)
                        return ret_type
                    case _:
                        raise NotAFunction(func, func_type)

            case Record(fields):
                return TypeRecord([(label, self.infer(ctx, e)) for label, e in fields])

            case Proj(inner, label):
                inner_type = self.infer(ctx, inner)
                match inner_type:
                    case TypeRecord():
                        field_type = inner_type.lookup(label)
                        if field_type is None:
                            raise LabelNotFound(label, inner_type)
                        return field_type
                    case _:
                        raise NotARecord(inner, inner_type)

            case Tag(_, _) | Case(_, _):
                raise AmbiguousExpression(term)

            case _:
                raise TypeError(f"Unknown term: {term!r}")

    def check(self, ctx: Context, term: Term, expected: Type) -> None:
        """Check term against expected type (top-down, ⇐ mode).

        Args:
            ctx: Typing context
            term: Term to check
            expected: Expected type

        Raises:
            TypeMismatch: If term doesn't have the expected type
            LabelNotFound: If a tag is not an alternative of the variant
        """
        if self.settings.trace:
            logger.trace("check.check term={} expected={}", term, expected)

        match term, expected:
            case Lam(scope), TypeArrow(param_type, ret_type):
                pattern, body = unbind(scope)
                bindings = self.check_pattern(ctx, pattern, param_type)
                self.check(ctx + bindings, body, ret_type)

            case Tag(label, inner), TypeVariant():
                alt_type = expected.lookup(label)
                if alt_type is None:
                    raise LabelNotFound(label, expected)
                self.check(ctx, inner, alt_type)

            case Case(scrutinee, clauses), _:
                # Every clause is checked, each in its own extension of ctx
                scrutinee_type = self.infer(ctx, scrutinee)
                for clause in clauses:
                    pattern, body = unbind(clause)
                    bindings = self.check_pattern(ctx, pattern, scrutinee_type)
                    self.check(ctx + bindings, body, expected)

            case _:
                # Fall back to inference and comparison
                actual_type = self.infer(ctx, term)
                self._require_equal(expected, actual_type)

    def check_pattern(self, ctx: Context, pattern: Pattern, expected: Type) -> Context:
        """Check a pattern against a type.

        Returns the telescope of bindings introduced by the pattern.
        """
        match pattern, expected:
            case PBinder(binder), _:
                return Context.singleton(binder.var, expected)

            case PTag(label, inner), TypeVariant():
                alt_type = expected.lookup(label)
                if alt_type is None:
                    raise LabelNotFound(label, expected)
                return self.check_pattern(ctx, inner, alt_type)

            case _:
                inferred_type, telescope = self.infer_pattern(ctx, pattern)
                if isinstance(pattern, PRecord):
                    self._require_same_shape(expected, inferred_type)
                self._require_equal(expected, inferred_type)
                return telescope

    def infer_pattern(self, ctx: Context, pattern: Pattern) -> tuple[Type, Context]:
        """Synthesize the type of a pattern.

        Returns the type together with the telescope of bindings the pattern
        introduces.
        """
        match pattern:
            case PAnn(inner, ty):
                telescope = self.check_pattern(ctx, inner, ty)
                return ty, telescope

            case PLit(literal):
                return literal_type(literal), Context.empty()

            case PRecord(fields):
                telescope = Context.empty()
                field_types = []
                for label, field_pattern in fields:
                    field_type, field_telescope = self.infer_pattern(ctx, field_pattern)
                    telescope = telescope + field_telescope
                    field_types.append((label, field_type))
                return TypeRecord(field_types), telescope

            case PBinder(_) | PTag(_, _):
                raise AmbiguousExpression(pattern)

            case _:
                raise TypeError(f"Unknown pattern: {pattern!r}")

    def _require_equal(self, expected: Type, found: Type) -> None:
        if not alpha_eq(found, expected):
            logger.debug("check.mismatch expected={} found={}", expected, found)
            raise TypeMismatch(expected, found)

    def _require_same_shape(self, expected: Type, found: Type) -> None:
        # Name the offending field when a record pattern meets a record type
        match expected, found:
            case TypeRecord(expected_fields), TypeRecord(found_fields):
                if len(expected_fields) != len(found_fields):
                    logger.debug("check.mismatch expected={} found={}", expected, found)
                    raise PatternArityMismatch(
                        expected, found, len(expected_fields), len(found_fields)
                    )
                for (expected_label, _), (found_label, _) in zip(expected_fields, found_fields):
                    if expected_label != found_label:
                        logger.debug("check.mismatch expected={} found={}", expected, found)
                        raise PatternLabelMismatch(expected, found, expected_label, found_label)
