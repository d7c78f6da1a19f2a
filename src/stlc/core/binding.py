"""Conversion between free and bound variables, and alpha-equivalence.

``bind`` closes a pattern/body pair into a ``Scope`` and ``unbind`` opens one
again with fresh variables. These are the only places where free references
become bound ones and back.

Every traversal in this module is a hand-written ``match`` over each pattern
and term node. Adding a node kind means extending ``_close``, ``_open``,
``_rename_binders``, ``binders`` and ``alpha_eq`` here, as well as
``substitute``, the pattern matcher, the evaluator and the checker.
"""

from __future__ import annotations

from typing import Iterator

from stlc.core.ast import (
    Ann,
    App,
    Case,
    Lam,
    Lit,
    PAnn,
    PBinder,
    PLit,
    PRecord,
    PTag,
    Pattern,
    Proj,
    Record,
    Scope,
    Tag,
    Term,
    Var,
)
from stlc.core.names import Binder, BoundVar, FreeVar
from stlc.core.types import Type


def binders(pattern: Pattern) -> list[FreeVar]:
    """Return the variables bound by a pattern, left to right."""
    match pattern:
        case PAnn(inner, _):
            return binders(inner)
        case PLit(_):
            return []
        case PBinder(Binder(var)):
            return [var]
        case PRecord(fields):
            result: list[FreeVar] = []
            for _, field_pattern in fields:
                result.extend(binders(field_pattern))
            return result
        case PTag(_, inner):
            return binders(inner)
        case _:
            raise TypeError(f"Unknown pattern: {pattern!r}")


def bind(pattern: Pattern, body: Term) -> Scope:
    """Close ``body`` over the binders of ``pattern``.

    Every free occurrence of a binder's variable becomes a ``BoundVar`` whose
    binder index is the position of the binder in the pattern.
    """
    index: dict[FreeVar, int] = {}
    for i, var in enumerate(binders(pattern)):
        index.setdefault(var, i)
    if not index:
        return Scope(pattern, body)
    return Scope(pattern, _close(body, 0, index))


def unbind(scope: Scope) -> tuple[Pattern, Term]:
    """Open a scope, replacing its bound variables with fresh free ones.

    Returns the pattern with new binder variables and the opened body.
    """
    fresh = [FreeVar.fresh(var.label) for var in binders(scope.pattern)]
    if not fresh:
        return scope.pattern, scope.body
    pattern = _rename_binders(scope.pattern, iter(fresh))
    return pattern, _open(scope.body, 0, fresh)


def _close(term: Term, depth: int, index: dict[FreeVar, int]) -> Term:
    match term:
        case Var(FreeVar() as var):
            if var in index:
                return Var(BoundVar(depth, index[var], var.label))
            return term
        case Var(BoundVar()) | Lit(_):
            return term
        case Ann(inner, ty):
            return Ann(_close(inner, depth, index), ty)
        case Lam(Scope(pattern, body)):
            return Lam(Scope(pattern, _close(body, depth + 1, index)))
        case App(func, arg):
            return App(_close(func, depth, index), _close(arg, depth, index))
        case Record(fields):
            return Record([(label, _close(e, depth, index)) for label, e in fields])
        case Proj(inner, label):
            return Proj(_close(inner, depth, index), label)
        case Tag(label, inner):
            return Tag(label, _close(inner, depth, index))
        case Case(scrutinee, clauses):
            return Case(
                _close(scrutinee, depth, index),
                [Scope(c.pattern, _close(c.body, depth + 1, index)) for c in clauses],
            )
        case _:
            raise TypeError(f"Unknown term: {term!r}")


def _open(term: Term, depth: int, fresh: list[FreeVar]) -> Term:
    match term:
        case Var(BoundVar(scope, binder)):
            if scope == depth:
                return Var(fresh[binder])
            return term
        case Var(FreeVar()) | Lit(_):
            return term
        case Ann(inner, ty):
            return Ann(_open(inner, depth, fresh), ty)
        case Lam(Scope(pattern, body)):
            return Lam(Scope(pattern, _open(body, depth + 1, fresh)))
        case App(func, arg):
            return App(_open(func, depth, fresh), _open(arg, depth, fresh))
        case Record(fields):
            return Record([(label, _open(e, depth, fresh)) for label, e in fields])
        case Proj(inner, label):
            return Proj(_open(inner, depth, fresh), label)
        case Tag(label, inner):
            return Tag(label, _open(inner, depth, fresh))
        case Case(scrutinee, clauses):
            return Case(
                _open(scrutinee, depth, fresh),
                [Scope(c.pattern, _open(c.body, depth + 1, fresh)) for c in clauses],
            )
        case _:
            raise TypeError(f"Unknown term: {term!r}")


def _rename_binders(pattern: Pattern, fresh: Iterator[FreeVar]) -> Pattern:
    """Rebuild a pattern, taking binder variables from ``fresh`` in order."""
    match pattern:
        case PAnn(inner, ty):
            return PAnn(_rename_binders(inner, fresh), ty)
        case PLit(_):
            return pattern
        case PBinder(_):
            return PBinder(Binder(next(fresh)))
        case PRecord(fields):
            return PRecord([(label, _rename_binders(p, fresh)) for label, p in fields])
        case PTag(label, inner):
            return PTag(label, _rename_binders(inner, fresh))
        case _:
            raise TypeError(f"Unknown pattern: {pattern!r}")


def alpha_eq(left: Term | Pattern | Scope | Type, right: Term | Pattern | Scope | Type) -> bool:
    """Structural equality up to the choice of binder variables.

    Bound references compare by coordinates and free references by token.
    Binder variables in patterns are ignored since nothing refers to them
    by token once a scope is closed.
    """
    match left, right:
        case Type(), Type():
            return left == right
        case Scope(p1, b1), Scope(p2, b2):
            return alpha_eq(p1, p2) and alpha_eq(b1, b2)

        # Patterns
        case PAnn(p1, t1), PAnn(p2, t2):
            return t1 == t2 and alpha_eq(p1, p2)
        case PLit(l1), PLit(l2):
            return l1 == l2
        case PBinder(_), PBinder(_):
            return True
        case PRecord(f1), PRecord(f2):
            return _fields_eq(f1, f2)
        case PTag(l1, p1), PTag(l2, p2):
            return l1 == l2 and alpha_eq(p1, p2)

        # Terms
        case Ann(e1, t1), Ann(e2, t2):
            return t1 == t2 and alpha_eq(e1, e2)
        case Lit(l1), Lit(l2):
            return l1 == l2
        case Var(n1), Var(n2):
            return type(n1) is type(n2) and n1 == n2
        case Lam(s1), Lam(s2):
            return alpha_eq(s1, s2)
        case App(f1, a1), App(f2, a2):
            return alpha_eq(f1, f2) and alpha_eq(a1, a2)
        case Record(f1), Record(f2):
            return _fields_eq(f1, f2)
        case Proj(e1, l1), Proj(e2, l2):
            return l1 == l2 and alpha_eq(e1, e2)
        case Tag(l1, e1), Tag(l2, e2):
            return l1 == l2 and alpha_eq(e1, e2)
        case Case(s1, c1), Case(s2, c2):
            return (
                len(c1) == len(c2)
                and alpha_eq(s1, s2)
                and all(alpha_eq(x, y) for x, y in zip(c1, c2))
            )
        case _:
            return False


def _fields_eq(left: tuple, right: tuple) -> bool:
    if len(left) != len(right):
        return False
    return all(l1 == l2 and alpha_eq(x, y) for (l1, x), (l2, y) in zip(left, right))
