"""Capture-avoiding substitution of free variables.

Bound variables are positional, so replacing a free variable underneath a
binder can never capture anything: a replacement term's own bound
references are relative to scopes inside it. No renaming is needed.
"""

from __future__ import annotations

from typing import Sequence

from stlc.core.ast import Ann, App, Case, Lam, Lit, Proj, Record, Scope, Tag, Term, Var
from stlc.core.names import FreeVar

Mappings = Sequence[tuple[FreeVar, Term]]


def substitute(term: Term, mappings: Mappings) -> Term:
    """Replace free variables in ``term`` according to ``mappings``.

    When a variable appears more than once in ``mappings`` the first entry
    wins. Patterns inside scopes are left as they are; only scope bodies are
    rewritten. Subterms that contain none of the mapped variables are
    returned as the same object.
    """
    if not mappings:
        return term
    return _subst(term, mappings)


def _lookup(var: FreeVar, mappings: Mappings) -> Term | None:
    for target, replacement in mappings:
        if target == var:
            return replacement
    return None


def _subst(term: Term, mappings: Mappings) -> Term:
    match term:
        case Var(FreeVar() as var):
            replacement = _lookup(var, mappings)
            return term if replacement is None else replacement
        case Var(_) | Lit(_):
            return term
        case Ann(inner, ty):
            new_inner = _subst(inner, mappings)
            return term if new_inner is inner else Ann(new_inner, ty)
        case Lam(scope):
            new_scope = _subst_scope(scope, mappings)
            return term if new_scope is scope else Lam(new_scope)
        case App(func, arg):
            new_func = _subst(func, mappings)
            new_arg = _subst(arg, mappings)
            if new_func is func and new_arg is arg:
                return term
            return App(new_func, new_arg)
        case Record(fields):
            new_fields = [(label, _subst(e, mappings)) for label, e in fields]
            if all(new is old for (_, new), (_, old) in zip(new_fields, fields)):
                return term
            return Record(new_fields)
        case Proj(inner, label):
            new_inner = _subst(inner, mappings)
            return term if new_inner is inner else Proj(new_inner, label)
        case Tag(label, inner):
            new_inner = _subst(inner, mappings)
            return term if new_inner is inner else Tag(label, new_inner)
        case Case(scrutinee, clauses):
            new_scrutinee = _subst(scrutinee, mappings)
            new_clauses = [_subst_scope(clause, mappings) for clause in clauses]
            if new_scrutinee is scrutinee and all(
                new is old for new, old in zip(new_clauses, clauses)
            ):
                return term
            return Case(new_scrutinee, new_clauses)
        case _:
            raise TypeError(f"Unknown term: {term!r}")


def _subst_scope(scope: Scope, mappings: Mappings) -> Scope:
    body = _subst(scope.body, mappings)
    return scope if body is scope.body else Scope(scope.pattern, body)
