"""Core language AST: literals, patterns and terms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from stlc.core.names import Binder, BoundVar, FreeVar
from stlc.core.types import Type


# =============================================================================
# Literals
# =============================================================================


@dataclass(frozen=True)
class IntLit:
    """Integer literal: 42"""

    value: int


@dataclass(frozen=True)
class FloatLit:
    """Floating point literal: 4.2"""

    value: float


@dataclass(frozen=True)
class StringLit:
    """String literal: "hello" """

    value: str


LiteralValue = IntLit | FloatLit | StringLit


# =============================================================================
# Patterns
# =============================================================================


class Pattern:
    """Base class for patterns."""

    pass


@dataclass(frozen=True)
class PAnn(Pattern):
    """Pattern annotated with a type: (p : τ)."""

    pattern: Pattern
    type: Type


@dataclass(frozen=True)
class PLit(Pattern):
    """Literal pattern, matches by exact equality."""

    literal: LiteralValue


@dataclass(frozen=True)
class PBinder(Pattern):
    """Pattern that binds the whole matched value to a variable."""

    binder: Binder

    @property
    def var(self) -> FreeVar:
        return self.binder.var


@dataclass(frozen=True)
class PRecord(Pattern):
    """Record pattern: {l₁ = p₁, ..., lₙ = pₙ}. Field order is significant."""

    fields: tuple[tuple[str, Pattern], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _freeze(self.fields))


@dataclass(frozen=True)
class PTag(Pattern):
    """Variant pattern: <l = p>."""

    label: str
    pattern: Pattern


# =============================================================================
# Terms
# =============================================================================


class Term:
    """Base class for terms."""

    pass


@dataclass(frozen=True)
class Scope:
    """A pattern together with a body in which its binders are closed.

    References to the pattern's binders inside ``body`` are ``BoundVar``s.
    Build scopes with ``stlc.core.binding.bind`` and open them with
    ``stlc.core.binding.unbind``; the fields are exposed for traversals that
    do not cross the binding boundary.
    """

    pattern: Pattern
    body: Term


@dataclass(frozen=True)
class Ann(Term):
    """Annotated term: (e : τ)."""

    term: Term
    type: Type


@dataclass(frozen=True)
class Lit(Term):
    """Literal term."""

    literal: LiteralValue


@dataclass(frozen=True)
class Var(Term):
    """Variable reference, free (by token) or bound (by position)."""

    name: FreeVar | BoundVar


@dataclass(frozen=True)
class Lam(Term):
    """Lambda abstraction: λp.e"""

    scope: Scope


@dataclass(frozen=True)
class App(Term):
    """Function application: f arg."""

    func: Term
    arg: Term


@dataclass(frozen=True)
class Record(Term):
    """Record value: {l₁ = e₁, ..., lₙ = eₙ}."""

    fields: tuple[tuple[str, Term], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _freeze(self.fields))

    def lookup(self, label: str) -> Term | None:
        """Return the first field named ``label``."""
        for field_label, term in self.fields:
            if field_label == label:
                return term
        return None


@dataclass(frozen=True)
class Proj(Term):
    """Field projection: e.l"""

    term: Term
    label: str


@dataclass(frozen=True)
class Tag(Term):
    """Variant introduction: <l = e>."""

    label: str
    term: Term


@dataclass(frozen=True)
class Case(Term):
    """Pattern matching: case scrutinee of clauses."""

    scrutinee: Term
    clauses: tuple[Scope, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "clauses", tuple(self.clauses))


def _freeze(fields: Iterable[tuple[str, object]]) -> tuple:
    return tuple((label, value) for label, value in fields)


# Export the unions for type checking
PatternRepr = Union[PAnn, PLit, PBinder, PRecord, PTag]
TermRepr = Union[Ann, Lit, Var, Lam, App, Record, Proj, Tag, Case]
