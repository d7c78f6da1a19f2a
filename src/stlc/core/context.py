"""Typing contexts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from stlc.core.names import FreeVar
from stlc.core.types import Type


@dataclass(frozen=True)
class Context:
    """Typing context Γ mapping free variables to their types.

    Contexts are persistent: ``extend`` and ``union`` return new contexts and
    leave the receiver untouched, so sibling branches of a check never see
    each other's bindings.
    """

    bindings: dict[FreeVar, Type] = field(default_factory=dict)

    @staticmethod
    def empty() -> Context:
        """Create an empty context."""
        return Context({})

    @staticmethod
    def singleton(var: FreeVar, ty: Type) -> Context:
        """Create a context with a single binding."""
        return Context({var: ty})

    def lookup_type(self, var: FreeVar) -> Type:
        """Look up the type of a free variable.

        Raises:
            KeyError: If the variable is not bound in this context
        """
        return self.bindings[var]

    def extend(self, var: FreeVar, ty: Type) -> Context:
        """Return a new context with ``var : ty`` added."""
        new_bindings = dict(self.bindings)
        new_bindings[var] = ty
        return Context(new_bindings)

    def union(self, other: Context) -> Context:
        """Return a new context with the bindings of both.

        Bindings in ``other`` take precedence on overlap.
        """
        if not other.bindings:
            return self
        if not self.bindings:
            return other
        new_bindings = dict(self.bindings)
        new_bindings.update(other.bindings)
        return Context(new_bindings)

    def __add__(self, other: Context) -> Context:
        return self.union(other)

    def __contains__(self, var: object) -> bool:
        return var in self.bindings

    def __iter__(self) -> Iterator[FreeVar]:
        return iter(self.bindings)

    def __len__(self) -> int:
        """Return the number of variables in context."""
        return len(self.bindings)

    def __str__(self) -> str:
        terms = ", ".join(f"{var}:{ty}" for var, ty in self.bindings.items())
        return f"Context([{terms}])"
