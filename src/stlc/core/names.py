"""Variable names for the locally nameless representation.

Free variables are identified by a unique token allocated from a
process-wide counter. Bound variables are positional: ``scope`` counts the
scopes between the reference and its binder (0 = innermost) and ``binder`` is
the position of the binder in that scope's pattern, left to right.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field

_token_counter = itertools.count(0)
_token_lock = threading.Lock()
_tokens_issued = 0


def _next_token() -> int:
    global _tokens_issued
    with _token_lock:
        token = next(_token_counter)
        _tokens_issued = token + 1
        return token


@dataclass(frozen=True)
class FreeVar:
    """Free variable identified by token.

    The label is for diagnostics only and takes no part in equality. Tokens
    are allocated by ``fresh`` (or ``Binder.user``); the constructor only
    accepts a token that has already been handed out, so a later ``fresh``
    call can never collide with it.
    """

    id: int
    label: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.id < _tokens_issued:
            raise ValueError(f"Token {self.id} was not allocated by FreeVar.fresh")

    @staticmethod
    def fresh(label: str | None = None) -> FreeVar:
        """Allocate a variable with a token never handed out before."""
        return FreeVar(_next_token(), label)

    def __str__(self) -> str:
        if self.label is None:
            return f"_{self.id}"
        return f"{self.label}{self.id}"


@dataclass(frozen=True)
class BoundVar:
    """Bound variable: (scope offset, binder index)."""

    scope: int
    binder: int
    label: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.scope < 0 or self.binder < 0:
            raise ValueError("Bound variable coordinates must be non-negative")

    def __str__(self) -> str:
        return f"@{self.scope}.{self.binder}"


@dataclass(frozen=True)
class Binder:
    """Binding site of a free variable inside a pattern."""

    var: FreeVar

    @staticmethod
    def user(label: str) -> Binder:
        return Binder(FreeVar.fresh(label))


Name = FreeVar | BoundVar
