"""Type representations for the calculus.

Types carry no binders, so structural equality is alpha-equivalence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union


class Type:
    """Base class for types."""

    pass


def _freeze_fields(fields: Iterable[tuple[str, Type]]) -> tuple[tuple[str, Type], ...]:
    return tuple((label, ty) for label, ty in fields)


@dataclass(frozen=True)
class PrimitiveType(Type):
    """Built-in scalar type: Int, Float or String."""

    name: str

    def __str__(self) -> str:
        return self.name


INT = PrimitiveType("Int")
FLOAT = PrimitiveType("Float")
STRING = PrimitiveType("String")


@dataclass(frozen=True)
class TypeArrow(Type):
    """Function type: σ → τ."""

    arg: Type
    ret: Type


@dataclass(frozen=True)
class TypeRecord(Type):
    """Record type: {l₁ : τ₁, ..., lₙ : τₙ}.

    Field order is significant. Labels are not checked for uniqueness.
    """

    fields: tuple[tuple[str, Type], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _freeze_fields(self.fields))

    def lookup(self, label: str) -> Type | None:
        """Return the type of the first field named ``label``."""
        for field_label, ty in self.fields:
            if field_label == label:
                return ty
        return None


@dataclass(frozen=True)
class TypeVariant(Type):
    """Variant type: <l₁ : τ₁ | ... | lₙ : τₙ>."""

    alternatives: tuple[tuple[str, Type], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "alternatives", _freeze_fields(self.alternatives))

    def lookup(self, label: str) -> Type | None:
        """Return the payload type of the first alternative named ``label``."""
        for alt_label, ty in self.alternatives:
            if alt_label == label:
                return ty
        return None


# Export the type union for type checking
TypeRepr = Union[PrimitiveType, TypeArrow, TypeRecord, TypeVariant]
