"""Core language: names, AST, types, substitution and type checker."""

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
    Scope,
    StringLit,
    Tag,
    Term,
    Var,
)
from stlc.core.binding import alpha_eq, bind, binders, unbind
from stlc.core.checker import TypeChecker
from stlc.core.context import Context
from stlc.core.errors import (
    AmbiguousExpression,
    LabelNotFound,
    NotAFunction,
    NotARecord,
    PatternArityMismatch,
    PatternLabelMismatch,
    TypeCheckError,
    TypeMismatch,
    UnboundVariable,
    WellScopednessError,
)
from stlc.core.names import Binder, BoundVar, FreeVar
from stlc.core.subst import substitute
from stlc.core.types import (
    FLOAT,
    INT,
    STRING,
    PrimitiveType,
    Type,
    TypeArrow,
    TypeRecord,
    TypeVariant,
)

__all__ = [
    # Names
    "FreeVar",
    "BoundVar",
    "Binder",
    # AST
    "IntLit",
    "FloatLit",
    "StringLit",
    "LiteralValue",
    "Pattern",
    "PAnn",
    "PLit",
    "PBinder",
    "PRecord",
    "PTag",
    "Term",
    "Scope",
    "Ann",
    "Lit",
    "Var",
    "Lam",
    "App",
    "Record",
    "Proj",
    "Tag",
    "Case",
    # Types
    "Type",
    "PrimitiveType",
    "TypeArrow",
    "TypeRecord",
    "TypeVariant",
    "INT",
    "FLOAT",
    "STRING",
    # Binding
    "bind",
    "unbind",
    "binders",
    "alpha_eq",
    # Substitution
    "substitute",
    # Context
    "Context",
    # Errors
    "TypeCheckError",
    "UnboundVariable",
    "TypeMismatch",
    "NotAFunction",
    "NotARecord",
    "LabelNotFound",
    "AmbiguousExpression",
    "PatternLabelMismatch",
    "PatternArityMismatch",
    "WellScopednessError",
    # Type Checker
    "TypeChecker",
]
