"""Error types for the type checker."""

from stlc.core.names import FreeVar
from stlc.core.types import Type


class TypeCheckError(Exception):
    """Base class for type errors."""

    def __init__(self, message: str):
        super().__init__(message)


class UnboundVariable(TypeCheckError):
    """Variable not found in typing context."""

    def __init__(self, var: FreeVar):
        self.var = var
        super().__init__(f"Unbound variable: {var}")


class TypeMismatch(TypeCheckError):
    """Expected type does not match the type found."""

    def __init__(self, expected: Type, found: Type, message: str | None = None):
        self.expected = expected
        self.found = found
        super().__init__(message or f"Type mismatch: found {found!r} but expected {expected!r}")


class NotAFunction(TypeCheckError):
    """Applied term does not have an arrow type."""

    def __init__(self, term: object, found: Type):
        self.term = term
        self.found = found
        super().__init__(f"Not a function: {term!r} has type {found!r}")


class NotARecord(TypeCheckError):
    """Projected term does not have a record type."""

    def __init__(self, term: object, found: Type):
        self.term = term
        self.found = found
        super().__init__(f"Record expected: {term!r} has type {found!r}")


class LabelNotFound(TypeCheckError):
    """Record or variant type has no field with the given label."""

    def __init__(self, label: str, ty: Type):
        self.label = label
        self.type = ty
        super().__init__(f"Label `{label}` not found in {ty!r}")


class AmbiguousExpression(TypeCheckError):
    """Term or pattern whose type cannot be synthesized without annotation."""

    def __init__(self, node: object):
        self.node = node
        super().__init__(f"Type annotation needed: {node!r}")


class PatternLabelMismatch(TypeMismatch):
    """Record pattern label differs from the record type at the same position.

    Raised in place of a plain ``TypeMismatch`` once the pattern's own type
    has been synthesized; ``expected`` and ``found`` still hold the two types.
    """

    def __init__(self, expected: Type, found: Type, expected_label: str, found_label: str):
        super().__init__(
            expected,
            found,
            f"Pattern label mismatch: found `{found_label}` but expected `{expected_label}`",
        )
        self.expected_label = expected_label
        self.found_label = found_label


class PatternArityMismatch(TypeMismatch):
    """Record pattern has a different number of fields than the record type."""

    def __init__(self, expected: Type, found: Type, expected_arity: int, found_arity: int):
        super().__init__(
            expected, found, f"Pattern has {found_arity} fields but the type has {expected_arity}"
        )
        self.expected_arity = expected_arity
        self.found_arity = found_arity


class WellScopednessError(RuntimeError):
    """A bound variable escaped its scope.

    Raised when the checker meets a ``BoundVar`` where only free variables
    can occur. This signals malformed input from the front end, not a type
    error in the program.
    """
