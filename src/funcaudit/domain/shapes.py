"""Domain layer: closed set of function-like node shapes.

Syntax-independent description of how a function-like construct is
declared. The syntax layer produces one shape per node; the classifier
consumes shapes without touching the syntax tree.

FunctionShape = DeclaredFunction | MethodMember | BoundFunction | InlineFunction
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyKind(Enum):
    """How a method or property key is written.

    IDENTIFIER:      foo
    STRING:          'foo'
    COMPUTED_MEMBER: [Symbol.iterator], [a.b.c]
    UNRESOLVED:      [expr], #private, 42
    """

    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    COMPUTED_MEMBER = "COMPUTED_MEMBER"
    UNRESOLVED = "UNRESOLVED"


class Accessor(Enum):
    """Kind of class/object member function."""

    METHOD = "METHOD"
    GETTER = "GETTER"
    SETTER = "SETTER"
    CONSTRUCTOR = "CONSTRUCTOR"


class Binding(Enum):
    """Where a function expression or arrow function is bound.

    VARIABLE:          const f = () => {}
    PROPERTY:          { f: () => {} }, class A { f = () => {} }
    MEMBER_ASSIGNMENT: obj.f = function () {}
    """

    VARIABLE = "VARIABLE"
    PROPERTY = "PROPERTY"
    MEMBER_ASSIGNMENT = "MEMBER_ASSIGNMENT"


@dataclass(frozen=True, slots=True)
class MemberKey:
    """Statically known part of a member key.

    text is the identifier / string value / dotted member path.
    Empty for UNRESOLVED keys.
    """

    kind: KeyKind
    text: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.kind is KeyKind.UNRESOLVED:
            if self.text:
                raise ValueError("UNRESOLVED key must have empty text")
        elif not self.text:
            raise ValueError(f"{self.kind.value} key must have text")

    @classmethod
    def unresolved(cls) -> MemberKey:
        """Key that cannot be statically named."""
        return cls(kind=KeyKind.UNRESOLVED)


@dataclass(frozen=True, slots=True)
class DeclaredFunction:
    """function name() {} or a named function expression."""

    name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")


@dataclass(frozen=True, slots=True)
class MethodMember:
    """Method of a class body or an object literal."""

    key: MemberKey
    accessor: Accessor = Accessor.METHOD


@dataclass(frozen=True, slots=True)
class BoundFunction:
    """Function expression or arrow function bound to a name."""

    binding: Binding
    key: MemberKey


@dataclass(frozen=True, slots=True)
class InlineFunction:
    """Unbound function expression: callbacks, IIFEs, anonymous exports."""


FunctionShape = DeclaredFunction | MethodMember | BoundFunction | InlineFunction


@dataclass(frozen=True, slots=True)
class Classification:
    """Classifier verdict for one function-like node.

    Attributes:
        name: Canonical name (descriptive placeholder when untracked)
        should_track: Whether the node becomes a Declaration
    """

    name: str
    should_track: bool
