"""Declaration classifier: FunctionShape → (name, should_track).

One function per shape variant. Framework-invoked names (blacklist and
handler naming conventions) are never tracked: their callers are not
visible in source text, so their call count is unknowable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from funcaudit.domain.shapes import (
    Accessor,
    BoundFunction,
    Classification,
    DeclaredFunction,
    InlineFunction,
    KeyKind,
    MethodMember,
)

if TYPE_CHECKING:
    from funcaudit.domain.config import AuditConfig
    from funcaudit.domain.shapes import FunctionShape, MemberKey

ANONYMOUS_METHOD = "anonymous method"
INLINE_FUNCTION = "callback/inline function"

_ACCESSOR_PREFIX = {Accessor.GETTER: "get ", Accessor.SETTER: "set "}


def key_name(key: MemberKey) -> str | None:
    """Canonical name for a member key, None when not statically known."""
    match key.kind:
        case KeyKind.IDENTIFIER | KeyKind.STRING:
            return key.text
        case KeyKind.COMPUTED_MEMBER:
            return f"[{key.text}]"
        case KeyKind.UNRESOLVED:
            return None


def classify_shape(shape: FunctionShape) -> Classification:
    """Classify a shape by naming rules only (no blacklist)."""
    match shape:
        case DeclaredFunction():
            return _classify_declared(shape)
        case MethodMember():
            return _classify_method(shape)
        case BoundFunction():
            return _classify_bound(shape)
        case InlineFunction():
            return _classify_inline(shape)
        case _:
            assert_never(shape)


def _classify_declared(shape: DeclaredFunction) -> Classification:
    return Classification(name=shape.name, should_track=True)


def _classify_method(shape: MethodMember) -> Classification:
    if shape.accessor is Accessor.CONSTRUCTOR:
        return Classification(name="constructor", should_track=True)

    name = key_name(shape.key)
    if name is None:
        return Classification(name=ANONYMOUS_METHOD, should_track=False)

    prefix = _ACCESSOR_PREFIX.get(shape.accessor, "")
    return Classification(name=f"{prefix}{name}", should_track=True)


def _classify_bound(shape: BoundFunction) -> Classification:
    name = key_name(shape.key)
    if name is None:
        return Classification(name=INLINE_FUNCTION, should_track=False)
    return Classification(name=name, should_track=True)


def _classify_inline(shape: InlineFunction) -> Classification:
    return Classification(name=INLINE_FUNCTION, should_track=False)


class DeclarationClassifier:
    """Classifies shapes and applies framework-invoked exclusions.

    Stateless apart from configuration.
    """

    def __init__(self, config: AuditConfig) -> None:
        self._config = config

    def classify(self, shape: FunctionShape) -> Classification:
        """Classify shape; framework-invoked names become untracked.

        Args:
            shape: Shape of a function-like node

        Returns:
            Classification with canonical name and track decision
        """
        verdict = classify_shape(shape)
        if verdict.should_track and self._config.is_framework_invoked(verdict.name):
            return Classification(name=verdict.name, should_track=False)
        return verdict
