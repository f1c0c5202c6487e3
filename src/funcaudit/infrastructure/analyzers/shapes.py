"""Shape extraction: tree-sitter function-like node → FunctionShape.

Looks only at the node and its immediate syntactic parent.
Naming decisions are left to the classifier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from funcaudit.domain.shapes import (
    Accessor,
    Binding,
    BoundFunction,
    DeclaredFunction,
    FunctionShape,
    InlineFunction,
    KeyKind,
    MemberKey,
    MethodMember,
)
from funcaudit.infrastructure.analyzers.base import dotted_path, node_text, syntactic_parent

if TYPE_CHECKING:
    from tree_sitter import Node

_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})

# Class fields: javascript uses "property", typescript uses "name"
_FIELD_TYPES = frozenset({"field_definition", "public_field_definition"})

_ACCESSOR_KEYWORDS = {"get": Accessor.GETTER, "set": Accessor.SETTER}


def describe_function(node: Node) -> FunctionShape:
    """Describe a function-like node.

    Args:
        node: function_declaration, function_expression, arrow_function,
            generator function or method_definition node

    Returns:
        Shape variant for the classifier
    """
    if node.type == "method_definition":
        return _describe_method(node)

    name = node.child_by_field_name("name")
    if name is not None:
        return DeclaredFunction(name=node_text(name))

    if node.type in _DECLARATION_TYPES:
        # export default function () {}
        return InlineFunction()

    return _describe_bound(node)


def member_key(key: Node) -> MemberKey:
    """Describe a method, property or field key.

    foo / 'foo'            → IDENTIFIER / STRING
    [Symbol.iterator]      → COMPUTED_MEMBER
    [expr] / #priv / 42    → UNRESOLVED
    """
    match key.type:
        case "property_identifier" | "identifier":
            return MemberKey(kind=KeyKind.IDENTIFIER, text=node_text(key))
        case "string":
            value = "".join(
                node_text(child) for child in key.named_children if child.type == "string_fragment"
            )
            if value:
                return MemberKey(kind=KeyKind.STRING, text=value)
        case "computed_property_name":
            inner = key.named_children[0] if key.named_children else None
            if inner is not None and inner.type == "member_expression":
                path = dotted_path(inner)
                if path is not None:
                    return MemberKey(kind=KeyKind.COMPUTED_MEMBER, text=path)
    return MemberKey.unresolved()


def _describe_method(node: Node) -> MethodMember:
    key_node = node.child_by_field_name("name")
    if key_node is None:
        return MethodMember(key=MemberKey.unresolved())

    accessor = Accessor.METHOD
    for child in node.children:
        if child == key_node:
            break
        if not child.is_named and child.type in _ACCESSOR_KEYWORDS:
            accessor = _ACCESSOR_KEYWORDS[child.type]

    key = member_key(key_node)
    parent = node.parent
    if (
        accessor is Accessor.METHOD
        and key.kind is KeyKind.IDENTIFIER
        and key.text == "constructor"
        and parent is not None
        and parent.type == "class_body"
    ):
        accessor = Accessor.CONSTRUCTOR

    return MethodMember(key=key, accessor=accessor)


def _describe_bound(node: Node) -> FunctionShape:
    parent = syntactic_parent(node)
    if parent is None:
        return InlineFunction()

    match parent.type:
        case "variable_declarator":
            target = parent.child_by_field_name("name")
            if target is not None and target.type == "identifier" and _is_value(parent, node):
                return BoundFunction(
                    binding=Binding.VARIABLE,
                    key=MemberKey(kind=KeyKind.IDENTIFIER, text=node_text(target)),
                )

        case "pair":
            key = parent.child_by_field_name("key")
            if key is not None and _is_value(parent, node):
                return BoundFunction(binding=Binding.PROPERTY, key=member_key(key))

        case field_type if field_type in _FIELD_TYPES:
            key = parent.child_by_field_name("property") or parent.child_by_field_name("name")
            if key is not None and _is_value(parent, node):
                return BoundFunction(binding=Binding.PROPERTY, key=member_key(key))

        case "assignment_expression":
            left = parent.child_by_field_name("left")
            if left is not None and left.type == "member_expression" and _is_value(parent, node, "right"):
                prop = left.child_by_field_name("property")
                if prop is not None and prop.type == "property_identifier":
                    return BoundFunction(
                        binding=Binding.MEMBER_ASSIGNMENT,
                        key=MemberKey(kind=KeyKind.IDENTIFIER, text=node_text(prop)),
                    )

    return InlineFunction()


def _is_value(parent: Node, node: Node, field: str = "value") -> bool:
    """Check if node (possibly parenthesized) is parent's value field."""
    value = parent.child_by_field_name(field)
    while value is not None and value.type == "parenthesized_expression":
        value = value.named_children[0] if value.named_children else None
    return value is not None and value == node
