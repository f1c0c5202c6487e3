"""Base utilities for tree-sitter analyzers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from funcaudit.domain.callgraph import SuspensionKind, SuspensionPoint

if TYPE_CHECKING:
    from tree_sitter import Node

# "function" is the function-expression node in older javascript grammars
FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
        "method_definition",
    },
)

CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration", "class"})

ANONYMOUS_CLASS = "AnonymousClass"

_PROMISE_CHAIN_METHODS = frozenset({"then", "catch", "finally"})

_TRANSPARENT_WRAPPERS = frozenset({"parenthesized_expression"})


def line_of(node: Node) -> int:
    """1-based start line of node."""
    return node.start_point[0] + 1


def node_text(node: Node) -> str:
    """Source text of node."""
    text = node.text
    return text.decode("utf-8") if text is not None else ""


def is_function_like(node: Node) -> bool:
    """Check if node is a function, arrow function or method."""
    return node.is_named and node.type in FUNCTION_TYPES


def is_class_like(node: Node) -> bool:
    """Check if node is a class declaration or class expression."""
    return node.is_named and node.type in CLASS_TYPES


def class_name(node: Node) -> str:
    """Name of a class node, ANONYMOUS_CLASS when unnamed."""
    name = node.child_by_field_name("name")
    if name is None:
        return ANONYMOUS_CLASS
    return node_text(name)


def syntactic_parent(node: Node) -> Node | None:
    """Parent of node, looking through parentheses."""
    parent = node.parent
    while parent is not None and parent.type in _TRANSPARENT_WRAPPERS:
        parent = parent.parent
    return parent


def is_async(node: Node) -> bool:
    """Check if function-like node carries the async keyword."""
    body = node.child_by_field_name("body")
    for child in node.children:
        if body is not None and child == body:
            break
        if child.type == "async" and not child.is_named:
            return True
    return False


def has_keyword(node: Node, keyword: str) -> bool:
    """Check if node has an anonymous keyword child."""
    return any(child.type == keyword and not child.is_named for child in node.children)


def dotted_path(node: Node) -> str | None:
    """Render identifier / member chains as "a.b.c", None for anything else."""
    match node.type:
        case "identifier" | "this":
            return node_text(node)
        case "member_expression":
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is None or prop is None or prop.type != "property_identifier":
                return None
            head = dotted_path(obj)
            if head is None:
                return None
            return f"{head}.{node_text(prop)}"
    return None


def callee_name(call: Node) -> str | None:
    """Bare callee name of a call expression.

    foo()        → "foo"
    a.b.foo()    → "foo"
    a?.foo()     → "foo"
    a[b]()       → None
    foo()()      → None
    tag`text`    → None (tagged template, not a call)
    """
    func = call.child_by_field_name("function")
    if func is None:
        return None
    arguments = call.child_by_field_name("arguments")
    if arguments is not None and arguments.type == "template_string":
        return None
    match func.type:
        case "identifier":
            return node_text(func)
        case "member_expression":
            prop = func.child_by_field_name("property")
            if prop is not None and prop.type == "property_identifier":
                return node_text(prop)
    return None


def is_awaited(call: Node) -> bool:
    """Check if call is the direct operand of an await expression."""
    parent = syntactic_parent(call)
    return parent is not None and parent.type == "await_expression"


# =============================================================================
# SHALLOW WALK - single-scope traversal stopping at function boundaries
# =============================================================================


def shallow_walk(roots: Iterable[Node]) -> Iterator[Node]:
    """Walk named nodes without entering nested function-like nodes.

    Nested functions are yielded (so callers can see the boundary) but their
    children are not.

    Args:
        roots: Nodes to traverse (typically a function body)

    Yields:
        Named nodes in depth-first document order
    """
    stack: list[Node] = list(reversed(list(roots)))

    while stack:
        node = stack.pop()
        yield node

        if is_function_like(node):
            continue
        stack.extend(reversed(node.named_children))


def suspension_of(node: Node) -> SuspensionPoint | None:
    """Suspension point introduced by node, if any.

    await expr          → AWAIT
    for await (...)     → FOR_AWAIT
    p.then/catch/finally → PROMISE_CHAIN
    Promise.all(...)    → PROMISE_STATIC
    """
    match node.type:
        case "await_expression":
            return SuspensionPoint(line=line_of(node), kind=SuspensionKind.AWAIT, label="await")
        case "for_in_statement" if has_keyword(node, "await"):
            return SuspensionPoint(
                line=line_of(node),
                kind=SuspensionKind.FOR_AWAIT,
                label="for await",
            )
        case "call_expression":
            return _promise_operation(node)
    return None


def _promise_operation(call: Node) -> SuspensionPoint | None:
    """Detect promise combinator calls."""
    func = call.child_by_field_name("function")
    if func is None or func.type != "member_expression":
        return None

    prop = func.child_by_field_name("property")
    if prop is None or prop.type != "property_identifier":
        return None
    method = node_text(prop)

    if method in _PROMISE_CHAIN_METHODS:
        return SuspensionPoint(line=line_of(call), kind=SuspensionKind.PROMISE_CHAIN, label=method)

    obj = func.child_by_field_name("object")
    if obj is not None and obj.type == "identifier" and node_text(obj) == "Promise":
        return SuspensionPoint(
            line=line_of(call),
            kind=SuspensionKind.PROMISE_STATIC,
            label=f"Promise.{method}",
        )
    return None


def suspension_points(function: Node) -> tuple[SuspensionPoint, ...]:
    """Suspension points of a function-like node's own body.

    Points inside nested function-like nodes belong to those nodes.

    Args:
        function: Function-like node

    Returns:
        Points in document order
    """
    body = function.child_by_field_name("body")
    if body is None:
        return ()

    points: list[SuspensionPoint] = []
    for node in shallow_walk((body,)):
        point = suspension_of(node)
        if point is not None:
            points.append(point)
    return tuple(points)
