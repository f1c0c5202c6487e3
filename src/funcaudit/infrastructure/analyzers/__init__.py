"""Tree-sitter analyzers for script sources."""

from funcaudit.infrastructure.analyzers.base import (
    callee_name,
    class_name,
    dotted_path,
    is_async,
    is_awaited,
    is_class_like,
    is_function_like,
    line_of,
    node_text,
    shallow_walk,
    suspension_of,
    suspension_points,
    syntactic_parent,
)
from funcaudit.infrastructure.analyzers.context import AnalysisContext
from funcaudit.infrastructure.analyzers.shapes import describe_function, member_key

__all__ = [
    # Context
    "AnalysisContext",
    # Base utilities
    "callee_name",
    "class_name",
    "dotted_path",
    "is_async",
    "is_awaited",
    "is_class_like",
    "is_function_like",
    "line_of",
    "node_text",
    "shallow_walk",
    "suspension_of",
    "suspension_points",
    "syntactic_parent",
    # Shapes
    "describe_function",
    "member_key",
]
