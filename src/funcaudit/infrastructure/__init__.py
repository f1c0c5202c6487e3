"""Infrastructure layer: tree-sitter parsing and syntax analyzers."""

from funcaudit.infrastructure.parser import Grammar, ScriptParser, SyntaxTree, grammars_for

__all__ = [
    "Grammar",
    "ScriptParser",
    "SyntaxTree",
    "grammars_for",
]
