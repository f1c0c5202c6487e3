"""Static analysis components for call graph construction.

Exports:
    - DeclarationClassifier: Function shape → (name, should_track)
    - CallGraphBuilder: Builds FrozenCallGraph from syntax trees
"""

from funcaudit.application.static_analysis.classifier import (
    ANONYMOUS_METHOD,
    INLINE_FUNCTION,
    DeclarationClassifier,
    classify_shape,
    key_name,
)
from funcaudit.application.static_analysis.graph_builder import CallGraphBuilder, FileStats

__all__ = [
    "ANONYMOUS_METHOD",
    "INLINE_FUNCTION",
    "CallGraphBuilder",
    "DeclarationClassifier",
    "FileStats",
    "classify_shape",
    "key_name",
]
