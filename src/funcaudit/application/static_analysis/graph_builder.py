"""Call graph builder: syntax trees → CallGraph.

Two cooperating traversals:
- outer: one walk per file enumerating every function-like node and every
  call expression (calls inside untracked functions are recorded too);
- inner: boundary-limited walk per tracked declaration collecting its own
  suspension points (see infrastructure.analyzers.base.suspension_points).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from funcaudit.domain.callgraph import CallGraph, CallRecord, Declaration
from funcaudit.infrastructure.analyzers import (
    AnalysisContext,
    callee_name,
    class_name,
    describe_function,
    is_async,
    is_awaited,
    is_class_like,
    is_function_like,
    line_of,
    suspension_points,
)

if TYPE_CHECKING:
    from tree_sitter import Node

    from funcaudit.application.static_analysis.classifier import DeclarationClassifier
    from funcaudit.domain.callgraph import FrozenCallGraph
    from funcaudit.infrastructure.parser import SyntaxTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileStats:
    """What one file contributed.

    Attributes:
        declarations: Tracked declarations added
        skipped: Function-like nodes not tracked
        calls: Call records added
    """

    declarations: int
    skipped: int
    calls: int


class CallGraphBuilder:
    """Accumulates declarations and call sites across files.

    Lifecycle:
        builder = CallGraphBuilder(classifier)
        for tree in trees:
            builder.add_tree(tree)
        graph = builder.build()
    """

    def __init__(self, classifier: DeclarationClassifier) -> None:
        self._classifier = classifier
        self._graph = CallGraph()

    def add_tree(self, tree: SyntaxTree) -> FileStats:
        """Register every declaration and call of one file.

        Args:
            tree: Parsed file

        Returns:
            Counts contributed by the file
        """
        graph = self._graph
        declarations_before = graph.declaration_count
        skipped_before = graph.skipped_count
        calls = 0

        context = AnalysisContext()
        # (node, exiting) pairs; exiting entries close a class scope
        stack: list[tuple[Node, bool]] = [(tree.root, False)]

        while stack:
            node, exiting = stack.pop()
            if exiting:
                context.pop_class()
                continue

            if is_class_like(node):
                context.push_class(class_name(node))
                stack.append((node, True))
            elif is_function_like(node):
                self._visit_function(node, tree.path, context)
            elif node.type == "call_expression":
                calls += self._visit_call(node, tree.path)

            stack.extend((child, False) for child in reversed(node.named_children))

        stats = FileStats(
            declarations=graph.declaration_count - declarations_before,
            skipped=graph.skipped_count - skipped_before,
            calls=calls,
        )
        logger.debug(
            "%s: %d declarations, %d skipped, %d calls",
            tree.path,
            stats.declarations,
            stats.skipped,
            stats.calls,
        )
        return stats

    def build(self) -> FrozenCallGraph:
        """Freeze accumulated graph."""
        return self._graph.freeze()

    def _visit_function(self, node: Node, path: str, context: AnalysisContext) -> None:
        verdict = self._classifier.classify(describe_function(node))
        if not verdict.should_track:
            self._graph.note_skipped()
            return

        self._graph.add_declaration(
            Declaration(
                name=verdict.name,
                file=path,
                line=line_of(node),
                is_async=is_async(node),
                owning_type=context.current_class,
                suspension_points=suspension_points(node),
            )
        )

    def _visit_call(self, node: Node, path: str) -> int:
        name = callee_name(node)
        if name is None:
            return 0
        self._graph.record_call(
            CallRecord(callee_name=name, file=path, line=line_of(node), awaited=is_awaited(node))
        )
        return 1
