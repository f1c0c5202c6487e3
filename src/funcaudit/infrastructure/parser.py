"""Tree-sitter source parser adapter.

Parses JavaScript, JSX, TypeScript and TSX into syntax trees.
Permissive: each file extension has an ordered list of candidate grammars,
the first grammar producing an error-free tree wins.
FAIL-FIRST: ParseError when no grammar accepts the source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import cache
from typing import TYPE_CHECKING

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

from funcaudit.domain.exceptions import ParseError, SourceReadError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class Grammar(Enum):
    """Tree-sitter grammar used for a file."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"


# Plain JS grammar covers JSX; TSX catches annotated .js (Flow-ish / TS-in-JS)
_JS_FAMILY = (Grammar.JAVASCRIPT, Grammar.TSX)

_GRAMMARS_BY_SUFFIX: dict[str, tuple[Grammar, ...]] = {
    ".js": _JS_FAMILY,
    ".jsx": _JS_FAMILY,
    ".mjs": _JS_FAMILY,
    ".cjs": _JS_FAMILY,
    ".ts": (Grammar.TYPESCRIPT,),
    ".mts": (Grammar.TYPESCRIPT,),
    ".cts": (Grammar.TYPESCRIPT,),
    ".tsx": (Grammar.TSX,),
}


@cache
def _language(grammar: Grammar) -> Language:
    """Load tree-sitter language for grammar (once per process)."""
    match grammar:
        case Grammar.JAVASCRIPT:
            return Language(tsjavascript.language())
        case Grammar.TYPESCRIPT:
            return Language(tstypescript.language_typescript())
        case Grammar.TSX:
            return Language(tstypescript.language_tsx())


def grammars_for(path: str) -> tuple[Grammar, ...]:
    """Candidate grammars for a file path, in preference order.

    Unknown suffixes fall back to the JavaScript family.
    """
    dot = path.rfind(".")
    suffix = path[dot:].lower() if dot != -1 else ""
    return _GRAMMARS_BY_SUFFIX.get(suffix, _JS_FAMILY)


@dataclass(frozen=True, slots=True)
class SyntaxTree:
    """Parsed file.

    Attributes:
        path: Relative path used in reports
        grammar: Grammar that accepted the source
        tree: Tree-sitter tree (line info on every node)
    """

    path: str
    grammar: Grammar
    tree: Tree

    @property
    def root(self) -> Node:
        """Root node of the tree."""
        return self.tree.root_node


def first_error(node: Node) -> Node | None:
    """Find first ERROR or MISSING node in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


class ScriptParser:
    """Parser for script sources using tree-sitter.

    Caches one tree-sitter Parser per grammar. No other state between calls.
    """

    def __init__(self) -> None:
        self._parsers: dict[Grammar, Parser] = {}

    def parse_file(self, path: Path, display_path: str) -> SyntaxTree:
        """Read and parse a single file.

        Args:
            path: Absolute or cwd-relative path to read.
            display_path: Path recorded in the tree and in errors.

        Returns:
            Parsed SyntaxTree.

        Raises:
            SourceReadError: File cannot be read or decoded.
            ParseError: No candidate grammar accepts the source.
        """
        try:
            source = path.read_text(encoding="utf-8-sig")
        except FileNotFoundError as e:
            raise SourceReadError(path=display_path, reason="file not found") from e
        except PermissionError as e:
            raise SourceReadError(path=display_path, reason="permission denied") from e
        except UnicodeDecodeError as e:
            raise SourceReadError(path=display_path, reason=f"encoding error: {e.reason}") from e
        except OSError as e:
            raise SourceReadError(path=display_path, reason=e.strerror or str(e)) from e

        return self.parse_source(source, display_path)

    def parse_source(self, source: str, path: str) -> SyntaxTree:
        """Parse source text.

        Args:
            source: Full file text.
            path: Path used to pick grammars and to report errors.

        Returns:
            Parsed SyntaxTree from the first grammar without errors.

        Raises:
            ParseError: Every candidate grammar reports a syntax error.
        """
        data = source.encode("utf-8")
        rejected: Tree | None = None

        for grammar in grammars_for(path):
            tree = self._parser(grammar).parse(data)
            if not tree.root_node.has_error:
                return SyntaxTree(path=path, grammar=grammar, tree=tree)
            logger.debug("%s rejected by %s grammar", path, grammar.value)
            if rejected is None:
                rejected = tree

        if rejected is None:
            raise ParseError(path=path, reason="no grammar available")

        error_node = first_error(rejected.root_node)
        if error_node is None:
            raise ParseError(path=path, reason="syntax error")
        line = error_node.start_point[0] + 1
        if error_node.is_missing:
            raise ParseError(path=path, reason=f"missing {error_node.type!r}", line=line)
        raise ParseError(path=path, reason="unexpected token", line=line)

    def _parser(self, grammar: Grammar) -> Parser:
        parser = self._parsers.get(grammar)
        if parser is None:
            parser = Parser(_language(grammar))
            self._parsers[grammar] = parser
        return parser
