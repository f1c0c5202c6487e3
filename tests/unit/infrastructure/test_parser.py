"""Tests for infrastructure/parser.py."""

from pathlib import Path

import pytest

from funcaudit.domain.exceptions import ParseError, SourceReadError
from funcaudit.infrastructure.parser import Grammar, ScriptParser, first_error, grammars_for


@pytest.fixture
def parser() -> ScriptParser:
    """Fresh parser."""
    return ScriptParser()


class TestGrammarsFor:
    """Tests for grammar selection by suffix."""

    @pytest.mark.parametrize("path", ["a.js", "a.jsx", "a.mjs", "a.cjs", "dir/A.JS"])
    def test_javascript_family(self, path: str) -> None:
        assert grammars_for(path) == (Grammar.JAVASCRIPT, Grammar.TSX)

    @pytest.mark.parametrize("path", ["a.ts", "a.mts", "a.cts"])
    def test_typescript(self, path: str) -> None:
        assert grammars_for(path) == (Grammar.TYPESCRIPT,)

    def test_tsx(self) -> None:
        assert grammars_for("App.tsx") == (Grammar.TSX,)

    def test_unknown_suffix_falls_back(self) -> None:
        assert grammars_for("Makefile") == (Grammar.JAVASCRIPT, Grammar.TSX)


class TestParseSource:
    """Tests for ScriptParser.parse_source."""

    def test_plain_javascript(self, parser: ScriptParser) -> None:
        tree = parser.parse_source("function a() { return 1; }\n", "a.js")

        assert tree.grammar is Grammar.JAVASCRIPT
        assert tree.path == "a.js"
        assert tree.root.type == "program"

    def test_jsx_in_js(self, parser: ScriptParser) -> None:
        source = "const App = () => <div className='x'>{items.map(i => <p>{i}</p>)}</div>;\n"
        tree = parser.parse_source(source, "App.jsx")
        assert tree.grammar is Grammar.JAVASCRIPT

    def test_annotated_js_falls_back_to_tsx(self, parser: ScriptParser) -> None:
        tree = parser.parse_source("function f(x: number): string { return `${x}`; }\n", "f.js")
        assert tree.grammar is Grammar.TSX

    def test_typescript_superset_syntax(self, parser: ScriptParser) -> None:
        source = (
            "interface Repo { load(id: string): Promise<void>; }\n"
            "@injectable()\n"
            "export class Service {\n"
            "  private cache?: Map<string, number>;\n"
            "  constructor(private readonly repo: Repo) {}\n"
            "  async get(id: string) { return this.cache?.get(id) ?? await this.repo.load(id); }\n"
            "}\n"
        )
        tree = parser.parse_source(source, "service.ts")
        assert tree.grammar is Grammar.TYPESCRIPT

    def test_syntax_error_raises(self, parser: ScriptParser) -> None:
        with pytest.raises(ParseError) as exc_info:
            parser.parse_source("function ok() {}\nfunction broken( {\n", "bad.js")

        err = exc_info.value
        assert err.path == "bad.js"
        assert err.line is not None
        assert err.line >= 1

    def test_error_line_reported(self, parser: ScriptParser) -> None:
        source = "const a = 1;\nconst b = 2;\nconst = ;\n"
        with pytest.raises(ParseError) as exc_info:
            parser.parse_source(source, "bad.ts")
        assert exc_info.value.line == 3

    def test_empty_source(self, parser: ScriptParser) -> None:
        tree = parser.parse_source("", "empty.js")
        assert tree.root.named_children == []


class TestParseFile:
    """Tests for ScriptParser.parse_file."""

    def test_reads_and_strips_bom(self, parser: ScriptParser, tmp_path: Path) -> None:
        path = tmp_path / "bom.js"
        path.write_bytes(b"\xef\xbb\xbffunction a() {}\n")

        tree = parser.parse_file(path, "bom.js")

        assert tree.root.named_children[0].type == "function_declaration"

    def test_missing_file(self, parser: ScriptParser, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError, match="file not found") as exc_info:
            parser.parse_file(tmp_path / "gone.js", "gone.js")
        assert exc_info.value.path == "gone.js"

    def test_invalid_utf8(self, parser: ScriptParser, tmp_path: Path) -> None:
        path = tmp_path / "latin.js"
        path.write_bytes(b"const s = '\xff\xfe';\n")

        with pytest.raises(SourceReadError, match="encoding error"):
            parser.parse_file(path, "latin.js")

    def test_directory_is_read_error(self, parser: ScriptParser, tmp_path: Path) -> None:
        (tmp_path / "dir.js").mkdir()
        with pytest.raises(SourceReadError):
            parser.parse_file(tmp_path / "dir.js", "dir.js")


class TestFirstError:
    """Tests for first_error."""

    def test_clean_tree(self, parser: ScriptParser) -> None:
        tree = parser.parse_source("let x = 1;\n", "x.js")
        assert first_error(tree.root) is None
