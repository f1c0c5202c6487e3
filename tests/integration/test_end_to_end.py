"""End-to-end scenarios: source tree → AuditService → report.

Covers the behavioral guarantees of a full run:
- aggregate and tier invariants
- async flag exactness
- handler exclusion and inline-callback skipping
- nested suspension attribution
- determinism across runs
"""

from pathlib import Path

import pytest

from funcaudit.application.services import AuditService
from funcaudit.domain.config import AuditConfig
from funcaudit.domain.findings import AnalysisResult, AsyncIssueKind
from tests.factories import analyze_source, write_files

WALK = AuditConfig(prefer_git=False)

PROJECT = {
    "src/api/client.ts": (
        "export class ApiClient {\n"
        "  constructor(private base: string) {}\n"
        "  async get(path: string) {\n"
        "    const res = await fetch(this.base + path);\n"
        "    return res.json();\n"
        "  }\n"
        "  async ping() { return true; }\n"
        "}\n"
    ),
    "src/store.js": (
        "import { ApiClient } from './api/client';\n"
        "const client = new ApiClient('/api');\n"
        "export async function loadUsers() {\n"
        "  return await client.get('/users');\n"
        "}\n"
        "export function refresh() {\n"
        "  loadUsers();\n"
        "  return client.ping().then(ok => ok);\n"
        "}\n"
        "export const format = (u) => u.name;\n"
        "function unusedHelper() {}\n"
    ),
    "src/components/List.jsx": (
        "import { refresh, format } from '../store';\n"
        "export function List({ users }) {\n"
        "  const handleClick = () => refresh();\n"
        "  return <ul onClick={handleClick}>{users.map(u => <li>{format(u)}</li>)}</ul>;\n"
        "}\n"
        "function onMount() { refresh(); }\n"
    ),
    "node_modules/dep/index.js": "export function vendored() {}\n",
}


def flags(result: AnalysisResult) -> dict[str, set[AsyncIssueKind]]:
    return {f.declaration.name: set(f.kinds) for f in result.async_findings}


@pytest.fixture
def project(tmp_path: Path) -> Path:
    write_files(tmp_path, PROJECT)
    return tmp_path


class TestScenarios:
    """Single-file behavioral scenarios."""

    def test_usage_counts(self) -> None:
        result = analyze_source("function a(){} function b(){ a(); a(); }\n")

        (well_used,) = result.usage.well_used
        assert well_used.declaration.name == "a"
        assert well_used.aggregate.total_calls == 2
        assert [e.declaration.name for e in result.usage.unused] == ["b"]
        assert result.async_findings == ()

    def test_handler_excluded_from_inventory_and_flags(self) -> None:
        source = "async function save() { await db(); }\nfunction onClick() { save(); }\n"
        result = analyze_source(source)

        assert [d.name for d in result.graph.declarations.values()] == ["save"]
        assert "onClick" not in flags(result)
        # the call inside the handler still counts
        assert flags(result) == {"save": {AsyncIssueKind.MISSING_AWAIT}}

    def test_missing_await(self) -> None:
        source = (
            "async function f(){ await g(); }\n"
            "async function g(){ await sleep(1); }\n"
            "f();\n"
        )
        result = analyze_source(source, "app.js")

        assert flags(result) == {"f": {AsyncIssueKind.MISSING_AWAIT}}
        (finding,) = result.async_findings
        (issue,) = finding.issues
        assert [c.site for c in issue.call_sites] == ["app.js:3"]

    def test_inline_arrow_only_skipped(self) -> None:
        result = analyze_source("run([1, 2].map((x) => x * 2));\n")

        assert result.summary.trackable == 0
        assert result.summary.skipped == 1

    def test_nested_await_attributed_to_inner_function(self) -> None:
        source = "function outer(xs) {\n  xs.forEach(async (x) => { await save(x); });\n}\nouter([]);\n"
        result = analyze_source(source)

        assert "outer" not in flags(result)

    def test_flags_present_exactly_once(self) -> None:
        source = (
            "async function noWait() { return 1; }\n"
            "function needsAsync(p) { return p.then(x => x); }\n"
        )
        result = analyze_source(source)

        for finding in result.async_findings:
            kinds = [issue.kind for issue in finding.issues]
            assert len(kinds) == len(set(kinds))
        assert flags(result) == {
            "noWait": {AsyncIssueKind.UNNECESSARY_ASYNC},
            "needsAsync": {AsyncIssueKind.MISSING_ASYNC},
        }

    def test_unnecessary_await(self) -> None:
        result = analyze_source("function sync() { return 1; }\nasync function run() { await sync(); }\n")
        assert flags(result)["sync"] == {AsyncIssueKind.UNNECESSARY_AWAIT}


class TestProject:
    """Multi-file project run."""

    def test_inventory(self, project: Path) -> None:
        result = AuditService(WALK).analyze(project)
        decls = {d.name: d for d in result.graph.declarations.values()}

        assert set(decls) == {"get", "ping", "loadUsers", "refresh", "format", "unusedHelper", "List"}
        assert decls["get"].owning_type == "ApiClient"
        assert "vendored" not in decls
        assert all(not f.startswith("node_modules") for f in result.files)

    def test_flags(self, project: Path) -> None:
        result = AuditService(WALK).analyze(project)

        assert flags(result) == {
            "ping": {AsyncIssueKind.UNNECESSARY_ASYNC, AsyncIssueKind.MISSING_AWAIT},
            "loadUsers": {AsyncIssueKind.MISSING_AWAIT},
            "refresh": {AsyncIssueKind.MISSING_ASYNC},
        }

    def test_invariants(self, project: Path) -> None:
        result = AuditService(WALK).analyze(project)
        summary = result.summary

        for aggregate in result.graph.aggregates.values():
            assert aggregate.total_calls == len(aggregate.callers)
        assert summary.unused + summary.single_use + summary.well_used == summary.trackable
        assert result.usage.total == summary.trackable

    def test_deterministic(self, project: Path) -> None:
        service = AuditService(WALK)

        first = service.run(project, save=False)
        second = service.run(project, save=False)

        assert first.report_lines == second.report_lines
        assert first.result.async_findings == second.result.async_findings

    def test_report_saved_under_root(self, project: Path) -> None:
        outcome = AuditService(WALK).run(project)

        assert outcome.report_path is not None
        assert outcome.report_path.parent == project
        text = outcome.report_path.read_text(encoding="utf-8")
        assert "Class: ApiClient (2 methods)" in text
