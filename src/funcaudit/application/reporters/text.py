"""Text report renderer.

Streams each line to a rich Console while collecting the plain text,
so the same document can be persisted afterwards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from funcaudit.application.reporters._base import BaseReporter
from funcaudit.domain.findings import AsyncIssueKind, RecommendationKind

if TYPE_CHECKING:
    from rich.console import Console

    from funcaudit.domain.callgraph import CallRecord, Declaration
    from funcaudit.domain.findings import AnalysisResult, AsyncIssue, Recommendation, UsageReport

RULE_WIDTH = 80
SECTION_WIDTH = 60

ASYNC_MARKER = "[async]"
SYNC_MARKER = "[sync]"

_TITLE_STYLE = "bold cyan"
_WARN_STYLE = "yellow"
_ERROR_STYLE = "bold red"
_OK_STYLE = "green"

_ISSUE_TEXT: dict[AsyncIssueKind, tuple[str, str]] = {
    AsyncIssueKind.UNNECESSARY_ASYNC: (
        "UNNECESSARY ASYNC: This function is marked async but contains no awaited operations.",
        'Consider removing the "async" keyword.',
    ),
    AsyncIssueKind.MISSING_AWAIT: (
        'MISSING AWAIT: This async function is called without "await" in:',
        'Add "await" to these calls or the promise may not be handled properly.',
    ),
    AsyncIssueKind.MISSING_ASYNC: (
        "MISSING ASYNC: This function contains awaitable operations but is not marked async.",
        'Add the "async" keyword to properly handle asynchronous operations.',
    ),
    AsyncIssueKind.UNNECESSARY_AWAIT: (
        'UNNECESSARY AWAIT: This non-async function is called with "await" in:',
        'Remove "await" from these calls, they are not needed.',
    ),
}


def _times(count: int) -> str:
    return "1 time" if count == 1 else f"{count} times"


def _sites(records: tuple[CallRecord, ...]) -> str:
    return ", ".join(record.site for record in records)


class TextReportRenderer(BaseReporter):
    """Multi-section text report.

    Lines are printed to the console (when given) as they are produced.
    Markup and highlighting are disabled so source names are shown verbatim.
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize renderer.

        Args:
            console: Live output sink (None renders silently)
        """
        self._console = console
        self._lines: list[str] = []

    def render(self, result: AnalysisResult) -> tuple[str, ...]:
        """Render all sections in order.

        Args:
            result: Complete analysis result

        Returns:
            Plain document lines
        """
        self._lines = []

        self._report_header(result)
        if result.warnings:
            self._report_warnings(result)
        self._report_inventory(result)
        self._report_async(result)
        self._report_usage(result.usage)
        self._report_summary(result)
        self._report_recommendations(result.recommendations)

        return tuple(self._lines)

    def _write(self, text: str = "", style: str | None = None) -> None:
        """Collect line and stream it."""
        self._lines.append(text)
        if self._console is not None:
            self._console.print(
                text,
                style=style,
                markup=False,
                highlight=False,
                emoji=False,
                soft_wrap=True,
            )

    def _section(self, title: str, *intro: str) -> None:
        self._write()
        self._write(title, _TITLE_STYLE)
        self._write("-" * SECTION_WIDTH)
        for line in intro:
            self._write(line)
        self._write()

    def _report_header(self, result: AnalysisResult) -> None:
        self._write("=" * RULE_WIDTH)
        self._write("FUNCTION ANALYSIS REPORT", _TITLE_STYLE)
        self._write("=" * RULE_WIDTH)
        self._write(f"Root: {result.root}")
        self._write(f"Files discovered: {len(result.files)}")
        self._write(f"Files analyzed: {result.analyzed_files}")
        self._write()
        self._write("This report analyzes the codebase for function usage patterns,")
        self._write("async/await consistency, and potential optimization opportunities.")
        self._write()
        self._write(
            f"Note: {result.summary.skipped} inline functions, callbacks, event handlers and"
        )
        self._write("framework-invoked functions were excluded from usage analysis.")

    def _report_warnings(self, result: AnalysisResult) -> None:
        self._section("WARNINGS", "Files and directories that could not be analyzed:")
        for warning in result.warnings:
            self._write(f"   [{warning.kind.value}] {warning}", _WARN_STYLE)

    def _report_inventory(self, result: AnalysisResult) -> None:
        self._section(
            "FUNCTION INVENTORY",
            "Trackable functions, organized by file and class.",
            f"{ASYNC_MARKER} = async function | {SYNC_MARKER} = synchronous function",
        )

        by_file: dict[str, list[Declaration]] = {}
        for declaration in result.graph.declarations.values():
            by_file.setdefault(declaration.file, []).append(declaration)

        for file, declarations in by_file.items():
            self._write(f"{file} ({len(declarations)} trackable functions)", "bold")

            groups: dict[str | None, list[Declaration]] = {None: []}
            for declaration in declarations:
                groups.setdefault(declaration.owning_type, []).append(declaration)

            for owner, members in groups.items():
                indent = "  "
                if owner is not None:
                    self._write(f"  Class: {owner} ({len(members)} methods)")
                    indent = "    "
                for declaration in members:
                    marker = ASYNC_MARKER if declaration.is_async else SYNC_MARKER
                    calls = result.graph.aggregate_for(declaration).total_calls
                    self._write(
                        f"{indent}{marker} {declaration.name} (line {declaration.line})"
                        f" - called {_times(calls)}"
                    )
            self._write()

    def _report_async(self, result: AnalysisResult) -> None:
        self._section(
            "ASYNC/AWAIT VALIDATION",
            "Potential issues with async/await usage patterns.",
        )

        for finding in result.async_findings:
            declaration = finding.declaration
            self._write(f"x {declaration.name} ({declaration.site})", _ERROR_STYLE)
            for issue in finding.issues:
                self._report_issue(issue)
            self._write()

        total = result.summary.async_issues
        if total == 0:
            self._write("No async/await issues found in trackable functions.", _OK_STYLE)
        else:
            self._write(f"Total async/await issues found: {total}", _WARN_STYLE)

    def _report_issue(self, issue: AsyncIssue) -> None:
        headline, hint = _ISSUE_TEXT[issue.kind]
        self._write(f"   {headline}", _WARN_STYLE)
        if issue.call_sites:
            self._write(f"      {_sites(issue.call_sites)}")
        self._write(f"      Hint: {hint}")

    def _report_usage(self, usage: UsageReport) -> None:
        self._section(
            "FUNCTION USAGE ANALYSIS",
            "How often trackable functions are called. Only functions that can be",
            "referenced by name elsewhere in the code are considered.",
        )

        if usage.unused:
            self._write("UNUSED FUNCTIONS (dead code):", _WARN_STYLE)
            for entry in usage.unused:
                declaration = entry.declaration
                self._write(f"   - {declaration.name} ({declaration.site})")
            self._write()

        if usage.single_use:
            self._write("SINGLE-USE FUNCTIONS (consider inlining):", _WARN_STYLE)
            for entry in usage.single_use:
                declaration = entry.declaration
                caller = entry.aggregate.callers[0]
                self._write(
                    f"   - {declaration.name} ({declaration.site}) -> called from {caller.site}"
                )
            self._write()

        if usage.well_used:
            self._write("WELL-USED FUNCTIONS (sorted by call count):", _OK_STYLE)
            for entry in usage.well_used:
                declaration = entry.declaration
                self._write(
                    f"   - {declaration.name} ({entry.aggregate.total_calls} calls)"
                    f" - {declaration.site}"
                )
            self._write()

    def _report_summary(self, result: AnalysisResult) -> None:
        summary = result.summary
        self._section("CODEBASE SUMMARY")
        self._write("Function statistics:")
        self._write(
            f"   Total functions: {summary.total_functions}"
            f" ({summary.trackable} trackable + {summary.skipped} inline/callbacks/events)"
        )
        self._write(f"   - Trackable async functions: {summary.async_count} ({summary.async_percent}%)")
        self._write(f"   - Trackable sync functions: {summary.sync_count} ({summary.sync_percent}%)")
        self._write()
        self._write(f"Usage efficiency: {summary.usage_efficiency}%")
        self._write(f"   - Well-used functions: {summary.well_used}")
        self._write(
            f"   - Single-use functions: {summary.single_use} ({summary.single_use_percent}%)"
        )
        self._write(f"   - Unused functions: {summary.unused} ({summary.unused_percent}%)")

    def _report_recommendations(self, recommendations: tuple[Recommendation, ...]) -> None:
        self._section("OPTIMIZATION RECOMMENDATIONS")
        for recommendation in recommendations:
            count = recommendation.count
            match recommendation.kind:
                case RecommendationKind.CLEANUP:
                    self._write("Code cleanup priority:", _WARN_STYLE)
                    self._write(f"   Remove {count} unused named functions to reduce complexity")
                case RecommendationKind.INLINE:
                    self._write("Refactoring opportunity:", _WARN_STYLE)
                    self._write(f"   Consider inlining {count} single-use functions")
                case RecommendationKind.ASYNC_FIX:
                    self._write("Async/await improvements:", _WARN_STYLE)
                    self._write(f"   Fix {count} async/await issues to improve reliability")
                case RecommendationKind.HEALTHY:
                    self._write("Healthy codebase.", _OK_STYLE)
                    self._write("   No major optimization opportunities detected.")
            self._write()
