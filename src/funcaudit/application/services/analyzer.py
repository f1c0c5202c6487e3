"""Consistency & usage analyzer: FrozenCallGraph → AnalysisResult.

Pure functions over an immutable graph; no I/O.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from funcaudit.domain.config import DEFAULT_INLINE_THRESHOLD
from funcaudit.domain.findings import (
    AnalysisResult,
    AsyncFinding,
    AsyncIssue,
    AsyncIssueKind,
    Recommendation,
    RecommendationKind,
    Summary,
    UsageEntry,
    UsageReport,
    UsageTier,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from funcaudit.domain.callgraph import CallAggregate, Declaration, FrozenCallGraph
    from funcaudit.domain.findings import AnalysisWarning


def check_async(declaration: Declaration, aggregate: CallAggregate) -> tuple[AsyncIssue, ...]:
    """Async/await flags of one declaration.

    async + no suspension        → UNNECESSARY_ASYNC
    async + unawaited callers    → MISSING_AWAIT (citing each)
    sync + suspension            → MISSING_ASYNC
    sync + awaited callers       → UNNECESSARY_AWAIT (citing each)

    Args:
        declaration: Tracked declaration
        aggregate: Call aggregate of its name

    Returns:
        Flags in the order above, possibly empty
    """
    issues: list[AsyncIssue] = []

    if declaration.is_async:
        if not declaration.suspends:
            issues.append(AsyncIssue(kind=AsyncIssueKind.UNNECESSARY_ASYNC))
        unawaited = aggregate.unawaited_callers
        if unawaited:
            issues.append(AsyncIssue(kind=AsyncIssueKind.MISSING_AWAIT, call_sites=unawaited))
    else:
        if declaration.suspends:
            issues.append(AsyncIssue(kind=AsyncIssueKind.MISSING_ASYNC))
        awaited = aggregate.awaited_callers
        if awaited:
            issues.append(AsyncIssue(kind=AsyncIssueKind.UNNECESSARY_AWAIT, call_sites=awaited))

    return tuple(issues)


def classify_usage(graph: FrozenCallGraph) -> UsageReport:
    """Partition declarations into usage tiers.

    well_used is sorted by total calls descending; sort is stable so ties
    keep discovery order.
    """
    tiers: dict[UsageTier, list[UsageEntry]] = {tier: [] for tier in UsageTier}
    for declaration in graph.declarations.values():
        entry = UsageEntry(declaration=declaration, aggregate=graph.aggregate_for(declaration))
        tiers[entry.tier].append(entry)

    well_used = sorted(
        tiers[UsageTier.WELL_USED],
        key=lambda entry: entry.aggregate.total_calls,
        reverse=True,
    )
    return UsageReport(
        unused=tuple(tiers[UsageTier.UNUSED]),
        single_use=tuple(tiers[UsageTier.SINGLE_USE]),
        well_used=tuple(well_used),
    )


def summarize(
    graph: FrozenCallGraph,
    usage: UsageReport,
    findings: Iterable[AsyncFinding],
) -> Summary:
    """Aggregate statistics of one run."""
    return Summary(
        trackable=graph.trackable_count,
        skipped=graph.skipped_count,
        async_count=sum(1 for d in graph.declarations.values() if d.is_async),
        unused=len(usage.unused),
        single_use=len(usage.single_use),
        async_issues=sum(finding.weight for finding in findings),
    )


def recommend(summary: Summary, inline_threshold: int) -> tuple[Recommendation, ...]:
    """Derive recommendations; HEALTHY alone when nothing applies."""
    recommendations: list[Recommendation] = []
    if summary.unused > 0:
        recommendations.append(Recommendation(kind=RecommendationKind.CLEANUP, count=summary.unused))
    if summary.single_use > inline_threshold:
        recommendations.append(
            Recommendation(kind=RecommendationKind.INLINE, count=summary.single_use)
        )
    if summary.async_issues > 0:
        recommendations.append(
            Recommendation(kind=RecommendationKind.ASYNC_FIX, count=summary.async_issues)
        )
    if not recommendations:
        recommendations.append(Recommendation(kind=RecommendationKind.HEALTHY))
    return tuple(recommendations)


class ConsistencyAnalyzer:
    """Derives async findings, usage tiers, statistics and recommendations.

    Example:
        >>> analyzer = ConsistencyAnalyzer()
        >>> result = analyzer.analyze(graph, root=".")
        >>> result.summary.trackable
        2
    """

    def __init__(self, inline_threshold: int = DEFAULT_INLINE_THRESHOLD) -> None:
        """Initialize analyzer.

        Raises:
            ValueError: If inline_threshold is negative (FAIL-FIRST)
        """
        if inline_threshold < 0:
            raise ValueError(f"inline_threshold must be >= 0, got {inline_threshold}")
        self._inline_threshold = inline_threshold

    def async_findings(self, graph: FrozenCallGraph) -> tuple[AsyncFinding, ...]:
        """Flagged declarations in discovery order."""
        findings: list[AsyncFinding] = []
        for declaration in graph.declarations.values():
            issues = check_async(declaration, graph.aggregate_for(declaration))
            if issues:
                findings.append(AsyncFinding(declaration=declaration, issues=issues))
        return tuple(findings)

    def analyze(
        self,
        graph: FrozenCallGraph,
        *,
        root: str,
        files: tuple[str, ...] = (),
        warnings: tuple[AnalysisWarning, ...] = (),
    ) -> AnalysisResult:
        """Full analysis of a frozen graph.

        Args:
            graph: Frozen call graph
            root: Scanned root, for the report header
            files: Analyzed files in processing order
            warnings: Non-fatal issues collected upstream

        Returns:
            AnalysisResult ready for rendering
        """
        findings = self.async_findings(graph)
        usage = classify_usage(graph)
        summary = summarize(graph, usage, findings)
        return AnalysisResult(
            root=root,
            files=files,
            graph=graph,
            async_findings=findings,
            usage=usage,
            summary=summary,
            recommendations=recommend(summary, self._inline_threshold),
            warnings=warnings,
        )
