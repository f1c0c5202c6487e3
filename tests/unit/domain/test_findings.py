"""Tests for domain/findings.py."""

import pytest

from funcaudit.domain.callgraph import CallAggregate, FrozenCallGraph
from funcaudit.domain.findings import (
    AnalysisResult,
    AnalysisWarning,
    AsyncFinding,
    AsyncIssue,
    AsyncIssueKind,
    Recommendation,
    RecommendationKind,
    Summary,
    UsageEntry,
    UsageReport,
    UsageTier,
    WarningKind,
    percent,
)
from tests.factories import make_call, make_declaration


def make_summary(**overrides: int) -> Summary:
    """Create a Summary with zero defaults."""
    values = {
        "trackable": 0,
        "skipped": 0,
        "async_count": 0,
        "unused": 0,
        "single_use": 0,
        "async_issues": 0,
    }
    values.update(overrides)
    return Summary(**values)


class TestAsyncIssue:
    """Tests for AsyncIssue."""

    def test_declaration_flag_weight(self) -> None:
        assert AsyncIssue(kind=AsyncIssueKind.UNNECESSARY_ASYNC).weight == 1

    def test_call_site_flag_weight(self) -> None:
        issue = AsyncIssue(
            kind=AsyncIssueKind.MISSING_AWAIT,
            call_sites=(make_call("f", line=1), make_call("f", line=2)),
        )
        assert issue.weight == 2

    def test_call_site_flag_requires_sites(self) -> None:
        with pytest.raises(ValueError, match="requires call_sites"):
            AsyncIssue(kind=AsyncIssueKind.UNNECESSARY_AWAIT)

    def test_declaration_flag_rejects_sites(self) -> None:
        with pytest.raises(ValueError, match="must not carry call_sites"):
            AsyncIssue(kind=AsyncIssueKind.MISSING_ASYNC, call_sites=(make_call("f"),))

    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            (AsyncIssueKind.UNNECESSARY_ASYNC, False),
            (AsyncIssueKind.MISSING_AWAIT, True),
            (AsyncIssueKind.MISSING_ASYNC, False),
            (AsyncIssueKind.UNNECESSARY_AWAIT, True),
        ],
    )
    def test_cites_call_sites(self, kind: AsyncIssueKind, expected: bool) -> None:
        assert kind.cites_call_sites is expected


class TestAsyncFinding:
    """Tests for AsyncFinding."""

    def test_requires_issue(self) -> None:
        with pytest.raises(ValueError, match="at least one issue"):
            AsyncFinding(declaration=make_declaration("f"), issues=())

    def test_weight_and_kinds(self) -> None:
        finding = AsyncFinding(
            declaration=make_declaration("f", is_async=True),
            issues=(
                AsyncIssue(kind=AsyncIssueKind.UNNECESSARY_ASYNC),
                AsyncIssue(kind=AsyncIssueKind.MISSING_AWAIT, call_sites=(make_call("f"),)),
            ),
        )
        assert finding.weight == 2
        assert finding.kinds == {AsyncIssueKind.UNNECESSARY_ASYNC, AsyncIssueKind.MISSING_AWAIT}


class TestUsageTier:
    """Tests for UsageTier.for_count."""

    @pytest.mark.parametrize(
        ("count", "tier"),
        [(0, UsageTier.UNUSED), (1, UsageTier.SINGLE_USE), (2, UsageTier.WELL_USED), (40, UsageTier.WELL_USED)],
    )
    def test_for_count(self, count: int, tier: UsageTier) -> None:
        assert UsageTier.for_count(count) is tier

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError):
            UsageTier.for_count(-1)


class TestUsageReport:
    """Tests for UsageReport."""

    def test_total(self) -> None:
        unused = UsageEntry(declaration=make_declaration("a"), aggregate=CallAggregate())
        single = UsageEntry(
            declaration=make_declaration("b"),
            aggregate=CallAggregate(callers=(make_call("b"),)),
        )
        report = UsageReport(unused=(unused,), single_use=(single,))
        assert report.total == 2

    def test_wrong_tier_raises(self) -> None:
        entry = UsageEntry(declaration=make_declaration("a"), aggregate=CallAggregate())
        with pytest.raises(ValueError, match="is not well-used"):
            UsageReport(well_used=(entry,))


class TestPercent:
    """Tests for percent helper."""

    def test_zero_whole(self) -> None:
        assert percent(0, 0) == 0
        assert percent(5, 0) == 0

    def test_rounds_half_up(self) -> None:
        assert percent(1, 8) == 13  # 12.5
        assert percent(1, 3) == 33
        assert percent(2, 3) == 67

    def test_full(self) -> None:
        assert percent(7, 7) == 100


class TestSummary:
    """Tests for Summary derived values."""

    def test_derived(self) -> None:
        summary = make_summary(trackable=4, skipped=3, async_count=1, unused=1, single_use=1)

        assert summary.total_functions == 7
        assert summary.sync_count == 3
        assert summary.well_used == 2
        assert summary.async_percent == 25
        assert summary.sync_percent == 75
        assert summary.unused_percent == 25
        assert summary.single_use_percent == 25
        assert summary.usage_efficiency == 50

    def test_zero_trackable(self) -> None:
        summary = make_summary(skipped=2)

        assert summary.async_percent == 0
        assert summary.sync_percent == 0
        assert summary.usage_efficiency == 0

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="skipped must be >= 0"):
            make_summary(skipped=-1)

    def test_tiers_exceed_trackable_raises(self) -> None:
        with pytest.raises(ValueError, match="unused \\+ single_use"):
            make_summary(trackable=1, unused=1, single_use=1)


class TestRecommendation:
    """Tests for Recommendation."""

    def test_negative_count_raises(self) -> None:
        with pytest.raises(ValueError):
            Recommendation(kind=RecommendationKind.CLEANUP, count=-1)


class TestAnalysisWarning:
    """Tests for AnalysisWarning."""

    def test_str_with_line(self) -> None:
        warning = AnalysisWarning(kind=WarningKind.PARSE, path="a.js", message="unexpected token", line=3)
        assert str(warning) == "a.js:3: unexpected token"

    def test_str_without_line(self) -> None:
        warning = AnalysisWarning(kind=WarningKind.FILESYSTEM, path="lib", message="Permission denied")
        assert str(warning) == "lib: Permission denied"

    def test_empty_message_raises(self) -> None:
        with pytest.raises(ValueError, match="message"):
            AnalysisWarning(kind=WarningKind.PARSE, path="a.js", message="")


class TestAnalysisResult:
    """Tests for AnalysisResult invariants."""

    def test_usage_must_cover_trackable(self) -> None:
        with pytest.raises(ValueError, match="usage tiers cover 0"):
            AnalysisResult(
                root=".",
                files=(),
                graph=FrozenCallGraph.empty(),
                async_findings=(),
                usage=UsageReport(),
                summary=make_summary(trackable=1, unused=1),
                recommendations=(Recommendation(kind=RecommendationKind.CLEANUP, count=1),),
            )

    def test_recommendations_required(self) -> None:
        with pytest.raises(ValueError, match="recommendations"):
            AnalysisResult(
                root=".",
                files=(),
                graph=FrozenCallGraph.empty(),
                async_findings=(),
                usage=UsageReport(),
                summary=make_summary(),
                recommendations=(),
            )

    def test_analyzed_files_excludes_warned_paths(self) -> None:
        result = AnalysisResult(
            root=".",
            files=("a.js", "bad.js", "c.js"),
            graph=FrozenCallGraph.empty(),
            async_findings=(),
            usage=UsageReport(),
            summary=make_summary(),
            recommendations=(Recommendation(kind=RecommendationKind.HEALTHY),),
            warnings=(
                AnalysisWarning(kind=WarningKind.PARSE, path="bad.js", message="unexpected token"),
                AnalysisWarning(kind=WarningKind.FILESYSTEM, path="locked", message="Permission denied"),
            ),
        )

        assert result.analyzed_files == 2
