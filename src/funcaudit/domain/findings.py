"""Domain layer: analysis findings, statistics, warnings.

Immutable value objects produced by the consistency & usage analyzer
and consumed by reporters.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from funcaudit.domain.callgraph import CallAggregate, CallRecord, Declaration, FrozenCallGraph


class AsyncIssueKind(Enum):
    """Async/await consistency flag.

    UNNECESSARY_ASYNC: async, never suspends
    MISSING_AWAIT:     async, called without await
    MISSING_ASYNC:     suspends, not async
    UNNECESSARY_AWAIT: not async, called with await
    """

    UNNECESSARY_ASYNC = "unnecessary-async"
    MISSING_AWAIT = "missing-await"
    MISSING_ASYNC = "missing-async"
    UNNECESSARY_AWAIT = "unnecessary-await"

    @property
    def cites_call_sites(self) -> bool:
        """Flag is about call sites rather than the declaration itself."""
        return self in (AsyncIssueKind.MISSING_AWAIT, AsyncIssueKind.UNNECESSARY_AWAIT)


@dataclass(frozen=True, slots=True)
class AsyncIssue:
    """One flag on one declaration.

    Attributes:
        kind: Flag kind
        call_sites: Offending call sites (await flags only)
    """

    kind: AsyncIssueKind
    call_sites: tuple[CallRecord, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.kind.cites_call_sites and not self.call_sites:
            raise ValueError(f"{self.kind.value} requires call_sites")
        if not self.kind.cites_call_sites and self.call_sites:
            raise ValueError(f"{self.kind.value} must not carry call_sites")

    @property
    def weight(self) -> int:
        """Contribution to the async issue count: one per cited site, else one."""
        return len(self.call_sites) if self.kind.cites_call_sites else 1


@dataclass(frozen=True, slots=True)
class AsyncFinding:
    """All flags of one declaration (at least one)."""

    declaration: Declaration
    issues: tuple[AsyncIssue, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.issues:
            raise ValueError("finding must have at least one issue")

    @property
    def kinds(self) -> frozenset[AsyncIssueKind]:
        """Flag kinds present."""
        return frozenset(issue.kind for issue in self.issues)

    @property
    def weight(self) -> int:
        """Contribution to the async issue count."""
        return sum(issue.weight for issue in self.issues)


class UsageTier(Enum):
    """Usage frequency tier."""

    UNUSED = "unused"
    SINGLE_USE = "single-use"
    WELL_USED = "well-used"

    @classmethod
    def for_count(cls, total_calls: int) -> UsageTier:
        """Tier for a call count."""
        if total_calls < 0:
            raise ValueError(f"total_calls must be >= 0, got {total_calls}")
        if total_calls == 0:
            return cls.UNUSED
        if total_calls == 1:
            return cls.SINGLE_USE
        return cls.WELL_USED


@dataclass(frozen=True, slots=True)
class UsageEntry:
    """Declaration with its call aggregate."""

    declaration: Declaration
    aggregate: CallAggregate

    @property
    def tier(self) -> UsageTier:
        """Usage tier from total calls."""
        return UsageTier.for_count(self.aggregate.total_calls)


@dataclass(frozen=True, slots=True)
class UsageReport:
    """Usage tiers partitioning all tracked declarations.

    unused and single_use are in discovery order.
    well_used is sorted by total calls descending, ties in discovery order.
    """

    unused: tuple[UsageEntry, ...] = ()
    single_use: tuple[UsageEntry, ...] = ()
    well_used: tuple[UsageEntry, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for tier, entries in (
            (UsageTier.UNUSED, self.unused),
            (UsageTier.SINGLE_USE, self.single_use),
            (UsageTier.WELL_USED, self.well_used),
        ):
            for entry in entries:
                if entry.tier is not tier:
                    raise ValueError(f"{entry.declaration.name} is not {tier.value}")

    @property
    def total(self) -> int:
        """Number of classified declarations."""
        return len(self.unused) + len(self.single_use) + len(self.well_used)


def percent(part: int, whole: int) -> int:
    """Whole-number percentage rounded half up. 0 when whole is 0."""
    if whole <= 0:
        return 0
    return (part * 200 + whole) // (whole * 2)


@dataclass(frozen=True, slots=True)
class Summary:
    """Aggregate statistics of one run.

    Attributes:
        trackable: Tracked declarations
        skipped: Function-like nodes excluded from tracking
        async_count: Tracked async declarations
        unused: Declarations with no call
        single_use: Declarations with exactly one call
        async_issues: Weighted async issue count
    """

    trackable: int
    skipped: int
    async_count: int
    unused: int
    single_use: int
    async_issues: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for name in ("trackable", "skipped", "async_count", "unused", "single_use", "async_issues"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        if self.async_count > self.trackable:
            raise ValueError("async_count must be <= trackable")
        if self.unused + self.single_use > self.trackable:
            raise ValueError("unused + single_use must be <= trackable")

    @property
    def total_functions(self) -> int:
        """Tracked plus skipped."""
        return self.trackable + self.skipped

    @property
    def sync_count(self) -> int:
        """Tracked synchronous declarations."""
        return self.trackable - self.async_count

    @property
    def well_used(self) -> int:
        """Declarations with two or more calls."""
        return self.trackable - self.unused - self.single_use

    @property
    def async_percent(self) -> int:
        """Async share of trackable."""
        return percent(self.async_count, self.trackable)

    @property
    def sync_percent(self) -> int:
        """Sync share of trackable."""
        return percent(self.sync_count, self.trackable)

    @property
    def unused_percent(self) -> int:
        """Unused share of trackable."""
        return percent(self.unused, self.trackable)

    @property
    def single_use_percent(self) -> int:
        """Single-use share of trackable."""
        return percent(self.single_use, self.trackable)

    @property
    def usage_efficiency(self) -> int:
        """Well-used share of trackable."""
        return percent(self.well_used, self.trackable)


class RecommendationKind(Enum):
    """Recommendation category."""

    CLEANUP = "cleanup"
    INLINE = "inline"
    ASYNC_FIX = "async-fix"
    HEALTHY = "healthy"


@dataclass(frozen=True, slots=True)
class Recommendation:
    """Derived recommendation.

    Attributes:
        kind: Category
        count: Number of items it concerns (0 for HEALTHY)
    """

    kind: RecommendationKind
    count: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.count < 0:
            raise ValueError(f"count must be >= 0, got {self.count}")


class WarningKind(Enum):
    """Non-fatal condition category."""

    PARSE = "parse"
    FILESYSTEM = "filesystem"


@dataclass(frozen=True, slots=True)
class AnalysisWarning:
    """Non-fatal issue attributable to a path.

    Attributes:
        kind: Category
        path: Relative path of the offending file or directory
        message: Underlying error description
        line: 1-based line when known
    """

    kind: WarningKind
    path: str
    message: str
    line: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.path:
            raise ValueError("path must not be empty")
        if not self.message:
            raise ValueError("message must not be empty")
        if self.line is not None and self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")

    def __str__(self) -> str:
        """Format as path[:line]: message."""
        where = f"{self.path}:{self.line}" if self.line is not None else self.path
        return f"{where}: {self.message}"


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Everything a reporter needs.

    Attributes:
        root: Scanned root as given by the user
        files: Discovered files in processing order
        graph: Frozen call graph
        async_findings: Flagged declarations in discovery order
        usage: Usage tiers
        summary: Statistics
        recommendations: Derived recommendations (never empty)
        warnings: Non-fatal issues in occurrence order
    """

    root: str
    files: tuple[str, ...]
    graph: FrozenCallGraph
    async_findings: tuple[AsyncFinding, ...]
    usage: UsageReport
    summary: Summary
    recommendations: tuple[Recommendation, ...]
    warnings: tuple[AnalysisWarning, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.usage.total != self.summary.trackable:
            raise ValueError(
                f"usage tiers cover {self.usage.total} declarations, "
                f"expected {self.summary.trackable}"
            )
        if not self.recommendations:
            raise ValueError("recommendations must not be empty")

    @property
    def analyzed_files(self) -> int:
        """Discovered files that were read and parsed without a warning."""
        failed = {warning.path for warning in self.warnings}
        return sum(1 for path in self.files if path not in failed)
