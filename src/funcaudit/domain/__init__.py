"""funcaudit domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, dataclasses, enum, re, types, collections.abc
"""

from funcaudit.domain.callgraph import (
    CallAggregate,
    CallGraph,
    CallRecord,
    Declaration,
    DeclarationId,
    FrozenCallGraph,
    SuspensionKind,
    SuspensionPoint,
)
from funcaudit.domain.config import AuditConfig
from funcaudit.domain.exceptions import (
    FatalConfigurationError,
    FrozenGraphInvariantError,
    FuncAuditError,
    ParseError,
    SourceReadError,
)
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
)
from funcaudit.domain.shapes import (
    Accessor,
    Binding,
    BoundFunction,
    Classification,
    DeclaredFunction,
    FunctionShape,
    InlineFunction,
    KeyKind,
    MemberKey,
    MethodMember,
)

__all__ = [
    # Exceptions
    "FuncAuditError",
    "FatalConfigurationError",
    "ParseError",
    "SourceReadError",
    "FrozenGraphInvariantError",
    # Configuration
    "AuditConfig",
    # Shapes
    "Accessor",
    "Binding",
    "KeyKind",
    "MemberKey",
    "DeclaredFunction",
    "MethodMember",
    "BoundFunction",
    "InlineFunction",
    "FunctionShape",
    "Classification",
    # Call graph
    "SuspensionKind",
    "SuspensionPoint",
    "DeclarationId",
    "Declaration",
    "CallRecord",
    "CallAggregate",
    "CallGraph",
    "FrozenCallGraph",
    # Findings
    "AsyncIssueKind",
    "AsyncIssue",
    "AsyncFinding",
    "UsageTier",
    "UsageEntry",
    "UsageReport",
    "Summary",
    "RecommendationKind",
    "Recommendation",
    "WarningKind",
    "AnalysisWarning",
    "AnalysisResult",
]
