"""Application services for function audits.

AuditService is the main facade; ConsistencyAnalyzer derives findings
from a frozen call graph.
"""

from funcaudit.application.services.analyzer import (
    ConsistencyAnalyzer,
    check_async,
    classify_usage,
    recommend,
    summarize,
)
from funcaudit.application.services.audit import AuditOutcome, AuditService

__all__ = [
    "AuditOutcome",
    "AuditService",
    "ConsistencyAnalyzer",
    "check_async",
    "classify_usage",
    "recommend",
    "summarize",
]
