"""Application layer for function audits.

Components:
- discovery: Source file enumeration (git or directory walk)
- static_analysis: Declaration classifier and call graph builder
- services: Consistency analyzer and AuditService facade
- reporters: Text report rendering and persistence
"""

from funcaudit.application.discovery import DiscoveryResult, discover_files
from funcaudit.application.reporters import BaseReporter, TextReportRenderer, save_report
from funcaudit.application.services import AuditOutcome, AuditService, ConsistencyAnalyzer
from funcaudit.application.static_analysis import CallGraphBuilder, DeclarationClassifier

__all__ = [
    # Discovery
    "DiscoveryResult",
    "discover_files",
    # Static analysis
    "CallGraphBuilder",
    "DeclarationClassifier",
    # Services
    "AuditOutcome",
    "AuditService",
    "ConsistencyAnalyzer",
    # Reporters
    "BaseReporter",
    "TextReportRenderer",
    "save_report",
]
