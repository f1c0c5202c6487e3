"""Main facade for a function audit run.

AuditService wires discovery, parsing, call graph construction, analysis
and reporting. Composition-based: parser and configuration are injectable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from funcaudit.application.discovery import discover_files
from funcaudit.application.reporters import TextReportRenderer, save_report
from funcaudit.application.services.analyzer import ConsistencyAnalyzer
from funcaudit.application.static_analysis import CallGraphBuilder, DeclarationClassifier
from funcaudit.domain.config import AuditConfig
from funcaudit.domain.exceptions import ParseError, SourceReadError
from funcaudit.domain.findings import AnalysisWarning, WarningKind
from funcaudit.infrastructure.parser import ScriptParser

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from funcaudit.domain.findings import AnalysisResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuditOutcome:
    """Result of a full run.

    Attributes:
        result: Analysis result
        report_lines: Rendered report
        report_path: Saved artifact, None when not saved or write failed
    """

    result: AnalysisResult
    report_lines: tuple[str, ...]
    report_path: Path | None = None


class AuditService:
    """Main facade for function audits.

    Example:
        service = AuditService()
        outcome = service.run(Path("src"), console=Console())
        print(outcome.result.summary.unused)
    """

    def __init__(
        self,
        config: AuditConfig | None = None,
        *,
        parser: ScriptParser | None = None,
    ) -> None:
        """Initialize service.

        Args:
            config: Audit configuration (defaults when None)
            parser: Script parser (new instance when None)
        """
        self._config = config if config is not None else AuditConfig()
        self._parser = parser if parser is not None else ScriptParser()

    @property
    def config(self) -> AuditConfig:
        """Active configuration."""
        return self._config

    def analyze(self, root: Path) -> AnalysisResult:
        """Discover, parse and analyze every source file under root.

        Per-file read and parse failures become warnings; the run continues.

        Args:
            root: Directory to scan

        Returns:
            AnalysisResult

        Raises:
            FatalConfigurationError: If root does not exist or is not a directory
        """
        discovery = discover_files(root, self._config)
        logger.info("analyzing %d files under %s (%s)", len(discovery.files), root, discovery.method.value)

        warnings: list[AnalysisWarning] = list(discovery.warnings)
        builder = CallGraphBuilder(DeclarationClassifier(self._config))

        for relative in discovery.files:
            try:
                tree = self._parser.parse_file(root / relative, relative)
            except ParseError as e:
                logger.warning("parse error: %s", e)
                warnings.append(
                    AnalysisWarning(
                        kind=WarningKind.PARSE,
                        path=e.path,
                        message=e.reason,
                        line=e.line,
                    )
                )
                continue
            except SourceReadError as e:
                logger.warning("cannot read %s: %s", e.path, e.reason)
                warnings.append(
                    AnalysisWarning(kind=WarningKind.FILESYSTEM, path=e.path, message=e.reason)
                )
                continue
            builder.add_tree(tree)

        analyzer = ConsistencyAnalyzer(self._config.inline_threshold)
        return analyzer.analyze(
            builder.build(),
            root=str(root),
            files=discovery.files,
            warnings=tuple(warnings),
        )

    def run(
        self,
        root: Path,
        console: Console | None = None,
        *,
        save: bool = True,
        now: datetime | None = None,
    ) -> AuditOutcome:
        """Analyze, stream the report and persist it.

        A failed write is logged and leaves report_path None.

        Args:
            root: Directory to scan
            console: Live output sink (None renders silently)
            save: Persist the report under root
            now: Timestamp for the artifact name (current UTC time when None)

        Returns:
            AuditOutcome

        Raises:
            FatalConfigurationError: If root does not exist or is not a directory
        """
        result = self.analyze(root)
        lines = TextReportRenderer(console).render(result)

        path: Path | None = None
        if save:
            stamp = now if now is not None else datetime.now(UTC)
            try:
                path = save_report(root, lines, prefix=self._config.report_prefix, now=stamp)
            except (OSError, UnicodeError) as e:
                logger.error("error writing report under %s: %s", root, e)
            else:
                logger.info("report saved to %s", path)

        return AuditOutcome(result=result, report_lines=lines, report_path=path)
