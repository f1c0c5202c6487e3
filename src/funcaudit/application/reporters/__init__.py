"""Reporters for analysis output.

TextReportRenderer streams the report to a rich Console;
save_report persists it as a timestamped text file.
"""

from funcaudit.application.reporters._base import BaseReporter
from funcaudit.application.reporters.artifact import report_path, save_report
from funcaudit.application.reporters.text import TextReportRenderer

__all__ = [
    "BaseReporter",
    "TextReportRenderer",
    "report_path",
    "save_report",
]
