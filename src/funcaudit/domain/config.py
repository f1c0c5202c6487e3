"""Audit configuration.

Immutable configuration object with FAIL-FIRST validation.
All fields have defaults matching common JavaScript project layouts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_EXTENSIONS = frozenset({".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"})

# Dependency cache, build output, version control
DEFAULT_EXCLUDE_DIRS = frozenset({"node_modules", "dist", "build", ".git"})

# Invoked by frameworks/runtimes, never through a visible call expression
DEFAULT_BLACKLIST = frozenset(
    {
        "render",
        "preloadTemplates",
        "constructor",
        # Event handlers
        "onChange",
        "onClick",
        "onSubmit",
        "onLoad",
        "onReady",
        "onFocus",
        "onBlur",
        "onMouseDown",
        "onMouseUp",
        "onMouseOver",
        "onMouseOut",
        "onKeyDown",
        "onKeyUp",
        "onInput",
        "onScroll",
        "onResize",
        "onError",
        "onSuccess",
        "onComplete",
        # Lifecycle methods
        "componentDidMount",
        "componentWillUnmount",
        "componentDidUpdate",
        "beforeMount",
        "mounted",
        "beforeUpdate",
        "updated",
        "beforeDestroy",
        "destroyed",
        # Hooks
        "useEffect",
        "useState",
        "useCallback",
        "useMemo",
        "useRef",
    },
)

DEFAULT_HANDLER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^on[A-Z]"),
    re.compile(r"^handle[A-Z]"),
    re.compile(r"Handler$"),
    re.compile(r"Listener$"),
    re.compile(r"Callback$"),
    re.compile(r"^_on[A-Z]"),
)

DEFAULT_INLINE_THRESHOLD = 5

DEFAULT_REPORT_PREFIX = "function-analysis-report"


@dataclass(frozen=True, slots=True)
class AuditConfig:
    """Configuration for one audit run.

    Attributes:
        extensions: Recognized source suffixes (lowercase, with dot).
        exclude_dirs: Directory names skipped at any depth.
        blacklist: Framework-invoked names never reported.
        handler_patterns: Naming conventions for framework-invoked handlers.
        inline_threshold: Single-use count above which inlining is suggested.
        prefer_git: Enumerate files with git when the root is a work tree.
        report_prefix: File name prefix of the persisted report.
    """

    extensions: frozenset[str] = DEFAULT_EXTENSIONS
    exclude_dirs: frozenset[str] = DEFAULT_EXCLUDE_DIRS
    blacklist: frozenset[str] = DEFAULT_BLACKLIST
    handler_patterns: tuple[re.Pattern[str], ...] = DEFAULT_HANDLER_PATTERNS
    inline_threshold: int = DEFAULT_INLINE_THRESHOLD
    prefer_git: bool = True
    report_prefix: str = DEFAULT_REPORT_PREFIX

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.extensions:
            raise ValueError("extensions must not be empty")
        for ext in self.extensions:
            if not ext.startswith(".") or ext != ext.lower():
                raise ValueError(f"extension must be lowercase and start with '.', got {ext!r}")
        if any(not name or "/" in name for name in self.exclude_dirs):
            raise ValueError("exclude_dirs must contain plain directory names")
        if self.inline_threshold < 0:
            raise ValueError(f"inline_threshold must be >= 0, got {self.inline_threshold}")
        if not self.report_prefix or "/" in self.report_prefix:
            raise ValueError("report_prefix must be a non-empty file name prefix")

    def is_framework_invoked(self, name: str) -> bool:
        """Check if name is called by a framework rather than by visible code."""
        if name in self.blacklist:
            return True
        return any(pattern.search(name) for pattern in self.handler_patterns)
