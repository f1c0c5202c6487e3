"""Domain exceptions: all public errors of funcaudit.

All exceptions visible to users are defined in the domain.
Infrastructure/Application raise these, not their own public exceptions.
"""


class FuncAuditError(Exception):
    """Base for all funcaudit exceptions.

    Allows: except FuncAuditError to catch all library errors.
    """


class FatalConfigurationError(FuncAuditError, ValueError):
    """Scan root is unusable. Aborts the run before any analysis.

    Attributes:
        root: Path that was requested.
        reason: Why the root cannot be scanned.
    """

    def __init__(self, *, root: str, reason: str) -> None:
        """Initialize with requested root and reason."""
        self.root = root
        self.reason = reason
        super().__init__(f'Folder "{root}" {reason}')


class ParseError(FuncAuditError, SyntaxError):
    """Failed to parse a script source file.

    Non-fatal: the file contributes nothing and the run continues.
    Inherits SyntaxError for semantic correctness.

    Attributes:
        path: Path to file that failed.
        reason: Error description.
        line: 1-based line of the first syntax error, None if unknown.
    """

    def __init__(self, *, path: str, reason: str, line: int | None = None) -> None:
        """Initialize with file path, error reason and optional line."""
        self.path = path
        self.reason = reason
        self.line = line
        where = f"{path}:{line}" if line is not None else path
        super().__init__(f"{where}: {reason}")


class SourceReadError(FuncAuditError, OSError):
    """Source file could not be read (permissions, encoding, vanished).

    Non-fatal: recorded as a file-system warning.

    Attributes:
        path: Path to file that failed.
        reason: Error description.
    """

    def __init__(self, *, path: str, reason: str) -> None:
        """Initialize with file path and error reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class FrozenGraphInvariantError(FuncAuditError, ValueError):
    """Frozen call graph violates an invariant.

    Raised when a declaration name has no call aggregate.

    Attributes:
        names: Declaration names without an aggregate.
    """

    def __init__(self, names: frozenset[str]) -> None:
        """Initialize with offending names."""
        self.names = names
        super().__init__(f"declarations without call aggregate: {sorted(names)}")
