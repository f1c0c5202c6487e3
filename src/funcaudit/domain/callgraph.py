"""Domain layer: static call graph built by name.

Declarations keyed by identity, call aggregates keyed by bare callee name.
Aggregation is by name only: two declarations sharing a name
share one aggregate, regardless of file or owning type.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from funcaudit.domain.exceptions import FrozenGraphInvariantError


class SuspensionKind(Enum):
    """Syntactic kind of a suspension point.

    AWAIT:          await expr
    FOR_AWAIT:      for await (x of xs)
    PROMISE_CHAIN:  p.then() / p.catch() / p.finally()
    PROMISE_STATIC: Promise.all() / Promise.resolve() / ...
    """

    AWAIT = "await"
    FOR_AWAIT = "for await"
    PROMISE_CHAIN = "promise chain"
    PROMISE_STATIC = "promise static"


@dataclass(frozen=True, slots=True)
class SuspensionPoint:
    """Point inside a function body where execution may suspend.

    Attributes:
        line: Line number (1-based)
        kind: Syntactic kind
        label: Short source description (e.g. "then", "Promise.all")
    """

    line: int
    kind: SuspensionKind
    label: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")
        if not self.label:
            raise ValueError("label must not be empty")


@dataclass(frozen=True, slots=True, order=True)
class DeclarationId:
    """Identity of a declaration: unique even when names collide."""

    file: str
    name: str
    line: int

    def __str__(self) -> str:
        """Format as file:name:line."""
        return f"{self.file}:{self.name}:{self.line}"


@dataclass(frozen=True, slots=True)
class Declaration:
    """Tracked function-like construct.

    Attributes:
        name: Canonical name from the classifier
        file: Relative path of the declaring file
        line: Line of the declaring node (1-based)
        is_async: Declared with the async keyword
        owning_type: Enclosing class name, None for free declarations
        suspension_points: Suspension points in its own body, in source order
    """

    name: str
    file: str
    line: int
    is_async: bool = False
    owning_type: str | None = None
    suspension_points: tuple[SuspensionPoint, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not self.file:
            raise ValueError("file must not be empty")
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")
        if self.owning_type == "":
            raise ValueError("owning_type must be non-empty string or None")

    @property
    def identity(self) -> DeclarationId:
        """Identity key (file, name, line)."""
        return DeclarationId(file=self.file, name=self.name, line=self.line)

    @property
    def suspends(self) -> bool:
        """Has at least one suspension point."""
        return bool(self.suspension_points)

    @property
    def site(self) -> str:
        """Format as file:line."""
        return f"{self.file}:{self.line}"


@dataclass(frozen=True, slots=True)
class CallRecord:
    """One textual invocation site.

    Attributes:
        callee_name: Bare identifier or right-most member property
        file: Relative path of the calling file
        line: Line of the call expression (1-based)
        awaited: Call is the direct operand of await
    """

    callee_name: str
    file: str
    line: int
    awaited: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.callee_name:
            raise ValueError("callee_name must not be empty")
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")

    @property
    def site(self) -> str:
        """Format as file:line."""
        return f"{self.file}:{self.line}"


@dataclass(frozen=True, slots=True)
class CallAggregate:
    """All call sites of one callee name.

    total_calls is derived from callers, never stored separately.
    """

    callers: tuple[CallRecord, ...] = ()

    @property
    def total_calls(self) -> int:
        """Number of call sites."""
        return len(self.callers)

    @property
    def awaited_callers(self) -> tuple[CallRecord, ...]:
        """Call sites that await the result."""
        return tuple(c for c in self.callers if c.awaited)

    @property
    def unawaited_callers(self) -> tuple[CallRecord, ...]:
        """Call sites that do not await the result."""
        return tuple(c for c in self.callers if not c.awaited)


@dataclass(frozen=True, slots=True)
class FrozenCallGraph:
    """Immutable snapshot of CallGraph.

    Created by CallGraph.freeze().

    Attributes:
        declarations: Tracked declarations in discovery order
        aggregates: Callee name -> call aggregate
        skipped_count: Function-like nodes not tracked (inline, blacklisted)
    """

    declarations: Mapping[DeclarationId, Declaration]
    aggregates: Mapping[str, CallAggregate]
    skipped_count: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.skipped_count < 0:
            raise ValueError(f"skipped_count must be >= 0, got {self.skipped_count}")
        missing = frozenset(d.name for d in self.declarations.values()) - self.aggregates.keys()
        if missing:
            raise FrozenGraphInvariantError(missing)

    def aggregate_for(self, declaration: Declaration) -> CallAggregate:
        """Call aggregate for a declaration's name."""
        return self.aggregates[declaration.name]

    @property
    def trackable_count(self) -> int:
        """Number of tracked declarations."""
        return len(self.declarations)

    @classmethod
    def empty(cls) -> FrozenCallGraph:
        """Create empty graph for tests or empty scans."""
        return cls(
            declarations=MappingProxyType({}),
            aggregates=MappingProxyType({}),
        )


@dataclass(slots=True)
class CallGraph:
    """Mutable call graph used during the traversal pass.

    Owned by a single analysis run. Call freeze() to get an immutable
    snapshot.

    NOT frozen because it's a mutable collector.
    """

    _declarations: dict[DeclarationId, Declaration] = field(default_factory=dict)
    _callers: dict[str, list[CallRecord]] = field(default_factory=dict)
    _skipped: int = 0

    def add_declaration(self, declaration: Declaration) -> None:
        """Register a tracked declaration and ensure its aggregate exists.

        A duplicate identity replaces the earlier declaration in place.
        """
        self._declarations[declaration.identity] = declaration
        self._callers.setdefault(declaration.name, [])

    def record_call(self, record: CallRecord) -> None:
        """Append a call site to its callee's aggregate."""
        self._callers.setdefault(record.callee_name, []).append(record)

    def note_skipped(self) -> None:
        """Count one function-like node excluded from tracking."""
        self._skipped += 1

    @property
    def declaration_count(self) -> int:
        """Current number of tracked declarations."""
        return len(self._declarations)

    @property
    def skipped_count(self) -> int:
        """Current number of skipped function-like nodes."""
        return self._skipped

    def freeze(self) -> FrozenCallGraph:
        """Create immutable snapshot."""
        return FrozenCallGraph(
            declarations=MappingProxyType(dict(self._declarations)),
            aggregates=MappingProxyType(
                {name: CallAggregate(callers=tuple(records)) for name, records in self._callers.items()}
            ),
            skipped_count=self._skipped,
        )
