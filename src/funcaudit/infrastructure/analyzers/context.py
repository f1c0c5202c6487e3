"""Stack-based context tracking for syntax tree traversal."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class AnalysisContext:
    """Stack of enclosing classes during traversal.

    Mutable - push/pop during traversal.
    Owning type of a function is the innermost enclosing class.
    """

    _classes: list[str] = field(default_factory=list)

    def push_class(self, name: str) -> None:
        """Enter class body. O(1).

        Raises:
            ValueError: If name is empty (FAIL-FIRST)
        """
        if not name:
            raise ValueError("class context requires name")
        self._classes.append(name)

    def pop_class(self) -> str:
        """Exit class body. O(1).

        Raises:
            IndexError: If stack is empty
        """
        if not self._classes:
            raise IndexError("cannot pop from empty context stack")
        return self._classes.pop()

    @property
    def current_class(self) -> str | None:
        """Innermost enclosing class name. O(1)."""
        return self._classes[-1] if self._classes else None
