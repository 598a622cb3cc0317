"""Navigation stack for a single navigation root."""
from __future__ import annotations

from typing import Iterator, Optional

from .destinations import Destination


class NavigationPath:
    """Stack of destinations pushed on top of a root screen.

    An empty path means the root screen is showing. Entries have no identity
    beyond their position, so the same destination may appear more than once.
    """

    def __init__(self, entries: Optional[list[Destination]] = None):
        self._stack: list[Destination] = list(entries or [])

    def push(self, destination: Destination) -> None:
        """Navigate forward by pushing onto the stack."""
        self._stack.append(destination)

    def pop(self) -> Optional[Destination]:
        """Remove the top entry.

        Returns:
            The popped destination, or None if already at the root
        """
        if self._stack:
            return self._stack.pop()
        return None

    def pop_many(self, count: int) -> list[Destination]:
        """Remove up to ``count`` entries from the top.

        Negative counts are treated as zero and counts larger than the depth
        clear the stack. Returns the removed entries, topmost first.
        """
        n = min(max(count, 0), len(self._stack))
        removed = [self._stack.pop() for _ in range(n)]
        return removed

    def clear(self) -> None:
        self._stack = []

    def top(self) -> Optional[Destination]:
        return self._stack[-1] if self._stack else None

    def depth(self) -> int:
        return len(self._stack)

    def is_empty(self) -> bool:
        return not self._stack

    def entries(self) -> tuple[Destination, ...]:
        """Read-only snapshot of the stack, root side first."""
        return tuple(self._stack)

    def breadcrumbs(self, root_label: str = "Home") -> str:
        """Generate a breadcrumb string like "Home > Product Details > AR Try-On"."""
        labels = [root_label] + [d.title for d in self._stack]
        return " > ".join(labels)

    def __len__(self) -> int:
        return len(self._stack)

    def __iter__(self) -> Iterator[Destination]:
        return iter(tuple(self._stack))

    def __repr__(self) -> str:
        return f"NavigationPath({self._stack!r})"
