"""Namespace — a stack of name levels used for scope bookkeeping."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class Namespace:
    """Ordered set of declared names per active nesting level.

    A name is visible once registered at any active level, so registering
    it again from a deeper level reports it as already known.
    """

    def __init__(self):
        self._levels: list[dict[str, bool]] = []

    @property
    def depth(self) -> int:
        return len(self._levels)

    def enter_level(self):
        self._levels.append({})
        logger.debug("Entered namespace level %d", self.depth)

    def exit_level(self) -> list[str]:
        """Drop the innermost level and return the names it held."""
        level = self._levels.pop()
        logger.debug("Exited namespace level %d", self.depth + 1)
        return list(level)

    def contains(self, name: str) -> bool:
        return any(name in level for level in self._levels)

    def register(self, name: str) -> bool:
        """Add *name* to the innermost level; False if already visible.

        Visibility spans every active level, so a closure assigning to a
        variable of an enclosing level rebinds it instead of shadowing it.
        """
        if self.contains(name):
            return False
        self._levels[-1][name] = True
        return True

    def names(self) -> list[str]:
        """All names across active levels, outermost first, in insertion order."""
        return [name for level in self._levels for name in level]
