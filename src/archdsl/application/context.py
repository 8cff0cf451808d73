"""Stack-based evaluation context for nested DSL bodies."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Final

from archdsl.domain.exceptions import BuildAborted, EmptyContextError
from archdsl.domain.model.elements import Node

logger = logging.getLogger(__name__)


class TopLevel:
    """Sentinel returned by current() when no node is being built."""

    __slots__ = ()

    @property
    def display_name(self) -> str:
        return "top level"

    def __repr__(self) -> str:
        return "TOP_LEVEL"


TOP_LEVEL: Final = TopLevel()


@dataclass(slots=True)
class EvaluationContext:
    """Stack of nodes currently being configured.

    Mutable - push/pop around every body. Single-threaded: each build owns
    its own context.

    Attributes:
        _stack: Node frames, innermost last
    """

    _stack: list[Node] = field(default_factory=list)

    def push(self, node: Node) -> None:
        """Enter node body. O(1).

        Raises:
            TypeError: If node is not a Node (FAIL-FIRST)
        """
        if not isinstance(node, Node):
            raise TypeError(f"node must be Node, got {type(node).__name__}")
        self._stack.append(node)
        logger.debug("push %s (depth=%d)", node.display_name, len(self._stack))

    def pop(self) -> Node:
        """Exit current node body. O(1).

        Returns:
            The popped node

        Raises:
            EmptyContextError: If stack is empty
        """
        if not self._stack:
            raise EmptyContextError()
        node = self._stack.pop()
        logger.debug("pop %s (depth=%d)", node.display_name, len(self._stack))
        return node

    def current(self) -> Node | TopLevel:
        """Node on top of the stack, TOP_LEVEL if empty."""
        if not self._stack:
            return TOP_LEVEL
        return self._stack[-1]

    def execute(self, body: Callable[[], object], node: Node) -> bool:
        """Run body with node as the current context.

        The frame is popped on every exit path. A BuildAborted signal raised
        by the body is absorbed and reported as failure; any other exception
        propagates after the pop.

        Args:
            body: Zero-argument callable
            node: Node the body configures

        Returns:
            True if body returned normally, False if it was aborted
        """
        self.push(node)
        try:
            body()
        except BuildAborted as signal:
            logger.debug("body of %s aborted: %s", node.display_name, signal)
            return False
        finally:
            self.pop()
        return True

    @property
    def frames(self) -> tuple[Node, ...]:
        """Snapshot of the stack, outermost first."""
        return tuple(self._stack)

    @property
    def depth(self) -> int:
        """Current nesting depth (stack size)."""
        return len(self._stack)

    @property
    def is_empty(self) -> bool:
        """Check if no node is being built."""
        return len(self._stack) == 0
