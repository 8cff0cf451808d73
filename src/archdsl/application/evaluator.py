"""Evaluator: evaluation context + diagnostic collector + build config.

Every DSL operation goes through one Evaluator. It owns the only mutable
build state besides the tree itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from archdsl.application.context import EvaluationContext, TopLevel
from archdsl.application.diagnostics import DiagnosticCollector
from archdsl.domain.exceptions import BuildAborted
from archdsl.domain.model.capabilities import supports
from archdsl.domain.model.configuration import BuildConfig
from archdsl.domain.model.diagnostic import CallSite, Diagnostic
from archdsl.domain.model.enums import DiagnosticKind

if TYPE_CHECKING:
    from archdsl.domain.model.elements import Node
    from archdsl.domain.model.enums import Capability

logger = logging.getLogger(__name__)

SiteResolver = Callable[[], CallSite | None]


class Evaluator:
    """Sequences nested DSL bodies and records diagnostics.

    Attributes:
        context: Stack of nodes being built
        collector: Diagnostics recorded so far
        config: Build configuration
    """

    def __init__(
        self,
        config: BuildConfig | None = None,
        *,
        site_resolver: SiteResolver | None = None,
    ) -> None:
        """Initialize evaluator.

        Args:
            config: Build configuration. Uses defaults if None.
            site_resolver: Returns the DSL caller location. None = no capture.
        """
        self.config = config or BuildConfig()
        self.context = EvaluationContext()
        self.collector = DiagnosticCollector()
        self._site_resolver = site_resolver

    def current(self) -> Node | TopLevel:
        """Node currently being configured, TOP_LEVEL if none."""
        return self.context.current()

    def require(self, operation: str, capability: Capability) -> Node | None:
        """Return current node if it declares capability, else report.

        Args:
            operation: DSL keyword for the diagnostic
            capability: Capability the operation needs

        Returns:
            Current node, or None after recording INCOMPATIBLE_CONTEXT
        """
        node = self.current()
        if isinstance(node, TopLevel) or not supports(node, capability):
            self.incompatible(operation)
            return None
        return node

    def report(
        self,
        kind: DiagnosticKind,
        operation: str,
        message: str,
        *,
        value: object = None,
        reason: str | None = None,
    ) -> Diagnostic:
        """Record a diagnostic against the current node.

        Raises:
            BuildAborted: In fail-fast mode, after recording
        """
        site = None
        if self.config.capture_call_sites and self._site_resolver is not None:
            site = self._site_resolver()
        diagnostic = Diagnostic(
            kind=kind,
            message=message,
            operation=operation,
            subject=self.current().display_name,
            value=None if value is None else repr(value),
            reason=reason,
            call_site=site,
        )
        self.collector.record(diagnostic)
        if self.config.fail_fast:
            raise BuildAborted(diagnostic)
        return diagnostic

    def incompatible(self, operation: str) -> Diagnostic:
        """Record INCOMPATIBLE_CONTEXT for operation in the current node."""
        where = self.current().display_name
        return self.report(
            DiagnosticKind.INCOMPATIBLE_CONTEXT,
            operation,
            f"incompatible DSL: {operation} cannot be used in {where}",
        )

    def invalid_argument(self, operation: str, expected: str, got: object) -> Diagnostic:
        """Record INVALID_ARGUMENT for a mistyped argument."""
        return self.report(
            DiagnosticKind.INVALID_ARGUMENT,
            operation,
            f"{operation}: cannot use {got!r} ({type(got).__name__}) as {expected}",
            value=got,
        )

    def run_body(self, operation: str, body: Callable[[], object], node: Node) -> bool:
        """Run a nested body with node as current context.

        Fail-fast aborts are re-raised so they unwind to the root.

        Returns:
            True if body completed, False if skipped or aborted
        """
        max_depth = self.config.max_depth
        if max_depth is not None and self.context.depth >= max_depth:
            self.report(
                DiagnosticKind.INVALID_ARGUMENT,
                operation,
                f"{operation}: maximum nesting depth {max_depth} exceeded",
            )
            return False

        completed = self.context.execute(body, node)
        if not completed and self.config.fail_fast and len(self.collector) > 0:
            raise BuildAborted(self.collector.diagnostics[-1])
        return completed
