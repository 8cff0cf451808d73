"""Build-wide diagnostic accumulator."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from archdsl.domain.model.diagnostic import Diagnostic
from archdsl.domain.model.enums import DiagnosticKind

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DiagnosticCollector:
    """Append-only list of diagnostics for one build.

    Recording never raises: the walk continues so one build surfaces
    all defects.
    """

    _diagnostics: list[Diagnostic] = field(default_factory=list)

    def record(self, diagnostic: Diagnostic) -> Diagnostic:
        """Append diagnostic and return it.

        Raises:
            TypeError: If diagnostic is not a Diagnostic (FAIL-FIRST)
        """
        if not isinstance(diagnostic, Diagnostic):
            raise TypeError(f"expected Diagnostic, got {type(diagnostic).__name__}")
        self._diagnostics.append(diagnostic)
        logger.debug("diagnostic #%d: %s", len(self._diagnostics), diagnostic)
        return diagnostic

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """All diagnostics in recorded order."""
        return tuple(self._diagnostics)

    def count(self, kind: DiagnosticKind | None = None) -> int:
        """Number of diagnostics, optionally of one kind."""
        if kind is None:
            return len(self._diagnostics)
        return sum(1 for d in self._diagnostics if d.kind == kind)

    def __len__(self) -> int:
        return len(self._diagnostics)
