"""Build result aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from archdsl.domain.exceptions import BuildFailedError

if TYPE_CHECKING:
    from archdsl.domain.model.diagnostic import Diagnostic
    from archdsl.domain.model.elements import Workspace
    from archdsl.domain.model.enums import DiagnosticKind


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of one build.

    The host decides pass/fail: the DSL never raises for diagnostics.

    Attributes:
        workspace: Published workspace, None if the build never published
        diagnostics: All diagnostics in the order they were recorded
    """

    workspace: Workspace | None
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def published(self) -> bool:
        """Check if a workspace was published."""
        return self.workspace is not None

    @property
    def passed(self) -> bool:
        """Check if build published a workspace without diagnostics."""
        return self.published and not self.diagnostics

    @property
    def diagnostic_count(self) -> int:
        """Number of diagnostics."""
        return len(self.diagnostics)

    def by_kind(self, kind: DiagnosticKind) -> tuple[Diagnostic, ...]:
        """Diagnostics of the given kind, in recorded order."""
        return tuple(d for d in self.diagnostics if d.kind == kind)

    def count(self, kind: DiagnosticKind) -> int:
        """Number of diagnostics of the given kind."""
        return len(self.by_kind(kind))

    def raise_for_diagnostics(self) -> Workspace:
        """Return the workspace or raise if the build did not pass.

        Raises:
            BuildFailedError: Diagnostics recorded or nothing published
        """
        if self.workspace is None or self.diagnostics:
            raise BuildFailedError(self.diagnostics)
        return self.workspace

    @classmethod
    def empty(cls) -> BuildResult:
        """Result of a build that has not published anything yet."""
        return cls(workspace=None)
