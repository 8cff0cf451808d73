"""Domain exceptions: all public errors of archdsl.

Hexagonal architecture: all exceptions visible to users defined in domain.
DSL misuse inside a body is NOT raised - it is recorded as a Diagnostic.
These exceptions cover host misuse and flow control only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from archdsl.domain.model.diagnostic import Diagnostic


class ArchDslError(Exception):
    """Base for all archdsl error exceptions.

    Allows: except ArchDslError to catch all library errors.
    """


# N818: Signals are NOT errors, so no "Error" suffix per PEP 8.
class ArchDslSignal(Exception):  # noqa: N818
    """Base for all archdsl signal exceptions (flow control, not errors).

    Allows: except ArchDslSignal to catch all library signals.
    """


class BuildAborted(ArchDslSignal):  # noqa: N818
    """Signal to abandon the body currently being evaluated.

    Raised in fail-fast mode right after the first diagnostic is recorded.
    EvaluationContext.execute() captures it and reports failure.

    Attributes:
        diagnostic: Diagnostic that triggered the abort.
    """

    def __init__(self, diagnostic: Diagnostic) -> None:
        """Initialize with triggering diagnostic."""
        self.diagnostic = diagnostic
        super().__init__(f"build aborted: {diagnostic.message}")


class EmptyContextError(ArchDslError, IndexError):
    """Pop requested on an empty evaluation context.

    Inherits IndexError for semantic correctness (empty stack).
    """

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("cannot pop from empty evaluation context")


class WorkspaceAlreadyDefinedError(ArchDslError, RuntimeError):
    """A workspace was already published by this build.

    Workspace must appear exactly once per build.

    Attributes:
        name: Name of the workspace already published.
    """

    def __init__(self, name: str) -> None:
        """Initialize with the published workspace name."""
        self.name = name
        super().__init__(f"workspace already defined in this build: {name!r}")


class BuildFailedError(ArchDslError):
    """Build produced diagnostics or no workspace.

    Raised by BuildResult.raise_for_diagnostics().

    Attributes:
        diagnostics: All recorded diagnostics (may be empty when the
            workspace was simply never published).
    """

    def __init__(self, diagnostics: tuple[Diagnostic, ...]) -> None:
        self.diagnostics = diagnostics

        if not diagnostics:
            super().__init__("build failed: no workspace published")
            return

        msg_parts = [f"build failed with {len(diagnostics)} diagnostic(s):"]
        for d in diagnostics:
            msg_parts.append(str(d))
        super().__init__("\n".join(msg_parts))
