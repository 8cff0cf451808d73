"""Console reporter: BuildResult -> rich console output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from archdsl.application.reporters._base import BaseReporter
from archdsl.application.reporters.tree import build_tree
from archdsl.domain.model.enums import DiagnosticKind

if TYPE_CHECKING:
    from archdsl.domain.model.build_result import BuildResult
    from archdsl.domain.model.diagnostic import Diagnostic


_KIND_STYLES = {
    DiagnosticKind.INCOMPATIBLE_CONTEXT: "red",
    DiagnosticKind.INVALID_ARGUMENT: "yellow",
    DiagnosticKind.VALIDATION_ERROR: "magenta",
    DiagnosticKind.MISSING_BODY: "red",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_tree: Render the published workspace as a tree
        width: Console width when the reporter creates its own console
    """

    show_tree: bool = True
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


class ConsoleReporter(BaseReporter):
    """Rich console reporter.

    Shows all diagnostics, grouped by kind, then the workspace tree.
    """

    def __init__(
        self,
        console: Console | None = None,
        config: ConsoleConfig | None = None,
    ) -> None:
        """Initialize reporter.

        Args:
            console: Destination console. None = new stdout console.
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()
        self._console = console if console is not None else Console(width=self._config.width)

    def report(self, result: BuildResult) -> None:
        """Render build result to the console."""
        self._render_header(result)

        if result.diagnostics:
            self._render_diagnostics(result.diagnostics)

        if self._config.show_tree and result.workspace is not None:
            self._console.print()
            self._console.print(build_tree(result.workspace))

        self._render_footer(result)

    def _render_header(self, result: BuildResult) -> None:
        self._console.rule("[bold]Workspace Build[/bold]")
        workspace = result.workspace
        name = workspace.display_name if workspace is not None else "<not published>"
        self._console.print(Text(f"Workspace: {name}"))
        self._console.print(f"Diagnostics: {result.diagnostic_count}")

    def _render_diagnostics(self, diagnostics: tuple[Diagnostic, ...]) -> None:
        table = Table(title="Diagnostics", show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Kind")
        table.add_column("Operation", style="cyan")
        table.add_column("Subject")
        table.add_column("Message")
        table.add_column("Site", style="dim")

        ordered = sorted(
            enumerate(diagnostics, start=1),
            key=lambda pair: list(DiagnosticKind).index(pair[1].kind),
        )
        for index, diagnostic in ordered:
            table.add_row(
                str(index),
                Text(diagnostic.kind.name, style=_KIND_STYLES[diagnostic.kind]),
                Text(diagnostic.operation),
                Text(diagnostic.subject),
                Text(diagnostic.message),
                Text(str(diagnostic.call_site) if diagnostic.call_site else "-"),
            )
        self._console.print(table)

    def _render_footer(self, result: BuildResult) -> None:
        if result.passed:
            self._console.rule("[bold green]PASSED[/bold green]")
        else:
            self._console.rule("[bold red]FAILED[/bold red]")
