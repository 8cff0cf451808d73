"""Plain text reporter using print().

Stdlib-only reporter for simple text output.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from archdsl.application.reporters._base import BaseReporter
from archdsl.domain.model.enums import DiagnosticKind

if TYPE_CHECKING:
    from archdsl.domain.model.build_result import BuildResult
    from archdsl.domain.model.diagnostic import Diagnostic


class PlainTextReporter(BaseReporter):
    """Plain text reporter using print().

    Outputs to stdout by default, can be configured for any TextIO.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
        """
        self._output = output if output is not None else sys.stdout

    def report(self, result: BuildResult) -> None:
        """Report build result as plain text."""
        self._report_header()
        self._report_summary(result)

        if result.diagnostics:
            self._report_diagnostics(result.diagnostics)

        self._report_footer(result)

    def _write(self, text: str = "") -> None:
        """Write line to output."""
        print(text, file=self._output)

    def _report_header(self) -> None:
        self._write("=" * 70)
        self._write("Workspace Build Results")
        self._write("=" * 70)

    def _report_summary(self, result: BuildResult) -> None:
        self._write()
        self._write("Summary:")
        workspace = result.workspace
        self._write(f"  Workspace: {workspace.display_name if workspace else '<not published>'}")
        if workspace is not None:
            self._write(f"  Elements: {len(workspace.model.elements)}")
        self._write(f"  Diagnostics: {result.diagnostic_count}")
        for kind in DiagnosticKind:
            count = result.count(kind)
            if count:
                self._write(f"    {kind.value}: {count}")
        self._write(f"  Status: {'PASS' if result.passed else 'FAIL'}")

    def _report_diagnostics(self, diagnostics: tuple[Diagnostic, ...]) -> None:
        self._write()
        self._write("-" * 70)
        self._write(f"Diagnostics ({len(diagnostics)}):")
        self._write("-" * 70)

        for i, diagnostic in enumerate(diagnostics, start=1):
            self._write()
            self._write(f"{i}. [{diagnostic.kind.name}] {diagnostic.operation}")
            self._write(f"   {diagnostic.message}")
            self._write(f"   In: {diagnostic.subject}")
            if diagnostic.call_site is not None:
                self._write(f"   At: {diagnostic.call_site}")
            if diagnostic.reason:
                self._write(f"   Reason: {diagnostic.reason}")

    def _report_footer(self, result: BuildResult) -> None:
        self._write()
        self._write("=" * 70)
        status = "PASSED" if result.passed else "FAILED"
        self._write(f"Result: {status}")
        self._write("=" * 70)
