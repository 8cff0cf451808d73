"""JSON reporter for machine-readable output.

Stdlib-only reporter for JSON output.
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, TextIO

from archdsl.application.reporters._base import BaseReporter
from archdsl.domain.model.enums import DiagnosticKind

if TYPE_CHECKING:
    from archdsl.domain.model.build_result import BuildResult
    from archdsl.domain.model.diagnostic import Diagnostic


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    Outputs build results as JSON for CI/CD integration or parsing by
    other tools. The element tree itself is not serialized.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        *,
        indent: int | None = 2,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            indent: JSON indentation (default: 2, None for compact)
        """
        self._output = output if output is not None else sys.stdout
        self._indent = indent

    def report(self, result: BuildResult) -> None:
        """Report build result as JSON."""
        data = self._result_to_dict(result)
        json.dump(data, self._output, indent=self._indent)
        self._output.write("\n")

    def _result_to_dict(self, result: BuildResult) -> dict[str, object]:
        workspace = result.workspace
        return {
            "passed": result.passed,
            "published": result.published,
            "workspace": None
            if workspace is None
            else {
                "name": workspace.name,
                "description": workspace.description,
                "version": workspace.version,
                "element_count": len(workspace.model.elements),
            },
            "summary": {
                "diagnostic_count": result.diagnostic_count,
                "by_kind": {kind.name: result.count(kind) for kind in DiagnosticKind},
            },
            "diagnostics": [self._diagnostic_to_dict(d) for d in result.diagnostics],
        }

    def _diagnostic_to_dict(self, diagnostic: Diagnostic) -> dict[str, object]:
        site = diagnostic.call_site
        return {
            "kind": diagnostic.kind.name,
            "operation": diagnostic.operation,
            "message": diagnostic.message,
            "subject": diagnostic.subject,
            "value": diagnostic.value,
            "reason": diagnostic.reason,
            "call_site": None
            if site is None
            else {"file": site.file, "line": site.line, "func": site.func},
        }
