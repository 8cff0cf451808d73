"""Base reporter class for output formatting.

Concrete reporters inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from archdsl.domain.model.build_result import BuildResult


class BaseReporter(ABC):
    """Base class for build result reporters.

    archdsl provides PlainTextReporter, JSONReporter and ConsoleReporter.

    Example:
        class MyReporter(BaseReporter):
            def report(self, result: BuildResult) -> None:
                print(f"Diagnostics: {result.diagnostic_count}")
    """

    @abstractmethod
    def report(self, result: BuildResult) -> None:
        """Report build result.

        Implementation decides output format and destination.

        Args:
            result: Published workspace and all diagnostics
        """
