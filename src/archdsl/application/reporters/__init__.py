"""Reporters for build results.

PlainTextReporter and JSONReporter use stdlib only.
ConsoleReporter renders with rich.
"""

from archdsl.application.reporters._base import BaseReporter
from archdsl.application.reporters.console import ConsoleConfig, ConsoleReporter
from archdsl.application.reporters.json_reporter import JSONReporter
from archdsl.application.reporters.plain_text import PlainTextReporter
from archdsl.application.reporters.tree import build_tree

__all__ = [
    "BaseReporter",
    "ConsoleConfig",
    "ConsoleReporter",
    "JSONReporter",
    "PlainTextReporter",
    "build_tree",
]
