"""Diagnostic value objects recorded during a build."""

from __future__ import annotations

from dataclasses import dataclass

from archdsl.domain.model.enums import DiagnosticKind


@dataclass(frozen=True, slots=True)
class CallSite:
    """Location of the DSL call that produced a diagnostic.

    Attributes:
        file: Source file of the caller
        line: Line number (1-based, must be > 0)
        func: Enclosing function name of the caller
    """

    file: str
    line: int
    func: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.file:
            raise ValueError("file must not be empty")
        if self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")

    def __str__(self) -> str:
        """Format as file:line."""
        return f"{self.file}:{self.line}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Non-fatal DSL error, recorded instead of raised.

    Attributes:
        kind: Diagnostic category
        message: Human-readable message
        operation: DSL keyword that reported it (Tag, URL, Workspace...)
        subject: Node current when the call happened
        value: Offending input (repr), if any
        reason: Underlying validation failure, if any
        call_site: Caller location, if captured
    """

    kind: DiagnosticKind
    message: str
    operation: str
    subject: str
    value: str | None = None
    reason: str | None = None
    call_site: CallSite | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.message:
            raise ValueError("message must not be empty")
        if not self.operation:
            raise ValueError("operation must not be empty")
        if not self.subject:
            raise ValueError("subject must not be empty")

    def __str__(self) -> str:
        """Format diagnostic for display."""
        text = f"[{self.kind.name}] {self.message}"
        if self.call_site is not None:
            return f"{self.call_site}: {text}"
        return text
