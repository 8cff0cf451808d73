"""Build configuration.

None = feature disabled, value = feature enabled with that config.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Per-build configuration DTO.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        fail_fast: Abort the whole build on the first diagnostic.
        capture_call_sites: Attach caller file/line to diagnostics.
        max_depth: Maximum evaluation stack depth. None = unlimited.
    """

    fail_fast: bool = False
    capture_call_sites: bool = True
    max_depth: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")
