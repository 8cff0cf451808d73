"""Public DSL API."""

from archdsl.presentation.api.dsl import Dsl

__all__ = ["Dsl"]
