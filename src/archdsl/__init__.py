"""archdsl - declarative architecture workspace DSL with capability-checked builders."""

from archdsl.application.assembly import WorkspaceArgs
from archdsl.domain.model.build_result import BuildResult
from archdsl.domain.model.configuration import BuildConfig
from archdsl.presentation.api.dsl import Dsl

__version__ = "0.1.0"

__all__ = ["BuildConfig", "BuildResult", "Dsl", "WorkspaceArgs", "__version__"]
