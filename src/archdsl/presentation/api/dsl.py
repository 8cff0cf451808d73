"""Declarative DSL facade.

Entry point for building an architecture workspace from nested bodies.

Example:
    dsl = Dsl()

    def model() -> None:
        dsl.version("1.0")
        dsl.software_system("Shop", "Online shop", shop)

    def shop() -> None:
        dsl.tag("critical")
        dsl.url("https://example.com/shop")

    result = dsl.workspace("Retail", "Retail landscape", model)
    workspace = result.raise_for_diagnostics()
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeVar

from archdsl.application import assembly, dispatch
from archdsl.application.evaluator import Evaluator
from archdsl.domain.exceptions import BuildAborted, WorkspaceAlreadyDefinedError
from archdsl.domain.model.build_result import BuildResult
from archdsl.domain.model.elements import (
    Component,
    Container,
    DeploymentNode,
    InfrastructureNode,
    Person,
    SoftwareSystem,
)
from archdsl.infrastructure.callsite import caller_site

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from archdsl.application.assembly import WorkspaceArgs
    from archdsl.application.context import TopLevel
    from archdsl.domain.model.configuration import BuildConfig
    from archdsl.domain.model.elements import (
        ContainerInstance,
        Element,
        HealthCheck,
        Node,
        Workspace,
    )

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound="Element")


class Dsl:
    """One build: evaluation context, diagnostics and the published workspace.

    All keywords act on the node currently being built. Misuse is recorded
    as a diagnostic and never raised, so a single build reports every
    defect. Inspect `result` (or the value returned by `workspace()`)
    afterwards.

    Attributes:
        _evaluator: Context stack, collector and config
        _published: Workspace published by this build, None until then
    """

    def __init__(self, config: BuildConfig | None = None) -> None:
        """Initialize a build.

        Args:
            config: Build configuration. Uses defaults if None.
        """
        self._evaluator = Evaluator(config, site_resolver=caller_site)
        self._published: Workspace | None = None

    # ------------------------------------------------------------------
    # Root
    # ------------------------------------------------------------------

    def workspace(self, *args: object) -> BuildResult:
        """Define the workspace.

        Valid shapes:
            workspace(body)
            workspace("name", body)
            workspace("name", "description", body)

        Returns:
            Build result (workspace is None if the build did not publish)

        Raises:
            WorkspaceAlreadyDefinedError: This build already published one
        """
        self._ensure_unpublished()
        return self._publish(assembly.workspace(self._evaluator, *args))

    def build(self, args: WorkspaceArgs) -> BuildResult:
        """Define the workspace from already resolved arguments.

        Raises:
            WorkspaceAlreadyDefinedError: This build already published one
        """
        self._ensure_unpublished()
        return self._publish(assembly.build_workspace(self._evaluator, args))

    def version(self, value: str) -> None:
        """Set workspace version. Must appear in Workspace."""
        with self._top_level_signals():
            dispatch.version(self._evaluator, value)

    def enterprise(self, name: str) -> None:
        """Define the enterprise. Must appear in Workspace, at most once."""
        with self._top_level_signals():
            dispatch.enterprise(self._evaluator, name)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def tag(self, first: str, *rest: str) -> None:
        """Add tags. Tags accumulate across calls."""
        with self._top_level_signals():
            dispatch.tag(self._evaluator, first, *rest)

    def url(self, value: str) -> None:
        """Set documentation URL, or health check URL in HealthCheck."""
        with self._top_level_signals():
            dispatch.url(self._evaluator, value)

    def external(self) -> None:
        """Mark person or software system as external to the enterprise."""
        with self._top_level_signals():
            dispatch.external(self._evaluator)

    def properties(self, body: Callable[[], object]) -> None:
        """Define key-value properties with prop() calls in body."""
        with self._top_level_signals():
            dispatch.properties(self._evaluator, body)

    def prop(self, key: str, value: str) -> None:
        """Set one property. Must appear in properties()."""
        with self._top_level_signals():
            dispatch.prop(self._evaluator, key, value)

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def person(self, name: str, *args: object) -> Person | None:
        """Add a person: (name, [description], [body])."""
        with self._top_level_signals():
            return self._element(Person, "Person", name, args)
        return None

    def software_system(self, name: str, *args: object) -> SoftwareSystem | None:
        """Add a software system: (name, [description], [body])."""
        with self._top_level_signals():
            return self._element(SoftwareSystem, "SoftwareSystem", name, args)
        return None

    def container(self, name: str, *args: object) -> Container | None:
        """Add a container: (name, [description], [technology], [body])."""
        with self._top_level_signals():
            return self._element(Container, "Container", name, args)
        return None

    def component(self, name: str, *args: object) -> Component | None:
        """Add a component: (name, [description], [technology], [body])."""
        with self._top_level_signals():
            return self._element(Component, "Component", name, args)
        return None

    def deployment_node(self, name: str, *args: object) -> DeploymentNode | None:
        """Add a deployment node: (name, [description], [technology], [body])."""
        with self._top_level_signals():
            return self._element(DeploymentNode, "DeploymentNode", name, args)
        return None

    def infrastructure_node(self, name: str, *args: object) -> InfrastructureNode | None:
        """Add an infrastructure node: (name, [description], [technology], [body])."""
        with self._top_level_signals():
            return self._element(InfrastructureNode, "InfrastructureNode", name, args)
        return None

    def container_instance(self, container: str, *args: object) -> ContainerInstance | None:
        """Deploy an instance of a container: (container, [body])."""
        with self._top_level_signals():
            return assembly.container_instance(self._evaluator, container, *args)
        return None

    def health_check(self, name: str, *args: object) -> HealthCheck | None:
        """Add a health check to a container instance: (name, [body])."""
        with self._top_level_signals():
            return assembly.health_check(self._evaluator, name, *args)
        return None

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def current(self) -> Node | TopLevel:
        """Node currently being built, TOP_LEVEL outside any body."""
        return self._evaluator.current()

    @property
    def depth(self) -> int:
        """Current nesting depth."""
        return self._evaluator.context.depth

    @property
    def config(self) -> BuildConfig:
        """Build configuration."""
        return self._evaluator.config

    @property
    def result(self) -> BuildResult:
        """Snapshot of the build: published workspace and diagnostics."""
        return BuildResult(
            workspace=self._published,
            diagnostics=self._evaluator.collector.diagnostics,
        )

    def _element(
        self,
        node_type: type[_E],
        operation: str,
        name: object,
        args: tuple[object, ...],
    ) -> _E | None:
        node = assembly.element(self._evaluator, node_type, operation, name, *args)
        return node if isinstance(node, node_type) else None

    @contextmanager
    def _top_level_signals(self) -> Iterator[None]:
        """Absorb fail-fast aborts raised outside any body.

        Inside a body the signal must keep unwinding to the enclosing
        execute(); at top level there is nothing left to unwind.
        """
        try:
            yield
        except BuildAborted:
            if self.depth > 0:
                raise

    def _ensure_unpublished(self) -> None:
        if self._published is not None:
            raise WorkspaceAlreadyDefinedError(self._published.name)

    def _publish(self, root: Workspace | None) -> BuildResult:
        if root is not None:
            self._published = root
            logger.debug("published %s", root.display_name)
        result = self.result
        if self.depth == 0:
            logger.info(
                "build finished: published=%s diagnostics=%d",
                result.published,
                result.diagnostic_count,
            )
        return result
