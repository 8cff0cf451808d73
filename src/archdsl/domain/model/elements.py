"""Architecture tree nodes.

Nodes are mutable: the DSL decorates them while their body runs.
Identity equality (eq=False) - two nodes with equal fields are still
distinct tree positions.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import ClassVar, TypeVar

from archdsl.domain.model.enums import ElementLocation, NodeKind

_N = TypeVar("_N", bound="Node")


@dataclass(slots=True, eq=False, kw_only=True)
class Node:
    """Base of every architecture tree node.

    Concrete subclasses set `kind`. What a kind may carry or contain is
    declared in capabilities.py, not here.
    """

    kind: ClassVar[NodeKind]

    @property
    def display_name(self) -> str:
        """Human-readable node reference used in diagnostics."""
        return self.kind.value

    @property
    def children(self) -> tuple[Node, ...]:
        """Nested nodes in insertion order."""
        return ()

    def add_child(self, child: Node) -> None:
        """Attach child node.

        Raises:
            TypeError: Node kind holds no children
        """
        raise TypeError(f"{self.display_name} cannot hold children")

    def children_of(self, node_type: type[_N]) -> tuple[_N, ...]:
        """Children of the given node class, in insertion order."""
        return tuple(c for c in self.children if isinstance(c, node_type))


@dataclass(frozen=True, slots=True)
class Enterprise:
    """Named organisational boundary (singleton per model).

    Attributes:
        name: Enterprise name (must not be empty)
    """

    name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("enterprise name must not be empty")


@dataclass(slots=True, eq=False)
class Model:
    """Element tree of a workspace.

    Attributes:
        enterprise: Optional enterprise, set at most once
        elements: Top-level elements (people, systems, deployment nodes)
    """

    enterprise: Enterprise | None = None
    elements: list[Element] = field(default_factory=list)

    @property
    def people(self) -> tuple[Person, ...]:
        return tuple(e for e in self.elements if isinstance(e, Person))

    @property
    def software_systems(self) -> tuple[SoftwareSystem, ...]:
        return tuple(e for e in self.elements if isinstance(e, SoftwareSystem))

    @property
    def deployment_nodes(self) -> tuple[DeploymentNode, ...]:
        return tuple(e for e in self.elements if isinstance(e, DeploymentNode))


@dataclass(slots=True, eq=False, kw_only=True)
class Workspace(Node):
    """Root node: one architecture model.

    Attributes:
        name: Workspace name (may be empty)
        description: Workspace description (may be empty)
        version: Version string set by Version()
        model: Element tree and enterprise
    """

    kind: ClassVar[NodeKind] = NodeKind.WORKSPACE

    name: str = ""
    description: str = ""
    version: str = ""
    model: Model = field(default_factory=Model)

    @property
    def display_name(self) -> str:
        if self.name:
            return f"workspace {self.name!r}"
        return "workspace"

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self.model.elements)

    def add_child(self, child: Node) -> None:
        if not isinstance(child, Element):
            raise TypeError(f"workspace cannot hold {child.display_name}")
        self.model.elements.append(child)


@dataclass(slots=True, eq=False, kw_only=True)
class Element(Node):
    """Decoratable architecture element.

    Attributes:
        name: Element name (must not be empty)
        description: Free-form description
        technology: Implementation technology (containers, components, nodes)
        tags: Tags in call order, never deduplicated
        url: Documentation URL, last valid write wins
        location: Enterprise boundary position
        properties: Key-value metadata, None until Properties() is used
    """

    name: str
    description: str = ""
    technology: str = ""
    tags: list[str] = field(default_factory=list)
    url: str | None = None
    location: ElementLocation = ElementLocation.UNSPECIFIED
    properties: dict[str, str] | None = None
    _children: list[Node] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError(f"{self.kind.value} name must not be empty")

    @property
    def display_name(self) -> str:
        return f"{self.kind.value} {self.name!r}"

    @property
    def joined_tags(self) -> str:
        """Tags as a single comma-separated string."""
        return ",".join(self.tags)

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self._children)

    def add_child(self, child: Node) -> None:
        self._children.append(child)


@dataclass(slots=True, eq=False, kw_only=True)
class Person(Element):
    """User of the system (actor, role, persona)."""

    kind: ClassVar[NodeKind] = NodeKind.PERSON


@dataclass(slots=True, eq=False, kw_only=True)
class SoftwareSystem(Element):
    """Highest level of abstraction: something that delivers value."""

    kind: ClassVar[NodeKind] = NodeKind.SOFTWARE_SYSTEM

    @property
    def containers(self) -> tuple[Container, ...]:
        return self.children_of(Container)


@dataclass(slots=True, eq=False, kw_only=True)
class Container(Element):
    """Separately runnable/deployable unit of a software system."""

    kind: ClassVar[NodeKind] = NodeKind.CONTAINER

    @property
    def components(self) -> tuple[Component, ...]:
        return self.children_of(Component)


@dataclass(slots=True, eq=False, kw_only=True)
class Component(Element):
    """Grouping of related functionality inside a container."""

    kind: ClassVar[NodeKind] = NodeKind.COMPONENT


@dataclass(slots=True, eq=False, kw_only=True)
class DeploymentNode(Element):
    """Infrastructure where containers run; nests arbitrarily."""

    kind: ClassVar[NodeKind] = NodeKind.DEPLOYMENT_NODE

    @property
    def deployment_nodes(self) -> tuple[DeploymentNode, ...]:
        return self.children_of(DeploymentNode)

    @property
    def infrastructure_nodes(self) -> tuple[InfrastructureNode, ...]:
        return self.children_of(InfrastructureNode)

    @property
    def container_instances(self) -> tuple[ContainerInstance, ...]:
        return self.children_of(ContainerInstance)


@dataclass(slots=True, eq=False, kw_only=True)
class InfrastructureNode(Element):
    """Supporting infrastructure (DNS, load balancer, firewall...)."""

    kind: ClassVar[NodeKind] = NodeKind.INFRASTRUCTURE_NODE


@dataclass(slots=True, eq=False, kw_only=True)
class ContainerInstance(Element):
    """Deployed instance of a container.

    `name` holds the referenced container name.

    Attributes:
        instance_id: 1-based instance number within the deployment node
    """

    kind: ClassVar[NodeKind] = NodeKind.CONTAINER_INSTANCE

    instance_id: int = 1

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        Element.__post_init__(self)
        if self.instance_id < 1:
            raise ValueError(f"instance_id must be >= 1, got {self.instance_id}")

    @property
    def display_name(self) -> str:
        return f"{self.kind.value} {self.name!r} #{self.instance_id}"

    @property
    def health_checks(self) -> tuple[HealthCheck, ...]:
        return self.children_of(HealthCheck)


@dataclass(slots=True, eq=False, kw_only=True)
class HealthCheck(Node):
    """Health check of a container instance. Carries only a URL.

    Attributes:
        name: Health check name (must not be empty)
        url: Endpoint URL
    """

    kind: ClassVar[NodeKind] = NodeKind.HEALTH_CHECK

    name: str
    url: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("health check name must not be empty")

    @property
    def display_name(self) -> str:
        return f"{self.kind.value} {self.name!r}"


NODE_TYPES: Sequence[type[Node]] = (
    Workspace,
    Person,
    SoftwareSystem,
    Container,
    Component,
    DeploymentNode,
    InfrastructureNode,
    ContainerInstance,
    HealthCheck,
)
