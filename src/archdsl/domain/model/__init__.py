"""Domain model entities."""

from archdsl.domain.model.build_result import BuildResult
from archdsl.domain.model.capabilities import (
    CAPABILITIES,
    CHILD_KINDS,
    accepts_child,
    kinds_with,
    supports,
)
from archdsl.domain.model.configuration import BuildConfig
from archdsl.domain.model.diagnostic import CallSite, Diagnostic
from archdsl.domain.model.elements import (
    NODE_TYPES,
    Component,
    Container,
    ContainerInstance,
    DeploymentNode,
    Element,
    Enterprise,
    HealthCheck,
    InfrastructureNode,
    Model,
    Node,
    Person,
    SoftwareSystem,
    Workspace,
)
from archdsl.domain.model.enums import Capability, DiagnosticKind, ElementLocation, NodeKind

__all__ = [
    # Enums
    "Capability",
    "DiagnosticKind",
    "ElementLocation",
    "NodeKind",
    # Nodes
    "Node",
    "Element",
    "Workspace",
    "Model",
    "Enterprise",
    "Person",
    "SoftwareSystem",
    "Container",
    "Component",
    "DeploymentNode",
    "InfrastructureNode",
    "ContainerInstance",
    "HealthCheck",
    "NODE_TYPES",
    # Capability tables
    "CAPABILITIES",
    "CHILD_KINDS",
    "supports",
    "accepts_child",
    "kinds_with",
    # Results
    "BuildConfig",
    "BuildResult",
    "CallSite",
    "Diagnostic",
]
