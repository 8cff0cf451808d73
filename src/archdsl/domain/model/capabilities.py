"""Capability and containment tables per node kind.

Single source of truth for which DSL operation is legal on which node.
Both tables must cover every NodeKind: a kind added to the enum without
an entry here fails at import time.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from archdsl.domain.model.enums import Capability, NodeKind

if TYPE_CHECKING:
    from archdsl.domain.model.elements import Node

_DECORATABLE = frozenset({Capability.TAGS, Capability.URL, Capability.PROPERTIES})

CAPABILITIES: Mapping[NodeKind, frozenset[Capability]] = MappingProxyType(
    {
        NodeKind.WORKSPACE: frozenset({Capability.WORKSPACE_SETTINGS}),
        NodeKind.PERSON: _DECORATABLE | {Capability.LOCATION},
        NodeKind.SOFTWARE_SYSTEM: _DECORATABLE | {Capability.LOCATION},
        NodeKind.CONTAINER: _DECORATABLE,
        NodeKind.COMPONENT: _DECORATABLE,
        NodeKind.DEPLOYMENT_NODE: _DECORATABLE,
        NodeKind.INFRASTRUCTURE_NODE: _DECORATABLE,
        NodeKind.CONTAINER_INSTANCE: frozenset({Capability.TAGS, Capability.PROPERTIES}),
        NodeKind.HEALTH_CHECK: frozenset({Capability.URL}),
    }
)

CHILD_KINDS: Mapping[NodeKind, frozenset[NodeKind]] = MappingProxyType(
    {
        NodeKind.WORKSPACE: frozenset(
            {NodeKind.PERSON, NodeKind.SOFTWARE_SYSTEM, NodeKind.DEPLOYMENT_NODE}
        ),
        NodeKind.PERSON: frozenset(),
        NodeKind.SOFTWARE_SYSTEM: frozenset({NodeKind.CONTAINER}),
        NodeKind.CONTAINER: frozenset({NodeKind.COMPONENT}),
        NodeKind.COMPONENT: frozenset(),
        NodeKind.DEPLOYMENT_NODE: frozenset(
            {
                NodeKind.DEPLOYMENT_NODE,
                NodeKind.INFRASTRUCTURE_NODE,
                NodeKind.CONTAINER_INSTANCE,
            }
        ),
        NodeKind.INFRASTRUCTURE_NODE: frozenset(),
        NodeKind.CONTAINER_INSTANCE: frozenset({NodeKind.HEALTH_CHECK}),
        NodeKind.HEALTH_CHECK: frozenset(),
    }
)


def _check_exhaustive(name: str, table: Mapping[NodeKind, object]) -> None:
    missing = frozenset(NodeKind) - frozenset(table)
    if missing:
        names = sorted(k.name for k in missing)
        raise RuntimeError(f"{name} has no entry for node kinds: {names}")


_check_exhaustive("CAPABILITIES", CAPABILITIES)
_check_exhaustive("CHILD_KINDS", CHILD_KINDS)


def supports(node: Node, capability: Capability) -> bool:
    """Check if node kind declares the capability."""
    return capability in CAPABILITIES[node.kind]


def accepts_child(parent: Node, kind: NodeKind) -> bool:
    """Check if parent kind may contain a child of the given kind."""
    return kind in CHILD_KINDS[parent.kind]


def kinds_with(capability: Capability) -> frozenset[NodeKind]:
    """All node kinds declaring the capability."""
    return frozenset(k for k, caps in CAPABILITIES.items() if capability in caps)
