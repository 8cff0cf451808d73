"""Capability dispatch: attribute operations on the current node.

Each operation checks the current node against the capability table,
mutates it when legal, and records a diagnostic otherwise. Nothing here
raises for DSL misuse (except the fail-fast signal).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, cast

from archdsl.application.url_validator import url_error
from archdsl.domain.model.capabilities import supports
from archdsl.domain.model.elements import Element, Enterprise, Workspace
from archdsl.domain.model.enums import Capability, DiagnosticKind, ElementLocation

if TYPE_CHECKING:
    from archdsl.application.evaluator import Evaluator
    from archdsl.domain.model.elements import HealthCheck


def tag(ev: Evaluator, first: str, *rest: str) -> None:
    """Append tags to the current element, in call order.

    Legal in Person, SoftwareSystem, Container, Component, DeploymentNode,
    InfrastructureNode and ContainerInstance.
    """
    node = ev.require("Tag", Capability.TAGS)
    if node is None:
        return
    values = (first, *rest)
    for value in values:
        if not isinstance(value, str):
            ev.invalid_argument("Tag", "string", value)
            return
    cast(Element, node).tags.extend(values)


def url(ev: Evaluator, value: str) -> None:
    """Set documentation URL (or health check endpoint).

    Invalid URLs are recorded and leave the previous value in place.
    """
    node = ev.require("URL", Capability.URL)
    if node is None:
        return
    if not isinstance(value, str):
        ev.invalid_argument("URL", "string", value)
        return

    reason = url_error(value)
    if reason is not None:
        ev.report(
            DiagnosticKind.VALIDATION_ERROR,
            "URL",
            f"invalid URL {value!r}: {reason}",
            value=value,
            reason=reason,
        )
        return
    cast("Element | HealthCheck", node).url = value


def external(ev: Evaluator) -> None:
    """Mark current person or software system as external to the enterprise."""
    node = ev.require("External", Capability.LOCATION)
    if node is None:
        return
    cast(Element, node).location = ElementLocation.EXTERNAL


def properties(ev: Evaluator, body: Callable[[], object]) -> None:
    """Run body against the current element's property map.

    The map is created on first use. The body runs with the same node as
    current context so nested Prop() calls reach it.
    """
    node = ev.require("Properties", Capability.PROPERTIES)
    if node is None:
        return
    if not callable(body):
        ev.report(
            DiagnosticKind.MISSING_BODY,
            "Properties",
            "missing child DSL (Properties argument must be a function)",
            value=body,
        )
        return

    element = cast(Element, node)
    if element.properties is None:
        element.properties = {}
    ev.run_body("Properties", body, element)


def prop(ev: Evaluator, key: str, value: str) -> None:
    """Set one property; last write wins for a given key.

    Only legal where a property map exists, i.e. inside Properties().
    """
    node = ev.current()
    if (
        not isinstance(node, Element)
        or not supports(node, Capability.PROPERTIES)
        or node.properties is None
    ):
        ev.incompatible("Prop")
        return
    if not isinstance(key, str):
        ev.invalid_argument("Prop", "string", key)
        return
    if not isinstance(value, str):
        ev.invalid_argument("Prop", "string", value)
        return
    node.properties[key] = value


def version(ev: Evaluator, value: str) -> None:
    """Set workspace version. Last write wins."""
    node = ev.require("Version", Capability.WORKSPACE_SETTINGS)
    if node is None:
        return
    if not isinstance(value, str):
        ev.invalid_argument("Version", "string", value)
        return
    cast(Workspace, node).version = value


def enterprise(ev: Evaluator, name: str) -> None:
    """Define the model enterprise. Only the first definition is kept."""
    node = ev.require("Enterprise", Capability.WORKSPACE_SETTINGS)
    if node is None:
        return
    if not isinstance(name, str):
        ev.invalid_argument("Enterprise", "string", name)
        return
    if not name:
        ev.report(
            DiagnosticKind.INVALID_ARGUMENT,
            "Enterprise",
            "Enterprise: name must not be empty",
            value=name,
        )
        return

    model = cast(Workspace, node).model
    if model.enterprise is not None:
        ev.report(
            DiagnosticKind.VALIDATION_ERROR,
            "Enterprise",
            f"enterprise already defined as {model.enterprise.name!r}",
            value=name,
        )
        return
    model.enterprise = Enterprise(name)
