"""Root assembly and element builders.

Constructors resolve positional arguments, create the node, run its body
through the evaluator and attach it to the parent. A construction that
fails argument checks is skipped: the parent gains no child, the rest of
the build continues.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, TypeVar

from archdsl.application.context import TopLevel
from archdsl.domain.exceptions import BuildAborted
from archdsl.domain.model.capabilities import accepts_child
from archdsl.domain.model.elements import ContainerInstance, HealthCheck, Model, Workspace
from archdsl.domain.model.enums import DiagnosticKind, NodeKind

if TYPE_CHECKING:
    from archdsl.application.evaluator import Evaluator
    from archdsl.domain.model.elements import Element, Node

logger = logging.getLogger(__name__)

Body = Callable[[], object]
_NodeT = TypeVar("_NodeT", bound="Node")

# kinds whose constructor takes (name, description, technology, body)
_TECHNOLOGY_KINDS: Final = frozenset(
    {
        NodeKind.CONTAINER,
        NodeKind.COMPONENT,
        NodeKind.DEPLOYMENT_NODE,
        NodeKind.INFRASTRUCTURE_NODE,
    }
)


@dataclass(frozen=True, slots=True)
class WorkspaceArgs:
    """Resolved Workspace constructor arguments.

    Attributes:
        body: Zero-argument callable defining the model
        name: Workspace name (may be empty)
        description: Workspace description (may be empty)
    """

    body: Body
    name: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not callable(self.body):
            raise TypeError(f"body must be callable, got {type(self.body).__name__}")
        if not isinstance(self.name, str):
            raise TypeError(f"name must be str, got {type(self.name).__name__}")
        if not isinstance(self.description, str):
            raise TypeError(f"description must be str, got {type(self.description).__name__}")


def resolve_workspace_args(ev: Evaluator, args: tuple[object, ...]) -> WorkspaceArgs | None:
    """Resolve Workspace(body), Workspace(name, body), Workspace(name, desc, body).

    Mistyped name/description are reported and replaced by "" so the body
    still runs. Wrong arity or a missing body abort the construction.

    Returns:
        Resolved arguments, or None after recording a diagnostic
    """
    nargs = len(args)
    if nargs == 0:
        ev.report(DiagnosticKind.MISSING_BODY, "Workspace", "missing child DSL")
        return None
    if nargs > 3:
        ev.report(
            DiagnosticKind.INVALID_ARGUMENT,
            "Workspace",
            f"too many arguments: expected at most 3, got {nargs}",
        )
        return None

    body = args[-1]
    if not callable(body):
        ev.report(
            DiagnosticKind.MISSING_BODY,
            "Workspace",
            "missing child DSL (last argument must be a function)",
            value=body,
        )
        return None

    name = ""
    description = ""
    if nargs > 1:
        if isinstance(args[0], str):
            name = args[0]
        else:
            ev.invalid_argument("Workspace", "string", args[0])
    if nargs > 2:
        if isinstance(args[1], str):
            description = args[1]
        else:
            ev.invalid_argument("Workspace", "string", args[1])

    return WorkspaceArgs(body=body, name=name, description=description)


def build_workspace(ev: Evaluator, resolved: WorkspaceArgs) -> Workspace | None:
    """Create the root node and run its body.

    Returns:
        Workspace if the body completed, None otherwise
    """
    try:
        if not _at_top_level(ev):
            return None
        return _assemble(ev, resolved)
    except BuildAborted:
        if not ev.context.is_empty:
            raise
        return None


def workspace(ev: Evaluator, *args: object) -> Workspace | None:
    """Variadic Workspace constructor.

    Returns:
        Workspace if arguments resolved and the body completed, None otherwise
    """
    try:
        if not _at_top_level(ev):
            return None
        resolved = resolve_workspace_args(ev, args)
        if resolved is None:
            return None
        return _assemble(ev, resolved)
    except BuildAborted:
        if not ev.context.is_empty:
            raise
        return None


def _at_top_level(ev: Evaluator) -> bool:
    if isinstance(ev.current(), TopLevel):
        return True
    ev.incompatible("Workspace")
    return False


def _assemble(ev: Evaluator, resolved: WorkspaceArgs) -> Workspace | None:
    root = Workspace(name=resolved.name, description=resolved.description, model=Model())
    if not ev.context.execute(resolved.body, root):
        logger.debug("%s body aborted, not published", root.display_name)
        return None
    return root


def element(
    ev: Evaluator,
    node_type: type[Element],
    operation: str,
    name: object,
    *args: object,
) -> Element | None:
    """Create a named element under the current node.

    Accepts (name, [description], [technology], [body]); technology only for
    containers, components, deployment and infrastructure nodes.

    Returns:
        Attached element, or None if the construction was skipped
    """
    parent = _parent_for(ev, node_type.kind, operation)
    if parent is None:
        return None
    if not _check_name(ev, operation, name):
        return None

    strings, body = _split_body(args)
    max_strings = 2 if node_type.kind in _TECHNOLOGY_KINDS else 1
    if len(strings) > max_strings:
        ev.report(
            DiagnosticKind.INVALID_ARGUMENT,
            operation,
            f"too many arguments: expected at most {max_strings + 1} strings, "
            f"got {len(strings) + 1}",
        )
        return None
    for value in strings:
        if not isinstance(value, str):
            ev.invalid_argument(operation, "string", value)
            return None

    node = node_type(
        name=str(name),
        description=str(strings[0]) if strings else "",
        technology=str(strings[1]) if len(strings) > 1 else "",
    )
    return _finish(ev, operation, parent, node, body)


def container_instance(ev: Evaluator, container: object, *args: object) -> ContainerInstance | None:
    """Deploy an instance of the named container in the current deployment node.

    Instance ids count per container name within the deployment node.
    """
    parent = _parent_for(ev, NodeKind.CONTAINER_INSTANCE, "ContainerInstance")
    if parent is None:
        return None
    if not _check_name(ev, "ContainerInstance", container):
        return None
    resolved, body = _only_body(ev, "ContainerInstance", args)
    if not resolved:
        return None

    siblings = [c for c in parent.children_of(ContainerInstance) if c.name == container]
    node = ContainerInstance(name=str(container), instance_id=len(siblings) + 1)
    return _finish(ev, "ContainerInstance", parent, node, body)


def health_check(ev: Evaluator, name: object, *args: object) -> HealthCheck | None:
    """Add a health check to the current container instance."""
    parent = _parent_for(ev, NodeKind.HEALTH_CHECK, "HealthCheck")
    if parent is None:
        return None
    if not _check_name(ev, "HealthCheck", name):
        return None
    resolved, body = _only_body(ev, "HealthCheck", args)
    if not resolved:
        return None

    return _finish(ev, "HealthCheck", parent, HealthCheck(name=str(name)), body)


def _parent_for(ev: Evaluator, kind: NodeKind, operation: str) -> Node | None:
    parent = ev.current()
    if isinstance(parent, TopLevel) or not accepts_child(parent, kind):
        ev.incompatible(operation)
        return None
    return parent


def _check_name(ev: Evaluator, operation: str, name: object) -> bool:
    if isinstance(name, str) and name:
        return True
    ev.invalid_argument(operation, "non-empty string", name)
    return False


def _split_body(args: tuple[object, ...]) -> tuple[tuple[object, ...], Body | None]:
    if args and callable(args[-1]):
        return args[:-1], args[-1]
    return args, None


def _only_body(
    ev: Evaluator, operation: str, args: tuple[object, ...]
) -> tuple[bool, Body | None]:
    """Resolve an optional trailing body.

    Returns:
        (resolved, body) - resolved is False after recording a diagnostic
    """
    if not args:
        return True, None
    if len(args) > 1:
        ev.report(
            DiagnosticKind.INVALID_ARGUMENT,
            operation,
            f"too many arguments: expected at most 2, got {len(args) + 1}",
        )
        return False, None
    body = args[0]
    if not callable(body):
        ev.report(
            DiagnosticKind.MISSING_BODY,
            operation,
            "missing child DSL (last argument must be a function)",
            value=body,
        )
        return False, None
    return True, body


def _finish(
    ev: Evaluator, operation: str, parent: Node, node: _NodeT, body: Body | None
) -> _NodeT | None:
    if body is not None and not ev.run_body(operation, body, node):
        logger.debug("%s discarded: body did not complete", node.display_name)
        return None
    parent.add_child(node)
    return node
