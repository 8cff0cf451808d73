"""Tests for application/assembly.py."""

import pytest

from archdsl.application import assembly, dispatch
from archdsl.application.assembly import WorkspaceArgs
from archdsl.domain.exceptions import BuildAborted
from archdsl.domain.model.elements import (
    Component,
    Container,
    ContainerInstance,
    DeploymentNode,
    HealthCheck,
    Person,
    SoftwareSystem,
    Workspace,
)
from archdsl.domain.model.enums import DiagnosticKind
from tests.factories import make_evaluator


def _noop() -> None:
    pass


class TestWorkspaceArgs:
    def test_defaults(self) -> None:
        args = WorkspaceArgs(body=_noop)
        assert args.name == ""
        assert args.description == ""

    def test_non_callable_body_raises(self) -> None:
        with pytest.raises(TypeError, match="body must be callable"):
            WorkspaceArgs(body="model")  # type: ignore[arg-type]

    def test_non_string_name_raises(self) -> None:
        with pytest.raises(TypeError, match="name must be str"):
            WorkspaceArgs(body=_noop, name=1)  # type: ignore[arg-type]


class TestWorkspaceShapes:
    """The three accepted call shapes and their failures."""

    def test_body_only(self) -> None:
        root = assembly.workspace(make_evaluator(), _noop)
        assert root is not None
        assert (root.name, root.description) == ("", "")

    def test_name_and_body(self) -> None:
        root = assembly.workspace(make_evaluator(), "N", _noop)
        assert root is not None
        assert (root.name, root.description) == ("N", "")

    def test_name_description_body(self) -> None:
        root = assembly.workspace(make_evaluator(), "N", "D", _noop)
        assert root is not None
        assert (root.name, root.description) == ("N", "D")

    def test_no_arguments(self) -> None:
        ev = make_evaluator()
        assert assembly.workspace(ev) is None
        (diagnostic,) = ev.collector.diagnostics
        assert diagnostic.kind is DiagnosticKind.MISSING_BODY
        assert diagnostic.message == "missing child DSL"

    def test_too_many_arguments(self) -> None:
        ev = make_evaluator()
        assert assembly.workspace(ev, "a", "b", "c", _noop) is None
        (diagnostic,) = ev.collector.diagnostics
        assert diagnostic.kind is DiagnosticKind.INVALID_ARGUMENT
        assert "too many arguments" in diagnostic.message

    def test_last_argument_not_callable(self) -> None:
        ev = make_evaluator()
        assert assembly.workspace(ev, "N", "D") is None
        (diagnostic,) = ev.collector.diagnostics
        assert diagnostic.kind is DiagnosticKind.MISSING_BODY
        assert diagnostic.message == "missing child DSL (last argument must be a function)"

    def test_mistyped_name_reported_and_body_runs(self) -> None:
        ev = make_evaluator()
        ran: list[bool] = []
        root = assembly.workspace(ev, 42, "D", lambda: ran.append(True))

        assert root is not None
        assert root.name == ""
        assert root.description == "D"
        assert ran == [True]
        assert [d.kind for d in ev.collector.diagnostics] == [DiagnosticKind.INVALID_ARGUMENT]

    def test_nested_workspace_incompatible(self) -> None:
        ev = make_evaluator()
        inner: list[Workspace | None] = []

        root = assembly.workspace(ev, "Outer", lambda: inner.append(assembly.workspace(ev, _noop)))

        assert root is not None
        assert inner == [None]
        assert ev.collector.diagnostics[0].kind is DiagnosticKind.INCOMPATIBLE_CONTEXT
        assert ev.collector.diagnostics[0].subject == "workspace 'Outer'"


class TestBuildWorkspace:
    def test_explicit_args(self) -> None:
        ev = make_evaluator()
        root = assembly.build_workspace(
            ev, WorkspaceArgs(body=lambda: dispatch.version(ev, "3"), name="N")
        )
        assert root is not None
        assert root.version == "3"

    def test_fail_fast_absorbed_at_root(self) -> None:
        ev = make_evaluator(fail_fast=True)
        root = assembly.build_workspace(ev, WorkspaceArgs(body=lambda: dispatch.tag(ev, "x")))
        assert root is None
        assert ev.context.is_empty
        assert len(ev.collector) == 1


class TestElement:
    """Tests for element builders."""

    def test_attaches_to_parent(self) -> None:
        ev = make_evaluator()
        workspace = Workspace()
        ev.context.push(workspace)

        person = assembly.element(ev, Person, "Person", "Customer", "Buys things")

        assert isinstance(person, Person)
        assert person.description == "Buys things"
        assert workspace.model.elements == [person]

    def test_technology_argument(self) -> None:
        ev = make_evaluator()
        system = SoftwareSystem(name="Shop")
        ev.context.push(system)

        container = assembly.element(ev, Container, "Container", "API", "REST API", "Go")

        assert isinstance(container, Container)
        assert container.technology == "Go"
        assert system.containers == (container,)

    def test_person_rejects_technology(self) -> None:
        ev = make_evaluator()
        workspace = Workspace()
        ev.context.push(workspace)

        assert assembly.element(ev, Person, "Person", "Customer", "desc", "tech") is None
        assert workspace.model.elements == []
        assert ev.collector.diagnostics[0].message == (
            "too many arguments: expected at most 2 strings, got 3"
        )

    def test_body_runs_in_element(self) -> None:
        ev = make_evaluator()
        ev.context.push(Workspace())

        system = assembly.element(
            ev, SoftwareSystem, "SoftwareSystem", "Shop", lambda: dispatch.tag(ev, "core")
        )

        assert isinstance(system, SoftwareSystem)
        assert system.tags == ["core"]
        assert ev.context.depth == 1

    @pytest.mark.parametrize("name", ["", None, 3])
    def test_invalid_name(self, name: object) -> None:
        ev = make_evaluator()
        ev.context.push(Workspace())
        assert assembly.element(ev, Person, "Person", name) is None
        assert ev.collector.diagnostics[0].kind is DiagnosticKind.INVALID_ARGUMENT

    def test_non_string_description(self) -> None:
        ev = make_evaluator()
        ev.context.push(Workspace())
        assert assembly.element(ev, Person, "Person", "Customer", 5) is None
        assert ev.collector.diagnostics[0].kind is DiagnosticKind.INVALID_ARGUMENT

    def test_wrong_parent(self) -> None:
        ev = make_evaluator()
        ev.context.push(Workspace())
        assert assembly.element(ev, Component, "Component", "Repo") is None
        (diagnostic,) = ev.collector.diagnostics
        assert diagnostic.kind is DiagnosticKind.INCOMPATIBLE_CONTEXT
        assert diagnostic.message == "incompatible DSL: Component cannot be used in workspace"

    def test_top_level_incompatible(self) -> None:
        ev = make_evaluator()
        assert assembly.element(ev, Person, "Person", "Customer") is None
        assert ev.collector.diagnostics[0].kind is DiagnosticKind.INCOMPATIBLE_CONTEXT

    def test_failed_body_discards_node_under_fail_fast(self) -> None:
        ev = make_evaluator(fail_fast=True)
        workspace = Workspace()
        ev.context.push(workspace)

        with pytest.raises(BuildAborted):
            assembly.element(
                ev, SoftwareSystem, "SoftwareSystem", "Shop", lambda: dispatch.version(ev, "1")
            )

        assert workspace.model.elements == []
        assert ev.context.depth == 1

    def test_skipped_body_discards_node(self) -> None:
        ev = make_evaluator(max_depth=1)
        workspace = Workspace()
        ev.context.push(workspace)

        assert assembly.element(ev, SoftwareSystem, "SoftwareSystem", "Shop", _noop) is None
        assert workspace.model.elements == []


class TestDeployment:
    """Tests for container instances and health checks."""

    def test_instance_ids_count_per_container(self) -> None:
        ev = make_evaluator()
        node = DeploymentNode(name="Prod")
        ev.context.push(node)

        first = assembly.container_instance(ev, "API")
        other = assembly.container_instance(ev, "DB")
        second = assembly.container_instance(ev, "API")

        assert first is not None and second is not None and other is not None
        assert (first.instance_id, second.instance_id, other.instance_id) == (1, 2, 1)
        assert node.container_instances == (first, other, second)

    def test_health_check_in_instance(self) -> None:
        ev = make_evaluator()
        node = DeploymentNode(name="Prod")
        ev.context.push(node)
        checks: list[HealthCheck | None] = []

        def instance_body() -> None:
            checks.append(
                assembly.health_check(
                    ev, "ping", lambda: dispatch.url(ev, "https://example.com/health")
                )
            )

        instance = assembly.container_instance(ev, "API", instance_body)

        assert isinstance(instance, ContainerInstance)
        (check,) = checks
        assert check is not None
        assert check.url == "https://example.com/health"
        assert instance.health_checks == (check,)

    def test_health_check_outside_instance(self) -> None:
        ev = make_evaluator()
        ev.context.push(DeploymentNode(name="Prod"))
        assert assembly.health_check(ev, "ping") is None
        assert ev.collector.diagnostics[0].kind is DiagnosticKind.INCOMPATIBLE_CONTEXT

    def test_instance_body_not_callable(self) -> None:
        ev = make_evaluator()
        node = DeploymentNode(name="Prod")
        ev.context.push(node)
        assert assembly.container_instance(ev, "API", "body") is None
        assert ev.collector.diagnostics[0].kind is DiagnosticKind.MISSING_BODY
        assert node.container_instances == ()

    def test_instance_too_many_arguments(self) -> None:
        ev = make_evaluator()
        ev.context.push(DeploymentNode(name="Prod"))
        assert assembly.container_instance(ev, "API", _noop, _noop) is None
        assert ev.collector.diagnostics[0].message == (
            "too many arguments: expected at most 2, got 3"
        )

    def test_nested_deployment_nodes(self) -> None:
        ev = make_evaluator()
        outer = DeploymentNode(name="Region")
        ev.context.push(outer)
        inner = assembly.element(ev, DeploymentNode, "DeploymentNode", "Zone", "AZ", "aws")
        assert outer.deployment_nodes == (inner,)
