"""Tests for presentation/api/dsl.py."""

import pytest

from archdsl import BuildConfig, Dsl, WorkspaceArgs
from archdsl.application.context import TOP_LEVEL
from archdsl.domain.exceptions import WorkspaceAlreadyDefinedError
from archdsl.domain.model.elements import (
    Container,
    ContainerInstance,
    DeploymentNode,
    HealthCheck,
    InfrastructureNode,
    Person,
    SoftwareSystem,
)
from archdsl.domain.model.enums import DiagnosticKind, ElementLocation


class TestWorkspace:
    """Tests for the workspace entry points."""

    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            ((), ("", "")),
            (("N",), ("N", "")),
            (("N", "D"), ("N", "D")),
        ],
    )
    def test_call_shapes(self, args: tuple[str, ...], expected: tuple[str, str]) -> None:
        dsl = Dsl()
        result = dsl.workspace(*args, lambda: None)

        assert result.passed
        assert result.workspace is not None
        assert (result.workspace.name, result.workspace.description) == expected

    def test_missing_body_not_published(self) -> None:
        dsl = Dsl()
        result = dsl.workspace()
        assert result.workspace is None
        assert result.count(DiagnosticKind.MISSING_BODY) == 1

    def test_too_many_arguments(self) -> None:
        result = Dsl().workspace("a", "b", "c", lambda: None)
        assert result.workspace is None
        assert "too many arguments" in result.diagnostics[0].message

    def test_build_with_args(self) -> None:
        dsl = Dsl()
        result = dsl.build(WorkspaceArgs(body=lambda: dsl.version("2"), name="Retail"))
        assert result.workspace is not None
        assert result.workspace.version == "2"

    def test_second_publish_raises(self) -> None:
        dsl = Dsl()
        dsl.workspace("Retail", lambda: None)
        with pytest.raises(WorkspaceAlreadyDefinedError, match="Retail"):
            dsl.workspace("Other", lambda: None)

    def test_retry_after_failed_build(self) -> None:
        dsl = Dsl()
        assert dsl.workspace().workspace is None
        result = dsl.workspace("Retail", lambda: None)
        assert result.published
        assert result.diagnostic_count == 1

    def test_result_snapshot(self) -> None:
        dsl = Dsl()
        assert dsl.result.workspace is None
        assert dsl.result.diagnostics == ()


class TestAttributes:
    """Attribute keywords through the facade."""

    def test_system_attributes(self) -> None:
        dsl = Dsl()
        systems: list[SoftwareSystem | None] = []

        def shop() -> None:
            dsl.tag("a", "b")
            dsl.tag("c")
            dsl.url("https://example.com/x")
            dsl.external()
            dsl.properties(lambda: (dsl.prop("k", "v1"), dsl.prop("k", "v2")))

        result = dsl.workspace("Retail", lambda: systems.append(dsl.software_system("Shop", shop)))

        assert result.passed
        (system,) = systems
        assert system is not None
        assert system.tags == ["a", "b", "c"]
        assert system.url == "https://example.com/x"
        assert system.location is ElementLocation.EXTERNAL
        assert system.properties == {"k": "v2"}

    def test_invalid_url_diagnostic_has_call_site(self) -> None:
        dsl = Dsl()

        def shop() -> None:
            dsl.url("not a url")

        result = dsl.workspace(lambda: dsl.software_system("Shop", shop))

        (diagnostic,) = result.diagnostics
        assert diagnostic.kind is DiagnosticKind.VALIDATION_ERROR
        assert diagnostic.call_site is not None
        assert diagnostic.call_site.file == __file__
        assert diagnostic.call_site.func == "shop"
        assert result.workspace is not None
        assert result.workspace.model.software_systems[0].url is None

    def test_call_sites_disabled(self) -> None:
        dsl = Dsl(BuildConfig(capture_call_sites=False))
        result = dsl.workspace(lambda: dsl.tag("x"))
        assert result.diagnostics[0].call_site is None

    def test_top_level_keyword(self) -> None:
        dsl = Dsl()
        dsl.tag("x")
        (diagnostic,) = dsl.result.diagnostics
        assert diagnostic.kind is DiagnosticKind.INCOMPATIBLE_CONTEXT
        assert diagnostic.subject == "top level"

    def test_enterprise_and_version(self) -> None:
        dsl = Dsl()

        def model() -> None:
            dsl.enterprise("Acme")
            dsl.version("1.0")
            dsl.version("1.1")

        result = dsl.workspace(model)
        assert result.passed
        assert result.workspace is not None
        assert result.workspace.version == "1.1"
        assert result.workspace.model.enterprise is not None
        assert result.workspace.model.enterprise.name == "Acme"


class TestElements:
    """Element builders through the facade."""

    def test_full_tree(self) -> None:
        dsl = Dsl()

        def model() -> None:
            dsl.person("Customer", "Buys things", dsl.external)
            dsl.software_system("Shop", shop)
            dsl.deployment_node("Prod", "Production", "k8s", prod)

        def shop() -> None:
            dsl.container("API", "REST API", "Python", lambda: dsl.component("Orders"))

        def prod() -> None:
            dsl.infrastructure_node("LB", "Load balancer", "nginx")
            dsl.container_instance("API", lambda: dsl.health_check("ping", ping))

        def ping() -> None:
            dsl.url("https://example.com/health")

        result = dsl.workspace("Retail", model)

        workspace = result.raise_for_diagnostics()
        (person,) = workspace.model.people
        assert isinstance(person, Person)
        assert person.location is ElementLocation.EXTERNAL
        (api,) = workspace.model.software_systems[0].containers
        assert isinstance(api, Container)
        assert [c.name for c in api.components] == ["Orders"]
        (prod_node,) = workspace.model.deployment_nodes
        assert isinstance(prod_node, DeploymentNode)
        assert isinstance(prod_node.infrastructure_nodes[0], InfrastructureNode)
        instance = prod_node.container_instances[0]
        assert isinstance(instance, ContainerInstance)
        check = instance.health_checks[0]
        assert isinstance(check, HealthCheck)
        assert check.url == "https://example.com/health"

    def test_builder_returns_node(self) -> None:
        dsl = Dsl()
        returned: list[object] = []
        result = dsl.workspace(lambda: returned.append(dsl.person("Customer")))
        assert result.workspace is not None
        assert returned == [result.workspace.model.people[0]]

    def test_incompatible_builder_returns_none(self) -> None:
        dsl = Dsl()
        returned: list[object] = []
        result = dsl.workspace(lambda: returned.append(dsl.container("API")))
        assert returned == [None]
        assert result.count(DiagnosticKind.INCOMPATIBLE_CONTEXT) == 1


class TestInspection:
    def test_current_and_depth(self) -> None:
        dsl = Dsl()
        seen: list[tuple[object, int]] = []

        def shop() -> None:
            seen.append((dsl.current(), dsl.depth))

        result = dsl.workspace(lambda: dsl.software_system("Shop", shop))

        assert result.workspace is not None
        assert seen == [(result.workspace.model.software_systems[0], 2)]
        assert dsl.current() is TOP_LEVEL
        assert dsl.depth == 0

    def test_config(self) -> None:
        config = BuildConfig(fail_fast=True)
        assert Dsl(config).config is config


class TestFailFast:
    """fail_fast aborts the build at the first diagnostic."""

    def test_first_diagnostic_aborts(self) -> None:
        dsl = Dsl(BuildConfig(fail_fast=True))
        after: list[bool] = []

        def model() -> None:
            dsl.tag("x")
            after.append(True)

        result = dsl.workspace(model)

        assert result.workspace is None
        assert after == []
        assert result.diagnostic_count == 1
        assert dsl.depth == 0

    def test_nested_abort_unwinds_to_root(self) -> None:
        dsl = Dsl(BuildConfig(fail_fast=True))
        after: list[str] = []

        def model() -> None:
            dsl.software_system("Shop", lambda: dsl.url("not a url"))
            after.append("model")

        result = dsl.workspace(model)

        assert result.workspace is None
        assert after == []
        assert result.diagnostic_count == 1
        assert dsl.depth == 0

    def test_top_level_misuse_does_not_raise(self) -> None:
        dsl = Dsl(BuildConfig(fail_fast=True))
        assert dsl.person("Customer") is None
        assert dsl.result.diagnostic_count == 1
