"""Workspace -> rich Tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from rich.tree import Tree

from archdsl.domain.model.elements import Element, HealthCheck
from archdsl.domain.model.enums import ElementLocation

if TYPE_CHECKING:
    from archdsl.domain.model.elements import Node, Workspace


def build_tree(workspace: Workspace) -> Tree:
    """Render the workspace as a rich Tree, children in insertion order.

    Labels are Text, not markup: element names may contain brackets.
    """
    label = Text(workspace.display_name, style="bold")
    if workspace.version:
        label.append(f"  v{workspace.version}", style="dim")
    enterprise = workspace.model.enterprise
    if enterprise is not None:
        label.append(f"  enterprise={enterprise.name!r}", style="dim")

    root = Tree(label)
    for child in workspace.children:
        _add_node(root, child)
    return root


def _add_node(parent: Tree, node: Node) -> None:
    branch = parent.add(_label(node))
    if isinstance(node, Element) and node.properties:
        props = branch.add(Text("properties", style="italic"))
        for key, value in node.properties.items():
            props.add(Text(f"{key} = {value}"))
    for child in node.children:
        _add_node(branch, child)


def _label(node: Node) -> Text:
    label = Text(node.display_name, style="cyan")
    if isinstance(node, HealthCheck):
        if node.url is not None:
            label.append(f"  {node.url}", style="blue")
        return label

    if isinstance(node, Element):
        if node.technology:
            label.append(f"  [{node.technology}]", style="magenta")
        if node.location is ElementLocation.EXTERNAL:
            label.append("  external", style="yellow")
        if node.tags:
            label.append(f"  tags={node.joined_tags}", style="green")
        if node.url is not None:
            label.append(f"  {node.url}", style="blue")
    return label
