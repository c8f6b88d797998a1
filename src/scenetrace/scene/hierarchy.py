"""Hierarchy Reconstructor - GameObject forest from transform relationships.

Roots come from the SceneRoots manifest in listed order; children come
from each transform's m_Children list in listed order. A GameObject is
attached at most once: the first place it is reached wins and every
later reference to it is dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from scenetrace.scene.graph import EntityGraph


@dataclass
class SceneNode:
    """A named GameObject in the reconstructed hierarchy.

    Attributes:
        name: The GameObject's m_Name.
        object_id: Block id of the GameObject.
        children: Child nodes in m_Children order.
    """

    name: str
    object_id: int = 0
    children: list[SceneNode] = field(default_factory=list)

    def walk(self, depth: int = 0) -> Iterator[tuple[SceneNode, int]]:
        """Yield (node, depth) pairs in pre-order."""
        yield self, depth
        for child in self.children:
            yield from child.walk(depth + 1)

    def to_dict(self) -> dict:
        """Return a JSON-serializable nested dict."""
        return {
            "name": self.name,
            "id": self.object_id,
            "children": [child.to_dict() for child in self.children],
        }


def walk_forest(forest: list[SceneNode]) -> Iterator[tuple[SceneNode, int]]:
    """Yield (node, depth) for every node of every root, pre-order."""
    for root in forest:
        yield from root.walk()


def _resolve(graph: EntityGraph, transform_id: int) -> tuple[int, str] | None:
    """Resolve a transform id to its (GameObject id, name), if named."""
    if transform_id not in graph.child_order:
        return None
    object_id = graph.owner_of.get(transform_id)
    if object_id is None:
        return None
    name = graph.display_name.get(object_id)
    if name is None:
        return None
    return object_id, name


def _attach_children(
    graph: EntityGraph,
    transform_id: int,
    parent: SceneNode,
    attached: set[int],
) -> None:
    for child_transform in graph.child_order.get(transform_id, ()):
        resolved = _resolve(graph, child_transform)
        if resolved is None:
            continue
        object_id, name = resolved
        if object_id in attached:
            continue
        attached.add(object_id)

        node = SceneNode(name=name, object_id=object_id)
        parent.children.append(node)
        _attach_children(graph, child_transform, node, attached)


def build_hierarchy(graph: EntityGraph) -> list[SceneNode]:
    """Build the ordered GameObject forest of one scene.

    Without a SceneRoots manifest the forest is empty; roots are never
    inferred from parentless transforms.

    Args:
        graph: Entity graph of the scene.

    Returns:
        Root nodes in manifest order.
    """
    roots: list[SceneNode] = []
    attached: set[int] = set()

    for transform_id in graph.root_order:
        resolved = _resolve(graph, transform_id)
        if resolved is None:
            continue
        object_id, name = resolved
        if object_id in attached:
            continue
        attached.add(object_id)

        node = SceneNode(name=name, object_id=object_id)
        roots.append(node)
        _attach_children(graph, transform_id, node, attached)

    return roots
