"""Scene module - Unity scene parsing, entity graph and hierarchy.

Exports:
- Block, SceneDocument, iter_blocks: Block splitting
- BlockKind, SceneSchema: Kind numbers and field names
- EntityGraph, TypeBindings, Reference, build_entity_graph: Two-pass graph builder
- SceneNode, build_hierarchy, walk_forest: GameObject forest
"""

from scenetrace.scene.blocks import Block, SceneDocument, index_blocks, iter_blocks
from scenetrace.scene.graph import (
    EntityGraph,
    FieldIndex,
    Reference,
    TypeBindings,
    bind_types,
    build_entity_graph,
    extract_references,
)
from scenetrace.scene.hierarchy import SceneNode, build_hierarchy, walk_forest
from scenetrace.scene.schema import BlockKind, SceneSchema

__all__ = [
    "Block",
    "BlockKind",
    "EntityGraph",
    "FieldIndex",
    "Reference",
    "SceneDocument",
    "SceneNode",
    "SceneSchema",
    "TypeBindings",
    "bind_types",
    "build_entity_graph",
    "build_hierarchy",
    "extract_references",
    "index_blocks",
    "iter_blocks",
    "walk_forest",
]
