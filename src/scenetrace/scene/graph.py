"""Entity Graph Builder - Two-pass interpretation of scene blocks.

Pass 1 binds every MonoBehaviour block to the guid of its script
(``m_Script``). Pass 2 reads the serialized fields of each bound
MonoBehaviour, keeping only fields the script still declares, and
records the block pointers they hold. Pass 2 takes pass 1's result as an
argument, so a field may point at a MonoBehaviour that appears later in
the file.

Transform, GameObject and SceneRoots blocks are read independently of
the two passes to produce the data the hierarchy dump needs.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import AbstractSet, Iterable, Iterator

from scenetrace.scene.blocks import Block, SceneDocument, index_blocks
from scenetrace.scene.fields import (
    find_guid,
    find_pointer,
    first_field_value,
    list_field_pointers,
    parse_field,
)
from scenetrace.scene.schema import SceneSchema

FieldIndex = Mapping[str, AbstractSet[str]]


class TypeBindings(Mapping[int, str]):
    """Read-only mapping of MonoBehaviour block id to script guid."""

    def __init__(self, bindings: Mapping[int, str] | None = None) -> None:
        self._bindings: Mapping[int, str] = MappingProxyType(dict(bindings or {}))

    def __getitem__(self, block_id: int) -> str:
        return self._bindings[block_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"TypeBindings({dict(self._bindings)!r})"

    def guids(self) -> frozenset[str]:
        """Return every script guid that has at least one instance."""
        return frozenset(self._bindings.values())


@dataclass(frozen=True)
class Reference:
    """A serialized field of one MonoBehaviour pointing at another block.

    Attributes:
        source_id: Block id of the MonoBehaviour holding the field.
        target_id: Block id the field points at.
        field_name: Name of the declared field.
        line_number: 1-based line of the field in the scene file.
    """

    source_id: int
    target_id: int
    field_name: str = ""
    line_number: int = 0


@dataclass(frozen=True)
class EntityGraph:
    """Everything extracted from one scene document.

    All mappings are read-only views; the graph is not modified after
    ``build_entity_graph`` returns.
    """

    path: str = ""
    bindings: TypeBindings = field(default_factory=TypeBindings)
    references: tuple[Reference, ...] = ()
    child_order: Mapping[int, tuple[int, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    owner_of: Mapping[int, int] = field(default_factory=lambda: MappingProxyType({}))
    display_name: Mapping[int, str] = field(default_factory=lambda: MappingProxyType({}))
    root_order: tuple[int, ...] = ()

    @property
    def instantiated(self) -> frozenset[str]:
        """Script guids with at least one instance in this document."""
        return self.bindings.guids()

    def referenced_guids(self) -> frozenset[str]:
        """Script guids whose instances are the target of a field reference."""
        return frozenset(
            self.bindings[ref.target_id]
            for ref in self.references
            if ref.target_id in self.bindings
        )


def bind_types(blocks: Iterable[Block], schema: SceneSchema) -> TypeBindings:
    """Pass 1: bind MonoBehaviour block ids to script guids.

    Blocks whose script field is missing or carries no guid stay unbound.
    """
    bindings: dict[int, str] = {}
    for block in blocks:
        if block.kind != schema.mono_behaviour_kind:
            continue
        value = first_field_value(block.lines, schema.script_field)
        guid = find_guid(value) if value is not None else None
        if guid is not None:
            bindings[block.id] = guid
    return TypeBindings(bindings)


def extract_references(
    blocks: Iterable[Block],
    bindings: TypeBindings,
    field_index: FieldIndex,
    schema: SceneSchema,
) -> list[Reference]:
    """Pass 2: collect field references from bound MonoBehaviours.

    Unbound instances, instances whose script has no known field set,
    and field names the script does not declare contribute nothing.
    Only the first pointer on a line is used.
    """
    references: list[Reference] = []

    for block in blocks:
        if block.kind != schema.mono_behaviour_kind:
            continue
        guid = bindings.get(block.id)
        if guid is None:
            continue
        declared = field_index.get(guid)
        if declared is None:
            continue

        for offset, line in enumerate(block.lines, start=1):
            parsed = parse_field(line)
            if parsed is None:
                continue
            name, value = parsed
            # Stale data left in the file after the field was removed from code
            if name not in declared:
                continue
            target = find_pointer(value)
            if target is None:
                continue
            references.append(
                Reference(
                    source_id=block.id,
                    target_id=target,
                    field_name=name,
                    line_number=block.line_number + offset,
                )
            )

    return references


def _read_relationships(
    blocks: Iterable[Block],
    schema: SceneSchema,
) -> tuple[dict[int, int], dict[int, tuple[int, ...]], dict[int, str]]:
    """Read transform ownership/children and GameObject names."""
    owner_of: dict[int, int] = {}
    child_order: dict[int, tuple[int, ...]] = {}
    display_name: dict[int, str] = {}

    for block in blocks:
        if block.kind in schema.transform_kinds:
            owner_value = first_field_value(block.lines, schema.owner_field)
            owner = find_pointer(owner_value) if owner_value is not None else None
            if owner is not None:
                owner_of[block.id] = owner
            child_order[block.id] = tuple(
                list_field_pointers(block.lines, schema.children_field)
            )
        elif block.kind == schema.game_object_kind:
            name = first_field_value(block.lines, schema.name_field)
            if name is not None:
                display_name[block.id] = name

    return owner_of, child_order, display_name


def _read_root_order(blocks: Iterable[Block], schema: SceneSchema) -> tuple[int, ...]:
    """Read m_Roots from the last SceneRoots block in document order."""
    manifest: Block | None = None
    for block in blocks:
        if block.kind != schema.scene_roots_kind:
            continue
        if manifest is None or block.line_number >= manifest.line_number:
            manifest = block
    if manifest is None:
        return ()
    return tuple(list_field_pointers(manifest.lines, schema.roots_field))


def build_entity_graph(
    document: SceneDocument,
    field_index: FieldIndex,
    schema: SceneSchema | None = None,
) -> EntityGraph:
    """Build the entity graph for one scene document.

    Args:
        document: The scene text.
        field_index: Script guid to serialized field names.
        schema: Kind numbers and field names; defaults to Unity's.

    Returns:
        A frozen EntityGraph.
    """
    schema = schema or SceneSchema()
    blocks = list(index_blocks(document.blocks()).values())

    bindings = bind_types(blocks, schema)
    references = extract_references(blocks, bindings, field_index, schema)
    owner_of, child_order, display_name = _read_relationships(blocks, schema)

    return EntityGraph(
        path=document.path,
        bindings=bindings,
        references=tuple(references),
        child_order=MappingProxyType(child_order),
        owner_of=MappingProxyType(owner_of),
        display_name=MappingProxyType(display_name),
        root_order=_read_root_order(blocks, schema),
    )
