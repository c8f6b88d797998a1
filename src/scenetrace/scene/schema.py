"""SceneSchema - Block kinds and field names recognised in scene documents.

Unity scene files identify each serialized object by a class number in
its block header (``--- !u!<kind> &<id>``). The schema names the kinds
and fields the graph builder cares about so that nothing downstream
hard-codes Unity's numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class BlockKind(IntEnum):
    """Unity class numbers for the block kinds the builder interprets."""

    GAME_OBJECT = 1
    TRANSFORM = 4
    MONO_BEHAVIOUR = 114
    RECT_TRANSFORM = 224
    SCENE_ROOTS = 1660057539


@dataclass(frozen=True)
class SceneSchema:
    """Kind numbers and field names used to interpret blocks.

    Attributes:
        game_object_kind: Kind of the named objects that form the hierarchy.
        transform_kinds: Kinds that carry owner/children relationships.
        mono_behaviour_kind: Kind of script instances bound to a declaration.
        scene_roots_kind: Kind of the manifest listing top-level transforms.
        script_field: Field holding the declaration reference (guid).
        name_field: Field holding a GameObject's display name.
        owner_field: Field pointing from a transform to its GameObject.
        children_field: List field of child transform pointers.
        roots_field: List field of root transform pointers.
    """

    game_object_kind: int = BlockKind.GAME_OBJECT
    transform_kinds: frozenset[int] = frozenset(
        {BlockKind.TRANSFORM, BlockKind.RECT_TRANSFORM}
    )
    mono_behaviour_kind: int = BlockKind.MONO_BEHAVIOUR
    scene_roots_kind: int = BlockKind.SCENE_ROOTS
    script_field: str = "m_Script"
    name_field: str = "m_Name"
    owner_field: str = "m_GameObject"
    children_field: str = "m_Children"
    roots_field: str = "m_Roots"

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> SceneSchema:
        """Build a schema from the ``[scene]`` section of a config dict.

        Missing keys keep their defaults. ``kinds.transform`` may be a
        single integer or a list of integers.
        """
        section = config.get("scene", {})
        kinds = section.get("kinds", {})
        fields = section.get("fields", {})
        defaults = cls()

        transform = kinds.get("transform", sorted(defaults.transform_kinds))
        if isinstance(transform, int):
            transform = [transform]

        return cls(
            game_object_kind=int(kinds.get("game_object", defaults.game_object_kind)),
            transform_kinds=frozenset(int(k) for k in transform),
            mono_behaviour_kind=int(kinds.get("mono_behaviour", defaults.mono_behaviour_kind)),
            scene_roots_kind=int(kinds.get("scene_roots", defaults.scene_roots_kind)),
            script_field=fields.get("script", defaults.script_field),
            name_field=fields.get("name", defaults.name_field),
            owner_field=fields.get("owner", defaults.owner_field),
            children_field=fields.get("children", defaults.children_field),
            roots_field=fields.get("roots", defaults.roots_field),
        )
