"""Declaration Extractor - Serialized field names per script guid.

A script counts as a component declaration when one of its classes
lists the configured base type (MonoBehaviour by default) in its direct
base list. The base is compared as written: aliases, ``using`` imports
and indirect inheritance are not resolved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from scenetrace.declarations.csharp import parse_classes


@dataclass(frozen=True)
class DeclarationSettings:
    """Base type to match and attribute that forces serialization."""

    base_type: str = "MonoBehaviour"
    serialize_attribute: str = "SerializeField"

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> DeclarationSettings:
        section = config.get("declarations", {})
        return cls(
            base_type=section.get("base_type", cls.base_type),
            serialize_attribute=section.get("serialize_attribute", cls.serialize_attribute),
        )


@dataclass(frozen=True)
class DeclaredType:
    """Result of analyzing one script file.

    Attributes:
        guid: Stable id of the script, from its .meta sidecar (lower-case).
        path: Project-relative path of the script.
        class_names: Names of the classes that matched the base type.
        base_type_matched: True if any class matched.
        fields: Serialized field names across all matched classes.
    """

    guid: str
    path: str = ""
    class_names: tuple[str, ...] = ()
    base_type_matched: bool = False
    fields: frozenset[str] = frozenset()


def serialized_fields(
    source: str,
    settings: DeclarationSettings | None = None,
) -> tuple[tuple[str, ...], frozenset[str]]:
    """Find matched classes and their serialized fields in C# source.

    Args:
        source: C# source text.
        settings: Base type and serialize attribute to use.

    Returns:
        (names of matched classes, union of their serialized field names)
    """
    settings = settings or DeclarationSettings()
    matched: list[str] = []
    names: set[str] = set()

    for class_info in parse_classes(source):
        if not class_info.extends(settings.base_type):
            continue
        matched.append(class_info.name)
        for member in class_info.fields:
            if member.is_serialized(settings.serialize_attribute):
                names.update(member.names)

    return tuple(matched), frozenset(names)


def analyze_source(
    guid: str,
    source: str,
    path: str = "",
    settings: DeclarationSettings | None = None,
) -> DeclaredType:
    """Analyze one script and return its DeclaredType."""
    class_names, fields = serialized_fields(source, settings)
    return DeclaredType(
        guid=guid.lower(),
        path=path,
        class_names=class_names,
        base_type_matched=bool(class_names),
        fields=fields,
    )


def build_field_index(declared: Iterable[DeclaredType]) -> dict[str, frozenset[str]]:
    """Map guid to field names for every script whose base type matched.

    Scripts that did not match are left out entirely, so the graph
    builder cannot filter (and therefore ignores) their instances' fields.
    """
    index: dict[str, frozenset[str]] = {}
    for declared_type in declared:
        if declared_type.base_type_matched:
            index[declared_type.guid] = declared_type.fields
    return index
