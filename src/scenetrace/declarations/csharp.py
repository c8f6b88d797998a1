"""C# class and field declarations via the tree-sitter C# grammar.

Only the shape needed to decide serialization is kept: each class's
name, its direct base list as written, and its field declarations with
modifiers, attribute names and declared variable names. The grammar is
error-tolerant, so broken source still yields whatever declarations the
parser recovered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser

_SKIPPED_NODE_TYPES = frozenset({"comment"})


@dataclass(frozen=True)
class FieldMember:
    """One field declaration; ``public int a, b;`` has names ("a", "b")."""

    names: tuple[str, ...]
    modifiers: frozenset[str] = frozenset()
    attributes: tuple[str, ...] = ()

    def is_serialized(self, serialize_attribute: str = "SerializeField") -> bool:
        """Check whether the engine would serialize this field.

        Public or carrying the serialize attribute, and neither static
        nor const. The attribute test is a substring match so qualified
        names like ``UnityEngine.SerializeField`` also count.
        """
        if "static" in self.modifiers or "const" in self.modifiers:
            return False
        if "public" in self.modifiers:
            return True
        return any(serialize_attribute in name for name in self.attributes)


@dataclass(frozen=True)
class ClassInfo:
    """A class declaration and its direct fields."""

    name: str
    bases: tuple[str, ...] = ()
    fields: tuple[FieldMember, ...] = field(default_factory=tuple)

    def extends(self, base_type: str) -> bool:
        """True if base_type appears verbatim in the direct base list."""
        return base_type in self.bases


@lru_cache(maxsize=1)
def _get_parser() -> Parser:
    return Parser(Language(tree_sitter_c_sharp.language()))


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _named_children(node: Node) -> list[Node]:
    return [c for c in node.named_children if c.type not in _SKIPPED_NODE_TYPES]


def _base_names(class_node: Node) -> tuple[str, ...]:
    base_list = class_node.child_by_field_name("bases")
    if base_list is None:
        base_list = next((c for c in class_node.children if c.type == "base_list"), None)
    if base_list is None:
        return ()
    return tuple(_text(child) for child in _named_children(base_list))


def _attribute_names(field_node: Node) -> tuple[str, ...]:
    names: list[str] = []
    for attr_list in field_node.children:
        if attr_list.type != "attribute_list":
            continue
        for attr in attr_list.named_children:
            if attr.type != "attribute":
                continue
            name_node = attr.child_by_field_name("name")
            if name_node is None and attr.named_children:
                name_node = attr.named_children[0]
            names.append(_text(name_node))
    return tuple(names)


def _declarator_name(declarator: Node) -> str:
    name_node = declarator.child_by_field_name("name")
    if name_node is None:
        name_node = next((c for c in declarator.children if c.type == "identifier"), None)
    return _text(name_node)


def _field_member(field_node: Node) -> FieldMember:
    modifiers = frozenset(
        _text(child).strip() for child in field_node.children if child.type == "modifier"
    )
    names: list[str] = []
    for declaration in field_node.children:
        if declaration.type != "variable_declaration":
            continue
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            name = _declarator_name(declarator)
            if name:
                names.append(name)
    return FieldMember(
        names=tuple(names),
        modifiers=modifiers,
        attributes=_attribute_names(field_node),
    )


def _class_info(class_node: Node) -> ClassInfo:
    body = class_node.child_by_field_name("body")
    if body is None:
        body = next((c for c in class_node.children if c.type == "declaration_list"), None)

    members: list[FieldMember] = []
    if body is not None:
        for member in body.named_children:
            if member.type == "field_declaration":
                members.append(_field_member(member))

    return ClassInfo(
        name=_text(class_node.child_by_field_name("name")),
        bases=_base_names(class_node),
        fields=tuple(members),
    )


def parse_classes(source: str) -> list[ClassInfo]:
    """Parse C# source and return every class declaration, nested included.

    Classes are returned in source order.
    """
    tree = _get_parser().parse(source.encode("utf-8"))

    classes: list[ClassInfo] = []
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "class_declaration":
            classes.append(_class_info(node))
        # Reverse so the leftmost child is visited first
        stack.extend(reversed(node.children))
    return classes
