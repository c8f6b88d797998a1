"""Declarations module - Serialized field discovery in C# scripts.

Exports:
- ClassInfo, FieldMember, parse_classes: Syntax-level class/field view
- DeclarationSettings: Base type and serialize attribute
- DeclaredType, analyze_source, build_field_index: Per-script results
"""

from scenetrace.declarations.csharp import ClassInfo, FieldMember, parse_classes
from scenetrace.declarations.extractor import (
    DeclarationSettings,
    DeclaredType,
    analyze_source,
    build_field_index,
    serialized_fields,
)

__all__ = [
    "ClassInfo",
    "DeclarationSettings",
    "DeclaredType",
    "FieldMember",
    "analyze_source",
    "build_field_index",
    "parse_classes",
    "serialized_fields",
]
