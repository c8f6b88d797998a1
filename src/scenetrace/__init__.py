"""
scenetrace - Unused script detection and scene hierarchy dumps for Unity

scenetrace reads a Unity project's C# scripts and serialized scenes,
works out which MonoBehaviour scripts are actually used (instantiated in
a scene or referenced from a live serialized field) and reconstructs
each scene's GameObject hierarchy.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("scenetrace")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__author__ = "Anspar"
__license__ = "MIT"

from scenetrace.declarations import DeclaredType, analyze_source, build_field_index
from scenetrace.factory import ProjectScan, scan_project
from scenetrace.scene import EntityGraph, SceneDocument, SceneNode, build_entity_graph, build_hierarchy
from scenetrace.usage import UsageAccumulator, classify_usage

__all__ = [
    "__version__",
    "DeclaredType",
    "EntityGraph",
    "ProjectScan",
    "SceneDocument",
    "SceneNode",
    "UsageAccumulator",
    "analyze_source",
    "build_entity_graph",
    "build_field_index",
    "build_hierarchy",
    "classify_usage",
    "scan_project",
]
