"""Project Factory - Run the whole analysis over one Unity project.

This module is the single entry point commands use: it discovers
scripts and scenes, extracts serialized fields, builds one entity graph
and hierarchy per scene and folds every scene into the usage set.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from scenetrace.config import get_config
from scenetrace.declarations import (
    DeclarationSettings,
    DeclaredType,
    analyze_source,
    build_field_index,
)
from scenetrace.project import (
    ScanSettings,
    ScriptInfo,
    find_scenes,
    find_scripts,
    iter_declaration_units,
)
from scenetrace.report import unused_scripts
from scenetrace.scene import (
    EntityGraph,
    FieldIndex,
    SceneDocument,
    SceneNode,
    SceneSchema,
    build_entity_graph,
    build_hierarchy,
)
from scenetrace.usage import UsageAccumulator


@dataclass
class SceneResult:
    """Graph and hierarchy of one scene.

    Attributes:
        path: Scene file path.
        graph: Entity graph built from the scene text.
        forest: Reconstructed GameObject hierarchy.
    """

    path: Path
    graph: EntityGraph
    forest: list[SceneNode] = field(default_factory=list)


@dataclass
class ProjectScan:
    """Everything one run produced.

    Attributes:
        root: Project root.
        scripts: Every script with a guid.
        declared: Declaration analysis per script.
        field_index: Serialized field names per matched script guid.
        scenes: Per-scene results, in scene path order.
        used: Guids of scripts in use (lower-case).
        errors: Files that could not be read.
    """

    root: Path
    scripts: list[ScriptInfo] = field(default_factory=list)
    declared: list[DeclaredType] = field(default_factory=list)
    field_index: dict[str, frozenset[str]] = field(default_factory=dict)
    scenes: list[SceneResult] = field(default_factory=list)
    used: frozenset[str] = frozenset()
    errors: list[str] = field(default_factory=list)

    def unused(self) -> list[ScriptInfo]:
        """Scripts not in use, in report order."""
        return unused_scripts(self.scripts, self.used)


def analyze_scene(
    scene_path: Path,
    field_index: FieldIndex,
    schema: SceneSchema,
) -> SceneResult:
    """Read and analyze one scene file.

    Raises:
        OSError: If the file cannot be read.
    """
    text = scene_path.read_text(encoding="utf-8", errors="replace")
    graph = build_entity_graph(SceneDocument(text, str(scene_path)), field_index, schema)
    return SceneResult(path=scene_path, graph=graph, forest=build_hierarchy(graph))


def scan_project(
    root: Path,
    config: dict[str, Any] | None = None,
    jobs: int = 1,
    progress: Callable[[str], None] | None = None,
) -> ProjectScan:
    """Analyze a Unity project.

    Args:
        root: Project root directory.
        config: Effective configuration; loaded from root when None.
        jobs: Scenes analyzed concurrently when greater than one.
        progress: Optional callback receiving one message per file.

    Returns:
        ProjectScan with scripts, fields, scene results and usage.
    """
    root = root.resolve()
    if config is None:
        config = get_config(start_dir=root)

    scan_settings = ScanSettings.from_config(config)
    decl_settings = DeclarationSettings.from_config(config)
    schema = SceneSchema.from_config(config)

    result = ProjectScan(root=root)
    result.scripts = find_scripts(root, scan_settings)

    for script, source in iter_declaration_units(root, result.scripts, result.errors):
        if progress:
            progress(f"Parsing {script.relative_path}")
        result.declared.append(
            analyze_source(script.guid, source, script.relative_path, decl_settings)
        )
    result.field_index = build_field_index(result.declared)

    accumulator = UsageAccumulator()
    scene_paths = find_scenes(root, scan_settings)
    by_path: dict[Path, SceneResult] = {}

    def _run(scene_path: Path) -> SceneResult:
        scene = analyze_scene(scene_path, result.field_index, schema)
        accumulator.add_graph(scene.graph)
        return scene

    if jobs > 1 and len(scene_paths) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            futures = {executor.submit(_run, path): path for path in scene_paths}
            for future in as_completed(futures):
                path = futures[future]
                try:
                    by_path[path] = future.result()
                except OSError as e:
                    result.errors.append(f"Cannot read {path}: {e}")
                    continue
                if progress:
                    progress(f"Analyzed {path.relative_to(root).as_posix()}")
    else:
        for path in scene_paths:
            try:
                by_path[path] = _run(path)
            except OSError as e:
                result.errors.append(f"Cannot read {path}: {e}")
                continue
            if progress:
                progress(f"Analyzed {path.relative_to(root).as_posix()}")

    result.scenes = [by_path[p] for p in scene_paths if p in by_path]
    result.used = accumulator.used()
    return result
