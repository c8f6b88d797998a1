"""
scenetrace.report - Unused-script CSV and scene hierarchy dumps.
"""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import AbstractSet, Iterable, List

from scenetrace.project import ScriptInfo
from scenetrace.scene.hierarchy import SceneNode, walk_forest

CSV_HEADER = ("Relative Path", "GUID")


def unused_scripts(scripts: Iterable[ScriptInfo], used: AbstractSet[str]) -> List[ScriptInfo]:
    """
    Scripts whose guid is not in used.

    Sorted by path depth (shallow first), then by path. Guids compare
    case-insensitively.
    """
    unused = [s for s in scripts if s.guid.lower() not in used]
    return sorted(unused, key=lambda s: (s.depth, s.relative_path))


def render_unused_csv(rows: Iterable[ScriptInfo]) -> str:
    """Render the unused-script report as CSV text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for script in rows:
        writer.writerow((script.relative_path, script.guid))
    return buffer.getvalue()


def write_unused_csv(
    output_dir: Path,
    rows: Iterable[ScriptInfo],
    file_name: str = "UnusedScripts.csv",
) -> Path:
    """Write the unused-script report and return its path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / file_name
    path.write_text(render_unused_csv(rows), encoding="utf-8")
    return path


def unused_to_json(rows: Iterable[ScriptInfo]) -> str:
    """Render the unused-script report as a JSON array."""
    return json.dumps(
        [{"path": s.relative_path, "guid": s.guid} for s in rows],
        indent=2,
    )


def render_dump(forest: List[SceneNode], indent: str = "--") -> str:
    """
    Render a GameObject forest one name per line.

    Each line is prefixed by indent repeated once per level of depth;
    nodes appear in pre-order.
    """
    lines = [f"{indent * depth}{node.name}" for node, depth in walk_forest(forest)]
    return "".join(line + "\n" for line in lines)


def write_scene_dump(
    output_dir: Path,
    scene_path: Path,
    forest: List[SceneNode],
    suffix: str = ".dump",
    indent: str = "--",
) -> Path:
    """Write ``<scene file name><suffix>`` into output_dir."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / (scene_path.name + suffix)
    path.write_text(render_dump(forest, indent), encoding="utf-8")
    return path
