"""
scenetrace.project - Unity project file discovery.

Finds C# scripts together with the guid Unity assigned them (stored in
the ``.meta`` sidecar next to each asset) and the scene documents to
analyze. A script without a readable guid is not a Unity asset and is
left out.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class ScriptInfo:
    """
    A script asset.

    Attributes:
        guid: Guid from the .meta sidecar, as written
        relative_path: POSIX path relative to the project root
    """

    guid: str
    relative_path: str

    @property
    def depth(self) -> int:
        """Number of directory separators in the relative path."""
        return self.relative_path.count("/")


@dataclass(frozen=True)
class ScanSettings:
    """File suffixes and ignored directory names for discovery."""

    script_suffix: str = ".cs"
    meta_suffix: str = ".meta"
    scene_suffixes: Tuple[str, ...] = (".unity",)
    ignore: frozenset = frozenset({"Library", "Temp", "Logs", "obj", ".git"})

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScanSettings":
        section = config.get("scan", {})
        defaults = cls()
        scene_suffixes = section.get("scene_suffixes", defaults.scene_suffixes)
        if isinstance(scene_suffixes, str):
            scene_suffixes = [scene_suffixes]
        return cls(
            script_suffix=section.get("script_suffix", defaults.script_suffix),
            meta_suffix=section.get("meta_suffix", defaults.meta_suffix),
            scene_suffixes=tuple(scene_suffixes),
            ignore=frozenset(section.get("ignore", defaults.ignore)),
        )


def read_guid_from_meta(meta_path: Path) -> Optional[str]:
    """
    Read the ``guid:`` line from a .meta file.

    Args:
        meta_path: Path to the sidecar

    Returns:
        The guid text, or None if the file is missing, unreadable or has
        no guid line
    """
    try:
        with meta_path.open(encoding="utf-8", errors="replace") as fh:
            for line in fh:
                trimmed = line.lstrip()
                if not trimmed.startswith("guid:"):
                    continue
                guid = trimmed.split(":", 1)[1].strip()
                return guid or None
    except OSError:
        return None
    return None


def iter_project_files(
    root: Path,
    suffixes: Tuple[str, ...],
    ignore: frozenset = frozenset(),
) -> Iterator[Path]:
    """
    Yield files under root whose name ends with one of suffixes.

    Directories named in ignore are not descended into. Output order is
    deterministic (sorted per directory).
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in ignore)
        for name in sorted(filenames):
            if name.endswith(suffixes):
                yield Path(dirpath) / name


def find_scripts(
    root: Path,
    settings: Optional[ScanSettings] = None,
) -> List[ScriptInfo]:
    """
    Collect every script that has a guid in its .meta sidecar.

    Returns:
        ScriptInfo list sorted by relative path
    """
    settings = settings or ScanSettings()
    scripts: List[ScriptInfo] = []

    for script_path in iter_project_files(root, (settings.script_suffix,), settings.ignore):
        meta_path = script_path.with_name(script_path.name + settings.meta_suffix)
        guid = read_guid_from_meta(meta_path)
        if guid is None:
            continue
        relative = script_path.relative_to(root).as_posix()
        scripts.append(ScriptInfo(guid=guid, relative_path=relative))

    return sorted(scripts, key=lambda s: s.relative_path)


def iter_declaration_units(
    root: Path,
    scripts: List[ScriptInfo],
    errors: Optional[List[str]] = None,
) -> Iterator[Tuple[ScriptInfo, str]]:
    """
    Yield (script, source text) for each script that can be read.

    Unreadable files are skipped and reported through errors.
    """
    for script in scripts:
        path = root / script.relative_path
        try:
            text = path.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as e:
            if errors is not None:
                errors.append(f"Cannot read {script.relative_path}: {e}")
            continue
        yield script, text


def find_scenes(root: Path, settings: Optional[ScanSettings] = None) -> List[Path]:
    """List scene documents under root in deterministic order."""
    settings = settings or ScanSettings()
    return list(iter_project_files(root, settings.scene_suffixes, settings.ignore))
