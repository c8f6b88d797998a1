"""
scenetrace.commands.analyze - Full project analysis command.

Writes UnusedScripts.csv and one ``<Scene>.unity.dump`` per scene into
the output folder.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from tomlkit.exceptions import ParseError

from scenetrace.config import get_config
from scenetrace.factory import ProjectScan, scan_project
from scenetrace.report import write_scene_dump, write_unused_csv


def load_configuration(args: argparse.Namespace, project_root: Path) -> Optional[Dict[str, Any]]:
    """Load configuration from --config or the project tree, or None on error."""
    config_path = getattr(args, "config", None)
    try:
        return get_config(config_path, start_dir=project_root)
    except (OSError, ParseError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None


def load_scan(args: argparse.Namespace) -> Optional[Tuple[ProjectScan, Dict[str, Any]]]:
    """Validate the project argument, load config and scan the project."""
    project_root = Path(args.project).resolve()
    if not project_root.is_dir():
        print(f"Project folder does not exist: {project_root}", file=sys.stderr)
        return None

    config = load_configuration(args, project_root)
    if config is None:
        return None

    def progress(message: str) -> None:
        print(message, file=sys.stderr)

    scan = scan_project(
        project_root,
        config,
        jobs=max(1, getattr(args, "jobs", 1) or 1),
        progress=progress if getattr(args, "verbose", False) else None,
    )
    for error in scan.errors:
        print(f"Warning: {error}", file=sys.stderr)

    return scan, config


def run(args: argparse.Namespace) -> int:
    """Run the analyze command."""
    loaded = load_scan(args)
    if loaded is None:
        return 1
    scan, config = loaded

    output_cfg = config.get("output", {})
    output_root = Path(args.output).resolve()
    output_root.mkdir(parents=True, exist_ok=True)

    unused = scan.unused()
    csv_path = write_unused_csv(
        output_root, unused, file_name=output_cfg.get("csv_name", "UnusedScripts.csv")
    )

    for scene in scan.scenes:
        write_scene_dump(
            output_root,
            scene.path,
            scene.forest,
            suffix=output_cfg.get("dump_suffix", ".dump"),
            indent=output_cfg.get("indent", "--"),
        )

    if not args.quiet:
        print(f"✓ {len(scan.scripts)} scripts, {len(scan.scenes)} scenes analyzed")
        print(f"  {len(unused)} unused scripts -> {csv_path}")
        print(f"  {len(scan.scenes)} scene dumps -> {output_root}")

    return 0
