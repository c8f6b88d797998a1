"""
scenetrace.commands.dump - Print scene GameObject hierarchies.
"""

from __future__ import annotations

import argparse
import json
import sys

from scenetrace.commands.analyze import load_scan
from scenetrace.report import render_dump


def run(args: argparse.Namespace) -> int:
    """Run the dump command."""
    loaded = load_scan(args)
    if loaded is None:
        return 1
    scan, config = loaded

    scenes = scan.scenes
    if args.scenes:
        wanted = set(args.scenes)
        scenes = [
            s
            for s in scenes
            if s.path.name in wanted or s.path.relative_to(scan.root).as_posix() in wanted
        ]
        if not scenes:
            print(f"No matching scenes: {', '.join(sorted(wanted))}", file=sys.stderr)
            return 1

    if args.json:
        payload = {
            s.path.relative_to(scan.root).as_posix(): [n.to_dict() for n in s.forest]
            for s in scenes
        }
        print(json.dumps(payload, indent=2))
        return 0

    indent = config.get("output", {}).get("indent", "--")
    for i, scene in enumerate(scenes):
        if len(scenes) > 1 and not args.quiet:
            if i:
                print()
            print(f"# {scene.path.relative_to(scan.root).as_posix()}")
        sys.stdout.write(render_dump(scene.forest, indent))

    return 0
