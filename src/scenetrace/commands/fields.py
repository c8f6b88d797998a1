"""
scenetrace.commands.fields - Show serialized fields found per script.

Useful for checking why a reference was or was not counted: only the
fields listed here are read from MonoBehaviour blocks.
"""

from __future__ import annotations

import argparse
import json

from scenetrace.commands.analyze import load_scan


def run(args: argparse.Namespace) -> int:
    """Run the fields command."""
    loaded = load_scan(args)
    if loaded is None:
        return 1
    scan, _config = loaded

    declared = scan.declared
    if not args.all:
        declared = [d for d in declared if d.base_type_matched]

    if args.json:
        payload = [
            {
                "path": d.path,
                "guid": d.guid,
                "classes": list(d.class_names),
                "matched": d.base_type_matched,
                "fields": sorted(d.fields),
                "used": d.guid in scan.used,
            }
            for d in declared
        ]
        print(json.dumps(payload, indent=2))
        return 0

    for d in declared:
        marker = "✓" if d.guid in scan.used else "○"
        classes = ", ".join(d.class_names) if d.class_names else "(no component class)"
        print(f"{marker} {d.path} [{d.guid}] {classes}")
        for name in sorted(d.fields):
            print(f"    {name}")

    return 0
