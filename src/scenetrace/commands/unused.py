"""
scenetrace.commands.unused - List scripts no scene uses.
"""

from __future__ import annotations

import argparse
import sys

from scenetrace.commands.analyze import load_scan
from scenetrace.report import render_unused_csv, unused_to_json


def run(args: argparse.Namespace) -> int:
    """Run the unused command."""
    loaded = load_scan(args)
    if loaded is None:
        return 1
    scan, _config = loaded

    unused = scan.unused()

    if args.json:
        print(unused_to_json(unused))
    else:
        sys.stdout.write(render_unused_csv(unused))

    if not args.quiet and not args.json:
        print(f"{len(unused)}/{len(scan.scripts)} scripts unused", file=sys.stderr)

    if args.fail_on_unused and unused:
        return 2
    return 0
