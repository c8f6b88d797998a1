"""
scenetrace.cli - Command-line interface.

Main entry point for the scenetrace CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from scenetrace import __version__
from scenetrace.commands import analyze, dump, fields, unused


def _add_project_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "project",
        type=Path,
        help="Path to the root of the Unity project",
        metavar="PROJECT",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="scenetrace",
        description="Unused script detection and scene hierarchy dumps for Unity projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  scenetrace analyze MyGame out/     # Write UnusedScripts.csv and scene dumps
  scenetrace unused MyGame           # Print unused scripts as CSV
  scenetrace unused MyGame --json    # Same, as JSON
  scenetrace dump MyGame Main.unity  # Print one scene's hierarchy
  scenetrace fields MyGame           # Serialized fields found per script

Configuration:
  Place .scenetrace.toml in the project (or a parent directory), or pass
  --config PATH. Keys directly under a section can be overridden with
  SCENETRACE_<SECTION>_<KEY>, e.g. SCENETRACE_DECLARATIONS_BASE_TYPE=NetworkBehaviour.
  Nested tables such as [scene.kinds] can only be set in the file.

For detailed command help: scenetrace <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"scenetrace {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        help="Analyze up to N scenes concurrently (default: 1)",
        metavar="N",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Write UnusedScripts.csv and <Scene>.unity.dump files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output:
  UnusedScripts.csv     Scripts no scene uses, shallowest paths first
  <Scene>.unity.dump    GameObject hierarchy, children prefixed with "--"
""",
    )
    _add_project_argument(analyze_parser)
    analyze_parser.add_argument(
        "output",
        type=Path,
        help="Folder where results are written (created if missing)",
        metavar="OUTPUT",
    )

    # unused command
    unused_parser = subparsers.add_parser(
        "unused",
        help="Print scripts not used by any scene",
    )
    _add_project_argument(unused_parser)
    unused_parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of CSV",
    )
    unused_parser.add_argument(
        "--fail-on-unused",
        action="store_true",
        help="Exit with status 2 when any script is unused",
    )

    # dump command
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print scene GameObject hierarchies",
    )
    _add_project_argument(dump_parser)
    dump_parser.add_argument(
        "scenes",
        nargs="*",
        help="Scene file names or project-relative paths (default: all)",
        metavar="SCENE",
    )
    dump_parser.add_argument(
        "--json",
        action="store_true",
        help="Output nested JSON",
    )

    # fields command
    fields_parser = subparsers.add_parser(
        "fields",
        help="Show serialized fields found per script",
    )
    _add_project_argument(fields_parser)
    fields_parser.add_argument(
        "--all",
        action="store_true",
        help="Include scripts without a component class",
    )
    fields_parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    # completion command
    completion_parser = subparsers.add_parser(
        "completion",
        help="Generate shell completion scripts",
    )
    completion_parser.add_argument(
        "--shell",
        choices=["bash", "zsh", "fish", "tcsh"],
        help="Shell to generate a completion script for",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install scenetrace[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        # Dispatch to command handlers
        if args.command == "analyze":
            return analyze.run(args)
        elif args.command == "unused":
            return unused.run(args)
        elif args.command == "dump":
            return dump.run(args)
        elif args.command == "fields":
            return fields.run(args)
        elif args.command == "version":
            return version_command(args)
        elif args.command == "completion":
            return completion_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def version_command(args: argparse.Namespace) -> int:
    """Handle version command."""
    print(f"scenetrace {__version__}")
    return 0


def completion_command(args: argparse.Namespace) -> int:
    """Handle completion command - generate shell completion scripts."""
    try:
        import argcomplete  # noqa: F401
    except ImportError:
        print("Error: argcomplete not installed.", file=sys.stderr)
        print("Install with: pip install scenetrace[completion]", file=sys.stderr)
        return 1

    shell = args.shell

    if shell:
        import subprocess

        cmd = ["register-python-argcomplete"]
        if shell in ("fish", "tcsh"):
            cmd.append(f"--shell={shell}")
        cmd.append("scenetrace")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            print("Error: register-python-argcomplete not found.", file=sys.stderr)
            print("Make sure argcomplete is properly installed.", file=sys.stderr)
            return 1
        if result.returncode != 0:
            print(f"Error generating completion script: {result.stderr}", file=sys.stderr)
            return 1
        print(result.stdout)
    else:
        print("""
Shell Completion Setup for scenetrace
=====================================

Bash (add to ~/.bashrc):
  eval "$(register-python-argcomplete scenetrace)"

Zsh (add to ~/.zshrc):
  autoload -U bashcompinit
  bashcompinit
  eval "$(register-python-argcomplete scenetrace)"

Fish (add to ~/.config/fish/config.fish):
  register-python-argcomplete --shell fish scenetrace | source

Generate script for a specific shell:
  scenetrace completion --shell bash
""")

    return 0


if __name__ == "__main__":
    sys.exit(main())
