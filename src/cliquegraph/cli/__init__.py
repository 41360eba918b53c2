"""
cliquegraph CLI - Command-line interface for clique enumeration.

Commands:
    cliquegraph maximum   - Find one maximum clique
    cliquegraph maximal   - Enumerate all maximal cliques
    cliquegraph kcliques  - Enumerate all cliques of an exact size
    cliquegraph stats     - Estimate enumeration complexity
"""

import argparse
import sys
from typing import Optional, List


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI dispatcher for cliquegraph."""
    parser = argparse.ArgumentParser(
        prog="cliquegraph",
        description="Clique enumeration for simple undirected graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Commands:
  maximum    Find one maximum clique
  maximal    Enumerate all maximal cliques
  kcliques   Enumerate all cliques of an exact size
  stats      Estimate enumeration complexity

Examples:
  cliquegraph maximum --input graph.csv
  cliquegraph maximal --input graph.csv --min-size 3 --workers 4 --output cliques.json
  cliquegraph kcliques --input graph.json -k 4 --timeout 60 --output k4.csv
  cliquegraph stats --input graph.csv
        """
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version="%(prog)s 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    from cliquegraph.cli import search
    search.register_parser(subparsers)

    raw_args = list(sys.argv[1:] if args is None else args)
    parsed_args = parser.parse_args(raw_args)

    if parsed_args.command is None:
        parser.print_help()
        return 0

    # Kept so config merging can tell explicit flags from defaults
    parsed_args.cli_args = raw_args

    return parsed_args.func(parsed_args)


if __name__ == "__main__":
    sys.exit(main())
