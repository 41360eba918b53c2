"""
cliquegraph search commands - clique enumeration from the command line.

Commands:
    maximum   - One maximum clique
    maximal   - All maximal cliques (optionally only those of --min-size or more)
    kcliques  - All cliques of exactly -k vertices
    stats     - Degeneracy and clique-count estimate, without enumerating

Usage:
    cliquegraph maximal --input graph.csv --min-size 3 --output cliques.json
    cliquegraph kcliques --input graph.json -k 4 --timeout 60
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, Hashable, List, Set

from cliquegraph.cli.config import (
    load_config,
    merge_config_with_args,
    search_config_from_args,
    validate_config,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_INVALID_GRAPH = 2
EXIT_RESOURCE_EXHAUSTED = 3


def _add_common_arguments(parser: argparse.ArgumentParser, search: bool = True) -> None:
    parser.add_argument("--input", "-i", type=Path, default=None,
                        help="Graph file: edge list (.csv/.tsv/.txt/.edges) or .json")
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML/JSON config file (CLI flags override it)")
    parser.add_argument("--directed", action="store_true",
                        help="Treat the edge list as directed")
    parser.add_argument("--symmetrize", action="store_true",
                        help="Convert a directed graph to undirected before searching")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")

    if not search:
        return

    parser.add_argument("--output", "-o", type=Path, default=None,
                        help="Write results to .json or .csv")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Abort if the search runs longer than this many seconds")
    parser.add_argument("--max-frames", type=int, default=None,
                        help="Abort after expanding this many search frames")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="Abort if a partial clique grows beyond this size")
    parser.add_argument("--show", type=int, default=20,
                        help="Number of cliques to print (default: 20, 0 = none)")


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the maximum, maximal, kcliques and stats subcommands."""
    parser = subparsers.add_parser(
        "maximum",
        help="Find one maximum clique",
        allow_abbrev=False,
        description=(
            "Find a clique of maximum size. Among several maximum cliques the one "
            "with the smallest vertex ids (lexicographically) is returned."
        ),
    )
    _add_common_arguments(parser)
    parser.set_defaults(func=run_maximum)

    parser = subparsers.add_parser(
        "maximal",
        help="Enumerate all maximal cliques",
        allow_abbrev=False,
        description="Enumerate every maximal clique exactly once (pivoted Bron-Kerbosch).",
    )
    _add_common_arguments(parser)
    parser.add_argument("--min-size", type=int, default=1,
                        help="Only report cliques with at least this many vertices (default: 1)")
    parser.add_argument("--workers", type=int, default=1,
                        help="Worker threads for root-level subtrees (default: 1)")
    parser.set_defaults(func=run_maximal)

    parser = subparsers.add_parser(
        "kcliques",
        help="Enumerate all cliques of an exact size",
        allow_abbrev=False,
        description="Enumerate every clique with exactly k vertices, maximal or not.",
    )
    _add_common_arguments(parser)
    parser.add_argument("-k", type=int, required=True,
                        help="Clique size (values <= 0 give an empty result)")
    parser.set_defaults(func=run_kcliques)

    parser = subparsers.add_parser(
        "stats",
        help="Estimate clique enumeration complexity",
        allow_abbrev=False,
        description="Report size, density, degeneracy and a bound on the number of maximal cliques.",
    )
    _add_common_arguments(parser, search=False)
    parser.set_defaults(func=run_stats)


def _setup_logging(args: argparse.Namespace) -> None:
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _prepare(args: argparse.Namespace):
    """Merge config into args and load the graph. Returns (args, graph)."""
    from cliquegraph.io.loaders import load_graph

    if args.config is not None:
        config = load_config(args.config)
        validate_config(config)
        args = merge_config_with_args(config, args, getattr(args, 'cli_args', None))

    if args.input is None:
        raise ValueError("No input graph given (use --input or set 'input' in the config file)")

    graph = load_graph(args.input, directed=True if args.directed else None)
    if graph.is_directed and args.symmetrize:
        logger.info("Symmetrizing directed graph")
        graph = graph.to_undirected()

    return args, graph


def _run(args: argparse.Namespace, body) -> int:
    """Shared error handling: map failures to exit codes."""
    from cliquegraph.cliques.errors import InvalidGraphKind, ResourceExhausted

    _setup_logging(args)
    try:
        return body(args)
    except InvalidGraphKind as e:
        logger.error(str(e))
        print(f"Error: {e} (pass --symmetrize to convert it)", file=sys.stderr)
        return EXIT_INVALID_GRAPH
    except ResourceExhausted as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RESOURCE_EXHAUSTED
    except (OSError, ValueError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR


def _format_clique(clique: Set[Hashable]) -> str:
    from cliquegraph.io.writers import sorted_members
    return "{" + ", ".join(str(v) for v in sorted_members(clique)) + "}"


def _report(
    title: str,
    cliques: List[Set[Hashable]],
    args: argparse.Namespace,
    metadata: Dict[str, Any],
) -> None:
    from cliquegraph.cliques.verify import clique_size_distribution
    from cliquegraph.io.writers import write_cliques

    print(f"\n{'='*70}")
    print(f"  {title}")
    print(f"{'='*70}\n")
    print(f"Cliques found: {len(cliques)}")

    distribution = clique_size_distribution(cliques)
    if distribution:
        sizes = ", ".join(f"{size}: {count}" for size, count in distribution.items())
        print(f"Size distribution: {sizes}")

    shown = cliques[:max(args.show, 0)]
    for clique in shown:
        print(f"  {_format_clique(clique)}")
    if len(cliques) > len(shown) > 0:
        print(f"  ... {len(cliques) - len(shown)} more")

    if args.output is not None:
        metadata = dict(metadata, size_distribution={str(k): v for k, v in distribution.items()})
        write_cliques(args.output, cliques, metadata=metadata)
        print(f"\nResults written to {args.output}")


def run_maximum(args: argparse.Namespace) -> int:
    """Execute the maximum command."""
    def body(args):
        from cliquegraph.cliques.maximum import max_clique

        args, graph = _prepare(args)
        limits = search_config_from_args(args).to_limits()

        start = time.time()
        clique = max_clique(graph, limits=limits)
        elapsed = time.time() - start
        logger.info(f"Maximum clique of size {len(clique)} found in {elapsed:.2f}s")

        cliques = [clique] if clique else []
        _report("Maximum Clique", cliques, args, {
            'mode': 'maximum',
            'input': str(args.input),
            'n_vertices': graph.number_of_nodes(),
            'clique_number': len(clique),
            'elapsed_seconds': round(elapsed, 4),
        })
        return EXIT_OK

    return _run(args, body)


def run_maximal(args: argparse.Namespace) -> int:
    """Execute the maximal command."""
    def body(args):
        from cliquegraph.cliques.bron_kerbosch import all_maximal_cliques

        args, graph = _prepare(args)
        search = search_config_from_args(args)

        start = time.time()
        cliques = all_maximal_cliques(graph, limits=search.to_limits(), n_workers=search.n_workers)
        elapsed = time.time() - start
        n_total = len(cliques)
        if search.min_size > 1:
            cliques = [c for c in cliques if len(c) >= search.min_size]
        logger.info(
            f"{n_total} maximal cliques in {elapsed:.2f}s, "
            f"{len(cliques)} with at least {search.min_size} vertices"
        )

        _report("Maximal Cliques", cliques, args, {
            'mode': 'maximal',
            'input': str(args.input),
            'n_vertices': graph.number_of_nodes(),
            'min_size': search.min_size,
            'n_maximal_total': n_total,
            'elapsed_seconds': round(elapsed, 4),
        })
        return EXIT_OK

    return _run(args, body)


def run_kcliques(args: argparse.Namespace) -> int:
    """Execute the kcliques command."""
    def body(args):
        from cliquegraph.cliques.kcliques import k_cliques

        args, graph = _prepare(args)
        limits = search_config_from_args(args).to_limits()

        start = time.time()
        cliques = k_cliques(graph, args.k, limits=limits)
        elapsed = time.time() - start
        logger.info(f"{len(cliques)} cliques of size {args.k} in {elapsed:.2f}s")

        _report(f"Cliques of Size {args.k}", cliques, args, {
            'mode': 'kcliques',
            'input': str(args.input),
            'n_vertices': graph.number_of_nodes(),
            'k': args.k,
            'elapsed_seconds': round(elapsed, 4),
        })
        return EXIT_OK

    return _run(args, body)


def run_stats(args: argparse.Namespace) -> int:
    """Execute the stats command."""
    def body(args):
        from cliquegraph.cliques.reduction import estimate_clique_complexity

        args, graph = _prepare(args)
        stats = estimate_clique_complexity(graph)

        print(f"\n{'='*70}")
        print("  Clique Enumeration Complexity")
        print(f"{'='*70}\n")
        for key, value in stats.items():
            print(f"  {key:<18} {value}")
        return EXIT_OK

    return _run(args, body)
