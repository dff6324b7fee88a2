"""
CLI functionality for edge assignment.
"""

import os
import sys
import random
import logging
import traceback
from pathlib import Path

import psutil

from edgecov.config import SearchConfig
from edgecov.application.errors import EdgeHashError
from edgecov.application.pipeline import Pipeline
from edgecov.analysis.cfg.serialize import loadGraph
from edgecov.analysis.edgehash.naive import naiveEdgeIds, countCollisions
from edgecov.util.application.console import Console
from edgecov.util.io.formatting import elapsedTime, memorySize, percent
from .formats import generate_output

LOG = logging.getLogger(__name__)


def setup_logging(args):
    level = logging.DEBUG if args.debug else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def build_config(args):
    return SearchConfig(
        mapSizePow2=args.map_size_pow2,
        delta=args.delta,
        sigma=args.sigma,
        maxRounds=args.max_rounds,
        candidateBudget=args.budget,
    )


def log_stats(assignment, console):
    """Log a one-line summary with the process RSS and phase timings."""
    rss = psutil.Process(os.getpid()).memory_info().rss
    summary = assignment.summary()
    timings = " ".join(
        "%s: %s" % (path[-1], elapsedTime(t))
        for path, t in console.timings.items()
        if len(path) == 2
    )
    LOG.info("edges: %d solved: %d fallback: %d single: %d rss: %s %s",
             summary["edges"], summary["solvedEdges"], summary["fallbackEdges"],
             summary["singleEdges"], memorySize(rss), timings)


def _assign(input_path, args):
    config = build_config(args)
    graph = loadGraph(input_path)
    console = Console() if args.verbose else None
    rng = random.Random(args.seed)
    assignment = Pipeline(config, console).run(graph, rng=rng)
    if console is not None:
        log_stats(assignment, console)
    return graph, config, assignment


def _report_error(e, args):
    print(f"Error: {e}", file=sys.stderr)
    if args.debug:
        traceback.print_exc()
    return 1


def run_assign(input_path, args):
    """Assign slots to every edge of a CFG and write the result."""
    setup_logging(args)
    try:
        graph, config, assignment = _assign(input_path, args)
        output = generate_output(assignment, args.format)

        if args.output:
            with open(args.output, "w") as f:
                f.write(output)
                f.write("\n")
            if args.verbose:
                print(f"Assignment written to {args.output}")
        else:
            print(output)
        return 0

    except (EdgeHashError, ValueError, OSError) as e:
        return _report_error(e, args)


def run_compare(input_path, args):
    """Compare collisions of the classic random ids and the assignment."""
    setup_logging(args)
    try:
        graph, config, assignment = _assign(input_path, args)
    except (EdgeHashError, ValueError, OSError) as e:
        return _report_error(e, args)

    naive = naiveEdgeIds(graph, config.arraySize, random.Random(args.seed))
    naiveCollisions = countCollisions(naive)
    assigned = assignment.slots()
    assignedCollisions = countCollisions(assigned)

    print(f"Edges:               {len(naive)}")
    print(f"Random ids:          {naiveCollisions} colliding edges ({percent(naiveCollisions, len(naive))})")
    print(f"Assigned ids:        {assignedCollisions} colliding edges ({percent(assignedCollisions, len(assigned))})")
    return 0


def _add_common_arguments(parser):
    parser.add_argument("input", type=Path, help="CFG as JSON (blocks + edges or predecessors)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the block key draw (default: random)")
    parser.add_argument("--map-size-pow2", type=int, default=16,
                        help="coverage map size as a power of two (default: 16)")
    parser.add_argument("--delta", type=int, default=10,
                        help="stop the search when fewer blocks are unsolved (default: 10)")
    parser.add_argument("--sigma", type=float, default=0.001,
                        help="stop the search when the unsolved fraction is lower (default: 0.001)")
    parser.add_argument("--max-rounds", type=int, default=None,
                        help="maximum number of search rounds (default: map bit width - 1)")
    parser.add_argument("--budget", type=int, default=None,
                        help="maximum number of hash candidates to evaluate (default: unlimited)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("-d", "--debug", action="store_true", help="Debug output")


def add_assign_parser(subparsers):
    """Add the assign subcommand parser."""
    parser = subparsers.add_parser(
        "assign", help="Assign a collision-free coverage map slot to every edge"
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "--format",
        "-f",
        choices=["text", "json", "dot"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--output", "-o", type=Path, help="Output file (default: stdout)"
    )
    parser.set_defaults(func=run_assign)


def add_compare_parser(subparsers):
    """Add the compare subcommand parser."""
    parser = subparsers.add_parser(
        "compare", help="Compare random edge ids against the assignment"
    )
    _add_common_arguments(parser)
    parser.set_defaults(func=run_compare)
