"""
Output format generators for edge assignments.

Supports text, JSON and DOT (Graphviz) output.
"""

from edgecov.analysis.cfg.serialize import dumpAssignment
from edgecov.analysis.cfg.dump import dumpAssignmentDot
from edgecov.util.io.formatting import percent


def generate_text_output(assignment) -> str:
    """Generate a human-readable report of the assignment."""
    summary = assignment.summary()
    output = []
    output.append("Edge Assignment")
    output.append("=" * 50)
    output.append("")
    output.append(f"Map size:       {assignment.arraySize}")
    output.append(f"Blocks:         {summary['blocks']}")
    output.append(f"Edges:          {summary['edges']}")
    output.append(f"Solved blocks:  {summary['solvedBlocks']}")
    output.append(f"  inline edges: {summary['solvedEdges']} ({percent(summary['solvedEdges'], summary['edges'])})")
    output.append(f"Fallback edges: {summary['fallbackEdges']} ({percent(summary['fallbackEdges'], summary['edges'])})")
    output.append(f"Single edges:   {summary['singleEdges']} ({percent(summary['singleEdges'], summary['edges'])})")

    stats = assignment.stats
    if stats is not None and stats.rounds:
        output.append("")
        output.append("Parameter search:")
        output.append(f"  rounds: {stats.rounds} (kept y={stats.lastY})")
        output.append(f"  unsolved fraction: {stats.unsolvedFraction:.4f} (min {stats.minFraction:.4f})")
        output.append(f"  candidates evaluated: {stats.candidates}")
        if stats.budgetExhausted:
            output.append("  budget exhausted: remaining blocks use the fallback table")
        elif not stats.converged:
            output.append("  stop condition not met: last round kept")

    output.append("")
    output.append("Edges:")
    for (block, pred), slot in assignment.slots().items():
        source = "<entry>" if pred is None else str(pred)
        output.append(f"  {source} -> {block}: slot {slot} [{assignment.method(block)}]")

    return "\n".join(output)


def generate_output(assignment, fmt) -> str:
    if fmt == "json":
        return dumpAssignment(assignment)
    elif fmt == "dot":
        return dumpAssignmentDot(assignment)
    return generate_text_output(assignment)
