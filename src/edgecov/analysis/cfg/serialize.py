"""JSON input/output for graphs and assignments.

Two graph layouts are accepted:

    {"blocks": ["entry", "a", "b"], "edges": [["entry", "a"], ["a", "b"]]}
    {"blocks": [...], "predecessors": {"a": ["entry"], "b": ["a"]}}

`blocks` is optional in the second form; it then defaults to the key order
of `predecessors`.
"""

import json

from edgecov.application.errors import InvalidGraphInput
from .graph import ControlFlowGraph


def _hashable(value):
    # JSON arrays become tuples so they can identify blocks
    if isinstance(value, list):
        return tuple(_hashable(v) for v in value)
    return value


def graphFromDict(data):
    """Build a ControlFlowGraph from a decoded JSON document.

    Raises:
        InvalidGraphInput: If the document does not describe a graph.
    """
    if not isinstance(data, dict):
        raise InvalidGraphInput("graph document must be a JSON object")

    blocks = data.get("blocks")
    if blocks is not None:
        if not isinstance(blocks, list):
            raise InvalidGraphInput("'blocks' must be a list")
        blocks = [_hashable(b) for b in blocks]

    if "edges" in data:
        if blocks is None:
            raise InvalidGraphInput("'edges' requires a 'blocks' list")
        edges = data["edges"]
        if not isinstance(edges, list):
            raise InvalidGraphInput("'edges' must be a list")
        return ControlFlowGraph.fromEdges(blocks, [_hashable(e) for e in edges])

    if "predecessors" in data:
        preds = data["predecessors"]
        if not isinstance(preds, dict):
            raise InvalidGraphInput("'predecessors' must be an object")
        for block, ps in preds.items():
            if not isinstance(ps, list):
                raise InvalidGraphInput("predecessors of %r must be a list" % (block,))
        preds = {block: [_hashable(p) for p in ps] for block, ps in preds.items()}
        return ControlFlowGraph.fromPredecessors(preds, blocks)

    raise InvalidGraphInput("graph document needs 'edges' or 'predecessors'")


def graphToDict(graph):
    return {
        "blocks": list(graph.blocks),
        "edges": [[pred, succ] for pred, succ in graph.edges()],
    }


def loadGraph(path):
    """Read a graph from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidGraphInput("%s is not valid JSON: %s" % (path, e))
    return graphFromDict(data)


def dumpAssignment(assignment, indent=2):
    """Serialize an EdgeAssignment to a JSON string."""
    return json.dumps(assignment.toDict(), indent=indent)
