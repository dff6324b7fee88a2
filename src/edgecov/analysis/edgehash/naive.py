"""
Classic random-location edge ids, kept as a baseline.

The stock instrumentation gives every block a random cur_loc and indexes
the coverage map with cur_loc ^ prev_loc, where prev_loc is the previous
block's cur_loc >> 1 (0 on entry). Edges into a merge block can land on
the same slot; countCollisions measures how often that happens so the
collision-free assignment can be compared against it.
"""

import random


def naiveEdgeIds(graph, arraySize, rng=None):
    """Compute the classic edge id of every edge.

    Args:
        graph: ControlFlowGraph.
        arraySize: Coverage map size (a power of two).
        rng: random.Random used to draw cur_loc values.

    Returns:
        dict: {(block, pred): slot}, with pred None for entry blocks.
    """
    if rng is None:
        rng = random.Random()
    curLoc = {block: rng.randrange(arraySize) for block in graph}

    ids = {}
    for block in graph:
        preds = graph.predecessors(block)
        if not preds:
            ids[(block, None)] = curLoc[block]
        for pred in preds:
            ids[(block, pred)] = (curLoc[block] ^ (curLoc[pred] >> 1)) & (arraySize - 1)
    return ids


def countCollisions(slots):
    """Number of edges whose slot was already taken by an earlier edge."""
    seen = set()
    collisions = 0
    for slot in slots.values():
        if slot in seen:
            collisions += 1
        else:
            seen.add(slot)
    return collisions
