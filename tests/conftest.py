import random

import pytest

from edgecov.analysis.cfg.graph import ControlFlowGraph


def make_random_graph(rng, numBlocks, maxPreds):
    """Random CFG: block 0 is the entry, every other block gets 1..maxPreds
    predecessors drawn from all blocks (back edges and self loops included).
    """
    preds = {0: []}
    for block in range(1, numBlocks):
        count = rng.randint(1, maxPreds)
        preds[block] = rng.sample(range(numBlocks), min(count, numBlocks))
    return ControlFlowGraph.fromPredecessors(preds)


@pytest.fixture()
def random_graph():
    def _random_graph(seed, numBlocks=40, maxPreds=4):
        return make_random_graph(random.Random(seed), numBlocks, maxPreds)

    return _random_graph


@pytest.fixture()
def diamond():
    """entry -> left, entry -> right, left -> join, right -> join"""
    return ControlFlowGraph.fromEdges(
        ["entry", "left", "right", "join"],
        [("entry", "left"), ("entry", "right"), ("left", "join"), ("right", "join")],
    )
