"""
End-to-end properties of the assignment pipeline on random graphs.
"""

import io
import random

import pytest

from edgecov.config import SearchConfig
from edgecov.analysis.cfg.graph import ControlFlowGraph
from edgecov.analysis.edgehash.assignment import SOLVED, FALLBACK, SINGLE
from edgecov.application.errors import CapacityExceeded, InvalidGraphInput
from edgecov.application.pipeline import Pipeline, assignEdges
from edgecov.util.application.console import Console


SMALL = SearchConfig(mapSizePow2=10)
EXHAUSTIVE = SearchConfig(mapSizePow2=10, delta=0, sigma=0.0)


@pytest.mark.parametrize("seed", range(6))
@pytest.mark.parametrize("config", [SMALL, EXHAUSTIVE], ids=["default-stop", "all-rounds"])
def test_collision_free_and_total(random_graph, seed, config):
    graph = random_graph(seed, numBlocks=40, maxPreds=4)
    assignment = assignEdges(graph, config, rng=random.Random(seed))

    slots = assignment.slots()
    expected = {(succ, pred) for pred, succ in graph.edges()}
    expected |= {(block, None) for block in graph.entryPoints()}
    assert set(slots) == expected
    assert len(set(slots.values())) == len(slots)
    assert all(0 <= slot < config.arraySize for slot in slots.values())

    for block in graph:
        method = assignment.method(block)
        cur = assignment.keys[block]
        if method == SOLVED:
            for pred in graph.predecessors(block):
                assert (cur, assignment.keys[pred]) not in assignment.fallbackTable
        elif method == FALLBACK:
            for pred in graph.predecessors(block):
                assert (cur, assignment.keys[pred]) in assignment.fallbackTable
        else:
            assert method == SINGLE
            assert assignment.keys[block] in assignment.singleTable


def test_dense_graph_fills_map(random_graph):
    config = SearchConfig(mapSizePow2=7)
    graph = random_graph(11, numBlocks=30, maxPreds=4)
    assignment = assignEdges(graph, config, rng=random.Random(0))
    assert assignment.collisions() == []


def test_deterministic_with_seed(random_graph):
    graph = random_graph(3)
    a = assignEdges(graph, SMALL, rng=random.Random(99))
    b = assignEdges(graph, SMALL, rng=random.Random(99))
    assert a.keys == b.keys
    assert a.solvedParams == b.solvedParams
    assert a.fallbackTable == b.fallbackTable
    assert a.singleTable == b.singleTable


def test_deterministic_with_fixed_keys(random_graph):
    graph = random_graph(4)
    keys = dict(zip(graph.blocks, random.Random(1).sample(range(SMALL.arraySize), len(graph))))
    a = assignEdges(graph, EXHAUSTIVE, keys=keys)
    b = assignEdges(graph, EXHAUSTIVE, keys=keys)
    assert a.solvedParams == b.solvedParams
    assert a.fallbackTable == b.fallbackTable
    assert a.singleTable == b.singleTable


def test_linear_graph_uses_single_table_only():
    graph = ControlFlowGraph.fromSuccessors({i: [i + 1] for i in range(9)})
    assignment = assignEdges(graph, SMALL, rng=random.Random(0))
    assert assignment.solvedParams == {}
    assert assignment.fallbackTable == {}
    assert sorted(assignment.singleTable.values()) == list(range(10))
    assert assignment.stats.rounds == 0


def test_merge_scenario(diamond):
    keys = {"entry": 1, "left": 5, "right": 9, "join": 20}
    assignment = assignEdges(diamond, SearchConfig(mapSizePow2=6), keys=keys)
    assert tuple(assignment.solvedParams["join"]) == (1, 1, 1)
    assert assignment.slotFor("join", "left") == 9
    assert assignment.slotFor("join", "right") == 15
    assert [assignment.slotFor(b) if b == "entry" else assignment.slotFor(b, "entry")
            for b in ("entry", "left", "right")] == [0, 1, 2]


def test_unsolvable_merge_falls_back(diamond):
    keys = {"entry": 1, "left": 4, "right": 5, "join": 20}
    assignment = assignEdges(diamond, SearchConfig(mapSizePow2=6), keys=keys)
    assert assignment.solvedParams == {}
    assert assignment.fallbackTable == {(20, 4): 0, (20, 5): 1}
    assert assignment.slotFor("join", "left") != assignment.slotFor("join", "right")


def test_budget_exhaustion_degrades_gracefully(random_graph):
    graph = random_graph(8)
    config = SMALL.replace(candidateBudget=5)
    assignment = assignEdges(graph, config, rng=random.Random(8))
    assert assignment.stats.budgetExhausted
    assert assignment.stats.candidates == 5
    assert assignment.fallbackTable
    assignment.verify()


def test_capacity_exceeded():
    # 1 entry slot + 2 + 2 merge edges > 4 slots
    graph = ControlFlowGraph.fromPredecessors({"e": [], "a": ["e", "b"], "b": ["e", "a"]})
    with pytest.raises(CapacityExceeded) as info:
        assignEdges(graph, SearchConfig(mapSizePow2=2), rng=random.Random(0))
    assert info.value.required == 5
    assert info.value.available == 4


def test_invalid_keys_rejected(diamond):
    with pytest.raises(InvalidGraphInput):
        assignEdges(diamond, SMALL, keys={"entry": 1})


def test_console_times_phases(diamond):
    out = io.StringIO()
    console = Console(out)
    Pipeline(SMALL, console).run(diamond, rng=random.Random(0))
    assert set(console.timings) == {
        ("assign",),
        ("assign", "classify"),
        ("assign", "search"),
        ("assign", "fallback"),
        ("assign", "verify"),
    }
    assert "begin [ assign | search ]" in out.getvalue()
