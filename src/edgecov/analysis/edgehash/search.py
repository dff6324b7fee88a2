"""
Hash-parameter search for multi-predecessor blocks.

For every block with several incoming edges the search looks for a triple
(x, y, z) such that the edge hashes of that block

  1. are pairwise distinct (no two incoming edges collide), and
  2. do not hit any slot already claimed by a previously solved block.

**Round structure:**
The predecessor shift y is shared by all blocks of a round. Rounds try
y = 1, 2, ... up to the map's bit width (exclusive); each round starts from
an empty slot set and walks the multi-predecessor blocks in graph order,
accepting the first (x, z) pair, both in [1, bits), that satisfies the two
conditions above. Blocks with no acceptable pair stay unsolved for that
round.

**Stopping:**
After each round the search stops when fewer than `delta` blocks are
unsolved or the unsolved fraction drops below `sigma`. Otherwise the next
y is tried; when every y has been tried the last round is kept.

**Budget:**
Each (x, z) evaluation is charged against an optional SearchBudget. When
the budget runs out mid-round, the blocks not yet visited count as
unsolved and the better of that partial round and the last complete round
is kept. The fallback tables absorb whatever is left unsolved.
"""

import logging
from dataclasses import dataclass

from edgecov.config import SearchConfig
from edgecov.application.errors import SearchBudgetExhausted
from .params import HashParams, edgeHash

LOG = logging.getLogger(__name__)


class SearchBudget(object):
    """Counts (x, z) candidate evaluations against an optional limit."""
    __slots__ = "limit", "used"

    def __init__(self, limit=None):
        self.limit = limit
        self.used = 0

    def charge(self):
        if self.limit is not None and self.used >= self.limit:
            raise SearchBudgetExhausted(self.limit)
        self.used += 1


@dataclass
class SearchStats:
    """Bookkeeping for one parameter search."""
    rounds: int = 0
    lastY: int = 0
    unsolvedFraction: float = 0.0
    minFraction: float = 1.0
    candidates: int = 0
    converged: bool = False
    budgetExhausted: bool = False


class RoundResult(object):
    __slots__ = "y", "solved", "unsolved", "usedSlots", "complete"

    def __init__(self, y):
        self.y = y
        self.solved = {}
        self.unsolved = []
        self.usedSlots = set()
        self.complete = True

    @property
    def unsolvedFraction(self):
        total = len(self.solved) + len(self.unsolved)
        if not total:
            return 0.0
        return len(self.unsolved) / total


class SearchResult(object):
    """Solved/unsolved partition handed to the fallback table builder.

    Attributes:
        solved: Dictionary mapping solved blocks to their HashParams, in
            graph order.
        unsolved: Multi-predecessor blocks without parameters, in graph
            order. Disjoint from `solved`.
        usedSlots: Set of slots claimed by the solved blocks' edges.
        stats: SearchStats for the run.
    """
    __slots__ = "solved", "unsolved", "usedSlots", "stats"

    def __init__(self, solved, unsolved, usedSlots, stats):
        self.solved = solved
        self.unsolved = unsolved
        self.usedSlots = usedSlots
        self.stats = stats


def solveBlock(cur, predKeys, y, bits, arraySize, taken, budget):
    """Find the first (x, z) giving distinct hashes disjoint from `taken`.

    Returns:
        (HashParams, set of slots) on success, (None, None) otherwise.
    """
    for x in range(1, bits):
        for z in range(1, bits):
            budget.charge()
            params = HashParams(x, y, z)
            hashes = set(edgeHash(cur, pred, params, arraySize) for pred in predKeys)
            if len(hashes) == len(predKeys) and hashes.isdisjoint(taken):
                return params, hashes
    return None, None


def searchRound(classification, y, bits, budget):
    """Run one round of the search with a fixed predecessor shift `y`."""
    result = RoundResult(y)
    keys = classification.keys
    arraySize = classification.arraySize

    blocks = classification.multiPred
    for i, block in enumerate(blocks):
        predKeys = [keys[p] for p in classification.preds[block]]
        try:
            params, hashes = solveBlock(keys[block], predKeys, y, bits, arraySize,
                                        result.usedSlots, budget)
        except SearchBudgetExhausted as e:
            LOG.warning("%s in round y=%d; %d blocks left unvisited",
                        e, y, len(blocks) - i)
            result.unsolved.extend(blocks[i:])
            result.complete = False
            break

        if params is None:
            result.unsolved.append(block)
        else:
            result.solved[block] = params
            result.usedSlots.update(hashes)

    return result


def searchParameters(classification, config=None):
    """
    Search hash parameters for all multi-predecessor blocks.

    Args:
        classification: Classification produced by classifyBlocks.
        config: SearchConfig, defaults to SearchConfig().

    Returns:
        SearchResult with a true solved/unsolved partition of the
        multi-predecessor blocks.
    """
    if config is None:
        config = SearchConfig()
    if classification.arraySize != config.arraySize:
        raise ValueError("classification map size %d does not match config map size %d"
                         % (classification.arraySize, config.arraySize))

    stats = SearchStats()
    if not classification.multiPred:
        stats.minFraction = 0.0
        stats.converged = True
        return SearchResult({}, [], set(), stats)

    bits = config.mapSizePow2
    budget = SearchBudget(config.candidateBudget)
    last = None

    for y in range(1, config.rounds + 1):
        current = searchRound(classification, y, bits, budget)
        stats.rounds += 1

        if not current.complete:
            stats.budgetExhausted = True
            if last is None or len(current.unsolved) < len(last.unsolved):
                last = current
            break

        last = current
        fraction = current.unsolvedFraction
        stats.minFraction = min(stats.minFraction, fraction)
        LOG.debug("round y=%d: %d solved, %d unsolved (%.4f)",
                  y, len(current.solved), len(current.unsolved), fraction)

        if len(current.unsolved) < config.delta or fraction < config.sigma:
            stats.converged = True
            break

    stats.lastY = last.y
    stats.unsolvedFraction = last.unsolvedFraction
    stats.minFraction = min(stats.minFraction, stats.unsolvedFraction)
    stats.candidates = budget.used

    LOG.info("parameter search kept round y=%d: %d solved, %d unsolved after %d rounds",
             last.y, len(last.solved), len(last.unsolved), stats.rounds)
    return SearchResult(last.solved, last.unsolved, last.usedSlots, stats)
