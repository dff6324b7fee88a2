"""
Edge-id assignment result.

An EdgeAssignment is what the instrumentation emitter consumes. For each
block it decides how the slot of an incoming edge is obtained:

- "solved": recompute h(cur, pred) inline from the block's HashParams;
- "fallback": look (cur key, pred key) up in the fallback table;
- "single": look the block's own key up in the single table.

Entry blocks have no predecessor; their (block, None) pseudo-edge is a
"single" edge like any other single-predecessor block.
"""

import collections
import dataclasses

from edgecov.application.errors import InternalError, InvalidGraphInput
from .params import edgeHash

SOLVED = "solved"
FALLBACK = "fallback"
SINGLE = "single"


def jsonBlock(block):
    if isinstance(block, (str, int, float)):
        return block
    if isinstance(block, tuple):
        return [jsonBlock(b) for b in block]
    return str(block)


class EdgeAssignment(object):
    """Complete, read-only slot assignment for one compilation unit.

    Attributes:
        arraySize: Coverage map size.
        keys: Dictionary mapping blocks to keys.
        preds: Dictionary mapping blocks to predecessor tuples.
        solvedParams: Dictionary mapping solved blocks to HashParams.
        fallbackTable: Dictionary mapping (cur key, pred key) to a slot.
        singleTable: Dictionary mapping a block key to a slot.
        stats: SearchStats of the parameter search, if any.
    """

    def __init__(self, arraySize, keys, preds, solvedParams, fallbackTable, singleTable,
                 stats=None):
        self.arraySize = arraySize
        self.keys = keys
        self.preds = preds
        self.solvedParams = solvedParams
        self.fallbackTable = fallbackTable
        self.singleTable = singleTable
        self.stats = stats

    def method(self, block):
        if block in self.solvedParams:
            return SOLVED
        if len(self.preds[block]) > 1:
            return FALLBACK
        return SINGLE

    def slotFor(self, block, pred=None):
        """Return the slot for the edge pred -> block.

        Args:
            block: Successor block.
            pred: Predecessor block, None for an entry block.

        Raises:
            InvalidGraphInput: If pred -> block is not an edge of the graph.
        """
        if block not in self.preds:
            raise InvalidGraphInput("unknown block %r" % (block,))
        preds = self.preds[block]
        if pred is None:
            if preds:
                raise InvalidGraphInput("block %r is not an entry block" % (block,))
        elif pred not in preds:
            raise InvalidGraphInput("%r -> %r is not an edge" % (pred, block))

        method = self.method(block)
        cur = self.keys[block]
        if method == SOLVED:
            return edgeHash(cur, self.keys[pred], self.solvedParams[block], self.arraySize)
        elif method == FALLBACK:
            return self.fallbackTable[(cur, self.keys[pred])]
        else:
            return self.singleTable[cur]

    def edges(self):
        """Yield every (block, pred) edge, with (block, None) for entry blocks."""
        for block, preds in self.preds.items():
            if not preds:
                yield block, None
            for pred in preds:
                yield block, pred

    def slots(self):
        return {edge: self.slotFor(*edge) for edge in self.edges()}

    def collisions(self):
        """List (first edge, colliding edge, slot) for every shared slot."""
        owner = {}
        result = []
        for edge, slot in self.slots().items():
            if slot in owner:
                result.append((owner[slot], edge, slot))
            else:
                owner[slot] = edge
        return result

    def verify(self):
        """Check that every edge has exactly one in-range, unshared slot.

        Raises:
            InternalError: On a missing table entry, an out-of-range slot or
                a collision.
        """
        try:
            slots = self.slots()
        except KeyError as e:
            raise InternalError("edge without a slot: missing table entry %s" % e)

        for edge, slot in slots.items():
            if not 0 <= slot < self.arraySize:
                raise InternalError("edge %r got slot %d outside the map" % (edge, slot))

        collisions = self.collisions()
        if collisions:
            first, other, slot = collisions[0]
            raise InternalError("%d colliding edges, e.g. %r and %r share slot %d"
                                % (len(collisions), first, other, slot))

    def summary(self):
        counts = collections.Counter()
        for block, pred in self.edges():
            counts[self.method(block)] += 1
        return {
            "blocks": len(self.preds),
            "edges": sum(counts.values()),
            "solvedBlocks": len(self.solvedParams),
            "solvedEdges": counts[SOLVED],
            "fallbackEdges": counts[FALLBACK],
            "singleEdges": counts[SINGLE],
        }

    def toDict(self):
        """JSON friendly form.

        Blocks are listed as [block, ...] pairs rather than used as object
        keys, so 1 and "1" stay distinct. Blocks that are not JSON scalars
        or tuples are rendered with str().
        """
        data = {
            "arraySize": self.arraySize,
            "keys": [[jsonBlock(b), k] for b, k in self.keys.items()],
            "solvedParams": [[jsonBlock(b), list(p)] for b, p in self.solvedParams.items()],
            "fallbackTable": [[cur, pred, slot] for (cur, pred), slot in self.fallbackTable.items()],
            "singleTable": [[cur, slot] for cur, slot in self.singleTable.items()],
            "summary": self.summary(),
        }
        if self.stats is not None:
            data["stats"] = dataclasses.asdict(self.stats)
        return data
