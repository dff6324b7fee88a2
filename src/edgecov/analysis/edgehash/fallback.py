"""
Explicit slot tables for edges the parameter search did not cover.

Two tables are built, in this order, both handing out the lowest slot not
yet claimed:

- the fallback table, keyed by (current key, predecessor key), for every
  incoming edge of an unsolved multi-predecessor block;
- the single table, keyed by current key, for every single-predecessor
  (or entry) block.

Running out of slots raises CapacityExceeded instead of reusing a slot.
"""

import logging

from edgecov.application.errors import CapacityExceeded

LOG = logging.getLogger(__name__)


class SlotAllocator(object):
    """Hands out the lowest free coverage map slot.

    Claimed slots only ever grow and allocation always takes the lowest
    free index, so a cursor replaces rescanning from zero on every call.
    """
    __slots__ = "arraySize", "used", "cursor"

    def __init__(self, arraySize, used=()):
        self.arraySize = arraySize
        self.used = set(used)
        self.cursor = 0

    def free(self):
        return self.arraySize - len(self.used)

    def allocate(self):
        while self.cursor < self.arraySize and self.cursor in self.used:
            self.cursor += 1
        if self.cursor >= self.arraySize:
            raise CapacityExceeded(len(self.used) + 1, self.arraySize)
        slot = self.cursor
        self.used.add(slot)
        self.cursor += 1
        return slot


def buildFallbackTable(classification, unsolved, allocator):
    """Give every incoming edge of the unsolved blocks an explicit slot.

    Returns:
        dict: {(current key, predecessor key): slot}
    """
    keys = classification.keys
    table = {}
    for block in unsolved:
        cur = keys[block]
        for pred in classification.preds[block]:
            table[(cur, keys[pred])] = allocator.allocate()
    LOG.debug("fallback table: %d edges from %d unsolved blocks", len(table), len(unsolved))
    return table


def buildSingleTable(classification, allocator):
    """Give every single-predecessor block an explicit slot.

    Returns:
        dict: {current key: slot}
    """
    keys = classification.keys
    table = {}
    for block in classification.singlePred:
        table[keys[block]] = allocator.allocate()
    LOG.debug("single table: %d blocks", len(table))
    return table


def buildTables(classification, search):
    """Build both explicit tables on top of a SearchResult.

    Returns:
        (fallbackTable, singleTable, allocator)
    """
    allocator = SlotAllocator(classification.arraySize, search.usedSlots)
    fallbackTable = buildFallbackTable(classification, search.unsolved, allocator)
    singleTable = buildSingleTable(classification, allocator)
    if allocator.free() < classification.arraySize // 16:
        LOG.warning("coverage map nearly full: %d of %d slots free",
                    allocator.free(), classification.arraySize)
    return fallbackTable, singleTable, allocator
