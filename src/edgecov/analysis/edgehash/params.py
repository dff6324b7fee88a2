"""
Per-block edge hash function family.

A solved multi-predecessor block owns a HashParams triple (x, y, z); the
slot of the edge pred -> block is then

    h(cur, pred) = (cur >> x) ^ ((pred >> y) + z)

where cur and pred are the block keys. The result is masked to the map
size, which leaves it unchanged for shifts of at least 1 and offsets below
the map's bit width.
"""

from collections import namedtuple


class HashParams(namedtuple("HashParams", ["x", "y", "z"])):
    """Shift/offset triple selecting one member of the edge hash family."""
    __slots__ = ()

    def __str__(self):
        return "(x=%d, y=%d, z=%d)" % self


def edgeHash(cur, pred, params, arraySize):
    """Compute the coverage map slot of the edge pred -> cur.

    Args:
        cur: Key of the current (successor) block.
        pred: Key of the predecessor block.
        params: HashParams of the current block.
        arraySize: Coverage map size (a power of two).

    Returns:
        int: Slot index in [0, arraySize).
    """
    x, y, z = params
    return ((cur >> x) ^ ((pred >> y) + z)) & (arraySize - 1)
