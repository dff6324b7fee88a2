"""Block classification for edge-id assignment.

Partitions the blocks of a ControlFlowGraph into single-predecessor and
multi-predecessor sets and gives every block a unique random key drawn from
the coverage map's index space. Entry blocks (no predecessors) count as
single-predecessor blocks.
"""

import logging
import random

from edgecov.application.errors import CapacityExceeded, InvalidGraphInput

LOG = logging.getLogger(__name__)


class Classification(object):
    """Output of classifyBlocks.

    Attributes:
        arraySize: Size of the coverage map the keys were drawn for.
        singlePred: Blocks with at most one predecessor, in block order.
        multiPred: Blocks with two or more predecessors, in block order.
        keys: Dictionary mapping every block to its key.
        preds: Dictionary mapping every block to a tuple of predecessors.
    """
    __slots__ = "arraySize", "singlePred", "multiPred", "keys", "preds"

    def __init__(self, arraySize, singlePred, multiPred, keys, preds):
        self.arraySize = arraySize
        self.singlePred = singlePred
        self.multiPred = multiPred
        self.keys = keys
        self.preds = preds

    @property
    def blocks(self):
        return list(self.preds)

    def requiredSlots(self):
        """Slots needed to give every edge (and every entry block) its own slot."""
        return len(self.singlePred) + sum(len(self.preds[b]) for b in self.multiPred)

    def withKeys(self, keys):
        """Return a copy of this classification using the given keys.

        Raises:
            InvalidGraphInput: If a block has no key, a key is out of range,
                or two blocks share a key.
        """
        checked = validateKeys(self.preds, keys, self.arraySize)
        return Classification(
            self.arraySize,
            list(self.singlePred),
            list(self.multiPred),
            checked,
            dict(self.preds),
        )


def validateKeys(blocks, keys, arraySize):
    checked = {}
    owner = {}
    for block in blocks:
        if block not in keys:
            raise InvalidGraphInput("no key given for block %r" % (block,))
        key = keys[block]
        if not isinstance(key, int) or isinstance(key, bool) or not 0 <= key < arraySize:
            raise InvalidGraphInput(
                "key %r for block %r is outside [0, %d)" % (key, block, arraySize)
            )
        if key in owner:
            raise InvalidGraphInput(
                "blocks %r and %r share key %d" % (owner[key], block, key)
            )
        owner[key] = block
        checked[block] = key
    return checked


def classifyBlocks(graph, arraySize, rng=None, keys=None):
    """
    Classify blocks by predecessor count and assign their keys.

    Args:
        graph: ControlFlowGraph to classify.
        arraySize: Size of the coverage map; keys are drawn from
            [0, arraySize) without replacement.
        rng: random.Random instance used for the key draw. A fresh,
            unseeded instance is used when omitted.
        keys: Optional {block: key} mapping to use instead of a random draw.

    Returns:
        Classification for the graph.

    Raises:
        CapacityExceeded: If there are more blocks than map slots.
        InvalidGraphInput: If injected keys do not match the graph.
    """
    blocks = graph.blocks
    if len(blocks) > arraySize:
        raise CapacityExceeded(len(blocks), arraySize,
                               "%d blocks cannot get unique keys in a map of %d slots"
                               % (len(blocks), arraySize))

    preds = {}
    singlePred = []
    multiPred = []
    for block in blocks:
        ps = graph.predecessors(block)
        preds[block] = ps
        if len(ps) > 1:
            multiPred.append(block)
        else:
            singlePred.append(block)

    if keys is None:
        if rng is None:
            rng = random.Random()
        keys = dict(zip(blocks, rng.sample(range(arraySize), len(blocks))))
    else:
        keys = validateKeys(blocks, keys, arraySize)

    LOG.debug("classified %d blocks: %d single-predecessor, %d multi-predecessor",
              len(blocks), len(singlePred), len(multiPred))
    return Classification(arraySize, singlePred, multiPred, keys, preds)
