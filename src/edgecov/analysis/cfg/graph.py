"""Control Flow Graph (CFG) representation.

A ControlFlowGraph is the input to edge-id assignment: an ordered collection
of basic blocks plus, for every block, the ordered list of its predecessors.

- Blocks are opaque hashable identifiers (strings, ints, IR objects).
- Edges are ordered (pred, succ) pairs. Adding the same pair twice is a
  no-op, since two branches from one block to the same successor are a
  single edge for coverage purposes.
- Insertion order of blocks and of each predecessor list is preserved, so
  every traversal is deterministic.
"""

from edgecov.application.errors import InvalidGraphInput


class ControlFlowGraph(object):
    """Ordered basic blocks with bidirectional edge lists.

    Attributes:
        prev: Dictionary mapping each block to its ordered predecessor list.
        next: Dictionary mapping each block to its ordered successor list.
        ids: Dictionary mapping each block to the identifier object it was
            added with.
    """
    __slots__ = "prev", "next", "ids"

    def __init__(self):
        self.prev = {}
        self.next = {}
        self.ids = {}

    @classmethod
    def fromEdges(cls, blocks, edges):
        """Build a graph from a block list and (pred, succ) pairs.

        Every block mentioned by an edge must appear in `blocks`.
        """
        g = cls()
        for block in blocks:
            g.addBlock(block)
        for edge in edges:
            if not isinstance(edge, (list, tuple)) or len(edge) != 2:
                raise InvalidGraphInput("edge %r is not a (pred, succ) pair" % (edge,))
            pred, succ = edge
            g.addEdge(pred, succ)
        return g

    @classmethod
    def fromPredecessors(cls, preds, blocks=None):
        """Build a graph from a {block: [pred, ...]} mapping.

        Args:
            preds: Mapping from each block to its predecessor blocks.
            blocks: Optional explicit block order. Defaults to the mapping's
                key order; when given, every key of `preds` must be listed.

        Returns:
            ControlFlowGraph: The new graph.

        Raises:
            InvalidGraphInput: If a predecessor is not a known block.
        """
        if blocks is None:
            blocks = list(preds)
        g = cls()
        for block in blocks:
            g.addBlock(block)
        for block, ps in preds.items():
            if g.lookup(block) is None:
                raise InvalidGraphInput("predecessor list given for unknown block %r" % (block,))
            for pred in ps:
                g.addEdge(pred, block)
        return g

    @classmethod
    def fromSuccessors(cls, succs):
        """Build a graph from a {block: [succ, ...]} mapping.

        Successors that never appear as keys are added as blocks after the
        keyed blocks, in discovery order.
        """
        g = cls()
        for block in succs:
            g.addBlock(block)
        for block, ss in succs.items():
            for succ in ss:
                g.addBlock(succ)
                g.addEdge(block, succ)
        return g

    def lookup(self, block):
        """Return the identifier `block` was added with, None if unknown.

        Identifiers that compare equal but are spelled differently (1, 1.0
        and True all hash alike) would silently merge two blocks, so such a
        match is rejected instead.

        Raises:
            InvalidGraphInput: If `block` is None, a bool, unhashable, or
                equal to a known block of a different type or spelling.
        """
        if block is None:
            raise InvalidGraphInput("None is not a valid block identifier")
        if isinstance(block, bool):
            raise InvalidGraphInput("boolean %r is not a valid block identifier" % (block,))
        try:
            known = self.ids.get(block)
        except TypeError:
            raise InvalidGraphInput("block identifier %r is not hashable" % (block,))
        if known is not None and (type(known) is not type(block) or repr(known) != repr(block)):
            raise InvalidGraphInput(
                "block identifier %r clashes with existing block %r" % (block, known)
            )
        return known

    def addBlock(self, block):
        """Add a block if it is not already present."""
        if self.lookup(block) is not None:
            return
        self.ids[block] = block
        self.prev[block] = []
        self.next[block] = []

    def addEdge(self, pred, succ):
        """Add the edge pred -> succ.

        Raises:
            InvalidGraphInput: If either endpoint is not a known block.
        """
        for block in (pred, succ):
            if self.lookup(block) is None:
                raise InvalidGraphInput(
                    "edge %r -> %r references unknown block %r" % (pred, succ, block)
                )

        if pred not in self.prev[succ]:
            self.prev[succ].append(pred)
            self.next[pred].append(succ)

    @property
    def blocks(self):
        return list(self.prev)

    def __len__(self):
        return len(self.prev)

    def __contains__(self, block):
        return block in self.prev

    def __iter__(self):
        return iter(self.prev)

    def predecessors(self, block):
        return tuple(self.prev[block])

    def successors(self, block):
        return tuple(self.next[block])

    def edges(self):
        """Yield every (pred, succ) edge, grouped by successor in block order."""
        for succ, preds in self.prev.items():
            for pred in preds:
                yield pred, succ

    def numEdges(self):
        return sum(len(preds) for preds in self.prev.values())

    def entryPoints(self):
        """Blocks with no incoming edges, in block order."""
        return [block for block, preds in self.prev.items() if not preds]

    def __repr__(self):
        return "%s(%d blocks, %d edges)" % (type(self).__name__, len(self), self.numEdges())
