"""Edge-id assignment pipeline.

Runs the phases of one assignment, in order:

1. capacity check: the graph must not need more slots than the map has
2. classify: split blocks by predecessor count and draw block keys
3. search: find hash parameters for multi-predecessor blocks
4. fallback: explicit slots for unsolved edges and single-predecessor blocks
5. verify: every edge has exactly one slot and no slot is shared

Either a complete EdgeAssignment is returned or an EdgeHashError
propagates; callers never see a partially built assignment.
"""

import logging

from edgecov.config import SearchConfig
from edgecov.analysis.cfg.classify import classifyBlocks
from edgecov.analysis.edgehash.search import searchParameters
from edgecov.analysis.edgehash.fallback import buildTables
from edgecov.analysis.edgehash.assignment import EdgeAssignment

from . import errors

LOG = logging.getLogger(__name__)


class NullScope(object):
    __slots__ = ()

    def __enter__(self):
        pass

    def __exit__(self, type, value, tb):
        pass


class Pipeline(object):
    """Assignment pipeline for one compilation unit at a time.

    Attributes:
        config: SearchConfig used for every run.
        console: Optional Console that times each phase.
    """

    def __init__(self, config=None, console=None):
        if config is None:
            config = SearchConfig()
        self.config = config
        self.console = console

    def scope(self, name):
        if self.console is None:
            return NullScope()
        return self.console.scope(name)

    def run(self, graph, rng=None, keys=None):
        """Assign a collision-free slot to every edge of `graph`.

        Args:
            graph: ControlFlowGraph of the compilation unit.
            rng: random.Random used to draw block keys. Pass a seeded
                instance for reproducible results.
            keys: Optional {block: key} mapping replacing the random draw.

        Returns:
            EdgeAssignment: The verified assignment.

        Raises:
            InvalidGraphInput: If injected keys do not match the graph.
            CapacityExceeded: If the graph has more edges than map slots.
        """
        config = self.config
        arraySize = config.arraySize

        with self.scope("assign"):
            with self.scope("classify"):
                classification = classifyBlocks(graph, arraySize, rng=rng, keys=keys)

            required = classification.requiredSlots()
            if required > arraySize:
                raise errors.CapacityExceeded(required, arraySize)

            with self.scope("search"):
                search = searchParameters(classification, config)

            with self.scope("fallback"):
                fallbackTable, singleTable, allocator = buildTables(classification, search)

            assignment = EdgeAssignment(
                arraySize,
                classification.keys,
                classification.preds,
                search.solved,
                fallbackTable,
                singleTable,
                search.stats,
            )

            with self.scope("verify"):
                assignment.verify()

        LOG.info("assigned %d edges: %d slots used of %d",
                 required, len(allocator.used), arraySize)
        return assignment


def assignEdges(graph, config=None, rng=None, keys=None, console=None):
    """Convenience wrapper: Pipeline(config, console).run(graph, rng, keys)."""
    return Pipeline(config, console).run(graph, rng=rng, keys=keys)
