"""
Collision-free edge-id assignment.

The coverage map is indexed per edge. This package picks, for every edge of
a classified control flow graph, a slot that no other edge uses:

1. **Parameter search** (`search.py`): multi-predecessor blocks get a
   HashParams triple whose edge hashes are distinct and globally disjoint.
2. **Fallback tables** (`fallback.py`): edges of unsolved blocks and all
   single-predecessor blocks get explicit slots from the free space.
3. **Result** (`assignment.py`): EdgeAssignment answers "which slot does
   this edge use" and verifies the whole map.

`naive.py` reproduces the classic random-location scheme for comparison.
"""

from .params import HashParams, edgeHash
from .search import SearchBudget, SearchResult, SearchStats, searchParameters
from .fallback import SlotAllocator, buildFallbackTable, buildSingleTable, buildTables
from .assignment import EdgeAssignment, SOLVED, FALLBACK, SINGLE
from .naive import naiveEdgeIds, countCollisions

__all__ = [
    "HashParams",
    "edgeHash",
    "SearchBudget",
    "SearchResult",
    "SearchStats",
    "searchParameters",
    "SlotAllocator",
    "buildFallbackTable",
    "buildSingleTable",
    "buildTables",
    "EdgeAssignment",
    "SOLVED",
    "FALLBACK",
    "SINGLE",
    "naiveEdgeIds",
    "countCollisions",
]
