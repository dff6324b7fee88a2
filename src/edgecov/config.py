"""
Search configuration for edge-id assignment.

The defaults match the classic 64 KB coverage map (MAP_SIZE_POW2 = 16) and
the stopping thresholds used by the parameter search.
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional


# Coverage map size as a power of two
MAP_SIZE_POW2 = 16
MAP_SIZE = 1 << MAP_SIZE_POW2

# Stop searching once fewer than DELTA blocks are unsolved...
DELTA = 10
# ...or the unsolved fraction drops below SIGMA
SIGMA = 0.001


@dataclass(frozen=True)
class SearchConfig:
    """Parameters for one edge-id assignment run.

    Attributes:
        mapSizePow2: Bit width of the coverage map index.
        delta: Absolute unsolved-count stopping threshold.
        sigma: Unsolved-fraction stopping threshold.
        maxRounds: Maximum number of y rounds, None for every y value.
        candidateBudget: Maximum number of (x, z) candidates evaluated over
            the whole search, None for no limit.
    """
    mapSizePow2: int = MAP_SIZE_POW2
    delta: int = DELTA
    sigma: float = SIGMA
    maxRounds: Optional[int] = None
    candidateBudget: Optional[int] = None

    def __post_init__(self):
        if not 2 <= self.mapSizePow2 <= 30:
            raise ValueError("mapSizePow2 must be between 2 and 30, got %r" % self.mapSizePow2)
        if self.delta < 0:
            raise ValueError("delta must not be negative")
        if self.sigma < 0:
            raise ValueError("sigma must not be negative")
        if self.maxRounds is not None and self.maxRounds < 1:
            raise ValueError("maxRounds must be at least 1")
        if self.candidateBudget is not None and self.candidateBudget < 0:
            raise ValueError("candidateBudget must not be negative")

    @property
    def arraySize(self) -> int:
        return 1 << self.mapSizePow2

    @property
    def rounds(self) -> int:
        """Number of y values the search may try."""
        rounds = self.mapSizePow2 - 1
        if self.maxRounds is not None:
            rounds = min(rounds, self.maxRounds)
        return rounds

    def replace(self, **changes) -> "SearchConfig":
        return dataclasses.replace(self, **changes)
