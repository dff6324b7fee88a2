"""edgecov - collision-free edge ids for coverage-guided fuzzing.
"""

__version__ = "0.1.0"

# Import main components for easy access
from .config import SearchConfig
from .analysis.cfg.graph import ControlFlowGraph
from .application.pipeline import Pipeline, assignEdges

__all__ = [
    "SearchConfig",
    "ControlFlowGraph",
    "Pipeline",
    "assignEdges",
    "__version__",
]
