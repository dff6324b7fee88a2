"""Control Flow Graph (CFG) modules.

This package contains the graph container consumed by the edge-id
assignment, the block classifier, and helpers to load graphs from JSON and
dump assignments as DOT graphs.
"""

from .graph import ControlFlowGraph
from .classify import Classification, classifyBlocks

__all__ = ["ControlFlowGraph", "Classification", "classifyBlocks"]
