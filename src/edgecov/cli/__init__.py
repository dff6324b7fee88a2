"""
edgecov CLI tools.

- assign: compute a collision-free edge assignment for a CFG given as JSON
- compare: compare collisions of the classic random scheme and the assignment
"""

from .main import main

__all__ = ["main"]
