"""
Analysis modules for edgecov.

- `cfg`: control flow graph representation, block classification,
  serialization and DOT dumping
- `edgehash`: hash-parameter search and fallback tables that give every
  edge a collision-free coverage map slot
"""
