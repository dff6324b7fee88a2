"""
edgecov application layer.

- `errors.py`: the exception taxonomy shared by every phase
- `pipeline.py`: `Pipeline`, which runs classification, parameter search,
  fallback table construction and verification in order
"""
