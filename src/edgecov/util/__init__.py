"""
Utility modules for edgecov.

- Phase timing console (application/console.py)
- Human-readable formatting of durations and sizes (io/formatting.py)
"""
