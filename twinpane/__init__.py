"""
Twinpane - the reconciliation core of a dual-pane file manager.

Features:
- Side-by-side line diff of two text files with bounded-lookahead resync
- Block navigation with wraparound
- Directional block merge and in-place line editing
- Single-level directory comparison (left only / right only / different / identical)
- One-way and two-way directory sync, newer file wins on conflicts
- Fast file hashing using xxhash
"""

__version__ = "1.0.0"
