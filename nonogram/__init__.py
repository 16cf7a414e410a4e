"""
Nonogram - Puzzle state engine for playing and authoring nonograms.

Subpackages and modules:
    - engine: Cells, clues, drag geometry, validity, history and the store
    - solution_parser: Recover a binary solution string from freeform text
    - puzzle_controller: PyQt5 signal bridge over the store
    - settings: JSON-backed user preferences
"""

__version__ = "0.1.0"
