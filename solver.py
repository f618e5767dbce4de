"""Top-level solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a PuzzleInput or a raw
puzzle dictionary compatible with `src.csp.parser.parse_puzzle`.
"""

from typing import Any, Optional

from src.csp import solver_core
from src.csp.model import PuzzleInput, PuzzleResult
from src.csp.parser import parse_puzzle
from src.csp.validator import validate_puzzle_input


def solve_puzzle(puzzle: Any, max_depth: Optional[int] = None) -> PuzzleResult:
    """
    Validate and solve a puzzle.
    Accepts:
      - PuzzleInput instances (validated, then used directly)
      - Raw puzzle dictionaries (parsed via `parse_puzzle`)
    """
    if isinstance(puzzle, PuzzleInput):
        puzzle_input = puzzle
    elif isinstance(puzzle, dict):
        puzzle_input = parse_puzzle(puzzle)
    else:
        raise TypeError("solve_puzzle expects a PuzzleInput instance or puzzle dictionary")

    validate_puzzle_input(puzzle_input)
    return solver_core.solve(puzzle_input, max_depth=max_depth)


__all__ = ["solve_puzzle"]
