"""
Nonogram Engine - Command Line Entry Point

Loads a puzzle, optionally restores a player solution, and prints the
clues, the grid and whether the puzzle is solved.

Example:
    python main.py --width 5 --height 1 --solution 10010
    python main.py -W 5 -H 5 -s 0110110111000110010011101 --answer-file answer.txt
    python main.py -W 10 -H 10 --empty --edit
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from nonogram.engine import CellValue, ConfigurationError, PuzzleInput, PuzzleStore, empty_solution_string
from nonogram.settings import load_settings
from nonogram.solution_parser import parse_solution


logger = logging.getLogger(__name__)

# Exit codes
EXIT_SOLVED = 0
EXIT_UNSOLVED = 1
EXIT_CONFIG_ERROR = 2

CELL_CHARS = {
    CellValue.FILLED: "#",
    CellValue.MARKED: "x",
    CellValue.EMPTY: ".",
}
MISTAKE_CHAR = "!"


def configure_logging(level: str):
    """Log to both console and file."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("nonogram.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def format_clue_line(store: PuzzleStore, clue_ids: List[int]) -> str:
    values = store.clue_values(clue_ids)
    return " ".join(str(v) for v in values)


def format_grid(store: PuzzleStore, highlight_mistakes: bool = False) -> str:
    """Render the player's grid with its row clues, one text line per row."""
    lines = []
    for row, clue_ids in zip(store.grid, store.row_clues):
        chars = []
        for cell_id in row:
            cell = store.cell(cell_id)
            if highlight_mistakes and not cell.is_valid:
                chars.append(MISTAKE_CHAR)
            else:
                chars.append(CELL_CHARS[cell.user_value])
        lines.append(f"{''.join(chars)}  {format_clue_line(store, clue_ids)}")
    return "\n".join(lines)


def read_answer(path: Path) -> Optional[str]:
    """Extract a solution string from an answer text file."""
    text = path.read_text(encoding='utf-8')
    solution = parse_solution(text)
    if solution is None:
        logger.warning(f"No solution found in {path}")
    else:
        logger.info(f"Parsed {len(solution)}-cell solution from {path}")
    return solution


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Nonogram Engine - Load a puzzle and check a player solution"
    )
    parser.add_argument("--width", "-W", type=int, required=True, help="Number of columns")
    parser.add_argument("--height", "-H", type=int, required=True, help="Number of rows")

    puzzle = parser.add_mutually_exclusive_group(required=True)
    puzzle.add_argument("--solution", "-s", help="Row-major '0'/'1' solution string")
    puzzle.add_argument("--empty", action="store_true", help="Start from an all-empty grid")

    answer = parser.add_mutually_exclusive_group()
    answer.add_argument("--user-solution", "-u", help="Player solution in the '0'/'1'/'x' alphabet")
    answer.add_argument("--answer-file", "-a", type=Path,
                        help="Text file containing a solution, possibly surrounded by prose")

    parser.add_argument("--edit", "-e", action="store_true", help="Open the puzzle in edit mode")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Load the puzzle, print it and report whether it is solved."""
    args = parse_args(argv)
    settings = load_settings()

    configure_logging("DEBUG" if args.debug else settings.get("log_level", "INFO"))

    solution = empty_solution_string(args.width, args.height) if args.empty else args.solution

    user_solution = args.user_solution
    if args.answer_file is not None:
        user_solution = read_answer(args.answer_file)
        if user_solution is None:
            return EXIT_UNSOLVED

    store = PuzzleStore()
    try:
        store.initialize(PuzzleInput(width=args.width, height=args.height, solution=solution),
                         is_editing=args.edit, user_solution=user_solution)
    except ConfigurationError as e:
        logger.warning(f"Invalid puzzle: {e}")
        return EXIT_CONFIG_ERROR

    print("Columns: " + " | ".join(format_clue_line(store, ids) for ids in store.column_clues))
    print(format_grid(store, highlight_mistakes=settings.get("highlight_mistakes", False)))

    if user_solution is None:
        return EXIT_SOLVED

    if store.is_complete:
        print("Solved!")
        return EXIT_SOLVED

    print("Not solved")
    return EXIT_UNSOLVED


if __name__ == "__main__":
    sys.exit(main())
