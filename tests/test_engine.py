"""
Test script for the engine building blocks

Covers:
1. Clue derivation
2. Grid building and solution strings
3. Range geometry and drag feedback counts
4. Validity and completion rules
5. History stack

Usage:
    python tests/test_engine.py
"""

import itertools
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from nonogram.engine import (
    Cell,
    CellId,
    CellValue,
    ClueType,
    DragDirection,
    History,
    HistoryEntry,
    MarkedCellsCount,
    build_grid,
    cells_in_range,
    derive_clues,
    derive_line_clues,
    empty_solution_string,
    is_cell_valid,
    is_puzzle_complete,
    marked_cells_count,
    pad_clue_lines,
    parse_user_value,
    user_solution_string,
)
from nonogram.engine.clue import clue_id_sequence
from nonogram.engine.history import CellChange


def banner(title):
    print("\n" + "="*60)
    print(f"TEST: {title}")
    print("="*60)


def make_line(pattern, row=0):
    """Row of cells whose ground truth follows a '0'/'1' pattern."""
    return [
        Cell(id=CellId(row, c), value=CellValue.FILLED if ch == "1" else CellValue.EMPTY, is_valid=True)
        for c, ch in enumerate(pattern)
    ]


def make_cells(solution, width, user=None):
    """Cells dict and id grid from a solution and optional '0'/'1'/'x' player string."""
    cells = {}

    def create(row, column, ch):
        cell_id = CellId(row, column)
        user_value = parse_user_value(user[row * width + column]) if user else CellValue.EMPTY
        value = CellValue.FILLED if ch == "1" else CellValue.EMPTY
        cells[cell_id] = Cell(id=cell_id, value=value, user_value=user_value,
                              is_valid=is_cell_valid(value, user_value))
        return cell_id

    grid = build_grid(width, solution, create)
    return cells, grid


def run_lengths(pattern):
    return [len(run) for run in pattern.split("0") if run]


def test_clue_derivation():
    """Runs become clues in order, with ids and cells attached."""
    banner("Clue Derivation")

    clues = derive_line_clues(make_line("10010"), 0, ClueType.ROW, clue_id_sequence())
    print(f"  '10010' -> {[c.value for c in clues]}")
    assert [c.value for c in clues] == [1, 1]
    assert clues[0].cell_ids == (CellId(0, 0),)
    assert clues[1].cell_ids == (CellId(0, 3),)
    assert all(c.type == ClueType.ROW and c.index == 0 for c in clues)
    assert clues[0].id != clues[1].id

    # Run flush against the end of the line
    clues = derive_line_clues(make_line("0111"), 2, ClueType.COLUMN, clue_id_sequence())
    assert [c.value for c in clues] == [3]
    assert clues[0].cell_ids[-1] == CellId(0, 3)

    # Empty line yields one placeholder
    clues = derive_line_clues(make_line("00000"), 0, ClueType.ROW, clue_id_sequence())
    assert len(clues) == 1
    assert clues[0].value == 0 and clues[0].is_placeholder
    assert clues[0].cell_ids == ()
    assert clues[0].is_valid

    print("  [PASS] Clue derivation tests")


def test_clue_round_trip():
    """Clues reproduce the run-length signature of every binary line."""
    banner("Clue Round-Trip")

    for length in range(1, 9):
        for bits in itertools.product("01", repeat=length):
            pattern = "".join(bits)
            clues = derive_line_clues(make_line(pattern), 0, ClueType.ROW, clue_id_sequence())
            rebuilt = "0".join("1" * c.value for c in clues if c.value > 0)
            assert run_lengths(rebuilt) == run_lengths(pattern), pattern
            if "1" not in pattern:
                assert [c.value for c in clues] == [0]

    print("  [PASS] All lines up to length 8 round-trip")


def test_clue_validity_from_cells():
    """A derived clue is valid only when all of its cells are."""
    banner("Clue Validity")

    line = make_line("1101")
    line[1].is_valid = False
    clues = derive_line_clues(line, 0, ClueType.ROW, clue_id_sequence())
    assert [c.is_valid for c in clues] == [False, True]

    print("  [PASS] Clue validity tests")


def test_derive_clues_grid():
    """Columns and rows are derived for a full grid."""
    banner("Grid Clues")

    cells, grid = make_cells("110" "011" "000", 3)
    cell_grid = [[cells[cell_id] for cell_id in row] for row in grid]
    column_clues, row_clues = derive_clues(cell_grid, clue_id_sequence())

    assert [[c.value for c in line] for line in column_clues] == [[1], [2], [1]]
    assert [[c.value for c in line] for line in row_clues] == [[2], [2], [0]]
    assert all(c.type == ClueType.COLUMN for line in column_clues for c in line)

    ids = [c.id for line in column_clues + row_clues for c in line]
    assert len(ids) == len(set(ids))

    print("  [PASS] Grid clue tests")


def test_pad_clue_lines():
    banner("Clue Padding")

    padded = pad_clue_lines([[1], [2, 3, 4], []])
    assert padded == [[None, None, 1], [2, 3, 4], [None, None, None]]
    assert pad_clue_lines([]) == []

    print("  [PASS] Clue padding tests")


def test_build_grid():
    """Row and column come from the flat index only."""
    banner("Grid Builder")

    grid = build_grid(3, "101010", lambda r, c, ch: (r, c, ch))
    assert grid == [[(0, 0, "1"), (0, 1, "0"), (0, 2, "1")],
                    [(1, 0, "0"), (1, 1, "1"), (1, 2, "0")]]

    # Short strings are truncated, never padded
    grid = build_grid(3, "1010", lambda r, c, ch: ch)
    assert grid == [["1", "0", "1"]]

    print("  [PASS] Grid builder tests")


def test_solution_strings():
    banner("Solution Strings")

    assert empty_solution_string(3, 2) == "000000"
    assert parse_user_value("1") == CellValue.FILLED
    assert parse_user_value("x") == CellValue.MARKED
    assert parse_user_value("0") == CellValue.EMPTY
    assert parse_user_value("?") == CellValue.EMPTY

    cells, grid = make_cells("1001", 2, user="1x0x")
    assert user_solution_string(grid, cells) == "1x0x"

    print("  [PASS] Solution string tests")


def test_cells_in_range():
    """Rectangle between two corners, row-major, corner order irrelevant."""
    banner("Range Geometry")

    _, grid = make_cells("0" * 25, 5)
    expected = [CellId(r, c) for r in range(1, 4) for c in range(1, 4)]

    assert cells_in_range(grid, CellId(1, 1), CellId(3, 3)) == expected
    assert cells_in_range(grid, CellId(3, 3), CellId(1, 1)) == expected
    assert cells_in_range(grid, CellId(3, 1), CellId(1, 3)) == expected
    assert cells_in_range(grid, CellId(2, 2), CellId(2, 2)) == [CellId(2, 2)]
    assert cells_in_range(grid, CellId(0, 1), CellId(0, 3)) == [CellId(0, 1), CellId(0, 2), CellId(0, 3)]

    # Out-of-grid coordinates are skipped
    assert cells_in_range(grid, CellId(4, 4), CellId(6, 6)) == [CellId(4, 4)]

    print("  [PASS] Range geometry tests")


def test_marked_cells_count():
    """Block count includes only matches adjacent to the span."""
    banner("Marked Block Count")

    # Row: F F E [drag 3..4] F F E F
    cells, grid = make_cells("0" * 9, 9, user="110001101")
    marked = marked_cells_count(cells, grid, DragDirection.HORIZONTAL,
                                CellId(0, 3), CellId(0, 4), CellValue.FILLED)
    print(f"  count={marked.count}, block_count={marked.block_count}")
    # Left side reset by the EMPTY at column 2; right side stops at column 7
    assert marked.count == 2
    assert marked.block_count == 2

    # Adjacent on both sides
    cells, grid = make_cells("0" * 7, 7, user="0110110")
    marked = marked_cells_count(cells, grid, DragDirection.HORIZONTAL,
                                CellId(0, 3), CellId(0, 3), CellValue.FILLED)
    assert (marked.count, marked.block_count) == (1, 4)

    # Reversed endpoints give the same result
    cells, grid = make_cells("0" * 6, 6, user="100011")
    forward = marked_cells_count(cells, grid, DragDirection.HORIZONTAL,
                                 CellId(0, 1), CellId(0, 3), CellValue.FILLED)
    backward = marked_cells_count(cells, grid, DragDirection.HORIZONTAL,
                                  CellId(0, 3), CellId(0, 1), CellValue.FILLED)
    assert forward == backward == MarkedCellsCount(count=3, block_count=3)

    # Vertical: a 1-wide column
    cells, grid = make_cells("0" * 5, 1, user="1x001")
    marked = marked_cells_count(cells, grid, DragDirection.VERTICAL,
                                CellId(2, 0), CellId(3, 0), CellValue.FILLED)
    assert (marked.count, marked.block_count) == (2, 1)

    print("  [PASS] Marked block count tests")


def test_marked_cells_label():
    banner("Drag Tooltip")

    assert MarkedCellsCount(count=2, block_count=2).label == "2"
    assert MarkedCellsCount(count=3, block_count=0).label == "3/0"
    assert MarkedCellsCount(count=3, block_count=2).label == "3/2"
    assert not MarkedCellsCount(count=1, block_count=4).is_visible
    assert MarkedCellsCount(count=2).is_visible
    assert MarkedCellsCount().total == 0
    assert MarkedCellsCount(count=3, block_count=2).total == 5

    print("  [PASS] Drag tooltip tests")


def test_cell_validity():
    """Exhaustive check over ground truth x player mark."""
    banner("Cell Validity")

    expected = {
        (CellValue.EMPTY, CellValue.EMPTY): True,
        (CellValue.EMPTY, CellValue.MARKED): True,
        (CellValue.EMPTY, CellValue.FILLED): False,
        (CellValue.FILLED, CellValue.FILLED): True,
        (CellValue.FILLED, CellValue.EMPTY): False,
        (CellValue.FILLED, CellValue.MARKED): False,
    }
    for (value, user_value), valid in expected.items():
        print(f"  value={value.value:6} user={user_value.value:6} -> {valid}")
        assert is_cell_valid(value, user_value) is valid

    print("  [PASS] Cell validity tests")


def test_completion():
    """Complete iff every cell is valid; edit mode never completes."""
    banner("Completion")

    cells, _ = make_cells("1001", 4, user="1xx1")
    assert is_puzzle_complete(cells.values(), is_editing=False)
    assert not is_puzzle_complete(cells.values(), is_editing=True)

    cells, _ = make_cells("1001", 4, user="1x01")
    assert is_puzzle_complete(cells.values(), is_editing=False)

    # One wrong cell
    cells, _ = make_cells("1001", 4, user="1xxx")
    assert not is_puzzle_complete(cells.values(), is_editing=False)

    print("  [PASS] Completion tests")


def test_history_stack():
    """Cursor movement, floor/ceiling and redo-tail truncation."""
    banner("History Stack")

    def entry(n):
        return HistoryEntry(changes=(CellChange(CellId(0, n), CellValue.EMPTY, CellValue.FILLED),))

    history = History()
    assert history.undo() is None and history.redo() is None
    assert not history.can_undo and not history.can_redo

    history.push(entry(0))
    history.push(entry(1))
    assert history.index == 1

    assert history.undo() == entry(1)
    assert history.can_redo
    assert history.undo() == entry(0)
    assert history.undo() is None
    assert history.index == -1

    assert history.redo() == entry(0)

    # New commit drops the redo tail
    history.push(entry(2))
    assert history.entries == [entry(0), entry(2)]
    assert not history.can_redo

    history.clear()
    assert history.entries == [] and history.index == -1

    print("  [PASS] History stack tests")


TESTS = [
    ("Clue Derivation", test_clue_derivation),
    ("Clue Round-Trip", test_clue_round_trip),
    ("Clue Validity", test_clue_validity_from_cells),
    ("Grid Clues", test_derive_clues_grid),
    ("Clue Padding", test_pad_clue_lines),
    ("Grid Builder", test_build_grid),
    ("Solution Strings", test_solution_strings),
    ("Range Geometry", test_cells_in_range),
    ("Marked Block Count", test_marked_cells_count),
    ("Drag Tooltip", test_marked_cells_label),
    ("Cell Validity", test_cell_validity),
    ("Completion", test_completion),
    ("History Stack", test_history_stack),
]


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# ENGINE TESTS")
    print("#"*60)

    results = []
    for name, test in TESTS:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {e}")
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)

    all_passed = True
    for name, passed in results:
        status = "PASS" if passed else "FAIL"
        print(f"  {name}: [{status}]")
        if not passed:
            all_passed = False

    print()
    if all_passed:
        print("All tests PASSED!")
        return 0
    else:
        print("Some tests FAILED!")
        return 1


if __name__ == "__main__":
    sys.exit(main())
