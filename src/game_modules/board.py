"""Contains the Board class which holds the cells of a game of tic-tac-toe"""

from typing import List, Optional, Tuple

from data_types import CellIndex, Identity, Mark

BOARD_SIZE = 9
ROW_LENGTH = 3

# Every triple of cell indices that wins the game
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class Board:
    """A 3x3 tic-tac-toe board stored as a flat list of nine cells.

    Cells are indexed row by row from 0 (top left) to 8 (bottom right). A cell
    that has been marked is never overwritten.
    """

    def __init__(self) -> None:
        self.__cells: List[Mark] = [Mark.EMPTY] * BOARD_SIZE

    @property
    def cells(self) -> Tuple[Mark, ...]:
        return tuple(self.__cells)

    @property
    def move_count(self) -> int:
        """Number of marked cells"""

        return sum(1 for cell in self.__cells if cell is not Mark.EMPTY)

    @staticmethod
    def in_range(cell_index: CellIndex) -> bool:
        return 0 <= cell_index < BOARD_SIZE

    def is_empty(self, cell_index: CellIndex) -> bool:
        """Checks if a cell can still be marked.

        Returns:
            bool: False if the index is out of range or the cell is taken.
        """

        return Board.in_range(cell_index) and self.__cells[cell_index] is Mark.EMPTY

    def place_mark(self, cell_index: CellIndex, mark: Mark) -> bool:
        """Writes a mark into an empty cell.

        Args:
            cell_index (CellIndex): Index of the cell to mark, 0 to 8.
            mark (Mark): Mark to write. Must not be Mark.EMPTY.

        Returns:
            bool: True if the mark was written, False if the move was
                rejected and the board is unchanged.
        """

        if mark is Mark.EMPTY or not self.is_empty(cell_index):
            return False

        self.__cells[cell_index] = mark
        return True

    def evaluate_winner(self) -> Optional[Identity]:
        """Finds the identity that owns a complete line.

        Returns:
            Optional[Identity]: Owner of the first complete line found or None
                if no line is complete.
        """

        for a, b, c in WIN_LINES:
            if self.__cells[a] is self.__cells[b] is self.__cells[c] is not Mark.EMPTY:
                return Identity.FIRST if self.__cells[a] is Mark.A else Identity.SECOND

        return None

    def is_full(self) -> bool:
        return Mark.EMPTY not in self.__cells

    def reset(self) -> None:
        self.__cells = [Mark.EMPTY] * BOARD_SIZE

    def __str__(self) -> str:
        rows = []
        for start in range(0, BOARD_SIZE, ROW_LENGTH):
            row = self.__cells[start : start + ROW_LENGTH]
            rows.append("|" + "|".join(cell.value for cell in row) + "|")

        return "\n-------\n".join(rows)
