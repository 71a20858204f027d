"""Classes and functions for representing the game board."""

from collections.abc import Iterator, Sequence

import numpy as np

from quartiles.solver.fragment_path import BOARD_SIZE

BOARD_ROWS = 5
"""Number of rows on an official board."""

BOARD_COLS = 4
"""Number of columns on an official board."""


def clean_fragment(fragment: str) -> str:
    """Normalize a fragment, rejecting anything but ASCII letters."""
    cleaned = fragment.strip().lower()
    if not cleaned:
        raise ValueError("Fragments must not be empty.")
    if not (cleaned.isascii() and cleaned.isalpha()):
        raise ValueError(f"Fragment contains invalid characters: {fragment!r}")
    return cleaned


class Board:
    """Store a 2D grid of fragments as a 1D tuple.

    Contains support for both 1D (row-major) and 2D indexing.  A board never changes once
    built.
    """

    def __init__(self, fragments: Sequence[str], n_rows: int, n_cols: int) -> None:
        if n_rows <= 0 or n_cols <= 0:
            raise ValueError("Board dimensions must be positive.")
        if len(fragments) != n_rows * n_cols:
            raise ValueError(
                f"Expected {n_rows * n_cols} fragments for a {n_rows}x{n_cols} board, "
                f"got {len(fragments)}."
            )
        self.fragments: tuple[str, ...] = tuple(clean_fragment(f) for f in fragments)
        self.n_rows = n_rows
        self.n_cols = n_cols

        self.grid = np.array(self.fragments, dtype=object).reshape(n_rows, n_cols)
        """Read-only 2D view of the fragments."""
        self.grid.flags.writeable = False

    @classmethod
    def from_fragments(cls, fragments: Sequence[str]) -> "Board":
        """Build a board, laying out an official board as 5 rows of 4 and anything else as
        a single row."""
        if len(fragments) == BOARD_SIZE:
            return cls(fragments, BOARD_ROWS, BOARD_COLS)
        return cls(fragments, 1, len(fragments))

    def __len__(self) -> int:
        return len(self.fragments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fragments)

    def __str__(self) -> str:
        return " ".join(self.fragments)

    def __repr__(self) -> str:
        return f"Board({list(self.fragments)!r}, {self.n_rows}, {self.n_cols})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.fragments, self.n_rows, self.n_cols) == (
            other.fragments,
            other.n_rows,
            other.n_cols,
        )

    def __hash__(self) -> int:
        return hash((self.fragments, self.n_rows, self.n_cols))

    def __getitem__(self, idx: int | tuple[int, int]) -> str:
        """Get a fragment by 1D (row-major order) or 2D index."""
        if isinstance(idx, int):
            return self.fragments[idx]
        if isinstance(idx, tuple) and len(idx) == 2:
            row, col = idx
            return self.grid[row, col]
        raise IndexError("Invalid index type for Board.")

    def get_2d_idx(self, one_d_idx: int) -> tuple[int, int]:
        """Convert a 1D index to a (row, col) tuple."""
        return divmod(one_d_idx, self.n_cols)

    def get_1d_idx(self, row: int, col: int) -> int:
        """Convert a (row, col) tuple to a 1D index."""
        return row * self.n_cols + col

    def rows(self) -> list[list[str]]:
        """Return the fragments as a list of rows."""
        return self.grid.tolist()

    def print(self, two_d: bool = True) -> None:
        """Print the board to the console."""
        if not two_d:
            print(self)
            return
        width = max(len(f) for f in self.fragments)
        for row in self.rows():
            print(" ".join(f.ljust(width) for f in row).rstrip())
