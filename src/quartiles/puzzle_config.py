"""Loader for puzzle files.

A puzzle file holds one or more boards separated by blank lines.  Each board is written as
5 lines of 4 whitespace-separated fragments, in row-major order.  Lines starting with '#'
are comments.  For example::

    # 2024-06-01
    azz th ss tru
    ref fu ra nih
    cro mat wo sh
    re rds tic il
    lly zz is ment
"""

from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from quartiles.board import BOARD_COLS, BOARD_ROWS, Board, clean_fragment


@dataclass(frozen=True)
class PuzzleConfig:
    """A puzzle configuration."""

    name: str
    """The puzzle name, taken from the puzzle file name."""

    index: int
    """Position of this board within its puzzle file (0-based)."""

    dims: tuple[int, int]
    """The height and width of the board."""

    fragments: tuple[str, ...]
    """The board's fragments, in row-major order."""

    def __post_init__(self) -> None:
        """Validate and normalize the fragments."""
        height, width = self.dims
        if len(self.fragments) != height * width:
            raise ValueError(
                f"Expected {height * width} fragments for a {height}x{width} board, "
                f"got {len(self.fragments)}."
            )
        # Frozen dataclass, so bypass __setattr__
        object.__setattr__(self, "fragments", tuple(clean_fragment(f) for f in self.fragments))

    def __str__(self) -> str:
        """Return a string representation of the PuzzleConfig."""
        height, width = self.dims
        return f"{self.name}/{self.index} ({height}x{width}): {' '.join(self.fragments)}"

    def board(self) -> Board:
        """Build the board described by this configuration."""
        return Board(self.fragments, *self.dims)

    def to_dict(self) -> dict:
        """Return a dictionary representation of the PuzzleConfig for serialization."""
        return {
            "name": self.name,
            "index": self.index,
            "dims": self.dims,
            "fragments": list(self.fragments),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PuzzleConfig":
        """Create a PuzzleConfig instance from a dictionary representation."""
        return cls(
            name=data["name"],
            index=data["index"],
            dims=tuple(data["dims"]),
            fragments=tuple(data["fragments"]),
        )

    @classmethod
    def from_fragments(cls, fragments: list[str], *, name: str = "board") -> "PuzzleConfig":
        """Create a PuzzleConfig for a single official board given in row-major order."""
        return cls(name=name, index=0, dims=(BOARD_ROWS, BOARD_COLS), fragments=tuple(fragments))


def load_configs(configs_path: PathLike | str) -> list[PuzzleConfig]:
    """Load all boards from the puzzle file at the given path.

    Args:
        configs_path: Path to the puzzle file.

    Raises:
        ValueError: If a board is malformed.
        OSError: If the file cannot be read.
    """
    path = Path(configs_path)
    configs: list[PuzzleConfig] = []
    rows: list[list[str]] = []
    first_line = 0

    def _flush() -> None:
        if not rows:
            return
        if len(rows) != BOARD_ROWS:
            raise ValueError(
                f"{path}:{first_line}: expected {BOARD_ROWS} rows per board, got {len(rows)}."
            )
        fragments = tuple(fragment for row in rows for fragment in row)
        try:
            configs.append(
                PuzzleConfig(
                    name=path.stem,
                    index=len(configs),
                    dims=(BOARD_ROWS, BOARD_COLS),
                    fragments=fragments,
                )
            )
        except ValueError as e:
            raise ValueError(f"{path}:{first_line}: {e}") from None
        rows.clear()

    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            stripped = line.strip()
            if stripped.startswith("#"):
                continue
            if not stripped:
                _flush()
                continue
            row = stripped.split()
            if len(row) != BOARD_COLS:
                raise ValueError(
                    f"{path}:{line_no}: expected {BOARD_COLS} fragments per row, got {len(row)}."
                )
            if not rows:
                first_line = line_no
            rows.append(row)
    _flush()

    return configs
