"""Fragment paths: the solver's position in the space of fragment combinations.

A fragment path names up to `MAX_FRAGMENTS` distinct board indices, packed to the left.
The motions below walk every such combination in a fixed order, so a path doubles as a
resumable cursor: nothing but the current path is needed to find the next one.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

MAX_FRAGMENTS = 4
"""Maximum number of fragments that may be combined into a single word."""

BOARD_SIZE = 20
"""Number of fragments on an official board."""

Slots = tuple[int | None, int | None, int | None, int | None]


class PathErrorKind(Enum):
    """Reasons a motion cannot be applied to a fragment path."""

    OVERFLOW = "fragment path is already full"
    UNDERFLOW = "fragment path is already empty"
    INDEX_OVERFLOW = "fragment index is already at maximum"
    CANNOT_INCREMENT_EMPTY = "fragment path is empty"


class FragmentPathError(Exception):
    """Exception raised when a motion cannot be applied to a fragment path."""

    def __init__(self, kind: PathErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


@dataclass(frozen=True, slots=True)
class FragmentPath:
    """An ordered selection of up to four distinct fragment indices.

    Occupied slots come first; once a slot is vacant (`None`), so are all slots to its right.
    The all-vacant path is the terminal value of the enumeration.
    """

    slots: Slots = (None, None, None, None)
    """Fragment indices in slot order, right-padded with `None`."""

    universe: int = BOARD_SIZE
    """Number of fragments on the board; indices range over `range(universe)`."""

    def __post_init__(self) -> None:
        if len(self.slots) != MAX_FRAGMENTS:
            raise ValueError(f"A fragment path has exactly {MAX_FRAGMENTS} slots.")
        if self.universe <= 0:
            raise ValueError("The fragment universe must be non-empty.")

        occupied = self.occupied
        if any(index is None for index in self.slots[: len(occupied)]):
            raise ValueError(f"Occupied slots must come first: {self}")
        if len(set(occupied)) != len(occupied):
            raise ValueError(f"Fragment indices must be distinct: {self}")
        if any(not 0 <= index < self.universe for index in occupied):
            raise ValueError(f"Fragment indices must be below {self.universe}: {self}")

    @classmethod
    def start(cls, universe: int = BOARD_SIZE) -> "FragmentPath":
        """The first path of the enumeration: fragment 0 alone."""
        return cls((0, None, None, None), universe)

    @classmethod
    def of(cls, *indices: int, universe: int = BOARD_SIZE) -> "FragmentPath":
        """Build a path from its occupied indices, e.g. `FragmentPath.of(3, 1)`."""
        if len(indices) > MAX_FRAGMENTS:
            raise ValueError(f"At most {MAX_FRAGMENTS} indices are allowed.")
        padding = (None,) * (MAX_FRAGMENTS - len(indices))
        return cls(tuple(indices) + padding, universe)  # type: ignore[arg-type]

    @property
    def occupied(self) -> tuple[int, ...]:
        """The occupied fragment indices, in slot order."""
        return tuple(index for index in self.slots if index is not None)

    def __len__(self) -> int:
        return len(self.occupied)

    def is_empty(self) -> bool:
        return self.slots[0] is None

    def is_full(self) -> bool:
        return self.slots[-1] is not None

    def is_disjoint(self) -> bool:
        """Check that no fragment index is used twice."""
        occupied = self.occupied
        return len(set(occupied)) == len(occupied)

    def word(self, fragments: Sequence[str]) -> str:
        """Concatenate the fragments addressed by this path."""
        return "".join(fragments[index] for index in self.occupied)

    def _replace_at(self, position: int, value: int | None) -> "FragmentPath":
        slots = list(self.slots)
        slots[position] = value
        return FragmentPath(tuple(slots), self.universe)  # type: ignore[arg-type]

    def append(self) -> "FragmentPath":
        """Occupy the next slot with the smallest unused fragment index.

        Raises:
            FragmentPathError: `OVERFLOW` if every slot, or every fragment, is already used.
        """
        if self.is_full():
            raise FragmentPathError(PathErrorKind.OVERFLOW)
        used = set(self.occupied)
        start_index = 0
        while start_index in used:
            start_index += 1
        if start_index >= self.universe:
            raise FragmentPathError(PathErrorKind.OVERFLOW)
        return self._replace_at(len(used), start_index)

    def increment(self) -> "FragmentPath":
        """Advance the rightmost fragment index to the next index not used to its left.

        Raises:
            FragmentPathError: `CANNOT_INCREMENT_EMPTY` if the path is empty, or
                `INDEX_OVERFLOW` if no larger unused index remains.
        """
        if self.is_empty():
            raise FragmentPathError(PathErrorKind.CANNOT_INCREMENT_EMPTY)
        rightmost = len(self) - 1
        used = set(self.occupied[:rightmost])

        # Largest index the rightmost slot may hold
        stop_index = self.universe - 1
        while stop_index in used:
            stop_index -= 1

        current = self.slots[rightmost]
        assert current is not None
        while current < stop_index:
            current += 1
            if current not in used:
                return self._replace_at(rightmost, current)
        raise FragmentPathError(PathErrorKind.INDEX_OVERFLOW)

    def pop(self) -> "FragmentPath":
        """Vacate the rightmost occupied slot.

        Raises:
            FragmentPathError: `UNDERFLOW` if the path is already empty.
        """
        if self.is_empty():
            raise FragmentPathError(PathErrorKind.UNDERFLOW)
        return self._replace_at(len(self) - 1, None)

    def pop_and_increment(self) -> "FragmentPath":
        """Pop the rightmost slot and increment the new rightmost one, carrying as needed.

        Like carrying in positional counting: every slot that cannot be incremented is popped
        in turn, until one can be.

        Raises:
            FragmentPathError: `UNDERFLOW` if the path is already empty, or
                `CANNOT_INCREMENT_EMPTY` once every slot has been popped.
        """
        path = self
        while True:
            path = path.pop()
            try:
                return path.increment()
            except FragmentPathError as e:
                if e.kind is not PathErrorKind.INDEX_OVERFLOW:
                    raise

    def __str__(self) -> str:
        return "[" + ", ".join("_" if index is None else str(index) for index in self.slots) + "]"
