"""Main solver module for Quartiles puzzles."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from time import monotonic, time
from typing import TextIO

from bitarray.util import zeros
from loguru import logger
from sortedcontainers import SortedSet

from quartiles.board import Board
from quartiles.dictionary import Dictionary
from quartiles.puzzle_config import PuzzleConfig
from quartiles.solver.config import config as solver_config
from quartiles.solver.fragment_path import FragmentPath, FragmentPathError, PathErrorKind
from quartiles.solver.utils import TIMESTAMP_FMT, int_comma, time_str

QUARTILES_PER_PUZZLE = 5
"""Number of distinct full-length words expected in the solution of an official puzzle."""


class Solver:
    """Iterative, resumable solver for a single board.

    The complete search context lives in the solver, so the search can be time-sliced:
    each call to `advance` resumes exactly where the previous one stopped.  A solver is
    meant to be driven by one caller at a time; the dictionary it holds is only read and
    may be shared between solvers.
    """

    def __init__(self, dictionary: Dictionary, board: Board) -> None:
        self.dictionary = dictionary
        """The dictionary used to recognize words and prune fragment paths."""

        self.board = board
        """The board being solved."""

        self.path: FragmentPath = FragmentPath.start(len(board))
        """The fragment path to examine next."""

        self.solution_entries: list[FragmentPath] = []
        """Fragment paths of the words found so far, in discovery order."""

        self.finished = False
        """Whether the search space has been exhausted."""

        self.iterations = 0
        """Number of fragment paths examined."""

    def is_finished(self) -> bool:
        """Check if the search has terminated by exhausting the search space."""
        return self.finished

    def is_solved(self) -> bool:
        """Check if the solver found a complete solution.

        The solution is complete once the search has finished, at least five distinct words
        use four fragments each, and those words between them use every fragment on the board.
        More than five such words are accepted, in case of an unofficial puzzle.
        """
        if not self.finished:
            return False

        full_paths = [p for p in self.solution_entries if p.is_full()]
        if len({self.word(p) for p in full_paths}) < QUARTILES_PER_PUZZLE:
            return False

        used = zeros(len(self.board))
        for path in full_paths:
            for index in path.occupied:
                used[index] = 1
        return used.all()

    def advance(self, time_budget: float) -> FragmentPath | None:
        """Run the search until a word is found or the time budget is spent.

        At least one fragment path is examined on every call, so progress is made even with a
        zero budget.  Calling this on a finished solver does nothing.

        Args:
            time_budget: Maximum time to spend, in seconds.

        Returns:
            The fragment path of the word just found, or None if time ran out or the search
            space is exhausted.
        """
        assert self.path.is_disjoint()
        if self.finished:
            logger.trace("solver is already finished")
            return None

        start_time = monotonic()
        while True:
            start_path = self.path
            word = self.word(start_path)
            self.iterations += 1
            logger.trace("considering: {}", word)

            found_word = self.dictionary.contains(word)
            if found_word:
                logger.debug("found word: {}", word)
                self.solution_entries.append(start_path)

            # Extend the path only while it can still lead to a word
            if self.dictionary.contains_prefix(word):
                try:
                    self.path = start_path.append()
                except FragmentPathError as e:
                    if e.kind is not PathErrorKind.OVERFLOW:
                        raise
                else:
                    logger.opt(lazy=True).trace(
                        "next after append: {} => {}", lambda: self.path, self.current_word
                    )

            if self.path == start_path:
                try:
                    self.path = start_path.increment()
                    logger.trace("next after increment: {}", self.path)
                except FragmentPathError as e:
                    if e.kind is not PathErrorKind.INDEX_OVERFLOW:
                        raise
                    try:
                        self.path = start_path.pop_and_increment()
                        logger.trace("next after pop and increment: {}", self.path)
                    except FragmentPathError as e2:
                        if e2.kind is not PathErrorKind.CANNOT_INCREMENT_EMPTY:
                            raise
                        logger.debug("exhausted search space")
                        self.finished = True
                        return None

            assert self.path != start_path, f"solver failed to make progress: {start_path}"

            if found_word:
                return start_path

            if monotonic() - start_time >= time_budget:
                logger.trace("time slice elapsed")
                return None

    def solve_fully(self) -> "Solver":
        """Run the search to completion and return the solver."""
        while not self.finished:
            self.advance(float("inf"))
        return self

    def word(self, path: FragmentPath) -> str:
        """The word spelled by `path` on this solver's board."""
        return path.word(self.board.fragments)

    def current_word(self) -> str:
        return self.word(self.path)

    def solution_paths(self) -> list[FragmentPath]:
        return list(self.solution_entries)

    def solution(self) -> list[str]:
        """The words found so far, in discovery order."""
        return [self.word(p) for p in self.solution_entries]

    def quartiles(self) -> list[str]:
        """The distinct words found so far that use four fragments, in discovery order."""
        return list(dict.fromkeys(self.word(p) for p in self.solution_entries if p.is_full()))

    def unique_words(self) -> SortedSet:
        """The distinct words found so far, sorted."""
        return SortedSet(self.solution())


def run(
    puzzle_config: PuzzleConfig,
    dictionary: Dictionary,
    *,
    time_slice: float | None = None,
    on_word: Callable[[str], None] | None = None,
) -> Solver:
    """Run the solver on the given configuration, writing a transcript to the log directory.

    Args:
        puzzle_config: The puzzle to solve.
        dictionary: The dictionary to solve against.
        time_slice: Budget (in seconds) for each call to `Solver.advance`.  Defaults to the
            configured value.
        on_word: Called with each word as it is discovered.

    Returns:
        The finished solver.
    """
    logfile = Path(solver_config.log_dir) / puzzle_config.name / f"{puzzle_config.index}.log"
    logfile.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Solving {} (log file: {})", puzzle_config, logfile)

    with open(logfile, "w", encoding="utf-8") as logf:
        try:
            return solve_one(
                puzzle_config,
                dictionary,
                logf=logf,
                time_slice=solver_config.time_slice if time_slice is None else time_slice,
                on_word=on_word,
            )
        except KeyboardInterrupt:
            print("Solver interrupted by user.", file=logf, flush=True)
            raise


def solve_one(
    puzzle_config: PuzzleConfig,
    dictionary: Dictionary,
    *,
    logf: TextIO,
    time_slice: float,
    on_word: Callable[[str], None] | None = None,
) -> Solver:
    """Solve a single board in time slices, logging progress to `logf`.

    Args:
        puzzle_config: The puzzle to solve.
        dictionary: The dictionary to solve against.
        logf: File object to log the solving process.
        time_slice: Budget (in seconds) for each call to `Solver.advance`.
        on_word: Called with each word as it is discovered.
    """
    board = puzzle_config.board()
    print(f"Selected puzzle: {puzzle_config.name}/{puzzle_config.index}", file=logf, flush=True)
    print(f"Dimensions: {puzzle_config.dims}", file=logf, flush=True)
    print(f"Dictionary: {int_comma(len(dictionary))} words", file=logf, flush=True)
    print("Board:", file=logf, flush=True)
    print("", file=logf, flush=True)
    for row in board.rows():
        print(" ".join(row), file=logf, flush=True)
    print("", file=logf, flush=True)

    start_time = time()
    start_time_str = datetime.fromtimestamp(start_time).astimezone().strftime(TIMESTAMP_FMT)
    print(f"Start time: {start_time_str}", file=logf, flush=True)

    solver = Solver(dictionary, board)
    n_slices = 0
    while not solver.is_finished():
        path = solver.advance(time_slice)
        n_slices += 1
        if path is not None:
            word = solver.word(path)
            print(
                f"{time_str(time() - start_time)}  {word:<16} {path}",
                file=logf,
                flush=True,
            )
            if on_word is not None:
                on_word(word)
        elif solver_config.report_interval and n_slices % solver_config.report_interval == 0:
            print(
                f"{time_str(time() - start_time)}  ... {int_comma(solver.iterations)} paths "
                f"examined, at {solver.path} ({solver.current_word()})",
                file=logf,
                flush=True,
            )

    print("", file=logf, flush=True)
    print(f"Paths examined: {int_comma(solver.iterations)}", file=logf, flush=True)
    print(f"Words found: {int_comma(len(solver.solution_entries))}", file=logf, flush=True)
    print(f"Quartiles: {', '.join(solver.quartiles())}", file=logf, flush=True)
    print(f"Time taken: {time_str(time() - start_time)}", file=logf, flush=True)
    if solver.is_solved():
        print("Solution found!", file=logf, flush=True)
    else:
        print("No solution found.", file=logf, flush=True)
    return solver
