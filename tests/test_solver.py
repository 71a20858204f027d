import itertools

import pytest
from conftest import (
    BAMBOOZLE_WORDS,
    CROSSWORDS_BOARD,
    CROSSWORDS_WORDS,
    PermissiveDictionary,
)

from quartiles.board import Board
from quartiles.dictionary import Dictionary
from quartiles.solver.fragment_path import FragmentPath
from quartiles.solver.solver import Solver


def _brute_force(board: Board, dictionary: Dictionary) -> set[tuple[int, ...]]:
    return {
        perm
        for k in range(1, 5)
        for perm in itertools.permutations(range(len(board)), k)
        if dictionary.contains("".join(board[i] for i in perm))
    }


@pytest.mark.parametrize(
    ("board_fixture", "expected"),
    [("crosswords_board", CROSSWORDS_WORDS), ("bamboozle_board", BAMBOOZLE_WORDS)],
)
def test_solves_official_boards(request, english, board_fixture, expected):
    board = request.getfixturevalue(board_fixture)
    solver = Solver(english, board).solve_fully()
    assert solver.is_finished()
    assert solver.is_solved()
    solution = solver.solution()
    assert all(english.contains(word) for word in solution)
    assert set(expected) <= set(solution)
    assert len(solver.quartiles()) == 5


def test_crosswords_quartiles(english, crosswords_board):
    solver = Solver(english, crosswords_board).solve_fully()
    assert sorted(solver.quartiles()) == [
        "crosswords",
        "nihilistic",
        "razzmatazz",
        "refreshment",
        "truthfully",
    ]


def test_solution_matches_brute_force(english, crosswords_board):
    solver = Solver(english, crosswords_board).solve_fully()
    found = [p.occupied for p in solver.solution_paths()]
    assert len(found) == len(set(found))
    assert set(found) == _brute_force(crosswords_board, english)


def test_solution_is_in_enumeration_order(english, bamboozle_board):
    solver = Solver(english, bamboozle_board).solve_fully()
    found = [p.occupied for p in solver.solution_paths()]
    assert found == sorted(found)


def test_reduced_board_is_finished_but_not_solved(moon_dictionary):
    board = Board.from_fragments(["mo", "o", "d", "n", "t", "wh"])
    solver = Solver(moon_dictionary, board).solve_fully()
    assert solver.is_finished()
    assert not solver.is_solved()
    assert solver.solution() == ["mo", "moo", "mood", "moon", "moot"]
    assert solver.solution_paths()[2] == FragmentPath.of(0, 1, 2, universe=6)


def test_not_solved_before_finished(english, crosswords_board):
    solver = Solver(english, crosswords_board)
    while solver.advance(0.0) is None:
        pass
    assert not solver.is_finished()
    assert not solver.is_solved()


def test_advance_returns_each_word_once(moon_dictionary):
    board = Board.from_fragments(["mo", "o", "d", "n", "t", "wh"])
    solver = Solver(moon_dictionary, board)
    returned = []
    while not solver.is_finished():
        path = solver.advance(60.0)
        if path is not None:
            returned.append(solver.word(path))
    assert returned == ["mo", "moo", "mood", "moon", "moot"]


def test_zero_budget_makes_progress(moon_dictionary):
    board = Board.from_fragments(["x", "mo", "o"])
    solver = Solver(moon_dictionary, board)
    assert solver.path == FragmentPath.of(0, universe=3)

    # "x" is neither a word nor a prefix, so exactly one path is examined
    assert solver.advance(0.0) is None
    assert solver.iterations == 1
    assert solver.path == FragmentPath.of(1, universe=3)

    assert solver.advance(0.0) == FragmentPath.of(1, universe=3)
    assert solver.iterations == 2
    assert solver.path == FragmentPath.of(1, 0, universe=3)


def test_zero_budget_reaches_completion(english, bamboozle_board):
    sliced = Solver(english, bamboozle_board)
    calls = 0
    while not sliced.is_finished():
        sliced.advance(0.0)
        calls += 1
    # Each call examines exactly one path
    assert calls == sliced.iterations

    full = Solver(english, bamboozle_board).solve_fully()
    assert sliced.solution_paths() == full.solution_paths()
    assert sliced.iterations == full.iterations


def test_advance_after_finish_is_noop(english, crosswords_board):
    solver = Solver(english, crosswords_board).solve_fully()
    path, solution, iterations = solver.path, solver.solution_paths(), solver.iterations
    assert solver.advance(0.0) is None
    assert solver.advance(10.0) is None
    assert solver.path == path
    assert solver.solution_paths() == solution
    assert solver.iterations == iterations
    assert solver.is_finished()


def test_runs_are_deterministic(english, crosswords_board):
    first = Solver(english, crosswords_board).solve_fully()
    second = Solver(english, Board.from_fragments(CROSSWORDS_BOARD)).solve_fully()
    assert first.solution_paths() == second.solution_paths()
    assert first.solution() == second.solution()


def test_dictionary_is_shared_between_solvers(english, crosswords_board, bamboozle_board):
    size = len(english)
    first = Solver(english, crosswords_board)
    second = Solver(english, bamboozle_board)
    # Interleave the two searches
    while not (first.is_finished() and second.is_finished()):
        first.advance(0.0)
        second.advance(0.0)
    assert len(english) == size
    assert first.is_solved()
    assert second.is_solved()


def test_unpruned_search_visits_every_combination():
    board = Board.from_fragments(list("abcdefghijklmnopqrst"))
    solver = Solver(PermissiveDictionary(), board).solve_fully()  # type: ignore[arg-type]
    assert solver.iterations == 20 + 20 * 19 + 20 * 19 * 18 + 20 * 19 * 18 * 17
    assert solver.solution() == []


def test_pruning_only_reduces_visits(english, crosswords_board):
    solver = Solver(english, crosswords_board).solve_fully()
    assert solver.iterations < 123_520


def test_empty_dictionary_finishes_without_words(crosswords_board):
    solver = Solver(Dictionary(), crosswords_board).solve_fully()
    assert solver.is_finished()
    assert solver.solution() == []
    assert not solver.is_solved()
    # Nothing is a prefix, so only single fragments are examined
    assert solver.iterations == 20


def test_duplicate_fragments_are_distinct_combinations():
    dictionary = Dictionary.build_from(["ab", "abab"])
    board = Board.from_fragments(["ab", "ab", "c"])
    solver = Solver(dictionary, board).solve_fully()
    assert [p.occupied for p in solver.solution_paths()] == [(0,), (0, 1), (1,), (1, 0)]
    assert solver.solution() == ["ab", "abab", "ab", "abab"]
    assert list(solver.unique_words()) == ["ab", "abab"]


def test_is_solved_requires_full_coverage():
    # Five distinct four-fragment words that never use fragment 7
    fragments = ["a", "b", "c", "d", "e", "f", "g", "z"]
    words = ["abcd", "abce", "abcf", "abcg", "efgd"]
    solver = Solver(Dictionary.build_from(words), Board.from_fragments(fragments)).solve_fully()
    assert len(solver.quartiles()) == 5
    assert not solver.is_solved()

    solver = Solver(
        Dictionary.build_from(words + ["zabc"]), Board.from_fragments(fragments)
    ).solve_fully()
    assert solver.is_solved()
