import pytest
from loguru import logger

from quartiles.board import Board
from quartiles.dictionary import Dictionary

CROSSWORDS_BOARD = [
    "azz", "th", "ss", "tru",
    "ref", "fu", "ra", "nih",
    "cro", "mat", "wo", "sh",
    "re", "rds", "tic", "il",
    "lly", "zz", "is", "ment",
]  # fmt: skip

CROSSWORDS_WORDS = [
    "cross", "crosswords", "fully", "fuss", "fuzz", "is", "mat", "nihilistic", "rail",
    "rally", "rare", "rash", "razz", "razzmatazz", "recross", "ref", "refresh",
    "refreshment", "rewords", "this", "thrash", "thresh", "tic", "truss", "truth",
    "truthfully", "words", "wore",
]  # fmt: skip

BAMBOOZLE_BOARD = [
    "tab", "nch", "ec", "dis",
    "oo", "per", "mb", "ous",
    "cour", "le", "mar", "te",
    "zle", "su", "la", "ba",
    "ket", "del", "il", "chi",
]  # fmt: skip

BAMBOOZLE_WORDS = [
    "bail", "bale", "bamboo", "bamboozle", "bate", "chi", "chinchilla", "courteous",
    "delectable", "discourteous", "diskette", "lamb", "late", "leper", "market", "per",
    "peril", "perilous", "super", "supermarket", "tab", "table", "taboo",
]  # fmt: skip

# Words that cannot be formed on either board, so the dictionary is not a perfect fit
DISTRACTORS = ["apple", "banana", "crossbow", "tabulate", "zebra"]


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # Drop handlers bound to this test's captured stderr
    logger.remove()


@pytest.fixture
def moon_dictionary() -> Dictionary:
    return Dictionary.build_from(["mo", "moo", "mood", "moon", "moot", "why"])


@pytest.fixture
def english() -> Dictionary:
    return Dictionary.build_from(CROSSWORDS_WORDS + BAMBOOZLE_WORDS + DISTRACTORS)


@pytest.fixture
def crosswords_board() -> Board:
    return Board.from_fragments(CROSSWORDS_BOARD)


@pytest.fixture
def bamboozle_board() -> Board:
    return Board.from_fragments(BAMBOOZLE_BOARD)


class PermissiveDictionary:
    """Stand-in dictionary that never prunes and never matches."""

    def contains(self, word: str) -> bool:
        return False

    def contains_prefix(self, prefix: str) -> bool:
        return True
