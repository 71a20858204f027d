"""Module for dictionary management in Quartiles.

All runtime queries are made against a `Dictionary`, a prefix tree of words.  A dictionary
can be read from a plain word list (one word per line) or from a compact binary file produced
by a previous run.
"""

import struct
import zlib
from collections.abc import Iterable, Iterator
from os import PathLike
from pathlib import Path

from loguru import logger

DICT_MAGIC = b"QDIC"
"""Leading bytes of every binary dictionary file."""

DICT_VERSION = 1
"""Version of the binary dictionary format written by `Dictionary.serialize_to_file`."""

_HEADER = struct.Struct("<4sHI")
"""Binary header: magic, format version, number of words."""


class DictionaryLoadError(Exception):
    """Exception raised when a dictionary cannot be read from disk."""

    def __init__(self, path: PathLike | str, reason: str, *, corrupt: bool = False) -> None:
        super().__init__(f"Failed to load dictionary {path}: {reason}")
        self.path = Path(path)
        """Path of the offending file."""

        self.corrupt = corrupt
        """True if the file was read but its content is malformed."""


class TrieNode:
    """A single node of the prefix tree."""

    __slots__ = ("children", "is_word")

    def __init__(self) -> None:
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Dictionary:
    """A set of words, stored as a prefix tree.

    Besides exact membership, the tree answers whether *any* stored word starts with a given
    prefix, which is what lets the solver abandon a fragment path as soon as it leads nowhere.
    Every node other than the root lies on the path to at least one word, so reaching a node
    is the same as the prefix being viable.
    """

    def __init__(self) -> None:
        self.root = TrieNode()
        self._size = 0

    @classmethod
    def build_from(cls, words: Iterable[str]) -> "Dictionary":
        """Create a dictionary holding the given words."""
        dictionary = cls()
        dictionary.populate(words)
        return dictionary

    def insert(self, word: str) -> None:
        """Add a word to the dictionary.  The empty string is ignored.

        Raises:
            ValueError: If the word contains a line break, which the binary format uses
                as its separator.
        """
        if "\n" in word or "\r" in word:
            raise ValueError(f"Words cannot contain line breaks: {word!r}")
        if not word:
            return
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        if not node.is_word:
            node.is_word = True
            self._size += 1

    def populate(self, words: Iterable[str]) -> None:
        """Add every word from `words` to the dictionary."""
        for word in words:
            self.insert(word)

    def _find(self, prefix: str) -> TrieNode | None:
        node = self.root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def contains(self, word: str) -> bool:
        """Check if the dictionary contains exactly `word`."""
        node = self._find(word)
        return node is not None and node.is_word

    def contains_prefix(self, prefix: str) -> bool:
        """Check if the dictionary contains some word starting with `prefix`.

        The empty prefix is viable if and only if the dictionary is non-empty.
        """
        if not prefix:
            return self._size > 0
        return self._find(prefix) is not None

    def is_empty(self) -> bool:
        """Check if the dictionary holds no words."""
        return self._size == 0

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[str]:
        """Iterate over the stored words in sorted order."""
        stack: list[tuple[str, TrieNode]] = [("", self.root)]
        while stack:
            prefix, node = stack.pop()
            if node.is_word:
                yield prefix
            # Push in reverse so the smallest child is popped first
            for ch in sorted(node.children, reverse=True):
                stack.append((prefix + ch, node.children[ch]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dictionary):
            return NotImplemented
        return len(self) == len(other) and all(other.contains(word) for word in self)

    def __repr__(self) -> str:
        return f"Dictionary({len(self)} words)"

    @classmethod
    def read_from_file(cls, path: PathLike | str) -> "Dictionary":
        """Construct a dictionary from a plain word list.

        Args:
            path: A text file with one word per line.  Words are stripped and lower-cased;
                blank lines are skipped.

        Raises:
            DictionaryLoadError: If the file cannot be opened or read.
        """
        path = Path(path)
        try:
            with path.open("r", encoding="ascii") as f:
                return cls.build_from(
                    stripped.lower() for line in f if (stripped := line.strip())
                )
        except UnicodeDecodeError as e:
            raise DictionaryLoadError(path, f"not an ASCII word list ({e})", corrupt=True) from e
        except OSError as e:
            raise DictionaryLoadError(path, str(e)) from e

    def to_bytes(self) -> bytes:
        """Serialize the dictionary to the binary dictionary format."""
        payload = "\n".join(self).encode("utf-8")
        return _HEADER.pack(DICT_MAGIC, DICT_VERSION, len(self)) + zlib.compress(payload)

    @classmethod
    def from_bytes(cls, data: bytes, *, path: PathLike | str = "<bytes>") -> "Dictionary":
        """Deserialize a dictionary produced by `to_bytes`.

        Raises:
            DictionaryLoadError: If `data` is not a well-formed binary dictionary.
        """
        if len(data) < _HEADER.size:
            raise DictionaryLoadError(path, "truncated header", corrupt=True)
        magic, version, count = _HEADER.unpack_from(data)
        if magic != DICT_MAGIC:
            raise DictionaryLoadError(path, "not a binary dictionary", corrupt=True)
        if version != DICT_VERSION:
            raise DictionaryLoadError(path, f"unsupported format version {version}", corrupt=True)
        try:
            payload = zlib.decompress(data[_HEADER.size :]).decode("utf-8")
        except (zlib.error, UnicodeDecodeError) as e:
            raise DictionaryLoadError(path, f"bad payload ({e})", corrupt=True) from e

        words = payload.split("\n") if payload else []
        if len(words) != count:
            raise DictionaryLoadError(
                path, f"expected {count} words, found {len(words)}", corrupt=True
            )
        try:
            dictionary = cls.build_from(words)
        except ValueError as e:
            raise DictionaryLoadError(path, str(e), corrupt=True) from e
        if len(dictionary) != count:
            raise DictionaryLoadError(path, "duplicate or empty words in payload", corrupt=True)
        return dictionary

    def serialize_to_file(self, path: PathLike | str) -> None:
        """Write the dictionary to `path` in the binary dictionary format.

        Raises:
            OSError: If the file cannot be written.
        """
        Path(path).write_bytes(self.to_bytes())

    @classmethod
    def deserialize_from_file(cls, path: PathLike | str) -> "Dictionary":
        """Read a dictionary written by `serialize_to_file`.

        Raises:
            DictionaryLoadError: If the file cannot be read or is malformed.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DictionaryLoadError(path, str(e)) from e
        return cls.from_bytes(data, path=path)


def open_dictionary(directory: PathLike | str, name: str) -> Dictionary:
    """Open the dictionary called `name` in `directory`.

    If a binary dictionary (`<name>.dict`) exists, it is read.  Otherwise the word list
    (`<name>.txt`) is read and a binary dictionary is written next to it to speed up future
    loads; failing to write that file is not an error.

    Args:
        directory: The directory to search.  Only this directory is searched.
        name: The dictionary name, sans extension.

    Raises:
        DictionaryLoadError: If neither file can be loaded.
    """
    directory = Path(directory)
    dict_path = directory / f"{name}.dict"
    if dict_path.exists():
        dictionary = Dictionary.deserialize_from_file(dict_path)
        logger.trace("Read binary dictionary: {}", dict_path)
        return dictionary

    txt_path = directory / f"{name}.txt"
    dictionary = Dictionary.read_from_file(txt_path)
    logger.trace("Read text dictionary: {}", txt_path)
    try:
        dictionary.serialize_to_file(dict_path)
    except OSError as e:
        logger.warning("Failed to write binary dictionary {}: {}", dict_path, e)
    else:
        logger.trace("Wrote binary dictionary: {}", dict_path)
    return dictionary
