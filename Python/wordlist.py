#Bradford Arrington 2025
import sys
from bisect import bisect_left
from typing import BinaryIO, Iterable, List, Optional, Tuple, Union

# Longest and shortest words allowed in a word file.
WORD_MAX = 20
WORD_MIN = 2

# Every code has to fit in 9 bits.
MAX_LISTLEN = 512

# Characters allowed in words and in text being packed.
TAB = 9
NEWLINE = 10
CARRIAGE = 13
BOTTOM_RANGE = 32
CYCLE = 95   # printable values from BOTTOM_RANGE through '~'

VALID_CHARS = frozenset([TAB, NEWLINE, CARRIAGE] + list(range(BOTTOM_RANGE, BOTTOM_RANGE + CYCLE)))

UNUSED = -1


class FatalConfigError(Exception):
    """The word file is malformed or describes an impossible word list."""


class FatalInputError(Exception):
    """The text being packed holds a byte outside the 98 valid characters."""

    def __init__(self, character: int, position: int):
        super().__init__(f"Invalid character code: {character:X}")
        self.character = character
        self.position = position


def valid_char(ch: int) -> bool:
    return ch in VALID_CHARS


class WordList:
    """
    Sorted table of words.  The 98 single characters are always present,
    so every valid byte has a code.  Once sort_and_freeze() has run, the
    index of each word is its code and the table doesn't change again.
    """

    def __init__(self):
        self.words: List[bytes] = []
        self.frozen = False
        self.add_valid_chars()

    def __len__(self) -> int:
        return len(self.words)

    def add_valid_chars(self):
        for ch in (TAB, NEWLINE, CARRIAGE):
            self.words.append(bytes([ch]))
        for i in range(CYCLE):
            self.words.append(bytes([BOTTOM_RANGE + i]))

    def insert(self, word: Union[bytes, str]):
        if self.frozen:
            raise RuntimeError("Word list is already sorted, it can't take new words")
        if isinstance(word, str):
            try:
                word = word.encode("latin-1")
            except UnicodeEncodeError as e:
                raise FatalConfigError(f"Invalid word file: {word!r} is not plain text") from e
        word = bytes(word)

        if len(word) < WORD_MIN or len(word) > WORD_MAX:
            raise FatalConfigError(f"Invalid word file: word length {len(word)} not in {WORD_MIN}..{WORD_MAX}")
        for ch in word:
            if not valid_char(ch):
                raise FatalConfigError(f"Invalid word file: character code {ch:X} in {word!r}")

        self.words.append(word)
        if len(self.words) > MAX_LISTLEN:
            raise FatalConfigError(f"Invalid word file: more than {MAX_LISTLEN} words")

    def sort_and_freeze(self):
        # Repeated words stay in the table and keep their slots; lookups
        # find the first copy.
        self.words.sort()
        self.frozen = True

    def binary_search(self, key: bytes) -> int:
        index = bisect_left(self.words, key)
        if index < len(self.words) and self.words[index] == key:
            return index
        return UNUSED

    def best_code(self, text: bytes, pos: int = 0) -> int:
        """
        Code of the longest word that matches text starting at pos.  Each
        candidate length from WORD_MAX down to 1 gets an exact binary search;
        the first hit wins.
        """
        if not self.frozen:
            raise RuntimeError("Word list has to be sorted before lookups")
        if not valid_char(text[pos]):
            raise FatalInputError(text[pos], pos)

        for length in range(min(WORD_MAX, len(text) - pos), 0, -1):
            code = self.binary_search(bytes(text[pos:pos + length]))
            if code != UNUSED:
                return code
        # single characters are always in the list
        raise RuntimeError(f"No code for character {text[pos]:X}")

    def longest_match(self, text: bytes, pos: int = 0) -> Tuple[bytes, int]:
        code = self.best_code(text, pos)
        return self.words[code], code

    def word(self, code: int) -> bytes:
        if code < 0 or code >= len(self.words):
            raise IndexError(f"Code {code} is outside the word list ({len(self.words)} words)")
        return self.words[code]

    def dump(self, out=None):
        """Report the entire contents of the word list."""
        out = out or sys.stdout
        print("---- word list -----", file=out)
        for i, word in enumerate(self.words):
            print(f"{i} == {word.decode('latin-1')!r}", file=out)
        print("--------------------", file=out)


def parse_word_list(stream: BinaryIO, word_list: WordList) -> int:
    """
    Read "<length> <word>" records from stream into word_list.  The length
    is followed by one separator byte, then exactly `length` bytes of word,
    which may hold spaces or newlines themselves.  Returns the word count.
    """
    data = stream.read()
    pos = 0
    count = 0
    while True:
        while pos < len(data) and data[pos:pos + 1].isspace():
            pos += 1
        if pos >= len(data):
            break

        start = pos
        while pos < len(data) and data[pos:pos + 1].isdigit():
            pos += 1
        if start == pos:
            raise FatalConfigError(f"Invalid word file: expected a word length at byte {start}")
        word_length = int(data[start:pos])
        if word_length < WORD_MIN or word_length > WORD_MAX:
            raise FatalConfigError(f"Invalid word file: word length {word_length} at byte {start}")

        # Skip a single separator
        pos += 1
        word = data[pos:pos + word_length]
        if len(word) != word_length:
            raise FatalConfigError(f"Invalid word file: truncated word at byte {start}")
        word_list.insert(word)
        pos += word_length
        count += 1
    return count


def build_word_list(words: Optional[Iterable[Union[bytes, str]]] = None) -> WordList:
    word_list = WordList()
    for word in words or ():
        word_list.insert(word)
    word_list.sort_and_freeze()
    return word_list


def read_word_list(fname: str) -> WordList:
    try:
        word_file = open(fname, "rb")
    except OSError as e:
        raise FatalConfigError(f"Can't open word file: {fname}") from e

    word_list = WordList()
    with word_file:
        parse_word_list(word_file, word_list)
    word_list.sort_and_freeze()
    return word_list
