"""
Input text wrapper with the adjacency and word-boundary checks the engine
needs on every match attempt.
"""

from typing import List


def _char_class(char: str) -> str:
    if char.isalpha():
        return "c"
    if char.isdigit():
        return "d"
    return char


class Document:
    """
    The text being parsed plus a precomputed table of the first
    non-whitespace position at or after each offset.

    Args:
        text: input text; offsets everywhere are indices into it.
    """

    def __init__(self, text: str):
        self.text = text
        self._first_non_space = self._build_first_non_space(text)

    @staticmethod
    def _build_first_non_space(text: str) -> List[int]:
        table = [len(text)] * (len(text) + 1)
        following = len(text)
        for index in range(len(text) - 1, -1, -1):
            if not text[index].isspace():
                following = index
            table[index] = following
        return table

    def __len__(self) -> int:
        return len(self.text)

    def first_non_space(self, position: int) -> int:
        """First offset >= ``position`` that is not whitespace (or the text length)."""
        if position >= len(self.text):
            return len(self.text)
        return self._first_non_space[position]

    def is_valid_range(self, start: int, end: int) -> bool:
        """
        A match may not begin or end inside a run of letters or a run of
        digits, so "thirty" is never found inside "thirtyfive" and "3" is
        never found inside "13".
        """
        if start >= end:
            return False
        text = self.text
        if start > 0 and _char_class(text[start - 1]) == _char_class(text[start]) \
                and _is_word_char(text[start]):
            return False
        if end < len(text) and _char_class(text[end - 1]) == _char_class(text[end]) \
                and _is_word_char(text[end]):
            return False
        return True


def _is_word_char(char: str) -> bool:
    return char.isalpha() or char.isdigit()
