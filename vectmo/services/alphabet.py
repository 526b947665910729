"""
Fixed character alphabet shared by the embedder and the transition table.

96 supported characters: every visible ASCII character from '!' to '~' in
code-point order, then space, then newline. Anything else is "unsupported"
and is silently skipped by callers.
"""
from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple


SUPPORTED_CHARS: Tuple[str, ...] = tuple(chr(c) for c in range(0x21, 0x7F)) + (" ", "\n")

ALPHABET_SIZE = len(SUPPORTED_CHARS)  # 96


class Alphabet:
    """
    Bijective mapping between supported characters and [0, 96).

    Lookups are O(1): the reverse table is built once at import time.
    """

    __slots__ = ("_chars", "_index")

    def __init__(self, chars: Iterable[str] = SUPPORTED_CHARS):
        self._chars: Tuple[str, ...] = tuple(chars)
        self._index: Dict[str, int] = {c: i for i, c in enumerate(self._chars)}
        if len(self._index) != len(self._chars):
            raise ValueError("alphabet characters must be distinct")

    def __len__(self) -> int:
        return len(self._chars)

    def __iter__(self):
        return iter(self._chars)

    def __contains__(self, char: object) -> bool:
        return char in self._index

    def index_of(self, char: str) -> Optional[int]:
        """Return the index of `char`, or None when it is unsupported."""
        return self._index.get(char)

    def char_at(self, index: int) -> str:
        """
        Return the character stored at `index`.

        Raises:
            IndexError: if index is outside [0, len(alphabet))
        """
        if not 0 <= index < len(self._chars):
            raise IndexError(f"alphabet index out of range: {index}")
        return self._chars[index]

    def is_supported(self, char: str) -> bool:
        return char in self._index


# Process-wide constant
ALPHABET = Alphabet()
