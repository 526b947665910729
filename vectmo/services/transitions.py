"""
First-order character transition table.

table[a][b] = number of times b followed a in the training text. Only pairs
where both characters belong to the alphabet are recorded, in training and in
persistence alike, so a save/load round trip is lossless.

On-disk format: one "<fromIndex> <toIndex> <count>" line per recorded pair.
"""
from __future__ import annotations

import logging
from collections import Counter, defaultdict
from pathlib import Path
from typing import Dict, List, Tuple

from .alphabet import ALPHABET
from .errors import ModelIOError

logger = logging.getLogger(__name__)


class TransitionTable:
    """
    Character -> follower -> count statistics.

    Followers are ranked by descending count; equal counts fall back to the
    alphabet index of the follower so ranking never depends on insertion
    order.
    """

    def __init__(self):
        self.table: Dict[str, Counter] = defaultdict(Counter)

    def __len__(self) -> int:
        return len(self.table)

    def __bool__(self) -> bool:
        return bool(self.table)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransitionTable):
            return NotImplemented
        return self.to_triples() == other.to_triples()

    @property
    def pair_count(self) -> int:
        """Number of distinct (from, to) pairs."""
        return sum(len(c) for c in self.table.values())

    @property
    def total(self) -> int:
        """Total number of counted transitions."""
        return sum(sum(c.values()) for c in self.table.values())

    def clear(self):
        self.table = defaultdict(Counter)

    def record(self, from_char: str, to_char: str, count: int = 1):
        """Add `count` observations of to_char following from_char."""
        if from_char not in ALPHABET or to_char not in ALPHABET:
            return
        self.table[from_char][to_char] += count

    def train(self, text: str) -> "TransitionTable":
        """
        Rebuild the table from raw text.

        Any previous contents are discarded, never merged.
        """
        self.clear()
        for a, b in zip(text, text[1:]):
            self.record(a, b)
        return self

    def has_transitions(self, char: str) -> bool:
        counter = self.table.get(char)
        return bool(counter)

    def counts(self, char: str) -> Dict[str, int]:
        return dict(self.table.get(char, {}))

    def top_followers(self, char: str) -> List[str]:
        """Followers of `char`, most frequent first."""
        counter = self.table.get(char)
        if not counter:
            return []
        ranked = sorted(
            counter.items(),
            key=lambda item: (-item[1], ALPHABET.index_of(item[0])),
        )
        return [c for c, _ in ranked]

    def to_triples(self) -> List[Tuple[int, int, int]]:
        """(fromIndex, toIndex, count) triples in index order."""
        triples = []
        for from_char, counter in self.table.items():
            from_idx = ALPHABET.index_of(from_char)
            if from_idx is None:
                continue
            for to_char, count in counter.items():
                to_idx = ALPHABET.index_of(to_char)
                if to_idx is None or count <= 0:
                    continue
                triples.append((from_idx, to_idx, count))
        triples.sort()
        return triples

    def to_text(self) -> str:
        """Serialised form written by `save`: one "from to count" line per pair."""
        return "".join(f"{f} {t} {c}\n" for f, t, c in self.to_triples())

    def save(self, path: Path):
        """
        Write the table to `path`, replacing any existing file.

        Raises:
            ModelIOError: if the file cannot be written
        """
        path = Path(path)
        try:
            path.write_text(self.to_text(), encoding="ascii")
        except (OSError, UnicodeError) as e:
            raise ModelIOError(path, e) from e
        logger.debug(f"[TRANSITIONS] Saved {self.pair_count} pairs to {path}")

    def load(self, path: Path) -> bool:
        """
        Load a table written by `save`.

        Triples with an index outside the alphabet are skipped. Reading stops
        at the first token that is not an integer.

        Returns:
            False if the file cannot be opened or holds no usable triple;
            the current table is left untouched in that case.
        """
        path = Path(path)
        try:
            with path.open("r", encoding="ascii", errors="replace") as f:
                tokens = f.read().split()
        except OSError as e:
            logger.warning(f"[TRANSITIONS] Cannot open {path}: {e}")
            return False

        loaded: Dict[str, Counter] = defaultdict(Counter)
        any_read = False
        for i in range(0, len(tokens) - 2, 3):
            try:
                from_idx, to_idx, count = (int(t) for t in tokens[i:i + 3])
            except ValueError:
                break
            if not (0 <= from_idx < len(ALPHABET) and 0 <= to_idx < len(ALPHABET)):
                continue
            if count <= 0:
                continue
            loaded[ALPHABET.char_at(from_idx)][ALPHABET.char_at(to_idx)] = count
            any_read = True

        if not any_read:
            return False

        self.table = loaded
        return True


def train_from_text(text: str) -> TransitionTable:
    table = TransitionTable()
    table.train(text)
    return table
