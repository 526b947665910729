"""
Vocabulary store with cached histogram embeddings.

Words are the unique whitespace-delimited tokens of the training text. The
embedding matrix is rebuilt every time the word set changes, so lookups never
see a stale cache.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np

from .embedding import cosine_scores, embed, embed_many
from .errors import ModelIOError

logger = logging.getLogger(__name__)


@dataclass
class SimilarityMatch:
    """Nearest vocabulary word for a query token."""
    query: str
    word: str
    score: float


class Vocabulary:
    """
    Deduplicated word list, iterated in lexicographic order.

    Nearest-word lookup is a linear scan over the cached embedding matrix.
    """

    def __init__(self, words: Optional[Iterable[str]] = None):
        self.words: List[str] = []
        self._lookup: frozenset = frozenset()
        self.embeddings: np.ndarray = embed_many([])
        if words is not None:
            self._set_words(words)

    def __len__(self) -> int:
        return len(self.words)

    def __bool__(self) -> bool:
        return bool(self.words)

    def __contains__(self, word: object) -> bool:
        return word in self._lookup

    def __iter__(self):
        return iter(self.words)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vocabulary):
            return NotImplemented
        return self.words == other.words

    def _set_words(self, words: Iterable[str]):
        self.words = sorted({w for w in words if w})
        self._lookup = frozenset(self.words)
        self.embeddings = embed_many(self.words)

    def clear(self):
        self._set_words([])

    def build(self, text: str) -> "Vocabulary":
        """Replace the vocabulary with the whitespace-delimited tokens of `text`."""
        self._set_words(text.split())
        return self

    def to_text(self) -> str:
        """Serialised form written by `save`: one word per line."""
        return "".join(word + "\n" for word in self.words)

    def save(self, path: Path):
        """
        Write one word per line.

        Raises:
            ModelIOError: if the file cannot be written or a word has no
                UTF-8 form
        """
        path = Path(path)
        try:
            path.write_text(self.to_text(), encoding="utf-8")
        except (OSError, UnicodeError) as e:
            raise ModelIOError(path, e) from e
        logger.debug(f"[VOCAB] Saved {len(self.words)} words to {path}")

    def load(self, path: Path) -> bool:
        """
        Load a word list written by `save`; blank lines are skipped.

        Returns:
            False if the file cannot be opened or contains no words;
            the current vocabulary is left untouched in that case.
        """
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                words = [line.strip() for line in f]
        except OSError as e:
            logger.warning(f"[VOCAB] Cannot open {path}: {e}")
            return False

        words = [w for w in words if w]
        if not words:
            return False

        self._set_words(words)
        return True

    def most_similar(self, word: str) -> Optional[SimilarityMatch]:
        """
        Find the vocabulary word closest to `word` by histogram cosine.

        Ties on score go to the candidate whose length is closest to
        `word`; remaining ties keep the lexicographically first candidate.

        Returns:
            None only when the vocabulary is empty
        """
        if not self.words:
            return None

        scores = cosine_scores(embed(word), self.embeddings)
        target_len = len(word)

        best_idx = 0
        best_score = float(scores[0])
        for idx in range(1, len(self.words)):
            score = float(scores[idx])
            if score > best_score:
                best_idx, best_score = idx, score
            elif score == best_score:
                cand_gap = abs(len(self.words[idx]) - target_len)
                best_gap = abs(len(self.words[best_idx]) - target_len)
                if cand_gap < best_gap:
                    best_idx, best_score = idx, score

        return SimilarityMatch(query=word, word=self.words[best_idx], score=best_score)


def build_vocabulary(text: str) -> Vocabulary:
    return Vocabulary().build(text)
