"""
Vocabulary snapping for generated text.

Raw output is split on single spaces only, every non-empty token is replaced
by its nearest vocabulary word, and the pieces are joined back with single
spaces so runs of spaces (and leading/trailing ones) survive unchanged.
"""
from __future__ import annotations

import logging
from typing import List, Tuple

from .vocabulary import SimilarityMatch, Vocabulary

logger = logging.getLogger(__name__)


class Snapper:
    def __init__(self, vocabulary: Vocabulary):
        self.vocabulary = vocabulary

    def snap_with_matches(self, raw: str) -> Tuple[str, List[SimilarityMatch]]:
        """Snap `raw` and report the match chosen for each non-empty token."""
        if not self.vocabulary:
            return raw, []

        segments = raw.split(" ")
        matches: List[SimilarityMatch] = []
        for i, segment in enumerate(segments):
            if not segment:
                continue
            match = self.vocabulary.most_similar(segment)
            logger.debug(f'[SIM] "{segment}" -> "{match.word}" (cosine={match.score:.4f})')
            segments[i] = match.word
            matches.append(match)

        return " ".join(segments), matches

    def snap(self, raw: str) -> str:
        return self.snap_with_matches(raw)[0]


def snap_to_vocabulary(raw: str, vocabulary: Vocabulary) -> str:
    return Snapper(vocabulary).snap(raw)
