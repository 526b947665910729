"""
Vectmo model: character transition chain + vocabulary snapping (CPU-only).

Phase 1 walks the transition table greedily from the last character of the
input, avoiding short cycles. Phase 2 snaps every generated word to the
closest trained word by cosine similarity over character histograms.

Persistence uses three companion files sharing one base name:
    <base>.txt    transition triples
    <base>.words  vocabulary, one word per line
    <base>.vec    histogram of the whole training text (write-only dump)
"""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from vectmo.config import settings

from .embedding import embed
from .errors import (
    ConfigurationError,
    EmptyInputError,
    EmptyModelError,
    InvalidInputError,
    ModelIOError,
)
from .generator import Generator
from .snapper import Snapper
from .transitions import TransitionTable
from .vocabulary import SimilarityMatch, Vocabulary

logger = logging.getLogger(__name__)

TABLE_EXT = ".txt"
WORDS_EXT = ".words"
EMBEDDING_EXT = ".vec"


@dataclass
class TrainingSummary:
    """What a training call produced and where it was stored."""
    characters: int
    source_chars: int
    pairs: int
    words: int
    table_path: str
    words_path: str
    embedding_path: Optional[str] = None


@dataclass
class Prediction:
    """Full result of one prediction."""
    input: str
    seed: str
    raw: str
    text: str
    forced_moves: int = 0
    stop_reason: str = ""
    matches: List[SimilarityMatch] = field(default_factory=list)


class VectmoModel:
    """
    Owns one transition table and one vocabulary.

    Training builds new state off to the side and swaps it in under a lock,
    so concurrent predictions see either the old model or the new one.
    """

    def __init__(
        self,
        base_name: Optional[str] = None,
        model_dir: Optional[str] = None,
        window: Optional[int] = None,
        write_embedding_dump: Optional[bool] = None,
    ):
        """
        Initialize model.

        Args:
            base_name: Base file name for persistence (see set_base)
            model_dir: Directory holding the model files
            window: Cycle-detection window for generation
            write_embedding_dump: Write the <base>.vec dump on training
        """
        self.model_dir = Path(model_dir if model_dir is not None else settings.MODEL_DIR)
        self.window = settings.CYCLE_WINDOW if window is None else window
        self.write_embedding_dump = (
            settings.WRITE_EMBEDDING_DUMP if write_embedding_dump is None else write_embedding_dump
        )

        self.table = TransitionTable()
        self.vocabulary = Vocabulary()
        self.base_path: Optional[Path] = None
        self._lock = threading.RLock()

        if base_name is not None:
            self.set_base(base_name)

    # --- persistence targets ---
    def set_base(self, name: str):
        """
        Set the base name of the model files.

        The name is a plain file name inside model_dir; it may not be
        absolute, contain a path separator or NUL, or be "." or "..".

        Raises:
            ConfigurationError: if name is empty or not a plain file name
        """
        if not name or not name.strip():
            raise ConfigurationError("A base file name is required")
        separators = {"/", "\\", os.sep} | ({os.altsep} if os.altsep else set())
        if (
            Path(name).is_absolute()
            or any(sep in name for sep in separators)
            or name in (".", "..")
            or "\0" in name
        ):
            raise ConfigurationError(f"Base name must be a plain file name, got {name!r}")
        self.base_path = self.model_dir / name

    def _require_base(self) -> Path:
        if self.base_path is None:
            raise ConfigurationError("No base file name set; call set_base() first")
        return self.base_path

    def _path(self, ext: str) -> Path:
        base = self._require_base()
        return base.with_name(base.name + ext)

    @property
    def table_path(self) -> Path:
        return self._path(TABLE_EXT)

    @property
    def words_path(self) -> Path:
        return self._path(WORDS_EXT)

    @property
    def embedding_path(self) -> Path:
        return self._path(EMBEDDING_EXT)

    # --- training ---
    def train(self, text: str) -> TrainingSummary:
        """
        Rebuild the table and vocabulary from `text` and persist both.

        Both files are staged next to their targets and only renamed into
        place once every write succeeded, so a failed call leaves the stored
        model and the in-memory model as they were.

        Raises:
            ConfigurationError: no base name set
            EmptyInputError: empty training text
            InvalidInputError: text has no UTF-8 form (lone surrogates)
            ModelIOError: model files could not be written
        """
        table_path, words_path = self.table_path, self.words_path
        if not text:
            raise EmptyInputError("No training text provided")
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidInputError(
                f"Training text is not valid UTF-8 at position {e.start}"
            ) from e

        table = TransitionTable().train(text)
        vocabulary = Vocabulary().build(text)

        self._ensure_dir(table_path)

        with self._lock:
            self._store(table, vocabulary)
            logger.info(
                f"[PRETRAIN] Transition table saved to {table_path} "
                f"({len(table)} unique source characters)"
            )
            logger.info(f"[PRETRAIN] Word list saved ({len(vocabulary)} unique words)")

            embedding_path = None
            if self.write_embedding_dump:
                embedding_path = self._write_embedding_dump(text)

            self.table, self.vocabulary = table, vocabulary

        return TrainingSummary(
            characters=len(text),
            source_chars=len(table),
            pairs=table.pair_count,
            words=len(vocabulary),
            table_path=str(table_path),
            words_path=str(words_path),
            embedding_path=str(embedding_path) if embedding_path else None,
        )

    def _store(self, table: TransitionTable, vocabulary: Vocabulary):
        """Write the table and word list together: stage both, then rename both."""
        files = [
            (self.table_path, table.to_text(), "ascii"),
            (self.words_path, vocabulary.to_text(), "utf-8"),
        ]
        staged: List[Tuple[Path, Path]] = []
        try:
            for path, content, encoding in files:
                tmp_path = path.with_name(path.name + ".tmp")
                staged.append((tmp_path, path))
                try:
                    tmp_path.write_text(content, encoding=encoding)
                except (OSError, UnicodeError) as e:
                    raise ModelIOError(path, e) from e

            for tmp_path, path in staged:
                try:
                    os.replace(tmp_path, path)
                except OSError as e:
                    raise ModelIOError(path, e) from e
        finally:
            for tmp_path, _ in staged:
                if tmp_path.exists():
                    tmp_path.unlink()

    def _ensure_dir(self, path: Path):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ModelIOError(path.parent, e) from e

    def _write_embedding_dump(self, text: str) -> Optional[Path]:
        path = self.embedding_path
        vector = embed(text)
        try:
            with path.open("w", encoding="ascii") as f:
                f.write(" ".join(f"{v:g}" for v in vector) + "\n")
        except OSError as e:
            logger.warning(f"[PRETRAIN] Embedding dump skipped, cannot write {path}: {e}")
            return None
        logger.info(f"[PRETRAIN] Embedding written to {path}")
        return path

    # --- explicit persistence ---
    def save(self):
        """
        Persist the in-memory table and vocabulary.

        Raises:
            ConfigurationError: no base name set
            ModelIOError: model files could not be written
        """
        self._require_base()
        with self._lock:
            self._store(self.table, self.vocabulary)

    def load(self) -> bool:
        """
        Reload table and vocabulary from disk.

        Returns:
            True if the transition table was loaded. The vocabulary is
            optional; when absent the model predicts unsnapped text.
        """
        table_path, words_path = self.table_path, self.words_path
        table = TransitionTable()
        if not table.load(table_path):
            logger.warning(f"[LOAD] No transition table found at {table_path}")
            return False

        vocabulary = Vocabulary()
        if not vocabulary.load(words_path):
            logger.info(f"[LOAD] No word list found at {words_path}")

        with self._lock:
            self.table, self.vocabulary = table, vocabulary
        logger.info(f"[LOAD] Loaded {table.pair_count} pairs and {len(vocabulary)} words")
        return True

    def _snapshot(self) -> Tuple[TransitionTable, Vocabulary]:
        """Current (table, vocabulary), lazily loaded from disk if needed."""
        with self._lock:
            if not self.table:
                if self.base_path is None:
                    raise EmptyModelError()
                table = TransitionTable()
                if not table.load(self.table_path):
                    raise EmptyModelError()
                self.table = table
                logger.info(f"[LOAD] Transition table loaded from {self.table_path}")

            if not self.vocabulary and self.base_path is not None:
                vocabulary = Vocabulary()
                if vocabulary.load(self.words_path):
                    self.vocabulary = vocabulary
                    logger.info(f"[LOAD] {len(vocabulary)} words loaded from {self.words_path}")

            return self.table, self.vocabulary

    # --- prediction ---
    def predict_detailed(self, seed_text: str, max_chars: Optional[int] = None) -> Prediction:
        """
        Continue `seed_text` and snap the result to the vocabulary.

        Raises:
            EmptyInputError: empty seed text
            EmptyModelError: no trained or loadable transition table
            NoContinuationError: the seed character has no usable followers
        """
        if not seed_text:
            raise EmptyInputError()
        if max_chars is None:
            max_chars = settings.DEFAULT_MAX_CHARS

        table, vocabulary = self._snapshot()

        seed = seed_text[-1]
        logger.info(f"[PREDICT] Seed character: {seed!r} (0x{ord(seed):x})")

        trace = Generator(table, window=self.window).generate(seed, max_chars)
        logger.info(f'[PREDICT] Raw output: "{trace.text}"')

        text, matches = Snapper(vocabulary).snap_with_matches(trace.text)

        return Prediction(
            input=seed_text,
            seed=seed,
            raw=trace.text,
            text=text,
            forced_moves=trace.forced_moves,
            stop_reason=trace.stop_reason,
            matches=matches,
        )

    def predict(self, seed_text: str, max_chars: Optional[int] = None) -> str:
        return self.predict_detailed(seed_text, max_chars).text

    # --- embedding helpers ---
    def embed(self, text: str) -> np.ndarray:
        return embed(text)

    def most_similar(self, word: str) -> Optional[SimilarityMatch]:
        with self._lock:
            if not self.vocabulary and self.base_path is not None:
                vocabulary = Vocabulary()
                if vocabulary.load(self.words_path):
                    self.vocabulary = vocabulary
            vocabulary = self.vocabulary
        return vocabulary.most_similar(word)

    def status(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "base": str(self.base_path) if self.base_path else None,
                "trained": bool(self.table),
                "source_chars": len(self.table),
                "pairs": self.table.pair_count,
                "words": len(self.vocabulary),
                "window": self.window,
            }


# Singleton instance
_VECTMO_MODEL: Optional[VectmoModel] = None


def get_vectmo_model() -> VectmoModel:
    """Get or create the process-wide model configured from settings."""
    global _VECTMO_MODEL
    if _VECTMO_MODEL is None:
        _VECTMO_MODEL = VectmoModel(base_name=settings.MODEL_BASE_NAME)
    return _VECTMO_MODEL
