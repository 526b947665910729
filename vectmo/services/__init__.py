"""
Vectmo services: alphabet, histogram embeddings, transition table,
vocabulary, generator, snapper and the model facade tying them together.
"""

from .alphabet import ALPHABET, ALPHABET_SIZE, Alphabet
from .embedding import cosine_similarity, embed
from .errors import (
    ConfigurationError,
    EmptyInputError,
    EmptyModelError,
    InvalidInputError,
    ModelIOError,
    NoContinuationError,
    VectmoError,
)
from .generator import GenerationTrace, Generator
from .model import Prediction, TrainingSummary, VectmoModel, get_vectmo_model
from .snapper import Snapper
from .transitions import TransitionTable
from .vocabulary import SimilarityMatch, Vocabulary

__all__ = [
    "ALPHABET",
    "ALPHABET_SIZE",
    "Alphabet",
    "cosine_similarity",
    "embed",
    "ConfigurationError",
    "EmptyInputError",
    "EmptyModelError",
    "InvalidInputError",
    "ModelIOError",
    "NoContinuationError",
    "VectmoError",
    "GenerationTrace",
    "Generator",
    "Prediction",
    "TrainingSummary",
    "VectmoModel",
    "get_vectmo_model",
    "Snapper",
    "TransitionTable",
    "SimilarityMatch",
    "Vocabulary",
]
