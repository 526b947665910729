"""
Shared pytest fixtures for Vectmo tests.
"""
from pathlib import Path

import pytest

from vectmo.services.model import VectmoModel
from vectmo.services.transitions import TransitionTable
from vectmo.services.vocabulary import Vocabulary


SAMPLE_TRAINING_TEXT = (
    "the cat sat on the mat\n"
    "the dog sat on the log\n"
    "a cat and a dog are friends"
)


@pytest.fixture
def training_text() -> str:
    """Small multi-line training corpus."""
    return SAMPLE_TRAINING_TEXT


@pytest.fixture
def sample_vocabulary(training_text) -> Vocabulary:
    """Vocabulary built from the sample corpus."""
    return Vocabulary().build(training_text)


@pytest.fixture
def sample_table(training_text) -> TransitionTable:
    """Transition table built from the sample corpus."""
    return TransitionTable().train(training_text)


@pytest.fixture
def two_cycle_table() -> TransitionTable:
    """a -> b and b -> a, nothing else."""
    table = TransitionTable()
    table.record("a", "b")
    table.record("b", "a")
    return table


@pytest.fixture
def model(tmp_path) -> VectmoModel:
    """Untrained model writing into a temporary directory."""
    return VectmoModel(base_name="vectmo_test", model_dir=str(tmp_path))


@pytest.fixture
def trained_model(model, training_text) -> VectmoModel:
    """Model trained on the sample corpus."""
    model.train(training_text)
    return model


# Helper functions for tests


def write_lines(path: Path, lines) -> Path:
    """Helper to write a text file line by line."""
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return path
