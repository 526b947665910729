"""
Tests for the batch train/predict script.
"""
import importlib.util
import logging
from pathlib import Path

import pytest

from vectmo.services.transitions import TransitionTable

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "vectmo_cli.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("vectmo_cli", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestCli:
    """Test suite for scripts/vectmo_cli.py."""

    def test_train_then_predict(self, cli, tmp_path, training_text, capsys):
        """Test the script trains from a file and prints a continuation."""
        corpus = tmp_path / "corpus.txt"
        corpus.write_text(training_text, encoding="utf-8")

        assert cli.main(["--model-dir", str(tmp_path), "train", "-i", str(corpus), "-b", "m"]) == 0
        assert (tmp_path / "m.txt").exists()

        assert cli.main(["--model-dir", str(tmp_path), "predict", "-b", "m", "-s", "the", "--max-chars", "12"]) == 0
        assert capsys.readouterr().out.strip()

    def test_missing_input(self, cli, tmp_path):
        """Test a missing training file exits with an error code."""
        assert cli.main(["--model-dir", str(tmp_path), "train", "-i", str(tmp_path / "nope.txt")]) == 1

    def test_predict_untrained(self, cli, tmp_path):
        """Test predicting without a stored model exits with an error code."""
        assert cli.main(["--model-dir", str(tmp_path), "predict", "-b", "m", "-s", "a"]) == 1

    def test_predict_without_word_list_warns(self, cli, tmp_path, capsys, caplog):
        """Test raw output is printed with a warning when no word list is stored."""
        TransitionTable().train("xyz").save(tmp_path / "m.txt")

        with caplog.at_level(logging.WARNING):
            assert cli.main(["--model-dir", str(tmp_path), "predict", "-b", "m", "-s", "x"]) == 0

        assert capsys.readouterr().out.strip() == "yz"
        assert "unsnapped" in caplog.text
