"""
Tests for the character transition table.
"""
import pytest

from vectmo.services.alphabet import ALPHABET
from vectmo.services.errors import ModelIOError
from vectmo.services.transitions import TransitionTable, train_from_text

from conftest import write_lines


class TestTransitionTableTraining:
    """Test suite for building the table."""

    def test_initialization(self):
        """Test table starts empty."""
        table = TransitionTable()

        assert len(table) == 0
        assert table.pair_count == 0
        assert bool(table) == False

    def test_counts_adjacent_pairs(self):
        """Test every adjacent pair is counted."""
        table = TransitionTable().train("abab")

        assert table.counts("a") == {"b": 2}
        assert table.counts("b") == {"a": 1}
        assert table.total == 3

    def test_skips_unsupported_pairs(self):
        """Test pairs touching an unsupported character are not recorded."""
        table = TransitionTable().train("a\tb")

        assert table.has_transitions("a") == False
        assert table.has_transitions("\t") == False
        assert len(table) == 0

    def test_retrain_replaces(self):
        """Test training discards the previous table."""
        table = TransitionTable().train("xy")
        table.train("ab")

        assert table.has_transitions("x") == False
        assert table.counts("a") == {"b": 1}

    def test_retrain_idempotent(self, training_text):
        """Test training twice on the same text yields the same table."""
        first = train_from_text(training_text)
        second = train_from_text(training_text)
        second.train(training_text)

        assert first == second

    def test_single_character_text(self):
        """Test one character has no pairs."""
        assert len(TransitionTable().train("a")) == 0

    def test_record_ignores_unsupported(self):
        """Test record silently drops unsupported characters."""
        table = TransitionTable()
        table.record("a", "é")

        assert len(table) == 0


class TestTopFollowers:
    """Test suite for follower ranking."""

    def test_sorted_by_count(self):
        """Test followers come back most frequent first."""
        table = TransitionTable()
        table.record("a", "x", 1)
        table.record("a", "y", 5)
        table.record("a", "z", 3)

        assert table.top_followers("a") == ["y", "z", "x"]

    def test_ties_use_alphabet_index(self):
        """Test equal counts are ordered by alphabet index."""
        table = TransitionTable()
        table.record("a", " ", 2)
        table.record("a", "z", 2)
        table.record("a", "B", 2)
        table.record("a", "!", 2)

        assert table.top_followers("a") == ["!", "B", "z", " "]

    def test_unknown_character(self):
        """Test a character with no followers ranks nothing."""
        table = TransitionTable().train("ab")

        assert table.top_followers("q") == []
        assert table.has_transitions("b") == False


class TestTransitionTablePersistence:
    """Test suite for save/load."""

    def test_save_format(self, tmp_path):
        """Test one '<from> <to> <count>' line per pair."""
        path = tmp_path / "table.txt"
        TransitionTable().train("aab").save(path)

        lines = path.read_text().splitlines()
        a, b = ALPHABET.index_of("a"), ALPHABET.index_of("b")
        assert lines == [f"{a} {a} 1", f"{a} {b} 1"]

    def test_save_and_load(self, sample_table, tmp_path):
        """Test a round trip reproduces the table."""
        path = tmp_path / "table.txt"
        sample_table.save(path)

        loaded = TransitionTable()
        assert loaded.load(path) == True
        assert loaded == sample_table
        assert loaded.top_followers(" ") == sample_table.top_followers(" ")

    def test_newline_round_trip(self, tmp_path):
        """Test newline transitions survive persistence."""
        path = tmp_path / "table.txt"
        TransitionTable().train("a\nb").save(path)

        loaded = TransitionTable()
        loaded.load(path)
        assert loaded.counts("a") == {"\n": 1}
        assert loaded.counts("\n") == {"b": 1}

    def test_load_nonexistent_path(self, tmp_path):
        """Test loading a missing file fails without raising."""
        table = TransitionTable()

        assert table.load(tmp_path / "missing.txt") == False

    def test_load_empty_file(self, tmp_path):
        """Test an empty but readable file is a failure."""
        path = tmp_path / "empty.txt"
        path.write_text("")

        assert TransitionTable().load(path) == False

    def test_load_skips_out_of_range(self, tmp_path):
        """Test triples with indices outside the alphabet are skipped."""
        path = write_lines(tmp_path / "table.txt", ["96 0 4", "-1 3 2", "64 65 7", "0 200 1"])

        table = TransitionTable()
        assert table.load(path) == True
        assert table.to_triples() == [(64, 65, 7)]

    def test_load_only_invalid_rows(self, tmp_path):
        """Test a file where nothing is usable fails."""
        path = write_lines(tmp_path / "table.txt", ["100 100 1"])

        assert TransitionTable().load(path) == False

    def test_load_stops_at_garbage(self, tmp_path):
        """Test parsing stops at the first non-integer token."""
        path = write_lines(tmp_path / "table.txt", ["64 65 1", "oops", "65 66 1"])

        table = TransitionTable()
        assert table.load(path) == True
        assert table.to_triples() == [(64, 65, 1)]

    def test_failed_load_keeps_table(self, tmp_path):
        """Test a failed load leaves the current table untouched."""
        table = TransitionTable().train("ab")

        assert table.load(tmp_path / "missing.txt") == False
        assert table.counts("a") == {"b": 1}

    def test_save_unwritable(self, tmp_path):
        """Test write failures raise ModelIOError."""
        with pytest.raises(ModelIOError):
            TransitionTable().train("ab").save(tmp_path / "no_such_dir" / "table.txt")
