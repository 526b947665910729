"""
Tests for vocabulary snapping of generated text.
"""
from vectmo.services.snapper import Snapper, snap_to_vocabulary
from vectmo.services.vocabulary import Vocabulary


class TestSnapper:
    """Test suite for Snapper."""

    def test_empty_vocabulary_is_noop(self):
        """Test snapping without a vocabulary returns the input unchanged."""
        assert snap_to_vocabulary("xq zz  y", Vocabulary()) == "xq zz  y"

    def test_snaps_each_token(self):
        """Test every token is replaced by its nearest word."""
        vocab = Vocabulary().build("cat dog")

        assert snap_to_vocabulary("tac god", vocab) == "cat dog"

    def test_preserves_double_space(self):
        """Test consecutive spaces survive snapping."""
        vocab = Vocabulary().build("a b")

        assert snap_to_vocabulary("a  b", vocab) == "a  b"

    def test_preserves_leading_and_trailing_spaces(self):
        """Test edge spaces are reproduced exactly."""
        vocab = Vocabulary().build("cat")

        assert snap_to_vocabulary("  tca ", vocab) == "  cat "

    def test_only_spaces(self):
        """Test a run of spaces has nothing to snap."""
        vocab = Vocabulary().build("cat")

        assert snap_to_vocabulary("   ", vocab) == "   "

    def test_splits_on_space_only(self):
        """Test newlines stay inside a token instead of splitting it."""
        vocab = Vocabulary().build("ab")
        snapper = Snapper(vocab)

        snapped, matches = snapper.snap_with_matches("a\nb")

        assert snapped == "ab"
        assert len(matches) == 1
        assert matches[0].query == "a\nb"

    def test_matches_reported(self):
        """Test one match is reported per non-empty token."""
        vocab = Vocabulary().build("cat dog")

        snapped, matches = Snapper(vocab).snap_with_matches(" tac  dgo")

        assert snapped == " cat  dog"
        assert [m.word for m in matches] == ["cat", "dog"]
        assert all(0.0 <= m.score <= 1.0 for m in matches)

    def test_empty_string(self):
        """Test empty input snaps to empty output."""
        assert Snapper(Vocabulary().build("cat")).snap("") == ""
