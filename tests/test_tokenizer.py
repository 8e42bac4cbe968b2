"""Tests for the whitespace tokenizer."""

from mysh.tokenizer import NO_COMMAND, tokenize


class TestTokenize:
    """Verify splitting of input lines."""

    def test_single_word(self) -> None:
        """A lone keyword is a single token."""
        assert tokenize("whereami") == ["whereami"]

    def test_runs_of_whitespace(self) -> None:
        """Tabs and repeated spaces all separate tokens."""
        assert tokenize("  run \t ls   -l ") == ["run", "ls", "-l"]

    def test_empty_line_yields_sentinel(self) -> None:
        """An empty line yields the no-command sentinel."""
        assert tokenize("") == [NO_COMMAND]

    def test_whitespace_line_yields_sentinel(self) -> None:
        """An all-whitespace line yields the no-command sentinel."""
        assert tokenize(" \t  ") == [NO_COMMAND]

    def test_no_quoting(self) -> None:
        """Quotes are ordinary characters."""
        assert tokenize('run echo "a b"') == ["run", "echo", '"a', 'b"']
