#!/usr/bin/env python3
"""
Tests for the hirschberg and levenshtein command-line front ends.
"""

import io
import logging

import pytest
from hirschberg_align.cli import hirschberg_main, levenshtein_main, iter_line_pairs


class TestHirschbergCli:
    """Alignment front end."""

    def test_strings_from_arguments(self, capsys):
        """Two positional strings print both aligned rows."""
        assert hirschberg_main(["AC", "A"]) == 0
        assert capsys.readouterr().out == "AC\nA-\n"

    def test_custom_costs(self, capsys):
        """Cost options change the chosen alignment."""
        assert hirschberg_main(["--del", "-1", "--ins", "-1", "--sub", "-5", "A", "B"]) == 0
        assert capsys.readouterr().out == "-A\nB-\n"

    def test_strings_from_stdin(self, capsys, monkeypatch):
        """Line pairs from stdin; an unpaired last line is ignored."""
        monkeypatch.setattr("sys.stdin", io.StringIO("A\nA\n\nXYZ\nleftover\n"))
        assert hirschberg_main([]) == 0
        assert capsys.readouterr().out == "A\nA\n---\nXYZ\n"

    def test_single_string_is_usage_error(self, capsys):
        """Exactly zero or two strings are accepted."""
        with pytest.raises(SystemExit) as excinfo:
            hirschberg_main(["A"])
        assert excinfo.value.code == 2
        assert "expected 0 or 2 strings" in capsys.readouterr().err

    def test_malformed_cost_rejected(self, capsys):
        """Non-integer costs are rejected by the parser."""
        with pytest.raises(SystemExit) as excinfo:
            hirschberg_main(["--del", "x1", "A", "B"])
        assert excinfo.value.code == 2
        assert "invalid int value" in capsys.readouterr().err


class TestVerboseLogging:
    """The -v/--verbose flag turns on debug records from the package."""

    @pytest.fixture(autouse=True)
    def _reset_package_logger(self):
        yield
        logging.getLogger("hirschberg_align").setLevel(logging.NOTSET)

    def test_verbose_emits_debug(self, caplog, capsys):
        """Cost model and sequence sizes are logged at DEBUG."""
        assert hirschberg_main(["-v", "AC", "A"]) == 0
        assert capsys.readouterr().out == "AC\nA-\n"
        debug_messages = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert any(m.startswith("Cost model: CostModel(") for m in debug_messages)
        assert "Aligning sequences of length 2 and 1" in debug_messages

    def test_quiet_by_default(self, caplog):
        """Without the flag no debug records are emitted."""
        assert hirschberg_main(["AC", "A"]) == 0
        assert not [r for r in caplog.records if r.levelno == logging.DEBUG]


class TestLinePairs:
    """Pairing of stdin lines."""

    def test_pairs_and_newlines(self):
        """Trailing newlines are stripped from each line."""
        pairs = list(iter_line_pairs(["ab\n", "cd\r\n", "ef\n", "gh"]))
        assert pairs == [("ab", "cd"), ("ef", "gh")]

    def test_odd_line_dropped(self):
        """A lone final line yields nothing."""
        assert list(iter_line_pairs(["only\n"])) == []


class TestLevenshteinCli:
    """Distance / similarity front end."""

    def test_dist(self, capsys):
        """Integer distance."""
        assert levenshtein_main(["dist", "kitten", "sitting"]) == 0
        assert capsys.readouterr().out == "3\n"

    def test_simi(self, capsys):
        """Similarity printed with six significant digits."""
        assert levenshtein_main(["simi", "kitten", "sitting"]) == 0
        assert capsys.readouterr().out == "0.571429\n"

    def test_simi_identical(self, capsys):
        """Identical strings print 1."""
        assert levenshtein_main(["simi", "abc", "abc"]) == 0
        assert capsys.readouterr().out == "1\n"

    def test_unsupported_computation(self, capsys):
        """Unknown computation names are rejected."""
        with pytest.raises(SystemExit) as excinfo:
            levenshtein_main(["ratio", "a", "b"])
        assert excinfo.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_missing_argument(self):
        """Both strings are required."""
        with pytest.raises(SystemExit) as excinfo:
            levenshtein_main(["dist", "a"])
        assert excinfo.value.code == 2
