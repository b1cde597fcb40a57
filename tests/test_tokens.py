"""Tests for corpus loading."""

import pytest

from sedcluster.core.tokens import Corpus, TokenSequence, load_corpus
from sedcluster.errors import InputNotFoundError, InvalidIndexError


class TestTokenSequence:

    def test_from_line_splits_on_whitespace(self):
        seq = TokenSequence.from_line("a b  c\n")
        assert seq.tokens == ("a", "b", "c")
        assert len(seq) == 3
        assert str(seq) == "a b c"

    def test_blank_line_is_empty(self):
        assert len(TokenSequence.from_line("")) == 0
        assert len(TokenSequence.from_line("   ")) == 0


class TestCorpus:

    def test_one_based_indexing(self):
        corpus = Corpus.from_lines(["a b c", "a b d", "x y z"])
        assert len(corpus) == 3
        assert corpus.get(1).tokens == ("a", "b", "c")
        assert corpus.get(3).tokens == ("x", "y", "z")

    def test_index_below_one_rejected(self):
        corpus = Corpus.from_lines(["a"])
        with pytest.raises(InvalidIndexError):
            corpus.get(0)

    def test_index_past_end(self):
        corpus = Corpus.from_lines(["a"])
        with pytest.raises(IndexError):
            corpus.get(2)

    def test_load_corpus(self, tmp_path):
        path = tmp_path / "traces.txt"
        path.write_text("a b c\n\nx y z\n")
        corpus = load_corpus(path)

        assert len(corpus) == 3
        assert len(corpus.get(2)) == 0
        assert corpus.get(3).tokens == ("x", "y", "z")

    def test_load_corpus_without_trailing_newline(self, tmp_path):
        path = tmp_path / "traces.txt"
        path.write_text("a b\nc d")
        assert len(load_corpus(path)) == 2

    def test_missing_corpus(self, tmp_path):
        with pytest.raises(InputNotFoundError) as exc_info:
            load_corpus(tmp_path / "missing.txt")
        assert exc_info.value.path.endswith("missing.txt")

    def test_form_feed_does_not_split_a_line(self, tmp_path):
        path = tmp_path / "traces.txt"
        path.write_text("open\x0cread close\nopen read close\n")
        corpus = load_corpus(path)

        assert len(corpus) == 2
        assert corpus.get(1).tokens == ("open", "read", "close")
        assert corpus.get(2).tokens == ("open", "read", "close")

    def test_unicode_line_separators_keep_line_numbers(self, tmp_path):
        path = tmp_path / "traces.txt"
        path.write_text("a b\x85c\nd\x1ce\nf\n", encoding="utf-8")
        corpus = load_corpus(path)

        assert len(corpus) == 3
        assert corpus.get(3).tokens == ("f",)

    def test_crlf_line_endings(self, tmp_path):
        path = tmp_path / "traces.txt"
        path.write_bytes(b"a b\r\nc d\r\n")
        corpus = load_corpus(path)

        assert len(corpus) == 2
        assert corpus.get(2).tokens == ("c", "d")

    def test_undecodable_corpus(self, tmp_path):
        path = tmp_path / "traces.txt"
        path.write_bytes(b"a \xff b\nc\n")
        with pytest.raises(InputNotFoundError) as exc_info:
            load_corpus(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
