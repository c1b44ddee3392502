"""
Tests for review corpus loading.
"""

import random

import pytest

from errors import CorpusLoadError
from reviews import load_reviews, sample_review


def write(tmp_path, content):
    path = tmp_path / "reviews.tsv"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_filters_blank_rows(tmp_path):
    path = write(tmp_path, "text\tlabel\nA gripping film.\t1\n   \t0\n\t0\nIt's a \"classic\".\t1\n")
    reviews = load_reviews(path)
    assert reviews == ["A gripping film.", "It's a \"classic\"."]


def test_missing_text_column(tmp_path):
    path = write(tmp_path, "sentence\tlabel\nhello\t1\n")
    with pytest.raises(CorpusLoadError, match="text"):
        load_reviews(path)


def test_missing_file(tmp_path):
    with pytest.raises(CorpusLoadError):
        load_reviews(tmp_path / "nope.tsv")


def test_empty_file(tmp_path):
    with pytest.raises(CorpusLoadError):
        load_reviews(write(tmp_path, ""))


def test_sample_review_from_corpus():
    reviews = ["one", "two", "three"]
    assert sample_review(reviews, random.Random(1)) in reviews


def test_sample_review_empty():
    with pytest.raises(CorpusLoadError, match="No reviews available"):
        sample_review([])


def test_row_with_extra_field_is_skipped(tmp_path, caplog):
    path = write(tmp_path, "text\texpected\ngood film\tpositive\nhas\textra\ttab\nbad film\tnegative\n")

    with caplog.at_level("WARNING", logger="reviews"):
        reviews = load_reviews(path)

    assert reviews == ["good film", "bad film"]
    assert "Skipping malformed row" in caplog.text
