import logging

import pytest

from speller.errors import InvalidArgument, MalformedRecord
from speller.lexicon import LexiconModel, load_ngram_counts, load_vocabulary, parse_ngram_line


def make_lexicon():
    return LexiconModel(
        {"the", "home", "locations"},
        {"the": 6, "home": 3, "locations": 3, "the home": 3, "home locations": 3},
    )


def test_membership():
    lexicon = make_lexicon()
    assert lexicon.is_in_vocabulary("home")
    assert not lexicon.is_in_vocabulary("hme")
    assert lexicon.known(["hme", "home", "the"]) == {"home", "the"}
    assert lexicon.vocabulary_size == 3


def test_missing_ngram_counts_zero():
    lexicon = make_lexicon()
    assert lexicon.ngram_count("the home") == 3
    assert lexicon.ngram_count("home the") == 0


def test_empty_ngram_rejected():
    with pytest.raises(InvalidArgument):
        make_lexicon().ngram_count("")


def test_smoothed_count_conditions_on_the_other_word():
    lexicon = make_lexicon()
    # candidate on the right: P(home | the)
    assert lexicon.smoothed_bigram_count("the home", candidate_left=False) == pytest.approx(4 / 7)
    # candidate on the left: conditioned on "home"
    assert lexicon.smoothed_bigram_count("the home", candidate_left=True) == pytest.approx(4 / 4)
    # unseen everything is still positive
    assert lexicon.smoothed_bigram_count("foo bar", candidate_left=False) == 1.0


@pytest.mark.parametrize("bigram", ["", "home", "the home locations", "the  home", " home"])
def test_smoothed_count_requires_two_words(bigram):
    with pytest.raises(InvalidArgument):
        make_lexicon().smoothed_bigram_count(bigram, candidate_left=True)


def test_parse_ngram_line():
    assert parse_ngram_line("36 adopted by") == ("adopted by", 36)
    assert parse_ngram_line("  7 the\n") == ("the", 7)


@pytest.mark.parametrize("line", ["abc the cat", "5", "-3 foo", "x"])
def test_parse_ngram_line_rejects_malformed(line):
    with pytest.raises(MalformedRecord):
        parse_ngram_line(line)


def test_load_from_files_skips_malformed(tmp_path, caplog):
    voc = tmp_path / "samplevoc.txt"
    voc.write_text("the\nhome\n\nlocations\n")
    cnt = tmp_path / "samplecnt.txt"
    cnt.write_text("6 the\nabc the home\n3 the home\n-1 home\n3 home locations\n")

    with caplog.at_level(logging.WARNING):
        lexicon = LexiconModel.from_files(voc, cnt)

    assert lexicon.vocabulary_size == 3
    assert lexicon.ngram_count("the home") == 3
    assert lexicon.ngram_count("home locations") == 3
    assert lexicon.ngram_count("home") == 0
    assert "abc the home" in caplog.text


def test_loaders_return_plain_collections(tmp_path):
    voc = tmp_path / "v.txt"
    voc.write_text("a\nb\n")
    cnt = tmp_path / "c.txt"
    cnt.write_text("2 a b\n")
    assert load_vocabulary(voc) == {"a", "b"}
    assert load_ngram_counts(cnt) == {"a b": 2}
