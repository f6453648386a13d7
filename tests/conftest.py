from collections import Counter

import pytest

from speller import models
from speller.candidates import CandidateGenerator
from speller.confusion import ConfusionModel
from speller.lexicon import LexiconModel
from speller.search import SentenceSearcher

CORPUS = [
    "this assay allowed us to measure a wide variety of conditions",
    "at the home locations there were traces of water",
    "the development of diabetes is present in mice that carry a transgene",
]

# One edit away from corpus words
DISTRACTORS = ["he", "me"]


def corpus_counts(sentences, weight=3):
    counts = Counter()
    for sentence in sentences:
        words = sentence.split()
        for w in words:
            counts[w] += weight
        for a, b in zip(words, words[1:]):
            counts[f"{a} {b}"] += weight
    return counts


@pytest.fixture
def lexicon():
    vocabulary = {w for s in CORPUS for w in s.split()} | set(DISTRACTORS)
    return LexiconModel(vocabulary, corpus_counts(CORPUS))


@pytest.fixture
def confusion():
    return ConfusionModel({})


@pytest.fixture
def generator(lexicon, confusion):
    return CandidateGenerator(lexicon, confusion, alphabet="abcdefghijklmnopqrstuvwxyz'", in_vocabulary_prior=0.95)


@pytest.fixture
def searcher(lexicon, generator):
    return SentenceSearcher(
        lexicon,
        generator,
        max_corrections=2,
        early_exit_corrections=2,
        noisy_channel_weight=0.5,
        bigram_weight=1.0,
    )


@pytest.fixture
def installed(searcher):
    models.set_searcher(searcher)
    yield searcher
    models.set_searcher(None)
