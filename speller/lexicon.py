"""
Lexicon Model - Vocabulary + N-Gram Counts

Answers membership and add-one smoothed bigram queries. Built once at
startup and never mutated afterwards, so a single instance can be shared
across threads.
"""
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Set, Tuple, Union

from .errors import InvalidArgument, MalformedRecord

logger = logging.getLogger(__name__)


def parse_ngram_line(line: str, source: str = "<ngrams>", line_no: int = 0) -> Tuple[str, int]:
    """
    Parse one `<count> <ngram text>` record.

    Raises MalformedRecord when the count is not a non-negative integer or
    the n-gram text is missing.
    """
    record = line.strip()
    count_text, sep, ngram = record.partition(" ")
    ngram = ngram.strip()
    if not sep or not ngram:
        raise MalformedRecord(source, line_no, line, "missing n-gram text")
    try:
        count = int(count_text)
    except ValueError:
        raise MalformedRecord(source, line_no, line, f"bad count '{count_text}'")
    if count < 0:
        raise MalformedRecord(source, line_no, line, f"negative count {count}")
    # Collapse inner runs of whitespace so lookups use single spaces
    return " ".join(ngram.split()), count


class LexiconModel:
    """In-memory vocabulary set plus n-gram frequency table."""

    def __init__(self, vocabulary: Iterable[str], ngram_counts: Mapping[str, int]):
        self._vocabulary = frozenset(vocabulary)
        self._ngrams = MappingProxyType(dict(ngram_counts))

    @property
    def vocabulary_size(self) -> int:
        return len(self._vocabulary)

    @property
    def ngram_table_size(self) -> int:
        return len(self._ngrams)

    def is_in_vocabulary(self, word: str) -> bool:
        return word in self._vocabulary

    def known(self, words: Iterable[str]) -> Set[str]:
        """The subset of `words` that appear in the vocabulary."""
        return {w for w in words if w in self._vocabulary}

    def ngram_count(self, ngram: str) -> int:
        """
        Count of a space-separated n-gram, e.g. "adopted by".

        Returns 0 for an n-gram that was never seen.
        """
        if not ngram:
            raise InvalidArgument("NGram must be non-empty.")
        return self._ngrams.get(ngram, 0)

    def smoothed_bigram_count(self, bigram: str, candidate_left: bool) -> float:
        """
        Add-one smoothed conditional estimate for a bigram.

        (count(bigram) + 1) / (count(conditioning word) + 1), where the
        conditioning word is the one that is NOT the candidate: the right word
        when `candidate_left` is set, the left word otherwise.
        """
        words = bigram.split(" ") if bigram else []
        if len(words) != 2 or not all(words):
            raise InvalidArgument(f"NGram must be of length two: '{bigram}'")

        left, right = words
        conditioning = right if candidate_left else left
        return (self.ngram_count(bigram) + 1) / (self.ngram_count(conditioning) + 1)

    # ============================================================
    # LOADING
    # ============================================================
    @classmethod
    def from_files(cls, vocabulary_path: Union[str, Path], ngram_path: Union[str, Path]) -> "LexiconModel":
        vocabulary = load_vocabulary(vocabulary_path)
        ngrams = load_ngram_counts(ngram_path)
        model = cls(vocabulary, ngrams)
        logger.info(f"📚 Lexicon loaded: {model.vocabulary_size} words, {model.ngram_table_size} n-grams")
        return model


def load_vocabulary(path: Union[str, Path]) -> Set[str]:
    """One word per line; blank lines are ignored."""
    vocabulary = set()
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip()
            if word:
                vocabulary.add(word)
    return vocabulary


def load_ngram_counts(path: Union[str, Path]) -> Dict[str, int]:
    """Read `<count> <ngram>` lines, skipping (and logging) malformed ones."""
    counts: Dict[str, int] = {}
    skipped = 0
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                ngram, count = parse_ngram_line(line.rstrip("\r\n"), str(path), line_no)
            except MalformedRecord as e:
                skipped += 1
                logger.warning(f"Skipping n-gram record: {e}")
                continue
            counts[ngram] = count

    if skipped:
        logger.warning(f"⚠️ {skipped} malformed n-gram records skipped in {path}")
    return counts
