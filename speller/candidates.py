"""
Candidate Generator - Single-Edit Noisy-Channel Candidates

Based on Peter Norvig's edits1 enumeration, but every in-vocabulary edit is
scored with the confusion model instead of word frequency.
"""
from typing import Dict, Optional

from .config import get_settings
from .confusion import ConfusionModel
from .lexicon import LexiconModel

BOUNDARY = " "


class CandidateGenerator:
    def __init__(
        self,
        lexicon: LexiconModel,
        confusion: ConfusionModel,
        alphabet: Optional[str] = None,
        in_vocabulary_prior: Optional[float] = None,
    ):
        settings = get_settings()
        self.lexicon = lexicon
        self.confusion = confusion
        self.alphabet = alphabet if alphabet is not None else settings.ALPHABET
        self.in_vocabulary_prior = (
            in_vocabulary_prior if in_vocabulary_prior is not None else settings.IN_VOCABULARY_PRIOR
        )

    def generate(self, word: str) -> Dict[str, float]:
        """
        All in-vocabulary words within one edit of `word`, mapped to their
        noisy-channel probability P(word | candidate).

        The word itself keeps the fixed prior when it is in the vocabulary.
        A candidate reachable by several edits keeps its highest probability.
        """
        candidates: Dict[str, float] = {}
        if self.lexicon.is_in_vocabulary(word):
            candidates[word] = self.in_vocabulary_prior

        def keep(candidate: str, observed: str, corrected: str):
            if candidate == word or not self.lexicon.is_in_vocabulary(candidate):
                return
            probability = self.confusion.error_probability(observed, corrected)
            if probability > candidates.get(candidate, 0.0):
                candidates[candidate] = probability

        splits = [(word[:i], word[i:]) for i in range(len(word) + 1)]

        # Insertion: the typist dropped `c`; context is the letter in front
        for left, right in splits:
            front = left[-1] if left else BOUNDARY
            for c in self.alphabet:
                keep(left + c + right, front, front + c)

        for left, right in splits:
            if not right:
                continue
            typed = right[0]

            # Substitution
            for c in self.alphabet:
                if c != typed:
                    keep(left + c + right[1:], typed, c)

            # Deletion: the typist added `typed`
            keep(left + right[1:], BOUNDARY + typed, BOUNDARY)

            # Transposition
            if len(right) > 1 and right[0] != right[1]:
                swapped = right[1] + right[0]
                keep(left + swapped + right[2:], right[:2], swapped)

        return candidates
