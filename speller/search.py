"""
Sentence Search - Noisy Channel + Bigram Phrase Correction

Pipeline: tokenize -> flag out-of-vocabulary words -> independent word pass
(with early exit) -> enumerate error masks -> build and score one corrected
sentence per mask -> pick the best.

Error masks are plain ints: bit i set means word i is hypothesized wrong.
"""
import math
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .candidates import CandidateGenerator
from .config import get_settings
from .errors import InvalidArgument, NoCandidateFound
from .lexicon import LexiconModel

logger = logging.getLogger(__name__)

# Noisy probability of a word the sentence keeps as typed
UNCHANGED = 1.0


# ============================================================
# ERROR MASKS
# ============================================================
def mask_positions(mask: int) -> List[int]:
    """Marked positions of a mask, ascending."""
    positions = []
    i = 0
    while mask:
        if mask & 1:
            positions.append(i)
        mask >>= 1
        i += 1
    return positions


def mask_from_positions(positions) -> int:
    mask = 0
    for i in positions:
        mask |= 1 << i
    return mask


def enumerate_error_masks(length: int, initial: int = 0, max_corrections: int = 2) -> List[int]:
    """
    Every mask reachable from `initial` by marking one more position at a
    time, where a newly marked position is never next to a marked one and
    growth stops at `max_corrections` marks.

    The initial mask is always included as given. With the default early exit
    after two fixes it marks at most one position; adjacent marks in it are
    only possible when the word pass is allowed three or more fixes.
    Returned in ascending bitmask order, which is also the tie-breaking order
    of the search.
    """
    seen = {initial}
    stack = [initial]
    while stack:
        mask = stack.pop()
        if bin(mask).count("1") >= max_corrections:
            continue
        for i in range(length):
            bit = 1 << i
            if mask & bit:
                continue
            if i > 0 and mask & (bit >> 1):
                continue
            if i < length - 1 and mask & (bit << 1):
                continue
            extended = mask | bit
            if extended not in seen:
                seen.add(extended)
                stack.append(extended)
    return sorted(seen)


# ============================================================
# RESULT TYPES
# ============================================================
@dataclass
class CandidatePick:
    word: str
    probability: float
    score: float


@dataclass
class CorrectedSentence:
    words: List[str]
    noisy_probs: List[float]
    mask: int = 0

    @property
    def text(self) -> str:
        return " ".join(self.words).strip()


@dataclass
class CorrectionResult:
    """
    Outcome of one correction request.

    Either `correction` is set, or `failure` says which word had no
    candidate. `early_exit` marks a partial correction from the word pass.
    """
    phrase: str
    correction: Optional[str] = None
    early_exit: bool = False
    failure: Optional[NoCandidateFound] = None
    mask: Optional[int] = None
    score: Optional[float] = None
    corrected_positions: List[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> str:
        if self.failure is not None:
            raise self.failure
        return self.correction


# ============================================================
# SEARCHER
# ============================================================
class SentenceSearcher:
    def __init__(
        self,
        lexicon: LexiconModel,
        generator: CandidateGenerator,
        max_corrections: Optional[int] = None,
        early_exit_corrections: Optional[int] = None,
        noisy_channel_weight: Optional[float] = None,
        bigram_weight: Optional[float] = None,
    ):
        settings = get_settings()
        self.lexicon = lexicon
        self.generator = generator
        self.max_corrections = settings.MAX_CORRECTIONS if max_corrections is None else max_corrections
        self.early_exit_corrections = (
            settings.EARLY_EXIT_CORRECTIONS if early_exit_corrections is None else early_exit_corrections
        )
        self.noisy_channel_weight = (
            settings.NOISY_CHANNEL_WEIGHT if noisy_channel_weight is None else noisy_channel_weight
        )
        self.bigram_weight = settings.BIGRAM_WEIGHT if bigram_weight is None else bigram_weight
        if self.early_exit_corrections > self.max_corrections:
            raise InvalidArgument(
                f"early_exit_corrections ({self.early_exit_corrections}) must not exceed "
                f"max_corrections ({self.max_corrections})"
            )

    def correct_phrase(self, phrase: str) -> str:
        """
        Most probable correction of `phrase`, single-space joined.

        Raises InvalidArgument for an empty phrase and NoCandidateFound when a
        flagged word has nothing within one edit.
        """
        return self.search(phrase).unwrap()

    def search(self, phrase: str) -> CorrectionResult:
        if phrase is None or not phrase.strip():
            raise InvalidArgument("phrase must be non-empty.")

        words = phrase.split()
        known = self.lexicon.known(words)
        flagged = [i for i, w in enumerate(words) if w not in known]

        # 1. Independent pass over out-of-vocabulary words
        fixed = list(words)
        corrected = []
        for i in flagged:
            pick = self._pick_independent(fixed, i)
            if pick is None:
                return CorrectionResult(phrase, failure=NoCandidateFound(words[i], i))
            fixed[i] = pick.word
            corrected.append(i)
            if len(corrected) >= self.early_exit_corrections:
                logger.debug(f"Early exit after {len(corrected)} corrections: {fixed}")
                return CorrectionResult(
                    phrase,
                    correction=" ".join(fixed).strip(),
                    early_exit=True,
                    corrected_positions=corrected,
                )

        # 2. Error masks over the original words
        masks = enumerate_error_masks(len(words), mask_from_positions(flagged), self.max_corrections)

        # 3 + 4. One sentence per mask, keep the best
        picks: Dict[int, Optional[CandidatePick]] = {}
        best: Optional[CorrectedSentence] = None
        best_score = -math.inf
        for mask in masks:
            sentence, missing = self.build_sentence(words, mask, picks)
            if sentence is None:
                return CorrectionResult(phrase, failure=NoCandidateFound(words[missing], missing))
            score = self.score_sentence(sentence)
            logger.debug(f"mask={mask:b} score={score:.4f} {sentence.text}")
            if best is None or score > best_score:
                best, best_score = sentence, score

        return CorrectionResult(
            phrase,
            correction=best.text,
            mask=best.mask,
            score=best_score,
            corrected_positions=[i for i, (a, b) in enumerate(zip(words, best.words)) if a != b],
        )

    # ------------------------------------------------------------
    # Candidate picks
    # ------------------------------------------------------------
    def _neighbour_factors(self, words: List[str], i: int, candidate: str) -> Tuple[float, float]:
        left = right = 1.0
        if i > 0:
            left = self.lexicon.smoothed_bigram_count(f"{words[i - 1]} {candidate}", candidate_left=False)
        if i < len(words) - 1:
            right = self.lexicon.smoothed_bigram_count(f"{candidate} {words[i + 1]}", candidate_left=True)
        return left, right

    def _best_pick(self, words: List[str], i: int, scorer) -> Optional[CandidatePick]:
        candidates = self.generator.generate(words[i])
        best = None
        for candidate in sorted(candidates):
            probability = candidates[candidate]
            left, right = self._neighbour_factors(words, i, candidate)
            score = scorer(probability, left, right)
            if best is None or score > best.score:
                best = CandidatePick(candidate, probability, score)
        return best

    def _pick_independent(self, words: List[str], i: int) -> Optional[CandidatePick]:
        """0.5 * ln(noisy) + 1.0 * ln(left * right)"""
        return self._best_pick(
            words, i,
            lambda p, left, right: self.noisy_channel_weight * math.log(p)
            + self.bigram_weight * math.log(left * right),
        )

    def _pick_contextual(self, words: List[str], i: int) -> Optional[CandidatePick]:
        """ln(left) + ln(right) + ln(noisy)"""
        return self._best_pick(
            words, i,
            lambda p, left, right: math.log(left) + math.log(right) + math.log(p),
        )

    # ------------------------------------------------------------
    # Sentences
    # ------------------------------------------------------------
    def build_sentence(
        self,
        words: List[str],
        mask: int,
        picks: Optional[Dict[int, Optional[CandidatePick]]] = None,
    ) -> Tuple[Optional[CorrectedSentence], Optional[int]]:
        """
        Replace every marked word by its locally best candidate, judged
        against the original neighbours.

        Returns (sentence, None), or (None, position) for a marked position
        without candidates. `picks` caches choices across masks.
        """
        if picks is None:
            picks = {}
        out = list(words)
        probs = [UNCHANGED] * len(words)
        for i in mask_positions(mask):
            if i not in picks:
                picks[i] = self._pick_contextual(words, i)
            pick = picks[i]
            if pick is None:
                return None, i
            out[i] = pick.word
            probs[i] = pick.probability
        return CorrectedSentence(out, probs, mask), None

    def bigram_log_likelihood(self, words: List[str]) -> float:
        return sum(
            math.log(self.lexicon.smoothed_bigram_count(f"{a} {b}", candidate_left=False))
            for a, b in zip(words, words[1:])
        )

    def score_sentence(self, sentence: CorrectedSentence) -> float:
        """ln(bigram likelihood) + sum of ln(noisy) over changed positions."""
        noisy = sum(math.log(p) for p in sentence.noisy_probs if p != UNCHANGED)
        return self.bigram_log_likelihood(sentence.words) + noisy
