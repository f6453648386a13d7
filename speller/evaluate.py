"""
Batch evaluation against reference corrections.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .errors import SpellerError
from .search import SentenceSearcher

logger = logging.getLogger(__name__)

# (input, reference)
DEFAULT_CASES: List[Tuple[str, str]] = [
    ("this assay allowed us to measure a wide variety of conditions",
     "this assay allowed us to measure a wide variety of conditions"),
    ("this assay allowed us to measure a wide variety of conitions",
     "this assay allowed us to measure a wide variety of conditions"),
    ("this assay allowed us to meassure a wide variety of conditions",
     "this assay allowed us to measure a wide variety of conditions"),
    ("this assay allowed us to measure a wide vareity of conditions",
     "this assay allowed us to measure a wide variety of conditions"),
    ("at the home locations there were traces of water",
     "at the home locations there were traces of water"),
    ("at the hme locations there were traces of water",
     "at the home locations there were traces of water"),
    ("at the hoome locations there were traces of water",
     "at the home locations there were traces of water"),
    ("at the home locasions there were traces of water",
     "at the home locations there were traces of water"),
    ("the development of diabetes is present in mice that carry a transgen",
     "the development of diabetes is present in mice that carry a transgene"),
    ("the development of diabetes is present in moce that carry a transgen",
     "the development of diabetes is present in mice that carry a transgene"),
    ("the development of idabetes is present in mice that carry a transgen",
     "the development of diabetes is present in mice that carry a transgene"),
    ("the development of diabetes us present in mice that harry a transgen",
     "the development of diabetes is present in mice that carry a transgene"),
]


@dataclass
class CaseResult:
    phrase: str
    reference: str
    answer: Optional[str] = None
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.answer == self.reference


@dataclass
class EvaluationReport:
    results: List[CaseResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def correct(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failures(self) -> List[CaseResult]:
        return [r for r in self.results if r.error is not None]

    @property
    def grade(self) -> str:
        return f"{self.correct}/{self.total}"


def evaluate(searcher: SentenceSearcher, cases: Iterable[Tuple[str, str]]) -> EvaluationReport:
    """Correct every input and compare with its reference. Errors count as misses."""
    report = EvaluationReport()
    for phrase, reference in cases:
        result = CaseResult(phrase, reference)
        try:
            result.answer = searcher.correct_phrase(phrase)
        except SpellerError as e:
            result.error = str(e)
            logger.warning(f"Correction failed for <{phrase}>: {e}")
        report.results.append(result)
    return report


def load_cases(path: Union[str, Path]) -> List[Tuple[str, str]]:
    """Read `input<TAB>reference` lines; lines without a tab are skipped."""
    cases = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            phrase, sep, reference = line.partition("\t")
            if not sep:
                logger.warning(f"{path}:{line_no}: no tab separator, skipped")
                continue
            cases.append((phrase.strip(), reference.strip()))
    return cases
