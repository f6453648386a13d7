"""
Confusion Model - Character-Edit Error Counts

Stores how often an observed character sequence was typed for an intended
(corrected) one, e.g. `c|ct 36`: "ct" was typed as "c" 36 times. All
queries are add-one smoothed so no probability is ever zero.
"""
import logging
from collections import defaultdict
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Tuple, Union

from .errors import MalformedRecord

logger = logging.getLogger(__name__)

PAIR_SEPARATOR = "|"


def parse_confusion_line(line: str, source: str = "<confusion>", line_no: int = 0) -> Tuple[str, str, int]:
    """
    Parse one `<observed>|<corrected> <count>` record.

    Sequences may be or contain the space placeholder, so only the text after
    the last space is taken as the count and nothing is stripped.
    """
    space = line.rfind(" ")
    if space < 0:
        raise MalformedRecord(source, line_no, line, "missing count")

    key, count_text = line[:space], line[space + 1:]
    if PAIR_SEPARATOR not in key:
        raise MalformedRecord(source, line_no, line, f"missing '{PAIR_SEPARATOR}' in pair key")
    try:
        count = int(count_text)
    except ValueError:
        raise MalformedRecord(source, line_no, line, f"bad count '{count_text}'")
    if count < 0:
        raise MalformedRecord(source, line_no, line, f"negative count {count}")

    observed, _, corrected = key.partition(PAIR_SEPARATOR)
    return observed, corrected, count


class ConfusionModel:
    """(observed, corrected) -> count, plus per-corrected-sequence totals."""

    def __init__(self, confusion_counts: Mapping[Tuple[str, str], int]):
        self._confusion = MappingProxyType(dict(confusion_counts))

        totals: Dict[str, int] = defaultdict(int)
        for (_, corrected), count in self._confusion.items():
            totals[corrected] += count
        self._totals = MappingProxyType(dict(totals))

    def __len__(self) -> int:
        return len(self._confusion)

    def confusion_count(self, observed: str, corrected: str) -> int:
        """Smoothed count for the pair `observed|corrected`; always >= 1."""
        return self._confusion.get((observed, corrected), 0) + 1

    def sequence_total(self, corrected: str) -> int:
        """Smoothed sum of counts where `corrected` is the intended side; always >= 1."""
        return self._totals.get(corrected, 0) + 1

    def error_probability(self, observed: str, corrected: str) -> float:
        """P(observed | corrected), strictly positive."""
        return self.confusion_count(observed, corrected) / self.sequence_total(corrected)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ConfusionModel":
        counts: Dict[Tuple[str, str], int] = {}
        skipped = 0
        with open(path, "r", encoding="utf-8") as f:
            for line_no, raw in enumerate(f, start=1):
                line = raw.rstrip("\r\n")
                if not line:
                    continue
                try:
                    observed, corrected, count = parse_confusion_line(line, str(path), line_no)
                except MalformedRecord as e:
                    skipped += 1
                    logger.warning(f"Skipping confusion record: {e}")
                    continue
                counts[(observed, corrected)] = count

        if skipped:
            logger.warning(f"⚠️ {skipped} malformed confusion records skipped in {path}")
        model = cls(counts)
        logger.info(f"🔤 Confusion matrix loaded: {len(model)} pairs")
        return model
