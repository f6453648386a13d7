"""
Model registry - loads the lexicon and confusion matrix once and shares a
single SentenceSearcher.
"""
import logging
from typing import Optional

from .candidates import CandidateGenerator
from .config import Settings, get_settings
from .confusion import ConfusionModel
from .lexicon import LexiconModel
from .search import SentenceSearcher

logger = logging.getLogger(__name__)


def build_searcher(lexicon: LexiconModel, confusion: ConfusionModel, settings: Optional[Settings] = None) -> SentenceSearcher:
    """Wire a generator and searcher around already-loaded models."""
    settings = settings or get_settings()
    generator = CandidateGenerator(
        lexicon,
        confusion,
        alphabet=settings.ALPHABET,
        in_vocabulary_prior=settings.IN_VOCABULARY_PRIOR,
    )
    return SentenceSearcher(
        lexicon,
        generator,
        max_corrections=settings.MAX_CORRECTIONS,
        early_exit_corrections=settings.EARLY_EXIT_CORRECTIONS,
        noisy_channel_weight=settings.NOISY_CHANNEL_WEIGHT,
        bigram_weight=settings.BIGRAM_WEIGHT,
    )


def load_searcher(settings: Optional[Settings] = None) -> SentenceSearcher:
    """Load both models from the configured data files."""
    settings = settings or get_settings()
    logger.info(f"⏳ Loading models from {settings.DATA_DIR}...")
    lexicon = LexiconModel.from_files(settings.vocabulary_path, settings.ngram_path)
    confusion = ConfusionModel.from_file(settings.confusion_path)
    return build_searcher(lexicon, confusion, settings)


# Global singleton
_searcher: Optional[SentenceSearcher] = None


def get_searcher() -> SentenceSearcher:
    """Get or load the shared searcher"""
    global _searcher
    if _searcher is None:
        _searcher = load_searcher()
    return _searcher


def set_searcher(searcher: Optional[SentenceSearcher]):
    """Install (or with None, forget) the shared searcher."""
    global _searcher
    _searcher = searcher


def loaded_searcher() -> Optional[SentenceSearcher]:
    """The shared searcher if one is installed; never loads."""
    return _searcher
