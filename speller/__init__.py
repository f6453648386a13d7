"""
Speller - Noisy-Channel Phrase Correction

A phrase corrector with:
- Character-edit error model (confusion matrix)
- Bigram language model with add-one smoothing
- Bounded error-mask search for real-word errors

Modules:
- api: FastAPI web application
- candidates: Single-edit candidate generation
- config: Settings (pydantic-settings)
- confusion: Confusion matrix model
- errors: Exception taxonomy
- evaluate: Batch evaluation against reference sentences
- lexicon: Vocabulary + n-gram counts
- models: Model loading and the shared searcher
- search: Sentence-level correction search
"""

__version__ = "1.0.0"
