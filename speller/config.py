"""
Speller Configuration
"""
from functools import lru_cache
from pathlib import Path
from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Data files
    DATA_DIR: str = "data"
    VOCABULARY_FILE: str = "samplevoc.txt"
    NGRAM_FILE: str = "samplecnt.txt"
    CONFUSION_FILE: str = "confusion_matrix.txt"

    # Candidate generation
    ALPHABET: str = "abcdefghijklmnopqrstuvwxyz'"
    IN_VOCABULARY_PRIOR: float = 0.95  # "already correct"

    # Scoring (independent word pass)
    NOISY_CHANNEL_WEIGHT: float = 0.5
    BIGRAM_WEIGHT: float = 1.0

    # Search
    MAX_CORRECTIONS: int = 2  # marked positions per error mask
    EARLY_EXIT_CORRECTIONS: int = 2  # stop the word pass after this many fixes

    # Service
    LOG_LEVEL: str = "INFO"
    MAX_PHRASE_WORDS: int = 64

    @model_validator(mode="after")
    def check_search_bounds(self):
        # The word pass must stop before the initial error mask outgrows the search bound
        if self.EARLY_EXIT_CORRECTIONS > self.MAX_CORRECTIONS:
            raise ValueError(
                f"EARLY_EXIT_CORRECTIONS ({self.EARLY_EXIT_CORRECTIONS}) must not exceed "
                f"MAX_CORRECTIONS ({self.MAX_CORRECTIONS})"
            )
        return self

    class Config:
        env_file = ".env"

    @property
    def vocabulary_path(self) -> Path:
        return Path(self.DATA_DIR) / self.VOCABULARY_FILE

    @property
    def ngram_path(self) -> Path:
        return Path(self.DATA_DIR) / self.NGRAM_FILE

    @property
    def confusion_path(self) -> Path:
        return Path(self.DATA_DIR) / self.CONFUSION_FILE


@lru_cache()
def get_settings() -> Settings:
    return Settings()
