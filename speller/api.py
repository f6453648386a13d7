"""
Speller API - FastAPI Application
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException

from . import __version__
from . import models
from .config import get_settings
from .errors import InvalidArgument, NoCandidateFound
from .search import SentenceSearcher

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("speller")

# Set when the data files could not be loaded at startup
load_error: Optional[str] = None


# ============================================================
# LIFESPAN
# ============================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load models once before serving"""
    global load_error

    logger.info("📚 Loading speller models...")
    try:
        # Run in thread pool to avoid blocking the loop
        loop = asyncio.get_event_loop()
        searcher = await loop.run_in_executor(None, models.load_searcher)
        models.set_searcher(searcher)
        load_error = None
        logger.info("✅ Speller ready")
    except OSError as e:
        load_error = str(e)
        logger.error(f"❌ Failed to load models: {e}")

    yield

    models.set_searcher(None)


app = FastAPI(title="Speller", version=__version__, lifespan=lifespan)


def current_searcher() -> SentenceSearcher:
    """The loaded searcher, or 503 while models are unavailable"""
    searcher = models.loaded_searcher()
    if searcher is None:
        raise HTTPException(status_code=503, detail=load_error or "models not loaded")
    return searcher


def _normalize(phrase: str) -> str:
    words = phrase.lower().split()
    if not words:
        raise HTTPException(status_code=400, detail="phrase must be non-empty")
    if len(words) > settings.MAX_PHRASE_WORDS:
        raise HTTPException(
            status_code=400,
            detail=f"phrase has {len(words)} words, limit is {settings.MAX_PHRASE_WORDS}",
        )
    return " ".join(words)


# ============================================================
# ROUTES
# ============================================================
@app.get("/api/correct")
async def api_correct(q: str, searcher: SentenceSearcher = Depends(current_searcher)):
    """Correct a phrase"""
    phrase = _normalize(q)
    try:
        result = searcher.search(phrase)
        correction = result.unwrap()
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoCandidateFound as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "word": e.word, "position": e.position},
        )

    return {
        "input": phrase,
        "correction": correction,
        "changed": correction != phrase,
        "early_exit": result.early_exit,
        "corrected_positions": result.corrected_positions,
    }


@app.get("/api/candidates")
async def api_candidates(word: str, searcher: SentenceSearcher = Depends(current_searcher)):
    """Single-edit candidates for one word, most probable first"""
    word = word.strip().lower()
    if not word or " " in word:
        raise HTTPException(status_code=400, detail="expected a single word")

    candidates = searcher.generator.generate(word)
    ranked = sorted(candidates.items(), key=lambda kv: (-kv[1], kv[0]))
    return {
        "word": word,
        "in_vocabulary": searcher.lexicon.is_in_vocabulary(word),
        "candidates": [{"word": w, "probability": p} for w, p in ranked],
    }


# ============================================================
# HEALTH CHECK
# ============================================================
@app.get("/health")
async def health():
    """Health check endpoint"""
    searcher = models.loaded_searcher()
    return {
        "status": "ok" if searcher is not None else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "vocabulary_size": searcher.lexicon.vocabulary_size if searcher else 0,
        "error": load_error,
    }
