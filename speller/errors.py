"""
Speller exceptions.
"""


class SpellerError(Exception):
    """Base class for every error raised by the speller."""


class InvalidArgument(SpellerError, ValueError):
    """Empty phrase or malformed n-gram query."""


class NoCandidateFound(SpellerError, LookupError):
    """A flagged word has no in-vocabulary candidate within one edit."""

    def __init__(self, word: str, position: int):
        self.word = word
        self.position = position
        super().__init__(f"no suitable candidate for '{word}' at position {position}")


class MalformedRecord(SpellerError, ValueError):
    """A data-file line that could not be parsed. Only raised while loading."""

    def __init__(self, source: str, line_no: int, line: str, reason: str):
        self.source = source
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"{source}:{line_no}: {reason} <{line}>")
