from dataclasses import dataclass


@dataclass(frozen=True)
class TextStatistics:
    """Surface counts the readability formulas are built from."""

    sentence_count: int
    word_count: int
    syllable_count: int
    complex_word_count: int


@dataclass(frozen=True)
class ReadabilityScores:
    """Reading-level scores; ``None`` means the text was too short to score."""

    reading_level: float | None = None
    gunning_fog: float | None = None
