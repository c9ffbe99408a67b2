"""Flesch-Kincaid grade level and Gunning Fog index.

All functions are pure: the same text always yields the same scores. A text
with no complete sentence or no word cannot be scored and yields ``None``.
"""

import re
import unicodedata

from book_analyzer.readability.models import ReadabilityScores, TextStatistics

ABBREVIATIONS = frozenset({
    "mr", "mrs", "ms", "dr", "prof", "sr", "jr", "st", "mt", "vs", "rev", "hon",
    "gen", "col", "capt", "lt", "sgt", "gov", "sen", "rep", "inc", "ltd", "corp",
    "dept", "univ", "approx", "cf", "al", "fig", "vol", "ch", "pp", "eds",
})
COMPLEX_SYLLABLES = 3
INFLECTION_SUFFIXES = ("ing", "ed", "es")

# (lower bound, label), highest band first
GRADE_BANDS = (
    (17.0, "Graduate / Professional"),
    (13.0, "College"),
    (9.0, "High School"),
    (5.0, "Middle School"),
    (0.0, "Early Elementary School"),
)
FOG_BANDS = (
    (18.0, "Post-graduate / Professional"),
    (17.0, "College Graduate"),
    (13.0, "College"),
    (12.0, "High School Senior"),
    (9.0, "High School"),
    (8.0, "8th Grade"),
    (7.0, "7th Grade"),
    (6.0, "6th Grade"),
    (0.0, "Elementary School"),
)

_TERMINATOR_RE = re.compile(r"[.!?]+")
_WORD_RE = re.compile(r"\d+(?:[.,]\d+)+|[^\W_]+(?:['’\-][^\W_]+)*")
_TRAILING_LETTERS_RE = re.compile(r"[^\W\d_]+$")
_SILENT_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_VOWEL_GROUP_RE = re.compile(r"[aeiouyаеиоуыэюяієαεηιουω]+")
_LOOKBEHIND = 20


def count_syllables(word: str) -> int:
    """Estimate syllables from vowel groups.

    Accents are stripped before counting, so "résumé" scores like "resume".
    Scripts without a known vowel set count as one syllable per word.
    """
    decomposed = unicodedata.normalize("NFD", word.lower())
    letters = "".join(ch for ch in decomposed if ch.isalpha() and not unicodedata.combining(ch))
    if len(letters) <= 3:
        return 1
    letters = _SILENT_SUFFIX_RE.sub("", letters)
    if letters.startswith("y"):
        letters = letters[1:]
    return max(1, len(_VOWEL_GROUP_RE.findall(letters)))


def sentence_boundaries(text: str) -> list[int]:
    """Return the end offset of every complete sentence in ``text``."""
    boundaries: list[int] = []
    start = 0
    for match in _TERMINATOR_RE.finditer(text):
        if _is_false_boundary(text, match):
            continue
        if _WORD_RE.search(text, start, match.end()):
            boundaries.append(match.end())
        start = match.end()
    return boundaries


def text_statistics(text: str) -> TextStatistics:
    text = unicodedata.normalize("NFC", text)
    boundaries = sentence_boundaries(text)
    word_count = syllable_count = complex_count = 0
    next_boundary = 0
    sentence_start = True
    for match in _WORD_RE.finditer(text):
        while next_boundary < len(boundaries) and boundaries[next_boundary] <= match.start():
            next_boundary += 1
            sentence_start = True
        word = match.group()
        syllables = count_syllables(word)
        word_count += 1
        syllable_count += syllables
        if syllables >= COMPLEX_SYLLABLES and _is_complex(word, sentence_start):
            complex_count += 1
        sentence_start = False
    return TextStatistics(
        sentence_count=len(boundaries),
        word_count=word_count,
        syllable_count=syllable_count,
        complex_word_count=complex_count,
    )


def flesch_kincaid_grade(text: str) -> float | None:
    return _flesch_kincaid(text_statistics(text))


def gunning_fog_index(text: str) -> float | None:
    return _gunning_fog(text_statistics(text))


def score(text: str) -> ReadabilityScores:
    """Compute both reading-level scores from one pass over the text."""
    stats = text_statistics(text)
    return ReadabilityScores(
        reading_level=_flesch_kincaid(stats),
        gunning_fog=_gunning_fog(stats),
    )


def _flesch_kincaid(stats: TextStatistics) -> float | None:
    if stats.sentence_count == 0 or stats.word_count == 0:
        return None
    grade = (
        0.39 * (stats.word_count / stats.sentence_count)
        + 11.8 * (stats.syllable_count / stats.word_count)
        - 15.59
    )
    return max(0.0, grade)


def _gunning_fog(stats: TextStatistics) -> float | None:
    if stats.sentence_count == 0 or stats.word_count == 0:
        return None
    index = 0.4 * (
        (stats.word_count / stats.sentence_count)
        + 100 * (stats.complex_word_count / stats.word_count)
    )
    return max(0.0, index)


def reading_level_label(grade: float | None) -> str | None:
    """School band for a Flesch-Kincaid grade, e.g. "Middle School"."""
    return _band(grade, GRADE_BANDS)


def gunning_fog_label(index: float | None) -> str | None:
    """School band for a Gunning Fog index, e.g. "High School Senior"."""
    return _band(index, FOG_BANDS)


def _band(value: float | None, bands: tuple[tuple[float, str], ...]) -> str | None:
    if value is None:
        return None
    return next((label for floor, label in bands if value >= floor), bands[-1][1])


def _is_false_boundary(text: str, match: re.Match[str]) -> bool:
    """A lone period after an initial, an abbreviation or inside a number."""
    if match.group() != ".":
        return False
    start, end = match.start(), match.end()
    if text[start - 1:start].isdigit() and text[end:end + 1].isdigit():
        return True
    window = text[max(0, start - _LOOKBEHIND):start]
    token = _TRAILING_LETTERS_RE.search(window)
    if token is None:
        return False
    letters = token.group()
    return len(letters) == 1 or letters.lower() in ABBREVIATIONS


def _is_complex(word: str, sentence_start: bool) -> bool:
    # Capitalized words inside a sentence are treated as proper nouns.
    if word[0].isupper() and not sentence_start:
        return False
    lower = word.lower()
    for suffix in INFLECTION_SUFFIXES:
        if lower.endswith(suffix) and len(lower) > len(suffix) + 2:
            return count_syllables(lower[: -len(suffix)]) >= COMPLEX_SYLLABLES
    return True
