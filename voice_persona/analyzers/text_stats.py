"""
Text statistics shared by the analyzers and the rules engine.

All helpers are pure and guard their denominators, so empty text yields
zeros instead of errors.
"""
import math
import re
from typing import Iterable, List, Sequence

import numpy as np

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
CAPS_WORD_RE = re.compile(r"\b[A-Z]{2,}\b")
CAPS_LETTER_RE = re.compile(r"[A-Z]")
NON_WORD_RE = re.compile(r"[^\w\s]")

# Formal connectives that rarely belong in a creator's spoken voice
FORMAL_CONNECTIVES = [
    "furthermore",
    "moreover",
    "consequently",
    "nevertheless",
    "pursuant",
    "notwithstanding",
]


def split_sentences(text: str) -> List[str]:
    """Split on runs of terminal punctuation, dropping empty fragments."""
    return [s.strip() for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def word_count(text: str) -> int:
    return len(text.split())


def sentence_lengths(sentences: Iterable[str]) -> List[int]:
    return [len(s.split()) for s in sentences]


def average(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(np.mean(values))


def average_sentence_length(text: str) -> float:
    return average(sentence_lengths(split_sentences(text)))


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population standard deviation divided by the mean (0 when undefined)."""
    if not values:
        return 0.0
    mean = float(np.mean(values))
    if mean == 0:
        return 0.0
    return float(np.std(values)) / mean


def count_exclamations(text: str) -> int:
    return text.count("!")


def count_questions(text: str) -> int:
    return text.count("?")


def caps_word_count(text: str) -> int:
    return len(CAPS_WORD_RE.findall(text))


def emphasis_score(text: str) -> int:
    """Capital letters plus double-weighted exclamation marks."""
    return len(CAPS_LETTER_RE.findall(text)) + count_exclamations(text) * 2


def emphasis_density(text: str, scale: float = 100) -> float:
    """Emphasis score normalized by character length and scaled."""
    if not text:
        return 0.0
    return emphasis_score(text) / len(text) * scale


def content_words(text: str, min_length: int = 4) -> List[str]:
    """Lowercased words with punctuation stripped, keeping words of min_length+ chars."""
    cleaned = NON_WORD_RE.sub(" ", text.lower())
    return [w for w in cleaned.split() if len(w) >= min_length]


def count_occurrences(text: str, phrase: str) -> int:
    """Case-insensitive count of literal phrase occurrences."""
    if not phrase:
        return 0
    return len(re.findall(re.escape(phrase.lower()), text.lower()))


def contains_phrase(text: str, phrase: str) -> bool:
    return bool(phrase) and phrase.lower() in text.lower()


def find_formal_language(text: str, vocabulary: Iterable[str]) -> List[str]:
    """Formal connectives present in text but absent from the persona vocabulary."""
    text_lower = text.lower()
    persona_words = {w.lower() for w in vocabulary}
    return [
        formal for formal in FORMAL_CONNECTIVES
        if formal in text_lower and formal not in persona_words
    ]


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop duplicates and empty strings, keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (not banker's rounding)."""
    return int(math.floor(value + 0.5))
