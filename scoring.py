"""Heuristic desirability score for word combinations."""

from __future__ import annotations

from typing import Sequence

from models import Entry

SUFFIXES = (
    "ung", "keit", "heit", "schaft", "tum", "ion", "ismus", "ist", "ling", "erei",
    "ler", "ner", "chen", "lein", "nis", "sal", "in", "enz", "anz", "or", "ör", "ität", "ment", "age", "ur",
    "tät", "ik", "loge", "iker", "graph", "gramm", "tion", "eur", "eurin", "euren", "ation",
    "logie", "phie", "är", "ärin", "ärchen", "sel", "er", "erin",
)
PREFIXES = (
    "un", "ver", "be", "ent", "er", "ab", "auf", "aus", "an", "ein", "mit", "nach",
    "über", "um", "unter", "vor", "wider", "zer", "zurück", "zu", "bei", "fort",
    "gegen", "her", "hin", "los", "miss", "wieder", "ur", "voll", "zwischen",
    "durch", "ober", "nieder", "heim", "fern", "manch", "viel", "wenig", "hoch",
    "fehl", "ge", "trans", "auto", "anti", "ex", "prä", "post", "sub", "super",
    "inter", "infra", "hyper", "para", "mono", "poly", "tri", "multi", "bi", "semi",
    "ko", "kontra", "re", "pseudo", "quasi", "neo", "sozio",
)
LINKING_ELEMENTS = ("s", "es", "n", "en", "er", "e")

LENGTH_EXPONENT = 1.3
LONG_WORD_LEN = 8
LONG_WORD_BONUS = 5.0
SHORT_WORD_LEN = 3
SHORT_WORD_PENALTY = 3.0
SUFFIX2_MATCH_BONUS = 3.5
SUFFIX3_MATCH_BONUS = 5.0
SUFFIX_MORPHEME_BONUS = 3.0
PREFIX_MORPHEME_BONUS = 5.0
LINKING_BONUS = 4.0
PARTIAL_LINKING_BONUS = 2.0
MAX_UNPENALIZED_WORDS = 4
EXTRA_WORD_PENALTY = 1.5


def _linking_bonus(prev: Entry, cur: Entry) -> float:
    for link in LINKING_ELEMENTS:
        if not prev.word.endswith(link):
            continue
        if cur.word.startswith(link):
            return LINKING_BONUS
        # Overlap-adjusted part of the linking element; clamped, empty never matches.
        end = max(0, min(len(link), cur.length - prev.length + len(link)))
        partial = link[:end]
        if partial and cur.word.startswith(partial):
            return PARTIAL_LINKING_BONUS
    return 0.0


def _pair_bonus(prev: Entry, cur: Entry) -> float:
    bonus = 0.0
    if prev.suffix2 == cur.prefix2:
        bonus += SUFFIX2_MATCH_BONUS
    if prev.suffix3 == cur.prefix3:
        bonus += SUFFIX3_MATCH_BONUS
    if any(prev.suffix3.endswith(suf) or prev.suffix2.endswith(suf) for suf in SUFFIXES):
        bonus += SUFFIX_MORPHEME_BONUS
    if any(cur.prefix3.startswith(pre) or cur.prefix2.startswith(pre) for pre in PREFIXES):
        bonus += PREFIX_MORPHEME_BONUS
    return bonus + _linking_bonus(prev, cur)


def compute_score(combo: Sequence[Entry]) -> float:
    """Score an ordered combination; longer words and natural joints score higher."""
    score = 0.0
    for idx, entry in enumerate(combo):
        score += entry.length ** LENGTH_EXPONENT
        if entry.length >= LONG_WORD_LEN:
            score += LONG_WORD_BONUS
        if entry.length <= SHORT_WORD_LEN:
            score -= SHORT_WORD_PENALTY
        if idx > 0:
            score += _pair_bonus(combo[idx - 1], entry)
    if len(combo) > MAX_UNPENALIZED_WORDS:
        score -= (len(combo) - MAX_UNPENALIZED_WORDS) * EXTRA_WORD_PENALTY
    return score
