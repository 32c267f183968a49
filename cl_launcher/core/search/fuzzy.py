"""Subsequence fuzzy matcher.

Every character of the query has to appear in the haystack, in order, but
not necessarily next to each other. Among all such alignments the best
scoring one is kept:

- each matched character is worth ``SCORE_MATCH``;
- characters at word boundaries (after whitespace or punctuation, at the
  start, or at a camelCase / digit transition) earn a bonus, doubled for
  the first query character;
- runs of consecutive matches keep at least ``BONUS_CONSECUTIVE``;
- gaps between two matched characters cost ``SCORE_GAP_START`` plus
  ``SCORE_GAP_EXTENSION`` for each further skipped character.

Matching is smart-case: case-insensitive unless the query holds an
uppercase letter.
"""

from dataclasses import dataclass, field
from typing import List, Optional

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

_WHITE, _NON_WORD, _LOWER, _UPPER, _LETTER, _DIGIT = range(6)


@dataclass
class FuzzyMatch:
    score: int
    indices: List[int] = field(default_factory=list)


def _char_class(char: str) -> int:
    if char.isspace():
        return _WHITE
    if char.islower():
        return _LOWER
    if char.isupper():
        return _UPPER
    if char.isdigit():
        return _DIGIT
    if char.isalpha():
        return _LETTER
    return _NON_WORD


def _bonus_for(prev_class: int, char_class: int) -> int:
    if char_class == _WHITE:
        return BONUS_BOUNDARY
    if char_class == _NON_WORD:
        return BONUS_NON_WORD
    if prev_class in (_WHITE, _NON_WORD):
        return BONUS_BOUNDARY
    if prev_class == _LOWER and char_class == _UPPER:
        return BONUS_CAMEL
    if prev_class != _DIGIT and char_class == _DIGIT:
        return BONUS_CAMEL
    return 0


def _position_bonuses(text: str) -> List[int]:
    bonuses = []
    prev_class = _WHITE
    for char in text:
        char_class = _char_class(char)
        bonuses.append(_bonus_for(prev_class, char_class))
        prev_class = char_class
    return bonuses


def _fold_case(text: str) -> str:
    # keep one character per position so indices and bonuses stay aligned
    return "".join(
        lowered if len(lowered) == 1 else char
        for char, lowered in ((char, char.lower()) for char in text)
    )


def _is_subsequence(haystack: str, query: str) -> bool:
    position = 0
    for char in query:
        position = haystack.find(char, position)
        if position < 0:
            return False
        position += 1
    return True


def fuzzy_match(haystack: str, query: str) -> Optional[FuzzyMatch]:
    """Score ``query`` against ``haystack``.

    Returns None when the query is not a subsequence of the haystack. An
    empty query matches everything with a score of 0.
    """
    if not query:
        return FuzzyMatch(score=0)

    case_sensitive = any(char.isupper() for char in query)
    text = haystack if case_sensitive else _fold_case(haystack)
    pattern = query if case_sensitive else query.lower()

    if not _is_subsequence(text, pattern):
        return None

    n, m = len(text), len(pattern)
    bonuses = _position_bonuses(haystack)

    # scores[i][j]: best score with pattern[i] matched at text[j]
    # origins[i][j]: column of pattern[i - 1] in that best alignment
    scores: List[List[Optional[int]]] = []
    origins: List[List[int]] = []
    chunk_bonus: List[Optional[int]] = [None] * n

    for i, pattern_char in enumerate(pattern):
        row: List[Optional[int]] = [None] * n
        origin_row = [-1] * n
        row_chunk: List[Optional[int]] = [None] * n
        prev = scores[i - 1] if i else None

        gap_score: Optional[int] = None
        gap_origin = -1

        for j in range(n):
            if prev is not None:
                if gap_score is not None:
                    gap_score += SCORE_GAP_EXTENSION
                if j >= 2 and prev[j - 2] is not None:
                    opened = prev[j - 2] + SCORE_GAP_START
                    if gap_score is None or opened > gap_score:
                        gap_score, gap_origin = opened, j - 2

            if text[j] != pattern_char:
                continue

            bonus = bonuses[j]
            if i == 0:
                row[j] = SCORE_MATCH + bonus * BONUS_FIRST_CHAR_MULTIPLIER
                row_chunk[j] = bonus
                continue

            best: Optional[int] = None
            if j >= 1 and prev[j - 1] is not None:
                first_bonus = chunk_bonus[j - 1] or 0
                if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                    first_bonus = bonus
                consecutive = max(bonus, first_bonus, BONUS_CONSECUTIVE)
                best = prev[j - 1] + SCORE_MATCH + consecutive
                origin_row[j] = j - 1
                row_chunk[j] = first_bonus

            if gap_score is not None:
                gapped = gap_score + SCORE_MATCH + bonus
                if best is None or gapped > best:
                    best = gapped
                    origin_row[j] = gap_origin
                    row_chunk[j] = bonus

            row[j] = best

        scores.append(row)
        origins.append(origin_row)
        chunk_bonus = row_chunk

    last = scores[-1]
    end = max(
        (j for j in range(n) if last[j] is not None),
        key=lambda j: (last[j], -j),
        default=None,
    )
    if end is None:
        return None

    indices = [end]
    for i in range(m - 1, 0, -1):
        indices.append(origins[i][indices[-1]])
    indices.reverse()

    return FuzzyMatch(score=last[end], indices=indices)


def fuzzy_score(haystack: str, query: str) -> Optional[int]:
    match = fuzzy_match(haystack, query)
    return match.score if match else None
