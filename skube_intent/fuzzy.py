"""
Edit-distance engine and fuzzy matcher.

Levenshtein distance over code points, case-insensitive, with uniform
cost 1 for insertion, deletion and substitution. No external models.
"""

from typing import List, Sequence, Tuple

_SEGMENT_SEPARATORS = ("-", "_", ".")


def levenshtein_distance(a: str, b: str) -> int:
    """Return the edit distance between two strings, ignoring case.

    Uses a two-row rolling buffer sized by the shorter string.
    """
    a = a.lower()
    b = b.lower()

    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Keep the inner row as short as possible
    if len(b) > len(a):
        a, b = b, a

    previous = list(range(len(b) + 1))
    current = [0] * (len(b) + 1)

    for i, char_a in enumerate(a, start=1):
        current[0] = i
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                current[j - 1] + 1,  # insertion
                previous[j] + 1,  # deletion
                previous[j - 1] + cost,  # substitution
            )
        previous, current = current, previous

    return previous[len(b)]


def fuzzy_match(a: str, b: str, max_distance: int) -> bool:
    """True if the strings are within ``max_distance`` edits of each other."""
    return levenshtein_distance(a, b) <= max_distance


def find_closest_match(target: str, candidates: Sequence[str]) -> Tuple[str, int]:
    """
    Find the candidate with the smallest edit distance to ``target``.

    Ties go to the earliest candidate. Returns ("", -1) when there are no
    candidates.
    """
    if not candidates:
        return "", -1

    best_match = candidates[0]
    best_distance = levenshtein_distance(target, best_match)

    for candidate in candidates[1:]:
        distance = levenshtein_distance(target, candidate)
        if distance < best_distance:
            best_match = candidate
            best_distance = distance

    return best_match, best_distance


def adaptive_threshold(s: str) -> int:
    """Typo budget for a string: 1 up to 4 chars, 2 up to 9, 3 from 10 on."""
    length = len(s)
    if length <= 4:
        return 1
    if length < 10:
        return 2
    return 3


def fuzzy_match_with_threshold(target: str, candidates: Sequence[str]) -> Tuple[str, bool]:
    """Closest candidate if it is within the adaptive threshold of ``target``."""
    if not candidates:
        return "", False

    match, distance = find_closest_match(target, candidates)
    if distance <= adaptive_threshold(target):
        return match, True
    return "", False


def _segments(name: str) -> List[str]:
    for separator in _SEGMENT_SEPARATORS[1:]:
        name = name.replace(separator, _SEGMENT_SEPARATORS[0])
    return [part for part in name.split(_SEGMENT_SEPARATORS[0]) if part]


def contains_fuzzy(target: str, candidates: Sequence[str], max_distance: int) -> Tuple[str, bool]:
    """
    Partial matching: the first candidate that contains ``target``, fuzzy
    matches it as a whole, or has a ``-``/``_``/``.`` segment that fuzzy
    matches it.

    Example: "srver" finds "web-server" through its "server" segment.
    """
    target_lower = target.lower()

    for candidate in candidates:
        candidate_lower = candidate.lower()

        if target_lower in candidate_lower:
            return candidate, True

        if fuzzy_match(target, candidate, max_distance):
            return candidate, True

        for part in _segments(candidate_lower):
            if fuzzy_match(target, part, max_distance):
                return candidate, True

    return "", False
