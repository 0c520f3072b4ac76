"""Age -> risk score band."""

from __future__ import annotations

# (lowest age, highest age, score); the last band is open-ended.
SCORE_BANDS = (
    (18, 35, 1),
    (36, 45, 2),
    (46, 55, 3),
    (56, 60, 4),
    (61, 65, 5),
    (66, 70, 6),
)
OPEN_ENDED_FROM = 71
OPEN_ENDED_SCORE = 7
NO_BAND = 0


def calculate_score(age: int) -> int:
    """Map an age to its score band (1-7); 0 when no band applies."""
    for low, high, score in SCORE_BANDS:
        if low <= age <= high:
            return score
    if age >= OPEN_ENDED_FROM:
        return OPEN_ENDED_SCORE
    return NO_BAND
