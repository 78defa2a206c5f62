"""MBTI questionnaire scoring (28 forced-choice questions, 7 per dimension)"""

from typing import Optional

from .schemas import DimensionScore, MBTIAnswers, MBTIResult

QUESTIONS_PER_DIMENSION = 7

# dimension -> (letter for answer A, letter for answer B)
DIMENSIONS = {
    "ei": ("E", "I"),
    "sn": ("S", "N"),
    "tf": ("T", "F"),
    "jp": ("J", "P"),
}


def are_mbti_answers_complete(answers: Optional[MBTIAnswers]) -> bool:
    if answers is None:
        return False
    for dimension in DIMENSIONS:
        dimension_answers = getattr(answers, dimension)
        if len(dimension_answers) != QUESTIONS_PER_DIMENSION:
            return False
        if any(answer is None for answer in dimension_answers):
            return False
    return True


def _score_dimension(dimension_answers: list, letter_a: str, letter_b: str) -> DimensionScore:
    score_a = sum(1 for answer in dimension_answers if answer == "A")
    score_b = sum(1 for answer in dimension_answers if answer == "B")
    # Majority of seven
    tendency = letter_a if score_a >= 4 else letter_b
    return DimensionScore(scoreA=score_a, scoreB=score_b, tendency=tendency)


def calculate_mbti_type(answers: MBTIAnswers) -> Optional[MBTIResult]:
    """Return the 4-letter type with per-dimension scores, or None if any answer is missing"""
    if not are_mbti_answers_complete(answers):
        return None

    scores = {
        dimension: _score_dimension(getattr(answers, dimension), letter_a, letter_b)
        for dimension, (letter_a, letter_b) in DIMENSIONS.items()
    }
    mbti_type = "".join(score.tendency for score in scores.values())
    return MBTIResult(type=mbti_type, scores=scores)
