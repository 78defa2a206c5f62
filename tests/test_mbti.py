"""MBTI questionnaire scoring."""

from crystal_calendar.domain.energy.mbti import are_mbti_answers_complete, calculate_mbti_type
from crystal_calendar.domain.energy.schemas import MBTIAnswers


def answers(ei="A" * 7, sn="A" * 7, tf="A" * 7, jp="A" * 7):
    return MBTIAnswers(ei=list(ei), sn=list(sn), tf=list(tf), jp=list(jp))


class TestCompleteness:
    def test_complete(self):
        assert are_mbti_answers_complete(answers())

    def test_missing_answer(self):
        partial = answers()
        partial.tf[3] = None
        assert not are_mbti_answers_complete(partial)

    def test_too_few_answers(self):
        assert not are_mbti_answers_complete(answers(jp="AB"))

    def test_none(self):
        assert not are_mbti_answers_complete(None)


class TestCalculateType:
    def test_all_a(self):
        assert calculate_mbti_type(answers()).type == "ESTJ"

    def test_all_b(self):
        result = calculate_mbti_type(answers("B" * 7, "B" * 7, "B" * 7, "B" * 7))
        assert result.type == "INFP"

    def test_four_of_seven_decides(self):
        result = calculate_mbti_type(answers(ei="AAAABBB", sn="AAABBBB"))
        assert result.type[:2] == "EN"
        assert result.scores["ei"].scoreA == 4
        assert result.scores["ei"].scoreB == 3
        assert result.scores["sn"].tendency == "N"

    def test_incomplete_returns_none(self):
        assert calculate_mbti_type(answers(ei="AAAAAA")) is None
