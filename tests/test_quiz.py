"""Tests for quiz scoring and per-question review."""

from __future__ import annotations

import copy

from conftest import make_question
from snapnotes.models import QuizKind, parse_analysis
from snapnotes.quiz import (
    QuestionStatus,
    ScoreResult,
    evaluate,
    grade_question,
    normalize_answer,
    review,
)


def test_normalize_answer_trims_and_lowercases():
    assert normalize_answer("  Apple \n") == "apple"
    assert normalize_answer(None) == ""
    # Inner whitespace is significant
    assert normalize_answer("ice  cream") != normalize_answer("ice cream")


def test_case_and_whitespace_insensitive_match():
    score = evaluate([make_question("q1", "Apple")], {"q1": "  apple "})
    assert score == ScoreResult(correct_count=1, total_count=1)


def test_unanswered_counts_as_incorrect():
    quizzes = [make_question("q1", "x"), make_question("q2", "y")]
    assert evaluate(quizzes, {"q1": "x"}) == ScoreResult(1, 2)


def test_empty_quiz_set():
    score = evaluate([], {})
    assert score == ScoreResult(0, 0)
    assert score.ratio == 0.0
    assert score.percent == 0
    assert not score.is_perfect


def test_no_partial_credit_or_fuzzy_matching():
    quizzes = [make_question("q1", "pollution")]
    assert evaluate(quizzes, {"q1": "polution"}).correct_count == 0
    assert evaluate(quizzes, {"q1": ""}).correct_count == 0


def test_answers_for_unknown_ids_are_ignored():
    quizzes = [make_question("q1", "x")]
    assert evaluate(quizzes, {"q1": "x", "q9": "x"}) == ScoreResult(1, 1)


def test_evaluate_is_pure_and_repeatable(sample_payload):
    result = parse_analysis(sample_payload)
    answers = {"q1": "To keep safe", "q3": "Plastic", "q4": "throw"}
    snapshot = copy.deepcopy(answers)

    first = evaluate(result.quizzes, answers)
    second = evaluate(result.quizzes, answers)

    assert first == second == ScoreResult(2, 5)
    assert answers == snapshot
    assert result == parse_analysis(sample_payload)


def test_score_ratio_and_perfect():
    score = ScoreResult(correct_count=3, total_count=4)
    assert score.ratio == 0.75
    assert score.percent == 75
    assert not score.is_perfect
    assert ScoreResult(4, 4).is_perfect
    assert ScoreResult(4, 4).as_dict() == {"correct": 4, "total": 4, "percent": 100, "perfect": True}


def test_grade_choice_question_identifies_selected_and_correct_option():
    q = make_question("q1", "are thrown", kind=QuizKind.GRAMMAR, options=["throw", "are thrown", "throwing"])

    wrong = grade_question(q, {"q1": "throw"})
    assert wrong.status is QuestionStatus.INCORRECT
    assert wrong.selected_option == 0
    assert wrong.correct_option == 1
    assert wrong.highlight_selected

    right = grade_question(q, {"q1": "Are Thrown"})
    assert right.status is QuestionStatus.CORRECT
    assert right.selected_option == right.correct_option == 1
    assert not right.highlight_selected


def test_grade_unanswered_question():
    q = make_question("q1", "Plastic", kind=QuizKind.MULTIPLE_CHOICE, options=["Plastic", "Sand"])
    outcome = grade_question(q, {})
    assert outcome.status is QuestionStatus.UNANSWERED
    assert outcome.submitted_answer is None
    assert outcome.selected_option is None
    assert outcome.correct_option == 0
    assert not outcome.highlight_selected


def test_free_text_kinds_have_no_option_indexes():
    q = make_question("q1", "to keep safe", kind=QuizKind.MATCHING)
    outcome = grade_question(q, {"q1": "to keep safe"})
    assert outcome.status is QuestionStatus.CORRECT
    assert outcome.selected_option is None
    assert outcome.correct_option is None


def test_review_follows_quiz_order(sample_payload):
    result = parse_analysis(sample_payload)
    outcomes = review(result.quizzes, {"q2": "Pollution", "q5": "Fish are tasty"})
    assert [o.question_id for o in outcomes] == ["q1", "q2", "q3", "q4", "q5"]
    assert [o.status for o in outcomes] == [
        QuestionStatus.UNANSWERED,
        QuestionStatus.CORRECT,
        QuestionStatus.UNANSWERED,
        QuestionStatus.UNANSWERED,
        QuestionStatus.INCORRECT,
    ]
    assert outcomes[4].selected_option == 2
    assert outcomes[4].correct_option == 1
