import json

import pytest
from sqlalchemy.orm import Session

from hr_training.core.constants import QuestionTypeEnum
from hr_training.crud.attempt import quiz_attempt as crud_attempt
from hr_training.schemas.question import Question
from hr_training.services.grading import (
    MultiChoiceKey, ShortAnswerKey, SingleChoiceKey, TrueFalseKey, answer_key_for, grade_questions
)
from hr_training.services.quiz_attempt import quiz_attempt_service
from tests.helpers.asserts import assert_failed, assert_ok
from tests.helpers.factories import make_course, make_employee, make_lesson, make_module, make_question, make_quiz


def _question(id, question_type, correct_answer, points=1):
    return Question(id=id, quiz_id=1, question_text="q", question_type=question_type,
                    correct_answer=correct_answer, points=points)


@pytest.mark.parametrize("question_type,key_type", [
    ("single", SingleChoiceKey),
    ("multi", MultiChoiceKey),
    ("truefalse", TrueFalseKey),
    ("short", ShortAnswerKey),
    (QuestionTypeEnum.MULTI, MultiChoiceKey),
])
def test_answer_key_for_builds_matching_variant(question_type, key_type):
    assert isinstance(answer_key_for(question_type, "x"), key_type)


def test_unknown_question_type_falls_back_to_single_choice():
    key = answer_key_for("essay", "Paris")
    assert isinstance(key, SingleChoiceKey)
    assert key.is_correct(" paris ")


def test_single_choice_is_trimmed_and_case_insensitive():
    key = answer_key_for("single", "Option B")
    assert key.is_correct("  option b ")
    assert not key.is_correct("Option C")
    assert not key.is_correct(None)


def test_multi_choice_ignores_order_duplicates_and_case():
    key = answer_key_for("multi", ["A", "C"])
    assert key.is_correct(["c", "a"])
    assert key.is_correct(["C", "A", "a"])
    assert not key.is_correct(["A"])
    assert not key.is_correct(["A", "B", "C"])


def test_multi_choice_grading_is_symmetric():
    assert answer_key_for("multi", ["A", "C"]).is_correct(["C", "A"])
    assert answer_key_for("multi", ["C", "A"]).is_correct(["A", "C"])


def test_multi_choice_with_non_list_key_is_never_correct():
    key = answer_key_for("multi", "A")
    assert not key.is_correct(["A"])
    assert not key.is_correct("A")


def test_true_false_accepts_booleans_and_strings():
    key = answer_key_for("truefalse", True)
    assert key.is_correct(True)
    assert key.is_correct("true")
    assert key.is_correct(" TRUE ")
    assert not key.is_correct(False)
    assert not key.is_correct("yes")

    string_key = answer_key_for("truefalse", "false")
    assert string_key.is_correct(False)


def test_short_answer_matches_any_accepted_alternative():
    key = answer_key_for("short", ["HR", "Human Resources"])
    assert key.is_correct("human resources")
    assert key.is_correct(" hr ")
    assert not key.is_correct("payroll")

    single_key = answer_key_for("short", "Onboarding")
    assert single_key.is_correct("ONBOARDING")


@pytest.mark.parametrize("question_type", ["single", "multi", "truefalse", "short"])
@pytest.mark.parametrize("submitted", [None, "", [], "anything", True])
def test_absent_key_is_never_correct(question_type, submitted):
    assert not answer_key_for(question_type, None).is_correct(submitted)


def test_grade_questions_sums_points_and_ignores_unknown_ids():
    questions = [
        _question(1, "single", "a", points=2),
        _question(2, "truefalse", False, points=1),
        _question(3, "short", ["x"], points=3),
    ]
    summary = grade_questions(questions, {"1": "A", 2: "true", 99: "ignored"})

    assert summary.total_points == 6
    assert summary.earned_points == 2
    assert [g.question_id for g in summary.grading] == [1, 2, 3]
    assert [g.is_correct for g in summary.grading] == [True, False, False]
    assert summary.grading[0].earned_points == 2
    assert summary.grading[2].submitted_answer is None


def _quiz_with_questions(db: Session, pass_mark: int = 50):
    course = make_course(db)
    module = make_module(db, course.id)
    lesson = make_lesson(db, module.id)
    quiz = make_quiz(db, lesson_id=lesson.id, pass_mark=pass_mark)
    q1 = make_question(db, quiz.id, "b", options=["a", "b", "c"])
    q2 = make_question(db, quiz.id, ["x", "z"], question_type=QuestionTypeEnum.MULTI)
    q3 = make_question(db, quiz.id, True, question_type=QuestionTypeEnum.TRUE_FALSE)
    return quiz, (q1, q2, q3)


def test_submit_attempt_scores_and_persists_breakdown(db_session: Session, frozen_clock):
    employee = make_employee(db_session)
    quiz, (q1, q2, q3) = _quiz_with_questions(db_session, pass_mark=60)

    result = assert_ok(quiz_attempt_service.submit_attempt(
        db_session, employee_id=employee.id, quiz_id=quiz.id,
        answers={q1.id: "B", q2.id: ["z", "x"], q3.id: "false"}
    ))

    assert result.earned_points == 2
    assert result.total_points == 3
    assert result.score == 67
    assert result.passed is True
    assert result.pass_mark == 60
    assert result.attempt.submitted_at == frozen_clock

    stored = crud_attempt.get(db_session, id=result.attempt.id)
    payload = json.loads(stored.answers_json)
    assert payload["earned_points"] == 2
    assert payload["total_points"] == 3
    assert len(payload["grading"]) == 3
    assert payload["answers"][str(q1.id)] == "B"


def test_score_rounds_half_up(db_session: Session, frozen_clock):
    employee = make_employee(db_session)
    course = make_course(db_session)
    module = make_module(db_session, course.id)
    quiz = make_quiz(db_session, module_id=module.id)
    questions = [make_question(db_session, quiz.id, "a") for _ in range(8)]

    answers = {q.id: "a" for q in questions[:1]}
    result = assert_ok(quiz_attempt_service.submit_attempt(db_session, employee_id=employee.id, quiz_id=quiz.id, answers=answers))

    # 1 of 8 is 12.5 percent
    assert result.score == 13


def test_every_submission_appends_a_new_attempt(db_session: Session, frozen_clock):
    employee = make_employee(db_session)
    quiz, (q1, _, _) = _quiz_with_questions(db_session)

    for _ in range(3):
        assert_ok(quiz_attempt_service.submit_attempt(db_session, employee_id=employee.id, quiz_id=quiz.id, answers={q1.id: "b"}))

    assert len(crud_attempt.get_by_employee(db_session, employee_id=employee.id)) == 3


def test_quiz_without_questions_scores_zero_and_fails(db_session: Session, frozen_clock):
    employee = make_employee(db_session)
    course = make_course(db_session)
    module = make_module(db_session, course.id)
    quiz = make_quiz(db_session, module_id=module.id, pass_mark=1)

    result = assert_ok(quiz_attempt_service.submit_attempt(db_session, employee_id=employee.id, quiz_id=quiz.id, answers={}))

    assert result.score == 0
    assert result.passed is False
    assert result.total_points == 0


def test_corrupt_answer_key_is_graded_incorrect(db_session: Session, frozen_clock):
    employee = make_employee(db_session)
    course = make_course(db_session)
    module = make_module(db_session, course.id)
    quiz = make_quiz(db_session, module_id=module.id)
    question = make_question(db_session, quiz.id, None, raw_answer="{not json")

    result = assert_ok(quiz_attempt_service.submit_attempt(db_session, employee_id=employee.id, quiz_id=quiz.id,
                                                           answers={question.id: "{not json"}))
    assert result.score == 0
    assert result.grading[0].is_correct is False


def test_missing_quiz_fails_before_any_write(db_session: Session, frozen_clock):
    employee = make_employee(db_session)

    assert_failed(
        quiz_attempt_service.submit_attempt(db_session, employee_id=employee.id, quiz_id=404, answers={}),
        "NOT_FOUND", "Quiz not found."
    )
    assert crud_attempt.get_all(db_session) == []


def test_malformed_answers_return_failure_without_attempt(db_session: Session, frozen_clock):
    employee = make_employee(db_session)
    quiz = make_quiz(db_session, module_id=make_module(db_session, make_course(db_session).id).id)
    make_question(db_session, quiz.id, "a")

    assert_failed(
        quiz_attempt_service.submit_attempt(db_session, employee_id=employee.id, quiz_id=quiz.id, answers=[["x"]]),
        "INTERNAL_SERVER_ERROR"
    )
    assert crud_attempt.get_all(db_session) == []
