import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from hr_training.core.config import settings
from hr_training.core.constants import QuestionTypeEnum
from hr_training.core.decorators import service_result
from hr_training.crud.lesson import lesson as crud_lesson
from hr_training.crud.module import module as crud_module
from hr_training.crud.quiz import quiz as crud_quiz
from hr_training.crud.question import question as crud_question
from hr_training.schemas.quiz import Quiz, QuizCreate, QuizUpdate
from hr_training.schemas.question import Question, QuestionCreate, QuestionUpdate
from hr_training.services.cascade import purge_quizzes
from hr_training.utils.helpers import dump_json

logger = logging.getLogger(__name__)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _check_pass_mark(pass_mark: int) -> int:
    if pass_mark < 1 or pass_mark > 100:
        raise _bad_request("Quiz pass_mark must be between 1 and 100.")
    return pass_mark


def _check_time_limit(time_limit_seconds: Optional[int]) -> Optional[int]:
    if time_limit_seconds is None or time_limit_seconds == 0:
        return None
    if time_limit_seconds < 0:
        raise _bad_request("Quiz time_limit_seconds cannot be negative.")
    return time_limit_seconds


def _check_points(points: int) -> int:
    if points <= 0:
        raise _bad_request("Question points must be greater than 0.")
    return points


class QuizService:
    """Authoring for quizzes and their questions."""

    def _get_quiz_or_raise(self, db: Session, quiz_id: int):
        quiz = crud_quiz.get(db, id=quiz_id)
        if not quiz:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found.")
        return quiz

    def _get_question_or_raise(self, db: Session, question_id: int):
        question = crud_question.get(db, id=question_id)
        if not question:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found.")
        return question

    @service_result()
    def get_quiz(self, db: Session, quiz_id: int) -> Quiz:
        return Quiz.model_validate(self._get_quiz_or_raise(db, quiz_id))

    @service_result()
    def create_quiz(self, db: Session, quiz_in: QuizCreate) -> Quiz:
        title = (quiz_in.title or "").strip()
        if not title:
            raise _bad_request("Quiz title is required.")
        if bool(quiz_in.module_id) == bool(quiz_in.lesson_id):
            raise _bad_request("Quiz must belong to exactly one module or lesson.")

        if quiz_in.module_id:
            if not crud_module.get(db, id=quiz_in.module_id):
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Module not found.")
            if crud_quiz.get_by_module(db, module_id=quiz_in.module_id):
                raise _bad_request("This module already has a quiz.")
        else:
            if not crud_lesson.get(db, id=quiz_in.lesson_id):
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found.")
            if crud_quiz.get_by_lesson(db, lesson_id=quiz_in.lesson_id):
                raise _bad_request("This lesson already has a quiz.")

        pass_mark = quiz_in.pass_mark if quiz_in.pass_mark is not None else settings.DEFAULT_PASS_MARK
        quiz = crud_quiz.create(db, obj_in={
            "title": title,
            "pass_mark": _check_pass_mark(pass_mark),
            "time_limit_seconds": _check_time_limit(quiz_in.time_limit_seconds),
            "module_id": quiz_in.module_id or None,
            "lesson_id": quiz_in.lesson_id or None,
        })
        logger.info(f"Created quiz {quiz.id} (module={quiz.module_id}, lesson={quiz.lesson_id})")
        return Quiz.model_validate(quiz)

    @service_result()
    def update_quiz(self, db: Session, quiz_id: int, quiz_in: QuizUpdate) -> Quiz:
        quiz = self._get_quiz_or_raise(db, quiz_id)

        update_data = quiz_in.model_dump(exclude_unset=True)
        if "title" in update_data:
            update_data["title"] = (update_data["title"] or "").strip()
            if not update_data["title"]:
                raise _bad_request("Quiz title is required.")
        if update_data.get("pass_mark") is not None:
            _check_pass_mark(update_data["pass_mark"])
        else:
            update_data.pop("pass_mark", None)
        if "time_limit_seconds" in update_data:
            update_data["time_limit_seconds"] = _check_time_limit(update_data["time_limit_seconds"])

        quiz = crud_quiz.update(db, db_obj=quiz, obj_in=update_data)
        return Quiz.model_validate(quiz)

    @service_result()
    def delete_quiz(self, db: Session, quiz_id: int) -> dict:
        self._get_quiz_or_raise(db, quiz_id)
        counts = purge_quizzes(db, [quiz_id])
        db.commit()
        logger.info(f"Deleted quiz {quiz_id}: {counts}")
        return counts

    @service_result()
    def get_questions(self, db: Session, quiz_id: int) -> List[Question]:
        self._get_quiz_or_raise(db, quiz_id)
        return [Question.from_row(row) for row in crud_question.get_by_quiz(db, quiz_id=quiz_id)]

    @service_result()
    def create_question(self, db: Session, question_in: QuestionCreate) -> Question:
        text = (question_in.question_text or "").strip()
        if not question_in.quiz_id or not text:
            raise _bad_request("Question quiz_id and question_text are required.")
        self._get_quiz_or_raise(db, question_in.quiz_id)

        points = question_in.points if question_in.points is not None else 1
        question = crud_question.create(db, obj_in={
            "quiz_id": question_in.quiz_id,
            "question_text": text,
            "question_type": question_in.question_type or QuestionTypeEnum.SINGLE,
            "options_json": dump_json(question_in.options or []),
            "correct_answer_json": dump_json(question_in.correct_answer),
            "points": _check_points(points),
        })
        logger.info(f"Created question {question.id} on quiz {question.quiz_id}")
        return Question.from_row(question)

    @service_result()
    def update_question(self, db: Session, question_id: int, question_in: QuestionUpdate) -> Question:
        question = self._get_question_or_raise(db, question_id)

        update_data = question_in.model_dump(exclude_unset=True)
        if "question_text" in update_data:
            update_data["question_text"] = (update_data["question_text"] or "").strip()
            if not update_data["question_text"]:
                raise _bad_request("Question quiz_id and question_text are required.")
        if update_data.get("question_type") is None:
            update_data.pop("question_type", None)
        if update_data.get("points") is not None:
            _check_points(update_data["points"])
        else:
            update_data.pop("points", None)
        if "options" in update_data:
            update_data["options_json"] = dump_json(update_data.pop("options") or [])
        if "correct_answer" in update_data:
            update_data["correct_answer_json"] = dump_json(update_data.pop("correct_answer"))

        question = crud_question.update(db, db_obj=question, obj_in=update_data)
        return Question.from_row(question)

    @service_result()
    def delete_question(self, db: Session, question_id: int) -> dict:
        self._get_question_or_raise(db, question_id)
        count = crud_question.delete_in(db, column="id", values=[question_id])
        logger.info(f"Deleted question {question_id}")
        return {"questions": count}


quiz_service = QuizService()
