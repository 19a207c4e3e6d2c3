import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from hr_training.core.config import settings
from hr_training.core.decorators import service_result
from hr_training.crud.quiz import quiz as crud_quiz
from hr_training.crud.question import question as crud_question
from hr_training.crud.attempt import quiz_attempt as crud_attempt
from hr_training.schemas.attempt import AttemptResult, QuizAttempt
from hr_training.schemas.question import Question
from hr_training.services.grading import grade_questions
from hr_training.utils.clock import utcnow
from hr_training.utils.helpers import dump_json, percentage

logger = logging.getLogger(__name__)


class QuizAttemptService:
    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    @service_result()
    def submit_attempt(
        self,
        db: Session,
        employee_id: int,
        quiz_id: int,
        answers: Optional[Dict[Any, Any]] = None,
        started_at: Optional[datetime] = None,
    ) -> AttemptResult:
        """Grade a submission and append it to the attempt history.

        A quiz without questions always scores 0 and never passes.
        """
        if not employee_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="employee_id is required.")

        quiz = crud_quiz.get(db, id=quiz_id)
        if not quiz:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found.")

        questions = [Question.from_row(row) for row in crud_question.get_by_quiz(db, quiz_id=quiz_id)]
        summary = grade_questions(questions, answers)

        score = percentage(summary.earned_points, summary.total_points)
        pass_mark = int(quiz.pass_mark or settings.DEFAULT_PASS_MARK)
        passed = summary.total_points > 0 and score >= pass_mark

        now = self.clock()
        attempt = crud_attempt.create(db, obj_in={
            "employee_id": employee_id,
            "quiz_id": quiz_id,
            "started_at": started_at or now,
            "submitted_at": now,
            "score": score,
            "passed": passed,
            "answers_json": dump_json({
                "answers": {str(key): value for key, value in (answers or {}).items()},
                "grading": [grade.model_dump() for grade in summary.grading],
                "earned_points": summary.earned_points,
                "total_points": summary.total_points,
            }),
        })

        logger.info(
            f"Employee {employee_id} scored {score}% on quiz {quiz_id} "
            f"({summary.earned_points}/{summary.total_points}, pass mark {pass_mark})"
        )

        return AttemptResult(
            attempt=QuizAttempt.model_validate(attempt),
            score=score,
            passed=passed,
            earned_points=summary.earned_points,
            total_points=summary.total_points,
            pass_mark=pass_mark,
            grading=summary.grading,
        )


quiz_attempt_service = QuizAttemptService()
