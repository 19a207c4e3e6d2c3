from typing import List
from sqlalchemy.orm import Session

from hr_training.crud.base import CRUDBase
from hr_training.models.attempt import QuizAttempt

class CRUDQuizAttempt(CRUDBase[QuizAttempt]):
    def _latest_first(self, query):
        return query.order_by(self.model.submitted_at.desc(), self.model.id.desc())

    def get_by_employee(self, db: Session, *, employee_id: int) -> List[QuizAttempt]:
        return self._latest_first(
            db.query(self.model).filter(self.model.employee_id == employee_id)
        ).all()

    def get_by_employee_and_quizzes(self, db: Session, *, employee_id: int, quiz_ids: List[int]) -> List[QuizAttempt]:
        if not quiz_ids:
            return []
        return self._latest_first(
            db.query(self.model).filter(self.model.employee_id == employee_id, self.model.quiz_id.in_(quiz_ids))
        ).all()

    def get_by_quizzes(self, db: Session, *, quiz_ids: List[int]) -> List[QuizAttempt]:
        return self.get_in(db, column="quiz_id", values=quiz_ids)

quiz_attempt = CRUDQuizAttempt(QuizAttempt)
