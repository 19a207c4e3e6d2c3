from typing import List
from sqlalchemy.orm import Session

from hr_training.crud.base import CRUDBase
from hr_training.models.question import Question

class CRUDQuestion(CRUDBase[Question]):
    def get_by_quiz(self, db: Session, *, quiz_id: int) -> List[Question]:
        return db.query(self.model).filter(self.model.quiz_id == quiz_id).order_by(self.model.id).all()

    def get_by_quizzes(self, db: Session, *, quiz_ids: List[int]) -> List[Question]:
        return self.get_in(db, column="quiz_id", values=quiz_ids)

question = CRUDQuestion(Question)
