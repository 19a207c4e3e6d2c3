from typing import List, Optional
from sqlalchemy.orm import Session

from hr_training.crud.base import CRUDBase
from hr_training.models.quiz import Quiz

class CRUDQuiz(CRUDBase[Quiz]):
    def get_by_module(self, db: Session, *, module_id: int) -> Optional[Quiz]:
        return db.query(self.model).filter(self.model.module_id == module_id).first()

    def get_by_lesson(self, db: Session, *, lesson_id: int) -> Optional[Quiz]:
        return db.query(self.model).filter(self.model.lesson_id == lesson_id).first()

    def get_by_modules(self, db: Session, *, module_ids: List[int]) -> List[Quiz]:
        return self.get_in(db, column="module_id", values=module_ids)

    def get_by_lessons(self, db: Session, *, lesson_ids: List[int]) -> List[Quiz]:
        return self.get_in(db, column="lesson_id", values=lesson_ids)

quiz = CRUDQuiz(Quiz)
