from typing import List, Optional
from sqlalchemy.orm import Session

from hr_training.crud.base import CRUDBase
from hr_training.models.progress import LessonProgress

class CRUDLessonProgress(CRUDBase[LessonProgress]):
    def get_by_employee_and_lesson(self, db: Session, *, employee_id: int, lesson_id: int) -> Optional[LessonProgress]:
        return (
            db.query(self.model)
            .filter(self.model.employee_id == employee_id, self.model.lesson_id == lesson_id)
            .first()
        )

    def get_by_employee_and_lessons(self, db: Session, *, employee_id: int, lesson_ids: List[int]) -> List[LessonProgress]:
        if not lesson_ids:
            return []
        return (
            db.query(self.model)
            .filter(self.model.employee_id == employee_id, self.model.lesson_id.in_(lesson_ids))
            .all()
        )

lesson_progress = CRUDLessonProgress(LessonProgress)
