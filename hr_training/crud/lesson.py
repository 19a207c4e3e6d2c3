from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from hr_training.crud.base import CRUDBase
from hr_training.models.lesson import Lesson

class CRUDLesson(CRUDBase[Lesson]):
    def get_by_module(self, db: Session, *, module_id: int) -> List[Lesson]:
        return (
            db.query(self.model)
            .filter(self.model.module_id == module_id)
            .order_by(self.model.sort_order, self.model.id)
            .all()
        )

    def get_by_modules(self, db: Session, *, module_ids: List[int]) -> List[Lesson]:
        return self.get_in(db, column="module_id", values=module_ids)

    def get_by_position(self, db: Session, *, module_id: int, sort_order: int) -> Optional[Lesson]:
        return (
            db.query(self.model)
            .filter(self.model.module_id == module_id, self.model.sort_order == sort_order)
            .first()
        )

    def get_max_position(self, db: Session, *, module_id: int) -> int:
        result = db.query(func.max(self.model.sort_order)).filter(self.model.module_id == module_id).scalar()
        return result or 0

lesson = CRUDLesson(Lesson)
