from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from hr_training.crud.base import CRUDBase
from hr_training.models.module import Module

class CRUDModule(CRUDBase[Module]):
    def get_by_course(self, db: Session, *, course_id: int) -> List[Module]:
        return (
            db.query(self.model)
            .filter(self.model.course_id == course_id)
            .order_by(self.model.sort_order, self.model.id)
            .all()
        )

    def get_by_courses(self, db: Session, *, course_ids: List[int]) -> List[Module]:
        return self.get_in(db, column="course_id", values=course_ids)

    def get_by_position(self, db: Session, *, course_id: int, sort_order: int) -> Optional[Module]:
        return (
            db.query(self.model)
            .filter(self.model.course_id == course_id, self.model.sort_order == sort_order)
            .first()
        )

    def get_max_position(self, db: Session, *, course_id: int) -> int:
        result = db.query(func.max(self.model.sort_order)).filter(self.model.course_id == course_id).scalar()
        return result or 0

module = CRUDModule(Module)
