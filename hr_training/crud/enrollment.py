from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from hr_training.crud.base import CRUDBase
from hr_training.models.enrollment import Enrollment

class CRUDEnrollment(CRUDBase[Enrollment]):
    def get_by_employee(self, db: Session, *, employee_id: int) -> List[Enrollment]:
        return (
            db.query(self.model)
            .filter(self.model.employee_id == employee_id)
            .order_by(self.model.assigned_at.desc(), self.model.id.desc())
            .all()
        )

    def get_by_employee_and_course(self, db: Session, *, employee_id: int, course_id: int) -> Optional[Enrollment]:
        return (
            db.query(self.model)
            .filter(self.model.employee_id == employee_id, self.model.course_id == course_id)
            .first()
        )

    def get_by_course_and_employees(self, db: Session, *, course_id: int, employee_ids: List[int]) -> List[Enrollment]:
        if not employee_ids:
            return []
        return (
            db.query(self.model)
            .filter(self.model.course_id == course_id, self.model.employee_id.in_(employee_ids))
            .all()
        )

    def count_all(self, db: Session) -> int:
        return db.query(func.count(self.model.id)).scalar() or 0

enrollment = CRUDEnrollment(Enrollment)
