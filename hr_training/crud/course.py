from typing import List
from sqlalchemy.orm import Session

from hr_training.crud.base import CRUDBase
from hr_training.core.constants import CourseStatusEnum
from hr_training.models.course import Course

class CRUDCourse(CRUDBase[Course]):
    def get_listing(self, db: Session, *, include_draft: bool = True) -> List[Course]:
        query = db.query(self.model)
        if not include_draft:
            query = query.filter(self.model.status == CourseStatusEnum.PUBLISHED)
        return query.order_by(self.model.created_at.desc(), self.model.id.desc()).all()

    def get_published(self, db: Session) -> List[Course]:
        return self.get_listing(db, include_draft=False)

course = CRUDCourse(Course)
