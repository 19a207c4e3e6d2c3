from typing import List
from sqlalchemy.orm import Session

from hr_training.crud.base import CRUDBase
from hr_training.models.employee import Employee

class CRUDEmployee(CRUDBase[Employee]):
    def get_all_by_name(self, db: Session) -> List[Employee]:
        return db.query(self.model).order_by(self.model.name, self.model.id).all()

employee = CRUDEmployee(Employee)
