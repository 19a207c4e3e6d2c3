from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy.orm import Session
from hr_training.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)

class CRUDBase(Generic[ModelType]):
    """Row-store adapter over one table: CRUD plus equality and ``in`` filters."""

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_all(self, db: Session) -> List[ModelType]:
        return db.query(self.model).order_by(self.model.id).all()

    def get_in(self, db: Session, *, column: str, values: Sequence[Any]) -> List[ModelType]:
        if not values:
            return []
        return (
            db.query(self.model)
            .filter(getattr(self.model, column).in_(list(values)))
            .order_by(self.model.id)
            .all()
        )

    def create(self, db: Session, *, obj_in: Union[BaseModel, Dict[str, Any]], commit: bool = True) -> ModelType:
        obj_in_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(**obj_in_data)
        db.add(db_obj)
        db.flush() # Populate ID
        db.refresh(db_obj)
        if commit:
            db.commit()
        return db_obj

    def create_many(self, db: Session, *, objs_in: List[Dict[str, Any]], commit: bool = True) -> List[ModelType]:
        db_objs = [self.model(**obj_in) for obj_in in objs_in]
        db.add_all(db_objs)
        db.flush()
        if commit:
            db.commit()
        return db_objs

    def update(
        self, db: Session, *, db_obj: ModelType, obj_in: Union[BaseModel, Dict[str, Any]], commit: bool = True
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        for field in self.model.__table__.columns.keys():
            if field in update_data:
                setattr(db_obj, field, update_data[field])
        db.add(db_obj)
        db.flush()
        if commit:
            db.commit()
            db.refresh(db_obj)
        return db_obj

    def delete_in(self, db: Session, *, column: str, values: Sequence[Any], commit: bool = True) -> int:
        """Bulk delete rows whose ``column`` is in ``values``; returns the row count."""
        if not values:
            return 0
        count = (
            db.query(self.model)
            .filter(getattr(self.model, column).in_(list(values)))
            .delete(synchronize_session=False)
        )
        if commit:
            db.commit()
        return count
