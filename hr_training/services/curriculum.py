import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from hr_training.core.decorators import service_result
from hr_training.crud.course import course as crud_course
from hr_training.crud.module import module as crud_module
from hr_training.schemas.module import Module, ModuleCreate, ModuleUpdate
from hr_training.services.cascade import purge_modules
from hr_training.utils.helpers import unique_ids

logger = logging.getLogger(__name__)


def plan_positions(current_ids: List[int], ordered_ids: List[int]) -> dict:
    """Map every sibling id to a unique 1-based position.

    Listed ids come first in the given order; siblings left out keep their
    relative order after them.
    """
    ordered = unique_ids(ordered_ids)
    unknown = [item for item in ordered if item not in current_ids]
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid id(s) for this parent: {unknown}."
        )
    remaining = [item for item in current_ids if item not in ordered]
    return {item: position for position, item in enumerate(ordered + remaining, start=1)}


class CurriculumService:
    def _get_or_raise(self, db: Session, module_id: int):
        module = crud_module.get(db, id=module_id)
        if not module:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Module not found.")
        return module

    def _require_free_position(self, db: Session, course_id: int, sort_order: int, module_id: int = None):
        if sort_order < 1:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Module sort_order must be 1 or greater.")
        taken = crud_module.get_by_position(db, course_id=course_id, sort_order=sort_order)
        if taken and taken.id != module_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Module position {sort_order} is already used in this course."
            )

    @service_result()
    def get_modules_by_course(self, db: Session, course_id: int) -> List[Module]:
        if not crud_course.get(db, id=course_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")
        return [Module.model_validate(m) for m in crud_module.get_by_course(db, course_id=course_id)]

    @service_result()
    def create_module(self, db: Session, module_in: ModuleCreate) -> Module:
        title = (module_in.title or "").strip()
        if not module_in.course_id or not title:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Module course_id and title are required.")

        if not crud_course.get(db, id=module_in.course_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")

        sort_order = module_in.sort_order
        if sort_order is None:
            sort_order = crud_module.get_max_position(db, course_id=module_in.course_id) + 1
        self._require_free_position(db, module_in.course_id, sort_order)

        module = crud_module.create(db, obj_in={"course_id": module_in.course_id, "title": title, "sort_order": sort_order})
        logger.info(f"Created module {module.id} in course {module.course_id}")
        return Module.model_validate(module)

    @service_result()
    def update_module(self, db: Session, module_id: int, module_in: ModuleUpdate) -> Module:
        module = self._get_or_raise(db, module_id)

        update_data = module_in.model_dump(exclude_unset=True)
        if "title" in update_data:
            update_data["title"] = (update_data["title"] or "").strip()
            if not update_data["title"]:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Module course_id and title are required.")
        if update_data.get("sort_order") is not None:
            self._require_free_position(db, module.course_id, update_data["sort_order"], module_id=module.id)
        else:
            update_data.pop("sort_order", None)

        module = crud_module.update(db, db_obj=module, obj_in=update_data)
        return Module.model_validate(module)

    @service_result()
    def reorder_modules(self, db: Session, course_id: int, ordered_ids: List[int]) -> List[Module]:
        if not crud_course.get(db, id=course_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")

        modules = crud_module.get_by_course(db, course_id=course_id)
        positions = plan_positions([m.id for m in modules], ordered_ids)
        for module in modules:
            module.sort_order = positions[module.id]
        db.commit()

        logger.info(f"Reordered {len(modules)} modules in course {course_id}")
        return [Module.model_validate(m) for m in crud_module.get_by_course(db, course_id=course_id)]

    @service_result()
    def delete_module(self, db: Session, module_id: int) -> dict:
        self._get_or_raise(db, module_id)
        counts = purge_modules(db, [module_id])
        db.commit()
        logger.info(f"Deleted module {module_id}: {counts}")
        return counts


curriculum_service = CurriculumService()
