import logging
from typing import Any, Dict, List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from hr_training.core.constants import LessonTypeEnum
from hr_training.core.decorators import service_result
from hr_training.crud.lesson import lesson as crud_lesson
from hr_training.crud.module import module as crud_module
from hr_training.schemas.lesson import Lesson, LessonCreate, LessonUpdate
from hr_training.services.cascade import purge_lessons
from hr_training.services.curriculum import plan_positions
from hr_training.utils.helpers import dump_json

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = "Lesson module_id and title are required."


def lesson_payload(lesson_type: LessonTypeEnum, content_html=None, video_url=None, resources=None) -> Dict[str, Any]:
    """Keep only the payload column matching the lesson type; the others are cleared."""
    lesson_type = LessonTypeEnum(lesson_type)
    payload = {"lesson_type": lesson_type, "content_html": None, "video_url": None, "resources_json": None}
    if lesson_type == LessonTypeEnum.CONTENT:
        payload["content_html"] = content_html or ""
    elif lesson_type == LessonTypeEnum.VIDEO:
        payload["video_url"] = (video_url or "").strip() or None
    else:
        items = [r if isinstance(r, dict) else r.model_dump() for r in resources or []]
        payload["resources_json"] = dump_json(items)
    return payload


class LessonService:
    def _get_or_raise(self, db: Session, lesson_id: int):
        lesson = crud_lesson.get(db, id=lesson_id)
        if not lesson:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found.")
        return lesson

    def _require_free_position(self, db: Session, module_id: int, sort_order: int, lesson_id: int = None):
        if sort_order < 1:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Lesson sort_order must be 1 or greater.")
        taken = crud_lesson.get_by_position(db, module_id=module_id, sort_order=sort_order)
        if taken and taken.id != lesson_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Lesson position {sort_order} is already used in this module."
            )

    @service_result()
    def get_lessons_by_module(self, db: Session, module_id: int) -> List[Lesson]:
        if not crud_module.get(db, id=module_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Module not found.")
        return [Lesson.from_row(row) for row in crud_lesson.get_by_module(db, module_id=module_id)]

    @service_result()
    def create_lesson(self, db: Session, lesson_in: LessonCreate) -> Lesson:
        title = (lesson_in.title or "").strip()
        if not lesson_in.module_id or not title:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=REQUIRED_FIELDS)

        if not crud_module.get(db, id=lesson_in.module_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Module not found.")

        sort_order = lesson_in.sort_order
        if sort_order is None:
            sort_order = crud_lesson.get_max_position(db, module_id=lesson_in.module_id) + 1
        self._require_free_position(db, lesson_in.module_id, sort_order)

        lesson = crud_lesson.create(db, obj_in={
            "module_id": lesson_in.module_id,
            "title": title,
            "sort_order": sort_order,
            **lesson_payload(lesson_in.lesson_type, lesson_in.content_html, lesson_in.video_url, lesson_in.resources),
        })
        logger.info(f"Created {lesson.lesson_type.value} lesson {lesson.id} in module {lesson.module_id}")
        return Lesson.from_row(lesson)

    @service_result()
    def update_lesson(self, db: Session, lesson_id: int, lesson_in: LessonUpdate) -> Lesson:
        lesson = self._get_or_raise(db, lesson_id)
        current = Lesson.from_row(lesson)

        update_data = lesson_in.model_dump(exclude_unset=True)
        if "title" in update_data:
            update_data["title"] = (update_data["title"] or "").strip()
            if not update_data["title"]:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=REQUIRED_FIELDS)
        if update_data.get("sort_order") is not None:
            self._require_free_position(db, lesson.module_id, update_data["sort_order"], lesson_id=lesson.id)
        else:
            update_data.pop("sort_order", None)

        # payload columns are recomputed as a whole from the merged values
        payload = lesson_payload(
            update_data.pop("lesson_type", None) or current.lesson_type,
            update_data.pop("content_html", current.content_html),
            update_data.pop("video_url", current.video_url),
            update_data.pop("resources", current.resources),
        )
        update_data.update(payload)

        lesson = crud_lesson.update(db, db_obj=lesson, obj_in=update_data)
        return Lesson.from_row(lesson)

    @service_result()
    def reorder_lessons(self, db: Session, module_id: int, ordered_ids: List[int]) -> List[Lesson]:
        if not crud_module.get(db, id=module_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Module not found.")

        lessons = crud_lesson.get_by_module(db, module_id=module_id)
        positions = plan_positions([l.id for l in lessons], ordered_ids)
        for lesson in lessons:
            lesson.sort_order = positions[lesson.id]
        db.commit()

        logger.info(f"Reordered {len(lessons)} lessons in module {module_id}")
        return [Lesson.from_row(row) for row in crud_lesson.get_by_module(db, module_id=module_id)]

    @service_result()
    def delete_lesson(self, db: Session, lesson_id: int) -> dict:
        self._get_or_raise(db, lesson_id)
        counts = purge_lessons(db, [lesson_id])
        db.commit()
        logger.info(f"Deleted lesson {lesson_id}: {counts}")
        return counts


lesson_service = LessonService()
