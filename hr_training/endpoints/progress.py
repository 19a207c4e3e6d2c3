from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hr_training.schemas.response import APIResponse
from hr_training.utils import deps
from hr_training.schemas.progress import LessonProgress, LessonProgressUpdate
from hr_training.services.progress import progress_service

router = APIRouter()

@router.put("/lessons/{lesson_id}/progress", response_model=APIResponse[LessonProgress])
def record_lesson_progress(
    lesson_id: int,
    progress_in: LessonProgressUpdate,
    db: Session = Depends(deps.get_db)
):
    progress = deps.unwrap(progress_service.record_lesson_progress(
        db,
        employee_id=progress_in.employee_id,
        lesson_id=lesson_id,
        completed=progress_in.completed,
        last_position_seconds=progress_in.last_position_seconds,
    ))
    return APIResponse(message="Lesson progress saved", data=progress)
