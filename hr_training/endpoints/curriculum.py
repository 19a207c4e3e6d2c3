from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_training.schemas.response import APIResponse
from hr_training.utils import deps
from hr_training.schemas.module import Module, ModuleCreate, ModuleUpdate, ReorderRequest
from hr_training.schemas.lesson import Lesson, LessonCreate, LessonUpdate
from hr_training.services.curriculum import curriculum_service
from hr_training.services.lesson import lesson_service

router = APIRouter()

@router.post("/modules/", response_model=APIResponse[Module], status_code=status.HTTP_201_CREATED)
def create_module(
    module_in: ModuleCreate,
    db: Session = Depends(deps.get_db)
):
    new_module = deps.unwrap(curriculum_service.create_module(db, module_in=module_in))
    return APIResponse(message="Module created successfully", data=new_module)

@router.get("/courses/{course_id}/modules/", response_model=APIResponse[List[Module]])
def get_modules_by_course(
    course_id: int,
    db: Session = Depends(deps.get_db)
):
    modules = deps.unwrap(curriculum_service.get_modules_by_course(db, course_id=course_id))
    return APIResponse(message="Modules retrieved successfully", data=modules)

@router.put("/courses/{course_id}/modules/order", response_model=APIResponse[List[Module]])
def reorder_modules(
    course_id: int,
    reorder_in: ReorderRequest,
    db: Session = Depends(deps.get_db)
):
    modules = deps.unwrap(curriculum_service.reorder_modules(db, course_id=course_id, ordered_ids=reorder_in.ordered_ids))
    return APIResponse(message="Modules reordered successfully", data=modules)

@router.put("/modules/{module_id}", response_model=APIResponse[Module])
def update_module(
    module_id: int,
    module_in: ModuleUpdate,
    db: Session = Depends(deps.get_db)
):
    module = deps.unwrap(curriculum_service.update_module(db, module_id=module_id, module_in=module_in))
    return APIResponse(message="Module updated successfully", data=module)

@router.delete("/modules/{module_id}", response_model=APIResponse[dict])
def delete_module(
    module_id: int,
    db: Session = Depends(deps.get_db)
):
    counts = deps.unwrap(curriculum_service.delete_module(db, module_id=module_id))
    return APIResponse(message="Module deleted successfully", data=counts)


@router.post("/lessons/", response_model=APIResponse[Lesson], status_code=status.HTTP_201_CREATED)
def create_lesson(
    lesson_in: LessonCreate,
    db: Session = Depends(deps.get_db)
):
    new_lesson = deps.unwrap(lesson_service.create_lesson(db, lesson_in=lesson_in))
    return APIResponse(message="Lesson created successfully", data=new_lesson)

@router.get("/modules/{module_id}/lessons/", response_model=APIResponse[List[Lesson]])
def get_lessons_by_module(
    module_id: int,
    db: Session = Depends(deps.get_db)
):
    lessons = deps.unwrap(lesson_service.get_lessons_by_module(db, module_id=module_id))
    return APIResponse(message="Lessons retrieved successfully", data=lessons)

@router.put("/modules/{module_id}/lessons/order", response_model=APIResponse[List[Lesson]])
def reorder_lessons(
    module_id: int,
    reorder_in: ReorderRequest,
    db: Session = Depends(deps.get_db)
):
    lessons = deps.unwrap(lesson_service.reorder_lessons(db, module_id=module_id, ordered_ids=reorder_in.ordered_ids))
    return APIResponse(message="Lessons reordered successfully", data=lessons)

@router.put("/lessons/{lesson_id}", response_model=APIResponse[Lesson])
def update_lesson(
    lesson_id: int,
    lesson_in: LessonUpdate,
    db: Session = Depends(deps.get_db)
):
    lesson = deps.unwrap(lesson_service.update_lesson(db, lesson_id=lesson_id, lesson_in=lesson_in))
    return APIResponse(message="Lesson updated successfully", data=lesson)

@router.delete("/lessons/{lesson_id}", response_model=APIResponse[dict])
def delete_lesson(
    lesson_id: int,
    db: Session = Depends(deps.get_db)
):
    counts = deps.unwrap(lesson_service.delete_lesson(db, lesson_id=lesson_id))
    return APIResponse(message="Lesson deleted successfully", data=counts)
