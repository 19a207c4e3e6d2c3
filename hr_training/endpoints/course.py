from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_training.schemas.response import APIResponse
from hr_training.utils import deps
from hr_training.schemas.course import Course, CourseCreate, CourseUpdate
from hr_training.schemas.content_tree import CourseTree, CoursePlayer
from hr_training.services.course import course_service
from hr_training.services.content_tree import content_tree_service

router = APIRouter()


@router.post("/", response_model=APIResponse[Course], status_code=status.HTTP_201_CREATED)
def create_course(
    *,
    db: Session = Depends(deps.get_db),
    course_in: CourseCreate,
    created_by: Optional[int] = None
):
    new_course = deps.unwrap(course_service.create_course(db, course_in=course_in, created_by=created_by))
    return APIResponse(message="Course created successfully", data=new_course)


@router.get("/", response_model=APIResponse[List[Course]])
def get_all_courses(
    db: Session = Depends(deps.get_db),
    include_draft: bool = True
):
    courses = deps.unwrap(course_service.list_courses(db, include_draft=include_draft))
    return APIResponse(message="Courses retrieved successfully", data=courses)


@router.get("/{course_id}", response_model=APIResponse[Course])
def read_course(
    course_id: int,
    db: Session = Depends(deps.get_db)
):
    course = deps.unwrap(course_service.get_course(db, course_id=course_id))
    return APIResponse(message="Course retrieved successfully", data=course)


@router.get("/{course_id}/tree", response_model=APIResponse[CourseTree])
def read_course_tree(
    course_id: int,
    db: Session = Depends(deps.get_db)
):
    tree = deps.unwrap(content_tree_service.get_course_tree(db, course_id=course_id))
    return APIResponse(message="Course content retrieved successfully", data=tree)


@router.get("/{course_id}/player", response_model=APIResponse[CoursePlayer])
def read_course_player(
    course_id: int,
    employee_id: int,
    db: Session = Depends(deps.get_db)
):
    player = deps.unwrap(content_tree_service.get_course_player(db, course_id=course_id, employee_id=employee_id))
    return APIResponse(message="Course player retrieved successfully", data=player)


@router.put("/{course_id}", response_model=APIResponse[Course])
def update_course(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    course_in: CourseUpdate
):
    course = deps.unwrap(course_service.update_course(db, course_id=course_id, course_in=course_in))
    return APIResponse(message="Course updated successfully", data=course)


@router.delete("/{course_id}", response_model=APIResponse[dict])
def delete_course(
    course_id: int,
    db: Session = Depends(deps.get_db)
):
    counts = deps.unwrap(course_service.delete_course(db, course_id=course_id))
    return APIResponse(message="Course deleted successfully", data=counts)
