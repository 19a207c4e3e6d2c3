from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_training.schemas.response import APIResponse
from hr_training.utils import deps
from hr_training.schemas.employee import Employee
from hr_training.schemas.enrollment import AssignmentRequest, AssignmentResult, EmployeeCourse
from hr_training.services.enrollment import enrollment_service

router = APIRouter()

@router.post("/", response_model=APIResponse[AssignmentResult], status_code=status.HTTP_201_CREATED)
def assign_course(
    assignment_in: AssignmentRequest,
    db: Session = Depends(deps.get_db)
):
    result = deps.unwrap(enrollment_service.assign(
        db,
        course_id=assignment_in.course_id,
        employee_ids=assignment_in.employee_ids,
        assigned_by=assignment_in.assigned_by,
        due_date=assignment_in.due_date,
    ))
    return APIResponse(message=f"{result.inserted} enrollment(s) created, {result.skipped} skipped", data=result)

@router.get("/employees", response_model=APIResponse[List[Employee]])
def list_employees(db: Session = Depends(deps.get_db)):
    employees = deps.unwrap(enrollment_service.list_employees(db))
    return APIResponse(message="Employees retrieved successfully", data=employees)

@router.get("/employees/{employee_id}/courses", response_model=APIResponse[List[EmployeeCourse]])
def list_employee_courses(
    employee_id: int,
    db: Session = Depends(deps.get_db)
):
    courses = deps.unwrap(enrollment_service.list_for_employee(db, employee_id=employee_id))
    return APIResponse(message="Employee courses retrieved successfully", data=courses)
