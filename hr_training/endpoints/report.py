from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hr_training.schemas.response import APIResponse
from hr_training.utils import deps
from hr_training.schemas.report import CourseReportRow, DashboardStats, EmployeeReportRow, EmployeeResultRow
from hr_training.services.report import report_service

router = APIRouter()

@router.get("/dashboard", response_model=APIResponse[DashboardStats])
def get_dashboard_stats(db: Session = Depends(deps.get_db)):
    stats = deps.unwrap(report_service.dashboard_stats(db))
    return APIResponse(message="Dashboard statistics retrieved successfully", data=stats)

@router.get("/courses", response_model=APIResponse[List[CourseReportRow]])
def get_course_report(db: Session = Depends(deps.get_db)):
    rows = deps.unwrap(report_service.course_report(db))
    return APIResponse(message="Course report retrieved successfully", data=rows)

@router.get("/employees", response_model=APIResponse[List[EmployeeReportRow]])
def get_employee_report(db: Session = Depends(deps.get_db)):
    rows = deps.unwrap(report_service.employee_report(db))
    return APIResponse(message="Employee report retrieved successfully", data=rows)

@router.get("/employees/{employee_id}/results", response_model=APIResponse[List[EmployeeResultRow]])
def get_employee_results(
    employee_id: int,
    db: Session = Depends(deps.get_db)
):
    rows = deps.unwrap(report_service.employee_results(db, employee_id=employee_id))
    return APIResponse(message="Employee results retrieved successfully", data=rows)
