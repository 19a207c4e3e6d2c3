from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime

from hr_training.core.constants import CourseStatusEnum

class DashboardStats(BaseModel):
    total_courses: int
    published_courses: int
    draft_courses: int
    total_enrollments: int
    total_attempts: int
    average_score: int
    pass_rate: int

class CourseReportRow(BaseModel):
    course_id: int
    title: str
    status: CourseStatusEnum
    enrollments: int
    started: int
    completed: int
    average_score: int
    attempts: int
    pass_rate: int

class EmployeeReportRow(BaseModel):
    employee_id: int
    employee_name: Optional[str] = None
    employee_email: Optional[str] = None
    department: Optional[str] = None
    course_id: int
    course_title: str
    course_status: CourseStatusEnum
    assigned_at: Optional[datetime] = None
    due_date: Optional[date] = None
    completion_percent: int
    completion_date: Optional[datetime] = None
    attempts: int
    latest_score: Optional[int] = None
    pass_status: Optional[bool] = None
    status: str
    overdue: bool
    has_started: bool

class EmployeeResultRow(BaseModel):
    course_id: int
    course_title: str
    completion_percent: int
    completion_date: Optional[datetime] = None
    latest_score: Optional[int] = None
    pass_status: Optional[bool] = None
    attempts: int
    enrollment_status: Optional[str] = None
