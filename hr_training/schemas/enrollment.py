from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import date, datetime

from hr_training.core.constants import EnrollmentStatusEnum, EmployeeCourseStatusEnum
from hr_training.schemas.course import Course

class AssignmentRequest(BaseModel):
    course_id: int
    employee_ids: List[int] = Field(default_factory=list)
    assigned_by: Optional[int] = None
    due_date: Optional[date] = None

class AssignmentResult(BaseModel):
    inserted: int
    skipped: int

class Enrollment(BaseModel):
    id: int
    employee_id: int
    course_id: int
    assigned_by: Optional[int] = None
    assigned_at: datetime
    due_date: Optional[date] = None
    status: EnrollmentStatusEnum

    model_config = ConfigDict(from_attributes=True)

class EmployeeCourse(Course):
    completion_percent: int = 0
    enrollment: Optional[Enrollment] = None
    employee_status: EmployeeCourseStatusEnum
