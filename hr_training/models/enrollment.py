from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, Enum, UniqueConstraint
from hr_training.core.database import Base
from hr_training.core.constants import EnrollmentStatusEnum

class Enrollment(Base):
    __tablename__ = "training_enrollments"
    __table_args__ = (
        UniqueConstraint("employee_id", "course_id", name="uq_training_enrollments_employee_course"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("training_courses.id"), nullable=False, index=True)
    assigned_by = Column(Integer, nullable=True)
    assigned_at = Column(DateTime, nullable=False)
    due_date = Column(Date, nullable=True)
    # advisory only, completion is always derived from progress rows
    status = Column(Enum(EnrollmentStatusEnum), nullable=False, default=EnrollmentStatusEnum.ASSIGNED)
