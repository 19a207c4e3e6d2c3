from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from hr_training.core.database import Base

class LessonProgress(Base):
    __tablename__ = "training_progress"
    __table_args__ = (
        UniqueConstraint("employee_id", "lesson_id", name="uq_training_progress_employee_lesson"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    lesson_id = Column(Integer, ForeignKey("training_lessons.id"), nullable=False, index=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)
    last_position_seconds = Column(Integer, nullable=True)
    updated_at = Column(DateTime, nullable=True)
