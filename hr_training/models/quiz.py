from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from hr_training.core.database import Base

class Quiz(Base):
    __tablename__ = "training_quizzes"
    __table_args__ = (
        CheckConstraint(
            "(module_id IS NULL) <> (lesson_id IS NULL)",
            name="ck_training_quizzes_single_target"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    pass_mark = Column(Integer, nullable=False, default=50)
    time_limit_seconds = Column(Integer, nullable=True)
    module_id = Column(Integer, ForeignKey("training_modules.id"), nullable=True, index=True)
    lesson_id = Column(Integer, ForeignKey("training_lessons.id"), nullable=True, index=True)
