from sqlalchemy import Column, Integer, Boolean, DateTime, Text, ForeignKey
from hr_training.core.database import Base

class QuizAttempt(Base):
    __tablename__ = "training_quiz_attempts"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    quiz_id = Column(Integer, ForeignKey("training_quizzes.id"), nullable=False, index=True)
    started_at = Column(DateTime, nullable=True)
    submitted_at = Column(DateTime, nullable=False)
    score = Column(Integer, nullable=False, default=0)
    passed = Column(Boolean, nullable=False, default=False)
    answers_json = Column(Text, nullable=True) # submitted answers plus grading breakdown
