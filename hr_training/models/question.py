from sqlalchemy import Column, Integer, Text, ForeignKey, Enum
from hr_training.core.database import Base
from hr_training.core.constants import QuestionTypeEnum

class Question(Base):
    __tablename__ = "training_quiz_questions"

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("training_quizzes.id"), nullable=False, index=True)
    question_text = Column(Text, nullable=False)
    question_type = Column(Enum(QuestionTypeEnum), nullable=False, default=QuestionTypeEnum.SINGLE)
    options_json = Column(Text, nullable=True) # JSON list of option strings
    correct_answer_json = Column(Text, nullable=True) # JSON value shaped by question_type
    points = Column(Integer, nullable=False, default=1)
