from sqlalchemy import Column, Integer, String, ForeignKey
from hr_training.core.database import Base

class Module(Base):
    __tablename__ = "training_modules"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("training_courses.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False, default=1)
