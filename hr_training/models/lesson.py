from sqlalchemy import Column, Integer, String, Text, ForeignKey, Enum
from hr_training.core.database import Base
from hr_training.core.constants import LessonTypeEnum

class Lesson(Base):
    __tablename__ = "training_lessons"

    id = Column(Integer, primary_key=True, index=True)
    module_id = Column(Integer, ForeignKey("training_modules.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False, default=1)
    lesson_type = Column(Enum(LessonTypeEnum), nullable=False, default=LessonTypeEnum.CONTENT)
    # only the column matching lesson_type is populated
    content_html = Column(Text, nullable=True)
    video_url = Column(String, nullable=True)
    resources_json = Column(Text, nullable=True)
