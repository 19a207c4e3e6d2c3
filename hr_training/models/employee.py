from sqlalchemy import Column, Integer, String
from hr_training.core.database import Base

class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=True)
    department = Column(String, nullable=True)
    position = Column(String, nullable=True)
