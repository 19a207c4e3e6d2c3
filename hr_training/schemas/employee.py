from pydantic import BaseModel, ConfigDict
from typing import Optional

class Employee(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
