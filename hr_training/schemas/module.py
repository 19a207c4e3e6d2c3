from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

class ModuleCreate(BaseModel):
    course_id: Optional[int] = None
    title: Optional[str] = None
    sort_order: Optional[int] = None

class ModuleUpdate(BaseModel):
    title: Optional[str] = None
    sort_order: Optional[int] = None

class Module(BaseModel):
    id: int
    course_id: int
    title: str
    sort_order: int

    model_config = ConfigDict(from_attributes=True)

class ReorderRequest(BaseModel):
    ordered_ids: List[int] = Field(default_factory=list)
