from pydantic import BaseModel, ConfigDict
from typing import Optional, List

from hr_training.core.constants import LessonTypeEnum
from hr_training.utils.helpers import safe_json_parse, normalize_list

class LessonResource(BaseModel):
    title: str = ""
    url: str = ""

    model_config = ConfigDict(frozen=True)

class LessonCreate(BaseModel):
    module_id: Optional[int] = None
    title: Optional[str] = None
    lesson_type: LessonTypeEnum = LessonTypeEnum.CONTENT
    sort_order: Optional[int] = None
    content_html: Optional[str] = None
    video_url: Optional[str] = None
    resources: Optional[List[LessonResource]] = None

class LessonUpdate(BaseModel):
    title: Optional[str] = None
    lesson_type: Optional[LessonTypeEnum] = None
    sort_order: Optional[int] = None
    content_html: Optional[str] = None
    video_url: Optional[str] = None
    resources: Optional[List[LessonResource]] = None

class Lesson(BaseModel):
    id: int
    module_id: int
    title: str
    sort_order: int
    lesson_type: LessonTypeEnum
    content_html: Optional[str] = None
    video_url: Optional[str] = None
    resources: Optional[List[LessonResource]] = None

    @classmethod
    def from_row(cls, row) -> "Lesson":
        return cls(
            id=row.id,
            module_id=row.module_id,
            title=row.title,
            sort_order=row.sort_order or 0,
            lesson_type=row.lesson_type,
            content_html=row.content_html,
            video_url=row.video_url,
            resources=parse_resources(row.resources_json),
        )


def parse_resources(raw) -> List[LessonResource]:
    """Corrupt or non-list payloads yield an empty list; non-object items are dropped."""
    resources = []
    for item in normalize_list(safe_json_parse(raw, [])):
        if not isinstance(item, dict):
            continue
        resources.append(LessonResource(title=str(item.get("title") or ""), url=str(item.get("url") or "")))
    return resources
