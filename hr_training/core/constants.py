from enum import Enum


class CourseDifficultyEnum(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

class CourseStatusEnum(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"

class LessonTypeEnum(str, Enum):
    CONTENT = "content"
    VIDEO = "video"
    RESOURCES = "resources"

class QuestionTypeEnum(str, Enum):
    SINGLE = "single"
    MULTI = "multi"
    TRUE_FALSE = "truefalse"
    SHORT = "short"

class EnrollmentStatusEnum(str, Enum):
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

class EmployeeCourseStatusEnum(str, Enum):
    AVAILABLE = "available"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
