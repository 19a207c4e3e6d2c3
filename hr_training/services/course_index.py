from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from hr_training.models.module import Module
from hr_training.models.lesson import Lesson
from hr_training.models.quiz import Quiz


class CourseIndex:
    """In-memory module → course joins over flat rows.

    Lessons and quizzes whose parent chain does not reach a known course are
    left out rather than raising.
    """

    def __init__(self, modules: Iterable[Module], lessons: Iterable[Lesson], quizzes: Iterable[Quiz] = ()):
        self.course_by_module: Dict[int, int] = {m.id: m.course_id for m in modules}
        self.course_by_lesson: Dict[int, int] = {}
        self.lessons_by_course: Dict[int, List[int]] = defaultdict(list)

        for lesson in lessons:
            course_id = self.course_by_module.get(lesson.module_id)
            if not course_id:
                continue
            self.course_by_lesson[lesson.id] = course_id
            self.lessons_by_course[course_id].append(lesson.id)

        self.course_by_quiz: Dict[int, int] = {}
        for quiz in quizzes:
            if quiz.lesson_id:
                course_id = self.course_by_lesson.get(quiz.lesson_id)
            else:
                course_id = self.course_by_module.get(quiz.module_id)
            if course_id:
                self.course_by_quiz[quiz.id] = course_id

    def course_for_lesson(self, lesson_id: int) -> Optional[int]:
        return self.course_by_lesson.get(lesson_id)

    def course_for_quiz(self, quiz_id: int) -> Optional[int]:
        return self.course_by_quiz.get(quiz_id)

    def lesson_ids_for(self, course_id: int) -> List[int]:
        return self.lessons_by_course.get(course_id, [])
