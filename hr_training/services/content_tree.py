import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from hr_training.core.config import settings
from hr_training.core.decorators import service_result
from hr_training.crud.course import course as crud_course
from hr_training.crud.module import module as crud_module
from hr_training.crud.lesson import lesson as crud_lesson
from hr_training.crud.quiz import quiz as crud_quiz
from hr_training.crud.question import question as crud_question
from hr_training.crud.progress import lesson_progress as crud_progress
from hr_training.crud.attempt import quiz_attempt as crud_attempt
from hr_training.models.course import Course
from hr_training.models.module import Module
from hr_training.models.lesson import Lesson
from hr_training.models.quiz import Quiz
from hr_training.models.question import Question as QuestionModel
from hr_training.schemas.attempt import QuizAttempt
from hr_training.schemas.content_tree import (
    CourseTree, ModuleNode, LessonNode, QuizNode, QuestionNode,
    CoursePlayer, PlayerModuleNode, PlayerLessonNode
)
from hr_training.schemas.course import Course as CourseSchema
from hr_training.schemas.lesson import Lesson as LessonSchema
from hr_training.schemas.progress import LessonProgress
from hr_training.schemas.question import Question as QuestionSchema

logger = logging.getLogger(__name__)

CONTENT_UNAVAILABLE = "Training content unavailable"


def _by_position(row) -> Tuple[int, int]:
    return (row.sort_order or 0, row.id or 0)


def _unique_by_id(rows: Iterable) -> List:
    seen = set()
    result = []
    for row in rows:
        if row.id in seen:
            continue
        seen.add(row.id)
        result.append(row)
    return result


def assemble_course_tree(
    course: Course,
    modules: Iterable[Module],
    lessons: Iterable[Lesson],
    quizzes: Iterable[Quiz],
    questions: Iterable[QuestionModel],
) -> CourseTree:
    """Join flat rows into one ordered course tree.

    Modules and lessons are ordered by (sort_order, id), questions by id.
    Rows whose parent is not part of this course are ignored.
    """
    questions_by_quiz: Dict[int, List[QuestionNode]] = defaultdict(list)
    for row in sorted(questions, key=lambda q: q.id):
        questions_by_quiz[row.quiz_id].append(QuestionNode(**QuestionSchema.from_row(row).model_dump()))

    module_quizzes: Dict[int, QuizNode] = {}
    lesson_quizzes: Dict[int, QuizNode] = {}
    for row in _unique_by_id(quizzes):
        node = QuizNode(
            id=row.id,
            title=row.title,
            pass_mark=int(row.pass_mark or settings.DEFAULT_PASS_MARK),
            time_limit_seconds=int(row.time_limit_seconds) if row.time_limit_seconds else None,
            module_id=row.module_id,
            lesson_id=row.lesson_id,
            questions=questions_by_quiz.get(row.id, []),
        )
        if row.lesson_id:
            lesson_quizzes[row.lesson_id] = node
        elif row.module_id:
            module_quizzes[row.module_id] = node

    lessons_by_module: Dict[int, List[LessonNode]] = defaultdict(list)
    for row in sorted(lessons, key=_by_position):
        lessons_by_module[row.module_id].append(
            LessonNode(**LessonSchema.from_row(row).model_dump(), quiz=lesson_quizzes.get(row.id))
        )

    module_nodes = [
        ModuleNode(
            id=row.id,
            course_id=row.course_id,
            title=row.title,
            sort_order=row.sort_order or 0,
            lessons=lessons_by_module.get(row.id, []),
            quiz=module_quizzes.get(row.id),
        )
        for row in sorted(modules, key=_by_position)
        if row.course_id == course.id
    ]

    return CourseTree(**CourseSchema.model_validate(course).model_dump(), modules=module_nodes)


class ContentTreeService:

    def _build_tree(self, db: Session, course_id: int) -> CourseTree:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")

        modules = crud_module.get_by_course(db, course_id=course_id)
        module_ids = [m.id for m in modules]
        lessons = crud_lesson.get_by_modules(db, module_ids=module_ids)
        lesson_ids = [l.id for l in lessons]

        # a quiz can only be reached through one parent, but both lookups run
        quizzes = crud_quiz.get_by_modules(db, module_ids=module_ids) + crud_quiz.get_by_lessons(db, lesson_ids=lesson_ids)
        quizzes = _unique_by_id(quizzes)
        questions = crud_question.get_by_quizzes(db, quiz_ids=[q.id for q in quizzes])

        return assemble_course_tree(course, modules, lessons, quizzes, questions)

    @service_result(store_error_prefix=CONTENT_UNAVAILABLE)
    def get_course_tree(self, db: Session, course_id: int) -> CourseTree:
        tree = self._build_tree(db, course_id)
        logger.debug(f"Assembled course {course_id} with {len(tree.modules)} modules")
        return tree

    @service_result(store_error_prefix=CONTENT_UNAVAILABLE)
    def get_course_player(self, db: Session, course_id: int, employee_id: int) -> CoursePlayer:
        """Course tree decorated with one employee's progress and latest quiz attempts."""
        tree = self._build_tree(db, course_id)

        progress_rows = crud_progress.get_by_employee_and_lessons(db, employee_id=employee_id, lesson_ids=tree.lesson_ids())
        progress_by_lesson = {row.lesson_id: LessonProgress.model_validate(row) for row in progress_rows}

        latest_by_quiz: Dict[int, QuizAttempt] = {}
        for row in crud_attempt.get_by_employee_and_quizzes(db, employee_id=employee_id, quiz_ids=tree.quiz_ids()):
            # rows arrive latest first
            latest_by_quiz.setdefault(row.quiz_id, QuizAttempt.model_validate(row))

        def latest_for(quiz: Optional[QuizNode]) -> Optional[QuizAttempt]:
            return latest_by_quiz.get(quiz.id) if quiz else None

        modules = [
            PlayerModuleNode(
                **module.model_dump(exclude={"lessons", "quiz"}),
                quiz=module.quiz,
                lessons=[
                    PlayerLessonNode(
                        **lesson.model_dump(exclude={"quiz"}),
                        quiz=lesson.quiz,
                        progress=progress_by_lesson.get(lesson.id),
                        latest_attempt=latest_for(lesson.quiz),
                    )
                    for lesson in module.lessons
                ],
                latest_attempt=latest_for(module.quiz),
            )
            for module in tree.modules
        ]

        return CoursePlayer(**tree.model_dump(exclude={"modules"}), employee_id=employee_id, modules=modules)


content_tree_service = ContentTreeService()
