from hr_training.models.course import Course
from hr_training.models.module import Module
from hr_training.models.lesson import Lesson
from hr_training.models.quiz import Quiz
from hr_training.models.question import Question
from hr_training.models.enrollment import Enrollment
from hr_training.models.progress import LessonProgress
from hr_training.models.attempt import QuizAttempt
from hr_training.models.employee import Employee
