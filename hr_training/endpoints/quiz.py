from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_training.schemas.response import APIResponse
from hr_training.utils import deps
from hr_training.schemas.quiz import Quiz, QuizCreate, QuizUpdate
from hr_training.schemas.question import Question, QuestionCreate, QuestionUpdate
from hr_training.schemas.attempt import AttemptResult, QuizSubmission
from hr_training.services.quiz import quiz_service
from hr_training.services.quiz_attempt import quiz_attempt_service

router = APIRouter()


@router.post("/", response_model=APIResponse[Quiz], status_code=status.HTTP_201_CREATED)
def create_quiz(
    quiz_in: QuizCreate,
    db: Session = Depends(deps.get_db)
):
    new_quiz = deps.unwrap(quiz_service.create_quiz(db, quiz_in=quiz_in))
    return APIResponse(message="Quiz created successfully", data=new_quiz)


@router.post("/questions/", response_model=APIResponse[Question], status_code=status.HTTP_201_CREATED)
def create_question(
    question_in: QuestionCreate,
    db: Session = Depends(deps.get_db)
):
    new_question = deps.unwrap(quiz_service.create_question(db, question_in=question_in))
    return APIResponse(message="Question created successfully", data=new_question)


@router.put("/questions/{question_id}", response_model=APIResponse[Question])
def update_question(
    question_id: int,
    question_in: QuestionUpdate,
    db: Session = Depends(deps.get_db)
):
    question = deps.unwrap(quiz_service.update_question(db, question_id=question_id, question_in=question_in))
    return APIResponse(message="Question updated successfully", data=question)


@router.delete("/questions/{question_id}", response_model=APIResponse[dict])
def delete_question(
    question_id: int,
    db: Session = Depends(deps.get_db)
):
    counts = deps.unwrap(quiz_service.delete_question(db, question_id=question_id))
    return APIResponse(message="Question deleted successfully", data=counts)


@router.get("/{quiz_id}", response_model=APIResponse[Quiz])
def read_quiz(
    quiz_id: int,
    db: Session = Depends(deps.get_db)
):
    quiz = deps.unwrap(quiz_service.get_quiz(db, quiz_id=quiz_id))
    return APIResponse(message="Quiz retrieved successfully", data=quiz)


@router.get("/{quiz_id}/questions", response_model=APIResponse[List[Question]])
def get_quiz_questions(
    quiz_id: int,
    db: Session = Depends(deps.get_db)
):
    questions = deps.unwrap(quiz_service.get_questions(db, quiz_id=quiz_id))
    return APIResponse(message="Questions retrieved successfully", data=questions)


@router.put("/{quiz_id}", response_model=APIResponse[Quiz])
def update_quiz(
    quiz_id: int,
    quiz_in: QuizUpdate,
    db: Session = Depends(deps.get_db)
):
    quiz = deps.unwrap(quiz_service.update_quiz(db, quiz_id=quiz_id, quiz_in=quiz_in))
    return APIResponse(message="Quiz updated successfully", data=quiz)


@router.delete("/{quiz_id}", response_model=APIResponse[dict])
def delete_quiz(
    quiz_id: int,
    db: Session = Depends(deps.get_db)
):
    counts = deps.unwrap(quiz_service.delete_quiz(db, quiz_id=quiz_id))
    return APIResponse(message="Quiz deleted successfully", data=counts)


@router.post("/{quiz_id}/attempts", response_model=APIResponse[AttemptResult], status_code=status.HTTP_201_CREATED)
def submit_quiz_attempt(
    quiz_id: int,
    submission: QuizSubmission,
    db: Session = Depends(deps.get_db)
):
    result = deps.unwrap(quiz_attempt_service.submit_attempt(
        db, employee_id=submission.employee_id, quiz_id=quiz_id, answers=submission.answers
    ))
    message = "Quiz passed" if result.passed else "Quiz submitted"
    return APIResponse(message=message, data=result)
