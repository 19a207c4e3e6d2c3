"""Answer keys for the four question shapes.

Each key type carries its own typed representation of the stored correct
answer and decides correctness for a submitted value. A key built from an
absent or malformed stored value never grades a submission as correct.
"""
from typing import Any, Dict, FrozenSet, Iterable, Optional, Type

from pydantic import BaseModel, ConfigDict

from hr_training.core.constants import QuestionTypeEnum
from hr_training.schemas.attempt import GradingSummary, QuestionGrade


def normalize_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip().lower()


def normalize_answer(value: Any) -> str:
    """Canonical comparable form; lists become a sorted, de-duplicated, pipe-joined string."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return "|".join(sorted({normalize_scalar(item) for item in value}))
    return normalize_scalar(value)


def _normalized_set(values: Iterable[Any]) -> FrozenSet[str]:
    return frozenset(item for item in (normalize_scalar(value) for value in values) if item)


class AnswerKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_raw(cls, raw: Any) -> "AnswerKey":
        raise NotImplementedError

    def is_correct(self, submitted: Any) -> bool:
        raise NotImplementedError


class SingleChoiceKey(AnswerKey):
    answer: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "SingleChoiceKey":
        if raw is None or isinstance(raw, dict):
            return cls()
        return cls(answer=normalize_answer(raw) or None)

    def is_correct(self, submitted: Any) -> bool:
        if self.answer is None or submitted is None:
            return False
        return normalize_answer(submitted) == self.answer


class MultiChoiceKey(AnswerKey):
    answers: FrozenSet[str] = frozenset()

    @classmethod
    def from_raw(cls, raw: Any) -> "MultiChoiceKey":
        if not isinstance(raw, list):
            return cls()
        return cls(answers=_normalized_set(raw))

    def is_correct(self, submitted: Any) -> bool:
        if not self.answers or submitted is None:
            return False
        if isinstance(submitted, (list, tuple, set, frozenset)):
            chosen = _normalized_set(submitted)
        else:
            chosen = _normalized_set([submitted])
        return chosen == self.answers


class TrueFalseKey(AnswerKey):
    answer: Optional[bool] = None

    @classmethod
    def from_raw(cls, raw: Any) -> "TrueFalseKey":
        if isinstance(raw, bool):
            return cls(answer=raw)
        if isinstance(raw, str) and normalize_scalar(raw) in ("true", "false"):
            return cls(answer=normalize_scalar(raw) == "true")
        return cls()

    def is_correct(self, submitted: Any) -> bool:
        if self.answer is None or submitted is None:
            return False
        return normalize_scalar(submitted) == normalize_scalar(self.answer)


class ShortAnswerKey(AnswerKey):
    accepted: FrozenSet[str] = frozenset()

    @classmethod
    def from_raw(cls, raw: Any) -> "ShortAnswerKey":
        if isinstance(raw, list):
            return cls(accepted=_normalized_set(item for item in raw if not isinstance(item, (list, dict))))
        if raw is None or isinstance(raw, dict):
            return cls()
        return cls(accepted=_normalized_set([raw]))

    def is_correct(self, submitted: Any) -> bool:
        if not self.accepted or submitted is None:
            return False
        return normalize_scalar(submitted) in self.accepted


ANSWER_KEYS: Dict[QuestionTypeEnum, Type[AnswerKey]] = {
    QuestionTypeEnum.SINGLE: SingleChoiceKey,
    QuestionTypeEnum.MULTI: MultiChoiceKey,
    QuestionTypeEnum.TRUE_FALSE: TrueFalseKey,
    QuestionTypeEnum.SHORT: ShortAnswerKey,
}


def answer_key_for(question_type: Any, raw: Any) -> AnswerKey:
    try:
        key_type = ANSWER_KEYS[QuestionTypeEnum(getattr(question_type, "value", question_type))]
    except ValueError:
        key_type = SingleChoiceKey
    return key_type.from_raw(raw)


def normalize_answer_map(answers: Optional[Dict[Any, Any]]) -> Dict[int, Any]:
    """Coerce submitted question ids to ints; keys that are not ids are dropped."""
    normalized = {}
    for key, value in (answers or {}).items():
        try:
            normalized[int(key)] = value
        except (TypeError, ValueError):
            continue
    return normalized


def grade_questions(questions: Iterable[Any], answers: Optional[Dict[Any, Any]]) -> GradingSummary:
    """Grade every question of a quiz. Answers for unknown question ids are ignored."""
    submitted_answers = normalize_answer_map(answers)
    grading = []
    earned_points = 0
    total_points = 0

    for question in questions:
        submitted = submitted_answers.get(question.id)
        key = answer_key_for(question.question_type, question.correct_answer)
        correct = key.is_correct(submitted)
        points = int(question.points or 1)
        total_points += points
        if correct:
            earned_points += points

        grading.append(QuestionGrade(
            question_id=question.id,
            submitted_answer=submitted,
            is_correct=correct,
            earned_points=points if correct else 0,
            points=points,
        ))

    return GradingSummary(grading=grading, earned_points=earned_points, total_points=total_points)
