"""
Intake State Management.

Forward-only state machine over the fixed question list. Every transition
returns a new state; the accumulated answers are never mutated in place and
there's no way back to a previous question.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

from .questions import QUESTIONS, Question


class QuestionnaireCompleteError(Exception):
    """Raised when an answer is submitted after the last question."""


@dataclass(frozen=True)
class QuestionnaireState:
    """
    Progress through the questionnaire.

    current_index points at the question awaiting an answer. Once it reaches
    len(questions) the flow is completed and profile() is ready to submit.
    """
    current_index: int = 0
    answers: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    completed: bool = False
    questions: tuple[Question, ...] = QUESTIONS

    @property
    def current_question(self) -> Question | None:
        if self.completed:
            return None
        return self.questions[self.current_index]

    @property
    def progress(self) -> int:
        """Percentage shown in the progress bar (counts the active question)."""
        if self.completed:
            return 100
        return round((self.current_index + 1) / len(self.questions) * 100)

    def profile(self) -> dict[str, Any]:
        """Accumulated answers as a plain dict, ready for /api/generate-diet."""
        return dict(self.answers)


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of one submit: the (possibly unchanged) state plus any error."""
    state: QuestionnaireState
    error: str | None = None

    @property
    def accepted(self) -> bool:
        return self.error is None


def start() -> QuestionnaireState:
    """Fresh questionnaire positioned on the first question."""
    return QuestionnaireState()


def submit(state: QuestionnaireState, raw: str) -> SubmitResult:
    """
    Answer the active question.

    Invalid input leaves the state untouched and returns the validator's
    message. Valid input is coerced per the question kind and the state
    advances by one.
    """
    question = state.current_question
    if question is None:
        raise QuestionnaireCompleteError("Questionnaire already completed")

    if raw is None or not raw.strip():
        return SubmitResult(state=state, error="Please enter a value")

    error = question.validate(raw)
    if error:
        return SubmitResult(state=state, error=error)

    answers = dict(state.answers)
    answers[question.key] = question.coerce(raw)

    next_index = state.current_index + 1
    new_state = replace(
        state,
        current_index=next_index,
        answers=MappingProxyType(answers),
        completed=next_index >= len(state.questions),
    )
    return SubmitResult(state=new_state)
