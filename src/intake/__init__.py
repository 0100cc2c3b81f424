"""
Fitlead Intake.

Isolated module for the lead questionnaire. Walks a fixed list of questions,
validates each answer, and accumulates a flat profile that is submitted to
the orchestration endpoint once the last question is answered.
"""

from .questions import QUESTIONS, Question, get_question_options
from .state import (
    QuestionnaireCompleteError,
    QuestionnaireState,
    SubmitResult,
    start,
    submit,
)

__all__ = [
    "QUESTIONS",
    "Question",
    "QuestionnaireCompleteError",
    "QuestionnaireState",
    "SubmitResult",
    "get_question_options",
    "start",
    "submit",
]
