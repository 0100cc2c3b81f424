"""
Intake Questions - the fixed questionnaire catalogue.

Each question has an input kind and an optional validator. Validators are
pure functions: raw input in, error message (or None) out.
"""

import re
from dataclasses import dataclass
from typing import Callable, Literal

QuestionKind = Literal["text", "number", "select"]
Validator = Callable[[str], str | None]

FITNESS_LEVELS = ("Beginner", "Intermediate", "Advanced")
FITNESS_GOALS = ("Weight Loss", "Muscle Gain", "Maintenance", "Strength")
WORKOUT_DAY_OPTIONS = tuple(str(n) for n in range(1, 8))

# Leading +, country code 1-9, up to 15 digits total
PHONE_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")
_WHITESPACE = re.compile(r"\s")


# =============================================================================
# Validators
# =============================================================================

def parse_number(raw: str) -> float | None:
    """Parse a numeric answer, or None if it isn't a finite number."""
    try:
        value = float(raw.strip())
    except (TypeError, ValueError):
        return None
    if value != value or value in (float("inf"), float("-inf")):
        return None
    return value


def _integer_between(low: int, high: int, message: str) -> Validator:
    def validate(raw: str) -> str | None:
        value = parse_number(raw)
        if value is None or not value.is_integer() or not low <= value <= high:
            return message
        return None
    return validate


def _number_between(low: float, high: float, message: str) -> Validator:
    def validate(raw: str) -> str | None:
        value = parse_number(raw)
        if value is None or not low <= value <= high:
            return message
        return None
    return validate


validate_age = _integer_between(13, 100, "Please enter a valid age between 13 and 100")
validate_weight = _number_between(30, 300, "Please enter a valid weight between 30-300 kg")
validate_height = _integer_between(120, 250, "Please enter a valid height between 120-250 cm")


def normalize_phone(raw: str) -> str:
    """Remove all whitespace from a phone number."""
    return _WHITESPACE.sub("", raw)


def validate_phone(raw: str) -> str | None:
    if PHONE_PATTERN.match(normalize_phone(raw)):
        return None
    return "Please enter a valid WhatsApp number with country code"


# =============================================================================
# Catalogue
# =============================================================================

@dataclass(frozen=True)
class Question:
    """One step of the questionnaire."""
    key: str
    prompt: str
    kind: QuestionKind = "text"
    validator: Validator | None = None
    options: tuple[str, ...] = ()
    placeholder: str = ""

    def validate(self, raw: str) -> str | None:
        if self.validator is None:
            return None
        return self.validator(raw)

    def coerce(self, raw: str) -> str | int | float:
        """Convert a validated answer to its stored form."""
        text = raw.strip()
        if self.kind == "number":
            value = parse_number(text)
            if value is None:
                return text
            return int(value) if value.is_integer() else value
        return text

    def to_dict(self) -> dict:
        """Serializable form for client UIs."""
        return {
            "key": self.key,
            "question": self.prompt,
            "type": self.kind,
            "options": list(self.options),
            "placeholder": self.placeholder,
        }


QUESTIONS: tuple[Question, ...] = (
    Question(
        key="name",
        prompt="Hi! I'm your personal fitness coach. What's your first name?",
        placeholder="Enter your first name",
    ),
    Question(
        key="age",
        prompt="Nice to meet you! What's your age?",
        kind="number",
        validator=validate_age,
        placeholder="e.g. 25",
    ),
    Question(
        key="weight",
        prompt="What's your current weight in kg?",
        kind="number",
        validator=validate_weight,
        placeholder="e.g. 70",
    ),
    Question(
        key="height",
        prompt="What's your height in cm?",
        kind="number",
        validator=validate_height,
        placeholder="e.g. 175",
    ),
    Question(
        key="injuries",
        prompt=(
            "Do you have any injuries or medical conditions I should know about? "
            "(Type 'none' if you don't have any)"
        ),
        placeholder="e.g. none, diabetes, asthma",
    ),
    Question(
        key="fitness_level",
        prompt="What's your current fitness level?",
        kind="select",
        options=FITNESS_LEVELS,
    ),
    Question(
        key="fitness_goal",
        prompt="What's your primary fitness goal?",
        kind="select",
        options=FITNESS_GOALS,
    ),
    Question(
        key="workout_days",
        prompt="How many days per week can you commit to working out?",
        kind="select",
        options=WORKOUT_DAY_OPTIONS,
    ),
    Question(
        key="dietary_restrictions",
        prompt=(
            "Do you have any dietary restrictions or allergies? "
            "(Type 'none' if you don't have any)"
        ),
        placeholder="e.g. none, vegetarian, gluten-free",
    ),
    Question(
        key="phone_number",
        prompt=(
            "Perfect! What's your WhatsApp number? I'll send your personalized diet "
            "plan there! (Include country code, e.g., +91 9876543210)"
        ),
        validator=validate_phone,
        placeholder="+91 9876543210",
    ),
)


def get_question_options() -> list[dict]:
    """Question catalogue for frontend rendering."""
    return [q.to_dict() for q in QUESTIONS]
