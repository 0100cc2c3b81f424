"""
Fitlead - Lead profile models.

LeadProfile is the validated shape of a completed questionnaire. Stored rows
come back from Supabase as plain dicts and are used as-is by the dashboard.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from fitlead.errors import InvalidFieldError, MissingFieldError

# Declaration order matters: the first missing field is the one reported
REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "age",
    "weight",
    "height",
    "fitness_level",
    "fitness_goal",
    "workout_days",
    "phone_number",
)

DEFAULT_FREE_TEXT = "None"

FitnessLevel = Literal["Beginner", "Intermediate", "Advanced"]
FitnessGoal = Literal["Weight Loss", "Muscle Gain", "Maintenance", "Strength"]


class LeadProfile(BaseModel):
    """A complete fitness profile collected by the intake questionnaire."""

    name: str
    age: int
    weight: float
    height: int
    injuries: str = DEFAULT_FREE_TEXT
    fitness_level: FitnessLevel
    fitness_goal: FitnessGoal
    workout_days: int = Field(ge=1, le=7)
    dietary_restrictions: str = DEFAULT_FREE_TEXT
    phone_number: str

    @field_validator("injuries", "dietary_restrictions", mode="before")
    @classmethod
    def default_free_text(cls, v: Any) -> str:
        """Blank free-text answers are stored as 'None'."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_FREE_TEXT
        return v

    @field_validator("name", "fitness_level", "fitness_goal", "phone_number", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    def to_record(self) -> dict[str, Any]:
        """Row for the users table (new leads start unsent with an empty log)."""
        return {
            **self.model_dump(),
            "whatsapp_sent": False,
            "conversation_log": [],
        }


def find_missing_field(payload: dict[str, Any]) -> str | None:
    """Return the first required field that is absent or empty, in declared order."""
    for field_name in REQUIRED_FIELDS:
        if not payload.get(field_name):
            return field_name
    return None


def parse_profile(payload: dict[str, Any]) -> LeadProfile:
    """
    Validate a raw profile payload.

    Raises:
        MissingFieldError: first missing required field
        InvalidFieldError: first field that fails type coercion
    """
    missing = find_missing_field(payload)
    if missing:
        raise MissingFieldError(missing)

    try:
        return LeadProfile.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        loc = first.get("loc") or ("profile",)
        raise InvalidFieldError(str(loc[0])) from e
