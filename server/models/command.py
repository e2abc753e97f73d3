"""Command interpretation data models"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Literal, Optional, get_args


Intent = Literal[
    "add_student",
    "send_email",
    "update_student",
    "schedule_class",
    "check_info",
    "other",
]

SUPPORTED_INTENTS: tuple[str, ...] = get_args(Intent)


class CommandEntities(BaseModel):
    """Slots extracted from a command. ``None`` means not mentioned."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    student_name: Optional[str] = None
    parent_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    class_name: Optional[str] = Field(None, alias="class")
    subject: Optional[str] = None
    message: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        # Models fill unmentioned slots with "" or "null" instead of omitting them
        if v is None:
            return None
        if not isinstance(v, str):
            v = str(v)
        v = v.strip()
        if not v or v.lower() in ("null", "none", "n/a"):
            return None
        return v

    def as_parameters(self) -> dict[str, str]:
        """Mentioned slots only, keyed by field name."""
        return self.model_dump(exclude_none=True)


class IntentAnalysis(BaseModel):
    """Structured reading of one free-text command"""
    model_config = ConfigDict(frozen=True)

    intent: Intent
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    entities: CommandEntities = Field(default_factory=CommandEntities)

    @field_validator("entities", mode="before")
    @classmethod
    def _null_entities(cls, v: Any) -> Any:
        return {} if v is None else v


class ActionResult(BaseModel):
    """Outcome of a dispatched domain action"""
    success: bool
    message: str
    data: Optional[Any] = None


class CommandOutcome(BaseModel):
    """Everything one pipeline run produces"""
    result: ActionResult
    parsed_command: Optional[IntentAnalysis] = None
    response_text: str
    error_code: Optional[str] = None
