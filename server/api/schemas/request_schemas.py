"""API request schemas"""
from pydantic import BaseModel, Field, field_validator
from typing import Literal, Optional

from config.settings import settings


class ProcessCommandRequest(BaseModel):
    # Optional so an absent command reaches the route and gets a 400, not a 422
    command: Optional[str] = None

    @field_validator("command")
    @classmethod
    def validate_length(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > settings.MAX_COMMAND_LENGTH:
            raise ValueError(
                f"Command must be at most {settings.MAX_COMMAND_LENGTH} characters"
            )
        return v


class AIGenerateRequest(BaseModel):
    prompt: Optional[str] = None
    model: str = Field("gpt-4o-mini", max_length=100)
    type: Literal["text", "image"] = "text"
