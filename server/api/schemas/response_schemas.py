"""API response schemas"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from models.command import ActionResult, IntentAnalysis


class ProcessCommandResponse(BaseModel):
    """Wire shape of a processed command (camelCase for the console)."""
    model_config = ConfigDict(populate_by_name=True)

    result: ActionResult
    parsed_command: Optional[IntentAnalysis] = Field(None, alias="parsedCommand")
    response_text: str = Field(..., alias="responseText")
    error_code: Optional[str] = Field(None, alias="errorCode")

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(by_alias=True)
        if payload["errorCode"] is None:
            del payload["errorCode"]
        return payload


class AIGenerateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generated_text: Optional[str] = Field(None, alias="generatedText")
    image_urls: Optional[List[str]] = Field(None, alias="imageUrls")


class HandlersResponse(BaseModel):
    handlers: List[Dict[str, Any]]
    status: List[Dict[str, Any]]
