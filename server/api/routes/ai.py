"""Direct text / image generation for console helpers."""
from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.responses import JSONResponse
import logging

from api.middleware.auth_middleware import get_current_user
from api.schemas.request_schemas import AIGenerateRequest
from api.schemas.response_schemas import AIGenerateResponse
from core.dependencies import get_llm_client
from integrations.llm.client import LLMClient, LLMError
from integrations.llm.prompts import ASSISTANT_SYSTEM_PROMPT
from models.user import User

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/generate", response_model=AIGenerateResponse, response_model_exclude_none=True)
async def generate(
    request: AIGenerateRequest,
    current_user: User = Depends(get_current_user),
    llm: LLMClient = Depends(get_llm_client),
):
    if not llm.is_configured:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="OpenAI API key not configured",
        )

    prompt = (request.prompt or "").strip()
    if not prompt:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No prompt provided",
        )

    try:
        if request.type == "image":
            urls = await llm.generate_image(prompt)
            return AIGenerateResponse(image_urls=urls)

        text = await llm.generate(
            prompt,
            system_prompt=ASSISTANT_SYSTEM_PROMPT,
            model=request.model,
        )
        return AIGenerateResponse(generated_text=text)

    except LLMError as e:
        logger.error(f"AI generation failed (type={request.type}): {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
