"""Command API routes: free-text console commands."""
from fastapi import APIRouter, HTTPException, Depends, status
import logging

from api.middleware.auth_middleware import get_current_user
from api.schemas.request_schemas import ProcessCommandRequest
from api.schemas.response_schemas import HandlersResponse, ProcessCommandResponse
from core.command_processor import CommandProcessor
from core.dependencies import get_command_processor, get_llm_client, get_tool_registry
from integrations.llm.client import LLMClient
from models.user import User
from tools.base import ToolRegistry
from utils.json_fixer import send_fixed_json

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/process")
async def process_command(
    request: ProcessCommandRequest,
    current_user: User = Depends(get_current_user),
    llm: LLMClient = Depends(get_llm_client),
    processor: CommandProcessor = Depends(get_command_processor),
):
    """
    Interpret a free-text command, run the matching action and
    phrase the outcome for the operator.
    """
    command = (request.command or "").strip()
    if not command:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No command provided",
        )

    if not llm.is_configured:
        logger.error("Command rejected: OPENAI_API_KEY is not configured")
        return send_fixed_json(
            {"error": "OpenAI API key not configured", "success": False},
            status_code=500,
        )

    try:
        outcome = await processor.process(command, user=current_user)
    except Exception as e:
        logger.error(f"Command processing failed: {e}", exc_info=True)
        return send_fixed_json(
            {"error": "Failed to process command", "success": False},
            status_code=500,
        )

    response = ProcessCommandResponse(
        result=outcome.result,
        parsed_command=outcome.parsed_command,
        response_text=outcome.response_text,
        error_code=outcome.error_code,
    )
    return send_fixed_json(response.to_payload())


@router.get("/handlers", response_model=HandlersResponse)
async def list_handlers(
    current_user: User = Depends(get_current_user),
    registry: ToolRegistry = Depends(get_tool_registry),
):
    """List action handlers with their JSON Schema definitions and status."""
    return HandlersResponse(
        handlers=registry.get_json_schemas(),
        status=registry.get_tools_status(),
    )
