"""
Shared singleton dependencies for the application.

The LLM client, handler registry and identity provider are created once at
startup and reused across requests. Repositories are thin wrappers around
the Supabase client and are built per request.
"""
import logging
from typing import Optional

from database.client import get_supabase
from database.repositories.activity_repo import ActivityRepository
from database.repositories.class_repo import ClassRepository
from database.repositories.student_repo import StudentRepository
from database.repositories.task_repo import TaskRepository
from core.command_analyzer import CommandAnalyzer
from core.command_executor import CommandExecutor
from core.command_processor import CommandProcessor
from core.response_generator import ResponseGenerator
from integrations.llm.client import LLMClient
from services.identity import IdentityProvider, build_identity_provider
from tools.base import ToolRegistry
from tools.class_tool import ClassScheduleTool
from tools.email_tool import EmailSendTool
from tools.student_tools import StudentCreateTool, StudentLookupTool, StudentUpdateTool

logger = logging.getLogger(__name__)

# Module-level singletons, initialized once via init_dependencies()
_llm_client: Optional[LLMClient] = None
_tool_registry: Optional[ToolRegistry] = None
_identity_provider: Optional[IdentityProvider] = None


def build_tool_registry(supabase) -> ToolRegistry:
    """Register one handler per supported intent."""
    student_repo = StudentRepository(supabase)
    class_repo = ClassRepository(supabase)
    task_repo = TaskRepository(supabase)

    registry = ToolRegistry()
    registry.register(StudentCreateTool(student_repo, class_repo))
    registry.register(StudentUpdateTool(student_repo))
    registry.register(StudentLookupTool(student_repo, class_repo))
    registry.register(EmailSendTool(student_repo))
    registry.register(ClassScheduleTool(class_repo, task_repo))
    return registry


def init_dependencies() -> None:
    """Initialize all shared singletons. Called once at application startup."""
    global _llm_client, _tool_registry, _identity_provider

    logger.info("Initializing shared dependencies...")

    _llm_client = LLMClient()
    if not _llm_client.is_configured:
        logger.warning("OPENAI_API_KEY is not set, AI endpoints will reject requests")

    _tool_registry = build_tool_registry(get_supabase())
    _identity_provider = build_identity_provider()

    logger.info(
        f"Dependencies initialized: {len(_tool_registry.list_tools())} handlers registered"
    )


async def shutdown_dependencies() -> None:
    """Clean up resources on shutdown."""
    global _llm_client
    if _llm_client:
        await _llm_client.close()
        _llm_client = None
        logger.info("LLMClient closed")


def get_llm_client() -> LLMClient:
    if _llm_client is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies() first.")
    return _llm_client


def get_tool_registry() -> ToolRegistry:
    if _tool_registry is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies() first.")
    return _tool_registry


def get_identity_provider() -> IdentityProvider:
    if _identity_provider is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies() first.")
    return _identity_provider


def get_command_processor() -> CommandProcessor:
    """Build a CommandProcessor from the shared singletons."""
    llm = get_llm_client()
    return CommandProcessor(
        analyzer=CommandAnalyzer(llm),
        executor=CommandExecutor(get_tool_registry()),
        response_generator=ResponseGenerator(llm),
        activity_repo=ActivityRepository(get_supabase()),
    )
