"""Action dispatcher: maps a recognized intent to its domain handler."""
import logging
import time

from models.command import ActionResult, IntentAnalysis
from tools.base import ToolRegistry

logger = logging.getLogger(__name__)

INTENT_HANDLERS: dict[str, str] = {
    "add_student": "student_create",
    "update_student": "student_update",
    "check_info": "student_lookup",
    "send_email": "email_send",
    "schedule_class": "class_schedule",
}

UNSUPPORTED_COMMAND_MESSAGE = (
    "Không hiểu yêu cầu của bạn. Vui lòng thử lại với lệnh cụ thể hơn."
)


class CommandExecutor:
    """Runs exactly one handler per analysis and always returns an ActionResult."""

    def __init__(self, tool_registry: ToolRegistry):
        self.tool_registry = tool_registry

    async def execute(self, analysis: IntentAnalysis) -> ActionResult:
        tool_name = INTENT_HANDLERS.get(analysis.intent)
        if tool_name is None:
            logger.info(f"No handler for intent {analysis.intent!r}")
            return ActionResult(success=False, message=UNSUPPORTED_COMMAND_MESSAGE)

        tool = self.tool_registry.get_tool(tool_name)
        if tool is None:
            logger.error(f"Handler {tool_name} for intent {analysis.intent} is not registered")
            return ActionResult(
                success=False,
                message="Chức năng này hiện chưa được hỗ trợ.",
            )

        params = analysis.entities.as_parameters()
        # Handlers only accept the slots they declare
        accepted = {p.name for p in tool.schema.parameters}
        params = {k: v for k, v in params.items() if k in accepted}

        start = time.time()
        try:
            await tool.validate_parameters(**params)

            logger.info(f"Executing handler {tool_name} with {sorted(params)}")
            result = await tool.execute(**params)

            elapsed_ms = int((time.time() - start) * 1000)
            logger.info(
                f"Handler {tool_name} completed in {elapsed_ms}ms "
                f"(success={result.get('success', False)})"
            )
            return ActionResult(
                success=bool(result.get("success", False)),
                message=result.get("message") or "",
                data=result.get("data"),
            )

        except ValueError as e:
            logger.info(f"Handler {tool_name} rejected parameters: {e}")
            return ActionResult(success=False, message=str(e))
        except Exception as e:
            logger.error(f"Handler {tool_name} failed: {e}", exc_info=True)
            return ActionResult(
                success=False,
                message=f"Lỗi khi thực hiện lệnh: {e}",
            )
