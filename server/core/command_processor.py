"""Command processor: analyze, dispatch and respond for one command."""
import logging
import time
from typing import Optional

from core.command_analyzer import AnalysisError, CommandAnalyzer, UnrecognizedIntentError
from core.command_executor import CommandExecutor
from core.response_generator import ResponseGenerator
from database.repositories.activity_repo import ActivityRepository
from models.command import ActionResult, CommandOutcome
from models.user import User

logger = logging.getLogger(__name__)

UNRECOGNIZED_COMMAND_MESSAGE = (
    "Xin lỗi, tôi không hiểu lệnh của bạn. "
    "Vui lòng thử lại với cách diễn đạt khác."
)


class CommandProcessor:
    """
    Runs the three pipeline stages strictly in order:
    analyze the text, dispatch the intent, phrase the result.

    Stateless across calls; one instance may serve concurrent requests.
    """

    def __init__(
        self,
        analyzer: CommandAnalyzer,
        executor: CommandExecutor,
        response_generator: ResponseGenerator,
        activity_repo: Optional[ActivityRepository] = None,
    ):
        self.analyzer = analyzer
        self.executor = executor
        self.response_generator = response_generator
        self.activity_repo = activity_repo

    async def process(self, command: str, user: Optional[User] = None) -> CommandOutcome:
        start_time = time.time()
        command = command.strip()
        logger.info(f"Processing command: {command}")

        # 1. ANALYZE
        try:
            analysis = await self.analyzer.analyze(command)
        except AnalysisError as e:
            error_code = _classify_analysis_error(e)
            logger.warning(f"Command not understood (code={error_code}): {e}")
            await self._log(command, "unrecognized", user, success=False)
            return CommandOutcome(
                result=ActionResult(success=False, message=str(e)),
                parsed_command=None,
                response_text=UNRECOGNIZED_COMMAND_MESSAGE,
                error_code=error_code,
            )

        # 2. DISPATCH
        result = await self.executor.execute(analysis)

        # 3. RESPOND
        response_text = await self.response_generator.generate(analysis, result)

        await self._log(command, analysis.intent, user, success=result.success)

        execution_time = int((time.time() - start_time) * 1000)
        logger.info(
            f"Command processed in {execution_time}ms "
            f"(intent={analysis.intent}, success={result.success})"
        )

        return CommandOutcome(
            result=result,
            parsed_command=analysis,
            response_text=response_text,
        )

    async def _log(
        self,
        command: str,
        intent: str,
        user: Optional[User],
        success: bool,
    ) -> None:
        if self.activity_repo is None:
            return
        await self.activity_repo.log_command(
            command=command,
            intent=intent,
            username=user.display_name if user else "anonymous",
            success=success,
        )


def _classify_analysis_error(exc: AnalysisError) -> str:
    """Return a machine-readable error code for an analysis failure."""
    if isinstance(exc, UnrecognizedIntentError):
        return "unrecognized_intent"
    if exc.raw_text is None:
        return "llm_unavailable"
    return "analysis_failed"
