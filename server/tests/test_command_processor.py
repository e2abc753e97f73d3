"""Tests for the analyze → dispatch → respond pipeline."""
import json
import pytest
from unittest.mock import AsyncMock, MagicMock

from core.command_analyzer import AnalysisError, CommandAnalyzer, UnrecognizedIntentError
from core.command_executor import CommandExecutor
from core.command_processor import CommandProcessor, UNRECOGNIZED_COMMAND_MESSAGE
from core.response_generator import ResponseGenerator
from models.command import ActionResult, IntentAnalysis
from models.user import User
from tools.base import BaseTool, ToolSchema, ToolParameter, ToolRegistry


class StubCreateTool(BaseTool):
    def __init__(self):
        self.execute_mock = AsyncMock(return_value={"success": True, "message": "created"})

    def _build_schema(self) -> ToolSchema:
        return ToolSchema(
            name="student_create",
            description="stub",
            parameters=[
                ToolParameter(name="student_name", description="tên học sinh", required=True),
                ToolParameter(name="phone", description="số điện thoại phụ huynh"),
                ToolParameter(name="class_name", description="lớp học"),
            ],
        )

    async def execute(self, **kwargs):
        return await self.execute_mock(**kwargs)


def _make_processor(analysis_reply, response_reply="Đã thêm học sinh Nguyễn Văn A."):
    """Wire real pipeline components around a mocked LLM."""
    llm = MagicMock()
    llm.chat = AsyncMock(return_value=analysis_reply)
    llm.generate = AsyncMock(return_value=response_reply)

    tool = StubCreateTool()
    registry = ToolRegistry()
    registry.register(tool)

    activity_repo = MagicMock()
    activity_repo.log_command = AsyncMock(return_value=True)

    processor = CommandProcessor(
        analyzer=CommandAnalyzer(llm),
        executor=CommandExecutor(registry),
        response_generator=ResponseGenerator(llm),
        activity_repo=activity_repo,
    )
    return processor, llm, tool, activity_repo


ADD_STUDENT_REPLY = json.dumps({
    "intent": "add_student",
    "confidence": 0.95,
    "entities": {"student_name": "Nguyễn Văn A", "phone": "0123456789", "class": "1A"},
}, ensure_ascii=False)


class TestProcess:
    @pytest.mark.asyncio
    async def test_add_student_end_to_end(self):
        processor, llm, tool, activity_repo = _make_processor(ADD_STUDENT_REPLY)
        user = User(id="u1", email="admin@school.com", name="Admin User")

        outcome = await processor.process(
            "Thêm học sinh Nguyễn Văn A, SĐT 0123456789, lớp 1A", user=user
        )

        assert outcome.result == ActionResult(success=True, message="created")
        assert outcome.parsed_command.intent == "add_student"
        assert outcome.parsed_command.entities.class_name == "1A"
        assert outcome.response_text == "Đã thêm học sinh Nguyễn Văn A."
        assert outcome.error_code is None

        tool.execute_mock.assert_awaited_once_with(
            student_name="Nguyễn Văn A", phone="0123456789", class_name="1A"
        )
        activity_repo.log_command.assert_awaited_once_with(
            command="Thêm học sinh Nguyễn Văn A, SĐT 0123456789, lớp 1A",
            intent="add_student",
            username="Admin User",
            success=True,
        )

    @pytest.mark.asyncio
    async def test_llm_calls_are_sequential(self):
        processor, llm, _, _ = _make_processor(ADD_STUDENT_REPLY)
        order = []
        llm.chat.side_effect = lambda *a, **k: order.append("analyze") or ADD_STUDENT_REPLY
        llm.generate.side_effect = lambda *a, **k: order.append("respond") or "ok"

        await processor.process("Thêm học sinh A")

        assert order == ["analyze", "respond"]

    @pytest.mark.asyncio
    async def test_command_is_trimmed(self):
        processor, llm, _, _ = _make_processor(ADD_STUDENT_REPLY)
        await processor.process("   Thêm học sinh A   ")
        assert llm.chat.call_args.args[0][1]["content"] == "Thêm học sinh A"

    @pytest.mark.asyncio
    async def test_unparseable_analysis_stops_pipeline(self):
        processor, llm, tool, activity_repo = _make_processor("not json at all")

        outcome = await processor.process("làm gì đó")

        assert outcome.result.success is False
        assert outcome.parsed_command is None
        assert outcome.response_text == UNRECOGNIZED_COMMAND_MESSAGE
        assert outcome.error_code == "analysis_failed"
        tool.execute_mock.assert_not_awaited()
        llm.generate.assert_not_awaited()
        activity_repo.log_command.assert_awaited_once()
        assert activity_repo.log_command.call_args.kwargs["intent"] == "unrecognized"
        assert activity_repo.log_command.call_args.kwargs["username"] == "anonymous"

    @pytest.mark.asyncio
    async def test_unknown_intent_error_code(self):
        processor, _, tool, _ = _make_processor('{"intent": "fly_to_moon", "confidence": 1}')

        outcome = await processor.process("bay lên mặt trăng")

        assert outcome.error_code == "unrecognized_intent"
        tool.execute_mock.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_llm_unavailable_error_code(self):
        analyzer = MagicMock()
        analyzer.analyze = AsyncMock(side_effect=AnalysisError("upstream down", retryable=True))
        executor = MagicMock()
        executor.execute = AsyncMock()
        generator = MagicMock()
        generator.generate = AsyncMock()

        processor = CommandProcessor(analyzer, executor, generator)
        outcome = await processor.process("Thêm học sinh A")

        assert outcome.error_code == "llm_unavailable"
        assert outcome.result.message == "upstream down"
        executor.execute.assert_not_awaited()
        generator.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_intent_still_generates_response(self):
        processor, llm, tool, _ = _make_processor(
            '{"intent": "other", "confidence": 0.3, "entities": {}}',
            response_reply="Tôi chưa hiểu yêu cầu.",
        )

        outcome = await processor.process("thời tiết hôm nay thế nào")

        assert outcome.result.success is False
        assert outcome.parsed_command.intent == "other"
        assert outcome.response_text == "Tôi chưa hiểu yêu cầu."
        tool.execute_mock.assert_not_awaited()
        llm.generate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_generation_failure_uses_fallback(self):
        processor, llm, _, _ = _make_processor(ADD_STUDENT_REPLY)
        llm.generate.side_effect = RuntimeError("boom")

        outcome = await processor.process("Thêm học sinh A")

        assert outcome.response_text == "Đã thực hiện thành công: created"

    @pytest.mark.asyncio
    async def test_without_activity_repo(self):
        analyzer = MagicMock()
        analyzer.analyze = AsyncMock(return_value=IntentAnalysis(intent="other"))
        executor = MagicMock()
        executor.execute = AsyncMock(return_value=ActionResult(success=False, message="x"))
        generator = MagicMock()
        generator.generate = AsyncMock(return_value="y")

        outcome = await CommandProcessor(analyzer, executor, generator).process("hi")

        assert outcome.response_text == "y"

    def test_unrecognized_intent_is_an_analysis_error(self):
        assert issubclass(UnrecognizedIntentError, AnalysisError)
