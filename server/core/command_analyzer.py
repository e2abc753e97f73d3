"""Command analyzer: turns free text into a validated IntentAnalysis."""
import json
import logging
from typing import Optional

from pydantic import ValidationError

from config.settings import settings
from integrations.llm.client import LLMClient, LLMError
from integrations.llm.prompts import COMMAND_ANALYSIS_PROMPT
from models.command import IntentAnalysis, SUPPORTED_INTENTS

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """The command could not be turned into an IntentAnalysis.

    ``raw_text`` holds the unparsed model output when there was one, so
    callers can log it without re-running the request.
    """

    def __init__(
        self,
        message: str,
        *,
        raw_text: Optional[str] = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.raw_text = raw_text
        self.retryable = retryable


class UnrecognizedIntentError(AnalysisError):
    """The model answered with an intent outside the supported set."""

    def __init__(self, intent, raw_text: Optional[str] = None):
        super().__init__(f"Unrecognized intent: {intent!r}", raw_text=raw_text)
        self.intent = intent


def parse_analysis(raw_text: str) -> IntentAnalysis:
    """Parse model output strictly. No repair is attempted."""
    try:
        data = json.loads(raw_text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"Error parsing analysis result: {e}")
        logger.info(f"Raw analysis result: {raw_text!r}")
        raise AnalysisError("Failed to parse command analysis", raw_text=raw_text) from e

    if not isinstance(data, dict):
        logger.error(f"Analysis result is a {type(data).__name__}, expected an object")
        logger.info(f"Raw analysis result: {raw_text!r}")
        raise AnalysisError("Command analysis is not a JSON object", raw_text=raw_text)

    intent = data.get("intent")
    if intent not in SUPPORTED_INTENTS:
        logger.warning(f"Model returned unsupported intent {intent!r}")
        logger.info(f"Raw analysis result: {raw_text!r}")
        raise UnrecognizedIntentError(intent, raw_text=raw_text)

    try:
        return IntentAnalysis.model_validate(data)
    except ValidationError as e:
        logger.error(f"Analysis result does not match schema: {e}")
        logger.info(f"Raw analysis result: {raw_text!r}")
        raise AnalysisError(
            "Command analysis does not match the expected schema", raw_text=raw_text
        ) from e


class CommandAnalyzer:
    """Classifies a command into the closed intent set and extracts entities."""

    def __init__(self, llm_client: LLMClient):
        self.llm = llm_client

    async def analyze(self, command: str) -> IntentAnalysis:
        logger.info(f"Analyzing command: {command}")

        messages = [
            {"role": "system", "content": COMMAND_ANALYSIS_PROMPT},
            {"role": "user", "content": command},
        ]

        try:
            raw_text = await self.llm.chat(
                messages,
                temperature=settings.LLM_ANALYSIS_TEMPERATURE,
                timeout_s=settings.LLM_ANALYSIS_TIMEOUT,
            )
        except LLMError as e:
            logger.error(f"Command analysis request failed: {e}")
            raise AnalysisError(
                f"Command analysis request failed: {e}", retryable=e.retryable
            ) from e

        analysis = parse_analysis(raw_text)
        logger.info(
            f"Parsed analysis: intent={analysis.intent}, "
            f"confidence={analysis.confidence}, "
            f"entities={sorted(analysis.entities.as_parameters())}"
        )
        return analysis


async def analyze_command(command: str, api_key: str) -> IntentAnalysis:
    """Analyze one command with a short-lived client bound to ``api_key``."""
    client = LLMClient(api_key=api_key)
    try:
        return await CommandAnalyzer(client).analyze(command)
    finally:
        await client.close()
