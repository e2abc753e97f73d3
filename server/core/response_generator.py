"""Response generator: phrases an action result for the end user."""
import logging

from config.settings import settings
from integrations.llm.client import LLMClient
from integrations.llm.prompts import RESPONSE_GENERATION_INPUT, RESPONSE_GENERATION_PROMPT
from models.command import ActionResult, IntentAnalysis

logger = logging.getLogger(__name__)

SUCCESS_TEMPLATE = "Đã thực hiện thành công: {message}"
FAILURE_TEMPLATE = "Không thể thực hiện lệnh: {message}"


def build_fallback_response(result: ActionResult) -> str:
    """Deterministic reply used whenever the model cannot be used."""
    template = SUCCESS_TEMPLATE if result.success else FAILURE_TEMPLATE
    return template.format(message=result.message)


class ResponseGenerator:
    """Asks the LLM for a short Vietnamese confirmation. Never raises."""

    def __init__(self, llm_client: LLMClient):
        self.llm = llm_client

    async def generate(self, analysis: IntentAnalysis, result: ActionResult) -> str:
        try:
            prompt = RESPONSE_GENERATION_INPUT.format(
                analysis=analysis.model_dump_json(indent=2, by_alias=True),
                result=result.model_dump_json(indent=2, exclude={"data"}),
            )

            response = await self.llm.generate(
                prompt=prompt,
                system_prompt=RESPONSE_GENERATION_PROMPT,
                temperature=settings.LLM_RESPONSE_TEMPERATURE,
                timeout_s=settings.LLM_RESPONSE_TIMEOUT,
            )

            text = response.strip()
            if not text:
                logger.warning("LLM returned an empty response, using fallback text")
                return build_fallback_response(result)
            return text

        except Exception as e:
            logger.error(f"Error generating response: {e}")
            return build_fallback_response(result)


async def generate_response(
    analysis: IntentAnalysis,
    result: ActionResult,
    api_key: str,
) -> str:
    """Generate a reply with a short-lived client bound to ``api_key``."""
    client = LLMClient(api_key=api_key)
    try:
        return await ResponseGenerator(client).generate(analysis, result)
    finally:
        await client.close()
