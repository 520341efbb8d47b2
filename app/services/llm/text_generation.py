"""Raw text generation transport.

The planning pipeline only needs "prompt in, text out". Keeping it behind a
Protocol lets tests inject AsyncMock generators and keeps provider failures
mapped onto ServiceUnavailableError in one place.
"""

from typing import Protocol

from loguru import logger
from pydantic_ai import Agent
from pydantic_ai.exceptions import ModelHTTPError, UnexpectedModelBehavior, UsageLimitExceeded

from app.config.settings import settings
from app.planning.errors import ServiceUnavailableError
from app.planning.llm.prompts import SYSTEM_PROMPT
from app.services.llm.model import get_model


class TextGenerator(Protocol):
    async def __call__(self, prompt: str, model_name: str) -> str:
        """Return the model's raw text response for prompt."""
        ...


class PydanticAITextGenerator:
    """TextGenerator backed by a pydantic_ai Agent with plain string output."""

    def __init__(self, provider: str | None = None, system_prompt: str = SYSTEM_PROMPT):
        self.provider = provider or settings.llm_provider
        self.system_prompt = system_prompt

    async def __call__(self, prompt: str, model_name: str) -> str:
        agent = Agent(
            model=get_model(self.provider, model_name),
            system_prompt=self.system_prompt,
            output_type=str,
        )

        logger.debug("text_generation: Calling model", model_name=model_name, prompt_length=len(prompt))
        try:
            result = await agent.run(prompt)
        except ModelHTTPError as e:
            logger.error(
                "text_generation: Model HTTP error",
                model_name=model_name,
                status_code=e.status_code,
                error=str(e),
            )
            raise ServiceUnavailableError(
                f"Model request failed with status {e.status_code}: {e.message}",
                model_name=model_name,
                status_code=e.status_code,
            ) from e
        except (UnexpectedModelBehavior, UsageLimitExceeded) as e:
            logger.error("text_generation: Model call failed", model_name=model_name, error=str(e))
            raise ServiceUnavailableError(f"Model call failed: {e}", model_name=model_name) from e
        except Exception as e:
            # Transport failures (connection refused, timeouts, provider client errors)
            logger.error(
                "text_generation: Model unreachable",
                model_name=model_name,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise ServiceUnavailableError(f"Model service unreachable: {e}", model_name=model_name) from e

        output = result.output
        if not output:
            raise ServiceUnavailableError("Model returned an empty response", model_name=model_name)

        logger.debug("text_generation: Received response", model_name=model_name, response_length=len(output))
        return output
