from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic_ai.exceptions import ModelHTTPError, UnexpectedModelBehavior

from app.planning.errors import ServiceUnavailableError
from app.services.llm.text_generation import PydanticAITextGenerator


def _patched_agent(run_mock):
    agent = MagicMock()
    agent.run = run_mock
    return patch("app.services.llm.text_generation.Agent", return_value=agent)


@pytest.mark.asyncio
async def test_returns_raw_output():
    run = AsyncMock(return_value=MagicMock(output='{"week_schedule": {}}'))
    with _patched_agent(run) as agent_cls, patch("app.services.llm.text_generation.get_model") as get_model:
        text = await PydanticAITextGenerator(provider="openai")("prompt", "gpt-4o-mini")

    assert text == '{"week_schedule": {}}'
    get_model.assert_called_once_with("openai", "gpt-4o-mini")
    assert agent_cls.call_args.kwargs["output_type"] is str
    run.assert_awaited_once_with("prompt")


@pytest.mark.asyncio
async def test_http_error_maps_to_service_unavailable():
    run = AsyncMock(side_effect=ModelHTTPError(status_code=404, model_name="gpt-9"))
    with _patched_agent(run), patch("app.services.llm.text_generation.get_model"):
        with pytest.raises(ServiceUnavailableError) as exc_info:
            await PydanticAITextGenerator(provider="openai")("prompt", "gpt-9")

    assert exc_info.value.status_code == 404
    assert exc_info.value.model_name == "gpt-9"
    assert exc_info.value.model_not_found is True
    assert isinstance(exc_info.value.__cause__, ModelHTTPError)


@pytest.mark.asyncio
async def test_unexpected_behavior_maps_to_service_unavailable():
    run = AsyncMock(side_effect=UnexpectedModelBehavior("empty candidates"))
    with _patched_agent(run), patch("app.services.llm.text_generation.get_model"):
        with pytest.raises(ServiceUnavailableError) as exc_info:
            await PydanticAITextGenerator(provider="openai")("prompt", "gpt-4o-mini")

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_empty_output_is_service_unavailable():
    run = AsyncMock(return_value=MagicMock(output=""))
    with _patched_agent(run), patch("app.services.llm.text_generation.get_model"):
        with pytest.raises(ServiceUnavailableError):
            await PydanticAITextGenerator(provider="openai")("prompt", "gpt-4o-mini")


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [ConnectionRefusedError("refused"), TimeoutError("read timed out")])
async def test_transport_error_maps_to_service_unavailable(error):
    run = AsyncMock(side_effect=error)
    with _patched_agent(run), patch("app.services.llm.text_generation.get_model"):
        with pytest.raises(ServiceUnavailableError) as exc_info:
            await PydanticAITextGenerator(provider="openai")("prompt", "gpt-4o-mini")

    assert exc_info.value.status_code is None
    assert exc_info.value.model_name == "gpt-4o-mini"
    assert exc_info.value.__cause__ is error
