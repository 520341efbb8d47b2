"""Process-wide cache of the selected generation model.

Resolving the model (e.g. by listing what the provider offers) is slow and
rarely changes, so the name is kept for a TTL. A failed generation call
invalidates it so the next request resolves again.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Protocol

from loguru import logger

from app.config.settings import settings
from app.services.llm.model import configured_model_candidates


class ModelResolver(Protocol):
    def __call__(self) -> Awaitable[str]:
        """Return the name of the model to use."""
        ...


def select_preferred_model(available: list[str], preferences: list[str]) -> str | None:
    """Pick the first preference that is available.

    Matching is exact first, then by prefix so that "gpt-4o" also accepts a
    dated variant like "gpt-4o-2024-08-06".

    Args:
        available: Model names offered by the provider
        preferences: Model names in priority order

    Returns:
        Selected model name, the first available model when nothing
        preferred is offered, or None when nothing is available
    """
    if not available:
        return None
    for preferred in preferences:
        if preferred in available:
            return preferred
    for preferred in preferences:
        for name in available:
            if name.startswith(f"{preferred}-"):
                return name
    return available[0]


async def resolve_configured_model() -> str:
    """Resolve from configuration only, without querying the provider."""
    candidates = configured_model_candidates()
    selected = select_preferred_model(candidates, settings.model_preferences)
    return selected or settings.llm_model


class ModelSelectionCache:
    """Caches the resolved model name for ttl_seconds.

    Attributes:
        ttl_seconds: Freshness window for a resolved value
    """

    def __init__(
        self,
        resolver: ModelResolver = resolve_configured_model,
        ttl_seconds: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._resolver = resolver
        self.ttl_seconds = settings.model_cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._value: str | None = None
        self._resolved_at: float | None = None
        self._lock = asyncio.Lock()

    def _is_fresh(self) -> bool:
        if self._value is None or self._resolved_at is None:
            return False
        return (self._clock() - self._resolved_at) < self.ttl_seconds

    async def get(self) -> str:
        """Return the cached model name, resolving it when missing or stale."""
        if self._is_fresh():
            return self._value  # type: ignore[return-value]

        async with self._lock:
            if self._is_fresh():
                return self._value  # type: ignore[return-value]
            value = await self._resolver()
            self._value = value
            self._resolved_at = self._clock()
            logger.debug("model_cache: Resolved model", model_name=value, ttl_seconds=self.ttl_seconds)
            return value

    def invalidate(self) -> None:
        if self._value is not None:
            logger.info("model_cache: Invalidated", model_name=self._value)
        self._value = None
        self._resolved_at = None


_default_cache: ModelSelectionCache | None = None


def get_default_model_cache() -> ModelSelectionCache:
    global _default_cache  # noqa: PLW0603
    if _default_cache is None:
        _default_cache = ModelSelectionCache()
    return _default_cache
