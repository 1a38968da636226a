"""Lifespan composition for the app factory.

Composes prioritised :class:`LifespanContribution` hooks into a single
FastAPI-compatible lifespan context manager.
"""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LifespanContribution:
    """A lifespan hook and its ordering priority.

    Attributes:
        hook: An async context manager factory ``(app) -> AsyncContextManager[None]``.
        priority: Lower priorities start first (and shut down last).
    """

    hook: Any
    priority: int = 500


def compose_lifespan(hooks: list[LifespanContribution]) -> Any:
    """Create a composite lifespan from ordered hooks.

    Hooks are sorted by priority (ascending) and entered on an
    :class:`AsyncExitStack`, so shutdown runs in reverse order.

    Returns:
        An async context manager factory suitable for FastAPI's ``lifespan`` parameter.
    """
    sorted_hooks = sorted(hooks, key=lambda h: h.priority)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            for hook_contrib in sorted_hooks:
                logger.info(
                    "Entering lifespan hook (priority=%d): %r",
                    hook_contrib.priority,
                    hook_contrib.hook,
                )
                await stack.enter_async_context(hook_contrib.hook(app))
            yield

    return lifespan
