"""
Flood control for the booking bot.

Limits how many updates a single Telegram user can send within a rolling
time window (RATE_LIMIT per RATE_LIMIT_PERIOD seconds). Users over the
limit get a throttle notice and their update is dropped.
"""
from __future__ import annotations

import logging
import time
from collections import defaultdict, deque
from typing import Any, Awaitable, Callable, Deque, Dict

from aiogram import BaseMiddleware
from aiogram.exceptions import TelegramAPIError
from aiogram.types import TelegramObject

logger = logging.getLogger(__name__)

THROTTLE_MESSAGE = "⏳ Too many requests. Please wait a moment and try again."


class RateLimitMiddleware(BaseMiddleware):
    """
    Sliding-window rate limiter.

    Parameters
    ----------
    rate   : maximum number of updates allowed per user per window
    period : window size in seconds
    """

    def __init__(self, rate: int = 30, period: float = 60.0) -> None:
        self._rate   = rate
        self._period = period
        # user_id → timestamps, most recent first
        self._history: Dict[int, Deque[float]] = defaultdict(deque)

    def allow(self, user_id: int, now: float | None = None) -> bool:
        """Record one update for `user_id`; False once the window is full."""
        now = time.monotonic() if now is None else now
        window = self._history[user_id]
        while window and now - window[-1] > self._period:
            window.pop()
        if len(window) >= self._rate:
            return False
        window.appendleft(now)
        return True

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        user = data.get("event_from_user")
        if user is None or self.allow(user.id):
            return await handler(event, data)

        logger.info("Throttled user_id=%d", user.id)
        await self._throttle_response(data)
        return None

    async def _throttle_response(self, data: Dict[str, Any]) -> None:
        update = data.get("event_update")
        if update is None:
            return
        try:
            if update.callback_query:
                await update.callback_query.answer(THROTTLE_MESSAGE, show_alert=True)
            elif update.message:
                await update.message.answer(THROTTLE_MESSAGE)
        except TelegramAPIError as e:
            logger.warning("Could not send throttle notice: %s", e)
