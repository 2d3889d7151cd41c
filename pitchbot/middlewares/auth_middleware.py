"""
Admin authorization middleware.

Attaches `is_admin: bool` to handler data for all updates; the IsAdmin
filter restricts the back-office routers.
"""
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.filters import BaseFilter
from aiogram.types import CallbackQuery, Message, TelegramObject

from pitchbot.config import settings


class AdminMiddleware(BaseMiddleware):
    """Injects `is_admin` flag into data dict."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        user = data.get("event_from_user")
        data["is_admin"] = bool(user and user.id in settings.admin_ids_list)
        return await handler(event, data)


# ── Reusable filter ──────────────────────────────────────────────────────────

class IsAdmin(BaseFilter):
    """Use on individual routers/handlers to restrict access to admins."""

    async def __call__(self, event: Message | CallbackQuery, is_admin: bool = False) -> bool:
        if not is_admin:
            if isinstance(event, Message):
                await event.answer("⛔️ Staff only.")
            elif isinstance(event, CallbackQuery):
                await event.answer("⛔️ Staff only.", show_alert=True)
        return is_admin
