"""
Small Sided Soccer booking bot.

Startup order: logging, schema, dispatcher (coordinator + middlewares +
routers), then long polling until SIGTERM/SIGINT.
"""
import asyncio
import logging
import signal
import sys
from typing import Optional

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramAPIError
from aiogram.fsm.storage.base import BaseStorage
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import ErrorEvent
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pitchbot.config import settings
from pitchbot.middlewares import AdminMiddleware, DatabaseMiddleware, RateLimitMiddleware
from pitchbot.models.base import AsyncSessionFactory, Base, engine
from pitchbot.services import DatabaseBookingApi
from pitchbot.wizard import SubmissionCoordinator

# ── Handlers ──────────────────────────────────────────────────────────────────
from pitchbot.handlers.common import router as common_router
from pitchbot.handlers.booking import router as booking_router
from pitchbot.handlers.admin.panel import router as admin_panel_router
from pitchbot.handlers.fallback import router as fallback_router

logger = logging.getLogger(__name__)

ERROR_ALERT = "⚠️ Something went wrong. Please try again."


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )
    # aiogram logs every handled update at INFO
    logging.getLogger("aiogram.event").setLevel(logging.WARNING)


async def create_tables(db_engine: AsyncEngine) -> bool:
    """Create missing tables. Returns False when the database is unreachable."""
    try:
        async with db_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        logger.critical(
            "❌ Database unavailable at %s: %s\n"
            "   For a local run use DATABASE_URL=sqlite+aiosqlite:///./pitchbot.db",
            settings.DATABASE_URL.split("@")[-1],   # no credentials in logs
            e,
        )
        return False
    logger.info("Database tables ready.")
    return True


async def _on_error(event: ErrorEvent) -> None:
    logger.exception("Unhandled error: %s", event.exception)
    query = event.update.callback_query
    if query is None:
        return
    try:
        await query.answer(ERROR_ALERT, show_alert=True)
    except TelegramAPIError as e:
        logger.warning("Could not answer callback after error: %s", e)


def build_dispatcher(
    session_factory: async_sessionmaker[AsyncSession] = AsyncSessionFactory,
    storage: Optional[BaseStorage] = None,
) -> Dispatcher:
    coordinator = SubmissionCoordinator(
        DatabaseBookingApi(session_factory),
        timeout=settings.BOOKING_TIMEOUT_SECONDS,
    )
    # Workflow data: every handler declaring a `coordinator` argument receives it
    dp = Dispatcher(storage=storage or MemoryStorage(), coordinator=coordinator)
    dp.errors.register(_on_error)

    # Throttling runs before a session is opened
    dp.update.middleware(RateLimitMiddleware(settings.RATE_LIMIT, settings.RATE_LIMIT_PERIOD))
    dp.update.middleware(DatabaseMiddleware(session_factory))
    dp.update.middleware(AdminMiddleware())

    dp.include_routers(
        common_router,
        booking_router,
        admin_panel_router,
        fallback_router,   # last
    )
    return dp


async def main() -> None:
    setup_logging()
    logger.info("Starting %s booking bot…", settings.FACILITY_NAME)
    if not await create_tables(engine):
        sys.exit(1)

    bot = Bot(
        token=settings.BOT_TOKEN,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = build_dispatcher()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, lambda: asyncio.ensure_future(dp.stop_polling()))
        except NotImplementedError:
            # Windows event loops
            pass

    try:
        await dp.start_polling(
            bot,
            allowed_updates=dp.resolve_used_update_types(),
            handle_signals=False,
        )
    finally:
        await bot.session.close()
        await engine.dispose()
        logger.info("Shutdown complete.")


if __name__ == "__main__":
    asyncio.run(main())
