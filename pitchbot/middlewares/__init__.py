from pitchbot.middlewares.db_middleware import DatabaseMiddleware
from pitchbot.middlewares.auth_middleware import AdminMiddleware, IsAdmin
from pitchbot.middlewares.rate_limit_middleware import RateLimitMiddleware

__all__ = ["DatabaseMiddleware", "AdminMiddleware", "IsAdmin", "RateLimitMiddleware"]
