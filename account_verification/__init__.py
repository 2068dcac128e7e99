from .main import create_app, app
from .member_routes import router as member_router
from .middleware import MemberInfoMiddleware
from .services.authorization_guard import ResendAuthorizationGuard
from .services.dispatcher import NotificationDispatcher
from .core.settings import settings, Settings

__all__ = [
    "create_app",
    "app",
    "member_router",
    "MemberInfoMiddleware",
    "ResendAuthorizationGuard",
    "NotificationDispatcher",
    "settings",
    "Settings",
]
