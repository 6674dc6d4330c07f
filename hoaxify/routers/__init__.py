"""API routers."""

from hoaxify.routers.attachments import router as attachments_router
from hoaxify.routers.auth import router as auth_router
from hoaxify.routers.hoaxes import router as hoaxes_router
from hoaxify.routers.users import router as users_router

__all__ = ["auth_router", "users_router", "hoaxes_router", "attachments_router"]
