# routers/__init__.py

from .auth import router as auth_router
from .owner import router as owner_router
from .tenant import router as tenant_router
from .health import router as health_router

__all__ = [
    "auth_router",
    "owner_router",
    "tenant_router",
    "health_router",
]
