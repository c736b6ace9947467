"""API route aggregation.

All routers registered here get mounted in main.py.

Auth is applied at the include_router level using FastAPI's dependencies
parameter, so nothing under a protected router is reachable without a
valid token. Handlers that need the caller's id depend on
get_current_user again; FastAPI caches it per request.
"""

from fastapi import APIRouter, Depends

from shelfmark.api.auth import router as auth_router
from shelfmark.api.bookmarks import router as bookmarks_router
from shelfmark.api.health import router as health_router
from shelfmark.api.users import router as users_router
from shelfmark.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api/v1")

# Open routes: no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes: require a valid bearer token
api_router.include_router(users_router, tags=["users"], dependencies=_auth)
api_router.include_router(bookmarks_router, tags=["bookmarks"], dependencies=_auth)
