"""
API package for the Rakshak portal backend.

This package aggregates all API routers to be included in the FastAPI
application. Routes live under ``/api``; everything except registration,
login and health requires a bearer token.
"""

from fastapi import APIRouter, Depends
from .routes.auth import router as auth_router
from .routes.fir import router as fir_router
from .routes.complaints import router as complaints_router
from .routes.emergency import router as emergency_router
from .routes.notifications import router as notifications_router
from .routes.stats import router as stats_router
from .routes.health import router as health_router
from ..core.auth import get_current_user
from ..core.rate_limit import rate_limit_dependency
from ..core.request_limits import enforce_json_body_limit

api_router = APIRouter()
guarded = [Depends(rate_limit_dependency), Depends(enforce_json_body_limit)]
protected = [Depends(get_current_user), *guarded]
api_router.include_router(auth_router, dependencies=guarded)
api_router.include_router(fir_router, dependencies=protected)
api_router.include_router(complaints_router, dependencies=protected)
api_router.include_router(emergency_router, dependencies=protected)
api_router.include_router(notifications_router, dependencies=protected)
api_router.include_router(stats_router, dependencies=protected)
api_router.include_router(health_router)
