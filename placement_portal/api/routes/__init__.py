"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from placement_portal.api.routes.auth_routes import router as auth_router, user_router
from placement_portal.api.routes.application_routes import router as application_router
from placement_portal.api.routes.job_offer_routes import router as job_offer_router
from placement_portal.api.routes.profile_routes import router as profile_router
from placement_portal.api.routes.organization_routes import router as organization_router
from placement_portal.api.routes.notification_routes import router as notification_router
from placement_portal.api.routes.event_routes import router as event_router
from placement_portal.api.routes.dashboard_routes import router as dashboard_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(application_router)
api_router.include_router(job_offer_router)
api_router.include_router(profile_router)
api_router.include_router(organization_router)
api_router.include_router(notification_router)
api_router.include_router(event_router)
api_router.include_router(dashboard_router)
