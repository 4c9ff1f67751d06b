from fastapi import APIRouter

from strategia.api.v1.endpoints import (
    areas,
    auth,
    contributions,
    dashboard,
    initiatives,
    notifications,
    objectives,
    organizations,
    perspectives,
    session,
    strategy,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(session.router, prefix="/session", tags=["session"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(organizations.router, prefix="/organizations", tags=["organizations"])
api_router.include_router(areas.router, prefix="/strategic-areas", tags=["strategic-areas"])
api_router.include_router(contributions.router, prefix="/contributions", tags=["contributions"])
api_router.include_router(objectives.router, prefix="/objectives", tags=["objectives"])
api_router.include_router(initiatives.router, prefix="/initiatives", tags=["initiatives"])
api_router.include_router(perspectives.router, prefix="/perspectives", tags=["perspectives"])
api_router.include_router(strategy.router, prefix="/strategy", tags=["strategy"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
