from typing import Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from strategia.api.deps import get_current_session, get_db, get_services
from strategia.schemas.organization import OrganizationCreate
from strategia.services.auth_store import AuthState
from strategia.services.container import ServiceContainer
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()


@router.get("/")
async def list_organizations(
    db: Session = Depends(get_db),
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    organizations = services.strategy.list_organizations(db, state.user_id)
    return ApiResponseTemplate.success(
        data=organizations,
        message="Organizations",
        metadata={"total": len(organizations)},
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_organization(
    data: OrganizationCreate,
    db: Session = Depends(get_db),
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    """Crea la organización y da al creador el rol ``admin``."""
    organization = services.strategy.create_organization(db, state.user_id, data)
    return ApiResponseTemplate.success(data=organization, message="Organization created")
