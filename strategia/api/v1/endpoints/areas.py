from typing import Dict, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from strategia.api.deps import get_current_session, get_db, get_services
from strategia.models.strategic.area import StrategicArea
from strategia.schemas.strategic.area import StrategicAreaCreate, StrategicAreaResponse
from strategia.services.auth_store import AuthState
from strategia.services.container import ServiceContainer
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()


def _serialize(area: StrategicArea) -> Dict:
    return StrategicAreaResponse(
        id=area.id,
        name=area.name,
        organization_id=area.organization_id,
        organization_name=area.organization.name if area.organization else None,
        description=area.description,
        responsibilities=area.responsibilities or [],
    ).model_dump()


@router.get("/")
async def list_areas(
    organization_id: Optional[int] = None,
    db: Session = Depends(get_db),
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    areas = services.strategy.list_areas(db, state.user_id, organization_id)
    return ApiResponseTemplate.success(
        data=[_serialize(area) for area in areas],
        message="Strategic areas",
        metadata={"total": len(areas)},
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_area(
    data: StrategicAreaCreate,
    db: Session = Depends(get_db),
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    area = services.strategy.create_area(db, state.user_id, data)
    return ApiResponseTemplate.success(data=_serialize(area), message="Strategic area created")
