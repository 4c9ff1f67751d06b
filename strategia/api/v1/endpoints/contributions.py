from typing import Dict, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from strategia.api.deps import get_current_session, get_db, get_services
from strategia.core.config import settings
from strategia.schemas.strategic.contribution import ContributionResponse, ContributionSubmit
from strategia.services.auth_store import AuthState
from strategia.services.container import ServiceContainer
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()


@router.get("/strategic-lines")
async def strategic_lines() -> Dict:
    return ApiResponseTemplate.success(data=list(settings.STRATEGIC_LINES), message="Strategic lines")


@router.get("/")
async def list_contributions(
    organization_id: Optional[int] = None,
    area_id: Optional[int] = None,
    db: Session = Depends(get_db),
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    contributions = services.strategy.list_contributions(
        db, state.user_id, organization_id=organization_id, area_id=area_id
    )
    return ApiResponseTemplate.success(
        data=[ContributionResponse.model_validate(c).model_dump() for c in contributions],
        message="Contributions",
        metadata={"total": len(contributions)},
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
async def submit_contribution(
    data: ContributionSubmit,
    db: Session = Depends(get_db),
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    contribution = services.strategy.submit_contribution(db, state.user_id, data)
    return ApiResponseTemplate.success(
        data=ContributionResponse.model_validate(contribution).model_dump(),
        message="Contribution submitted",
    )
