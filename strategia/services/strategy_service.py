import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from strategia.core.exceptions import (
    BackendCallException,
    InsufficientPermissionsException,
    ResourceNotFoundException,
)
from strategia.crud.organization import organization as organization_crud
from strategia.crud.strategic.area import strategic_area as area_crud
from strategia.crud.strategic.contribution import contribution as contribution_crud
from strategia.models.organization import MembershipRole
from strategia.models.strategic.area import StrategicArea
from strategia.models.strategic.contribution import StrategicContribution
from strategia.schemas.organization import OrganizationCreate
from strategia.schemas.strategic.area import StrategicAreaCreate
from strategia.schemas.strategic.contribution import ContributionSubmit
from strategia.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def find_area_id(areas: Iterable[StrategicArea], name: Optional[str]) -> Optional[int]:
    """ID del área con ese nombre exacto, o ``None`` si no hay coincidencia."""
    if not name:
        return None
    return next((area.id for area in areas if area.name == name.strip()), None)


class StrategyService:
    """Organizaciones, áreas estratégicas y contribuciones de un usuario."""

    def __init__(self, notifier: NotificationService) -> None:
        self.notifier = notifier

    def _backend_failure(self, db: Session, user_id: int, title: str, exc: SQLAlchemyError):
        db.rollback()
        logger.exception("%s (user_id=%s)", title, user_id)
        self.notifier.notify_error(user_id=user_id, title=title)
        return BackendCallException(title)

    # Organizaciones

    @staticmethod
    def organization_ids(db: Session, user_id: int) -> List[int]:
        return [m.organization_id for m in organization_crud.get_memberships(db, user_id=user_id)]

    @staticmethod
    def list_organizations(db: Session, user_id: int) -> List[dict]:
        return [
            {
                "id": m.organization.id,
                "name": m.organization.name,
                "description": m.organization.description,
                "role": m.role.value,
            }
            for m in organization_crud.get_memberships(db, user_id=user_id)
        ]

    def create_organization(self, db: Session, user_id: int, data: OrganizationCreate) -> dict:
        # Dos escrituras independientes: sin rollback compensatorio de la primera
        try:
            db_org = organization_crud.create_with_owner(db, obj_in=data, user_id=user_id)
        except SQLAlchemyError as exc:
            raise self._backend_failure(db, user_id, "Failed to create organization", exc) from exc
        try:
            membership = organization_crud.add_member(
                db, organization_id=db_org.id, user_id=user_id, role=MembershipRole.ADMIN
            )
        except SQLAlchemyError as exc:
            raise self._backend_failure(db, user_id, "Failed to create organization", exc) from exc

        self.notifier.notify(
            user_id=user_id,
            title="Organization created",
            description="Your organization has been successfully created",
        )
        logger.info("Organization %s created by user %s", db_org.id, user_id)
        return {
            "id": db_org.id,
            "name": db_org.name,
            "description": db_org.description,
            "role": membership.role.value,
        }

    def resolve_organization_id(
        self,
        db: Session,
        user_id: int,
        organization_id: Optional[int],
        organization_name: Optional[str] = None,
    ) -> Optional[int]:
        """El ID manda; el nombre solo se busca entre las membresías del usuario."""
        memberships = organization_crud.get_memberships(db, user_id=user_id)
        if organization_id is not None:
            if not any(m.organization_id == organization_id for m in memberships):
                raise InsufficientPermissionsException()
            return organization_id
        if organization_name:
            wanted = organization_name.strip()
            return next(
                (m.organization_id for m in memberships if m.organization.name == wanted),
                None,
            )
        return None

    # Áreas estratégicas

    def list_areas(
        self, db: Session, user_id: int, organization_id: Optional[int] = None
    ) -> List[StrategicArea]:
        if organization_id is not None:
            scope = [self.resolve_organization_id(db, user_id, organization_id)]
        else:
            scope = self.organization_ids(db, user_id)
        return area_crud.get_by_organizations(db, organization_ids=scope)

    def create_area(self, db: Session, user_id: int, data: StrategicAreaCreate) -> StrategicArea:
        organization_id = self.resolve_organization_id(
            db, user_id, data.organization_id, data.organization_name
        )
        if organization_id is None:
            raise ResourceNotFoundException("Organization not found")
        try:
            db_area = area_crud.create_for_organization(db, obj_in=data, organization_id=organization_id)
        except SQLAlchemyError as exc:
            raise self._backend_failure(db, user_id, "Failed to create strategic area", exc) from exc

        self.notifier.notify(
            user_id=user_id,
            title="Strategic area created",
            description="Your strategic area has been successfully created",
        )
        return db_area

    # Contribuciones

    def submit_contribution(
        self, db: Session, user_id: int, data: ContributionSubmit
    ) -> StrategicContribution:
        org_ids = self.organization_ids(db, user_id)
        area_id = data.area_id
        if area_id is None and data.organization_id is not None:
            organization_id = self.resolve_organization_id(db, user_id, data.organization_id)
            areas = area_crud.get_by_organizations(db, organization_ids=[organization_id])
            area_id = find_area_id(areas, data.area)

        if area_id is None or area_crud.get_in_organizations(db, id=area_id, organization_ids=org_ids) is None:
            raise ResourceNotFoundException("Strategic area not found")

        try:
            db_obj = contribution_crud.create_for_area(
                db,
                area_id=area_id,
                strategic_line=data.strategic_line,
                contribution=data.contribution,
                examples=list(data.examples),
            )
        except SQLAlchemyError as exc:
            raise self._backend_failure(db, user_id, "Failed to submit contribution", exc) from exc

        self.notifier.notify(
            user_id=user_id,
            title="Contribution submitted",
            description="Your strategic contribution has been saved successfully",
        )
        return db_obj

    def list_contributions(
        self,
        db: Session,
        user_id: int,
        *,
        organization_id: Optional[int] = None,
        area_id: Optional[int] = None,
    ) -> List[StrategicContribution]:
        areas = self.list_areas(db, user_id, organization_id)
        area_ids = [area.id for area in areas]
        if area_id is not None:
            if area_id not in area_ids:
                raise ResourceNotFoundException("Strategic area not found")
            area_ids = [area_id]
        return contribution_crud.get_by_areas(db, area_ids=area_ids)
