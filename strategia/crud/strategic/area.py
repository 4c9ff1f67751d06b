from typing import Iterable, Optional

from sqlalchemy.orm import Session

from strategia.crud.base import CRUDBase
from strategia.models.strategic.area import StrategicArea
from strategia.schemas.strategic.area import StrategicAreaCreate


class CRUDStrategicArea(CRUDBase[StrategicArea, StrategicAreaCreate]):
    def create_for_organization(
        self,
        db: Session,
        *,
        obj_in: StrategicAreaCreate,
        organization_id: int,
    ) -> StrategicArea:
        db_obj = StrategicArea(
            organization_id=organization_id,
            name=obj_in.name.strip(),
            description=obj_in.description,
            responsibilities=list(obj_in.responsibilities),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_organizations(self, db: Session, *, organization_ids: Iterable[int]) -> list[StrategicArea]:
        ids = list(organization_ids)
        if not ids:
            return []
        return (
            db.query(StrategicArea)
            .filter(StrategicArea.organization_id.in_(ids))
            .order_by(StrategicArea.id)
            .all()
        )

    def get_in_organizations(
        self, db: Session, *, id: int, organization_ids: Iterable[int]
    ) -> Optional[StrategicArea]:
        return (
            db.query(StrategicArea)
            .filter(StrategicArea.id == id, StrategicArea.organization_id.in_(list(organization_ids)))
            .first()
        )


strategic_area = CRUDStrategicArea(StrategicArea)
