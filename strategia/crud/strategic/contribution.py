from typing import Iterable, List

from sqlalchemy.orm import Session

from strategia.crud.base import CRUDBase
from strategia.models.strategic.contribution import StrategicContribution
from strategia.schemas.strategic.contribution import ContributionSubmit


class CRUDContribution(CRUDBase[StrategicContribution, ContributionSubmit]):
    def create_for_area(
        self,
        db: Session,
        *,
        area_id: int,
        strategic_line: str,
        contribution: str,
        examples: List[str],
    ) -> StrategicContribution:
        db_obj = StrategicContribution(
            area_id=area_id,
            strategic_line=strategic_line,
            contribution=contribution,
            examples=examples,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_areas(self, db: Session, *, area_ids: Iterable[int]) -> list[StrategicContribution]:
        ids = list(area_ids)
        if not ids:
            return []
        return (
            db.query(StrategicContribution)
            .filter(StrategicContribution.area_id.in_(ids))
            .order_by(StrategicContribution.id)
            .all()
        )


contribution = CRUDContribution(StrategicContribution)
