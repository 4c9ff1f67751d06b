from typing import Optional

from sqlalchemy.orm import Session, joinedload

from strategia.crud.base import CRUDBase
from strategia.models.organization import MembershipRole, Organization, UserOrganization
from strategia.schemas.organization import OrganizationCreate


class CRUDOrganization(CRUDBase[Organization, OrganizationCreate]):
    def create_with_owner(self, db: Session, *, obj_in: OrganizationCreate, user_id: int) -> Organization:
        db_obj = Organization(
            name=obj_in.name.strip(),
            description=obj_in.description,
            created_by=user_id,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def add_member(
        self,
        db: Session,
        *,
        organization_id: int,
        user_id: int,
        role: MembershipRole = MembershipRole.MEMBER,
    ) -> UserOrganization:
        membership = UserOrganization(
            organization_id=organization_id,
            user_id=user_id,
            role=role,
        )
        db.add(membership)
        db.commit()
        db.refresh(membership)
        return membership

    def get_memberships(self, db: Session, *, user_id: int) -> list[UserOrganization]:
        return (
            db.query(UserOrganization)
            .options(joinedload(UserOrganization.organization))
            .filter(UserOrganization.user_id == user_id)
            .order_by(UserOrganization.id)
            .all()
        )

    def get_membership(
        self, db: Session, *, user_id: int, organization_id: int
    ) -> Optional[UserOrganization]:
        return (
            db.query(UserOrganization)
            .filter(
                UserOrganization.user_id == user_id,
                UserOrganization.organization_id == organization_id,
            )
            .first()
        )


organization = CRUDOrganization(Organization)
