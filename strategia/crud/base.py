from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

ModelType = TypeVar("ModelType")
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType]):
    """Base CRUD de las entidades persistidas.

    Las subclases definen sus propias altas; no hay actualización ni borrado.
    """

    def __init__(self, model: Type[ModelType]) -> None:
        self.model = model

    def get(self, db: Session, *, id: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()
