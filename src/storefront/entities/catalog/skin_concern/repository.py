"""SkinConcern repository for data access operations."""

from sqlmodel import Session, col, select

from src.storefront.entities.catalog.skin_concern.entity import SkinConcern
from src.storefront.entities.catalog.skin_concern.table import SkinConcernTable


class SkinConcernRepository:
    """Data-access layer for skin concerns."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[SkinConcern]:
        statement = select(SkinConcernTable).order_by(col(SkinConcernTable.created_at))
        return [
            SkinConcern.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement)
        ]

    def create(self, concern: SkinConcern) -> SkinConcern:
        row = SkinConcernTable.model_validate(concern.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return SkinConcern.model_validate(row, from_attributes=True)
