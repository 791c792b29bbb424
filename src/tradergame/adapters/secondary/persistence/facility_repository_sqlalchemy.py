"""SQLAlchemy-based FacilityRepository implementation."""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional, List
from sqlalchemy import select, insert, update as sql_update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from tradergame.domain.production.facility import Facility
from tradergame.domain.shared.exceptions import PersistenceError
from tradergame.ports.outbound.repositories import IFacilityRepository
from .models import facilities
from .mappers import FacilityMapper

logger = logging.getLogger(__name__)


class FacilityRepositorySQLAlchemy(IFacilityRepository):
    """SQLAlchemy implementation of facility repository"""

    def __init__(self, engine: Engine):
        self._engine = engine

    def create(self, facility: Facility) -> Facility:
        """Persist new facility, stamping created_at when unset"""
        created = facility if facility.created_at else replace(
            facility, created_at=datetime.now(timezone.utc)
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(insert(facilities).values(**FacilityMapper.to_db_dict(created)))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to create facility {facility.id}: {e}") from e

        logger.info(f"Created facility {created.id} for company {created.company_id}")
        return created

    def find_by_id(self, facility_id: str) -> Optional[Facility]:
        """Load facility by ID"""
        try:
            with self._engine.connect() as conn:
                stmt = select(facilities).where(facilities.c.id == facility_id)
                row = conn.execute(stmt).fetchone()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load facility {facility_id}: {e}") from e

        if not row:
            return None
        return FacilityMapper.from_db_row(row._mapping)

    def list_by_company(self, company_id: str) -> List[Facility]:
        """List a company's facilities, oldest first"""
        try:
            with self._engine.connect() as conn:
                stmt = (
                    select(facilities)
                    .where(facilities.c.company_id == company_id)
                    .order_by(facilities.c.created_at, facilities.c.id)
                )
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list facilities for company {company_id}: {e}") from e

        return [FacilityMapper.from_db_row(row._mapping) for row in rows]

    def list_all(self) -> List[Facility]:
        """List all facilities, oldest first"""
        try:
            with self._engine.connect() as conn:
                stmt = select(facilities).order_by(facilities.c.created_at, facilities.c.id)
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list facilities: {e}") from e

        return [FacilityMapper.from_db_row(row._mapping) for row in rows]

    def save(self, facility: Facility) -> Facility:
        """
        Update production state and inventory of an existing facility.

        Raises:
            PersistenceError: If the facility does not exist or the write fails
        """
        values = FacilityMapper.to_db_dict(facility)
        # Identity and ownership are immutable once created
        for key in ("id", "company_id", "created_at"):
            values.pop(key)
        values["updated_at"] = datetime.now(timezone.utc)

        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    sql_update(facilities)
                    .where(facilities.c.id == facility.id)
                    .values(**values)
                )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save facility {facility.id}: {e}") from e

        if result.rowcount == 0:
            raise PersistenceError(f"Facility {facility.id} does not exist")

        logger.debug(f"Saved facility {facility.id}")
        return facility
