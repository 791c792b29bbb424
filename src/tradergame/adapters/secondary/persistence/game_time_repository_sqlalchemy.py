"""SQLAlchemy-based GameTimeRepository implementation."""

import logging
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import select, insert, update as sql_update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from tradergame.domain.game.state import GameState
from tradergame.domain.shared.exceptions import PersistenceError
from tradergame.ports.outbound.repositories import IGameTimeRepository
from .models import game_time, GAME_TIME_ID
from .mappers import GameTimeMapper

logger = logging.getLogger(__name__)


class GameTimeRepositorySQLAlchemy(IGameTimeRepository):
    """Stores the game clock in a single game_time row"""

    def __init__(self, engine: Engine):
        self._engine = engine

    def load(self) -> Optional[GameState]:
        try:
            with self._engine.connect() as conn:
                stmt = select(game_time).where(game_time.c.id == GAME_TIME_ID)
                row = conn.execute(stmt).fetchone()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load game time: {e}") from e

        if not row:
            return None
        return GameTimeMapper.from_db_row(row._mapping)

    def save(self, state: GameState) -> None:
        """Insert or update the game clock row"""
        values = GameTimeMapper.to_db_dict(state)
        values["updated_at"] = datetime.now(timezone.utc)

        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    sql_update(game_time)
                    .where(game_time.c.id == GAME_TIME_ID)
                    .values(**values)
                )
                if result.rowcount == 0:
                    conn.execute(insert(game_time).values(id=GAME_TIME_ID, **values))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save game time: {e}") from e

        logger.debug(f"Saved game time at tick {state.tick}")
