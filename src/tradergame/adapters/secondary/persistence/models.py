"""SQLAlchemy table definitions for the game database.

Tables are defined with SQLAlchemy Core (not ORM) and used for both schema
creation and query building.
"""

from sqlalchemy import (
    MetaData,
    Table,
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
    Index,
    JSON,
)
from datetime import datetime, timezone

metadata = MetaData()

# Facilities table (one row per production facility)
facilities = Table(
    'facilities',
    metadata,
    Column('id', String, primary_key=True),
    Column('company_id', String, nullable=False),
    Column('name', String, nullable=False),
    Column('type', String, nullable=False, default='production'),
    Column('facility_subtype', String),
    Column('city_id', String, nullable=False),
    Column('effectivity', Float, nullable=False, default=1.0),
    Column('worker_count', Integer, nullable=False, default=0),
    Column('inventory_capacity', Integer, nullable=False),
    Column('inventory_items', JSON, nullable=False),        # [{"resource_id", "quantity"}]
    Column('available_recipe_ids', JSON, nullable=False),   # ["grow_grain", ...]
    Column('active_recipe_id', String),
    Column('progress_ticks', Integer),
    Column('is_producing', Boolean, nullable=False, default=False),
    Column('created_at', DateTime(timezone=True), nullable=False),
    Column('updated_at', DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)),
)

Index('idx_facilities_company', facilities.c.company_id, facilities.c.created_at)

# Game clock (single row, id='global')
game_time = Table(
    'game_time',
    metadata,
    Column('id', String, primary_key=True),
    Column('tick', Integer, nullable=False, default=0),
    Column('day', Integer, nullable=False),
    Column('month', Integer, nullable=False),
    Column('year', Integer, nullable=False),
    Column('last_tick_time', DateTime(timezone=True), nullable=False),
    Column('next_tick_time', DateTime(timezone=True), nullable=False),
    Column('updated_at', DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)),
)

GAME_TIME_ID = 'global'
